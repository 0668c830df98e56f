"""Tests for timeline reconstruction from order documents and aggregates."""

from datetime import UTC, date, datetime, timedelta, timezone

import pytest
from ordering.order.order import ServiceOrder
from ordering.order.timeline import build_timeline, to_instant

T0 = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)
T1 = T0 + timedelta(hours=1)
T2 = T0 + timedelta(hours=5)


def _document(**overrides):
    document = {
        "created_at": T0,
        "updated_at": T0,
        "status": "pending",
        "provider_responses": {},
    }
    document.update(overrides)
    return document


class TestToInstant:
    def test_naive_datetime_is_taken_as_utc(self):
        assert to_instant(datetime(2024, 3, 1, 9, 0)) == T0

    def test_aware_datetime_is_converted_to_utc(self):
        ist = timezone(timedelta(hours=5, minutes=30))
        assert to_instant(datetime(2024, 3, 1, 14, 30, tzinfo=ist)) == T0

    def test_date_becomes_midnight(self):
        assert to_instant(date(2024, 3, 1)) == datetime(2024, 3, 1, tzinfo=UTC)

    def test_iso_string(self):
        assert to_instant("2024-03-01T09:00:00Z") == T0

    def test_timestamp_map(self):
        value = {"seconds": int(T0.timestamp()), "nanoseconds": 500_000_000}
        assert to_instant(value) == T0 + timedelta(milliseconds=500)

    def test_unknown_value_raises(self):
        with pytest.raises(TypeError):
            to_instant(42)


class TestBuildTimeline:
    def test_pending_order_yields_only_created(self):
        timeline = build_timeline(_document())

        assert len(timeline) == 1
        assert timeline[0].status == "created"
        assert timeline[0].date == T0
        assert timeline[0].title == "Order Placed"
        assert timeline[0].description == "Service requested"
        assert timeline[0].category == "info"

    def test_created_mentions_delivery_slot(self):
        timeline = build_timeline(_document(delivery_date="2024-03-05", delivery_time="10:00 AM"))
        assert timeline[0].description == "Service requested for 05 Mar 2024 at 10:00 AM"

    def test_created_ignores_partial_delivery_slot(self):
        timeline = build_timeline(_document(delivery_date="2024-03-05"))
        assert timeline[0].description == "Service requested"

    def test_accepted_then_completed_in_order(self):
        document = _document(
            status="completed",
            updated_at=T2,
            provider_name="Sparkle Plumbing",
            provider_responses={
                "prov-1": {"status": "accepted", "updated_at": {"seconds": int(T1.timestamp())}},
            },
        )
        timeline = build_timeline(document)

        assert [(e.status, e.date) for e in timeline] == [
            ("created", T0),
            ("accepted", T1),
            ("completed", T2),
        ]
        assert timeline[1].description == "Service accepted by Sparkle Plumbing"
        assert timeline[2].category == "success"

    def test_declined_responses_are_skipped(self):
        document = _document(
            provider_responses={
                "prov-1": {"status": "rejected", "updated_at": T1},
                "prov-2": {"status": "pending", "updated_at": T1},
            }
        )
        assert [e.status for e in build_timeline(document)] == ["created"]

    def test_each_accepted_response_emits_an_event(self):
        document = _document(
            provider_responses=[
                {"status": "accepted", "updated_at": T2},
                {"status": "accepted", "updated_at": T1},
            ]
        )
        timeline = build_timeline(document)
        assert [e.date for e in timeline] == [T0, T1, T2]
        assert timeline[1].description == "Service accepted by Provider"

    def test_cancelled_order(self):
        timeline = build_timeline(_document(status="cancelled", updated_at=T1))
        assert timeline[-1].status == "cancelled"
        assert timeline[-1].title == "Service Cancelled"
        assert timeline[-1].category == "danger"

    def test_paid_and_rejected_add_no_terminal_event(self):
        for status in ("paid", "rejected"):
            assert len(build_timeline(_document(status=status, updated_at=T1))) == 1

    def test_simultaneous_events_keep_emission_order(self):
        document = _document(
            status="completed",
            updated_at=T0,
            provider_responses={"prov-1": {"status": "accepted", "updated_at": T0}},
        )
        assert [e.status for e in build_timeline(document)] == ["created", "accepted", "completed"]

    def test_as_dict_renders_iso_dates(self):
        [event] = build_timeline(_document())
        assert event.as_dict()["date"] == T0.isoformat()

    def test_timeline_from_aggregate(self):
        order = ServiceOrder.place(customer_id="cust-1", provider_ids=["prov-1"])
        order.record_provider_response("prov-1", accepted=True, provider_name="Sparkle Plumbing")
        order.complete()

        timeline = build_timeline(order)
        assert [e.status for e in timeline] == ["created", "accepted", "completed"]
        assert timeline[1].description == "Service accepted by Sparkle Plumbing"

    def test_timeline_from_aggregate_with_two_acceptances(self):
        order = ServiceOrder.place(customer_id="cust-1", provider_ids=["prov-1", "prov-2"])
        order.record_provider_response("prov-1", accepted=True, provider_name="Sparkle Plumbing")
        order.record_provider_response("prov-2", accepted=True)

        timeline = build_timeline(order)
        assert [e.status for e in timeline] == ["created", "accepted", "accepted"]
        assert all(e.description == "Service accepted by Sparkle Plumbing" for e in timeline[1:])
