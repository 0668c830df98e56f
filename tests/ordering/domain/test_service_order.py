"""Tests for the ServiceOrder state machine."""

import pytest
from ordering.order.events import (
    OrderCancelled,
    OrderPaid,
    OrderPlaced,
    OrderRejected,
    ProviderAccepted,
)
from ordering.order.order import OrderStatus, ResponseStatus, ServiceOrder
from protean.exceptions import ValidationError


def _order(providers=("prov-1", "prov-2")):
    return ServiceOrder.place(
        customer_id="cust-1",
        provider_ids=list(providers),
        total_amount=598.0,
        delivery_date="2024-03-05",
        delivery_time="10:00 AM",
    )


class TestPlace:
    def test_place_starts_pending_with_pending_responses(self):
        order = _order()
        assert order.status == OrderStatus.PENDING.value
        assert len(order.provider_responses) == 2
        assert all(r.status == ResponseStatus.PENDING.value for r in order.provider_responses)
        assert isinstance(order._events[-1], OrderPlaced)

    def test_place_requires_a_provider(self):
        with pytest.raises(ValidationError):
            _order(providers=())

    def test_place_rejects_duplicate_providers(self):
        with pytest.raises(ValidationError):
            _order(providers=("prov-1", "prov-1"))


class TestProviderResponses:
    def test_acceptance_moves_order_on(self):
        order = _order()
        order.record_provider_response("prov-1", accepted=True, provider_name="Sparkle")

        assert order.status == OrderStatus.ACCEPTED.value
        assert order.provider_name == "Sparkle"
        assert order.response_for("prov-1").status == ResponseStatus.ACCEPTED.value
        assert isinstance(order._events[-1], ProviderAccepted)

    def test_single_decline_keeps_order_pending(self):
        order = _order()
        order.record_provider_response("prov-1", accepted=False)
        assert order.status == OrderStatus.PENDING.value
        assert order.response_for("prov-1").status == ResponseStatus.REJECTED.value

    def test_all_declines_reject_the_order(self):
        order = _order()
        order.record_provider_response("prov-1", accepted=False)
        order.record_provider_response("prov-2", accepted=False)
        assert order.status == OrderStatus.REJECTED.value
        assert isinstance(order._events[-1], OrderRejected)

    def test_unknown_provider_is_rejected(self):
        with pytest.raises(ValidationError):
            _order().record_provider_response("prov-9", accepted=True)

    def test_provider_cannot_answer_twice(self):
        order = _order()
        order.record_provider_response("prov-1", accepted=False)
        with pytest.raises(ValidationError):
            order.record_provider_response("prov-1", accepted=True)

    def test_second_provider_can_accept_after_the_first(self):
        order = _order()
        order.record_provider_response("prov-1", accepted=True, provider_name="Sparkle")
        order.record_provider_response("prov-2", accepted=True, provider_name="Shine")

        assert order.status == OrderStatus.ACCEPTED.value
        assert order.provider_name == "Sparkle"
        assert all(r.status == ResponseStatus.ACCEPTED.value for r in order.provider_responses)

    def test_decline_after_acceptance_keeps_order_accepted(self):
        order = _order()
        order.record_provider_response("prov-1", accepted=True)
        order.record_provider_response("prov-2", accepted=False)
        assert order.status == OrderStatus.ACCEPTED.value

    def test_completed_order_refuses_responses(self):
        order = _order()
        order.record_provider_response("prov-1", accepted=True)
        order.complete()
        with pytest.raises(ValidationError):
            order.record_provider_response("prov-2", accepted=True)


class TestLifecycle:
    def test_complete_then_pay(self):
        order = _order()
        order.record_provider_response("prov-1", accepted=True)
        order.complete()
        order.mark_paid("pay_123")

        assert order.status == OrderStatus.PAID.value
        assert order._events[-1].payment_id == "pay_123"
        assert isinstance(order._events[-1], OrderPaid)

    def test_cannot_complete_pending_order(self):
        with pytest.raises(ValidationError):
            _order().complete()

    def test_cannot_pay_before_completion(self):
        order = _order()
        order.record_provider_response("prov-1", accepted=True)
        with pytest.raises(ValidationError):
            order.mark_paid("pay_123")

    def test_cancel_records_reason(self):
        order = _order()
        order.cancel(reason="Changed my mind")
        assert order.status == OrderStatus.CANCELLED.value
        assert order.remarks == "Changed my mind"
        assert isinstance(order._events[-1], OrderCancelled)

    def test_cannot_cancel_completed_order(self):
        order = _order()
        order.record_provider_response("prov-1", accepted=True)
        order.complete()
        with pytest.raises(ValidationError):
            order.cancel()
