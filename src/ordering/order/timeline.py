"""Order timeline: display events derived from a service order's current state.

Nothing here is persisted. The timeline is rebuilt on every read from the
order's creation time, each accepted provider response, and a terminal status.
Works on a ``ServiceOrder`` aggregate or on a raw order document (a mapping
whose ``provider_responses`` is keyed by provider id).
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, date, datetime


@dataclass(frozen=True)
class TimelineEvent:
    status: str
    date: datetime
    title: str
    description: str
    category: str

    def as_dict(self) -> dict:
        return {
            "status": self.status,
            "date": self.date.isoformat(),
            "title": self.title,
            "description": self.description,
            "category": self.category,
        }


def to_instant(value) -> datetime:
    """Normalise a stored timestamp to an aware UTC datetime.

    Accepts datetimes (naive ones are taken as UTC), dates, ISO-8601 strings,
    and ``{"seconds": ..., "nanoseconds": ...}`` timestamp maps.
    """
    if isinstance(value, datetime):
        return value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    if isinstance(value, str):
        return to_instant(datetime.fromisoformat(value.replace("Z", "+00:00")))
    if isinstance(value, Mapping) and "seconds" in value:
        seconds = value["seconds"] + value.get("nanoseconds", 0) / 1_000_000_000
        return datetime.fromtimestamp(seconds, tz=UTC)
    raise TypeError(f"Cannot interpret {value!r} as a timestamp")


def _field(record, name):
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _status(value):
    # Aggregates store plain strings; documents may carry Enum members
    return getattr(value, "value", value)


def _provider_responses(order):
    responses = _field(order, "provider_responses") or {}
    if isinstance(responses, Mapping):
        return list(responses.values())
    return list(responses)


def _format_delivery_date(value):
    try:
        return date.fromisoformat(str(value)).strftime("%d %b %Y")
    except ValueError:
        return str(value)


def _created_description(order):
    delivery_date = _field(order, "delivery_date")
    delivery_time = _field(order, "delivery_time")
    if delivery_date and delivery_time:
        return f"Service requested for {_format_delivery_date(delivery_date)} at {delivery_time}"
    return "Service requested"


def build_timeline(order) -> list[TimelineEvent]:
    """Return the order's timeline events, oldest first.

    Every accepted provider response yields its own ``accepted`` event. Events
    sharing an instant keep their emission order.
    """
    events = [
        TimelineEvent(
            status="created",
            date=to_instant(_field(order, "created_at")),
            title="Order Placed",
            description=_created_description(order),
            category="info",
        )
    ]

    provider_name = _field(order, "provider_name") or "Provider"
    for response in _provider_responses(order):
        if _status(_field(response, "status")) == "accepted":
            events.append(
                TimelineEvent(
                    status="accepted",
                    date=to_instant(_field(response, "updated_at")),
                    title="Provider Accepted",
                    description=f"Service accepted by {provider_name}",
                    category="success",
                )
            )

    status = _status(_field(order, "status"))
    if status == "completed":
        events.append(
            TimelineEvent(
                status="completed",
                date=to_instant(_field(order, "updated_at")),
                title="Service Completed",
                description="Service has been completed successfully",
                category="success",
            )
        )
    elif status == "cancelled":
        events.append(
            TimelineEvent(
                status="cancelled",
                date=to_instant(_field(order, "updated_at")),
                title="Service Cancelled",
                description="Service request was cancelled",
                category="danger",
            )
        )

    # sorted() is stable
    return sorted(events, key=lambda event: event.date)
