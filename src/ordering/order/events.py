"""Domain events for the ServiceOrder aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="ServiceOrder")
class OrderPlaced:
    """A customer booked a service and it was offered to providers."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    provider_count = Integer(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="ServiceOrder")
class ProviderAccepted:
    """A provider accepted the service request."""

    __version__ = 1

    order_id = Identifier(required=True)
    provider_id = Identifier(required=True)
    accepted_at = DateTime(required=True)


@ordering.event(part_of="ServiceOrder")
class ProviderDeclined:
    """A provider declined the service request."""

    __version__ = 1

    order_id = Identifier(required=True)
    provider_id = Identifier(required=True)
    declined_at = DateTime(required=True)


@ordering.event(part_of="ServiceOrder")
class OrderRejected:
    """Every offered provider declined the request."""

    __version__ = 1

    order_id = Identifier(required=True)
    rejected_at = DateTime(required=True)


@ordering.event(part_of="ServiceOrder")
class OrderCompleted:
    """The provider finished the service."""

    __version__ = 1

    order_id = Identifier(required=True)
    completed_at = DateTime(required=True)


@ordering.event(part_of="ServiceOrder")
class OrderPaid:
    """Payment for a completed service was captured."""

    __version__ = 1

    order_id = Identifier(required=True)
    payment_id = String(required=True)
    paid_at = DateTime(required=True)


@ordering.event(part_of="ServiceOrder")
class OrderCancelled:
    """The service request was cancelled before completion."""

    __version__ = 1

    order_id = Identifier(required=True)
    reason = String()
    cancelled_at = DateTime(required=True)
