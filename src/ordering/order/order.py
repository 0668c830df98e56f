"""ServiceOrder aggregate: a booked service and the providers' answers to it.

State Machine:
    PENDING → ACCEPTED → COMPLETED → PAID
    PENDING → REJECTED (every offered provider declined)
    PENDING / ACCEPTED → CANCELLED

Providers still pending may answer until the order leaves ACCEPTED, so more
than one provider can accept. The first acceptance names the provider.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, String, Text

from ordering.domain import ordering
from ordering.order.events import (
    OrderCancelled,
    OrderCompleted,
    OrderPaid,
    OrderPlaced,
    OrderRejected,
    ProviderAccepted,
    ProviderDeclined,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    COMPLETED = "completed"
    PAID = "paid"
    CANCELLED = "cancelled"
    REJECTED = "rejected"


class ResponseStatus(Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.ACCEPTED, OrderStatus.CANCELLED, OrderStatus.REJECTED},
    OrderStatus.ACCEPTED: {OrderStatus.COMPLETED, OrderStatus.CANCELLED},
    OrderStatus.COMPLETED: {OrderStatus.PAID},
    OrderStatus.PAID: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
    OrderStatus.REJECTED: set(),  # Terminal
}


@ordering.entity(part_of="ServiceOrder")
class ProviderResponse:
    provider_id = Identifier(required=True)
    status = String(choices=ResponseStatus, default=ResponseStatus.PENDING.value)
    updated_at = DateTime()


@ordering.aggregate
class ServiceOrder:
    customer_id = Identifier(required=True)
    customer_email = String(max_length=254)
    provider_name = String(max_length=255)
    items = Text()  # JSON: list of {name, quantity, price, image_url}
    total_amount = Float(default=0.0, min_value=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    provider_responses = HasMany(ProviderResponse)
    delivery_date = String(max_length=10)  # ISO date
    delivery_time = String(max_length=20)
    remarks = Text()
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        customer_id,
        provider_ids,
        items="[]",
        total_amount=0.0,
        customer_email=None,
        delivery_date=None,
        delivery_time=None,
        remarks=None,
    ):
        if not provider_ids:
            raise ValidationError({"provider_ids": ["At least one provider must be offered the order"]})
        if len(set(provider_ids)) != len(provider_ids):
            raise ValidationError({"provider_ids": ["Providers must be unique"]})

        now = datetime.now(UTC)
        order = cls(
            customer_id=customer_id,
            customer_email=customer_email,
            items=items,
            total_amount=total_amount,
            status=OrderStatus.PENDING.value,
            delivery_date=delivery_date,
            delivery_time=delivery_time,
            remarks=remarks,
            created_at=now,
            updated_at=now,
        )
        for provider_id in provider_ids:
            order.add_provider_responses(
                ProviderResponse(
                    provider_id=provider_id,
                    status=ResponseStatus.PENDING.value,
                    updated_at=now,
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                provider_count=len(provider_ids),
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    def _transition_to(self, new_status):
        current = OrderStatus(self.status)
        if new_status not in _VALID_TRANSITIONS[current]:
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {new_status.value}"]})
        self.status = new_status.value

    def response_for(self, provider_id):
        return next((r for r in self.provider_responses if str(r.provider_id) == str(provider_id)), None)

    # -------------------------------------------------------------------
    # Provider responses
    # -------------------------------------------------------------------
    def record_provider_response(self, provider_id, accepted, provider_name=None):
        """Record a provider's answer; the first acceptance moves the order on."""
        current = OrderStatus(self.status)
        response = self.response_for(provider_id)
        if response is None:
            raise ValidationError({"provider_id": [f"Provider {provider_id} was not offered this order"]})
        if response.status != ResponseStatus.PENDING.value:
            raise ValidationError({"provider_id": [f"Provider {provider_id} has already responded"]})
        if current not in (OrderStatus.PENDING, OrderStatus.ACCEPTED):
            raise ValidationError({"status": [f"A {current.value} order no longer accepts provider responses"]})

        now = datetime.now(UTC)
        response.updated_at = now

        if accepted:
            response.status = ResponseStatus.ACCEPTED.value
            if current == OrderStatus.PENDING:
                self._transition_to(OrderStatus.ACCEPTED)
                self.provider_name = provider_name or self.provider_name
            self.updated_at = now
            self.raise_(
                ProviderAccepted(
                    order_id=str(self.id),
                    provider_id=str(provider_id),
                    accepted_at=now,
                )
            )
            return

        response.status = ResponseStatus.REJECTED.value
        self.updated_at = now
        self.raise_(
            ProviderDeclined(
                order_id=str(self.id),
                provider_id=str(provider_id),
                declined_at=now,
            )
        )

        if all(r.status == ResponseStatus.REJECTED.value for r in self.provider_responses):
            self._transition_to(OrderStatus.REJECTED)
            self.raise_(OrderRejected(order_id=str(self.id), rejected_at=now))

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def complete(self):
        self._transition_to(OrderStatus.COMPLETED)
        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(OrderCompleted(order_id=str(self.id), completed_at=now))

    def mark_paid(self, payment_id):
        self._transition_to(OrderStatus.PAID)
        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(OrderPaid(order_id=str(self.id), payment_id=payment_id, paid_at=now))

    def cancel(self, reason=None):
        self._transition_to(OrderStatus.CANCELLED)
        now = datetime.now(UTC)
        self.updated_at = now
        if reason:
            self.remarks = reason
        self.raise_(OrderCancelled(order_id=str(self.id), reason=reason, cancelled_at=now))
