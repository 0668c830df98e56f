"""Cart aggregate: one service cart per user, keyed by the user's id.

Lines are identified by service id: adding a service that is already in the
cart bumps its quantity instead of appending a second line. Quantities stay
within 1..99; setting a quantity to zero or below removes the line.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from ordering.cart.events import CartItemAdded, CartItemRemoved, CartQuantityUpdated
from ordering.domain import ordering

MIN_QUANTITY = 1
MAX_QUANTITY = 99


@ordering.entity(part_of="Cart")
class CartLine:
    service_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=MIN_QUANTITY, max_value=MAX_QUANTITY)
    image_url = String(max_length=1024)
    service_provider = String(max_length=255)
    added_at = DateTime()

    def to_dict(self):
        return {
            "id": str(self.service_id),
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
            "image_url": self.image_url,
            "service_provider": self.service_provider,
            "added_at": self.added_at.isoformat() if self.added_at else None,
        }


@ordering.aggregate
class Cart:
    user_id = Identifier(identifier=True)
    items = HasMany(CartLine)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def service_ids_must_be_unique(self):
        service_ids = [str(line.service_id) for line in self.items]
        if len(service_ids) != len(set(service_ids)):
            raise ValidationError({"items": ["A service can appear only once in the cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def line_for(self, service_id):
        return next((line for line in self.items if str(line.service_id) == str(service_id)), None)

    def add_item(self, service_id, name, price, image_url=None, service_provider=None):
        """Add one unit of a service, merging into its existing line."""
        now = datetime.now(UTC)
        existing = self.line_for(service_id)

        if existing:
            if existing.quantity >= MAX_QUANTITY:
                raise ValidationError({"quantity": [f"Quantity cannot exceed {MAX_QUANTITY}"]})
            existing.quantity += 1
            quantity = existing.quantity
        else:
            self.add_items(
                CartLine(
                    service_id=service_id,
                    name=name,
                    price=price,
                    quantity=MIN_QUANTITY,
                    image_url=image_url,
                    service_provider=service_provider,
                    added_at=now,
                )
            )
            quantity = MIN_QUANTITY

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                user_id=str(self.user_id),
                service_id=str(service_id),
                quantity=quantity,
            )
        )

    def update_item_quantity(self, service_id, new_quantity):
        """Set a line's quantity. Returns False when the service is not in the cart."""
        existing = self.line_for(service_id)
        if existing is None:
            return False

        if new_quantity < MIN_QUANTITY:
            return self.remove_item(service_id)

        if new_quantity > MAX_QUANTITY:
            raise ValidationError({"quantity": [f"Quantity cannot exceed {MAX_QUANTITY}"]})

        previous_quantity = existing.quantity
        existing.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                user_id=str(self.user_id),
                service_id=str(service_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )
        return True

    def remove_item(self, service_id):
        """Drop a line. Returns False when the service is not in the cart."""
        existing = self.line_for(service_id)
        if existing is None:
            return False

        self.remove_items(existing)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                user_id=str(self.user_id),
                service_id=str(service_id),
            )
        )
        return True

    def to_list(self):
        return [line.to_dict() for line in self.items]
