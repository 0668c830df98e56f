"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer

from ordering.domain import ordering


@ordering.event(part_of="Cart")
class CartItemAdded:
    """One unit of a service was added to a user's cart."""

    __version__ = 1

    user_id = Identifier(required=True)
    service_id = Identifier(required=True)
    quantity = Integer(required=True)


@ordering.event(part_of="Cart")
class CartQuantityUpdated:
    """The quantity of a cart line was changed."""

    __version__ = 1

    user_id = Identifier(required=True)
    service_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@ordering.event(part_of="Cart")
class CartItemRemoved:
    """A service was removed from a user's cart."""

    __version__ = 1

    user_id = Identifier(required=True)
    service_id = Identifier(required=True)
