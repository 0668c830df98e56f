"""Cart item management: commands and handler.

Each command is one read-modify-write of the user's cart document. Update and
remove against a missing cart or line are no-ops that report ``False``.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.domain import ordering
from ordering.utils.logging import get_logger

logger = get_logger(__name__)


@ordering.command(part_of="Cart")
class AddToCart:
    user_id = Identifier(required=True)
    service_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    image_url = String(max_length=1024)
    service_provider = String(max_length=255)


@ordering.command(part_of="Cart")
class UpdateCartQuantity:
    user_id = Identifier(required=True)
    service_id = Identifier(required=True)
    new_quantity = Integer(required=True)


@ordering.command(part_of="Cart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    service_id = Identifier(required=True)


@ordering.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(Cart)
        try:
            cart = repo.get(command.user_id)
        except ObjectNotFoundError:
            cart = Cart.create(user_id=command.user_id)
            logger.info("Cart created", user_id=str(command.user_id))

        cart.add_item(
            service_id=command.service_id,
            name=command.name,
            price=command.price,
            image_url=command.image_url,
            service_provider=command.service_provider,
        )
        repo.add(cart)

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        repo = current_domain.repository_for(Cart)
        try:
            cart = repo.get(command.user_id)
        except ObjectNotFoundError:
            return False

        updated = cart.update_item_quantity(
            service_id=command.service_id,
            new_quantity=command.new_quantity,
        )
        if updated:
            repo.add(cart)
        return updated

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(Cart)
        try:
            cart = repo.get(command.user_id)
        except ObjectNotFoundError:
            return False

        removed = cart.remove_item(service_id=command.service_id)
        if removed:
            repo.add(cart)
        return removed
