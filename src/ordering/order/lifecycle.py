"""Service order lifecycle: commands and handler."""

import json

from protean import handle
from protean.fields import Boolean, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import ServiceOrder
from ordering.utils.logging import get_logger

logger = get_logger(__name__)


@ordering.command(part_of="ServiceOrder")
class PlaceServiceOrder:
    customer_id = Identifier(required=True)
    customer_email = String(max_length=254)
    provider_ids = Text(required=True)  # JSON: list of provider ids
    items = Text()  # JSON: list of {name, quantity, price, image_url}
    total_amount = Float(default=0.0, min_value=0.0)
    delivery_date = String(max_length=10)
    delivery_time = String(max_length=20)
    remarks = Text()


@ordering.command(part_of="ServiceOrder")
class RecordProviderResponse:
    order_id = Identifier(required=True)
    provider_id = Identifier(required=True)
    accepted = Boolean(required=True)
    provider_name = String(max_length=255)


@ordering.command(part_of="ServiceOrder")
class CompleteServiceOrder:
    order_id = Identifier(required=True)


@ordering.command(part_of="ServiceOrder")
class MarkServiceOrderPaid:
    order_id = Identifier(required=True)
    payment_id = String(required=True, max_length=255)


@ordering.command(part_of="ServiceOrder")
class CancelServiceOrder:
    order_id = Identifier(required=True)
    reason = String(max_length=500)


def _json_list(value):
    if not value:
        return []
    return json.loads(value) if isinstance(value, str) else list(value)


@ordering.command_handler(part_of=ServiceOrder)
class ServiceOrderLifecycleHandler:
    @handle(PlaceServiceOrder)
    def place_order(self, command):
        order = ServiceOrder.place(
            customer_id=command.customer_id,
            customer_email=command.customer_email,
            provider_ids=[str(p) for p in _json_list(command.provider_ids)],
            items=json.dumps(_json_list(command.items)),
            total_amount=command.total_amount or 0.0,
            delivery_date=command.delivery_date,
            delivery_time=command.delivery_time,
            remarks=command.remarks,
        )
        current_domain.repository_for(ServiceOrder).add(order)
        logger.info("Service order placed", order_id=str(order.id), customer_id=str(command.customer_id))
        return str(order.id)

    @handle(RecordProviderResponse)
    def record_provider_response(self, command):
        repo = current_domain.repository_for(ServiceOrder)
        order = repo.get(command.order_id)
        order.record_provider_response(
            provider_id=command.provider_id,
            accepted=bool(command.accepted),
            provider_name=command.provider_name,
        )
        repo.add(order)
        return order.status

    @handle(CompleteServiceOrder)
    def complete_order(self, command):
        repo = current_domain.repository_for(ServiceOrder)
        order = repo.get(command.order_id)
        order.complete()
        repo.add(order)

    @handle(MarkServiceOrderPaid)
    def mark_order_paid(self, command):
        repo = current_domain.repository_for(ServiceOrder)
        order = repo.get(command.order_id)
        order.mark_paid(payment_id=command.payment_id)
        repo.add(order)

    @handle(CancelServiceOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(ServiceOrder)
        order = repo.get(command.order_id)
        order.cancel(reason=command.reason)
        repo.add(order)
