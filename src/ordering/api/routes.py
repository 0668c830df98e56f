"""FastAPI routes for the Ordering domain: carts and service orders."""

import json

from fastapi import APIRouter
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    AddToCartRequest,
    CancelOrderRequest,
    CartLineResponse,
    CartSummaryResponse,
    ChangedResponse,
    MarkPaidRequest,
    OrderIdResponse,
    OrderStatusResponse,
    PlaceOrderRequest,
    ProviderResponseRequest,
    StatusResponse,
    TimelineEventResponse,
    UpdateCartQuantityRequest,
)
from ordering.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from ordering.cart.summary import get_cart_items, summarize_cart
from ordering.order.lifecycle import (
    CancelServiceOrder,
    CompleteServiceOrder,
    MarkServiceOrderPaid,
    PlaceServiceOrder,
    RecordProviderResponse,
)
from ordering.order.order import ServiceOrder
from ordering.order.timeline import build_timeline
from shared.retry import process_with_retry

# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.get("/{user_id}/items", response_model=list[CartLineResponse])
async def list_cart_items(user_id: str) -> list[CartLineResponse]:
    return [CartLineResponse(**item) for item in get_cart_items(user_id)]


@cart_router.post("/{user_id}/items", response_model=StatusResponse)
async def add_cart_item(user_id: str, body: AddToCartRequest) -> StatusResponse:
    command = AddToCart(
        user_id=user_id,
        service_id=body.service_id,
        name=body.name,
        price=body.price,
        image_url=body.image_url,
        service_provider=body.service_provider,
    )
    process_with_retry(command)
    return StatusResponse()


@cart_router.put("/{user_id}/items/{service_id}", response_model=ChangedResponse)
async def update_cart_item_quantity(user_id: str, service_id: str, body: UpdateCartQuantityRequest) -> ChangedResponse:
    """Set a line's quantity; zero or below removes the line."""
    command = UpdateCartQuantity(
        user_id=user_id,
        service_id=service_id,
        new_quantity=body.new_quantity,
    )
    return ChangedResponse(changed=bool(process_with_retry(command)))


@cart_router.delete("/{user_id}/items/{service_id}", response_model=ChangedResponse)
async def remove_cart_item(user_id: str, service_id: str) -> ChangedResponse:
    command = RemoveFromCart(user_id=user_id, service_id=service_id)
    return ChangedResponse(changed=bool(process_with_retry(command)))


@cart_router.get("/{user_id}/summary", response_model=CartSummaryResponse)
async def cart_summary(user_id: str) -> CartSummaryResponse:
    return CartSummaryResponse(**summarize_cart(get_cart_items(user_id)))


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderIdResponse)
async def place_order(body: PlaceOrderRequest) -> OrderIdResponse:
    command = PlaceServiceOrder(
        customer_id=body.customer_id,
        customer_email=body.customer_email,
        provider_ids=json.dumps(body.provider_ids),
        items=json.dumps([item.model_dump() for item in body.items]),
        total_amount=body.total_amount,
        delivery_date=body.delivery_date,
        delivery_time=body.delivery_time,
        remarks=body.remarks,
    )
    result = current_domain.process(command, asynchronous=False)
    return OrderIdResponse(order_id=result)


@order_router.post("/{order_id}/responses", response_model=OrderStatusResponse)
async def record_provider_response(order_id: str, body: ProviderResponseRequest) -> OrderStatusResponse:
    command = RecordProviderResponse(
        order_id=order_id,
        provider_id=body.provider_id,
        accepted=body.accepted,
        provider_name=body.provider_name,
    )
    return OrderStatusResponse(status=process_with_retry(command))


@order_router.put("/{order_id}/complete", response_model=StatusResponse)
async def complete_order(order_id: str) -> StatusResponse:
    process_with_retry(CompleteServiceOrder(order_id=order_id))
    return StatusResponse()


@order_router.put("/{order_id}/pay", response_model=StatusResponse)
async def mark_order_paid(order_id: str, body: MarkPaidRequest) -> StatusResponse:
    process_with_retry(MarkServiceOrderPaid(order_id=order_id, payment_id=body.payment_id))
    return StatusResponse()


@order_router.put("/{order_id}/cancel", response_model=StatusResponse)
async def cancel_order(order_id: str, body: CancelOrderRequest) -> StatusResponse:
    process_with_retry(CancelServiceOrder(order_id=order_id, reason=body.reason))
    return StatusResponse()


@order_router.get("/{order_id}/timeline", response_model=list[TimelineEventResponse])
async def order_timeline(order_id: str) -> list[TimelineEventResponse]:
    order = current_domain.repository_for(ServiceOrder).get(order_id)
    return [TimelineEventResponse(**event.as_dict()) for event in build_timeline(order)]
