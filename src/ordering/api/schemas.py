"""Pydantic request/response schemas for the Ordering API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Request Schemas ---


class AddToCartRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "service_id": "svc-plumbing-01",
                    "name": "Tap repair",
                    "price": 299.0,
                    "image_url": "https://res.cloudinary.com/demo/tap.jpg",
                    "service_provider": "prov-17",
                }
            ]
        }
    }

    service_id: str
    name: str = Field(..., max_length=255)
    price: float = Field(..., ge=0)
    image_url: str | None = Field(None, max_length=1024)
    service_provider: str | None = Field(None, max_length=255)


class UpdateCartQuantityRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"new_quantity": 3}]}}

    new_quantity: int


class OrderItemSchema(BaseModel):
    name: str
    quantity: int = Field(1, ge=1)
    price: float = Field(..., ge=0)
    image_url: str | None = None


class PlaceOrderRequest(BaseModel):
    customer_id: str
    customer_email: str | None = None
    provider_ids: list[str] = Field(..., min_length=1)
    items: list[OrderItemSchema] = []
    total_amount: float = Field(0.0, ge=0)
    delivery_date: str | None = Field(None, max_length=10)
    delivery_time: str | None = Field(None, max_length=20)
    remarks: str | None = None


class ProviderResponseRequest(BaseModel):
    provider_id: str
    accepted: bool
    provider_name: str | None = None


class MarkPaidRequest(BaseModel):
    payment_id: str


class CancelOrderRequest(BaseModel):
    reason: str | None = Field(None, max_length=500)


# --- Response Schemas ---


class CartLineResponse(BaseModel):
    id: str
    name: str
    price: float
    quantity: int
    image_url: str | None = None
    service_provider: str | None = None
    added_at: str | None = None


class CartSummaryResponse(BaseModel):
    item_count: int
    subtotal: float
    tax: float
    total: float


class ChangedResponse(BaseModel):
    changed: bool


class OrderIdResponse(BaseModel):
    order_id: str


class OrderStatusResponse(BaseModel):
    status: str


class TimelineEventResponse(BaseModel):
    status: str
    date: str
    title: str
    description: str
    category: str


class StatusResponse(BaseModel):
    status: str = "ok"
