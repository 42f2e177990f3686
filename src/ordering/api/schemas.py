"""Pydantic request/response schemas for the Ordering API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Cart Request Schemas ---


class CreateCartRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"session_id": "sess-abc-123"}]}}

    session_id: str | None = Field(None, max_length=255)


class AddToCartRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"product_id": "prod-001", "quantity": 2}]}}

    product_id: str
    quantity: int = 1


class UpdateCartQuantityRequest(BaseModel):
    quantity: int


class CartVisibilityRequest(BaseModel):
    is_open: bool


class CheckoutRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "customer_name": "Jane Wanjiku",
                    "phone": "0722 690 154",
                    "address": "Moi Avenue, Nairobi",
                    "email": "jane@example.com",
                    "notes": "Call on arrival",
                    "use_phone_for_payment": True,
                }
            ]
        }
    }

    customer_name: str = ""
    phone: str = ""
    address: str = ""
    email: str | None = None
    notes: str | None = None
    use_phone_for_payment: bool = True


# --- Order Request Schemas ---


class OrderItemSchema(BaseModel):
    product_id: str | None = None
    title: str = Field(..., min_length=1, max_length=255)
    quantity: int = Field(..., ge=1)
    unit_price: int = Field(..., ge=0)
    image: str | None = None


class CreateOrderRequest(CheckoutRequest):
    items: list[OrderItemSchema] = Field(..., min_length=1)


class UpdateOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {"status": "Shipped"},
                {"payment_status": "Confirmed", "receipt": "QHX3ABC123"},
            ]
        }
    }

    status: str | None = None
    force: bool = False
    payment_status: str | None = None
    receipt: str | None = Field(None, max_length=50)
    force_payment: bool = False


# --- Response Schemas ---


class CartIdResponse(BaseModel):
    cart_id: str


class OrderIdResponse(BaseModel):
    order_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class CartLineResponse(BaseModel):
    product_id: str
    title: str
    unit_price: int
    quantity: int
    line_total: int
    image: str | None = None


class CartResponse(BaseModel):
    cart_id: str
    is_open: bool
    lines: list[CartLineResponse]
    subtotal: int
    item_count: int


class PaymentResponse(BaseModel):
    status: str
    receipt: str | None = None
    phone: str | None = None


class OrderResponse(BaseModel):
    order_id: str
    customer_name: str
    phone: str
    address: str
    email: str | None = None
    notes: str | None = None
    status: str
    payment: PaymentResponse | None = None
    payment_status: str
    items: list[OrderItemSchema]
    item_count: int
    total: int
    created_at: str | None = None
    updated_at: str | None = None


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]


class OrderPageResponse(BaseModel):
    orders: list[OrderResponse]
    page: int
    page_size: int
    page_count: int
    total: int


class TrackingStep(BaseModel):
    status: str
    label: str
    reached: bool


class TrackingResponse(BaseModel):
    order_id: str
    customer_name: str
    status: str
    payment_status: str
    receipt: str | None = None
    items: list[OrderItemSchema]
    item_count: int
    total: int
    placed_at: str | None = None
    updated_at: str | None = None
    cancelled: bool
    progress: int
    steps: list[TrackingStep]


class RevenuePoint(BaseModel):
    date: str
    revenue: int


class TopProduct(BaseModel):
    title: str
    quantity: int
    revenue: int


class DashboardResponse(BaseModel):
    days: int
    paid_revenue: int
    revenue_series: list[RevenuePoint]
    revenue_current: int
    revenue_previous: int
    revenue_delta: int
    orders_current: int
    orders_previous: int
    orders_delta: int
    top_products: list[TopProduct]
