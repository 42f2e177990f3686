"""FastAPI routes for the Ordering domain: carts, checkout and orders."""

import json

from fastapi import APIRouter, Query
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    AddToCartRequest,
    CartIdResponse,
    CartLineResponse,
    CartResponse,
    CartVisibilityRequest,
    CheckoutRequest,
    CreateCartRequest,
    CreateOrderRequest,
    DashboardResponse,
    OrderIdResponse,
    OrderListResponse,
    OrderPageResponse,
    OrderResponse,
    StatusResponse,
    TrackingResponse,
    UpdateCartQuantityRequest,
    UpdateOrderRequest,
)
from ordering.cart.cart import ShoppingCart
from ordering.cart.catalogue_client import CatalogueClient
from ordering.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from ordering.cart.management import ClearCart, CreateCart, SetCartVisibility
from ordering.checkout.placement import PlaceOrder
from ordering.order.administration import ChangeFulfillmentStatus, RecordPayment
from ordering.order.creation import CreateOrder
from ordering.order.listing import all_orders, list_orders
from ordering.order.order import Order
from ordering.order.reporting import dashboard
from ordering.projections.order_tracking import OrderTracking, tracking_steps

catalogue_client = CatalogueClient()


def cart_response(cart) -> CartResponse:
    return CartResponse(
        cart_id=str(cart.id),
        is_open=bool(cart.is_open),
        lines=[
            CartLineResponse(
                product_id=str(line.product_id),
                title=line.title,
                unit_price=line.unit_price,
                quantity=line.quantity,
                line_total=line.line_total(),
                image=line.image,
            )
            for line in cart.lines()
        ],
        subtotal=cart.subtotal(),
        item_count=cart.item_count(),
    )


def order_response(order) -> OrderResponse:
    return OrderResponse(
        order_id=str(order.id),
        customer_name=order.customer_name,
        phone=order.phone,
        address=order.address,
        email=order.email,
        notes=order.notes,
        status=order.status,
        payment=(
            {"status": order.payment.status, "receipt": order.payment.receipt, "phone": order.payment.phone}
            if order.payment
            else None
        ),
        payment_status=order.current_payment_status(),
        items=order.snapshot(),
        item_count=order.item_count(),
        total=order.total(),
        created_at=str(order.created_at) if order.created_at else None,
        updated_at=str(order.updated_at) if order.updated_at else None,
    )


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.post("", status_code=201, response_model=CartIdResponse)
async def create_cart(body: CreateCartRequest) -> CartIdResponse:
    result = current_domain.process(CreateCart(session_id=body.session_id), asynchronous=False)
    return CartIdResponse(cart_id=result)


@cart_router.get("/{cart_id}", response_model=CartResponse)
async def get_cart(cart_id: str) -> CartResponse:
    return cart_response(current_domain.repository_for(ShoppingCart).get(cart_id))


@cart_router.post("/{cart_id}/items", response_model=CartResponse)
async def add_cart_item(cart_id: str, body: AddToCartRequest) -> CartResponse:
    snapshot = catalogue_client.product_snapshot(body.product_id)
    command = AddToCart(
        cart_id=cart_id,
        product_id=snapshot["product_id"],
        title=snapshot["title"],
        unit_price=snapshot["unit_price"],
        image=snapshot["image"],
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return await get_cart(cart_id)


@cart_router.put("/{cart_id}/items/{product_id}", response_model=CartResponse)
async def update_cart_item_quantity(cart_id: str, product_id: str, body: UpdateCartQuantityRequest) -> CartResponse:
    command = UpdateCartQuantity(
        cart_id=cart_id,
        product_id=product_id,
        new_quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return await get_cart(cart_id)


@cart_router.delete("/{cart_id}/items/{product_id}", response_model=CartResponse)
async def remove_cart_item(cart_id: str, product_id: str) -> CartResponse:
    current_domain.process(RemoveFromCart(cart_id=cart_id, product_id=product_id), asynchronous=False)
    return await get_cart(cart_id)


@cart_router.delete("/{cart_id}/items", response_model=CartResponse)
async def clear_cart(cart_id: str) -> CartResponse:
    current_domain.process(ClearCart(cart_id=cart_id), asynchronous=False)
    return await get_cart(cart_id)


@cart_router.put("/{cart_id}/visibility", response_model=CartResponse)
async def set_cart_visibility(cart_id: str, body: CartVisibilityRequest) -> CartResponse:
    current_domain.process(SetCartVisibility(cart_id=cart_id, is_open=body.is_open), asynchronous=False)
    return await get_cart(cart_id)


@cart_router.post("/{cart_id}/checkout", status_code=201, response_model=OrderIdResponse)
async def checkout_cart(cart_id: str, body: CheckoutRequest) -> OrderIdResponse:
    """Place an order from the cart.

    1. Check every line against the live catalogue
    2. Place the order and clear the cart in one unit of work
    3. Deduct the sold stock from the catalogue

    The order stands once step 2 commits. A failed deduction in step 3 is
    logged and the order id is still returned.
    """
    cart = current_domain.repository_for(ShoppingCart).get(cart_id)
    lines = cart.snapshot()

    errors = catalogue_client.availability_errors(lines)
    if errors:
        raise ValidationError({"items": list(errors.values())})

    command = PlaceOrder(
        cart_id=cart_id,
        customer_name=body.customer_name,
        phone=body.phone,
        address=body.address,
        email=body.email,
        notes=body.notes,
        use_phone_for_payment=body.use_phone_for_payment,
    )
    order_id = current_domain.process(command, asynchronous=False)

    catalogue_client.deduct_stock(order_id, lines)
    return OrderIdResponse(order_id=order_id)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=OrderListResponse)
async def list_all_orders() -> OrderListResponse:
    return OrderListResponse(orders=[order_response(order) for order in all_orders()])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def create_order(body: CreateOrderRequest) -> OrderResponse:
    command = CreateOrder(
        customer_name=body.customer_name,
        phone=body.phone,
        address=body.address,
        email=body.email,
        notes=body.notes,
        items=json.dumps([item.model_dump() for item in body.items]),
        use_phone_for_payment=body.use_phone_for_payment,
    )
    result = current_domain.process(command, asynchronous=False)
    return await get_order(result)


@order_router.get("/manage", response_model=OrderPageResponse)
async def manage_orders(
    q: str | None = None,
    status: str | None = None,
    payment: str = "all",
    sort: str = "created",
    descending: bool = True,
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
) -> OrderPageResponse:
    window = list_orders(
        search=q,
        status=status,
        payment=payment,
        sort=sort,
        descending=descending,
        page=page,
        page_size=page_size,
    )
    return OrderPageResponse(
        orders=[order_response(order) for order in window.items],
        page=window.page,
        page_size=window.page_size,
        page_count=window.page_count,
        total=window.total,
    )


@order_router.get("/dashboard", response_model=DashboardResponse)
async def order_dashboard(days: int = Query(7, ge=1, le=90)) -> DashboardResponse:
    return DashboardResponse(**dashboard(days=days))


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    return order_response(current_domain.repository_for(Order).get(order_id))


@order_router.put("/{order_id}", response_model=OrderResponse)
async def update_order(order_id: str, body: UpdateOrderRequest) -> OrderResponse:
    """Administrative update: fulfillment status, payment outcome, or both."""
    if body.status is None and body.payment_status is None:
        raise ValidationError({"order": ["Nothing to update: provide status or payment_status"]})

    if body.status is not None:
        current_domain.process(
            ChangeFulfillmentStatus(order_id=order_id, status=body.status, force=body.force),
            asynchronous=False,
        )
    if body.payment_status is not None:
        current_domain.process(
            RecordPayment(
                order_id=order_id,
                status=body.payment_status,
                receipt=body.receipt,
                force=body.force_payment,
            ),
            asynchronous=False,
        )
    return await get_order(order_id)


@order_router.get("/{order_id}/tracking", response_model=TrackingResponse)
async def track_order(order_id: str) -> TrackingResponse:
    view = current_domain.repository_for(OrderTracking).get(order_id.strip())
    progress = tracking_steps(view.status)
    return TrackingResponse(
        order_id=str(view.order_id),
        customer_name=view.customer_name,
        status=view.status,
        payment_status=view.payment_status,
        receipt=view.receipt,
        items=json.loads(view.items) if view.items else [],
        item_count=view.item_count,
        total=view.total,
        placed_at=str(view.placed_at) if view.placed_at else None,
        updated_at=str(view.updated_at) if view.updated_at else None,
        cancelled=progress["cancelled"],
        progress=progress["progress"],
        steps=progress["steps"],
    )
