"""FastAPI endpoints for the Catalogue domain."""

import json

from fastapi import APIRouter, Query
from protean.utils.globals import current_domain

from catalogue.api.schemas import (
    BrowseResponse,
    CreateProductRequest,
    InventoryResponse,
    ProductListResponse,
    ProductPageResponse,
    ProductResponse,
    StatusResponse,
    UpdateProductRequest,
)
from catalogue.product.browsing import SORT_POPULAR, browse, catalogue_products, price_bounds
from catalogue.product.listing import inventory_summary, list_products
from catalogue.product.management import CreateProduct, DeleteProduct, UpdateProduct
from catalogue.product.product import Category, Product

product_router = APIRouter(prefix="/products", tags=["products"])


def _media_json(images):
    if images is None:
        return None
    return json.dumps([image if isinstance(image, str) else image.model_dump() for image in images])


def product_response(product) -> ProductResponse:
    return ProductResponse(
        product_id=str(product.id),
        sku=product.sku,
        slug=product.slug,
        title=product.title,
        brand=product.brand,
        category=product.category,
        category_label=Category(product.category).label,
        price_cents=product.price_cents,
        stock=product.stock,
        is_active=product.is_active,
        images=[{"url": image.url, "kind": image.kind} for image in product.ordered_images()],
        created_at=str(product.created_at) if product.created_at else None,
        updated_at=str(product.updated_at) if product.updated_at else None,
    )


# --- Backend contract ---


@product_router.get("", response_model=ProductListResponse)
async def list_all_products() -> ProductListResponse:
    """Every product in catalogue order, inactive ones included."""
    return ProductListResponse(products=[product_response(p) for p in catalogue_products()])


@product_router.post("", status_code=201, response_model=ProductResponse)
async def create_product(body: CreateProductRequest) -> ProductResponse:
    command = CreateProduct(
        sku=body.sku,
        title=body.title,
        brand=body.brand,
        category=body.category,
        price_cents=body.price_cents,
        stock=body.stock,
        is_active=body.is_active,
        images=_media_json(body.images),
        slug=body.slug,
    )
    result = current_domain.process(command, asynchronous=False)
    return product_response(current_domain.repository_for(Product).get(result))


# --- Storefront and back-office views ---


@product_router.get("/browse", response_model=BrowseResponse)
async def browse_products(
    category: str | None = Query(None, pattern="^(car|tools)$"),
    min_price: int | None = Query(None, ge=0),
    max_price: int | None = Query(None, ge=0),
    in_stock: bool = False,
    q: str | None = None,
    sort: str = SORT_POPULAR,
) -> BrowseResponse:
    products = catalogue_products()
    visible = browse(
        products,
        category=category,
        min_price=min_price,
        max_price=max_price,
        in_stock_only=in_stock,
        search=q,
        sort=sort,
    )
    low, high = price_bounds(products)
    return BrowseResponse(
        products=[product_response(p) for p in visible],
        count=len(visible),
        min_price=low,
        max_price=high,
    )


@product_router.get("/manage", response_model=ProductPageResponse)
async def manage_products(
    q: str | None = None,
    category: str | None = Query(None, pattern="^(car|tools)$"),
    status: str = "all",
    sort: str = "created",
    descending: bool = False,
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
) -> ProductPageResponse:
    window = list_products(
        search=q,
        category=category,
        status=status,
        sort=sort,
        descending=descending,
        page=page,
        page_size=page_size,
    )
    return ProductPageResponse(
        products=[product_response(p) for p in window.items],
        page=window.page,
        page_size=window.page_size,
        page_count=window.page_count,
        total=window.total,
    )


@product_router.get("/inventory", response_model=InventoryResponse)
async def inventory() -> InventoryResponse:
    summary = inventory_summary()
    return InventoryResponse(
        product_count=summary["product_count"],
        active_count=summary["active_count"],
        out_of_stock_count=summary["out_of_stock_count"],
        low_stock=[product_response(p) for p in summary["low_stock"]],
    )


# --- Single product ---


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    product = current_domain.repository_for(Product).get(product_id)
    return product_response(product)


@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(product_id: str, body: UpdateProductRequest) -> ProductResponse:
    command = UpdateProduct(
        product_id=product_id,
        sku=body.sku,
        title=body.title,
        brand=body.brand,
        category=body.category,
        price_cents=body.price_cents,
        stock=body.stock,
        is_active=body.is_active,
        images=_media_json(body.images),
    )
    current_domain.process(command, asynchronous=False)
    return await get_product(product_id)


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str) -> StatusResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()
