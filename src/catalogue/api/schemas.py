"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Product Request Schemas ---


class ProductMedia(BaseModel):
    url: str = Field(..., max_length=500)
    kind: str = Field("image", pattern="^(image|video)$")


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "sku": "SWC-3D",
                    "title": "3D Steering Wheel Covers (Assorted)",
                    "brand": "Talex",
                    "category": "car",
                    "price_cents": 80000,
                    "stock": 12,
                    "is_active": True,
                    "images": [{"url": "https://picsum.photos/seed/swc/800/600", "kind": "image"}],
                }
            ]
        }
    }

    sku: str = Field(..., max_length=50)
    title: str = Field(..., min_length=1, max_length=255)
    brand: str | None = Field(None, max_length=100)
    category: str = Field(..., pattern="^(car|tools)$")
    price_cents: int = Field(..., ge=0)
    stock: int = Field(0, ge=0)
    is_active: bool = True
    images: list[ProductMedia | str] = Field(default_factory=list)
    slug: str | None = Field(None, max_length=200)


class UpdateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "price_cents": 75000,
                    "stock": 8,
                    "is_active": True,
                }
            ]
        }
    }

    sku: str | None = Field(None, max_length=50)
    title: str | None = Field(None, min_length=1, max_length=255)
    brand: str | None = Field(None, max_length=100)
    category: str | None = Field(None, pattern="^(car|tools)$")
    price_cents: int | None = Field(None, ge=0)
    stock: int | None = Field(None, ge=0)
    is_active: bool | None = None
    images: list[ProductMedia | str] | None = None


# --- Response Schemas ---


class StatusResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "ok"}]}}

    status: str = "ok"


class ProductResponse(BaseModel):
    product_id: str
    sku: str
    slug: str
    title: str
    brand: str | None = None
    category: str
    category_label: str
    price_cents: int
    stock: int
    is_active: bool
    images: list[ProductMedia] = Field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None


class ProductListResponse(BaseModel):
    products: list[ProductResponse]


class BrowseResponse(BaseModel):
    products: list[ProductResponse]
    count: int
    min_price: int
    max_price: int


class ProductPageResponse(BaseModel):
    products: list[ProductResponse]
    page: int
    page_size: int
    page_count: int
    total: int


class InventoryResponse(BaseModel):
    product_count: int
    active_count: int
    out_of_stock_count: int
    low_stock: list[ProductResponse]
