"""Product aggregate root with the ProductImage entity."""

from datetime import datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    HasMany,
    Integer,
    String,
)

from catalogue.domain import catalogue
from catalogue.product.slug import SLUG_PATTERN, slugify

# Fields an administrator may patch through update(). id, slug and sequence are fixed.
_UPDATABLE_FIELDS = ("sku", "title", "brand", "category", "price_cents", "stock", "is_active")


class Category(Enum):
    """The closed set of storefront categories."""

    CAR = "car"
    TOOLS = "tools"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    Category.CAR: "car accessories",
    Category.TOOLS: "power tools",
}


class MediaKind(Enum):
    IMAGE = "image"
    VIDEO = "video"


@catalogue.entity(part_of="Product")
class ProductImage:
    """An image or video reference shown in the product gallery."""

    url: String(required=True, max_length=500)
    kind: String(choices=MediaKind, default=MediaKind.IMAGE.value)
    display_order: Integer(default=0)


@catalogue.aggregate
class Product:
    """Product aggregate root."""

    sku: String(required=True, max_length=50)
    slug: String(required=True, max_length=200)
    title: String(required=True, max_length=255)
    brand: String(max_length=100, default="")
    category: String(required=True, choices=Category)
    price_cents: Integer(required=True, min_value=0)
    stock: Integer(default=0, min_value=0)
    is_active: Boolean(default=True)
    images: HasMany(ProductImage)
    sequence: Integer(default=0)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def slug_must_be_url_safe(self):
        if self.slug and not SLUG_PATTERN.match(self.slug):
            raise ValidationError({"slug": ["Slug must contain only lowercase alphanumeric characters and hyphens"]})

    @classmethod
    def create(
        cls,
        sku,
        title,
        category,
        price_cents,
        brand=None,
        stock=0,
        is_active=True,
        images=None,
        slug=None,
        sequence=0,
    ):
        from catalogue.product.events import ProductCreated

        now = datetime.now()
        product = cls(
            sku=sku,
            slug=slug or slugify(title),
            title=title,
            brand=brand or "",
            category=category.value if isinstance(category, Category) else category,
            price_cents=price_cents,
            stock=stock,
            is_active=is_active,
            sequence=sequence,
            created_at=now,
            updated_at=now,
        )
        product._replace_images(images or [])

        product.raise_(
            ProductCreated(
                product_id=product.id,
                sku=product.sku,
                slug=product.slug,
                title=product.title,
                category=product.category,
                price_cents=product.price_cents,
                stock=product.stock,
                created_at=now,
            )
        )
        return product

    def update(self, images=None, **changes):
        """Apply a partial patch from the back-office.

        Only fields present in ``changes`` (and not None) are touched.
        ``images`` replaces the whole gallery when given.
        """
        from catalogue.product.events import ProductUpdated

        unknown = set(changes) - set(_UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError({"product": [f"Cannot update field(s): {', '.join(sorted(unknown))}"]})

        changed = []
        for name, value in changes.items():
            if value is None:
                continue
            if isinstance(value, Category):
                value = value.value
            if getattr(self, name) != value:
                setattr(self, name, value)
                changed.append(name)

        if images is not None:
            self._replace_images(images)
            changed.append("images")

        if not changed:
            return

        self.updated_at = datetime.now()

        self.raise_(
            ProductUpdated(
                product_id=self.id,
                changed_fields=",".join(changed),
                price_cents=self.price_cents,
                stock=self.stock,
                is_active=self.is_active,
            )
        )

    def deduct_stock(self, quantity):
        """Take ``quantity`` units out of stock after a sale."""
        from catalogue.product.events import StockDeducted

        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity to deduct must be at least 1"]})
        if quantity > self.stock:
            raise ValidationError({"stock": [f"Only {self.stock} unit(s) of '{self.title}' left in stock"]})

        previous_stock = self.stock
        self.stock -= quantity
        self.updated_at = datetime.now()

        self.raise_(
            StockDeducted(
                product_id=self.id,
                quantity=quantity,
                previous_stock=previous_stock,
                new_stock=self.stock,
            )
        )

    def ordered_images(self):
        return sorted(self.images, key=lambda image: image.display_order)

    def primary_image_url(self):
        gallery = self.ordered_images()
        return gallery[0].url if gallery else None

    def _replace_images(self, images):
        with atomic_change(self):
            for image in list(self.images):
                self.remove_images(image)

            for position, media in enumerate(images):
                if isinstance(media, str):
                    media = {"url": media}
                self.add_images(
                    ProductImage(
                        url=media["url"],
                        kind=media.get("kind") or MediaKind.IMAGE.value,
                        display_order=position,
                    )
                )
