"""Catalogue reads must see every product, well past a single query page."""

import pytest
from catalogue.product.browsing import browse_catalogue, catalogue_products
from catalogue.product.listing import inventory_summary, list_products
from catalogue.product.management import CreateProduct, availability_errors
from protean import current_domain

PRODUCT_COUNT = 105


@pytest.fixture
def product_ids():
    return [
        current_domain.process(
            CreateProduct(sku=f"SKU-{n}", title="Car Phone Holder", category="car", price_cents=1500, stock=5),
            asynchronous=False,
        )
        for n in range(PRODUCT_COUNT)
    ]


@pytest.mark.slow
class TestLargeCatalogue:
    def test_every_product_is_listed(self, product_ids):
        assert len(catalogue_products()) == PRODUCT_COUNT
        assert len(browse_catalogue()) == PRODUCT_COUNT

    def test_admin_views_count_every_product(self, product_ids):
        assert list_products(page_size=10).total == PRODUCT_COUNT
        assert inventory_summary()["product_count"] == PRODUCT_COUNT

    def test_slugs_and_sequences_stay_unique(self, product_ids):
        products = catalogue_products()
        assert len({product.slug for product in products}) == PRODUCT_COUNT
        assert sorted(product.sequence for product in products) == list(range(1, PRODUCT_COUNT + 1))

    def test_newest_product_is_available(self, product_ids):
        assert availability_errors([{"product_id": product_ids[-1], "quantity": 1}]) == {}
