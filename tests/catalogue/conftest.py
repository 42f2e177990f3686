import pytest


@pytest.fixture(autouse=True)
def run_around_tests(catalogue_domain):
    """Push domain context before each test, cleanup after."""
    ctx = catalogue_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture()
def make_product():
    """Create a product through the CreateProduct command and return it."""
    import json

    from protean import current_domain

    from catalogue.product.management import CreateProduct
    from catalogue.product.product import Product

    def _make(**overrides):
        fields = {
            "sku": "SWC-3D",
            "title": "3D Steering Wheel Covers",
            "brand": "Talex",
            "category": "car",
            "price_cents": 80000,
            "stock": 12,
            "is_active": True,
            "images": json.dumps(["https://picsum.photos/seed/swc/600/400"]),
        }
        fields.update(overrides)
        product_id = current_domain.process(CreateProduct(**fields), asynchronous=False)
        return current_domain.repository_for(Product).get(product_id)

    return _make
