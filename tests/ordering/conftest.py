import pytest


@pytest.fixture(autouse=True)
def run_around_tests(ordering_domain, reset_catalogue):
    """Push the ordering context before each test, cleanup after.

    Catalogue data is reset too, since checkout tests stock products there.
    """
    ctx = ordering_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture()
def stock_product(catalogue_domain):
    """Create a catalogue product from within ordering tests and return its id."""
    from protean import current_domain

    from catalogue.product.management import CreateProduct

    def _stock(**overrides):
        fields = {
            "sku": "P-500",
            "title": "Product P",
            "brand": "Talex",
            "category": "car",
            "price_cents": 500,
            "stock": 10,
            "is_active": True,
        }
        fields.update(overrides)
        with catalogue_domain.domain_context():
            return current_domain.process(CreateProduct(**fields), asynchronous=False)

    return _stock


@pytest.fixture()
def checkout_form():
    return {
        "customer_name": "Jane Wanjiku",
        "phone": "0722690154",
        "address": "Moi Avenue, Nairobi",
        "email": "jane@example.com",
    }
