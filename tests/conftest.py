import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Initialize both bounded contexts once. Each context's conftest pushes its
    own domain context around every test.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from catalogue.domain import catalogue
    from ordering.domain import ordering

    catalogue.init()
    ordering.init()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


def _reset(domain):
    with domain.domain_context():
        for _, provider in domain.providers.items():
            provider._data_reset()
        domain.event_store.store._data_reset()


@pytest.fixture(scope="session")
def catalogue_domain():
    from catalogue.domain import catalogue

    return catalogue


@pytest.fixture(scope="session")
def ordering_domain():
    from ordering.domain import ordering

    return ordering


@pytest.fixture()
def reset_catalogue(catalogue_domain):
    """Wipe catalogue data after a test that seeded products from another context."""
    yield
    _reset(catalogue_domain)


@pytest.fixture()
def reset_ordering(ordering_domain):
    yield
    _reset(ordering_domain)
