"""Shared BDD fixtures and step definitions for the Catalogue domain."""

import pytest
from catalogue.product.product import Product
from pytest_bdd import given, parsers


@pytest.fixture()
def products():
    return []


@pytest.fixture()
def result():
    """Container for the outcome of a browse: products or the raised error."""
    return {"products": None, "exc": None}


def _stock_shelf(products, category, title, brand, price, stock, is_active=True):
    products.append(
        Product.create(
            sku=f"SKU-{len(products) + 1}",
            title=title,
            brand=brand,
            category=category,
            price_cents=price,
            stock=stock,
            is_active=is_active,
            sequence=len(products) + 1,
        )
    )


@given(parsers.cfparse('a "{category}" product "{title}" by "{brand}" priced {price:d} with {stock:d} in stock'))
def listed_product(products, category, title, brand, price, stock):
    _stock_shelf(products, category, title, brand, price, stock)


@given(parsers.cfparse('a hidden "{category}" product "{title}" by "{brand}" priced {price:d} with {stock:d} in stock'))
def hidden_product(products, category, title, brand, price, stock):
    _stock_shelf(products, category, title, brand, price, stock, is_active=False)
