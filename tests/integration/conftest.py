"""Fixtures for cross-context tests.

These tests drive the Catalogue and Ordering contexts together, so each one
starts with both contexts empty and wipes them again afterwards.
"""

import pytest


@pytest.fixture(autouse=True)
def clean_contexts(reset_catalogue, reset_ordering):
    yield
