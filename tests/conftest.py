"""
Pytest configuration and shared fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from api.main import app
from catalog.models import BookInput
from catalog.service import CatalogService
from catalog.store import InMemoryBookStore


@pytest.fixture
def book_store():
    """Create an empty in-memory book store."""
    return InMemoryBookStore()


@pytest.fixture
def catalog_service(book_store):
    """Create a catalog service over an empty store."""
    return CatalogService(book_store)


@pytest.fixture
def sample_book_input():
    """Create a sample book payload for testing."""
    return BookInput(
        title="Dune",
        author="Frank Herbert",
        isbn="9780441172719"
    )


@pytest.fixture
def client():
    """Create a test client; the lifespan builds a fresh catalog per test."""
    with TestClient(app) as test_client:
        yield test_client
