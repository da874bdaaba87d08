"""Pytest fixtures for catalog, intent and API tests."""

import pytest

from src.catalog.models import Product
from src.catalog.store import ProductCatalogue


BLUE_JACKET = {
    "id": 1,
    "sku": "TXJ001",
    "name": "Blue Jacket",
    "brand": "Acme",
    "category": "Outerwear",
    "price": 49.99,
    "stock": 10,
    "description": "Warm blue jacket",
}


@pytest.fixture
def jacket_catalogue():
    """Single-product catalog used by the end-to-end chat scenarios."""
    return ProductCatalogue([Product.from_dict(BLUE_JACKET)])


@pytest.fixture
def catalogue():
    return ProductCatalogue(
        [
            Product.from_dict(BLUE_JACKET),
            Product(id=2, sku="TXJ002", name="Rain Shell", brand="Acme", category="Outerwear", price=64.5, stock=4,
                    description="Lightweight waterproof shell"),
            Product(id=3, sku="SHO101", name="Trail Runner", brand="Stride", category="Footwear", price=89.0, stock=25,
                    description="Grippy trail running shoe"),
            Product(id=42, sku="BAG042", name="Travel Duffel", brand="Northway", category="Bags", price=72.0, stock=7,
                    description="Weekend duffel bag"),
        ]
    )
