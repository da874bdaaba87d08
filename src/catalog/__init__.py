"""
Product catalog: data model, read-only store and text search.
"""
from .models import Product
from .search import names_only, search
from .store import ProductCatalogue, load_catalogue

__all__ = [
    "Product",
    "ProductCatalogue",
    "load_catalogue",
    "names_only",
    "search",
]
