"""
Product Query Engine: substring search over the catalog.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from src.catalog.models import Product


def search(products: Iterable[Product], term: Optional[str] = None) -> List[Product]:
    """
    Case-insensitive substring match of `term` against name, description and
    category. An empty or missing term returns every product. Catalog order
    is preserved.
    """
    if not term:
        return list(products)
    needle = term.lower()
    return [
        p
        for p in products
        if needle in p.name.lower() or needle in p.description.lower() or needle in p.category.lower()
    ]


def names_only(products: Iterable[Product]) -> List[str]:
    return [p.name for p in products]
