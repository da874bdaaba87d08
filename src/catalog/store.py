"""
Catalog Store.

Loads the product catalog JSON once at startup and exposes it read-only.
A missing or corrupt file is not fatal: the service starts with an empty
catalog and keeps answering (list replies are simply empty).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterator, List, Sequence, Tuple, Union

from src.catalog.models import Product
from src.error_handler import DataError

logger = logging.getLogger(__name__)


class ProductCatalogue:
    """Immutable, ordered collection of products shared by all requests."""

    def __init__(self, products: Sequence[Product] = ()):
        self._products: Tuple[Product, ...] = tuple(products)

    def all(self) -> Tuple[Product, ...]:
        return self._products

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products)

    def __len__(self) -> int:
        return len(self._products)

    def __repr__(self) -> str:
        return f"ProductCatalogue({len(self._products)} products)"


def _read_records(path: Path) -> List[Product]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DataError(f"Failed to read {path}: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DataError(f"Failed to parse {path}: {e}") from e

    if not isinstance(data, list):
        raise DataError(f"Expected a JSON array of products in {path}, got {type(data).__name__}")

    products: List[Product] = []
    for idx, raw in enumerate(data):
        if not isinstance(raw, dict):
            logger.warning("Skipping catalog entry %d: expected an object, got %s", idx, type(raw).__name__)
            continue
        products.append(Product.from_dict(raw))
    return products


def load_catalogue(path: Union[str, Path]) -> ProductCatalogue:
    """
    Load the catalog file at `path`.

    Never raises for data problems; those are logged and yield an empty catalog.
    Uniqueness of id/sku is not enforced here (ingestion reports duplicates).
    """
    path = Path(path)
    if not path.exists():
        logger.warning("Catalog file not found: %s (starting with an empty catalog)", path)
        return ProductCatalogue()

    try:
        products = _read_records(path)
    except DataError as e:
        logger.error("%s (starting with an empty catalog)", e)
        return ProductCatalogue()

    logger.info("Loaded %d products from %s", len(products), path)
    return ProductCatalogue(products)
