"""
Catalog data model.

A Product mirrors one entry of the catalog JSON file written by the ingestion
processor. Values are coerced leniently on load: the catalog may come from a
spreadsheet export with blanks or stray text in numeric columns.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

# Fields returned for each product in lookup replies, in display order.
SUMMARY_FIELDS = ("id", "sku", "name", "brand", "category", "price", "stock", "description")


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def coerce_int(value: Any) -> Optional[int]:
    """Return an int for integral-looking input, else None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    number = coerce_number(value)
    if number is None or not float(number).is_integer():
        return None
    return int(number)


def coerce_number(value: Any) -> Optional[float]:
    """Return a finite number (int or float) for numeric input, else None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None
    text = str(value).strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


@dataclass(frozen=True)
class Product:
    id: Optional[int]
    sku: str
    name: str
    brand: str = ""
    category: str = ""
    price: Optional[float] = None
    stock: Optional[int] = None
    description: str = ""

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Product":
        return cls(
            id=coerce_int(raw.get("id")),
            sku=_as_text(raw.get("sku")),
            name=_as_text(raw.get("name")),
            brand=_as_text(raw.get("brand")),
            category=_as_text(raw.get("category")),
            price=coerce_number(raw.get("price")),
            stock=coerce_int(raw.get("stock")),
            description=_as_text(raw.get("description")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_summary(self) -> Dict[str, Any]:
        """ProductSummary projection used in chat lookup replies."""
        data = self.to_dict()
        return {field: data[field] for field in SUMMARY_FIELDS}

    @property
    def id_text(self) -> str:
        return "" if self.id is None else str(self.id)

    @property
    def haystack(self) -> str:
        """Lowercased text the fuzzy matcher searches in."""
        return f"{self.name} {self.brand} {self.description} {self.category}".lower()
