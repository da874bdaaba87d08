"""
Spreadsheet -> catalog JSON conversion.

Reads the first worksheet of an .xlsx export (header row 1) and writes the
products array served by the API. Validation problems are collected and
reported, never fatal: a row with a bad price is still written with
`price: null`, and duplicate SKUs are kept.
"""

from __future__ import annotations

import json
import logging
import math
import shutil
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from openpyxl import load_workbook

logger = logging.getLogger(__name__)

FIELDS = ("id", "sku", "name", "brand", "category", "price", "stock", "description")


@dataclass
class IngestResult:
    products: List[Dict[str, Any]] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def normalize_string(value: Any) -> str:
    return "" if value is None else str(value).strip()


def to_number(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return float(value)
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


def to_integer(value: Any) -> Optional[int]:
    number = to_number(value)
    return None if number is None else int(number)


def _pick(row: Dict[str, Any], name: str) -> Any:
    """Column lookup that ignores header case ("SKU", "Sku", "sku")."""
    if name in row:
        return row[name]
    for key, value in row.items():
        if isinstance(key, str) and key.strip().lower() == name:
            return value
    return None


def read_rows(xlsx_path: Path) -> List[Dict[str, Any]]:
    wb = load_workbook(filename=str(xlsx_path), read_only=True, data_only=True)
    try:
        ws = wb.worksheets[0]
        rows = ws.iter_rows(values_only=True)
        header = next(rows, None)
        if header is None:
            return []
        keys = [normalize_string(h) for h in header]
        out: List[Dict[str, Any]] = []
        for values in rows:
            if values is None or all(v is None or v == "" for v in values):
                continue
            out.append({k: ("" if v is None else v) for k, v in zip(keys, values) if k})
        return out
    finally:
        wb.close()


def convert_rows(rows: Iterable[Dict[str, Any]]) -> IngestResult:
    result = IngestResult()
    seen_skus = set()

    for idx, row in enumerate(rows):
        row_num = idx + 2  # header is row 1
        pid = to_integer(_pick(row, "id"))
        sku = normalize_string(_pick(row, "sku"))
        name = normalize_string(_pick(row, "name"))
        price = to_number(_pick(row, "price"))
        stock = to_integer(_pick(row, "stock"))

        if not pid:
            result.errors.append(f"Row {row_num}: invalid/missing id")
        if not sku:
            result.errors.append(f"Row {row_num}: invalid/missing sku")
        if not name:
            result.errors.append(f"Row {row_num}: invalid/missing name")
        if price is None:
            result.errors.append(f"Row {row_num}: invalid/missing price")
        if stock is None:
            result.errors.append(f"Row {row_num}: invalid/missing stock")

        if sku in seen_skus:
            result.errors.append(f"Row {row_num}: duplicate sku {sku}")
        seen_skus.add(sku)

        result.products.append(
            {
                "id": pid or None,
                "sku": sku,
                "name": name,
                "brand": normalize_string(_pick(row, "brand")),
                "category": normalize_string(_pick(row, "category")),
                "price": price,
                "stock": stock,
                "description": normalize_string(_pick(row, "description")),
            }
        )

    return result


def write_catalog(products: List[Dict[str, Any]], output_path: Path) -> Optional[Path]:
    """Write the catalog JSON, backing up an existing file first. Returns the backup path."""
    backup: Optional[Path] = None
    if output_path.exists():
        backup = output_path.with_name(f"{output_path.name}.bak.{int(time.time() * 1000)}")
        shutil.copyfile(output_path, backup)
        logger.info("Backed up existing %s -> %s", output_path, backup)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(products, f, indent=2, ensure_ascii=False)
    logger.info("Wrote %d products to %s", len(products), output_path)
    return backup


def report_errors(errors: List[str], limit: int = 50) -> None:
    if not errors:
        return
    logger.warning("Validation found issues:")
    for err in errors[:limit]:
        logger.warning("- %s", err)
    if len(errors) > limit:
        logger.warning("...and %d more", len(errors) - limit)


def ingest(xlsx_path: Path, output_path: Path) -> IngestResult:
    result = convert_rows(read_rows(xlsx_path))
    report_errors(result.errors)
    write_catalog(result.products, output_path)
    return result
