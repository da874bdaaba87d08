#!/usr/bin/env python3
"""
Convert a product spreadsheet (.xlsx) into the catalog JSON served by the API.

Usage:
  python scripts/run_catalog_ingest.py products.xlsx data/products.json

Validation issues (missing fields, duplicate SKUs) are printed as warnings;
the catalog is written regardless. An existing output file is backed up first.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

# Add repo root to path so `src.*` imports work when running from scripts/
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.processors.catalog_ingest import ingest


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    handlers = [logging.StreamHandler()]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def main() -> int:
    parser = argparse.ArgumentParser(description="Convert a product spreadsheet into catalog JSON")
    parser.add_argument("input", type=Path, help="Path to the .xlsx export")
    parser.add_argument("output", type=Path, help="Path of the catalog JSON to write (e.g. data/products.json)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", type=Path, default=None, help="Also write logs to this file")
    args = parser.parse_args()

    setup_logging(verbose=args.verbose, log_file=args.log_file)
    logger = logging.getLogger(__name__)

    if not args.input.exists():
        logger.error("Input file not found: %s", args.input)
        return 2

    result = ingest(args.input, args.output)
    logger.info("Done: %d products, %d validation issues", len(result.products), len(result.errors))
    return 0


if __name__ == "__main__":
    sys.exit(main())
