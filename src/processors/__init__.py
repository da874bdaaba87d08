"""
Processors package.

Processing turns a spreadsheet export of the product range into the catalog JSON served by the API.
"""

from .catalog_ingest import IngestResult, convert_rows, ingest, read_rows, write_catalog

__all__ = ["IngestResult", "convert_rows", "ingest", "read_rows", "write_catalog"]
