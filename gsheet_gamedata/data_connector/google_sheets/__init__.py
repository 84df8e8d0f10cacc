"""
Google Sheets connector: share-link parsing, CSV export fetching, source list
"""

from .registry import SheetSourceStore
from .service import GoogleSheetsExportService
from .utils import extract_gid, extract_sheet_id, resolve_export_url

__all__ = [
    "GoogleSheetsExportService",
    "SheetSourceStore",
    "extract_gid",
    "extract_sheet_id",
    "resolve_export_url",
]
