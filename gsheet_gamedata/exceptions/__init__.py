"""
Domain exceptions
"""

from .base import DomainException, SheetIngestError
from .ingest import (
    CodeGenerationError,
    HttpStatusError,
    InvalidUrlError,
    MalformedTableError,
    TooManyRedirectsError,
    TransportError,
    UnexpectedHtmlResponseError,
)

__all__ = [
    # Base
    "DomainException",
    "SheetIngestError",

    # Ingestion
    "InvalidUrlError",
    "TransportError",
    "HttpStatusError",
    "TooManyRedirectsError",
    "UnexpectedHtmlResponseError",
    "MalformedTableError",
    "CodeGenerationError",
]
