"""
Base domain exceptions
"""

from typing import Optional


class DomainException(Exception):
    """Base class for every error raised by gsheet-gamedata"""

    def __init__(self, message: str, code: str = "DOMAIN_ERROR",
                 details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "details": self.details}


class SheetIngestError(DomainException):
    """Failure of a single sheet's download/parse/generate run"""

    def __init__(self, message: str, code: str = "SHEET_INGEST_ERROR",
                 details: Optional[dict] = None):
        super().__init__(message=message, code=code, details=details)
