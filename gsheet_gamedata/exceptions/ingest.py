"""
Sheet ingestion exceptions

Each error is raised where it is detected and travels up to the per-sheet
boundary in SheetPipeline.
"""

from typing import Optional

from .base import SheetIngestError


class InvalidUrlError(SheetIngestError):
    """Share link without a /d/{document-id} segment"""

    def __init__(self, url: str, reason: str = "spreadsheet ID segment not found"):
        super().__init__(
            message=f"Invalid Google Sheets URL: {reason}",
            code="INVALID_SHEET_URL",
            details={"url": url},
        )
        self.url = url


class TransportError(SheetIngestError):
    """Network level failure (DNS, connection reset, TLS, timeout)"""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(
            message=f"Transport error: {message}",
            code="TRANSPORT_ERROR",
            details={"url": url} if url else {},
        )
        self.url = url


class HttpStatusError(SheetIngestError):
    """4xx/5xx response from the export endpoint"""

    def __init__(self, status_code: int, reason: str, url: Optional[str] = None):
        super().__init__(
            message=f"HTTP {status_code}: {reason}",
            code="HTTP_STATUS_ERROR",
            details={"status_code": status_code, "reason": reason, "url": url},
        )
        self.status_code = status_code
        self.reason = reason
        self.url = url


class TooManyRedirectsError(SheetIngestError):
    """Redirect chain longer than the redirect budget"""

    def __init__(self, max_redirects: int, url: Optional[str] = None):
        super().__init__(
            message=f"Too many redirects (limit {max_redirects})",
            code="TOO_MANY_REDIRECTS",
            details={"max_redirects": max_redirects, "url": url},
        )
        self.max_redirects = max_redirects


class UnexpectedHtmlResponseError(SheetIngestError):
    """HTML page received where CSV was expected, with nothing left to follow"""

    def __init__(self, url: Optional[str] = None, snippet: str = ""):
        super().__init__(
            message="Received an HTML page instead of CSV. Check that the sheet is shared publicly.",
            code="UNEXPECTED_HTML_RESPONSE",
            details={"url": url, "snippet": snippet},
        )
        self.url = url


class MalformedTableError(SheetIngestError):
    """Table text that does not follow the header/type/separator/data layout"""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            message=f"Malformed table: {message}",
            code="MALFORMED_TABLE",
            details=details or {},
        )


class CodeGenerationError(SheetIngestError):
    """Schema or sheet name that cannot be rendered into source code"""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            message=f"Code generation failed: {message}",
            code="CODE_GENERATION_ERROR",
            details=details or {},
        )
