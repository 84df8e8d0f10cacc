"""
Google Sheets Connector - Service Layer (export fetcher).

Responsible only for I/O: GET the CSV export URL and hand back the raw body.
docs.google.com answers export requests with a chain of 302s and, when a
sheet is private or the link is stale, with a 200 HTML page instead of CSV.
Redirects are followed by hand so that the hop budget also covers links
embedded in those HTML pages.
"""

from __future__ import annotations

import logging
import re
from typing import Optional
from urllib.parse import urljoin

import httpx

from gsheet_gamedata.config.settings import GoogleSheetsSettings
from gsheet_gamedata.exceptions import (
    HttpStatusError,
    TooManyRedirectsError,
    TransportError,
    UnexpectedHtmlResponseError,
)

logger = logging.getLogger(__name__)

_HREF_PATTERN = re.compile(r'href="([^"]+)"', re.IGNORECASE)
_HTML_MARKERS = ("<!DOCTYPE", "<HTML>")


def looks_like_html(body: str) -> bool:
    return body.strip().startswith("<") or any(marker in body for marker in _HTML_MARKERS)


def extract_html_redirect(body: str) -> Optional[str]:
    """First ``href="..."`` target in an HTML body, ``&amp;`` decoded"""
    match = _HREF_PATTERN.search(body)
    if not match:
        return None
    return _decode_location(match.group(1))


def _decode_location(location: str) -> str:
    return location.replace("&amp;", "&")


def _resolve_target(current_url: str, location: str) -> str:
    """Absolute redirect target; unparsable targets raise TransportError"""
    try:
        return urljoin(current_url, location)
    except ValueError as e:
        raise TransportError(f"invalid redirect target {location!r}: {e}", url=current_url) from e


class GoogleSheetsExportService:
    """Fetches CSV exports of public Google Sheets (read-only)."""

    def __init__(
        self,
        settings: Optional[GoogleSheetsSettings] = None,
        *,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or GoogleSheetsSettings()
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> "GoogleSheetsExportService":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.settings.request_timeout,
                follow_redirects=False,
                headers={"User-Agent": self.settings.user_agent},
            )
            self._owns_client = True
        return self._client

    async def fetch_csv(self, export_url: str) -> str:
        """
        Download the export body, following redirects within the budget.

        Returns:
            Raw delimited text

        Raises:
            TooManyRedirectsError: more hops than ``max_redirects``
            HttpStatusError: 4xx/5xx response
            UnexpectedHtmlResponseError: HTML page with no link left to follow
            TransportError: DNS/connection/TLS/timeout failure
        """
        client = await self._get_client()
        max_redirects = self.settings.max_redirects
        current_url = export_url
        redirect_count = 0

        while True:
            response = await self._get(client, current_url)
            logger.debug(f"Response {response.status_code} {response.reason_phrase} for {current_url}")

            location = response.headers.get("location")
            if 300 <= response.status_code < 400 and location:
                target = _resolve_target(current_url, _decode_location(location))
                redirect_count += 1
                if redirect_count > max_redirects:
                    raise TooManyRedirectsError(max_redirects, url=export_url)
                logger.info(f"Redirect {redirect_count}: {current_url} -> {target}")
                current_url = target
                continue

            if response.status_code >= 400:
                raise HttpStatusError(response.status_code, response.reason_phrase, url=current_url)

            body = response.text
            if looks_like_html(body):
                logger.warning(f"HTML response received from {current_url}")
                logger.debug(body[:200])
                href = extract_html_redirect(body)
                if href and redirect_count < max_redirects:
                    target = _resolve_target(current_url, href)
                    redirect_count += 1
                    logger.info(f"Redirect {redirect_count} (from HTML): {current_url} -> {target}")
                    current_url = target
                    continue
                raise UnexpectedHtmlResponseError(url=current_url, snippet=body[:200])

            logger.info(f"CSV download complete, {len(body)} chars")
            return body

    async def _get(self, client: httpx.AsyncClient, url: str) -> httpx.Response:
        try:
            return await client.get(url, headers={"User-Agent": self.settings.user_agent})
        except (httpx.RequestError, httpx.InvalidURL, ValueError) as e:
            raise TransportError(str(e) or type(e).__name__, url=url) from e

    async def close(self) -> None:
        if self._client and self._owns_client:
            await self._client.aclose()
        self._client = None
