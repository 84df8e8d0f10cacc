"""
Google Sheets Connector - Utility Functions

Share-link parsing. Everything here is pure string work; no I/O.
"""

import re
from urllib.parse import parse_qs, urlsplit

from gsheet_gamedata.exceptions import InvalidUrlError

EXPORT_URL_TEMPLATE = "https://docs.google.com/spreadsheets/d/{sheet_id}/export?format=csv&gid={gid}"
DEFAULT_GID = "0"

_NON_DIGITS = re.compile(r"\D")
_FRAGMENT_GID = re.compile(r"#gid=(\d+)")

# https: / "" / docs.google.com / spreadsheets / d / {id} / {edit?gid=...}
_GID_SEGMENT_INDEX = 6


def _split_path(sheet_url: str) -> list:
    return sheet_url.split("#", 1)[0].split("/")


def extract_sheet_id(sheet_url: str) -> str:
    """
    Extract the spreadsheet document ID from a share link

    The ID is the path segment right after the literal ``d`` segment, so
    ``/spreadsheets/d/{id}``, ``/spreadsheets/u/0/d/{id}`` and bare
    ``docs.google.com/spreadsheets/d/{id}`` all work.

    Raises:
        InvalidUrlError: no ``d`` segment, or nothing after it
    """
    segments = _split_path(sheet_url.strip())
    for i, segment in enumerate(segments):
        if segment == "d" and i + 1 < len(segments):
            sheet_id = segments[i + 1].split("?", 1)[0]
            if sheet_id:
                return sheet_id
            break
    raise InvalidUrlError(sheet_url)


def extract_gid(sheet_url: str) -> str:
    """
    Extract the worksheet gid, defaulting to ``"0"``

    Sources, lowest priority first: ``gid=`` inside the 7th path segment,
    the ``gid`` query parameter, the ``#gid=`` fragment.
    """
    sheet_url = sheet_url.strip()
    gid = DEFAULT_GID

    segments = _split_path(sheet_url)
    if len(segments) > _GID_SEGMENT_INDEX:
        parts = segments[_GID_SEGMENT_INDEX].split("gid=")
        if len(parts) > 1:
            gid = _NON_DIGITS.sub("", parts[1])

    query = urlsplit(sheet_url.split("#", 1)[0]).query
    if query:
        params = parse_qs(query, keep_blank_values=True)
        if "gid" in params:
            gid = _NON_DIGITS.sub("", params["gid"][0])

    fragment_match = _FRAGMENT_GID.search(sheet_url)
    if fragment_match:
        gid = fragment_match.group(1)

    return gid or DEFAULT_GID


def resolve_export_url(sheet_url: str) -> str:
    """
    Convert a share link into the CSV export URL

    >>> resolve_export_url("https://docs.google.com/spreadsheets/d/abc/edit#gid=42")
    'https://docs.google.com/spreadsheets/d/abc/export?format=csv&gid=42'
    """
    return EXPORT_URL_TEMPLATE.format(sheet_id=extract_sheet_id(sheet_url), gid=extract_gid(sheet_url))
