"""
Google Sheets Connector - Registry

Keeps track of the configured sheet sources.

Design goals:
- JSON file on disk, pretty-printed array of {name, url}
- Order preserved; duplicate names are the caller's business
- Best-effort load: a broken file reads as an empty list and is logged
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from pydantic import TypeAdapter, ValidationError

from gsheet_gamedata.models import SheetSource

logger = logging.getLogger(__name__)

_SOURCES_ADAPTER = TypeAdapter(List[SheetSource])


class SheetSourceStore:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> List[SheetSource]:
        if not self.path.exists():
            return []
        try:
            raw = self.path.read_text(encoding="utf-8")
            return _SOURCES_ADAPTER.validate_json(raw)
        except (OSError, ValidationError) as e:
            logger.error(f"Failed to load sheet sources from {self.path}: {e}")
            return []

    def save(self, sources: List[SheetSource]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [source.model_dump() for source in sources]
        self.path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")

    def add(self, source: SheetSource) -> List[SheetSource]:
        sources = self.load()
        sources.append(source)
        self.save(sources)
        return sources

    def remove(self, index: int) -> SheetSource:
        """Remove by list position; raises IndexError when out of range"""
        sources = self.load()
        if index < 0 or index >= len(sources):
            raise IndexError(f"No sheet source at index {index} (have {len(sources)})")
        removed = sources.pop(index)
        self.save(sources)
        return removed

    def find(self, name: str) -> Optional[SheetSource]:
        for source in self.load():
            if source.name == name:
                return source
        return None
