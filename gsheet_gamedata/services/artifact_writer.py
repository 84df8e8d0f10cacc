"""
Writes generated artifacts into the game project.

Files are overwritten unconditionally; parent directories are created.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path, PurePosixPath
from typing import Optional

from gsheet_gamedata.config.settings import OutputSettings

logger = logging.getLogger(__name__)


def class_import_prefix(registry_path: str, class_dir: str) -> str:
    """Relative import path from the registry module to the class directory"""
    registry_dir = PurePosixPath(registry_path).parent.as_posix() or "."
    relative = PurePosixPath(os.path.relpath(class_dir, registry_dir)).as_posix()
    if not relative.startswith("."):
        relative = f"./{relative}"
    return relative


class ArtifactWriter:
    def __init__(self, output: Optional[OutputSettings] = None):
        self.output = output or OutputSettings()

    @property
    def project_root(self) -> Path:
        return self.output.project_root

    def json_path(self, sheet_name: str) -> Path:
        return self.project_root / self.output.json_dir / f"{sheet_name}.json"

    def class_path(self, sheet_name: str) -> Path:
        return self.project_root / self.output.class_dir / f"{sheet_name}.ts"

    def registry_path(self) -> Path:
        return self.project_root / self.output.registry_path

    def registry_import_prefix(self) -> str:
        return class_import_prefix(self.output.registry_path, self.output.class_dir)

    def write_json(self, sheet_name: str, json_text: str) -> Path:
        return self._write(self.json_path(sheet_name), json_text)

    def write_sheet_class(self, sheet_name: str, source: str) -> Path:
        return self._write(self.class_path(sheet_name), source)

    def write_registry(self, source: str) -> Path:
        return self._write(self.registry_path(), source)

    def _write(self, path: Path, content: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        logger.info(f"Wrote {path}")
        return path
