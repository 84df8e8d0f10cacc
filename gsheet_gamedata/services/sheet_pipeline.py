"""
Sheet pipeline: resolve -> fetch -> parse -> write JSON -> generate class.

One sheet is one awaitable unit of work. Batches run sheets strictly one
after another; a failing sheet is logged, recorded in the BatchReport and
the batch moves on to the next one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from gsheet_gamedata.config.settings import ApplicationSettings, get_settings
from gsheet_gamedata.data_connector.google_sheets.service import GoogleSheetsExportService
from gsheet_gamedata.data_connector.google_sheets.utils import resolve_export_url
from gsheet_gamedata.exceptions import SheetIngestError
from gsheet_gamedata.models import Dataset, SheetSource
from gsheet_gamedata.services.artifact_writer import ArtifactWriter
from gsheet_gamedata.services.class_generator import is_identifier, render_registry, render_sheet_class
from gsheet_gamedata.services.table_parser import TableParseOptions, TableParser

logger = logging.getLogger(__name__)


@dataclass
class SheetResult:
    """Terminal outcome of one sheet"""

    sheet_name: str
    json_path: Optional[Path] = None
    class_path: Optional[Path] = None
    record_count: int = 0
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_message(self) -> str:
        return str(self.error) if self.error else ""


@dataclass
class BatchReport:
    results: List[SheetResult] = field(default_factory=list)
    registry_path: Optional[Path] = None

    @property
    def succeeded(self) -> List[SheetResult]:
        return [r for r in self.results if r.ok]

    @property
    def failed(self) -> List[SheetResult]:
        return [r for r in self.results if not r.ok]

    @property
    def ok(self) -> bool:
        return not self.failed


class SheetPipeline:
    def __init__(
        self,
        settings: Optional[ApplicationSettings] = None,
        *,
        fetcher: Optional[GoogleSheetsExportService] = None,
        writer: Optional[ArtifactWriter] = None,
    ):
        self.settings = settings or get_settings()
        self.fetcher = fetcher or GoogleSheetsExportService(self.settings.google_sheets)
        self.writer = writer or ArtifactWriter(self.settings.output)
        self.parser = TableParser(TableParseOptions(delimiter=self.settings.google_sheets.csv_delimiter))

    async def __aenter__(self) -> "SheetPipeline":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self.fetcher.close()

    async def fetch_dataset(self, source: SheetSource) -> Dataset:
        """Resolve, download and parse one sheet; raises SheetIngestError subclasses."""
        export_url = resolve_export_url(source.url)
        logger.info(f"[{source.name}] export URL: {export_url}")
        text = await self.fetcher.fetch_csv(export_url)
        return self.parser.parse(text, sheet_name=source.name)

    async def download_sheet(self, source: SheetSource, *, generate_code: bool = True) -> SheetResult:
        """
        Run one sheet end to end and report its outcome.

        Ingestion and filesystem errors are captured in the result; the
        caller never sees them raised.
        """
        result = SheetResult(sheet_name=source.name)
        try:
            dataset = await self.fetch_dataset(source)
            # Render before writing so a bad sheet name leaves no partial output
            class_source = render_sheet_class(source.name, dataset.table_schema) if generate_code else None

            result.json_path = self.writer.write_json(source.name, dataset.to_json())
            if class_source is not None:
                result.class_path = self.writer.write_sheet_class(source.name, class_source)
            result.record_count = dataset.count
        except (SheetIngestError, OSError) as e:
            logger.error(f"[{source.name}] download failed: {e}")
            result.error = e
            return result

        logger.info(f"[{source.name}] done, {result.record_count} records")
        return result

    async def download_all(
        self,
        sources: List[SheetSource],
        *,
        generate_code: bool = True,
        write_registry: bool = True,
    ) -> BatchReport:
        """
        Download every source in order.

        With ``generate_code`` and ``write_registry`` the registry module is
        regenerated over every configured sheet whose class exists: this
        run's successes plus classes left by earlier runs for sheets that
        failed now.
        """
        report = BatchReport()
        for source in sources:
            report.results.append(await self.download_sheet(source, generate_code=generate_code))

        if generate_code and write_registry:
            sheet_names = self.registry_sheet_names(sources, report)
            if sheet_names:
                registry_source = render_registry(
                    sheet_names,
                    class_import_prefix=self.writer.registry_import_prefix(),
                    resource_prefix=self.settings.output.resource_prefix,
                )
                report.registry_path = self.writer.write_registry(registry_source)

        if report.failed:
            logger.warning(
                f"{len(report.failed)} of {len(report.results)} sheets failed: "
                + ", ".join(r.sheet_name for r in report.failed)
            )
        return report

    def registry_sheet_names(self, sources: List[SheetSource], report: BatchReport) -> List[str]:
        """Configured sheet names, in order and de-duplicated, that have a generated class on disk"""
        succeeded = {r.sheet_name for r in report.succeeded}
        names = []
        for name in dict.fromkeys(source.name for source in sources):
            if name in succeeded:
                names.append(name)
            elif is_identifier(name) and self.writer.class_path(name).is_file():
                logger.warning(f"[{name}] keeping class from a previous run in the registry")
                names.append(name)
        return names
