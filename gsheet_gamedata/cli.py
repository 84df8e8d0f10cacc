#!/usr/bin/env python3
"""
gsheet-gamedata command line.

Manage the configured sheet list and download sheets into a Cocos Creator
project as JSON data plus generated TypeScript accessors.

Examples:
  gsheet-gamedata add MobTable "https://docs.google.com/spreadsheets/d/<id>/edit#gid=0"
  gsheet-gamedata download MobTable
  gsheet-gamedata download-all
  gsheet-gamedata generate MobTable ./MobTable.csv
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from gsheet_gamedata.config.settings import ApplicationSettings, get_settings
from gsheet_gamedata.data_connector.google_sheets.registry import SheetSourceStore
from gsheet_gamedata.data_connector.google_sheets.utils import resolve_export_url
from gsheet_gamedata.exceptions import SheetIngestError
from gsheet_gamedata.models import SheetSource
from gsheet_gamedata.services.artifact_writer import ArtifactWriter
from gsheet_gamedata.services.class_generator import render_sheet_class, schema_from_header
from gsheet_gamedata.services.sheet_pipeline import BatchReport, SheetPipeline, SheetResult
from gsheet_gamedata.utils.app_logger import configure_logging


def _apply_overrides(settings: ApplicationSettings, args: argparse.Namespace) -> ApplicationSettings:
    if not args.project_root:
        return settings
    output = settings.output.model_copy(update={"project_root": Path(args.project_root)})
    return settings.model_copy(update={"output": output})


def _print_result(result: SheetResult) -> None:
    if result.ok:
        print(f"OK    {result.sheet_name}: {result.record_count} records -> {result.json_path}")
        if result.class_path:
            print(f"      {result.sheet_name}: class -> {result.class_path}")
    else:
        print(f"FAIL  {result.sheet_name}: {result.error_message}")


def _print_report(report: BatchReport) -> None:
    for result in report.results:
        _print_result(result)
    if report.registry_path:
        print(f"Registry -> {report.registry_path}")
    print(f"{len(report.succeeded)} succeeded, {len(report.failed)} failed")


def cmd_list(settings: ApplicationSettings, args: argparse.Namespace) -> int:
    sources = SheetSourceStore(settings.output.sources_path).load()
    if not sources:
        print("No sheets configured.")
        return 0
    for index, source in enumerate(sources):
        print(f"[{index}] {source.name}\t{source.url}")
    return 0


def cmd_add(settings: ApplicationSettings, args: argparse.Namespace) -> int:
    try:
        source = SheetSource(name=args.name, url=args.url)
    except ValidationError:
        print("Sheet name and URL are required.", file=sys.stderr)
        return 2
    sources = SheetSourceStore(settings.output.sources_path).add(source)
    print(f"Added '{source.name}' ({len(sources)} sheets configured)")
    return 0


def cmd_remove(settings: ApplicationSettings, args: argparse.Namespace) -> int:
    try:
        removed = SheetSourceStore(settings.output.sources_path).remove(args.index)
    except IndexError as e:
        print(str(e), file=sys.stderr)
        return 2
    print(f"Removed '{removed.name}'")
    return 0


def cmd_resolve(settings: ApplicationSettings, args: argparse.Namespace) -> int:
    try:
        print(resolve_export_url(args.url))
    except SheetIngestError as e:
        print(str(e), file=sys.stderr)
        return 1
    return 0


async def _download(settings: ApplicationSettings, source: SheetSource) -> SheetResult:
    async with SheetPipeline(settings) as pipeline:
        return await pipeline.download_sheet(source)


async def _download_all(
    settings: ApplicationSettings, sources: List[SheetSource], generate_code: bool, write_registry: bool
) -> BatchReport:
    async with SheetPipeline(settings) as pipeline:
        return await pipeline.download_all(sources, generate_code=generate_code, write_registry=write_registry)


def cmd_download(settings: ApplicationSettings, args: argparse.Namespace) -> int:
    source = SheetSourceStore(settings.output.sources_path).find(args.name)
    if source is None:
        print(f"No configured sheet named '{args.name}'", file=sys.stderr)
        return 2
    result = asyncio.run(_download(settings, source))
    _print_result(result)
    return 0 if result.ok else 1


def cmd_download_all(settings: ApplicationSettings, args: argparse.Namespace) -> int:
    sources = SheetSourceStore(settings.output.sources_path).load()
    if not sources:
        print("No sheets configured.")
        return 0
    report = asyncio.run(
        _download_all(settings, sources, generate_code=not args.no_code, write_registry=not args.skip_registry)
    )
    _print_report(report)
    return 0 if report.ok else 1


def cmd_generate(settings: ApplicationSettings, args: argparse.Namespace) -> int:
    """Render a class from a local CSV export without downloading anything."""
    try:
        text = Path(args.csv_file).read_text(encoding="utf-8")
        schema = schema_from_header(text, delimiter=settings.google_sheets.csv_delimiter)
        path = ArtifactWriter(settings.output).write_sheet_class(args.name, render_sheet_class(args.name, schema))
    except (SheetIngestError, OSError) as e:
        print(f"FAIL  {args.name}: {e}", file=sys.stderr)
        return 1
    print(f"OK    {args.name}: class -> {path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gsheet-gamedata",
        description="Download Google Sheets game data and generate Cocos Creator accessors.",
    )
    parser.add_argument("--project-root", default=None, help="Game project root (default: GSHEET_PROJECT_ROOT or .)")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR")
    parser.add_argument("--log-json", action="store_true", help="Emit JSON log lines")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("list", help="Show configured sheets")
    p.set_defaults(func=cmd_list)

    p = sub.add_parser("add", help="Add a sheet")
    p.add_argument("name", help="Sheet name (used as class and file name)")
    p.add_argument("url", help="Google Sheets share link")
    p.set_defaults(func=cmd_add)

    p = sub.add_parser("remove", help="Remove a sheet by list index")
    p.add_argument("index", type=int)
    p.set_defaults(func=cmd_remove)

    p = sub.add_parser("resolve", help="Print the CSV export URL for a share link")
    p.add_argument("url")
    p.set_defaults(func=cmd_resolve)

    p = sub.add_parser("download", help="Download one configured sheet (JSON + class)")
    p.add_argument("name")
    p.set_defaults(func=cmd_download)

    p = sub.add_parser("download-all", help="Download every configured sheet, then regenerate the registry")
    p.add_argument(
        "--no-code", action="store_true", help="Write JSON only: no per-sheet classes and no registry"
    )
    p.add_argument(
        "--skip-registry", action="store_true", help="Write JSON and per-sheet classes, leave the registry untouched"
    )
    p.set_defaults(func=cmd_download_all)

    p = sub.add_parser("generate", help="Generate a class from a local CSV export")
    p.add_argument("name")
    p.add_argument("csv_file")
    p.set_defaults(func=cmd_generate)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = _apply_overrides(get_settings(), args)
    configure_logging(args.log_level or settings.log_level, json_format=args.log_json or settings.log_json)
    return args.func(settings, args)


if __name__ == "__main__":
    raise SystemExit(main())
