"""
SheetPipeline tests with an in-memory fetcher
"""

from __future__ import annotations

import json
from typing import Dict, List, Union

import httpx
import pytest

from gsheet_gamedata.config.settings import ApplicationSettings, OutputSettings
from gsheet_gamedata.data_connector.google_sheets.service import GoogleSheetsExportService
from gsheet_gamedata.exceptions import HttpStatusError, InvalidUrlError, MalformedTableError, TransportError
from gsheet_gamedata.models import SheetSource
from gsheet_gamedata.services.sheet_pipeline import SheetPipeline


def _url(doc_id: str) -> str:
    return f"https://docs.google.com/spreadsheets/d/{doc_id}/edit#gid=0"


def _export(doc_id: str) -> str:
    return f"https://docs.google.com/spreadsheets/d/{doc_id}/export?format=csv&gid=0"


class FakeFetcher:
    def __init__(self, responses: Dict[str, Union[str, Exception]]):
        self.responses = responses
        self.requested: List[str] = []
        self.closed = False

    async def fetch_csv(self, export_url: str) -> str:
        self.requested.append(export_url)
        response = self.responses[export_url]
        if isinstance(response, Exception):
            raise response
        return response

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def app_settings(project_root) -> ApplicationSettings:
    return ApplicationSettings(output=OutputSettings(project_root=project_root))


@pytest.mark.asyncio
async def test_download_sheet_writes_json_and_class(app_settings, project_root, mob_table_csv):
    fetcher = FakeFetcher({_export("mob"): mob_table_csv})

    async with SheetPipeline(app_settings, fetcher=fetcher) as pipeline:
        result = await pipeline.download_sheet(SheetSource(name="MobTable", url=_url("mob")))

    assert result.ok
    assert result.record_count == 2
    assert result.json_path == project_root / "assets/resources/json/MobTable.json"
    assert result.class_path == project_root / "assets/Scripts/GameData/MobTable.ts"
    assert json.loads(result.json_path.read_text(encoding="utf-8"))["Datas"][0]["Skill"] == ["Jump", "Bite"]
    assert "export class MobTable extends Component" in result.class_path.read_text(encoding="utf-8")
    assert fetcher.closed


@pytest.mark.asyncio
async def test_download_sheet_without_code(app_settings, mob_table_csv):
    fetcher = FakeFetcher({_export("mob"): mob_table_csv})
    pipeline = SheetPipeline(app_settings, fetcher=fetcher)

    result = await pipeline.download_sheet(SheetSource(name="MobTable", url=_url("mob")), generate_code=False)

    assert result.ok
    assert result.class_path is None


@pytest.mark.asyncio
async def test_invalid_url_is_captured(app_settings):
    fetcher = FakeFetcher({})
    pipeline = SheetPipeline(app_settings, fetcher=fetcher)

    result = await pipeline.download_sheet(SheetSource(name="MobTable", url="https://example.com/nope"))

    assert not result.ok
    assert isinstance(result.error, InvalidUrlError)
    assert fetcher.requested == []


@pytest.mark.asyncio
async def test_bad_sheet_name_leaves_no_output(app_settings, project_root, mob_table_csv):
    fetcher = FakeFetcher({_export("mob"): mob_table_csv})
    pipeline = SheetPipeline(app_settings, fetcher=fetcher)

    result = await pipeline.download_sheet(SheetSource(name="Mob Table", url=_url("mob")))

    assert not result.ok
    assert result.error.code == "CODE_GENERATION_ERROR"
    assert not (project_root / "assets").exists()


@pytest.mark.asyncio
async def test_download_all_is_sequential_and_isolates_failures(
    app_settings, project_root, mob_table_csv, drop_table_csv
):
    fetcher = FakeFetcher(
        {
            _export("mob"): mob_table_csv,
            _export("gone"): HttpStatusError(404, "Not Found"),
            _export("short"): "ID,Name\nint,string",
            _export("drop"): drop_table_csv,
        }
    )
    sources = [
        SheetSource(name="MobTable", url=_url("mob")),
        SheetSource(name="GoneTable", url=_url("gone")),
        SheetSource(name="ShortTable", url=_url("short")),
        SheetSource(name="DropTable", url=_url("drop")),
    ]

    async with SheetPipeline(app_settings, fetcher=fetcher) as pipeline:
        report = await pipeline.download_all(sources)

    assert fetcher.requested == [_export("mob"), _export("gone"), _export("short"), _export("drop")]
    assert [r.sheet_name for r in report.results] == ["MobTable", "GoneTable", "ShortTable", "DropTable"]
    assert [r.sheet_name for r in report.succeeded] == ["MobTable", "DropTable"]
    assert isinstance(report.failed[0].error, HttpStatusError)
    assert isinstance(report.failed[1].error, MalformedTableError)
    assert not report.ok

    registry = report.registry_path.read_text(encoding="utf-8")
    assert report.registry_path == project_root / "assets/Scripts/GameDataManager.ts"
    assert "const TABLE_NAMES: readonly string[] = ['MobTable', 'DropTable'];" in registry
    assert "import { MobTable } from './GameData/MobTable';" in registry
    assert "GoneTable" not in registry
    assert (project_root / "assets/resources/json/DropTable.json").exists()


@pytest.mark.asyncio
async def test_download_all_dedupes_registry_names(app_settings, mob_table_csv):
    fetcher = FakeFetcher({_export("mob"): mob_table_csv})
    sources = [SheetSource(name="MobTable", url=_url("mob")), SheetSource(name="MobTable", url=_url("mob"))]

    report = await SheetPipeline(app_settings, fetcher=fetcher).download_all(sources)

    assert len(report.results) == 2
    assert "const TABLE_NAMES: readonly string[] = ['MobTable'];" in report.registry_path.read_text(encoding="utf-8")


@pytest.mark.asyncio
async def test_download_all_without_code_skips_registry(app_settings, project_root, mob_table_csv):
    fetcher = FakeFetcher({_export("mob"): mob_table_csv})

    report = await SheetPipeline(app_settings, fetcher=fetcher).download_all(
        [SheetSource(name="MobTable", url=_url("mob"))], generate_code=False
    )

    assert report.ok
    assert report.registry_path is None
    assert not (project_root / "assets/Scripts").exists()


@pytest.mark.asyncio
async def test_all_failed_writes_no_registry(app_settings):
    fetcher = FakeFetcher({_export("gone"): HttpStatusError(500, "Internal Server Error")})

    report = await SheetPipeline(app_settings, fetcher=fetcher).download_all(
        [SheetSource(name="GoneTable", url=_url("gone"))]
    )

    assert report.registry_path is None
    assert report.failed[0].error_message == "HTTP 500: Internal Server Error"


@pytest.mark.asyncio
async def test_unusable_redirect_fails_only_that_sheet(app_settings, project_root, mob_table_csv):
    def handler(request: httpx.Request) -> httpx.Response:
        if "/d/broken/" in request.url.path:
            return httpx.Response(302, headers={"Location": "http://[broken/x"})
        return httpx.Response(200, text=mob_table_csv)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    fetcher = GoogleSheetsExportService(app_settings.google_sheets, client=client)
    sources = [
        SheetSource(name="BrokenTable", url=_url("broken")),
        SheetSource(name="MobTable", url=_url("mob")),
    ]

    async with SheetPipeline(app_settings, fetcher=fetcher) as pipeline:
        report = await pipeline.download_all(sources)
    await client.aclose()

    assert [r.sheet_name for r in report.results] == ["BrokenTable", "MobTable"]
    assert isinstance(report.failed[0].error, TransportError)
    assert report.succeeded[0].record_count == 2
    assert "['MobTable']" in report.registry_path.read_text(encoding="utf-8")


@pytest.mark.asyncio
async def test_failed_sheet_with_previous_class_stays_registered(app_settings, project_root, mob_table_csv):
    previous_class = project_root / "assets/Scripts/GameData/DropTable.ts"
    previous_class.parent.mkdir(parents=True)
    previous_class.write_text("// generated by an earlier run\n", encoding="utf-8")
    fetcher = FakeFetcher(
        {
            _export("drop"): HttpStatusError(500, "Internal Server Error"),
            _export("mob"): mob_table_csv,
            _export("gone"): HttpStatusError(404, "Not Found"),
        }
    )
    sources = [
        SheetSource(name="DropTable", url=_url("drop")),
        SheetSource(name="MobTable", url=_url("mob")),
        SheetSource(name="GoneTable", url=_url("gone")),
    ]

    report = await SheetPipeline(app_settings, fetcher=fetcher).download_all(sources)

    registry = report.registry_path.read_text(encoding="utf-8")
    assert "const TABLE_NAMES: readonly string[] = ['DropTable', 'MobTable'];" in registry
    assert "import { DropTable } from './GameData/DropTable';" in registry
    assert previous_class.read_text(encoding="utf-8") == "// generated by an earlier run\n"


@pytest.mark.asyncio
async def test_skip_registry_still_writes_classes(app_settings, project_root, mob_table_csv):
    fetcher = FakeFetcher({_export("mob"): mob_table_csv})

    report = await SheetPipeline(app_settings, fetcher=fetcher).download_all(
        [SheetSource(name="MobTable", url=_url("mob"))], write_registry=False
    )

    assert report.registry_path is None
    assert report.results[0].class_path.exists()
    assert not (project_root / "assets/Scripts/GameDataManager.ts").exists()
