import json
import logging

import pytest

from gsheet_gamedata.data_connector.google_sheets.registry import SheetSourceStore
from gsheet_gamedata.models import SheetSource

MOB = SheetSource(name="MobTable", url="https://docs.google.com/spreadsheets/d/mob/edit#gid=0")
DROP = SheetSource(name="DropTable", url="https://docs.google.com/spreadsheets/d/drop/edit#gid=5")


@pytest.fixture
def store(tmp_path) -> SheetSourceStore:
    return SheetSourceStore(tmp_path / "extensions" / "gsheet" / "data" / "sheets.json")


def test_missing_file_loads_empty(store):
    assert store.load() == []


def test_save_and_load_preserve_order(store):
    store.save([MOB, DROP])

    assert store.load() == [MOB, DROP]
    assert json.loads(store.path.read_text(encoding="utf-8")) == [
        {"name": "MobTable", "url": MOB.url},
        {"name": "DropTable", "url": DROP.url},
    ]
    assert store.path.read_text(encoding="utf-8").startswith('[\n  {\n    "name": "MobTable"')


def test_add_remove_find(store):
    store.add(MOB)
    assert store.add(DROP) == [MOB, DROP]
    assert store.find("DropTable") == DROP
    assert store.find("Missing") is None

    assert store.remove(0) == MOB
    assert store.load() == [DROP]


def test_duplicate_names_are_kept(store):
    store.add(MOB)
    store.add(MOB)
    assert len(store.load()) == 2


@pytest.mark.parametrize("index", [-1, 1])
def test_remove_out_of_range(store, index):
    store.add(MOB)
    with pytest.raises(IndexError):
        store.remove(index)
    assert store.load() == [MOB]


def test_corrupt_file_loads_empty_and_logs(store, caplog):
    store.path.parent.mkdir(parents=True)
    store.path.write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.ERROR):
        assert store.load() == []

    assert "Failed to load sheet sources" in caplog.text
