from __future__ import annotations

import os
from pathlib import Path

import pytest

# Settings classes read .env at import time; keep a developer's .env out of the suite.
os.environ.setdefault("GSHEET_DISABLE_DOTENV", "1")

MOB_TABLE_CSV = (
    "ID,Name,HP,Skill,Skill\r\n"
    "int,string,int,string,string\r\n"
    "key,display name,hit points,skills,\r\n"
    "1,Slime,10,Jump,Bite\r\n"
    "2,Goblin,25,Slash,\r\n"
)

DROP_TABLE_CSV = (
    "MobID,Drop,Rate\n"
    "int,string,float\n"
    ",,\n"
    "100,Potion,0.5\n"
    "100,Elixir,0.25\n"
    "101,Herb,1\n"
)


@pytest.fixture
def mob_table_csv() -> str:
    return MOB_TABLE_CSV


@pytest.fixture
def drop_table_csv() -> str:
    return DROP_TABLE_CSV


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "game"
    root.mkdir()
    return root
