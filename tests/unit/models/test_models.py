import pytest
from pydantic import ValidationError

from gsheet_gamedata.models import ColumnSchema, Dataset, DeclaredType, FieldSpec, SheetSource


class TestDeclaredType:
    @pytest.mark.parametrize(
        "token, expected",
        [
            ("int", DeclaredType.INT),
            (" LONG ", DeclaredType.LONG),
            ("Double", DeclaredType.DOUBLE),
            ("float", DeclaredType.FLOAT),
            ("string", DeclaredType.STRING),
            ("bool", DeclaredType.BOOL),
            ("boolean", DeclaredType.UNKNOWN),
            ("", DeclaredType.UNKNOWN),
            (None, DeclaredType.UNKNOWN),
            ("unknown", DeclaredType.UNKNOWN),
        ],
    )
    def test_parse(self, token, expected):
        assert DeclaredType.parse(token) is expected

    def test_numeric_groups(self):
        assert DeclaredType.LONG.is_integer and DeclaredType.LONG.is_numeric
        assert DeclaredType.FLOAT.is_floating
        assert not DeclaredType.BOOL.is_numeric


class TestSheetSource:
    def test_fields_are_stripped(self):
        source = SheetSource(name=" MobTable ", url=" https://docs.google.com/spreadsheets/d/x/edit ")
        assert source.name == "MobTable"
        assert source.url == "https://docs.google.com/spreadsheets/d/x/edit"

    @pytest.mark.parametrize("name, url", [("", "https://x"), ("Mob", "   ")])
    def test_empty_values_rejected(self, name, url):
        with pytest.raises(ValidationError):
            SheetSource(name=name, url=url)


def test_dataset_payload():
    schema = ColumnSchema(
        key_column="ID",
        key_type=DeclaredType.INT,
        fields=[FieldSpec(name="Name", declared_type=DeclaredType.STRING, indices=[0])],
    )
    dataset = Dataset(table_schema=schema, records=[{"ID": "1", "Name": "Slime"}])

    assert dataset.count == 1
    assert dataset.to_payload() == {"Datas": [{"ID": "1", "Name": "Slime"}]}
    assert dataset.to_json() == '{\n  "Datas": [\n    {\n      "ID": "1",\n      "Name": "Slime"\n    }\n  ]\n}'
