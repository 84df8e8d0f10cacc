"""
TypeScript class generator for Cocos Creator game data.

Pure renderers: schema in, source text out. Nothing here touches the
filesystem (see artifact_writer), so identical input always yields
byte-identical output.
"""

from __future__ import annotations

import re
from string import Template
from typing import Dict, Iterable, List

from gsheet_gamedata.exceptions import CodeGenerationError
from gsheet_gamedata.models import ColumnSchema, DeclaredType, FieldSpec
from gsheet_gamedata.services.table_parser import TableParseOptions, TableParser

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_RESERVED_WORDS = frozenset(
    {
        "break", "case", "catch", "class", "const", "continue", "debugger", "default", "delete",
        "do", "else", "enum", "export", "extends", "false", "finally", "for", "function", "if",
        "import", "in", "instanceof", "new", "null", "return", "super", "switch", "this", "throw",
        "true", "try", "typeof", "var", "void", "while", "with",
    }
)

TS_TYPES: Dict[DeclaredType, str] = {
    DeclaredType.INT: "number",
    DeclaredType.LONG: "number",
    DeclaredType.DOUBLE: "number",
    DeclaredType.FLOAT: "number",
    DeclaredType.BOOL: "boolean",
    DeclaredType.STRING: "string",
    DeclaredType.UNKNOWN: "any",
}

TS_DEFAULTS: Dict[DeclaredType, str] = {
    DeclaredType.INT: "0",
    DeclaredType.LONG: "0",
    DeclaredType.DOUBLE: "0",
    DeclaredType.FLOAT: "0",
    DeclaredType.BOOL: "false",
    DeclaredType.STRING: "''",
    DeclaredType.UNKNOWN: "null",
}

SHEET_CLASS_TEMPLATE = Template("""\
import { _decorator, Component } from 'cc';
const { ccclass, property } = _decorator;

@ccclass('${sheet}Data')
export class ${sheet}Data {
${properties}}

@ccclass('${sheet}')
export class ${sheet} extends Component {
    public static readonly TABLE_NAME = '${sheet}';

    private _datas: Map<string, ${sheet}Data> = new Map();
    private _datasArray: ${sheet}Data[] = [];

    public init(json: string) {
        const parsed = JSON.parse(json);
        this._datasArray = parsed.Datas || [];

        this._datas.clear();
        for (const data of this._datasArray) {
            this._datas.set(String(${key_access}), data);
        }
    }

    public get(row: string | number, col: string): any {
        const data = this.getData(row);
        if (!data) return null;

        switch (col) {
${get_cases}            default: return null;
        }
    }

    public getData(row: string | number): ${sheet}Data | null {
        if (typeof row === 'string') {
            return this._datas.get(row) || null;
        } else {
            return this._datasArray[row] || null;
        }
    }

    public containsColumnKey(name: string): boolean {
        switch (name) {
${contains_cases}            default: return false;
        }
    }

    public get count(): number {
        return this._datasArray.length;
    }

    public containsKey(key: string): boolean {
        return this._datas.has(key);
    }
}
""")

REGISTRY_TEMPLATE = Template("""\
import { _decorator, Component, resources, JsonAsset, Node, director } from 'cc';
${imports}const { ccclass } = _decorator;

export type GameDataTable = ${table_union};

type TableCtor<T extends GameDataTable> = (new () => T) & { readonly TABLE_NAME: string };

const TABLE_NAMES: readonly string[] = [${table_names}];

const TABLE_FACTORIES: { readonly [tableName: string]: (json: string) => GameDataTable } = {
${factories}};

@ccclass('GameDataManager')
export class GameDataManager extends Component {
    private static _instance: GameDataManager | null = null;
    private _tables: Map<string, GameDataTable> = new Map();

    public static get I(): GameDataManager {
        return GameDataManager.getOrCreate();
    }

    public static getOrCreate(): GameDataManager {
        if (!GameDataManager._instance) {
            const node = new Node('GameDataManager');
            GameDataManager._instance = node.addComponent(GameDataManager);
            director.addPersistRootNode(node);
        }
        return GameDataManager._instance;
    }

    // usage: GameDataManager.getTable(MobTable)
    public static getTable<T extends GameDataTable>(ctor: TableCtor<T>): T | null {
        return (GameDataManager.I._tables.get(ctor.TABLE_NAME) as T) || null;
    }

    public static containsTable(tableName: string): boolean {
        return GameDataManager.I._tables.has(tableName);
    }

    public static createTable(tableName: string, json: string): GameDataTable | null {
        const factory = TABLE_FACTORIES[tableName];
        return factory ? factory(json) : null;
    }

    public static localAllLoad(complete?: () => void) {
        const manager = GameDataManager.getOrCreate();
        const totalCount = TABLE_NAMES.length;
        let settledCount = 0;

        if (totalCount === 0) {
            if (complete) complete();
            return;
        }

        const settle = () => {
            settledCount++;
            if (settledCount >= totalCount) {
                if (complete) complete();
            }
        };

        for (const tableName of TABLE_NAMES) {
            resources.load('${resource_prefix}/' + tableName, JsonAsset, (err, asset) => {
                if (err) {
                    console.error(tableName + ' resource load failed:', err);
                } else if (asset) {
                    const table = GameDataManager.createTable(tableName, JSON.stringify(asset.json));
                    if (table) {
                        manager._tables.set(tableName, table);
                        console.log(tableName + ' table ready, rows:', table.count);
                    }
                } else {
                    console.warn(tableName + ' resource not found');
                }
                settle();
            });
        }
    }
}
""")


def is_identifier(name: str) -> bool:
    return bool(_IDENTIFIER.match(name)) and name not in _RESERVED_WORDS


def ts_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n")
    return f"'{escaped}'"


def _property_name(name: str) -> str:
    return name if is_identifier(name) else ts_string(name)


def _member_access(target: str, name: str) -> str:
    return f"{target}.{name}" if is_identifier(name) else f"{target}[{ts_string(name)}]"


def _require_sheet_identifier(sheet_name: str) -> None:
    if not is_identifier(sheet_name):
        raise CodeGenerationError(
            f"sheet name '{sheet_name}' is not a valid class name",
            {"sheet": sheet_name},
        )


def ts_type(field: FieldSpec) -> str:
    base = TS_TYPES[field.declared_type]
    return f"{base}[]" if field.is_array else base


def ts_default(field: FieldSpec) -> str:
    return "[]" if field.is_array else TS_DEFAULTS[field.declared_type]


def schema_from_header(text: str, delimiter: str = ",") -> ColumnSchema:
    """Schema from raw table text; only the two header rows are read."""
    return TableParser(TableParseOptions(delimiter=delimiter)).parse_schema(text)


def render_sheet_class(sheet_name: str, schema: ColumnSchema) -> str:
    """Render ``{Sheet}Data`` plus the ``{Sheet}`` lookup component."""
    _require_sheet_identifier(sheet_name)

    properties: List[str] = []
    get_cases: List[str] = []
    contains_cases: List[str] = []
    for field in schema.fields:
        properties.append(
            f"    @property\n    public {_property_name(field.name)}: {ts_type(field)} = {ts_default(field)};\n"
        )
        label = ts_string(field.name)
        get_cases.append(f"            case {label}: return {_member_access('data', field.name)};\n")
        contains_cases.append(f"            case {label}: return true;\n")

    return SHEET_CLASS_TEMPLATE.substitute(
        sheet=sheet_name,
        properties="".join(properties),
        key_access=_member_access("data", schema.first_property),
        get_cases="".join(get_cases),
        contains_cases="".join(contains_cases),
    )


def render_registry(
    sheet_names: Iterable[str],
    class_import_prefix: str = "./GameData",
    resource_prefix: str = "json",
) -> str:
    """Render the ``GameDataManager`` registry over every generated sheet class."""
    names = list(sheet_names)
    for name in names:
        _require_sheet_identifier(name)

    prefix = class_import_prefix.rstrip("/")
    imports = "".join(f"import {{ {name} }} from '{prefix}/{name}';\n" for name in names)
    factories = "".join(
        f"    {ts_string(name)}: (json: string) => {{\n"
        f"        const table = new {name}();\n"
        f"        table.init(json);\n"
        f"        return table;\n"
        f"    }},\n"
        for name in names
    )

    return REGISTRY_TEMPLATE.substitute(
        imports=imports,
        table_union=" | ".join(names) if names else "never",
        table_names=", ".join(ts_string(name) for name in names),
        factories=factories,
        resource_prefix=resource_prefix.strip("/"),
    )
