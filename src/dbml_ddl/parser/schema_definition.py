"""Direct schema definition parser — handles JSON and YAML input.

Accepts the simplified format:
    { "tables": [{ "name": "t", "columns": ["id:int", {"name": "c", "type": "text"}] }] }

Column entries are either ``"name:type"`` strings or mappings with ``name``,
``type`` and the optional flags ``not_null``, ``primary_key`` (or ``pk``),
``unique``, ``default`` and ``constraints``.
"""

from __future__ import annotations

import json
from typing import Any

import yaml

from dbml_ddl.parser.base import (
    BaseParser,
    InputFormat,
    Schema,
    SchemaDefinitionError,
)


class SchemaDefinitionParser(BaseParser):
    """Parses JSON or YAML schema definitions."""

    def can_parse(self, content: str) -> bool:
        stripped = content.strip()
        if stripped.startswith("{"):
            try:
                data = json.loads(stripped)
                return isinstance(data, dict) and "tables" in data
            except json.JSONDecodeError:
                return False
        return "tables:" in content

    def parse(self, content: str, **kwargs) -> Schema:
        data = self._load(content)
        if not isinstance(data, dict):
            raise SchemaDefinitionError("schema definition must be a mapping with a 'tables' key")

        raw_tables = data.get("tables") or []
        if not isinstance(raw_tables, list):
            raise SchemaDefinitionError("'tables' must be a list")

        return Schema.from_dict({"tables": [self._normalize_table(t) for t in raw_tables]})

    def _load(self, content: str) -> Any:
        stripped = content.strip()
        if not stripped:
            return {}
        if stripped.startswith("{") or stripped.startswith("["):
            try:
                return json.loads(stripped)
            except json.JSONDecodeError as e:
                raise SchemaDefinitionError(f"invalid JSON schema definition: {e}") from e
        try:
            return yaml.safe_load(stripped)
        except yaml.YAMLError as e:
            raise SchemaDefinitionError(f"invalid YAML schema definition: {e}") from e

    def _normalize_table(self, raw: Any) -> dict:
        """Validate one table entry and rewrite it into Table.from_dict shape."""
        if not isinstance(raw, dict):
            raise SchemaDefinitionError(f"table entry must be a mapping, got {type(raw).__name__}")
        name = raw.get("name", raw.get("table_name"))
        if not name:
            raise SchemaDefinitionError("table entry is missing 'name'")

        columns: list[dict] = []
        for c in raw.get("columns") or []:
            if isinstance(c, str):
                # "column_name:type" format
                col_name, _, col_type = c.partition(":")
                columns.append({
                    "name": col_name.strip(),
                    "type": col_type.strip() or "varchar",
                })
            elif isinstance(c, dict):
                if "name" not in c or "type" not in c:
                    raise SchemaDefinitionError(
                        f"column in table '{name}' needs both 'name' and 'type'"
                    )
                columns.append(c)
            else:
                raise SchemaDefinitionError(
                    f"unsupported column entry in table '{name}': {c!r}"
                )

        return {"name": name, "columns": columns}


def dump_schema(schema: Schema, fmt: InputFormat = InputFormat.SCHEMA_JSON) -> str:
    """Serialize a Schema (tables and parse warnings) as JSON or YAML."""
    data = schema.to_dict()
    if fmt == InputFormat.SCHEMA_YAML:
        return yaml.safe_dump(data, sort_keys=False)
    return json.dumps(data, indent=2)
