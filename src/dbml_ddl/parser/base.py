"""Base types for the DBML parser.

Every input route (DBML text, JSON/YAML schema definitions) produces the same
immutable Schema intermediate representation, which the SQL generator then
turns into CREATE TABLE statements.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from dbml_ddl.config.settings import TRUTHY


class InputFormat(str, Enum):
    """Detected input format for auto-routing."""

    DBML = "dbml"
    SCHEMA_JSON = "schema_json"
    SCHEMA_YAML = "schema_yaml"
    UNKNOWN = "unknown"


class LineKind(str, Enum):
    """Category assigned to a single trimmed input line."""

    TABLE_START = "table_start"
    COLUMN_DEFINITION = "column_definition"
    TABLE_END = "table_end"
    IGNORABLE = "ignorable"


class ParseIssueKind(str, Enum):
    """Malformed-input conditions the parser detects."""

    COLUMN_OUTSIDE_TABLE = "column_outside_table"
    UNTERMINATED_TABLE = "unterminated_table"
    MALFORMED_TABLE_HEADER = "malformed_table_header"
    DUPLICATE_TABLE_NAME = "duplicate_table_name"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class DBMLError(Exception):
    """Base class for all dbml_ddl errors."""


class DBMLParseError(DBMLError):
    """Raised in strict mode when the input text is malformed."""

    kind: ParseIssueKind

    def __init__(self, message: str, line_number: int = 0, line: str = ""):
        super().__init__(f"line {line_number}: {message}" if line_number else message)
        self.message = message
        self.line_number = line_number
        self.line = line


class ColumnOutsideTable(DBMLParseError):
    kind = ParseIssueKind.COLUMN_OUTSIDE_TABLE


class UnterminatedTable(DBMLParseError):
    kind = ParseIssueKind.UNTERMINATED_TABLE


class MalformedTableHeader(DBMLParseError):
    kind = ParseIssueKind.MALFORMED_TABLE_HEADER


class DuplicateTableName(DBMLParseError):
    kind = ParseIssueKind.DUPLICATE_TABLE_NAME


ISSUE_ERRORS: dict[ParseIssueKind, type[DBMLParseError]] = {
    ParseIssueKind.COLUMN_OUTSIDE_TABLE: ColumnOutsideTable,
    ParseIssueKind.UNTERMINATED_TABLE: UnterminatedTable,
    ParseIssueKind.MALFORMED_TABLE_HEADER: MalformedTableHeader,
    ParseIssueKind.DUPLICATE_TABLE_NAME: DuplicateTableName,
}


class SchemaDefinitionError(DBMLError):
    """Raised when a JSON/YAML schema definition cannot be loaded."""


class QueryExecutionError(DBMLError):
    """Raised when a query cannot be prepared, executed or scanned."""


# ---------------------------------------------------------------------------
# Schema model
# ---------------------------------------------------------------------------

def _as_flag(value: Any) -> bool:
    """Read a boolean column flag; quoted strings like "false" count as false."""
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY
    return bool(value)


@dataclass(frozen=True)
class ParseIssue:
    """A malformed-input condition recorded while parsing leniently."""

    kind: ParseIssueKind
    line_number: int
    line: str
    message: str

    def to_error(self) -> DBMLParseError:
        return ISSUE_ERRORS[self.kind](self.message, self.line_number, self.line)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "line_number": self.line_number,
            "line": self.line,
            "message": self.message,
        }


@dataclass(frozen=True)
class Column:
    """A column definition inside a table block."""

    name: str
    type: str
    not_null: bool = False
    primary_key: bool = False
    unique: bool = False
    default: Optional[str] = None
    constraints: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "type": self.type,
            "not_null": self.not_null,
            "primary_key": self.primary_key,
            "unique": self.unique,
            "default": self.default,
            "constraints": self.constraints,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Column:
        primary_key = _as_flag(data.get("primary_key", data.get("pk", False)))
        default = data.get("default")
        constraints = data.get("constraints")
        return cls(
            name=str(data["name"]),
            type=str(data["type"]),
            # primary keys imply not-null, same as in DBML text
            not_null=_as_flag(data.get("not_null", False)) or primary_key,
            primary_key=primary_key,
            unique=_as_flag(data.get("unique", False)),
            default=str(default) if default is not None else None,
            constraints=str(constraints) if constraints else None,
        )


@dataclass(frozen=True)
class Table:
    """A table block: a name and its columns in definition order."""

    name: str
    columns: tuple[Column, ...] = ()

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "columns": [c.to_dict() for c in self.columns],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Table:
        return cls(
            name=str(data["name"]),
            columns=tuple(Column.from_dict(c) for c in data.get("columns", [])),
        )


@dataclass(frozen=True)
class Schema:
    """Complete parsed schema: tables in first-seen order."""

    tables: tuple[Table, ...] = ()
    warnings: tuple[ParseIssue, ...] = field(default=(), compare=False)

    def get_tables(self, name: str) -> list[Table]:
        """Return every table named ``name`` (duplicates are retained)."""
        return [t for t in self.tables if t.name == name]

    def to_dict(self) -> dict:
        return {
            "tables": [t.to_dict() for t in self.tables],
            "warnings": [w.to_dict() for w in self.warnings],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Schema:
        return cls(tables=tuple(Table.from_dict(t) for t in data.get("tables", [])))


class BaseParser(ABC):
    """Abstract base class for input format parsers."""

    @abstractmethod
    def parse(self, content: str, **kwargs) -> Schema:
        """Parse input content into a Schema."""
        ...

    @abstractmethod
    def can_parse(self, content: str) -> bool:
        """Return True if this parser can handle the given content."""
        ...
