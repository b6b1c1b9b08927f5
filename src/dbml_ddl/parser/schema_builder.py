"""DBML parser — builds a Schema from ``Table name { ... }`` blocks.

The builder is a two-state machine:

    IDLE       no table is open; column lines are dropped
    IN_TABLE   a table is open; column lines are appended to it

The open table is tracked by its index into the builder's table list rather
than by a reference to the table object. A ``Table`` header always opens a
new table, even if the previous one was never closed.

Malformed input is handled leniently by default: each problem is logged and
recorded in ``Schema.warnings`` and parsing carries on. In strict mode the
first problem raises the matching DBMLParseError subclass.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Optional

from dbml_ddl.config import get_config
from dbml_ddl.parser.base import (
    BaseParser,
    Column,
    LineKind,
    ParseIssue,
    ParseIssueKind,
    Schema,
    Table,
)
from dbml_ddl.parser.constraint_parser import ConstraintParser
from dbml_ddl.parser.line_classifier import LineClassifier

logger = logging.getLogger(__name__)


class BuilderState(str, Enum):
    IDLE = "idle"
    IN_TABLE = "in_table"


class SchemaBuilder:
    """Accumulates tables and columns for a single parse call."""

    def __init__(self, strict: bool = False):
        self.strict = strict
        self.state = BuilderState.IDLE
        self.current_index: Optional[int] = None
        self._tables: list[tuple[str, list[Column]]] = []
        self._seen_names: set[str] = set()
        self._warnings: list[ParseIssue] = []
        self._constraint_parser = ConstraintParser()

    def feed(self, line: str, line_number: int) -> None:
        """Consume one raw input line."""
        stripped = line.strip()
        kind = LineClassifier.classify(stripped)

        if kind == LineKind.TABLE_START:
            self._open_table(stripped, line_number)
        elif kind == LineKind.COLUMN_DEFINITION:
            self._add_column(stripped, line_number)
        elif kind == LineKind.TABLE_END:
            self._close_table(line_number)

    def finish(self, line_number: int) -> Schema:
        """End of input: freeze everything collected into a Schema."""
        if self.state == BuilderState.IN_TABLE:
            name = self._tables[self.current_index][0]
            self._issue(
                ParseIssueKind.UNTERMINATED_TABLE,
                line_number,
                "",
                f"table '{name}' is not closed before end of input",
            )

        tables = tuple(Table(name=name, columns=tuple(columns)) for name, columns in self._tables)
        return Schema(tables=tables, warnings=tuple(self._warnings))

    def _open_table(self, line: str, line_number: int) -> None:
        name = LineClassifier.table_name(line)
        if name is None:
            # the previous table, if any, is closed either way
            self.state = BuilderState.IDLE
            self.current_index = None
            self._issue(
                ParseIssueKind.MALFORMED_TABLE_HEADER,
                line_number,
                line,
                "table header has no name",
            )
            return

        if name in self._seen_names:
            self._issue(
                ParseIssueKind.DUPLICATE_TABLE_NAME,
                line_number,
                line,
                f"table '{name}' is defined more than once",
            )
        self._seen_names.add(name)

        self._tables.append((name, []))
        self.current_index = len(self._tables) - 1
        self.state = BuilderState.IN_TABLE
        logger.debug(f"Opened table {name} at line {line_number}")

    def _add_column(self, line: str, line_number: int) -> None:
        if self.state != BuilderState.IN_TABLE:
            self._issue(
                ParseIssueKind.COLUMN_OUTSIDE_TABLE,
                line_number,
                line,
                "column definition outside of a table block is ignored",
            )
            return

        name, column_type, remainder = LineClassifier.split_column(line)
        parsed = self._constraint_parser.parse(remainder)
        column = Column(
            name=name,
            type=column_type,
            not_null=parsed.not_null,
            primary_key=parsed.primary_key,
            unique=parsed.unique,
            default=parsed.default,
            constraints=parsed.constraints,
        )

        table_name, columns = self._tables[self.current_index]
        columns.append(column)
        logger.debug(f"Added column {table_name}.{name} ({column_type})")

    def _close_table(self, line_number: int) -> None:
        if self.state != BuilderState.IN_TABLE:
            logger.debug(f"Unmatched closing brace at line {line_number} ignored")
            return
        self.state = BuilderState.IDLE
        self.current_index = None

    def _issue(self, kind: ParseIssueKind, line_number: int, line: str, message: str) -> None:
        issue = ParseIssue(kind=kind, line_number=line_number, line=line, message=message)
        if self.strict:
            raise issue.to_error()
        logger.warning(f"DBML line {line_number}: {message}")
        self._warnings.append(issue)


class DBMLParser(BaseParser):
    """Parses DBML table definitions into a Schema."""

    def __init__(self, strict: Optional[bool] = None):
        self.strict = strict

    def can_parse(self, content: str) -> bool:
        return bool(re.search(r"^\s*Table\s+\S+", content, re.MULTILINE))

    def parse(self, content: str, **kwargs) -> Schema:
        strict = kwargs.get("strict", self.strict)
        if strict is None:
            strict = get_config().strict

        builder = SchemaBuilder(strict=strict)
        lines = content.split("\n")
        for line_number, line in enumerate(lines, 1):
            builder.feed(line, line_number)

        schema = builder.finish(len(lines))
        logger.info(
            f"Parsed {len(schema.tables)} table(s) with {len(schema.warnings)} warning(s)"
        )
        return schema
