"""Line classification for DBML table blocks.

Each input line is trimmed and sorted into one of four categories. The
classifier is state-free: whether a column line is actually kept depends on
the schema builder's state, not on the line itself.
"""

from __future__ import annotations

from typing import Optional

from dbml_ddl.parser.base import LineKind

TABLE_KEYWORD = "Table"
COMMENT_PREFIX = "//"
BLOCK_OPEN = "{"
BLOCK_CLOSE = "}"


class LineClassifier:
    """Classifies trimmed DBML lines and splits them into their parts."""

    @classmethod
    def classify(cls, line: str) -> LineKind:
        """Classify a single line. Surrounding whitespace is ignored.

        Priority:
        1. ``Table`` header
        2. ``//`` comment
        3. column definition (contains a colon)
        4. block close (exactly ``}``)
        """
        stripped = line.strip()
        if not stripped:
            return LineKind.IGNORABLE

        first_token = stripped.split()[0]
        if first_token == TABLE_KEYWORD or first_token == TABLE_KEYWORD + BLOCK_OPEN:
            return LineKind.TABLE_START

        if stripped.startswith(COMMENT_PREFIX):
            return LineKind.IGNORABLE

        if ":" in stripped:
            return LineKind.COLUMN_DEFINITION

        if stripped == BLOCK_CLOSE:
            return LineKind.TABLE_END

        return LineKind.IGNORABLE

    @classmethod
    def table_name(cls, line: str) -> Optional[str]:
        """Extract the table name from a ``Table <name> {`` header.

        Returns None when the header carries no name.
        """
        tokens = line.strip().split()
        if tokens and tokens[0] == TABLE_KEYWORD + BLOCK_OPEN:
            return None
        if len(tokens) < 2:
            return None
        name = tokens[1].rstrip(BLOCK_OPEN)
        return name or None

    @classmethod
    def split_column(cls, line: str) -> tuple[str, str, str]:
        """Split a column line into (name, type, constraint remainder).

        The name is everything before the first colon. The definition after
        it is split at its first space into the type token and the raw
        modifier text handed to the constraint parser.
        """
        raw_name, _, raw_definition = line.strip().partition(":")
        name = raw_name.strip()
        definition = raw_definition.strip()
        # DBML allows a trailing comma between column lines
        if definition.endswith(","):
            definition = definition[:-1].rstrip()

        column_type, _, remainder = definition.partition(" ")
        return name, column_type, remainder.strip()
