"""Input routing: DBML text or a JSON/YAML schema definition."""

from __future__ import annotations

import re
from pathlib import PurePath
from typing import Optional

from dbml_ddl.parser.base import InputFormat

EXTENSION_FORMATS = {
    ".dbml": InputFormat.DBML,
    ".json": InputFormat.SCHEMA_JSON,
    ".yaml": InputFormat.SCHEMA_YAML,
    ".yml": InputFormat.SCHEMA_YAML,
}

# Checked in order against the stripped content; first match wins.
CONTENT_RULES = [
    (re.compile(r"^\s*Table\s+\S+", re.MULTILINE), InputFormat.DBML),
    (re.compile(r"\A\{.*\"tables\"", re.DOTALL), InputFormat.SCHEMA_JSON),
    # block style "tables:" as well as flow style "tables: []"
    (re.compile(r"^tables\s*:", re.MULTILINE), InputFormat.SCHEMA_YAML),
]


def detect_format(content: str, filename: Optional[str] = None) -> InputFormat:
    """Detect the input format, preferring a known file extension over content."""
    if filename:
        fmt = EXTENSION_FORMATS.get(PurePath(filename).suffix.lower())
        if fmt is not None:
            return fmt

    stripped = content.strip()
    for pattern, fmt in CONTENT_RULES:
        if pattern.search(stripped):
            return fmt
    return InputFormat.UNKNOWN
