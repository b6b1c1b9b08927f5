"""Compile a DBML subset into SQL CREATE TABLE statements."""

from __future__ import annotations

from typing import Optional

from dbml_ddl.generator import SQLGenerator
from dbml_ddl.parser import Column, DBMLParser, Schema, Table

__version__ = "0.1.0"


def parse(text: str, strict: Optional[bool] = None) -> Schema:
    """Parse DBML text into a Schema.

    ``strict`` overrides the configured strictness: when true, malformed input
    raises a DBMLParseError subclass instead of being recorded in
    ``Schema.warnings``.
    """
    return DBMLParser(strict=strict).parse(text)


def generate(schema: Schema) -> str:
    """Render a Schema as CREATE TABLE statements."""
    return SQLGenerator().generate(schema)


def compile_dbml(text: str, strict: Optional[bool] = None) -> str:
    return generate(parse(text, strict=strict))
