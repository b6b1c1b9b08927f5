"""SQL generator — renders a Schema as CREATE TABLE statements.

Output layout is fixed: two-space indented column lines joined by a comma and
newline, one statement per table, statements separated by a blank line.
Column modifiers always appear in the order

    NOT NULL, PRIMARY KEY, UNIQUE, DEFAULT <value>, <raw constraints>
"""

from __future__ import annotations

from dbml_ddl.parser.base import Column, Schema, Table

INDENT = "  "
COLUMN_SEPARATOR = ",\n" + INDENT
STATEMENT_SEPARATOR = "\n\n"


class SQLGenerator:
    """Stateless Schema -> DDL transform."""

    def generate(self, schema: Schema) -> str:
        """Render every table in schema order. An empty schema renders ''."""
        return STATEMENT_SEPARATOR.join(self.generate_table(t) for t in schema.tables)

    def generate_table(self, table: Table) -> str:
        body = COLUMN_SEPARATOR.join(self.column_definition(c) for c in table.columns)
        return f"CREATE TABLE {table.name} (\n{INDENT}{body}\n);"

    def column_definition(self, column: Column) -> str:
        parts = [column.name, column.type]
        if column.not_null:
            parts.append("NOT NULL")
        if column.primary_key:
            parts.append("PRIMARY KEY")
        if column.unique:
            parts.append("UNIQUE")
        if column.default:
            parts.append(f"DEFAULT {column.default}")
        if column.constraints:
            parts.append(column.constraints)
        return " ".join(parts)


def generate_sql(schema: Schema) -> str:
    """Convenience wrapper around SQLGenerator().generate()."""
    return SQLGenerator().generate(schema)
