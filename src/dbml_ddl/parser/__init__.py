"""DBML parser — turn schema text (or a JSON/YAML definition) into a Schema."""

from dbml_ddl.parser.base import (
    BaseParser,
    Column,
    ColumnOutsideTable,
    DBMLError,
    DBMLParseError,
    DuplicateTableName,
    InputFormat,
    LineKind,
    MalformedTableHeader,
    ParseIssue,
    ParseIssueKind,
    QueryExecutionError,
    Schema,
    SchemaDefinitionError,
    Table,
    UnterminatedTable,
)
from dbml_ddl.parser.constraint_parser import ColumnConstraints, ConstraintParser
from dbml_ddl.parser.detector import CONTENT_RULES, EXTENSION_FORMATS, detect_format
from dbml_ddl.parser.line_classifier import LineClassifier
from dbml_ddl.parser.schema_builder import BuilderState, DBMLParser, SchemaBuilder
from dbml_ddl.parser.schema_definition import SchemaDefinitionParser, dump_schema
