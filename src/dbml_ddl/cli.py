"""Command line entry point: ``dbml-ddl compile`` and ``dbml-ddl inspect``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from dbml_ddl import __version__
from dbml_ddl.config import get_config
from dbml_ddl.generator import SQLGenerator
from dbml_ddl.parser import (
    DBMLError,
    DBMLParser,
    InputFormat,
    Schema,
    SchemaDefinitionParser,
    detect_format,
    dump_schema,
)

logger = logging.getLogger(__name__)


def load_schema(path: str, strict: Optional[bool] = None, encoding: str = "utf-8") -> Schema:
    """Read a DBML file or a JSON/YAML schema definition into a Schema."""
    content = Path(path).read_text(encoding=encoding)
    fmt = detect_format(content, path)
    logger.debug(f"Loading {path} as {fmt.value}")

    if fmt in (InputFormat.SCHEMA_JSON, InputFormat.SCHEMA_YAML):
        return SchemaDefinitionParser().parse(content)
    return DBMLParser(strict=strict).parse(content)


def _strict_flag(args: argparse.Namespace) -> Optional[bool]:
    # None falls back to the configured default
    return True if args.strict else None


def cmd_compile(args: argparse.Namespace) -> int:
    config = get_config()
    schema = load_schema(args.input, _strict_flag(args), config.encoding)
    sql = SQLGenerator().generate(schema)

    if args.output:
        Path(args.output).write_text(sql + "\n", encoding=config.encoding)
        logger.info(f"Wrote {len(schema.tables)} table(s) to {args.output}")
    else:
        sys.stdout.write(sql + "\n")
    return 0


def cmd_inspect(args: argparse.Namespace) -> int:
    config = get_config()
    schema = load_schema(args.input, _strict_flag(args), config.encoding)
    fmt = InputFormat.SCHEMA_YAML if args.format == "yaml" else InputFormat.SCHEMA_JSON
    sys.stdout.write(dump_schema(schema, fmt).rstrip("\n") + "\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dbml-ddl",
        description="Compile DBML table definitions into SQL CREATE TABLE statements",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    compile_parser = subparsers.add_parser("compile", help="Generate SQL DDL from a schema file")
    compile_parser.add_argument("input", help="DBML, JSON or YAML schema file")
    compile_parser.add_argument("-o", "--output", help="Write SQL here instead of stdout")
    compile_parser.add_argument("--strict", action="store_true",
                                help="Fail on malformed input instead of warning")
    compile_parser.set_defaults(func=cmd_compile)

    inspect_parser = subparsers.add_parser("inspect", help="Print the parsed schema")
    inspect_parser.add_argument("input", help="DBML, JSON or YAML schema file")
    inspect_parser.add_argument("--format", choices=["json", "yaml"], default="json",
                                type=str.lower, help="Output format (default: json)")
    inspect_parser.add_argument("--strict", action="store_true",
                                help="Fail on malformed input instead of warning")
    inspect_parser.set_defaults(func=cmd_inspect)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = get_config()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except (DBMLError, OSError) as e:
        print(f"dbml-ddl: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
