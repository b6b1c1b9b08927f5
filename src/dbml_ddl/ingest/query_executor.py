"""Query executor — runs a parameterized query and scans rows into records.

Works against any open PEP 249 (DB-API 2.0) connection. Each result row is
turned into a record shaped like a prototype: a dataclass whose declared
field order matches the selected columns. Callers with other record types
pass a ``builder`` callable that turns one row tuple into one record.

This module has no dependency on the DBML parser or the SQL generator.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Callable, Optional, Sequence

from dbml_ddl.parser.base import QueryExecutionError

logger = logging.getLogger(__name__)

RowBuilder = Callable[[Sequence[Any]], Any]


def dataclass_row_builder(prototype: Any) -> RowBuilder:
    """Build records of the prototype's dataclass type from row tuples.

    ``prototype`` may be the dataclass itself or an instance of it. Row values
    are assigned positionally, in field declaration order.
    """
    record_type = prototype if isinstance(prototype, type) else type(prototype)
    if not dataclasses.is_dataclass(record_type):
        raise TypeError(
            f"prototype must be a dataclass or dataclass instance, got {record_type.__name__}"
        )

    names = [f.name for f in dataclasses.fields(record_type) if f.init]

    def build(row: Sequence[Any]) -> Any:
        if len(row) != len(names):
            raise ValueError(
                f"row has {len(row)} column(s) but {record_type.__name__} "
                f"declares {len(names)} field(s)"
            )
        return record_type(**dict(zip(names, row)))

    return build


def execute_query(
    query: str,
    params: Optional[Sequence[Any]],
    connection: Any,
    prototype: Any = None,
    builder: Optional[RowBuilder] = None,
) -> list:
    """Execute ``query`` with positional ``params`` and return populated records.

    Args:
        query: SQL text with positional placeholders in the driver's paramstyle.
        params: Values for the placeholders, in order.
        connection: An open DB-API connection.
        prototype: Dataclass (or instance) describing the row shape.
        builder: Alternative to ``prototype``; turns one row into one record.

    Raises:
        TypeError: if neither a dataclass prototype nor a builder is given.
        QueryExecutionError: if execution or row population fails.
    """
    build = builder or dataclass_row_builder(prototype)

    cursor = None
    try:
        try:
            cursor = connection.cursor()
            cursor.execute(query, tuple(params or ()))
            rows = cursor.fetchall()
        except Exception as e:
            raise QueryExecutionError(f"query execution failed: {e}") from e

        records = []
        for index, row in enumerate(rows):
            try:
                records.append(build(row))
            except Exception as e:
                raise QueryExecutionError(f"failed to populate row {index}: {e}") from e
    finally:
        if cursor is not None:
            try:
                cursor.close()
            except Exception as e:
                # must not replace the error already propagating
                logger.warning(f"Failed to close cursor: {e}")

    logger.debug(f"Query returned {len(records)} record(s)")
    return records
