"""Constraint parser for the bracketed modifier list after a column type.

Recognized tokens (case-insensitive):
    pk | primaryKey      -> primary key, implies not null
    notNull              -> not null
    unique               -> unique
    default <value>      -> default value, kept verbatim (quotes included);
                            ``default: <value>`` is accepted too. A token
                            glued to the keyword (``defaultValue``) is
                            stored whole.

Any other token is kept verbatim as leftover constraint text so nothing the
author wrote is lost on the way to SQL.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

PRIMARY_KEY_TOKENS = {"pk", "primarykey"}
NOT_NULL_TOKEN = "notnull"
UNIQUE_TOKEN = "unique"
DEFAULT_KEYWORD = "default"


@dataclass
class ColumnConstraints:
    """Flags and values parsed from one modifier list."""

    not_null: bool = False
    primary_key: bool = False
    unique: bool = False
    default: Optional[str] = None
    unrecognized: list[str] = field(default_factory=list)

    @property
    def constraints(self) -> Optional[str]:
        """Leftover tokens joined for output, or None when there are none."""
        return " ".join(self.unrecognized) if self.unrecognized else None


class ConstraintParser:
    """Parses ``[pk, notNull, default 0]`` style modifier lists."""

    def parse(self, raw: str) -> ColumnConstraints:
        result = ColumnConstraints()
        text = raw.strip()
        if not text:
            return result

        if text.startswith("["):
            text = text[1:]
        if text.endswith("]"):
            text = text[:-1]

        for token in (t.strip() for t in text.split(",")):
            if token:
                self._apply_token(result, token)
        return result

    def _apply_token(self, result: ColumnConstraints, token: str) -> None:
        lowered = token.lower()

        if lowered in PRIMARY_KEY_TOKENS:
            result.primary_key = True
            result.not_null = True
        elif lowered == NOT_NULL_TOKEN:
            result.not_null = True
        elif lowered == UNIQUE_TOKEN:
            result.unique = True
        elif lowered.startswith(DEFAULT_KEYWORD):
            rest = token[len(DEFAULT_KEYWORD):]
            if not rest:
                # a bare "default" carries no value
                result.default = None
            elif rest[0].isspace() or rest[0] == ":":
                # upstream DBML spells it "default: value"
                value = rest.strip()
                if value.startswith(":"):
                    value = value[1:].strip()
                result.default = value or None
            else:
                # "defaultValue" has no keyword separator; keep it whole
                result.default = token
        else:
            result.unrecognized.append(token)
