"""Parameter descriptors passed to stored procedure calls."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple


class SqlType(str, Enum):
    """Server column types used by structured (table-valued) parameters."""

    UNIQUEIDENTIFIER = "uniqueidentifier"
    NVARCHAR = "nvarchar"
    VARCHAR = "varchar"
    INT = "int"


@dataclass(frozen=True)
class TableTypeColumn:
    """One column of a server-side table type."""

    name: str
    sql_type: SqlType


@dataclass(frozen=True)
class StructuredRow:
    """Ordered row of a table-valued parameter.

    `values` line up positionally with `columns`; the order is the order of
    the server-side type and is never rearranged.
    """

    columns: Tuple[TableTypeColumn, ...]
    values: Tuple[Any, ...]

    def __post_init__(self) -> None:
        if len(self.columns) != len(self.values):
            raise ValueError(
                f"Structured row expects {len(self.columns)} values, got {len(self.values)}."
            )


@dataclass(frozen=True)
class DbParameter:
    """Named stored procedure parameter.

    A parameter with a non-empty `type_name` is table-valued and its `value`
    is a sequence of `StructuredRow`; otherwise `value` is a single scalar.
    """

    name: str
    value: Any = None
    type_name: str = ""

    @classmethod
    def create(cls, name: str, value: Any, type_name: str = "") -> DbParameter:
        return cls(name=name, value=value, type_name=type_name)

    @property
    def is_structured(self) -> bool:
        return bool(self.type_name)
