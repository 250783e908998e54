"""Row-to-record mapping for reader results."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import MISSING, dataclass, fields, is_dataclass
from functools import lru_cache
from typing import Any, Dict, Type, TypeVar

from .errors import MappingError
from .types import RowMapping

T = TypeVar("T")


@dataclass(frozen=True)
class RecordMapping:
    """Field-to-column table for one record type."""

    model: Type[Any]
    columns: Dict[str, str]


def require_dataclass_record(cls: Type[Any]) -> None:
    """Validate that a class can be used as a reader target."""

    if not isinstance(cls, type) or not is_dataclass(cls):
        raise MappingError(f"{getattr(cls, '__name__', cls)!r} must be a dataclass type.")
    if cls.__dataclass_params__.frozen:
        raise MappingError(f"{cls.__name__} is frozen; reader records need settable fields.")


@lru_cache(maxsize=None)
def record_mapping(cls: Type[Any]) -> RecordMapping:
    """Build (once) the mapping table for a record type.

    Column names default to the field names. A `__columns__` class attribute
    maps individual fields to differently named columns.

    Raises:
        MappingError: If `cls` is not a mutable dataclass, has a required
            field, or `__columns__` names an unknown field.
    """

    require_dataclass_record(cls)
    init_fields = [f for f in fields(cls) if f.init]
    required = [
        f.name
        for f in init_fields
        if f.default is MISSING and f.default_factory is MISSING
    ]
    if required:
        raise MappingError(
            f"{cls.__name__} must be constructible without arguments; "
            f"fields without defaults: {required!r}."
        )

    field_names = [f.name for f in init_fields]
    overrides = getattr(cls, "__columns__", None) or {}
    if not isinstance(overrides, Mapping):
        raise MappingError(f"{cls.__name__}.__columns__ must be a mapping.")
    unknown = set(overrides) - set(field_names)
    if unknown:
        raise MappingError(
            f"{cls.__name__}.__columns__ references unknown fields: {sorted(unknown)!r}."
        )

    return RecordMapping(
        model=cls,
        columns={name: overrides.get(name, name) for name in field_names},
    )


def row_to_record(cls: Type[T], row: RowMapping) -> T:
    """Map one row onto a fresh default-constructed record.

    Columns holding `None` and fields without a matching column keep the
    record's default value; extra columns are ignored.
    """

    mapping = record_mapping(cls)
    record = cls()
    for field_name, column in mapping.columns.items():
        if column not in row:
            continue
        value = row[column]
        if value is None:
            continue
        setattr(record, field_name, value)
    return record
