"""Columns of values and the transform-function interface."""

from __future__ import annotations

import abc
import dataclasses
import enum
from typing import Any, Iterable, Iterator


class DataType(enum.Enum):
    """Physical type of the values held in a column."""

    BOOLEAN = "boolean"
    INT32 = "int32"
    INT64 = "int64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    DECIMAL128 = "decimal128"
    DATE32 = "date32"
    TIME64_MICROS = "time64[us]"
    TIMESTAMP_MICROS = "timestamp[us]"
    UTF8 = "utf8"
    LARGE_UTF8 = "large_utf8"
    BINARY = "binary"
    LARGE_BINARY = "large_binary"
    FIXED_SIZE_BINARY = "fixed_size_binary"


@dataclasses.dataclass(frozen=True)
class Column:
    """An immutable column of values of one data type; ``None`` marks a null.

    Decimal values are unscaled integers, dates are days since the epoch,
    times and timestamps are microseconds.
    """

    data_type: DataType
    values: tuple[Any, ...] = ()
    precision: int | None = None
    scale: int | None = None
    byte_width: int | None = None
    timezone: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.values)

    def __getitem__(self, index: int) -> Any:
        return self.values[index]

    def with_values(self, values: Iterable[Any], data_type: DataType | None = None) -> "Column":
        """Return a column with the same type attributes holding ``values``."""
        if data_type is None or data_type is self.data_type:
            return dataclasses.replace(self, values=tuple(values))
        return Column(data_type, tuple(values))


class TransformFunction(abc.ABC):
    """Computes partition values from a column of source values."""

    @abc.abstractmethod
    def transform(self, column: Column) -> Column:
        """Transform ``column`` into a new column."""


class Identity(TransformFunction):
    """Returns its input unchanged."""

    def transform(self, column: Column) -> Column:
        return column


class Void(TransformFunction):
    """Returns a column of nulls of the same type and length."""

    def transform(self, column: Column) -> Column:
        return column.with_values([None] * len(column))