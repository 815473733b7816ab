"""Truncate transform: integers to a multiple of the width, strings to a length."""

from __future__ import annotations

from ..errors import DataInvalidError, FeatureUnsupportedError
from .base import Column, DataType, TransformFunction

_INT32_MAX = 0x7FFFFFFF


def truncate_str_by_char(text: str, max_chars: int) -> str:
    """Keep at most ``max_chars`` characters (code points) of ``text``."""
    return text[:max_chars]


def _truncate_number(value: int, width: int) -> int:
    return value - value % width


class Truncate(TransformFunction):
    """Truncates values to ``width``."""

    def __init__(self, width: int) -> None:
        if width <= 0:
            raise DataInvalidError(f"Truncate width must be positive: {width}")
        self.width = width

    def __repr__(self) -> str:
        return f"Truncate(width={self.width})"

    def transform(self, column: Column) -> Column:
        kind = column.data_type
        if kind is DataType.INT32 and self.width > _INT32_MAX:
            raise DataInvalidError(
                "width is failed to convert to i32 when truncate Int32Array"
            )
        if kind in (DataType.INT32, DataType.INT64, DataType.DECIMAL128):
            return column.with_values(
                None if v is None else _truncate_number(v, self.width) for v in column
            )
        if kind in (DataType.UTF8, DataType.LARGE_UTF8):
            return column.with_values(
                None if v is None else truncate_str_by_char(v, self.width) for v in column
            )
        raise FeatureUnsupportedError(
            "Truncate transform only supports (int,long,decimal,string) types"
        )