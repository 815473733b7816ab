"""Temporal transforms: years, months, days and hours since the unix epoch."""

from __future__ import annotations

import datetime as _dt
import re
from typing import Callable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..errors import UnexpectedError
from .base import Column, DataType, TransformFunction

UNIX_EPOCH_YEAR = 1970
HOUR_PER_SECOND = 1.0 / 3600.0
DAY_PER_SECOND = 1.0 / 24.0 / 3600.0

_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1

_EPOCH_DATE = _dt.date(1970, 1, 1)
_EPOCH_UTC = _dt.datetime(1970, 1, 1, tzinfo=_dt.timezone.utc)
_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")


def _saturate_i32(value: float) -> int:
    """Truncate toward zero and clamp into the 32-bit signed range."""
    return max(_INT32_MIN, min(_INT32_MAX, int(value)))


def _tzinfo(name: str | None) -> _dt.tzinfo:
    if name is None:
        return _dt.timezone.utc
    match = _OFFSET_RE.match(name)
    if match:
        sign, hours, minutes = match.groups()
        offset = _dt.timedelta(hours=int(hours), minutes=int(minutes))
        return _dt.timezone(-offset if sign == "-" else offset)
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as err:
        raise UnexpectedError(f"Invalid timezone {name!r}: {err}") from err


def _calendar_dates(column: Column) -> list[_dt.date | None]:
    """Calendar date of every value of a date or timestamp column."""
    try:
        if column.data_type is DataType.DATE32:
            return [
                None if v is None else _EPOCH_DATE + _dt.timedelta(days=v) for v in column
            ]
        if column.data_type is DataType.TIMESTAMP_MICROS:
            tz = _tzinfo(column.timezone)
            return [
                None
                if v is None
                else (_EPOCH_UTC + _dt.timedelta(microseconds=v)).astimezone(tz).date()
                for v in column
            ]
    except OverflowError as err:
        raise UnexpectedError(f"Value out of range: {err}") from err
    raise UnexpectedError(
        f"Cannot extract date parts from data type {column.data_type.value}"
    )


def _map_int32(column: Column, func: Callable[[int], int]) -> Column:
    return Column(DataType.INT32, [None if v is None else func(v) for v in column])


def _unsupported(column: Column) -> UnexpectedError:
    return UnexpectedError(
        "Should not call internally for unsupported data type "
        f"{column.data_type.value}"
    )


class Year(TransformFunction):
    """Extract a date or timestamp year, as years from 1970."""

    def transform(self, column: Column) -> Column:
        dates = _calendar_dates(column)
        return Column(
            DataType.INT32,
            [None if d is None else d.year - UNIX_EPOCH_YEAR for d in dates],
        )


class Month(TransformFunction):
    """Extract a date or timestamp month, as months from 1970-01-01."""

    def transform(self, column: Column) -> Column:
        dates = _calendar_dates(column)
        return Column(
            DataType.INT32,
            [
                None if d is None else 12 * (d.year - UNIX_EPOCH_YEAR) + d.month - 1
                for d in dates
            ],
        )


class Day(TransformFunction):
    """Extract a date or timestamp day, as days from 1970-01-01."""

    def transform(self, column: Column) -> Column:
        if column.data_type is DataType.TIMESTAMP_MICROS:
            return _map_int32(
                column, lambda v: _saturate_i32(v / 1000.0 / 1000.0 * DAY_PER_SECOND)
            )
        if column.data_type is DataType.DATE32:
            return _map_int32(column, int)
        raise _unsupported(column)


class Hour(TransformFunction):
    """Extract a timestamp hour, as hours from 1970-01-01 00:00:00."""

    def transform(self, column: Column) -> Column:
        if column.data_type is DataType.TIMESTAMP_MICROS:
            return _map_int32(
                column, lambda v: _saturate_i32(v * HOUR_PER_SECOND / 1000.0 / 1000.0)
            )
        raise _unsupported(column)