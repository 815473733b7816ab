"""Bucket transform: murmur3 hash of a value modulo the bucket count."""

from __future__ import annotations

from ..errors import UnexpectedError
from .base import Column, DataType, TransformFunction

_MASK32 = 0xFFFFFFFF
_INT32_MAX = 0x7FFFFFFF


def _rotl32(x: int, r: int) -> int:
    return ((x << r) | (x >> (32 - r))) & _MASK32


def _to_signed32(x: int) -> int:
    return x - (1 << 32) if x & 0x80000000 else x


def murmur3_32(data: bytes, seed: int = 0) -> int:
    """Unsigned 32-bit MurmurHash3 (x86 variant) of ``data``."""
    c1, c2 = 0xCC9E2D51, 0x1B873593
    h = seed & _MASK32
    length = len(data)
    body = length - length % 4

    for offset in range(0, body, 4):
        k = int.from_bytes(data[offset:offset + 4], "little")
        k = (k * c1) & _MASK32
        k = _rotl32(k, 15)
        k = (k * c2) & _MASK32
        h ^= k
        h = _rotl32(h, 13)
        h = (h * 5 + 0xE6546B64) & _MASK32

    tail = data[body:]
    if tail:
        k = int.from_bytes(tail, "little")
        k = (k * c1) & _MASK32
        k = _rotl32(k, 15)
        k = (k * c2) & _MASK32
        h ^= k

    h ^= length
    h ^= h >> 16
    h = (h * 0x85EBCA6B) & _MASK32
    h ^= h >> 13
    h = (h * 0xC2B2AE35) & _MASK32
    h ^= h >> 16
    return h


def hash_bytes(data: bytes) -> int:
    """Signed 32-bit hash of raw bytes."""
    return _to_signed32(murmur3_32(bytes(data), 0))


def hash_long(value: int) -> int:
    """Hash of a 64-bit integer, as 8 little-endian bytes."""
    return hash_bytes(value.to_bytes(8, "little", signed=True))


def hash_int(value: int) -> int:
    """Hash of a 32-bit integer; identical to the hash of the same long."""
    return hash_long(value)


def hash_date(value: int) -> int:
    """Hash of a date given as days since the unix epoch."""
    return hash_int(value)


def hash_time(value: int) -> int:
    """Hash of a time given as microseconds since midnight."""
    return hash_long(value)


def hash_timestamp(value: int) -> int:
    """Hash of a timestamp given as microseconds since the unix epoch."""
    return hash_long(value)


def hash_str(value: str) -> int:
    """Hash of the UTF-8 encoding of a string."""
    return hash_bytes(value.encode("utf-8"))


def hash_decimal(value: int) -> int:
    """Hash of an unscaled decimal, big-endian with leading zero bytes dropped."""
    raw = value.to_bytes(16, "big", signed=True)
    stripped = raw.lstrip(b"\x00")
    return hash_bytes(stripped if stripped else b"\x00")


_PRIMITIVE_HASHERS = {
    DataType.INT32: hash_int,
    DataType.INT64: hash_long,
    DataType.DECIMAL128: hash_decimal,
    DataType.DATE32: hash_date,
    DataType.TIME64_MICROS: hash_time,
    DataType.TIMESTAMP_MICROS: hash_timestamp,
}

_NON_NULL_HASHERS = {
    DataType.UTF8: hash_str,
    DataType.LARGE_UTF8: hash_str,
    DataType.BINARY: hash_bytes,
    DataType.LARGE_BINARY: hash_bytes,
    DataType.FIXED_SIZE_BINARY: hash_bytes,
}


class Bucket(TransformFunction):
    """Maps values to one of ``mod_n`` buckets."""

    def __init__(self, mod_n: int) -> None:
        self.mod_n = mod_n

    def __repr__(self) -> str:
        return f"Bucket(mod_n={self.mod_n})"

    def bucket_n(self, hashed: int) -> int:
        """``(hash & Integer.MAX_VALUE) % N``."""
        return (hashed & _INT32_MAX) % self.mod_n

    def transform(self, column: Column) -> Column:
        hasher = _PRIMITIVE_HASHERS.get(column.data_type)
        if hasher is not None:
            values = [None if v is None else self.bucket_n(hasher(v)) for v in column]
            return Column(DataType.INT32, values)

        hasher = _NON_NULL_HASHERS.get(column.data_type)
        if hasher is None:
            raise UnexpectedError(f"Unsupported data type: {column.data_type.value}")
        if any(v is None for v in column):
            raise UnexpectedError(
                f"Bucket transform does not accept null values of type {column.data_type.value}"
            )
        return Column(DataType.INT32, [self.bucket_n(hasher(v)) for v in column])