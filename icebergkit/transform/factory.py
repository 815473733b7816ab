"""Transform descriptions and construction of their transform functions."""

from __future__ import annotations

import dataclasses
import enum

from ..errors import DataInvalidError, FeatureUnsupportedError
from .base import Identity, TransformFunction, Void
from .bucket import Bucket
from .temporal import Day, Hour, Month, Year
from .truncate import Truncate


class TransformKind(enum.Enum):
    """Kind of partition transform."""

    IDENTITY = "identity"
    VOID = "void"
    YEAR = "year"
    MONTH = "month"
    DAY = "day"
    HOUR = "hour"
    BUCKET = "bucket"
    TRUNCATE = "truncate"
    UNKNOWN = "unknown"


_PARAMETERISED = frozenset({TransformKind.BUCKET, TransformKind.TRUNCATE})


@dataclasses.dataclass(frozen=True)
class Transform:
    """A transform kind together with its parameter, if it takes one."""

    kind: TransformKind
    param: int | None = None

    def __post_init__(self) -> None:
        if self.kind in _PARAMETERISED:
            if self.param is None:
                raise DataInvalidError(f"Transform {self.kind.value} requires a parameter")
            if self.param < 0:
                raise DataInvalidError(
                    f"Transform {self.kind.value} parameter must not be negative: {self.param}"
                )
        elif self.param is not None:
            raise DataInvalidError(f"Transform {self.kind.value} takes no parameter")

    @staticmethod
    def bucket(mod_n: int) -> "Transform":
        """A bucket transform into ``mod_n`` buckets."""
        return Transform(TransformKind.BUCKET, mod_n)

    @staticmethod
    def truncate(width: int) -> "Transform":
        """A truncate transform to ``width``."""
        return Transform(TransformKind.TRUNCATE, width)


_SIMPLE = {
    TransformKind.IDENTITY: Identity,
    TransformKind.VOID: Void,
    TransformKind.YEAR: Year,
    TransformKind.MONTH: Month,
    TransformKind.DAY: Day,
    TransformKind.HOUR: Hour,
}


def create_transform_function(transform: Transform) -> TransformFunction:
    """Build the transform function that computes values for ``transform``."""
    simple = _SIMPLE.get(transform.kind)
    if simple is not None:
        return simple()
    if transform.kind is TransformKind.BUCKET:
        return Bucket(transform.param)
    if transform.kind is TransformKind.TRUNCATE:
        return Truncate(transform.param)
    raise FeatureUnsupportedError("Transform Unknown is not implemented")