import pytest

from icebergkit.errors import DataInvalidError, FeatureUnsupportedError
from icebergkit.transform.base import Column, DataType
from icebergkit.transform.bucket import Bucket
from icebergkit.transform.factory import (
    Transform,
    TransformKind,
    create_transform_function,
)


def test_identity_returns_input():
    column = Column(DataType.INT32, [1, 2, None])
    func = create_transform_function(Transform(TransformKind.IDENTITY))
    assert func.transform(column) == column


def test_void_returns_nulls():
    column = Column(DataType.UTF8, ["a", "b"])
    res = create_transform_function(Transform(TransformKind.VOID)).transform(column)
    assert res.data_type is DataType.UTF8
    assert list(res) == [None, None]


def test_temporal_kinds_at_epoch():
    column = Column(DataType.DATE32, [0])
    for kind in (TransformKind.YEAR, TransformKind.MONTH, TransformKind.DAY):
        assert list(create_transform_function(Transform(kind)).transform(column)) == [0]
    ts = Column(DataType.TIMESTAMP_MICROS, [0])
    assert list(create_transform_function(Transform(TransformKind.HOUR)).transform(ts)) == [0]


def test_bucket_matches_bucket_function():
    column = Column(DataType.INT32, [34, 1, -7])
    func = create_transform_function(Transform.bucket(16))
    res = func.transform(column)
    assert res == Bucket(16).transform(column)
    assert all(0 <= v < 16 for v in res)


def test_truncate_spec_values():
    func = create_transform_function(Transform.truncate(10))
    assert list(func.transform(Column(DataType.INT32, [1, -1]))) == [0, -10]
    func = create_transform_function(Transform.truncate(3))
    assert list(func.transform(Column(DataType.UTF8, ["iceberg"]))) == ["ice"]


def test_constructors_equal_explicit_form():
    assert Transform.bucket(16) == Transform(TransformKind.BUCKET, 16)
    assert Transform.truncate(4) == Transform(TransformKind.TRUNCATE, 4)
    assert Transform.bucket(16).param == 16


def test_unknown_is_unsupported():
    with pytest.raises(FeatureUnsupportedError, match="Transform Unknown is not implemented"):
        create_transform_function(Transform(TransformKind.UNKNOWN))


def test_parameter_rules():
    with pytest.raises(DataInvalidError):
        Transform(TransformKind.BUCKET)
    with pytest.raises(DataInvalidError):
        Transform(TransformKind.DAY, 3)
    with pytest.raises(DataInvalidError):
        Transform.truncate(-1)


def test_zero_truncate_width_rejected():
    with pytest.raises(DataInvalidError):
        create_transform_function(Transform.truncate(0))