import dataclasses

import pytest

from icebergkit.errors import DataInvalidError, UnexpectedError
from icebergkit.table import Table
from icebergkit.transaction import (
    AddSortOrder,
    CurrentSchemaIdMatch,
    DefaultSortOrderIdMatch,
    FormatVersion,
    NullOrder,
    RemoveProperties,
    SetDefaultSortOrder,
    SetProperties,
    SortDirection,
    SortField,
    SortOrder,
    TableCommit,
    Transaction,
    UpgradeFormatVersion,
)
from icebergkit.transform.factory import Transform, TransformKind


@dataclasses.dataclass
class FakeSchema:
    schema_id: int
    names: dict

    def field_id_by_name(self, name):
        return self.names.get(name)


@dataclasses.dataclass
class FakeSortOrder:
    order_id: int


@dataclasses.dataclass
class FakeMetadata:
    format_version: FormatVersion
    schema: FakeSchema
    sort_order: FakeSortOrder | None

    def current_schema(self):
        return self.schema

    def default_sort_order(self):
        return self.sort_order

    def snapshot_by_id(self, snapshot_id):
        return None

    def current_snapshot(self):
        return None


class RecordingCatalog:
    def __init__(self):
        self.commits = []

    def update_table(self, commit):
        self.commits.append(commit)
        return "updated"


def _make_table(version, schema_id, sort_order_id):
    metadata = FakeMetadata(
        format_version=version,
        schema=FakeSchema(schema_id, {"x": 1, "y": 2, "z": 3}),
        sort_order=None if sort_order_id is None else FakeSortOrder(sort_order_id),
    )
    return Table(
        file_io=None,
        metadata=metadata,
        identifier=("ns1", "test1"),
        metadata_location="s3://bucket/test/location/metadata/v1.json",
    )


def make_v1_table():
    return _make_table(FormatVersion.V1, 0, 0)


def make_v2_table():
    return _make_table(FormatVersion.V2, 1, 3)


def test_upgrade_table_version_v1_to_v2():
    tx = Transaction(make_v1_table()).upgrade_table_version(FormatVersion.V2)
    assert tx.updates == [UpgradeFormatVersion(FormatVersion.V2)]


def test_upgrade_table_version_v2_to_v2():
    tx = Transaction(make_v2_table()).upgrade_table_version(FormatVersion.V2)
    assert tx.updates == []
    assert tx.requirements == []


def test_downgrade_table_version():
    tx = Transaction(make_v2_table())
    with pytest.raises(DataInvalidError, match="Cannot downgrade table version from v2 to v1"):
        tx.upgrade_table_version(FormatVersion.V1)


def test_set_table_property():
    tx = Transaction(make_v2_table()).set_properties({"a": "b"})
    assert tx.updates == [SetProperties({"a": "b"})]


def test_remove_property():
    tx = Transaction(make_v2_table()).remove_properties(["a", "b"])
    assert tx.updates == [RemoveProperties(("a", "b"))]


def test_replace_sort_order():
    tx = Transaction(make_v2_table()).replace_sort_order().apply()
    assert tx.updates == [AddSortOrder(SortOrder()), SetDefaultSortOrder(-1)]
    assert tx.requirements == [CurrentSchemaIdMatch(1), DefaultSortOrderIdMatch(3)]


def test_do_same_update_in_same_transaction():
    tx = Transaction(make_v2_table()).remove_properties(["a", "b"])
    with pytest.raises(DataInvalidError, match="same type"):
        tx.remove_properties(["c", "d"])
    assert tx.updates == [RemoveProperties(("a", "b"))]


def test_different_update_kinds_combine():
    tx = (
        Transaction(make_v1_table())
        .upgrade_table_version(FormatVersion.V2)
        .set_properties({"k": "v"})
        .remove_properties(["old"])
    )
    assert [type(u) for u in tx.updates] == [
        UpgradeFormatVersion,
        SetProperties,
        RemoveProperties,
    ]


def test_replace_sort_order_with_fields():
    tx = (
        Transaction(make_v2_table())
        .replace_sort_order()
        .asc("x", NullOrder.FIRST)
        .desc("z", NullOrder.LAST)
        .apply()
    )
    identity = Transform(TransformKind.IDENTITY)
    expected = SortOrder(
        fields=(
            SortField(1, SortDirection.ASCENDING, NullOrder.FIRST, identity),
            SortField(3, SortDirection.DESCENDING, NullOrder.LAST, identity),
        )
    )
    assert tx.updates[0] == AddSortOrder(expected)


def test_sort_by_unknown_field_fails():
    action = Transaction(make_v2_table()).replace_sort_order()
    with pytest.raises(DataInvalidError, match="Cannot find field missing in table schema"):
        action.asc("missing", NullOrder.FIRST)


def test_replace_sort_order_twice_fails():
    tx = Transaction(make_v2_table()).replace_sort_order().apply()
    with pytest.raises(DataInvalidError):
        tx.replace_sort_order().apply()
    assert len(tx.requirements) == 2


def test_replace_sort_order_without_default_fails():
    table = _make_table(FormatVersion.V2, 1, None)
    with pytest.raises(UnexpectedError):
        Transaction(table).replace_sort_order().apply()


def test_commit_sends_changes_to_catalog():
    catalog = RecordingCatalog()
    tx = Transaction(make_v2_table()).set_properties({"a": "b"})
    result = tx.commit(catalog)
    assert result == "updated"
    assert catalog.commits == [
        TableCommit(
            ident=("ns1", "test1"),
            updates=(SetProperties({"a": "b"}),),
            requirements=(),
        )
    ]


def test_format_version_display_and_order():
    tx = Transaction(make_v2_table())
    with pytest.raises(DataInvalidError) as info:
        tx.upgrade_table_version(FormatVersion.V1)
    message = str(info.value)
    assert str(FormatVersion.V1) == "v1"
    assert "v2" in message and "v1" in message
    assert message.index("v2") < message.index("v1")
    assert FormatVersion.V1 < FormatVersion.V2
    assert tx.updates == []