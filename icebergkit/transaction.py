"""Transactions that collect table updates and requirements for a catalog commit."""

from __future__ import annotations

import dataclasses
import enum
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Protocol, Union

from .errors import DataInvalidError, UnexpectedError
from .transform.factory import Transform, TransformKind

if TYPE_CHECKING:
    from .table import Table


class FormatVersion(enum.IntEnum):
    """Version of the table format."""

    V1 = 1
    V2 = 2

    def __str__(self) -> str:
        return f"v{self.value}"


class SortDirection(enum.Enum):
    """Direction of a sort field."""

    ASCENDING = "asc"
    DESCENDING = "desc"


class NullOrder(enum.Enum):
    """Where nulls are placed in a sort."""

    FIRST = "nulls-first"
    LAST = "nulls-last"


@dataclasses.dataclass(frozen=True)
class SortField:
    """One field of a sort order."""

    source_id: int
    direction: SortDirection
    null_order: NullOrder
    transform: Transform = Transform(TransformKind.IDENTITY)


@dataclasses.dataclass(frozen=True)
class SortOrder:
    """An ordered list of sort fields identified by ``order_id``."""

    order_id: int = 0
    fields: tuple[SortField, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))


@dataclasses.dataclass(frozen=True)
class UpgradeFormatVersion:
    """Upgrade the table to a newer format version."""

    format_version: FormatVersion


@dataclasses.dataclass(frozen=True)
class SetProperties:
    """Set table properties."""

    updates: Mapping[str, str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "updates", dict(self.updates))


@dataclasses.dataclass(frozen=True)
class RemoveProperties:
    """Remove table properties."""

    removals: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "removals", tuple(self.removals))


@dataclasses.dataclass(frozen=True)
class AddSortOrder:
    """Add a sort order to the table."""

    sort_order: SortOrder


@dataclasses.dataclass(frozen=True)
class SetDefaultSortOrder:
    """Make a sort order the default; -1 means the last one added."""

    sort_order_id: int


@dataclasses.dataclass(frozen=True)
class CurrentSchemaIdMatch:
    """The table's current schema id must match."""

    current_schema_id: int


@dataclasses.dataclass(frozen=True)
class DefaultSortOrderIdMatch:
    """The table's default sort order id must match."""

    default_sort_order_id: int


TableUpdate = Union[
    UpgradeFormatVersion, SetProperties, RemoveProperties, AddSortOrder, SetDefaultSortOrder
]
TableRequirement = Union[CurrentSchemaIdMatch, DefaultSortOrderIdMatch]


@dataclasses.dataclass(frozen=True)
class TableCommit:
    """Updates and requirements to apply to one table."""

    ident: Any
    updates: tuple[TableUpdate, ...] = ()
    requirements: tuple[TableRequirement, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "updates", tuple(self.updates))
        object.__setattr__(self, "requirements", tuple(self.requirements))


class Catalog(Protocol):
    def update_table(self, commit: TableCommit) -> Any: ...


class Transaction:
    """Collects changes to a table; at most one update of each kind."""

    def __init__(self, table: "Table") -> None:
        self.table = table
        self.updates: list[TableUpdate] = []
        self.requirements: list[TableRequirement] = []

    def _append_updates(self, updates: Iterable[TableUpdate]) -> None:
        updates = list(updates)
        existing = {type(up) for up in self.updates}
        for update in updates:
            if type(update) in existing:
                raise DataInvalidError(
                    f"Cannot apply update with same type at same time: {update!r}"
                )
        self.updates.extend(updates)

    def upgrade_table_version(self, format_version: FormatVersion) -> "Transaction":
        """Upgrade the table's format version; downgrading is an error."""
        current = FormatVersion(self.table.metadata.format_version)
        target = FormatVersion(format_version)
        if current > target:
            raise DataInvalidError(
                f"Cannot downgrade table version from {current} to {target}"
            )
        if current < target:
            self._append_updates([UpgradeFormatVersion(target)])
        return self

    def set_properties(self, props: Mapping[str, str]) -> "Transaction":
        """Set table properties."""
        self._append_updates([SetProperties(props)])
        return self

    def replace_sort_order(self) -> "ReplaceSortOrderAction":
        """Start building a replacement sort order."""
        return ReplaceSortOrderAction(self)

    def remove_properties(self, keys: Iterable[str]) -> "Transaction":
        """Remove table properties."""
        self._append_updates([RemoveProperties(tuple(keys))])
        return self

    def commit(self, catalog: Catalog) -> Any:
        """Send the collected changes to ``catalog`` and return its result."""
        commit = TableCommit(
            ident=self.table.identifier,
            updates=tuple(self.updates),
            requirements=tuple(self.requirements),
        )
        return catalog.update_table(commit)


class ReplaceSortOrderAction:
    """Builds a new sort order and applies it to a transaction."""

    def __init__(self, tx: Transaction) -> None:
        self.tx = tx
        self.sort_fields: list[SortField] = []

    def asc(self, name: str, null_order: NullOrder) -> "ReplaceSortOrderAction":
        """Add a field sorted in ascending order."""
        return self._add_sort_field(name, SortDirection.ASCENDING, null_order)

    def desc(self, name: str, null_order: NullOrder) -> "ReplaceSortOrderAction":
        """Add a field sorted in descending order."""
        return self._add_sort_field(name, SortDirection.DESCENDING, null_order)

    def apply(self) -> Transaction:
        """Add the sort order updates and requirements to the transaction."""
        metadata = self.tx.table.metadata
        default_order = metadata.default_sort_order()
        if default_order is None:
            raise UnexpectedError("default sort order impossible to be None")

        updates = [
            AddSortOrder(SortOrder(fields=tuple(self.sort_fields))),
            SetDefaultSortOrder(-1),
        ]
        requirements = [
            CurrentSchemaIdMatch(int(metadata.current_schema().schema_id)),
            DefaultSortOrderIdMatch(default_order.order_id),
        ]
        existing = {type(up) for up in self.tx.updates}
        for update in updates:
            if type(update) in existing:
                raise DataInvalidError(
                    f"Cannot apply update with same type at same time: {update!r}"
                )
        self.tx.requirements.extend(requirements)
        self.tx._append_updates(updates)
        return self.tx

    def _add_sort_field(
        self, name: str, direction: SortDirection, null_order: NullOrder
    ) -> "ReplaceSortOrderAction":
        field_id = self.tx.table.metadata.current_schema().field_id_by_name(name)
        if field_id is None:
            raise DataInvalidError(f"Cannot find field {name} in table schema")
        self.sort_fields.append(
            SortField(
                source_id=field_id,
                direction=direction,
                null_order=null_order,
                transform=Transform(TransformKind.IDENTITY),
            )
        )
        return self