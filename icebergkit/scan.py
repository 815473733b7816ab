"""Planning scans of a table's data files."""

from __future__ import annotations

import dataclasses
import enum
from typing import TYPE_CHECKING, Any, Iterable, Iterator, Protocol

from .errors import DataInvalidError, FeatureUnsupportedError

if TYPE_CHECKING:
    from .table import Table


class ContentType(enum.Enum):
    """What a data file holds."""

    DATA = 0
    POSITION_DELETES = 1
    EQUALITY_DELETES = 2


class SchemaLike(Protocol):
    def field_by_name(self, name: str) -> Any | None: ...


class ManifestEntryLike(Protocol):
    is_alive: bool
    content_type: ContentType
    file_path: str
    file_size_in_bytes: int


class ManifestLike(Protocol):
    entries: Iterable[ManifestEntryLike]


class ManifestFileLike(Protocol):
    def load_manifest(self, file_io: Any) -> ManifestLike: ...


class ManifestListLike(Protocol):
    entries: Iterable[ManifestFileLike]


class SnapshotLike(Protocol):
    snapshot_id: int

    def schema(self, metadata: Any) -> SchemaLike: ...

    def load_manifest_list(self, file_io: Any, metadata: Any) -> ManifestListLike: ...


class TableMetadataLike(Protocol):
    def snapshot_by_id(self, snapshot_id: int) -> SnapshotLike | None: ...

    def current_snapshot(self) -> SnapshotLike | None: ...


@dataclasses.dataclass(frozen=True)
class FileScanTask:
    """A task to scan part of one data file."""

    data_file: ManifestEntryLike
    start: int
    length: int


@dataclasses.dataclass(frozen=True)
class TableScan:
    """A scan of one snapshot of a table."""

    snapshot: SnapshotLike
    table_metadata: TableMetadataLike
    file_io: Any
    column_names: tuple[str, ...]
    schema: SchemaLike

    def plan_files(self) -> Iterator[FileScanTask]:
        """Return the tasks scanning every live data file of the snapshot.

        Raises ``FeatureUnsupportedError`` if the snapshot holds delete files.
        """
        manifest_list = self.snapshot.load_manifest_list(self.file_io, self.table_metadata)
        tasks: list[FileScanTask] = []
        for manifest_file in manifest_list.entries:
            manifest = manifest_file.load_manifest(self.file_io)
            for entry in manifest.entries:
                if not entry.is_alive:
                    continue
                if entry.content_type is not ContentType.DATA:
                    raise FeatureUnsupportedError("Delete files are not supported yet.")
                tasks.append(FileScanTask(entry, 0, entry.file_size_in_bytes))
        return iter(tasks)


class TableScanBuilder:
    """Builds a ``TableScan``; no selected columns means all columns."""

    def __init__(self, table: "Table") -> None:
        self._table = table
        self._column_names: list[str] = []
        self._snapshot_id: int | None = None

    def select_all(self) -> "TableScanBuilder":
        """Select all columns."""
        self._column_names = []
        return self

    def select(self, column_names: Iterable[Any]) -> "TableScanBuilder":
        """Select the given columns, replacing any earlier selection."""
        if isinstance(column_names, str):
            column_names = [column_names]
        self._column_names = [str(name) for name in column_names]
        return self

    def snapshot_id(self, snapshot_id: int) -> "TableScanBuilder":
        """Scan this snapshot instead of the current one."""
        self._snapshot_id = snapshot_id
        return self

    def build(self) -> TableScan:
        """Resolve the snapshot and check the selected columns."""
        metadata = self._table.metadata
        if self._snapshot_id is not None:
            snapshot = metadata.snapshot_by_id(self._snapshot_id)
            if snapshot is None:
                raise DataInvalidError(f"Snapshot with id {self._snapshot_id} not found")
        else:
            snapshot = metadata.current_snapshot()
            if snapshot is None:
                raise FeatureUnsupportedError("Can't scan table without snapshots")

        schema = snapshot.schema(metadata)
        for name in self._column_names:
            if schema.field_by_name(name) is None:
                raise DataInvalidError(f"Column {name} not found in table.")

        return TableScan(
            snapshot=snapshot,
            table_metadata=metadata,
            file_io=self._table.file_io,
            column_names=tuple(self._column_names),
            schema=schema,
        )