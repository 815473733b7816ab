"""A table in the catalog: its metadata, file IO and identifier."""

from __future__ import annotations

import dataclasses
from typing import Any

from .scan import TableMetadataLike, TableScanBuilder


@dataclasses.dataclass(frozen=True)
class Table:
    """A table with its current metadata and the file IO used to read it."""

    file_io: Any
    metadata: TableMetadataLike
    identifier: Any
    metadata_location: str | None = None

    def scan(self) -> TableScanBuilder:
        """Start building a scan of this table."""
        return TableScanBuilder(self)