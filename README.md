# icebergkit

Building blocks for tables in the Iceberg table format:

- **Partition transforms** (`icebergkit.transform`): identity, void, bucket
  (32-bit MurmurHash3, x86 variant), truncate, and the temporal transforms
  year, month, day and hour. Each takes a typed `Column` and returns a new
  `Column` of partition values.
- **Scan planning** (`icebergkit.scan`, `icebergkit.table`): choose columns
  and a snapshot, then list the data files to read.
- **Transactions** (`icebergkit.transaction`): collect table updates and
  requirements (format version upgrade, setting or removing properties,
  replacing the sort order) and hand them to a catalog.

It needs Python 3.10 or later and has no runtime dependencies.

## Columns

`icebergkit.transform.base.Column` is an immutable column of values of one
`DataType`; `None` marks a null. Decimal values are unscaled integers (with
optional `precision` and `scale`), `DATE32` values are days since
1970-01-01, `TIME64_MICROS` and `TIMESTAMP_MICROS` values are microseconds.
A timestamp column may carry a `timezone` (an IANA name or an offset such as
`"-08:00"`); it decides the calendar date used by the year and month
transforms.

## Partition transforms

```python
from icebergkit.transform.base import Column, DataType
from icebergkit.transform.factory import Transform, TransformKind, create_transform_function

bucket = create_transform_function(Transform.bucket(16))
print(bucket.transform(Column(DataType.INT32, [1, 2, 34])))

truncate = create_transform_function(Transform.truncate(3))
print(truncate.transform(Column(DataType.UTF8, ["iceberg"])).values)   # ('ice',)

year = create_transform_function(Transform(TransformKind.YEAR))
print(year.transform(Column(DataType.DATE32, [0, 10957])).values)      # (0, 30)
```

`Transform` pairs a `TransformKind` with a parameter; `BUCKET` and
`TRUNCATE` require one, the other kinds take none, and a wrong combination
raises `DataInvalidError`. `create_transform_function` raises
`FeatureUnsupportedError` for `TransformKind.UNKNOWN`.

The transform classes can also be used directly: `Identity`, `Void`
(`icebergkit.transform.base`), `Bucket` (`icebergkit.transform.bucket`),
`Truncate` (`icebergkit.transform.truncate`), `Year`, `Month`, `Day`, `Hour`
(`icebergkit.transform.temporal`).

What each accepts:

- `Bucket`: integer, decimal, date, time, timestamp, string and binary
  columns; results are `INT32` bucket numbers, `(hash & 0x7FFFFFFF) % N`.
  Nulls pass through for numeric and temporal types; string and binary
  columns must not contain nulls. Other types raise `UnexpectedError`.
- `Truncate`: `INT32`, `INT64`, `DECIMAL128` (rounded down to a multiple of
  the width) and `UTF8` / `LARGE_UTF8` (cut to the width in characters).
  Other types raise `FeatureUnsupportedError`; a width that is not positive
  raises `DataInvalidError`.
- `Year`, `Month`, `Day`: date and timestamp columns. `Hour`: timestamp
  columns. Other types raise `UnexpectedError`.

The hash helpers are available on their own:

```python
from icebergkit.transform.bucket import hash_bytes, hash_int, hash_str, murmur3_32

hash_int(34)          # 2017239379
hash_str("iceberg")   # 1210000089
hash_bytes(bytes([0, 1, 2, 3]))   # -188683207
```

`hash_long`, `hash_date`, `hash_time`, `hash_timestamp` and `hash_decimal`
cover the other value types; `murmur3_32(data, seed)` returns the unsigned
hash.

## Scanning a table

`icebergkit.table.Table` holds a table's `file_io`, `metadata`,
`identifier` and optional `metadata_location`. The metadata object is
supplied by the caller and must offer `snapshot_by_id(id)` and
`current_snapshot()`; a snapshot must offer `snapshot_id`,
`schema(metadata)` (a schema with `field_by_name(name)`) and
`load_manifest_list(file_io, metadata)`.

```python
scan = table.scan().select(["x", "y"]).snapshot_id(3051729675574597004).build()
for task in scan.plan_files():
    print(task.data_file.file_path, task.start, task.length)
```

- `select` replaces any earlier selection; `select_all` (or selecting
  nothing) means all columns.
- Without `snapshot_id` the current snapshot is used; a table with no
  snapshot raises `FeatureUnsupportedError`.
- An unknown snapshot id or a column missing from the schema raises
  `DataInvalidError`.
- `plan_files` yields a `FileScanTask` for every live data file, covering
  the whole file. A live delete file raises `FeatureUnsupportedError`.

## Transactions

```python
from icebergkit.transaction import FormatVersion, NullOrder, Transaction

tx = (
    Transaction(table)
    .upgrade_table_version(FormatVersion.V2)
    .set_properties({"owner": "analytics"})
)
tx = tx.replace_sort_order().asc("id", NullOrder.FIRST).apply()
result = tx.commit(catalog)
```

- A transaction holds at most one update of each kind; a second one raises
  `DataInvalidError`.
- Upgrading to the current version adds nothing; downgrading raises
  `DataInvalidError`.
- `replace_sort_order()` returns a `ReplaceSortOrderAction`; `asc` and
  `desc` add identity sort fields by column name (an unknown name raises
  `DataInvalidError`), and `apply` adds `AddSortOrder` and
  `SetDefaultSortOrder(-1)` updates plus `CurrentSchemaIdMatch` and
  `DefaultSortOrderIdMatch` requirements.
- `commit(catalog)` builds a `TableCommit` and returns whatever
  `catalog.update_table(commit)` returns.

For transactions the table metadata must also offer `format_version`,
`current_schema()` (with `schema_id` and `field_id_by_name(name)`) and
`default_sort_order()` (with `order_id`).

## What it does not do

The package has no catalog, no file IO, no reader for table metadata files,
manifests or manifest lists, and no schema or data type model of its own.
These are supplied by the caller as objects with the members listed above.
It also does not read data files: a `FileScanTask` only names the file to
read.

## Errors

Every error is a subclass of `icebergkit.errors.IcebergError` and carries an
`ErrorKind` in its `kind` attribute:

- `DataInvalidError`
- `FeatureUnsupportedError`
- `UnexpectedError`