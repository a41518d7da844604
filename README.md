# minisql

The storage core of a small relational database, in pure Python with no
third-party dependencies: typed values, column and schema metadata, row
encoding, buffer-frame replacement policies, a reader-writer latch, a table
result writer, and a redo/undo recovery manager over a key-value store.

## Modules

- `minisql.config`: page and buffer constants (`PAGE_SIZE`,
  `INVALID_PAGE_ID`, `VARCHAR_MAX_LEN`, ...), the `DbErr` status codes, and
  the `DBError` exception, which carries a `DbErr` in its `code` attribute.
- `minisql.rowid`: `RowId`, a frozen page id and slot number.
  `RowId.to_int()` (or `int(rid)`) packs them into one 64-bit value and
  `RowId.from_int()` splits it again. `INVALID_ROWID` marks "no location".
- `minisql.rwlatch`: `ReaderWriterLatch`, which allows many readers or one
  writer. `r_lock`/`r_unlock` and `w_lock`/`w_unlock` pair up, and the
  `read_locked()` and `write_locked()` context managers hold the latch for a
  `with` block. A writer that is waiting keeps new readers out. Releasing a
  read latch that is not held raises `RuntimeError`.
- `minisql.result_writer`: `ResultWriter`, which writes cells, `+---+`
  dividers and a closing summary line such as `3 row in set(0.0012 sec).` to a
  text stream.
- `minisql.replacer`: the abstract `Replacer` (`victim`, `pin`, `unpin`,
  `len()`) and two policies. `LRUReplacer` evicts the frame that has been
  unpinned longest. `ClockReplacer` gives each frame a second chance before it
  is evicted. `victim()` returns `None` when no frame can be evicted.
- `minisql.types`: `TypeId` (`INT`, `FLOAT`, `CHAR`), the comparison result
  `CmpBool` (`TRUE`, `FALSE`, `NULL`), the types `TypeInt`, `TypeFloat` and
  `TypeChar`, and `Field`, one immutable typed value (`None` stands for
  NULL):
  - INT values are checked against the 32-bit range.
  - FLOAT values are rounded to 32-bit precision.
  - CHAR values are stored as bytes, and a `str` is encoded as UTF-8.
  - Comparisons such as `compare_less_than` return `CmpBool.NULL` when either
    side is null, and raise `TypeError` when the two types differ.
- `minisql.column`: `Column`, with a name, type, table position, nullable and
  unique flags. CHAR columns must be given a `length`; other types must not.
- `minisql.schema`: `Schema`, an ordered list of columns. `column_index(name)`
  raises `DBError` with `DbErr.COLUMN_NAME_NOT_EXIST` for an unknown name.
  `shallow_copy(attrs)` returns a schema that shares the selected columns, and
  `deep_copy()` returns one that holds copies of them.
- `minisql.row`: `Row`, the fields of one record plus its `RowId`. A row is
  encoded as its field count, then a null bitmap, then the non-null fields.
  `key_from_row(schema, key_schema)` picks out the key fields.
- `minisql.recovery`: `LogRecType`, `LogRec`, `LogRecorder` (assigns LSNs and
  links each record to the previous one of its transaction), `CheckPoint` and
  `RecoveryManager`.

`Column`, `Schema`, `Row` and `Field` each have `serialize()` and
`serialized_size()`. Their `deserialize` class method returns a pair: the
decoded object and the number of bytes it consumed. Malformed input, such as a
wrong magic number or too little data, raises `ValueError`.

## Installation

```
pip install .
```

To install with the test dependencies:

```
pip install .[test]
```

## Example

This example builds a schema and a row, serializes the row, and reads it
back:

```python
from minisql.column import Column
from minisql.row import Row
from minisql.schema import Schema
from minisql.types import CmpBool, Field, TypeId

schema = Schema([
    Column("id", TypeId.INT, 0, False, False),
    Column("name", TypeId.CHAR, 1, True, False, length=64),
])
row = Row([Field(TypeId.INT, 7), Field(TypeId.CHAR, "minisql")])

data = row.serialize(schema)
assert len(data) == row.serialized_size(schema)

copy, consumed = Row.deserialize(data, schema)
assert consumed == len(data)
assert copy.field(1).compare_equals(row.field(1)) is CmpBool.TRUE
```

## Recovery

```python
from minisql.recovery import CheckPoint, LogRecorder, RecoveryManager

log = LogRecorder()
records = [
    log.create_begin_log(0),
    log.create_insert_log(0, "A", 1),
    log.create_commit_log(0),
    log.create_begin_log(1),
    log.create_insert_log(1, "B", 2),
]

manager = RecoveryManager()
manager.init(CheckPoint())
for record in records:
    manager.append_log_rec(record)

manager.redo_phase()   # replays every record at or after the checkpoint LSN
manager.undo_phase()   # rolls back transaction 1, which never committed
assert manager.database() == {"A": 1}
```

During the redo phase, an ABORT record rolls its transaction back at once.
The undo phase then rolls back every transaction that is still active.

## What this package does not do

This package is the record and recovery layer only. It has no disk manager,
no buffer pool, no table heap or table iterator, no B+ tree index, no catalog,
no SQL parser or executor, and no command-line shell. It does not write pages
to files. Rows, schemas and columns become bytes, and storing those bytes is
left to the caller. The recovery manager works on an in-memory key-value
dictionary, not on table data.

## Running the tests

```
pytest
```