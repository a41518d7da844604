"""Table and index schemas: ordered lists of columns."""

from __future__ import annotations

import struct
from collections.abc import Iterable
from dataclasses import dataclass

from minisql.column import Column
from minisql.config import DbErr, DBError

SCHEMA_MAGIC_NUM = 200715

_HEADER = struct.Struct("<II")
_FLAG = struct.Struct("<?")


@dataclass
class Schema:
    """An ordered set of columns.

    ``is_manage`` is false for schemas that borrow their columns from another
    schema, as index key schemas do.
    """

    columns: list[Column]
    is_manage: bool = True

    def __post_init__(self) -> None:
        self.columns = list(self.columns)
        self.is_manage = bool(self.is_manage)

    def column_index(self, name: str) -> int:
        """Position of the column called ``name``."""
        for index, column in enumerate(self.columns):
            if column.name == name:
                return index
        raise DBError(DbErr.COLUMN_NAME_NOT_EXIST, f"column {name!r} does not exist")

    def column_count(self) -> int:
        return len(self.columns)

    def __len__(self) -> int:
        return len(self.columns)

    def shallow_copy(self, attrs: Iterable[int]) -> Schema:
        """A schema sharing the columns at positions ``attrs``, in that order."""
        return Schema([self.columns[i] for i in attrs], is_manage=False)

    def deep_copy(self) -> Schema:
        """A schema holding copies of every column."""
        return Schema([column.copy() for column in self.columns], is_manage=True)

    def serialize(self) -> bytes:
        """Encode magic, column count, each column and the ownership flag."""
        parts = [_HEADER.pack(SCHEMA_MAGIC_NUM, len(self.columns))]
        parts.extend(column.serialize() for column in self.columns)
        parts.append(_FLAG.pack(self.is_manage))
        return b"".join(parts)

    def serialized_size(self) -> int:
        """Number of bytes :meth:`serialize` produces."""
        return _HEADER.size + sum(c.serialized_size() for c in self.columns) + _FLAG.size

    @classmethod
    def deserialize(cls, data: bytes | bytearray | memoryview) -> tuple[Schema, int]:
        """Decode a schema from the start of ``data``; returns it and the bytes consumed."""
        view = memoryview(data)
        try:
            magic, count = _HEADER.unpack_from(view, 0)
        except struct.error as exc:
            raise ValueError("not enough data for a schema") from exc
        if magic != SCHEMA_MAGIC_NUM:
            raise ValueError("This is not a schema")
        offset = _HEADER.size
        columns = []
        for _ in range(count):
            column, consumed = Column.deserialize(view[offset:])
            columns.append(column)
            offset += consumed
        try:
            (is_manage,) = _FLAG.unpack_from(view, offset)
        except struct.error as exc:
            raise ValueError("not enough data for a schema") from exc
        offset += _FLAG.size
        return cls(columns, is_manage), offset