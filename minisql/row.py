"""Rows: ordered field values with a null bitmap encoding."""

from __future__ import annotations

import dataclasses
import struct
from dataclasses import dataclass

from minisql.rowid import INVALID_ROWID, RowId
from minisql.schema import Schema
from minisql.types import Field

_COUNT = struct.Struct("<I")


def _bitmap_size(count: int) -> int:
    return (count + 7) // 8


@dataclass
class Row:
    """The field values of one record and the id of where it is stored.

    Encoded as ``| field count | null bitmap | field 1 | ... | field N |``; a
    null field sets its bit (most significant bit first) and takes no bytes.
    """

    fields: list[Field] = dataclasses.field(default_factory=list)
    row_id: RowId = INVALID_ROWID

    def __post_init__(self) -> None:
        self.fields = list(self.fields)

    def field(self, index: int) -> Field:
        if not 0 <= index < len(self.fields):
            raise IndexError("Failed to access field")
        return self.fields[index]

    def field_count(self) -> int:
        return len(self.fields)

    def _check_schema(self, schema: Schema) -> None:
        if schema.column_count() != len(self.fields):
            raise ValueError("Fields size do not match schema's column size.")

    def serialize(self, schema: Schema) -> bytes:
        """Encode the row against ``schema``."""
        self._check_schema(schema)
        bitmap = bytearray(_bitmap_size(len(self.fields)))
        for i, value in enumerate(self.fields):
            if value.is_null:
                bitmap[i // 8] |= 1 << (7 - i % 8)
        parts = [_COUNT.pack(len(self.fields)), bytes(bitmap)]
        parts.extend(value.serialize() for value in self.fields)
        return b"".join(parts)

    @classmethod
    def deserialize(
        cls,
        data: bytes | bytearray | memoryview,
        schema: Schema,
        row_id: RowId = INVALID_ROWID,
    ) -> tuple[Row, int]:
        """Decode a row laid out for ``schema``; returns it and the bytes consumed."""
        view = memoryview(data)
        try:
            (count,) = _COUNT.unpack_from(view, 0)
        except struct.error as exc:
            raise ValueError("not enough data for a row header") from exc
        if count > schema.column_count():
            raise ValueError("row has more fields than the schema has columns")
        offset = _COUNT.size
        size = _bitmap_size(count)
        if len(view) < offset + size:
            raise ValueError("not enough data for a null bitmap")
        bitmap = bytes(view[offset:offset + size])
        offset += size
        fields = []
        for i in range(count):
            is_null = bool(bitmap[i // 8] & (1 << (7 - i % 8)))
            value, consumed = Field.deserialize(view[offset:], schema.columns[i].type_id, is_null)
            fields.append(value)
            offset += consumed
        return cls(fields, row_id), offset

    def serialized_size(self, schema: Schema) -> int:
        """Number of bytes :meth:`serialize` produces."""
        self._check_schema(schema)
        return (
            _COUNT.size
            + _bitmap_size(len(self.fields))
            + sum(value.serialized_size() for value in self.fields)
        )

    def key_from_row(self, schema: Schema, key_schema: Schema) -> Row:
        """The row of this row's values for the columns of ``key_schema``."""
        return Row([self.fields[schema.column_index(c.name)] for c in key_schema.columns])