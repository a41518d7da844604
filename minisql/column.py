"""Column definitions of a table and their on-disk encoding."""

from __future__ import annotations

import dataclasses
import struct
from dataclasses import dataclass

from minisql.types import TypeId, get_type_size

COLUMN_MAGIC_NUM = 210928

_MAGIC = struct.Struct("<I")
_NAME_LEN = struct.Struct("<Q")
# type id, length, table index, nullable, unique
_TAIL = struct.Struct("<iII??")


@dataclass
class Column:
    """A named, typed column at a fixed position in a table.

    For CHAR columns ``length`` is the maximum byte length and must be given;
    for INT and FLOAT it is the fixed size of the type and must be left out.
    """

    name: str
    type_id: TypeId
    table_index: int
    nullable: bool = False
    unique: bool = False
    length: int | None = None

    def __post_init__(self) -> None:
        try:
            self.type_id = TypeId(self.type_id)
        except ValueError:
            raise ValueError(f"Unsupported column type: {self.type_id!r}") from None
        if self.type_id == TypeId.CHAR:
            if self.length is None:
                raise ValueError("CHAR column needs a length.")
            if self.length < 0:
                raise ValueError(f"negative column length: {self.length}")
        elif self.type_id in (TypeId.INT, TypeId.FLOAT):
            if self.length is not None:
                raise ValueError("Only CHAR columns take a length.")
            self.length = get_type_size(self.type_id)
        else:
            raise ValueError("Unsupported column type.")
        if self.table_index < 0:
            raise ValueError(f"negative table index: {self.table_index}")
        self.nullable = bool(self.nullable)
        self.unique = bool(self.unique)

    def copy(self) -> Column:
        """An independent copy of this column."""
        return dataclasses.replace(self, length=self.length if self.type_id == TypeId.CHAR else None)

    def serialize(self) -> bytes:
        """Encode the column: magic, name, type, length, index and flags."""
        name = self.name.encode("utf-8")
        return b"".join(
            (
                _MAGIC.pack(COLUMN_MAGIC_NUM),
                _NAME_LEN.pack(len(name)),
                name,
                _TAIL.pack(int(self.type_id), self.length, self.table_index, self.nullable, self.unique),
            )
        )

    def serialized_size(self) -> int:
        """Number of bytes :meth:`serialize` produces."""
        return _MAGIC.size + _NAME_LEN.size + len(self.name.encode("utf-8")) + _TAIL.size

    @classmethod
    def deserialize(cls, data: bytes | bytearray | memoryview) -> tuple[Column, int]:
        """Decode a column from the start of ``data``; returns it and the bytes consumed."""
        view = memoryview(data)
        try:
            (magic,) = _MAGIC.unpack_from(view, 0)
            offset = _MAGIC.size
            if magic != COLUMN_MAGIC_NUM:
                raise ValueError("This is not a column")
            (name_len,) = _NAME_LEN.unpack_from(view, offset)
            offset += _NAME_LEN.size
            if len(view) < offset + name_len:
                raise ValueError("not enough data for a column name")
            name = bytes(view[offset:offset + name_len]).decode("utf-8")
            offset += name_len
            type_id, length, table_index, nullable, unique = _TAIL.unpack_from(view, offset)
            offset += _TAIL.size
        except struct.error as exc:
            raise ValueError("not enough data for a column") from exc
        kind = TypeId(type_id) if type_id in TypeId._value2member_map_ else type_id
        column = cls(
            name,
            kind,
            table_index,
            nullable,
            unique,
            length if kind == TypeId.CHAR else None,
        )
        return column, offset