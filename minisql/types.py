"""Column value types and the typed field values stored in rows."""

from __future__ import annotations

import operator
import struct
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from minisql.config import FIELD_NULL_LEN, INT32_MAX, INT32_MIN, VARCHAR_MAX_LEN

_INT = struct.Struct("<i")
_FLOAT = struct.Struct("<f")
_LEN = struct.Struct("<I")


class TypeId(IntEnum):
    """Identifier of a column type."""

    INVALID = 0
    INT = 1
    FLOAT = 2
    CHAR = 3


class CmpBool(IntEnum):
    """Three-valued comparison result; ``NULL`` when either side is null."""

    FALSE = 0
    TRUE = 1
    NULL = 2


def get_cmp_bool(value: bool) -> CmpBool:
    """Turn a plain boolean into :class:`CmpBool`."""
    return CmpBool.TRUE if value else CmpBool.FALSE


def get_type_size(type_id: TypeId) -> int:
    """Fixed storage size of a type; ``0`` for variable-length CHAR."""
    if type_id == TypeId.INT:
        return _INT.size
    if type_id == TypeId.FLOAT:
        return _FLOAT.size
    if type_id == TypeId.CHAR:
        return 0
    raise ValueError("Unknown field type.")


_OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "=": operator.eq,
    "==": operator.eq,
    "<>": operator.ne,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


class Type(ABC):
    """Behaviour shared by every column type: encoding and comparison."""

    type_id: TypeId = TypeId.INVALID

    @abstractmethod
    def coerce(self, value: Any) -> Any:
        """Validate a non-null value and return its stored form."""

    @abstractmethod
    def _encode(self, value: Any) -> bytes:
        """Encode a non-null stored value."""

    @abstractmethod
    def _decode(self, data: bytes | bytearray | memoryview) -> tuple[Any, int]:
        """Decode a non-null value, returning it and the bytes consumed."""

    def serialize(self, field: Field) -> bytes:
        """Encode a field; a null field takes no bytes."""
        if field.is_null:
            return b""
        return self._encode(field.value)

    def deserialize(self, data: bytes | bytearray | memoryview, is_null: bool) -> tuple[Field, int]:
        """Decode a field from the start of ``data``; returns it and the bytes consumed."""
        if is_null:
            return Field(self.type_id), 0
        value, consumed = self._decode(data)
        return Field(self.type_id, value), consumed

    def serialized_size(self, field: Field) -> int:
        """Number of bytes :meth:`serialize` produces for ``field``."""
        if field.is_null:
            return 0
        return len(self._encode(field.value))

    def compare(self, left: Field, right: Field, op: str) -> CmpBool:
        """Compare two fields with an SQL operator such as ``"<"`` or ``"<>"``."""
        try:
            fn = _OPERATORS[op]
        except KeyError:
            raise ValueError(f"unknown comparison operator: {op!r}") from None
        if not left.check_comparable(right):
            raise TypeError("Not comparable.")
        if left.is_null or right.is_null:
            return CmpBool.NULL
        return get_cmp_bool(fn(left.value, right.value))


class TypeInt(Type):
    """32-bit signed integer."""

    type_id = TypeId.INT

    def coerce(self, value: Any) -> int:
        number = operator.index(value)
        if not INT32_MIN <= number <= INT32_MAX:
            raise ValueError(f"integer out of 32-bit range: {number}")
        return number

    def _encode(self, value: int) -> bytes:
        return _INT.pack(value)

    def _decode(self, data: bytes | bytearray | memoryview) -> tuple[int, int]:
        try:
            (value,) = _INT.unpack_from(data, 0)
        except struct.error as exc:
            raise ValueError("not enough data for an INT field") from exc
        return value, _INT.size


class TypeFloat(Type):
    """32-bit IEEE float."""

    type_id = TypeId.FLOAT

    def coerce(self, value: Any) -> float:
        try:
            (stored,) = _FLOAT.unpack(_FLOAT.pack(float(value)))
        except (struct.error, OverflowError) as exc:
            raise ValueError(f"value does not fit a 32-bit float: {value!r}") from exc
        return stored

    def _encode(self, value: float) -> bytes:
        return _FLOAT.pack(value)

    def _decode(self, data: bytes | bytearray | memoryview) -> tuple[float, int]:
        try:
            (value,) = _FLOAT.unpack_from(data, 0)
        except struct.error as exc:
            raise ValueError("not enough data for a FLOAT field") from exc
        return value, _FLOAT.size


class TypeChar(Type):
    """Variable-length byte string, stored as a 32-bit length and the bytes."""

    type_id = TypeId.CHAR

    def coerce(self, value: Any) -> bytes:
        if isinstance(value, str):
            data = value.encode("utf-8")
        elif isinstance(value, (bytes, bytearray, memoryview)):
            data = bytes(value)
        else:
            raise TypeError(f"CHAR value must be str or bytes, not {type(value).__name__}")
        if len(data) >= VARCHAR_MAX_LEN:
            raise ValueError("Field length exceeds max varchar length")
        return data

    def _encode(self, value: bytes) -> bytes:
        return _LEN.pack(len(value)) + value

    def _decode(self, data: bytes | bytearray | memoryview) -> tuple[bytes, int]:
        try:
            (length,) = _LEN.unpack_from(data, 0)
        except struct.error as exc:
            raise ValueError("not enough data for a CHAR length") from exc
        end = _LEN.size + length
        if len(data) < end:
            raise ValueError("not enough data for a CHAR field")
        return bytes(data[_LEN.size:end]), end


_TYPES: dict[TypeId, Type] = {
    TypeId.INT: TypeInt(),
    TypeId.FLOAT: TypeFloat(),
    TypeId.CHAR: TypeChar(),
}


def type_for(type_id: TypeId) -> Type:
    """The shared :class:`Type` instance for ``type_id``."""
    try:
        return _TYPES[TypeId(type_id)]
    except (KeyError, ValueError):
        raise ValueError(f"unsupported field type: {type_id!r}") from None


@dataclass(frozen=True)
class Field:
    """One typed value of a row; ``value`` is ``None`` for SQL NULL."""

    type_id: TypeId
    value: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "type_id", TypeId(self.type_id))
        if self.value is not None:
            object.__setattr__(self, "value", type_for(self.type_id).coerce(self.value))

    @property
    def is_null(self) -> bool:
        return self.value is None

    @property
    def length(self) -> int:
        """Byte length of a CHAR value; ``FIELD_NULL_LEN`` when null."""
        if self.type_id != TypeId.CHAR:
            raise TypeError("length is defined only for CHAR fields")
        return FIELD_NULL_LEN if self.value is None else len(self.value)

    def check_comparable(self, other: Field) -> bool:
        return self.type_id == other.type_id

    def serialize(self) -> bytes:
        return type_for(self.type_id).serialize(self)

    @classmethod
    def deserialize(
        cls, data: bytes | bytearray | memoryview, type_id: TypeId, is_null: bool
    ) -> tuple[Field, int]:
        """Decode a field of ``type_id``; returns it and the bytes consumed."""
        return type_for(type_id).deserialize(data, is_null)

    def serialized_size(self) -> int:
        return type_for(self.type_id).serialized_size(self)

    def compare_equals(self, other: Field) -> CmpBool:
        return type_for(self.type_id).compare(self, other, "=")

    def compare_not_equals(self, other: Field) -> CmpBool:
        return type_for(self.type_id).compare(self, other, "<>")

    def compare_less_than(self, other: Field) -> CmpBool:
        return type_for(self.type_id).compare(self, other, "<")

    def compare_less_than_equals(self, other: Field) -> CmpBool:
        return type_for(self.type_id).compare(self, other, "<=")

    def compare_greater_than(self, other: Field) -> CmpBool:
        return type_for(self.type_id).compare(self, other, ">")

    def compare_greater_than_equals(self, other: Field) -> CmpBool:
        return type_for(self.type_id).compare(self, other, ">=")

    def __str__(self) -> str:
        if self.value is None:
            return "NULL"
        if self.type_id == TypeId.INT:
            return str(self.value)
        if self.type_id == TypeId.FLOAT:
            return f"{self.value:.6f}"
        return self.value.decode("utf-8", errors="replace")