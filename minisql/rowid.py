"""Record identifiers: a page id and a slot number packed into 64 bits."""

from __future__ import annotations

from dataclasses import dataclass

from minisql.config import INT32_MAX, INT32_MIN, INVALID_PAGE_ID, UINT32_MAX

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


@dataclass(frozen=True)
class RowId:
    """Location of a row: ``| page_id (32 bit) | slot_num (32 bit) |``."""

    page_id: int = INVALID_PAGE_ID
    slot_num: int = 0

    def __post_init__(self) -> None:
        if not INT32_MIN <= self.page_id <= INT32_MAX:
            raise ValueError(f"page id out of range: {self.page_id}")
        if not 0 <= self.slot_num <= UINT32_MAX:
            raise ValueError(f"slot number out of range: {self.slot_num}")

    @classmethod
    def from_int(cls, value: int) -> RowId:
        """Split a 64-bit value into its page id (high half) and slot (low half)."""
        if not _INT64_MIN <= value <= _INT64_MAX:
            raise ValueError(f"row id out of 64-bit range: {value}")
        return cls(value >> 32, value & UINT32_MAX)

    def to_int(self) -> int:
        """Pack the page id and slot number into one 64-bit value."""
        return (self.page_id << 32) | self.slot_num

    def __int__(self) -> int:
        return self.to_int()


INVALID_ROWID = RowId(INVALID_PAGE_ID, 0)