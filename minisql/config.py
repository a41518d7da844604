"""Engine-wide constants and the error type raised by database operations."""

from __future__ import annotations

from enum import IntEnum

INVALID_PAGE_ID = -1
INVALID_FRAME_ID = -1
INVALID_TXN_ID = -1
INVALID_LSN = -1

META_PAGE_ID = 0
CATALOG_META_PAGE_ID = 0
INDEX_ROOTS_PAGE_ID = 1

PAGE_SIZE = 4096
DEFAULT_BUFFER_POOL_SIZE = 20480

UINT32_MAX = 0xFFFFFFFF
INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1

FIELD_NULL_LEN = UINT32_MAX
VARCHAR_MAX_LEN = PAGE_SIZE // 2


class DbErr(IntEnum):
    """Outcome codes of database operations."""

    SUCCESS = 0
    FAILED = 1
    ALREADY_EXIST = 2
    NOT_EXIST = 3
    TABLE_ALREADY_EXIST = 4
    TABLE_NOT_EXIST = 5
    INDEX_ALREADY_EXIST = 6
    INDEX_NOT_FOUND = 7
    COLUMN_NAME_NOT_EXIST = 8
    KEY_NOT_FOUND = 9
    QUIT = 10


class DBError(Exception):
    """Raised when a database operation fails; carries a :class:`DbErr` code."""

    def __init__(self, code: DbErr, message: str | None = None) -> None:
        self.code = DbErr(code)
        self.message = message if message is not None else self.code.name
        super().__init__(self.message)