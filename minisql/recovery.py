"""Write-ahead log records and a redo/undo recovery manager over a key-value store."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from minisql.config import INVALID_LSN, INVALID_TXN_ID


class LogRecType(Enum):
    """Kind of a log record."""

    INVALID = auto()
    INSERT = auto()
    DELETE = auto()
    UPDATE = auto()
    BEGIN = auto()
    COMMIT = auto()
    ABORT = auto()


@dataclass
class LogRec:
    """One log record; only the key/value fields of its own kind are meaningful."""

    type: LogRecType = LogRecType.INVALID
    lsn: int = INVALID_LSN
    txn_id: int = INVALID_TXN_ID
    prev_lsn: int = INVALID_LSN
    ins_key: str = ""
    ins_val: int = 0
    del_key: str = ""
    del_val: int = 0
    old_key: str = ""
    old_val: int = 0
    new_key: str = ""
    new_val: int = 0


class LogRecorder:
    """Hands out log sequence numbers and links each record to its transaction's previous one."""

    def __init__(self) -> None:
        self.next_lsn = 0
        self.prev_lsn_map: dict[int, int] = {}

    def reset(self) -> None:
        """Start numbering from zero and forget every transaction."""
        self.next_lsn = 0
        self.prev_lsn_map.clear()

    def _new(self, rec_type: LogRecType, txn_id: int) -> LogRec:
        lsn = self.next_lsn
        self.next_lsn += 1
        prev_lsn = self.prev_lsn_map.get(txn_id, INVALID_LSN)
        self.prev_lsn_map[txn_id] = lsn
        return LogRec(rec_type, lsn, txn_id, prev_lsn)

    def create_insert_log(self, txn_id: int, ins_key: str, ins_val: int) -> LogRec:
        rec = self._new(LogRecType.INSERT, txn_id)
        rec.ins_key = ins_key
        rec.ins_val = ins_val
        return rec

    def create_delete_log(self, txn_id: int, del_key: str, del_val: int) -> LogRec:
        rec = self._new(LogRecType.DELETE, txn_id)
        rec.del_key = del_key
        rec.del_val = del_val
        return rec

    def create_update_log(
        self, txn_id: int, old_key: str, old_val: int, new_key: str, new_val: int
    ) -> LogRec:
        rec = self._new(LogRecType.UPDATE, txn_id)
        rec.old_key = old_key
        rec.old_val = old_val
        rec.new_key = new_key
        rec.new_val = new_val
        return rec

    def create_begin_log(self, txn_id: int) -> LogRec:
        return self._new(LogRecType.BEGIN, txn_id)

    def create_commit_log(self, txn_id: int) -> LogRec:
        return self._new(LogRecType.COMMIT, txn_id)

    def create_abort_log(self, txn_id: int) -> LogRec:
        return self._new(LogRecType.ABORT, txn_id)


@dataclass
class CheckPoint:
    """State captured at a checkpoint: its LSN, active transactions and persisted data."""

    checkpoint_lsn: int = INVALID_LSN
    active_txns: dict[int, int] = field(default_factory=dict)
    persist_data: dict[str, int] = field(default_factory=dict)

    def add_active_txn(self, txn_id: int, last_lsn: int) -> None:
        """Record ``txn_id`` as active with ``last_lsn`` as its latest record."""
        self.active_txns[txn_id] = last_lsn

    def add_data(self, key: str, val: int) -> None:
        """Record a persisted value; an existing key keeps its first value."""
        self.persist_data.setdefault(key, val)


class RecoveryManager:
    """Restores a key-value store from a checkpoint by redoing and undoing log records."""

    def __init__(self) -> None:
        self._log_recs: dict[int, LogRec] = {}
        self._persist_lsn = INVALID_LSN
        self._active_txns: dict[int, int] = {}
        self._data: dict[str, int] = {}

    def init(self, checkpoint: CheckPoint) -> None:
        """Start from the state saved at ``checkpoint``."""
        self._persist_lsn = checkpoint.checkpoint_lsn
        self._active_txns = dict(checkpoint.active_txns)
        self._data.clear()
        self._data.update(checkpoint.persist_data)

    def redo_phase(self) -> None:
        """Replay every record from the checkpoint on, rolling back aborted transactions."""
        for lsn in sorted(self._log_recs):
            if lsn < self._persist_lsn:
                continue
            rec = self._log_recs[lsn]
            self._active_txns[rec.txn_id] = rec.lsn
            if rec.type is LogRecType.INSERT:
                self._data[rec.ins_key] = rec.ins_val
            elif rec.type is LogRecType.DELETE:
                self._data.pop(rec.del_key, None)
            elif rec.type is LogRecType.UPDATE:
                self._data.pop(rec.old_key, None)
                self._data[rec.new_key] = rec.new_val
            elif rec.type is LogRecType.COMMIT:
                del self._active_txns[rec.txn_id]
            elif rec.type is LogRecType.ABORT:
                self.rollback(rec.txn_id)

    def undo_phase(self) -> None:
        """Roll back every transaction still active after the redo phase."""
        for txn_id in list(self._active_txns):
            self.rollback(txn_id)

    def rollback(self, txn_id: int) -> None:
        """Undo the changes of ``txn_id`` by following its record chain backwards."""
        if txn_id not in self._active_txns:
            raise KeyError(f"transaction {txn_id} is not active")
        lsn = self._active_txns[txn_id]
        while lsn != INVALID_LSN:
            try:
                rec = self._log_recs[lsn]
            except KeyError:
                raise KeyError(f"log record {lsn} is missing") from None
            if rec.type is LogRecType.INSERT:
                self._data.pop(rec.ins_key, None)
            elif rec.type is LogRecType.DELETE:
                self._data[rec.del_key] = rec.del_val
            elif rec.type is LogRecType.UPDATE:
                self._data.pop(rec.new_key, None)
                self._data[rec.old_key] = rec.old_val
            lsn = rec.prev_lsn
        del self._active_txns[txn_id]

    def append_log_rec(self, log_rec: LogRec) -> None:
        """Add a record to the log; a record with an LSN already present is ignored."""
        self._log_recs.setdefault(log_rec.lsn, log_rec)

    def database(self) -> dict[str, int]:
        """The live key-value data being recovered."""
        return self._data