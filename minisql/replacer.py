"""Buffer-pool frame replacement policies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import OrderedDict


class Replacer(ABC):
    """Tracks which frames may be evicted and picks the next victim."""

    @abstractmethod
    def victim(self) -> int | None:
        """Remove and return the frame chosen for eviction, or ``None`` if none."""

    @abstractmethod
    def pin(self, frame_id: int) -> None:
        """Mark a frame as in use so it cannot be evicted."""

    @abstractmethod
    def unpin(self, frame_id: int) -> None:
        """Mark a frame as evictable."""

    @abstractmethod
    def __len__(self) -> int:
        """Number of frames that can currently be evicted."""


class LRUReplacer(Replacer):
    """Evicts the frame that has been evictable the longest."""

    def __init__(self, num_pages: int) -> None:
        self.num_pages = num_pages
        self._frames: OrderedDict[int, None] = OrderedDict()

    def victim(self) -> int | None:
        if not self._frames:
            return None
        frame_id, _ = self._frames.popitem(last=False)
        return frame_id

    def pin(self, frame_id: int) -> None:
        self._frames.pop(frame_id, None)

    def unpin(self, frame_id: int) -> None:
        if frame_id in self._frames or len(self._frames) >= self.num_pages:
            return
        self._frames[frame_id] = None

    def __len__(self) -> int:
        return len(self._frames)


class ClockReplacer(Replacer):
    """Second-chance clock: a referenced frame is skipped once before eviction."""

    def __init__(self, num_pages: int) -> None:
        self.capacity = num_pages
        self._clock: OrderedDict[int, bool] = OrderedDict()

    def victim(self) -> int | None:
        while self._clock:
            frame_id, referenced = self._clock.popitem(last=False)
            if not referenced:
                return frame_id
            self._clock[frame_id] = False
        return None

    def pin(self, frame_id: int) -> None:
        self._clock.pop(frame_id, None)

    def unpin(self, frame_id: int) -> None:
        if frame_id in self._clock:
            self._clock[frame_id] = True
        elif len(self._clock) < self.capacity:
            self._clock[frame_id] = True

    def __len__(self) -> int:
        return len(self._clock)