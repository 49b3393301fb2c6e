"""Bounded undo/redo over document snapshots.

Snapshots are whole values (grid + palette + dirty flag), not diffs. Grids in
published documents are read-only, so a snapshot shares the array instead of
copying it. Selection and view state are never part of history.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from beadrope.engine.document import PatternDocument, Rgba, freeze_grid

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 100


@dataclass(frozen=True)
class HistorySnapshot:
    grid: NDArray[np.int32]
    palette: tuple[Rgba, ...]
    dirty: bool

    @classmethod
    def capture(cls, document: PatternDocument, dirty: bool) -> HistorySnapshot:
        return cls(grid=freeze_grid(document.grid), palette=tuple(document.palette), dirty=dirty)


class HistoryManager:
    """Two bounded stacks; the oldest entries are evicted first."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        self.capacity = max(1, capacity)
        self._undo: deque[HistorySnapshot] = deque(maxlen=self.capacity)
        self._redo: deque[HistorySnapshot] = deque(maxlen=self.capacity)

    @property
    def can_undo(self) -> bool:
        return len(self._undo) > 0

    @property
    def can_redo(self) -> bool:
        return len(self._redo) > 0

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def push(self, snapshot: HistorySnapshot) -> None:
        """Record the pre-mutation state of a new edit; invalidates redo."""
        if len(self._undo) == self.capacity:
            logger.debug("Undo stack full (%d), evicting oldest snapshot", self.capacity)
        self._undo.append(snapshot)
        self._redo.clear()

    def undo(self, current: HistorySnapshot) -> HistorySnapshot | None:
        """Step back. ``current`` goes onto redo; returns the state to restore."""
        if not self._undo:
            return None
        self._redo.append(current)
        return self._undo.pop()

    def redo(self, current: HistorySnapshot) -> HistorySnapshot | None:
        if not self._redo:
            return None
        self._undo.append(current)
        return self._redo.pop()

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
