"""beadrope pattern document engine."""

from beadrope.engine.document import (
    CellPoint,
    PatternDocument,
    Selection,
    ViewState,
    create_empty_document,
)
from beadrope.engine.history import HistoryManager, HistorySnapshot
from beadrope.engine.store import EditorSnapshot, EditorStore

__all__ = [
    "CellPoint",
    "PatternDocument",
    "Selection",
    "ViewState",
    "create_empty_document",
    "HistoryManager",
    "HistorySnapshot",
    "EditorSnapshot",
    "EditorStore",
]
