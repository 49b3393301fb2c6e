"""EditorStore — the single owner of the editing state.

Holds the current document, selection and dirty flag, routes every edit
through the history manager and publishes an immutable EditorSnapshot to
subscribers after each change. Operations that would change nothing publish
nothing and leave history alone.

Usage:
    store = EditorStore(create_empty_document(4, 4))
    unsubscribe = store.subscribe(lambda snap: print(snap.dirty))
    store.draw_line(CellPoint(0, 0), CellPoint(3, 1), 7)
    store.undo()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable

import numpy as np
from numpy.typing import NDArray

from beadrope.engine import mutations, selection_ops
from beadrope.engine.document import (
    DEFAULT_BEAD_SYMBOLS,
    TOOLS,
    CellPoint,
    PatternDocument,
    Selection,
    ViewPane,
    create_empty_document,
    normalize_rgba,
)
from beadrope.engine.history import DEFAULT_CAPACITY, HistoryManager, HistorySnapshot

logger = logging.getLogger(__name__)

MIN_ZOOM_INDEX = 0
MAX_ZOOM_INDEX = 7
NORMAL_ZOOM_INDEX = 3

_VISIBILITY_FIELDS: dict[str, str] = {
    "draft": "draft_visible",
    "corrected": "corrected_visible",
    "simulation": "simulation_visible",
    "report": "report_visible",
}

_UNSET = object()


@dataclass(frozen=True)
class EditorSnapshot:
    document: PatternDocument
    selection: Selection | None
    dirty: bool
    can_undo: bool
    can_redo: bool


@dataclass(frozen=True)
class DragPreview:
    """Uncommitted pointer-drag state for the line and select tools."""

    tool: str
    start: CellPoint
    end: CellPoint


Subscriber = Callable[[EditorSnapshot], None]


class EditorStore:
    def __init__(
        self,
        document: PatternDocument | None = None,
        history_capacity: int = DEFAULT_CAPACITY,
    ) -> None:
        self._document = document or create_empty_document()
        self._selection: Selection | None = None
        self._dirty = False
        self._history = HistoryManager(history_capacity)
        self._subscribers: list[Subscriber] = []
        self._drag: DragPreview | None = None

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    @property
    def document(self) -> PatternDocument:
        return self._document

    @property
    def selection(self) -> Selection | None:
        return self._selection

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    @property
    def history(self) -> HistoryManager:
        return self._history

    @property
    def drag_preview(self) -> DragPreview | None:
        return self._drag

    def snapshot(self) -> EditorSnapshot:
        return EditorSnapshot(
            document=self._document,
            selection=self._selection,
            dirty=self._dirty,
            can_undo=self._history.can_undo,
            can_redo=self._history.can_redo,
        )

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register an observer; returns a function that unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # ------------------------------------------------------------------
    # Internal publish / commit
    # ------------------------------------------------------------------

    def _publish(
        self,
        document: PatternDocument | None = None,
        selection=_UNSET,
        dirty: bool | None = None,
    ) -> None:
        if document is not None:
            self._document = document
        if selection is not _UNSET:
            self._selection = selection
        if dirty is not None:
            self._dirty = dirty

        snap = self.snapshot()
        for callback in list(self._subscribers):
            try:
                callback(snap)
            except Exception as e:
                logger.warning("Subscriber %r failed: %s", callback, e)

    def _push_history(self) -> None:
        self._history.push(HistorySnapshot.capture(self._document, self._dirty))

    def _commit_grid(self, grid: NDArray[np.int32] | None, selection=_UNSET, document: PatternDocument | None = None) -> bool:
        """Publish an edited grid with one history push. ``None`` means no-op."""
        if grid is None:
            return False
        self._push_history()
        base = document or self._document
        self._publish(document=base.with_grid(grid), selection=selection, dirty=True)
        return True

    # ------------------------------------------------------------------
    # Mutation primitives
    # ------------------------------------------------------------------

    def set_cell(self, x: int, y: int, value: int) -> bool:
        return self._commit_grid(mutations.set_cell(self._document.grid, x, y, value))

    def toggle_cell(self, x: int, y: int, value: int) -> bool:
        return self._commit_grid(mutations.toggle_cell(self._document.grid, x, y, value))

    def pick_color_at(self, point: CellPoint) -> bool:
        """Eyedropper: copy a bead's color into the drawing color. Never touches history."""
        doc = self._document
        if not doc.is_inside(point.x, point.y):
            return False
        color_index = int(doc.grid[point.y, point.x])
        if doc.view.selected_color == color_index:
            return False
        self._publish(document=doc.with_view(selected_color=color_index))
        return True

    def draw_line(self, start: CellPoint, end: CellPoint, value: int) -> bool:
        return self._commit_grid(mutations.draw_line(self._document.grid, start, end, value))

    def fill_line(self, point: CellPoint, value: int) -> bool:
        return self._commit_grid(mutations.fill_line(self._document.grid, point, value))

    def insert_row(self) -> bool:
        return self._commit_grid(mutations.insert_row(self._document.grid))

    def delete_row(self) -> bool:
        return self._commit_grid(mutations.delete_row(self._document.grid))

    def set_pattern_width(self, width: int) -> bool:
        grid = mutations.resize_width(self._document.grid, width)
        if grid is None:
            return False
        new_width = grid.shape[1]
        doc = self._document.with_view(shift=self._document.view.shift % new_width)
        return self._commit_grid(grid, selection=None, document=doc)

    def set_pattern_height(self, height: int) -> bool:
        grid = mutations.resize_height(self._document.grid, height)
        if grid is None:
            return False
        new_height = grid.shape[0]
        scroll = max(0, min(self._document.view.scroll, new_height - 1))
        doc = self._document.with_view(scroll=scroll)
        return self._commit_grid(grid, selection=None, document=doc)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def set_selection(self, selection: Selection | None) -> bool:
        if selection is not None:
            selection = selection.clamped(self._document.width, self._document.height)
            if selection.is_single_point:
                selection = None
        if selection == self._selection:
            return False
        self._publish(selection=selection)
        return True

    def clear_selection(self) -> bool:
        return self.set_selection(None)

    def delete_selection(self) -> bool:
        if self._selection is None:
            return False
        grid = selection_ops.delete_selection(self._document.grid, self._selection)
        if grid is None:
            self._publish(selection=None)
            return False
        return self._commit_grid(grid, selection=None)

    def mirror_horizontal(self) -> bool:
        return self._commit_grid(selection_ops.mirror_horizontal(self._document.grid, self._selection))

    def mirror_vertical(self) -> bool:
        return self._commit_grid(selection_ops.mirror_vertical(self._document.grid, self._selection))

    def rotate_clockwise(self) -> bool:
        return self._commit_grid(selection_ops.rotate_clockwise(self._document.grid, self._selection))

    def arrange_selection(self, copies: int, horizontal_offset: int, vertical_offset: int) -> bool:
        grid = selection_ops.arrange_selection(
            self._document.grid, self._selection, copies, horizontal_offset, vertical_offset,
        )
        return self._commit_grid(grid)

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def undo(self) -> bool:
        previous = self._history.undo(HistorySnapshot.capture(self._document, self._dirty))
        return self._restore(previous)

    def redo(self) -> bool:
        following = self._history.redo(HistorySnapshot.capture(self._document, self._dirty))
        return self._restore(following)

    def _restore(self, snapshot: HistorySnapshot | None) -> bool:
        if snapshot is None:
            return False
        doc = replace(self._document, grid=snapshot.grid, palette=snapshot.palette)
        width = doc.width
        if width and doc.view.shift >= width:
            doc = doc.with_view(shift=doc.view.shift % width)
        # Selection may point outside a grid restored to a smaller size
        selection = self._selection
        if selection is not None:
            selection = selection.clamped(doc.width, doc.height)
            if selection.is_single_point:
                selection = None
        self._publish(document=doc, selection=selection, dirty=snapshot.dirty)
        return True

    def mark_saved(self) -> bool:
        """Clear the dirty flag; both history stacks are kept."""
        if not self._dirty:
            return False
        self._publish(dirty=False)
        return True

    def set_document(self, document: PatternDocument) -> None:
        """Load a new document; history is cleared at this boundary."""
        self._history.clear()
        self._drag = None
        logger.info("Loaded document %dx%d", document.width, document.height)
        self._publish(document=document, selection=None, dirty=False)

    def reset(self) -> None:
        self.set_document(create_empty_document())

    # ------------------------------------------------------------------
    # Palette and metadata
    # ------------------------------------------------------------------

    def set_metadata(
        self,
        author: str | None = None,
        organization: str | None = None,
        notes: str | None = None,
    ) -> bool:
        doc = self._document
        updated = replace(
            doc,
            author=doc.author if author is None else author,
            organization=doc.organization if organization is None else organization,
            notes=doc.notes if notes is None else notes,
        )
        if (updated.author, updated.organization, updated.notes) == (doc.author, doc.organization, doc.notes):
            return False
        self._publish(document=updated, dirty=True)
        return True

    def set_palette_color(self, index: int, color) -> bool:
        palette = self._document.palette
        if index < 0 or index >= len(palette):
            return False
        normalized = normalize_rgba(color)
        if normalized == palette[index]:
            return False
        self._push_history()
        new_palette = palette[:index] + (normalized,) + palette[index + 1 :]
        self._publish(document=replace(self._document, palette=new_palette), dirty=True)
        return True

    def set_color_as_background(self, index: int) -> bool:
        """Swap palette entry ``index`` with the background entry 0."""
        palette = list(self._document.palette)
        if index <= 0 or index >= len(palette):
            return False
        self._push_history()
        palette[0], palette[index] = palette[index], palette[0]
        self._publish(document=replace(self._document, palette=tuple(palette)), dirty=True)
        return True

    # ------------------------------------------------------------------
    # View state (never part of history)
    # ------------------------------------------------------------------

    def _set_view(self, **changes) -> bool:
        view = self._document.view
        if all(getattr(view, k) == v for k, v in changes.items()):
            return False
        self._publish(document=self._document.with_view(**changes))
        return True

    def set_selected_color(self, color_index: int) -> bool:
        if color_index < 0 or color_index >= len(self._document.palette):
            return False
        return self._set_view(selected_color=color_index)

    def set_selected_tool(self, tool: str) -> bool:
        if tool not in TOOLS:
            logger.warning("Unknown tool %r ignored", tool)
            return False
        view = self._document.view
        if view.selected_tool == tool and (tool == "select" or self._selection is None):
            return False
        selection = self._selection if tool == "select" else None
        self._publish(document=self._document.with_view(selected_tool=tool), selection=selection)
        return True

    def set_view_visibility(self, pane: ViewPane, visible: bool) -> bool:
        key = _VISIBILITY_FIELDS.get(pane)
        if key is None:
            logger.warning("Unknown view pane %r ignored", pane)
            return False
        return self._set_view(**{key: visible})

    def set_view_scroll(self, scroll: int) -> bool:
        return self._set_view(scroll=max(0, int(np.floor(scroll))))

    def set_zoom(self, zoom: int) -> bool:
        return self._set_view(zoom=max(MIN_ZOOM_INDEX, min(MAX_ZOOM_INDEX, int(np.floor(zoom)))))

    def zoom_in(self) -> bool:
        return self.set_zoom(self._document.view.zoom + 1)

    def zoom_out(self) -> bool:
        return self.set_zoom(self._document.view.zoom - 1)

    def zoom_normal(self) -> bool:
        return self.set_zoom(NORMAL_ZOOM_INDEX)

    def set_draw_colors(self, draw_colors: bool) -> bool:
        return self._set_view(draw_colors=draw_colors)

    def set_draw_symbols(self, draw_symbols: bool) -> bool:
        return self._set_view(draw_symbols=draw_symbols)

    def set_symbols(self, symbols: str) -> bool:
        normalized = symbols or DEFAULT_BEAD_SYMBOLS
        if self._document.view.symbols == normalized:
            return False
        self._publish(document=self._document.with_view(symbols=normalized), dirty=True)
        return True

    def shift_left(self) -> bool:
        width = self._document.width
        if width <= 0:
            return False
        return self._set_view(shift=(self._document.view.shift - 1) % width)

    def shift_right(self) -> bool:
        width = self._document.width
        if width <= 0:
            return False
        return self._set_view(shift=(self._document.view.shift + 1) % width)

    # ------------------------------------------------------------------
    # Pointer drags (line / select previews)
    # ------------------------------------------------------------------

    def begin_drag(self, point: CellPoint) -> None:
        """Start a line or select drag with the current tool; other tools ignore drags."""
        tool = self._document.view.selected_tool
        if tool not in ("line", "select"):
            self._drag = None
            return
        self._drag = DragPreview(tool=tool, start=point, end=point)

    def update_drag(self, point: CellPoint) -> None:
        if self._drag is not None:
            self._drag = replace(self._drag, end=point)

    def end_drag(self, point: CellPoint | None = None) -> bool:
        """Commit the drag: draw the line or set the selection."""
        drag = self._drag
        self._drag = None
        if drag is None:
            return False
        end = point or drag.end
        if drag.tool == "line":
            return self.draw_line(drag.start, end, self._document.view.selected_color)
        return self.set_selection(Selection(drag.start, end))

    def cancel_drag(self) -> None:
        """Discard the drag with no effect on the document."""
        self._drag = None
