"""Edit applier — replays EditOp scripts against an EditorStore."""

from __future__ import annotations

import logging
from typing import Callable

from beadrope.engine.document import CellPoint, Selection
from beadrope.engine.store import EditorStore
from beadrope.models.edit_ops import EditOp

logger = logging.getLogger(__name__)


def apply_edits(store: EditorStore, ops: list[EditOp]) -> list[bool]:
    """Apply operations in order. Returns, per op, whether it changed anything.

    Ops missing a field they need are logged and skipped, like out-of-bounds
    coordinates; they never abort the remaining ops.
    """
    results: list[bool] = []
    for op in ops:
        handler = _HANDLERS.get(op.action)
        if handler is None:
            logger.warning("Edit op %s: no handler, skipping", op.action)
            results.append(False)
            continue
        try:
            results.append(bool(handler(store, op)))
        except _MissingField as e:
            logger.warning("Edit op %s: missing %s, skipping", op.action, e)
            results.append(False)
    return results


class _MissingField(Exception):
    pass


def _need(op: EditOp, *names: str) -> tuple:
    values = tuple(getattr(op, n) for n in names)
    missing = [n for n, v in zip(names, values) if v is None]
    if missing:
        raise _MissingField(", ".join(missing))
    return values


def _color(store: EditorStore, op: EditOp) -> int:
    return store.document.view.selected_color if op.color is None else op.color


def _line(store: EditorStore, op: EditOp) -> bool:
    x, y, x2, y2 = _need(op, "x", "y", "x2", "y2")
    return store.draw_line(CellPoint(x, y), CellPoint(x2, y2), _color(store, op))


def _select(store: EditorStore, op: EditOp) -> bool:
    x, y, x2, y2 = _need(op, "x", "y", "x2", "y2")
    return store.set_selection(Selection(CellPoint(x, y), CellPoint(x2, y2)))


_HANDLERS: dict[str, Callable[[EditorStore, EditOp], bool]] = {
    "set_cell": lambda s, op: s.set_cell(*_need(op, "x", "y"), _color(s, op)),
    "toggle_cell": lambda s, op: s.toggle_cell(*_need(op, "x", "y"), _color(s, op)),
    "draw_line": _line,
    "fill_line": lambda s, op: s.fill_line(CellPoint(*_need(op, "x", "y")), _color(s, op)),
    "pick_color": lambda s, op: s.pick_color_at(CellPoint(*_need(op, "x", "y"))),
    "insert_row": lambda s, op: s.insert_row(),
    "delete_row": lambda s, op: s.delete_row(),
    "set_width": lambda s, op: s.set_pattern_width(*_need(op, "size")),
    "set_height": lambda s, op: s.set_pattern_height(*_need(op, "size")),
    "select": _select,
    "clear_selection": lambda s, op: s.clear_selection(),
    "delete_selection": lambda s, op: s.delete_selection(),
    "mirror_horizontal": lambda s, op: s.mirror_horizontal(),
    "mirror_vertical": lambda s, op: s.mirror_vertical(),
    "rotate_clockwise": lambda s, op: s.rotate_clockwise(),
    "arrange": lambda s, op: s.arrange_selection(op.copies, op.horizontal_offset, op.vertical_offset),
    "set_palette_color": lambda s, op: s.set_palette_color(*_need(op, "index", "rgba")),
    "set_background": lambda s, op: s.set_color_as_background(*_need(op, "index")),
    "set_metadata": lambda s, op: s.set_metadata(op.author, op.organization, op.notes),
    "shift_left": lambda s, op: s.shift_left(),
    "shift_right": lambda s, op: s.shift_right(),
    "undo": lambda s, op: s.undo(),
    "redo": lambda s, op: s.redo(),
}
