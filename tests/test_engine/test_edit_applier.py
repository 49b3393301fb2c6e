"""Tests for replaying EditOp scripts against the store."""

from __future__ import annotations

from beadrope.engine.edit_applier import apply_edits
from beadrope.models.edit_ops import EditOp, EditPlan
from tests.conftest import make_store


def _ops(*raw: dict) -> list[EditOp]:
    return EditPlan(operations=list(raw)).operations


class TestApplyEdits:
    def test_cell_and_line_ops(self, empty_store):
        results = apply_edits(empty_store, _ops(
            {"action": "set_cell", "x": 0, "y": 0, "color": 2},
            {"action": "draw_line", "x": 0, "y": 4, "x2": 4, "y2": 4, "color": 3},
            {"action": "toggle_cell", "x": 0, "y": 0, "color": 2},
        ))
        assert results == [True, True, True]
        assert empty_store.document.grid[0, 0] == 0
        assert empty_store.document.grid[4].tolist() == [3, 3, 3, 3, 3]

    def test_color_defaults_to_selected_color(self, empty_store):
        apply_edits(empty_store, _ops({"action": "set_cell", "x": 1, "y": 1}))
        assert empty_store.document.grid[1, 1] == empty_store.document.view.selected_color

    def test_missing_field_is_skipped(self, empty_store):
        results = apply_edits(empty_store, _ops(
            {"action": "set_cell", "x": 1},
            {"action": "set_cell", "x": 1, "y": 1, "color": 5},
        ))
        assert results == [False, True]

    def test_out_of_bounds_reports_no_change(self, empty_store):
        assert apply_edits(empty_store, _ops({"action": "set_cell", "x": 50, "y": 0, "color": 1})) == [False]

    def test_selection_transforms(self):
        store = make_store([[1, 2, 0, 0, 0], [0, 3, 0, 0, 0]])
        results = apply_edits(store, _ops(
            {"action": "select", "x": 0, "y": 0, "x2": 1, "y2": 1},
            {"action": "arrange", "copies": 2, "horizontal_offset": 2},
            {"action": "clear_selection"},
            {"action": "mirror_vertical"},
        ))
        assert results == [True, True, True, True]
        assert store.document.rows() == [[0, 3, 0, 3, 0], [3, 2, 1, 2, 1]]

    def test_undo_redo(self, empty_store):
        results = apply_edits(empty_store, _ops(
            {"action": "fill_line", "x": 0, "y": 0, "color": 4},
            {"action": "undo"},
            {"action": "undo"},
            {"action": "redo"},
        ))
        assert results == [True, True, False, True]
        assert empty_store.document.grid.all()

    def test_palette_and_metadata(self, empty_store):
        results = apply_edits(empty_store, _ops(
            {"action": "set_palette_color", "index": 2, "rgba": [1, 2, 3]},
            {"action": "set_background", "index": 2},
            {"action": "set_metadata", "author": "Ada"},
        ))
        assert results == [True, True, True]
        assert empty_store.document.palette[0] == (1, 2, 3, 255)
        assert empty_store.document.author == "Ada"

    def test_resize_and_shift(self, empty_store):
        results = apply_edits(empty_store, _ops(
            {"action": "set_width", "size": 8},
            {"action": "set_height", "size": 2},
            {"action": "shift_left"},
            {"action": "insert_row"},
        ))
        assert results == [True, False, True, True]
        assert empty_store.document.width == 8
        assert empty_store.document.height == 5
        assert empty_store.document.view.shift == 7

    def test_pick_color(self):
        store = make_store([[0, 0], [0, 6]])
        assert apply_edits(store, _ops({"action": "pick_color", "x": 1, "y": 1})) == [True]
        assert store.document.view.selected_color == 6
