"""Tests for EditorStore: history, dirty tracking, selection, view state, drags."""

from __future__ import annotations

import numpy as np
import pytest

from beadrope.engine.document import DEFAULT_BEAD_SYMBOLS, CellPoint, Selection, create_empty_document
from beadrope.engine.store import EditorStore
from tests.conftest import make_document, make_store


def _sel(x0: int, y0: int, x1: int, y1: int) -> Selection:
    return Selection(CellPoint(x0, y0), CellPoint(x1, y1))


class TestHistory:
    def test_undo_restores_grid_and_dirty(self, empty_store):
        assert empty_store.set_cell(1, 1, 3)
        assert empty_store.dirty
        assert empty_store.undo()
        assert not empty_store.document.grid.any()
        assert not empty_store.dirty

    def test_redo_reproduces_post_state(self, empty_store):
        empty_store.draw_line(CellPoint(0, 0), CellPoint(4, 0), 2)
        after = empty_store.document.grid.copy()
        empty_store.undo()
        assert empty_store.redo()
        assert np.array_equal(empty_store.document.grid, after)
        assert empty_store.dirty

    def test_new_edit_discards_redo(self, empty_store):
        empty_store.set_cell(0, 0, 1)
        empty_store.undo()
        assert empty_store.can_redo
        empty_store.set_cell(2, 2, 1)
        assert not empty_store.can_redo
        assert not empty_store.redo()

    def test_undo_on_empty_history(self, empty_store):
        assert not empty_store.undo()
        assert not empty_store.redo()

    def test_noop_edit_pushes_nothing(self, empty_store):
        assert not empty_store.set_cell(0, 0, 0)
        assert not empty_store.set_cell(99, 0, 1)
        assert not empty_store.can_undo

    def test_mark_saved_keeps_stacks(self, empty_store):
        empty_store.set_cell(0, 0, 1)
        empty_store.set_cell(1, 0, 1)
        assert empty_store.mark_saved()
        assert not empty_store.dirty
        assert empty_store.can_undo
        # First undo restores a snapshot captured while dirty
        empty_store.undo()
        assert empty_store.dirty
        empty_store.undo()
        assert not empty_store.dirty
        # Redo back to the saved state is clean again
        empty_store.redo()
        empty_store.redo()
        assert not empty_store.dirty

    def test_capacity_evicts_oldest(self):
        store = EditorStore(create_empty_document(5, 5), history_capacity=3)
        for x in range(5):
            store.set_cell(x, 0, 1)
        assert store.history.undo_depth == 3
        while store.undo():
            pass
        assert store.document.grid[0].tolist() == [1, 1, 0, 0, 0]

    def test_set_document_clears_history(self, empty_store, striped_document):
        empty_store.set_cell(0, 0, 1)
        empty_store.set_document(striped_document)
        assert not empty_store.can_undo
        assert not empty_store.dirty
        assert empty_store.document == striped_document

    def test_reset(self, empty_store):
        empty_store.set_cell(0, 0, 1)
        empty_store.reset()
        assert empty_store.document.width == 15
        assert empty_store.document.height == 120
        assert not empty_store.can_undo

    def test_published_documents_are_never_mutated(self, empty_store):
        before = empty_store.document
        empty_store.fill_line(CellPoint(0, 0), 4)
        assert not before.grid.any()
        assert not before.grid.flags.writeable
        assert not empty_store.document.grid.flags.writeable


class TestSelectionEdits:
    def test_single_point_collapses(self, empty_store):
        assert not empty_store.set_selection(_sel(2, 2, 2, 2))
        assert empty_store.selection is None

    def test_selection_is_clamped(self, empty_store):
        empty_store.set_selection(_sel(-3, 1, 10, 3))
        assert empty_store.selection == _sel(0, 1, 4, 3)

    def test_delete_selection_is_idempotent(self):
        store = make_store([[1, 1, 0], [1, 1, 0], [0, 0, 0]])
        store.set_selection(_sel(0, 0, 1, 1))
        assert store.delete_selection()
        assert store.selection is None
        depth = store.history.undo_depth
        store.set_selection(_sel(0, 0, 1, 1))
        assert not store.delete_selection()
        assert store.selection is None
        assert store.history.undo_depth == depth

    def test_mirror_twice_restores(self):
        rows = [[1, 2, 3], [4, 5, 6]]
        store = make_store(rows)
        store.mirror_horizontal()
        store.mirror_horizontal()
        assert store.document.rows() == rows
        assert store.history.undo_depth == 2

    def test_rotate_keeps_selection(self):
        store = make_store([[1, 2, 0], [3, 4, 0], [0, 0, 0]])
        store.set_selection(_sel(0, 0, 1, 1))
        assert store.rotate_clockwise()
        assert store.document.rows() == [[3, 1, 0], [4, 2, 0], [0, 0, 0]]
        assert store.selection == _sel(0, 0, 1, 1)

    def test_arrange_keeps_selection(self):
        store = make_store([[1, 2, 0, 0, 0], [0, 3, 0, 0, 0]])
        store.set_selection(_sel(0, 0, 1, 1))
        assert store.arrange_selection(2, 2, 0)
        assert store.document.rows() == [[3, 2, 1, 2, 1], [0, 3, 0, 3, 0]]
        assert store.selection is not None

    def test_resize_clears_selection_and_wraps_shift(self):
        store = make_store([[1] * 8] * 5)
        store.set_selection(_sel(0, 0, 3, 3))
        for _ in range(7):
            store.shift_right()
        assert store.document.view.shift == 7
        assert store.set_pattern_width(5)
        assert store.selection is None
        assert store.document.view.shift == 2
        assert store.document.width == 5

    def test_undo_after_resize_restores_size(self):
        store = make_store([[1] * 5] * 5)
        store.set_pattern_height(8)
        assert store.document.height == 8
        store.undo()
        assert store.document.height == 5


class TestPaletteAndMetadata:
    def test_set_palette_color_clamps(self, empty_store):
        assert empty_store.set_palette_color(1, (300, -5, 10))
        assert empty_store.document.palette[1] == (255, 0, 10, 255)
        assert empty_store.can_undo

    def test_set_palette_color_out_of_range(self, empty_store):
        assert not empty_store.set_palette_color(999, (1, 2, 3, 4))

    def test_undo_restores_palette(self, empty_store):
        original = empty_store.document.palette
        empty_store.set_color_as_background(3)
        assert empty_store.document.palette[0] == original[3]
        assert empty_store.document.palette[3] == original[0]
        empty_store.undo()
        assert empty_store.document.palette == original

    def test_background_cannot_swap_with_itself(self, empty_store):
        assert not empty_store.set_color_as_background(0)

    def test_metadata_marks_dirty_without_history(self, empty_store):
        assert empty_store.set_metadata(author="Ada")
        assert empty_store.dirty
        assert not empty_store.can_undo
        assert not empty_store.set_metadata(author="Ada")


class TestViewState:
    def test_pick_color(self):
        store = make_store([[0, 6], [0, 0]])
        assert store.pick_color_at(CellPoint(1, 0))
        assert store.document.view.selected_color == 6
        assert not store.pick_color_at(CellPoint(9, 9))
        assert not store.can_undo
        assert not store.dirty

    def test_leaving_select_tool_clears_selection(self, empty_store):
        empty_store.set_selected_tool("select")
        empty_store.set_selection(_sel(0, 0, 2, 2))
        assert empty_store.set_selected_tool("pencil")
        assert empty_store.selection is None

    def test_unknown_tool_ignored(self, empty_store):
        assert not empty_store.set_selected_tool("lasso")
        assert empty_store.document.view.selected_tool == "pencil"

    def test_zoom_is_clamped(self, empty_store):
        empty_store.set_zoom(50)
        assert empty_store.document.view.zoom == 7
        assert not empty_store.zoom_in()
        empty_store.zoom_normal()
        assert empty_store.document.view.zoom == 3
        empty_store.set_zoom(-2)
        assert not empty_store.zoom_out()

    def test_shift_wraps(self, empty_store):
        empty_store.shift_left()
        assert empty_store.document.view.shift == 4
        empty_store.shift_right()
        assert empty_store.document.view.shift == 0

    def test_empty_symbols_reset_to_default(self, empty_store):
        empty_store.set_symbols("xyz")
        assert empty_store.dirty
        empty_store.set_symbols("")
        assert empty_store.document.view.symbols == DEFAULT_BEAD_SYMBOLS

    def test_view_visibility(self, empty_store):
        assert empty_store.set_view_visibility("simulation", False)
        assert not empty_store.document.view.simulation_visible
        assert not empty_store.set_view_visibility("palette", False)

    def test_view_changes_are_not_history(self, empty_store):
        empty_store.set_view_scroll(12)
        empty_store.set_draw_symbols(True)
        assert not empty_store.can_undo
        assert not empty_store.dirty


class TestObservers:
    def test_subscribers_receive_snapshots(self, empty_store):
        seen = []
        unsubscribe = empty_store.subscribe(seen.append)
        empty_store.set_cell(0, 0, 1)
        assert len(seen) == 1
        assert seen[0].dirty
        assert seen[0].can_undo
        assert seen[0].document.grid[0, 0] == 1
        unsubscribe()
        empty_store.set_cell(1, 0, 1)
        assert len(seen) == 1

    def test_noop_publishes_nothing(self, empty_store):
        seen = []
        empty_store.subscribe(seen.append)
        empty_store.set_cell(0, 0, 0)
        empty_store.mirror_horizontal()
        assert seen == []

    def test_failing_subscriber_does_not_block_others(self, empty_store):
        seen = []

        def broken(snap):
            raise RuntimeError("boom")

        empty_store.subscribe(broken)
        empty_store.subscribe(seen.append)
        empty_store.set_cell(0, 0, 1)
        assert len(seen) == 1


class TestDrags:
    def test_line_drag_commits_on_release(self, empty_store):
        empty_store.set_selected_tool("line")
        empty_store.set_selected_color(4)
        empty_store.begin_drag(CellPoint(0, 0))
        empty_store.update_drag(CellPoint(2, 2))
        assert not empty_store.document.grid.any()
        assert empty_store.end_drag()
        assert [empty_store.document.grid[i, i] for i in range(3)] == [4, 4, 4]

    def test_cancel_has_no_effect(self, empty_store):
        empty_store.set_selected_tool("line")
        empty_store.begin_drag(CellPoint(0, 0))
        empty_store.update_drag(CellPoint(4, 0))
        empty_store.cancel_drag()
        assert not empty_store.end_drag()
        assert not empty_store.document.grid.any()
        assert not empty_store.can_undo

    def test_select_drag_sets_selection(self, empty_store):
        empty_store.set_selected_tool("select")
        empty_store.begin_drag(CellPoint(3, 3))
        assert empty_store.end_drag(CellPoint(1, 0))
        assert empty_store.selection == _sel(3, 3, 1, 0)

    @pytest.mark.parametrize("tool", ["pencil", "fill", "pipette"])
    def test_other_tools_ignore_drags(self, empty_store, tool):
        empty_store.set_selected_tool(tool)
        empty_store.begin_drag(CellPoint(0, 0))
        assert empty_store.drag_preview is None


def test_document_equality_compares_grids():
    a = make_document([[1, 2], [3, 4]])
    b = make_document([[1, 2], [3, 4]])
    assert a == b
    assert a != make_document([[1, 2], [3, 5]])
