"""Mutation primitives — pure grid edits.

Each function takes a frozen grid and returns a new grid, or ``None`` when the
edit would change nothing (out of bounds, same value, empty grid). Callers use
``None`` to skip publishing and history.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from beadrope.engine.document import (
    MAX_HEIGHT,
    MAX_WIDTH,
    MIN_HEIGHT,
    MIN_WIDTH,
    CellPoint,
)
from beadrope.engine.grid_math import clip_line, get_line_points, snap_line_end

logger = logging.getLogger(__name__)

Grid = NDArray[np.int32]


def _inside(grid: Grid, x: int, y: int) -> bool:
    height, width = grid.shape
    return 0 <= x < width and 0 <= y < height


def set_cell(grid: Grid, x: int, y: int, value: int) -> Grid | None:
    if not _inside(grid, x, y) or grid[y, x] == value:
        return None
    out = grid.copy()
    out[y, x] = value
    return out


def toggle_cell(grid: Grid, x: int, y: int, value: int) -> Grid | None:
    """Single pencil click: paint ``value``, or clear to 0 if already painted with it."""
    if not _inside(grid, x, y):
        return None
    next_value = 0 if grid[y, x] == value else value
    return set_cell(grid, x, y, next_value)


def draw_line(grid: Grid, start: CellPoint, end: CellPoint, value: int) -> Grid | None:
    """Paint the snapped line from ``start`` to ``end``; off-grid cells are skipped.

    At least one endpoint must be on the grid. Only the on-grid stretch of the
    line is walked, so a far-away endpoint costs no more than a short one.
    """
    if not _inside(grid, start.x, start.y) and not _inside(grid, end.x, end.y):
        return None

    height, width = grid.shape
    clipped = clip_line(start, snap_line_end(start, end), width, height)
    if clipped is None:
        return None

    out = grid.copy()
    changed = False
    for point in get_line_points(*clipped):
        if out[point.y, point.x] != value:
            out[point.y, point.x] = value
            changed = True
    return out if changed else None


def fill_line(grid: Grid, point: CellPoint, value: int) -> Grid | None:
    """Linear fill along the packed row-major index, wrapping across rows.

    Walks down and up from the clicked bead while beads match its color.
    This is deliberately not a 2-D flood fill.
    """
    if not _inside(grid, point.x, point.y):
        return None
    background = int(grid[point.y, point.x])
    if background == value:
        return None

    out = grid.copy()
    flat = out.reshape(-1)
    start = point.y * out.shape[1] + point.x

    index = start
    while index >= 0 and flat[index] == background:
        flat[index] = value
        index -= 1

    index = start + 1
    while index < flat.size and flat[index] == background:
        flat[index] = value
        index += 1

    return out


def insert_row(grid: Grid) -> Grid | None:
    """Shift every row one index down; the last row falls off, row 0 is cleared."""
    if grid.size == 0:
        return None
    out = np.zeros_like(grid)
    out[1:] = grid[:-1]
    return out


def delete_row(grid: Grid) -> Grid | None:
    """Shift every row one index up; row 0 falls off, the last row is cleared."""
    if grid.size == 0:
        return None
    out = np.zeros_like(grid)
    out[:-1] = grid[1:]
    return out


def clamp_width(width: int) -> int:
    return max(MIN_WIDTH, min(MAX_WIDTH, int(np.floor(width))))


def clamp_height(height: int) -> int:
    return max(MIN_HEIGHT, min(MAX_HEIGHT, int(np.floor(height))))


def resize_width(grid: Grid, width: int) -> Grid | None:
    """Keep each row's leftmost columns, zero-pad the rest."""
    if grid.size == 0:
        return None
    current_height, current_width = grid.shape
    new_width = clamp_width(width)
    if new_width == current_width:
        return None
    out = np.zeros((current_height, new_width), dtype=grid.dtype)
    keep = min(current_width, new_width)
    out[:, :keep] = grid[:, :keep]
    logger.info("Pattern width %d -> %d", current_width, new_width)
    return out


def resize_height(grid: Grid, height: int) -> Grid | None:
    """Keep the first array rows (top-down), zero-fill rows added at the bottom."""
    if grid.size == 0:
        return None
    current_height, current_width = grid.shape
    new_height = clamp_height(height)
    if new_height == current_height:
        return None
    out = np.zeros((new_height, current_width), dtype=grid.dtype)
    keep = min(current_height, new_height)
    out[:keep] = grid[:keep]
    logger.info("Pattern height %d -> %d", current_height, new_height)
    return out
