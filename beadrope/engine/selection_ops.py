"""Selection transforms — delete, mirror, rotate and tiled arrange.

Transforms act on the selection rectangle, or on the whole grid when there is
no selection (delete and arrange require a selection). Like the mutation
primitives they return a new grid or ``None`` for "nothing changed".
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from beadrope.engine.document import Rect, Selection, to_legacy_row
from beadrope.engine.grid_math import clamp_rect, normalize_rect

Grid = NDArray[np.int32]


def transform_rect(grid: Grid, selection: Selection | None) -> Rect | None:
    """Clamped target rectangle for a transform, or None on an empty grid."""
    height, width = grid.shape
    if width == 0 or height == 0:
        return None
    if selection is None:
        return Rect(left=0, right=width - 1, top=0, bottom=height - 1)
    return clamp_rect(normalize_rect(selection.start, selection.end), width, height)


def delete_selection(grid: Grid, selection: Selection | None) -> Grid | None:
    if selection is None:
        return None
    rect = transform_rect(grid, selection)
    if rect is None:
        return None
    region = grid[rect.top : rect.bottom + 1, rect.left : rect.right + 1]
    if not region.any():
        return None
    out = grid.copy()
    out[rect.top : rect.bottom + 1, rect.left : rect.right + 1] = 0
    return out


def mirror_horizontal(grid: Grid, selection: Selection | None) -> Grid | None:
    """Swap columns about the rectangle's vertical center axis."""
    rect = transform_rect(grid, selection)
    if rect is None:
        return None
    return _replace_region(grid, rect, lambda region: region[:, ::-1])


def mirror_vertical(grid: Grid, selection: Selection | None) -> Grid | None:
    """Swap rows about the rectangle's horizontal center axis."""
    rect = transform_rect(grid, selection)
    if rect is None:
        return None
    return _replace_region(grid, rect, lambda region: region[::-1, :])


def rotate_clockwise(grid: Grid, selection: Selection | None) -> Grid | None:
    """Rotate a square region 90 degrees clockwise in place.

    ``dest[top + x][left + size - 1 - y] = src[y][x]``; non-square targets are
    left untouched.
    """
    rect = transform_rect(grid, selection)
    if rect is None or rect.width != rect.height:
        return None
    return _replace_region(grid, rect, lambda region: np.rot90(region, k=-1))


def arrange_selection(
    grid: Grid,
    selection: Selection | None,
    copies: int,
    horizontal_offset: int,
    vertical_offset: int,
) -> Grid | None:
    """Tile the selection's non-background beads along the legacy linear index.

    Each copy lands ``vertical_offset * width + horizontal_offset`` beads further
    along the rope than the previous one. Copies that leave the grid are
    dropped; copies overwrite whatever is underneath.
    """
    if selection is None:
        return None
    rect = transform_rect(grid, selection)
    if rect is None:
        return None

    height, width = grid.shape
    copies = max(0, int(np.floor(copies)))
    if copies == 0:
        return None
    offset = max(0, int(np.floor(vertical_offset))) * width + max(0, int(np.floor(horizontal_offset)))
    if offset == 0:
        return None

    out = grid.copy()
    last_index = width * height - 1
    changed = False

    for y in range(rect.top, rect.bottom + 1):
        for x in range(rect.left, rect.right + 1):
            color = grid[y, x]
            if color == 0:
                continue
            index = x + width * to_legacy_row(y, height)
            for _ in range(copies):
                index += offset
                if index > last_index:
                    break
                target_x = index % width
                target_y = to_legacy_row(index // width, height)
                if out[target_y, target_x] != color:
                    out[target_y, target_x] = color
                    changed = True

    return out if changed else None


def _replace_region(grid: Grid, rect: Rect, fn) -> Grid | None:
    region = grid[rect.top : rect.bottom + 1, rect.left : rect.right + 1]
    transformed = fn(region)
    if np.array_equal(region, transformed):
        return None
    out = grid.copy()
    out[rect.top : rect.bottom + 1, rect.left : rect.right + 1] = transformed
    return out
