"""Layout projectors — fold the flat grid into the rope's bead lattice.

A bead rope is wound helically, so every other revolution holds one extra bead.
Both projectors walk the grid in legacy order (bottom of the rope first) and
fold the linear bead position into lattice rows of alternating length
``width, width + 1, width, ...``.

* corrected: the whole brick-offset lattice.
* simulation: only the front half of the rope, rotated by ``shift`` beads.

Coordinates are in bead units; ``y`` grows downward, so lattice rows stack
upward at ``y = -row``. Both projectors are pure functions of their inputs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from beadrope.engine.document import to_legacy_row

logger = logging.getLogger(__name__)

EMPTY_BOUNDS = (0.0, 1.0, 0.0, 1.0)


@dataclass(frozen=True)
class PreviewCell:
    x: float
    y: float
    width: float
    color_index: int
    # Originating grid cell (array coordinates), for hit-testing
    source_x: int
    source_y: int


@dataclass(frozen=True)
class PreviewLayout:
    cells: tuple[PreviewCell, ...]
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        return (self.min_x, self.max_x, self.min_y, self.max_y)


def corrected_point_from_index(index: int, width: int) -> tuple[int, int]:
    """Linear bead position -> (lattice_x, lattice_row).

    Equivalent to repeatedly subtracting the alternating row lengths; each
    even/odd row pair holds ``2 * width + 1`` beads.
    """
    if width <= 0:
        raise ValueError(f"width must be positive, got {width}")
    pair, rest = divmod(index, 2 * width + 1)
    if rest < width:
        return rest, 2 * pair
    return rest - width, 2 * pair + 1


def build_corrected_layout(
    grid: NDArray[np.int32],
    row_start: int | None = None,
    row_end: int | None = None,
) -> PreviewLayout:
    height, width = _shape(grid)
    if width == 0 or height == 0:
        return _make_layout([])

    cells: list[PreviewCell] = []
    index = 0
    for legacy_y in range(height):
        source_y = to_legacy_row(legacy_y, height)
        row = grid[source_y]
        for x in range(width):
            lattice_x, lattice_row = corrected_point_from_index(index, width)
            offset = 0.0 if lattice_row % 2 == 0 else -0.5
            cells.append(PreviewCell(
                x=lattice_x + offset,
                y=float(-lattice_row),
                width=1.0,
                color_index=int(row[x]),
                source_x=x,
                source_y=source_y,
            ))
            index += 1

    return _make_layout(_restrict(cells, height, row_start, row_end))


def build_simulation_layout(
    grid: NDArray[np.int32],
    shift: int,
    row_start: int | None = None,
    row_end: int | None = None,
) -> PreviewLayout:
    height, width = _shape(grid)
    if width == 0 or height == 0:
        return _make_layout([])

    visible_width = width // 2
    cells: list[PreviewCell] = []

    for legacy_y in range(height):
        source_y = to_legacy_row(legacy_y, height)
        row = grid[source_y]
        for x in range(width):
            color_index = int(row[x])
            shifted = x + shift
            # Python's % and // already floor toward -inf
            shifted_x = shifted % width
            shifted_y = legacy_y + shifted // width
            if shifted_y < 0:
                continue

            lattice_x, lattice_row = corrected_point_from_index(shifted_x + shifted_y * width, width)

            # Back of the rope, except the wrap bead that closes the seam
            if lattice_x > visible_width and lattice_x != width:
                continue

            if lattice_row % 2 == 0:
                if lattice_x == visible_width:
                    continue
                draw = (float(lattice_x), float(-lattice_row), 1.0)
            elif lattice_x != width and lattice_x != visible_width:
                draw = (lattice_x - 0.5, float(-lattice_row), 1.0)
            elif lattice_x == width:
                draw = (-0.5, float(-(lattice_row + 1)), 0.5)
            else:
                draw = (lattice_x - 0.5, float(-lattice_row), 0.5)

            cells.append(PreviewCell(
                x=draw[0],
                y=draw[1],
                width=draw[2],
                color_index=color_index,
                source_x=x,
                source_y=source_y,
            ))

    return _make_layout(_restrict(cells, height, row_start, row_end))


def cell_at(layout: PreviewLayout, x: float, y: float) -> PreviewCell | None:
    """Hit-test a point in bead units; later cells are drawn on top and win."""
    for cell in reversed(layout.cells):
        if cell.x <= x <= cell.x + cell.width and cell.y <= y <= cell.y + 1:
            return cell
    return None


def _shape(grid: NDArray[np.int32]) -> tuple[int, int]:
    if grid.ndim != 2 or grid.shape[0] == 0:
        return 0, 0
    return int(grid.shape[0]), int(grid.shape[1])


def _restrict(
    cells: list[PreviewCell],
    height: int,
    row_start: int | None,
    row_end: int | None,
) -> list[PreviewCell]:
    """Keep cells whose source array row is in ``[row_start, row_end)``."""
    if row_start is None and row_end is None:
        return cells
    start = max(0, min(height, int(row_start or 0)))
    end = max(start, min(height, height if row_end is None else int(row_end)))
    return [c for c in cells if start <= c.source_y < end]


def _make_layout(cells: list[PreviewCell]) -> PreviewLayout:
    if not cells:
        return PreviewLayout((), *EMPTY_BOUNDS)
    return PreviewLayout(
        cells=tuple(cells),
        min_x=min(c.x for c in cells),
        max_x=max(c.x + c.width for c in cells),
        min_y=min(c.y for c in cells),
        max_y=max(c.y + 1 for c in cells),
    )
