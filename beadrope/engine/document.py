"""Pattern document model — grid, palette, metadata, view state, selection.

Documents are immutable values: every edit builds a new PatternDocument with
``dataclasses.replace`` and a fresh, frozen grid array.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Literal

import numpy as np
from numpy.typing import NDArray

Rgba = tuple[int, int, int, int]
ToolId = Literal["pencil", "line", "fill", "pipette", "select"]
ViewPane = Literal["draft", "corrected", "simulation", "report"]

TOOLS: tuple[str, ...] = ("pencil", "line", "fill", "pipette", "select")
DEFAULT_TOOL: ToolId = "pencil"

GRID_DTYPE = np.int32

DEFAULT_WIDTH = 15
DEFAULT_HEIGHT = 120

MIN_WIDTH, MAX_WIDTH = 5, 500
MIN_HEIGHT, MAX_HEIGHT = 5, 10000

DEFAULT_BEAD_SYMBOLS = "·abcdefghijklmnopqrstuvwxyz+-/\\*"

# Legacy JBead palette; index 0 is the background bead.
DEFAULT_PALETTE: tuple[Rgba, ...] = (
    (240, 240, 240, 255),
    (128, 0, 0, 255),
    (0, 0, 128, 255),
    (0, 128, 0, 255),
    (255, 128, 0, 255),
    (180, 0, 0, 255),
    (0, 0, 180, 255),
    (128, 0, 128, 255),
    (0, 0, 0, 255),
    (0, 128, 128, 255),
    (255, 255, 255, 255),
    (255, 0, 0, 255),
    (0, 0, 255, 255),
    (0, 255, 0, 255),
    (255, 255, 0, 255),
    (255, 0, 255, 255),
    (0, 255, 255, 255),
    (128, 128, 128, 255),
    (192, 192, 192, 255),
    (64, 64, 64, 255),
    (128, 128, 0, 255),
    (255, 192, 203, 255),
    (165, 42, 42, 255),
    (255, 215, 0, 255),
    (75, 0, 130, 255),
    (238, 130, 238, 255),
    (64, 224, 208, 255),
    (250, 128, 114, 255),
    (210, 180, 140, 255),
    (173, 216, 230, 255),
    (144, 238, 144, 255),
    (255, 165, 0, 255),
)

IMPLICIT_COLOR: Rgba = (0, 0, 0, 255)


@dataclass(frozen=True)
class CellPoint:
    x: int
    y: int


@dataclass(frozen=True)
class Rect:
    """Inclusive, normalized rectangle (left <= right, top <= bottom)."""

    left: int
    right: int
    top: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left + 1

    @property
    def height(self) -> int:
        return self.bottom - self.top + 1


@dataclass(frozen=True)
class Selection:
    """Two inclusive corner points in array coordinates, in drag order."""

    start: CellPoint
    end: CellPoint

    @property
    def is_single_point(self) -> bool:
        return self.start == self.end

    def clamped(self, width: int, height: int) -> Selection:
        if width == 0 or height == 0:
            return self
        return Selection(
            start=CellPoint(_clamp(self.start.x, 0, width - 1), _clamp(self.start.y, 0, height - 1)),
            end=CellPoint(_clamp(self.end.x, 0, width - 1), _clamp(self.end.y, 0, height - 1)),
        )


@dataclass(frozen=True)
class ViewState:
    draft_visible: bool = True
    corrected_visible: bool = True
    simulation_visible: bool = True
    report_visible: bool = True
    draw_colors: bool = True
    draw_symbols: bool = False
    symbols: str = DEFAULT_BEAD_SYMBOLS
    selected_tool: ToolId = DEFAULT_TOOL
    selected_color: int = 1
    zoom: int = 2
    scroll: int = 0
    shift: int = 0


@dataclass(frozen=True)
class PatternDocument:
    """The grid + palette + metadata being edited."""

    grid: NDArray[np.int32]
    palette: tuple[Rgba, ...] = DEFAULT_PALETTE
    author: str = ""
    organization: str = ""
    notes: str = ""
    version: int = 1
    view: ViewState = field(default_factory=ViewState)

    def __post_init__(self) -> None:
        object.__setattr__(self, "grid", freeze_grid(self.grid))

    @property
    def width(self) -> int:
        return int(self.grid.shape[1]) if self.grid.ndim == 2 and self.grid.shape[0] > 0 else 0

    @property
    def height(self) -> int:
        return int(self.grid.shape[0]) if self.width > 0 else 0

    @property
    def shift(self) -> int:
        return self.view.shift

    def rows(self) -> list[list[int]]:
        return self.grid.tolist()

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def color_of(self, index: int) -> Rgba:
        """Palette lookup; indices past the palette render as the implicit default."""
        if 0 <= index < len(self.palette):
            return self.palette[index]
        return IMPLICIT_COLOR

    def with_grid(self, grid: NDArray[np.int32]) -> PatternDocument:
        return replace(self, grid=grid)

    def with_view(self, **changes) -> PatternDocument:
        return replace(self, view=replace(self.view, **changes))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PatternDocument):
            return NotImplemented
        return (
            np.array_equal(self.grid, other.grid)
            and self.palette == other.palette
            and self.author == other.author
            and self.organization == other.organization
            and self.notes == other.notes
            and self.version == other.version
            and self.view == other.view
        )


def freeze_grid(grid) -> NDArray[np.int32]:
    """Return a read-only int grid. Arrays already frozen are shared, not copied."""
    if isinstance(grid, np.ndarray) and grid.dtype == GRID_DTYPE and not grid.flags.writeable:
        return grid
    arr = np.array(grid, dtype=GRID_DTYPE)
    if arr.size == 0:
        arr = arr.reshape((0, 0))
    elif arr.ndim != 2:
        raise ValueError(f"grid must be two-dimensional, got shape {arr.shape}")
    arr.flags.writeable = False
    return arr


def grid_from_rows(rows: list[list[int]]) -> NDArray[np.int32]:
    """Build a grid from row lists; ragged rows are zero-padded to the widest row."""
    if not rows:
        return freeze_grid(np.zeros((0, 0), dtype=GRID_DTYPE))
    width = max(len(r) for r in rows)
    arr = np.zeros((len(rows), width), dtype=GRID_DTYPE)
    for y, row in enumerate(rows):
        arr[y, : len(row)] = row
    return freeze_grid(arr)


def create_empty_document(width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT) -> PatternDocument:
    return PatternDocument(grid=np.zeros((height, width), dtype=GRID_DTYPE))


def to_legacy_row(row: int, height: int) -> int:
    """Array row <-> legacy (bottom-up) row. The mapping is its own inverse."""
    return height - 1 - row


def normalize_rgba(color) -> Rgba:
    """Clamp RGB(A) components to 0..255; a missing alpha means opaque."""
    values = [int(np.floor(c)) for c in color]
    alpha = values[3] if len(values) > 3 else 255
    return (
        _clamp(values[0], 0, 255),
        _clamp(values[1], 0, 255),
        _clamp(values[2], 0, 255),
        _clamp(alpha, 0, 255),
    )


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))
