"""Edit operation models — a serializable script of editor actions."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

EditAction = Literal[
    "set_cell",
    "toggle_cell",
    "draw_line",
    "fill_line",
    "pick_color",
    "insert_row",
    "delete_row",
    "set_width",
    "set_height",
    "select",
    "clear_selection",
    "delete_selection",
    "mirror_horizontal",
    "mirror_vertical",
    "rotate_clockwise",
    "arrange",
    "set_palette_color",
    "set_background",
    "set_metadata",
    "shift_left",
    "shift_right",
    "undo",
    "redo",
]


# Off-grid coordinates are accepted (those edits are no-ops) up to this magnitude
COORDINATE_LIMIT = 100_000


class EditOp(BaseModel):
    """A single editor action. Only the fields the action reads are required."""

    action: EditAction
    # set_cell / toggle_cell / fill_line / pick_color; line and select start
    x: int | None = Field(default=None, ge=-COORDINATE_LIMIT, le=COORDINATE_LIMIT)
    y: int | None = Field(default=None, ge=-COORDINATE_LIMIT, le=COORDINATE_LIMIT)
    # draw_line / select end
    x2: int | None = Field(default=None, ge=-COORDINATE_LIMIT, le=COORDINATE_LIMIT)
    y2: int | None = Field(default=None, ge=-COORDINATE_LIMIT, le=COORDINATE_LIMIT)
    color: int | None = None  # palette index to paint with (defaults to the selected color)
    size: int | None = None  # set_width / set_height
    copies: int = 0  # arrange
    horizontal_offset: int = 0
    vertical_offset: int = 0
    index: int | None = None  # set_palette_color / set_background
    rgba: list[int] | None = None
    author: str | None = None
    organization: str | None = None
    notes: str | None = None


class EditPlan(BaseModel):
    """Ordered list of edit operations applied in one request."""

    operations: list[EditOp] = Field(default_factory=list)
