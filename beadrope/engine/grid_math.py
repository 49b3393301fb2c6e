"""Grid geometry helpers — rectangle normalization and line rasterization. No engine state."""

from __future__ import annotations

from beadrope.engine.document import CellPoint, Rect


def normalize_rect(start: CellPoint, end: CellPoint) -> Rect:
    """Rectangle from two corners, independent of drag direction."""
    return Rect(
        left=min(start.x, end.x),
        right=max(start.x, end.x),
        top=min(start.y, end.y),
        bottom=max(start.y, end.y),
    )


def clamp_rect(rect: Rect, width: int, height: int) -> Rect:
    return Rect(
        left=_clamp(rect.left, 0, width - 1),
        right=_clamp(rect.right, 0, width - 1),
        top=_clamp(rect.top, 0, height - 1),
        bottom=_clamp(rect.bottom, 0, height - 1),
    )


def snap_line_end(start: CellPoint, end: CellPoint) -> CellPoint:
    """Force a 0/45/90 degree line by shortening the longer axis."""
    dx = end.x - start.x
    dy = end.y - start.y
    abs_x, abs_y = abs(dx), abs(dy)

    if abs_x == 0 or abs_y == 0:
        return end

    if abs_x > abs_y:
        return CellPoint(start.x + abs_y * _sign(dx), end.y)
    return CellPoint(end.x, start.y + abs_x * _sign(dy))


def clip_line(start: CellPoint, end: CellPoint, width: int, height: int) -> tuple[CellPoint, CellPoint] | None:
    """Trim a snapped 0/45/90 degree segment to the ``width`` x ``height`` box.

    Every step of such a segment moves each axis by -1, 0 or +1, so the part
    inside the box is one contiguous run of steps. Returns its first and last
    point in walk order, or ``None`` when the segment never enters the box.
    """
    sx = _sign(end.x - start.x)
    sy = _sign(end.y - start.y)
    steps = max(abs(end.x - start.x), abs(end.y - start.y))

    low, high = 0, steps
    for origin, step, size in ((start.x, sx, width), (start.y, sy, height)):
        if step == 0:
            if not 0 <= origin < size:
                return None
            continue
        # origin + t * step must stay within [0, size - 1]
        first, last = (-origin, size - 1 - origin) if step > 0 else (origin - size + 1, origin)
        low = max(low, first)
        high = min(high, last)
    if low > high:
        return None
    return (
        CellPoint(start.x + low * sx, start.y + low * sy),
        CellPoint(start.x + high * sx, start.y + high * sy),
    )


def get_line_points(begin: CellPoint, end: CellPoint) -> list[CellPoint]:
    """Staircase stepper from ``begin`` to ``end``, both endpoints included.

    The major axis advances one cell per step; the minor coordinate is
    recomputed from ``begin`` each time (not accumulated), floored.
    """
    dx = end.x - begin.x
    dy = end.y - begin.y
    sx = 1 if dx > 0 else -1
    sy = 1 if dy > 0 else -1

    points = [begin]
    current = begin
    while current != end:
        if dx == 0:
            current = CellPoint(current.x, current.y + sy)
        elif dy == 0:
            current = CellPoint(current.x + sx, current.y)
        elif abs(dx) > abs(dy):
            x = current.x + sx
            current = CellPoint(x, begin.y + (abs(x - begin.x) * dy) // abs(dx))
        elif abs(dx) < abs(dy):
            y = current.y + sy
            current = CellPoint(begin.x + (abs(y - begin.y) * dx) // abs(dy), y)
        else:
            current = CellPoint(current.x + sx, current.y + sy)
        points.append(current)
    return points


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))
