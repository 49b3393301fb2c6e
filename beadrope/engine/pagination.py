"""Print pagination — split the draft into contiguous row ranges.

Ranges are in array rows, ``[start, end)``; labels use legacy row numbers,
counted from the bottom of the rope starting at 1.
"""

from __future__ import annotations

DEFAULT_CHUNK_SIZE = 100


def print_chunks(total_rows: int, chunk_size: int = DEFAULT_CHUNK_SIZE) -> list[tuple[int, int]]:
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    return [(start, min(total_rows, start + chunk_size)) for start in range(0, max(0, total_rows), chunk_size)]


def format_chunk_label(total_rows: int, row_start: int, row_end: int) -> str:
    low = max(1, total_rows - row_end + 1)
    high = max(low, total_rows - row_start)
    return f"{low}-{high}"


def legacy_row_markers(total_rows: int, row_start: int, row_end: int, every: int = 10) -> list[tuple[int, int]]:
    """Ruler marks for a chunk: ``(line offset within chunk, legacy row number)``.

    Offset ``y`` is the grid line above the chunk's ``y``-th row; the legacy
    number is the count of rows below that line.
    """
    marks = []
    for y in range(row_end - row_start + 1):
        legacy = total_rows - (row_start + y)
        if legacy % every == 0:
            marks.append((y, legacy))
    return marks
