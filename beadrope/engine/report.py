"""Repeat detection and pattern report.

All sequences here are in legacy order: bottom row of the rope first, left to
right inside each row. The user is assumed to fill the pattern from the
bottom of the grid upward, so "used" rows are counted from the bottom.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from beadrope.engine.document import PatternDocument, to_legacy_row


@dataclass(frozen=True)
class ReportEntry:
    label: str
    value: str


@dataclass(frozen=True)
class ColorCount:
    color_index: int
    count: int


@dataclass(frozen=True)
class BeadRun:
    color_index: int
    count: int


@dataclass(frozen=True)
class ReportWords:
    row_one: str = "row"
    row_other: str = "rows"
    bead_one: str = "bead"
    bead_other: str = "beads"

    def rows(self, count: int) -> str:
        return self.row_one if count == 1 else self.row_other

    def beads(self, count: int) -> str:
        return self.bead_one if count == 1 else self.bead_other


@dataclass(frozen=True)
class ReportLabels:
    pattern: str = "Pattern"
    author: str = "Author"
    organization: str = "Organization"
    circumference: str = "Circumference"
    repeat_of_colors: str = "Repeat of colors"
    rows_per_repeat: str = "Rows per repeat"
    number_of_rows: str = "Number of rows"
    number_of_beads: str = "Number of beads"
    words: ReportWords = field(default_factory=ReportWords)


@dataclass(frozen=True)
class ReportSummary:
    entries: list[ReportEntry]
    color_counts: list[ColorCount]
    bead_runs: list[BeadRun]
    used_color_count: int
    used_height: int
    repeat: int


def get_used_height(grid: NDArray[np.int32]) -> int:
    """Number of legacy rows from the bottom up to the topmost non-empty row."""
    height = grid.shape[0] if grid.ndim == 2 else 0
    for y in range(height):
        if (grid[y] > 0).any():
            return height - y
    return 0


def flatten_used_rows(grid: NDArray[np.int32], used_height: int | None = None) -> list[int]:
    if grid.ndim != 2 or grid.shape[0] == 0:
        return []
    height = grid.shape[0]
    if used_height is None:
        used_height = get_used_height(grid)
    rows = [grid[to_legacy_row(legacy_y, height)] for legacy_y in range(used_height)]
    if not rows:
        return []
    return np.concatenate(rows).tolist()


def calculate_color_repeat_beads(sequence: Sequence[int]) -> int:
    """Shortest period R of the sequence, or its full length if there is none.

    Every bead from R on is compared with the canonical first window at
    ``(i - R) % R``; scanning in increasing ``i`` makes that equivalent to
    comparing with the bead one period back.
    """
    length = len(sequence)
    if length == 0:
        return 0
    for repeat in range(1, length):
        if sequence[repeat] != sequence[0]:
            continue
        if all(sequence[(i - repeat) % repeat] == sequence[i] for i in range(repeat + 1, length)):
            return repeat
    return length


def format_rows_per_repeat(repeat: int, width: int, words: ReportWords | None = None) -> str:
    words = words or ReportWords()
    if width <= 0:
        return "0"
    rows, beads = divmod(repeat, width)
    if beads == 0:
        return str(rows)
    return f"{rows} {words.rows(rows)} {beads} {words.beads(beads)}"


def build_bead_runs(repeat_sequence: Sequence[int]) -> list[BeadRun]:
    """Run-length encode from the last bead to the first (rope build order)."""
    runs: list[BeadRun] = []
    for bead in reversed(repeat_sequence):
        if runs and runs[-1].color_index == bead:
            runs[-1] = BeadRun(color_index=bead, count=runs[-1].count + 1)
        else:
            runs.append(BeadRun(color_index=int(bead), count=1))
    return runs


def build_report_summary(
    document: PatternDocument,
    pattern_name: str,
    labels: ReportLabels | None = None,
) -> ReportSummary:
    labels = labels or ReportLabels()
    words = labels.words
    width = document.width
    used_height = get_used_height(document.grid)
    sequence = flatten_used_rows(document.grid, used_height)
    repeat = calculate_color_repeat_beads(sequence)

    palette_size = max(len(document.palette), max(sequence, default=0) + 1)
    tally = Counter(sequence)
    color_counts = [ColorCount(color_index=i, count=tally.get(i, 0)) for i in range(palette_size)]

    entries = [ReportEntry(labels.pattern, pattern_name)]
    if document.author.strip():
        entries.append(ReportEntry(labels.author, document.author.strip()))
    if document.organization.strip():
        entries.append(ReportEntry(labels.organization, document.organization.strip()))

    total_beads = used_height * width
    entries.extend([
        ReportEntry(labels.circumference, str(width)),
        ReportEntry(labels.repeat_of_colors, f"{repeat} {words.beads(repeat)}"),
        ReportEntry(labels.rows_per_repeat, format_rows_per_repeat(repeat, width, words)),
        ReportEntry(labels.number_of_rows, str(used_height)),
        ReportEntry(labels.number_of_beads, f"{total_beads} {words.beads(total_beads)}"),
    ])

    return ReportSummary(
        entries=entries,
        color_counts=color_counts,
        bead_runs=build_bead_runs(sequence[:repeat]),
        used_color_count=sum(1 for c in color_counts if c.count > 0),
        used_height=used_height,
        repeat=repeat,
    )
