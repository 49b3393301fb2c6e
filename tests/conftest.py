"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest

from beadrope.engine.document import PatternDocument, create_empty_document
from beadrope.engine.store import EditorStore


# Sample JBB documents

SMALL_JBB = '''(jbb
  (version 1)
  (author "Ada")
  (organization "Bead Club")
  (notes "two stripes")
  (colors
    (rgb 240 240 240 255)
    (rgb 128 0 0 255)
    (rgb 0 0 128 255)
  )
  (view
    (draft-visible true)
    (corrected-visible true)
    (simulation-visible false)
    (report-visible true)
    (draw-colors true)
    (draw-symbols false)
    (symbols "·abc")
    (selected-tool "line")
    (selected-color 2)
    (zoom 3)
    (scroll 0)
    (shift 1)
  )
  (model
    (row 0 0 0 0 0)
    (row 0 0 0 0 0)
    (row 2 2 2 2 2)
    (row 1 1 1 1 1)
    (row 2 2 2 2 2)
    (row 1 1 1 1 1)
  )
)
'''

MINIMAL_JBB = "(jbb (model (row 1 2 3) (row 4 5 6)))"

ESCAPED_JBB = r'(jbb (author "say \"hi\"") (notes "back\\slash") (model (row 0 1)))'

UNKNOWN_TOOL_JBB = '(jbb (view (selected-tool "lasso")) (model (row 1 1 1 1 1)))'


@pytest.fixture
def small_jbb() -> str:
    return SMALL_JBB


@pytest.fixture
def minimal_jbb() -> str:
    return MINIMAL_JBB


def make_document(rows: list[list[int]]) -> PatternDocument:
    return PatternDocument(grid=np.array(rows, dtype=np.int32))


def make_store(rows: list[list[int]]) -> EditorStore:
    return EditorStore(make_document(rows))


@pytest.fixture
def empty_store() -> EditorStore:
    """5x5 empty pattern."""
    return EditorStore(create_empty_document(5, 5))


@pytest.fixture
def striped_document() -> PatternDocument:
    """5 wide, bottom four rows used, alternating colors 1 and 2."""
    return make_document([
        [0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0],
        [2, 2, 2, 2, 2],
        [1, 1, 1, 1, 1],
        [2, 2, 2, 2, 2],
        [1, 1, 1, 1, 1],
    ])
