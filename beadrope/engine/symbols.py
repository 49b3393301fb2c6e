"""Bead symbols for symbol-drawing mode."""

from __future__ import annotations

import math

from beadrope.engine.document import DEFAULT_BEAD_SYMBOLS, Rgba

_WHITE: Rgba = (255, 255, 255, 242)
_BLACK: Rgba = (0, 0, 0, 242)


def get_bead_symbol(index: int, symbols: str = DEFAULT_BEAD_SYMBOLS) -> str:
    if index < 0 or index >= len(symbols):
        return " "
    return symbols[index]


def contrasting_symbol_color(color: Rgba) -> Rgba:
    """White or black, whichever is farther from ``color`` in RGB space."""
    rgb = color[:3]
    to_white = math.dist(rgb, (255, 255, 255))
    to_black = math.dist(rgb, (0, 0, 0))
    return _WHITE if to_white > to_black else _BLACK
