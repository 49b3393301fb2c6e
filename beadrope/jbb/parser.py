"""JBB parser — s-expression text → PatternDocument.

Grammar: parenthesized lists of atoms; an atom is a bare word, an integer,
``true``/``false`` or a double-quoted string with ``\\"`` and ``\\\\`` escapes.
Sections missing from the file keep their defaults. Structural errors raise
JbbParseError; the caller decides how to report them.
"""

from __future__ import annotations

import logging
import re
from typing import Union

from beadrope.engine.document import (
    DEFAULT_PALETTE,
    DEFAULT_TOOL,
    TOOLS,
    PatternDocument,
    Rgba,
    ViewState,
    create_empty_document,
    grid_from_rows,
)

logger = logging.getLogger(__name__)

Atom = Union[str, int, bool]
Expr = Union[Atom, list["Expr"]]

_TOKEN_RE = re.compile(
    r'\s+'
    r'|(?P<open>\()'
    r'|(?P<close>\))'
    r'|"(?P<string>(?:[^"\\]|\\.)*)"'
    r'|(?P<unterminated>")'
    r'|(?P<word>[^\s()"]+)',
    re.DOTALL,
)
_ESCAPE_RE = re.compile(r'\\(["\\])')
_INT_RE = re.compile(r"^-?\d+$")

_OPEN = object()
_CLOSE = object()

# Real files nest three levels deep (jbb > colors > rgb)
MAX_DEPTH = 64


class JbbParseError(ValueError):
    """Malformed JBB input."""


def parse_jbb(content: str) -> PatternDocument:
    """Parse JBB text into a PatternDocument."""
    tokens = _tokenize(content)
    if not tokens:
        raise JbbParseError("Invalid JBB: empty input")
    root = _read(tokens)
    if not isinstance(root, list):
        raise JbbParseError("Invalid JBB: expected list expression")
    if not root or root[0] != "jbb":
        raise JbbParseError("Invalid JBB: root node must be jbb")

    defaults = create_empty_document()
    doc_fields: dict = {}

    version = _find_child(root, "version")
    if version is not None:
        doc_fields["version"] = _as_int(_arg(version), 1)
    for key in ("author", "organization", "notes"):
        node = _find_child(root, key)
        if node is not None:
            doc_fields[key] = _as_str(_arg(node))

    colors = _find_child(root, "colors")
    if colors is not None:
        parsed = [_parse_color(c) for c in colors[1:] if isinstance(c, list) and c and c[0] == "rgb"]
        if parsed:
            # Short palettes keep the default entries past their end
            merged = list(DEFAULT_PALETTE)
            for i, color in enumerate(parsed):
                if i < len(merged):
                    merged[i] = color
                else:
                    merged.append(color)
            doc_fields["palette"] = tuple(merged)

    view = _find_child(root, "view")
    if view is not None:
        doc_fields["view"] = _parse_view(view)

    grid = defaults.grid
    model = _find_child(root, "model")
    if model is not None:
        rows = [
            [_as_int(v, 0) for v in row[1:]]
            for row in model[1:]
            if isinstance(row, list) and row and row[0] == "row"
        ]
        if rows:
            if len({len(r) for r in rows}) > 1:
                logger.warning("JBB model has ragged rows; padding to the widest row")
            grid = grid_from_rows(rows)

    doc = PatternDocument(grid=grid, **doc_fields)
    logger.info("Parsed JBB: %dx%d grid, %d colors", doc.width, doc.height, len(doc.palette))
    return doc


def _parse_view(node: list) -> ViewState:
    def read(key: str, default):
        child = _find_child(node, key)
        return default if child is None or len(child) < 2 else child[1]

    defaults = ViewState()
    tool = _as_str(read("selected-tool", DEFAULT_TOOL), DEFAULT_TOOL)
    return ViewState(
        draft_visible=_as_bool(read("draft-visible", True), True),
        corrected_visible=_as_bool(read("corrected-visible", True), True),
        simulation_visible=_as_bool(read("simulation-visible", True), True),
        report_visible=_as_bool(read("report-visible", True), True),
        draw_colors=_as_bool(read("draw-colors", True), True),
        draw_symbols=_as_bool(read("draw-symbols", False), False),
        symbols=_as_str(read("symbols", defaults.symbols), defaults.symbols) or defaults.symbols,
        selected_tool=tool if tool in TOOLS else DEFAULT_TOOL,
        selected_color=_as_int(read("selected-color", 1), 1),
        zoom=_as_int(read("zoom", 2), 2),
        scroll=_as_int(read("scroll", 0), 0),
        shift=_as_int(read("shift", 0), 0),
    )


def _parse_color(node: list) -> Rgba:
    values = node[1:]

    def component(i: int, default: int) -> int:
        return _as_int(values[i], default) if i < len(values) else default

    return (component(0, 0), component(1, 0), component(2, 0), component(3, 255))


# ---------------------------------------------------------------------------
# Tokenizer / reader
# ---------------------------------------------------------------------------


def _tokenize(content: str) -> list:
    tokens: list = []
    for m in _TOKEN_RE.finditer(content):
        if m.group("open"):
            tokens.append(_OPEN)
        elif m.group("close"):
            tokens.append(_CLOSE)
        elif m.group("string") is not None:
            tokens.append(_ESCAPE_RE.sub(r"\1", m.group("string")))
        elif m.group("unterminated"):
            raise JbbParseError(f"Invalid JBB: unterminated string at offset {m.start()}")
        elif m.group("word"):
            tokens.append(_word(m.group("word")))
    return tokens


def _word(value: str) -> Atom:
    if value == "true":
        return True
    if value == "false":
        return False
    if _INT_RE.match(value):
        return int(value)
    return value


def _read(tokens: list) -> Expr:
    """Build the first expression from ``tokens``; anything after it is ignored.

    Uses an explicit stack of open lists, so input depth never touches the
    interpreter's recursion limit. Nesting past MAX_DEPTH is rejected.
    """
    first = tokens[0]
    if first is _CLOSE:
        raise JbbParseError("Invalid JBB: unexpected closing parenthesis")
    if first is not _OPEN:
        return first

    stack: list[list[Expr]] = []
    for token in tokens:
        if token is _OPEN:
            if len(stack) >= MAX_DEPTH:
                raise JbbParseError(f"Invalid JBB: nesting deeper than {MAX_DEPTH} levels")
            stack.append([])
        elif token is _CLOSE:
            done = stack.pop()
            if not stack:
                return done
            stack[-1].append(done)
        else:
            stack[-1].append(token)
    raise JbbParseError("Invalid JBB: missing closing parenthesis")


def _find_child(node: list, key: str) -> list | None:
    for child in node:
        if isinstance(child, list) and child and child[0] == key:
            return child
    return None


def _arg(node: list) -> Expr:
    return node[1] if len(node) > 1 else ""


def _as_str(expr: Expr, default: str = "") -> str:
    if isinstance(expr, bool):
        return "true" if expr else "false"
    if isinstance(expr, (str, int)):
        return str(expr)
    return default


def _as_int(expr: Expr, default: int = 0) -> int:
    if isinstance(expr, bool):
        return default
    if isinstance(expr, int):
        return expr
    if isinstance(expr, str):
        try:
            return int(expr)
        except ValueError:
            return default
    return default


def _as_bool(expr: Expr, default: bool = False) -> bool:
    if isinstance(expr, bool):
        return expr
    if isinstance(expr, str):
        return expr == "true"
    return default
