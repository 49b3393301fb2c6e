"""JBB serializer — PatternDocument → s-expression text, the inverse of parse_jbb."""

from __future__ import annotations

from beadrope.engine.document import PatternDocument, Rgba


def quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _color(color: Rgba) -> str:
    alpha = color[3] if len(color) > 3 else 255
    return f"    (rgb {color[0]} {color[1]} {color[2]} {alpha})"


def serialize_jbb(document: PatternDocument) -> str:
    view = document.view
    lines = [
        "(jbb",
        f"  (version {document.version})",
        f"  (author {quote(document.author)})",
        f"  (organization {quote(document.organization)})",
        f"  (notes {quote(document.notes)})",
        "  (colors",
    ]
    lines.extend(_color(c) for c in document.palette)
    lines.extend([
        "  )",
        "  (view",
        f"    (draft-visible {_flag(view.draft_visible)})",
        f"    (corrected-visible {_flag(view.corrected_visible)})",
        f"    (simulation-visible {_flag(view.simulation_visible)})",
        f"    (report-visible {_flag(view.report_visible)})",
        f"    (draw-colors {_flag(view.draw_colors)})",
        f"    (draw-symbols {_flag(view.draw_symbols)})",
        f"    (symbols {quote(view.symbols)})",
        f"    (selected-tool {quote(view.selected_tool)})",
        f"    (selected-color {view.selected_color})",
        f"    (zoom {view.zoom})",
        f"    (scroll {view.scroll})",
        f"    (shift {view.shift})",
        "  )",
        "  (model",
    ])
    lines.extend("    (row " + " ".join(str(v) for v in row) + ")" for row in document.grid.tolist())
    lines.extend(["  )", ")"])
    return "\n".join(lines) + "\n"
