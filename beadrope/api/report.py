"""POST /api/report — bead report for a pattern."""

from __future__ import annotations

from fastapi import APIRouter

from beadrope.engine.document import PatternDocument
from beadrope.engine.report import build_report_summary
from beadrope.engine.symbols import contrasting_symbol_color, get_bead_symbol
from beadrope.jbb import parse_jbb
from beadrope.models.requests import ReportRequest
from beadrope.models.responses import ColorCountModel, ReportEntryModel, ReportResponse

router = APIRouter()


def _color_count(doc: PatternDocument, color_index: int, count: int) -> ColorCountModel:
    return ColorCountModel(
        color_index=color_index,
        count=count,
        symbol=get_bead_symbol(color_index, doc.view.symbols),
        symbol_color=list(contrasting_symbol_color(doc.color_of(color_index))),
    )


@router.post("/report", response_model=ReportResponse)
async def report(req: ReportRequest) -> ReportResponse:
    doc = parse_jbb(req.jbb)
    summary = build_report_summary(doc, req.pattern_name)
    return ReportResponse(
        entries=[ReportEntryModel(label=e.label, value=e.value) for e in summary.entries],
        color_counts=[_color_count(doc, c.color_index, c.count) for c in summary.color_counts],
        bead_runs=[_color_count(doc, r.color_index, r.count) for r in summary.bead_runs],
        used_color_count=summary.used_color_count,
        used_height=summary.used_height,
        repeat=summary.repeat,
    )
