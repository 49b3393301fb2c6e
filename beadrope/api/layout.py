"""POST /api/layout/* — corrected and simulation rope layouts."""

from __future__ import annotations

from fastapi import APIRouter

from beadrope.engine.layout import PreviewLayout, build_corrected_layout, build_simulation_layout
from beadrope.jbb import parse_jbb
from beadrope.models.requests import LayoutRequest
from beadrope.models.responses import LayoutResponse, PreviewCellModel

router = APIRouter(prefix="/layout")


def _to_response(layout: PreviewLayout) -> LayoutResponse:
    return LayoutResponse(
        cells=[
            PreviewCellModel(
                x=c.x,
                y=c.y,
                width=c.width,
                color_index=c.color_index,
                source_x=c.source_x,
                source_y=c.source_y,
            )
            for c in layout.cells
        ],
        min_x=layout.min_x,
        max_x=layout.max_x,
        min_y=layout.min_y,
        max_y=layout.max_y,
    )


@router.post("/corrected", response_model=LayoutResponse)
async def corrected(req: LayoutRequest) -> LayoutResponse:
    doc = parse_jbb(req.jbb)
    return _to_response(build_corrected_layout(doc.grid, req.row_start, req.row_end))


@router.post("/simulation", response_model=LayoutResponse)
async def simulation(req: LayoutRequest) -> LayoutResponse:
    doc = parse_jbb(req.jbb)
    shift = doc.view.shift if req.shift is None else req.shift
    return _to_response(build_simulation_layout(doc.grid, shift, req.row_start, req.row_end))
