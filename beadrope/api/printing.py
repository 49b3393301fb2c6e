"""POST /api/print/chunks — page row ranges for printing."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from beadrope.config import Settings
from beadrope.dependencies import get_settings
from beadrope.engine.pagination import format_chunk_label, legacy_row_markers, print_chunks
from beadrope.models.requests import PrintChunksRequest
from beadrope.models.responses import PrintChunkModel, PrintChunksResponse, RowMarkerModel

router = APIRouter(prefix="/print")


@router.post("/chunks", response_model=PrintChunksResponse)
async def chunks(req: PrintChunksRequest, settings: Settings = Depends(get_settings)) -> PrintChunksResponse:
    size = req.chunk_size or settings.print_chunk_size
    return PrintChunksResponse(
        chunks=[
            PrintChunkModel(
                start=start,
                end=end,
                label=format_chunk_label(req.total_rows, start, end),
                markers=[
                    RowMarkerModel(offset=offset, row=row)
                    for offset, row in legacy_row_markers(req.total_rows, start, end, req.marker_every)
                ],
            )
            for start, end in print_chunks(req.total_rows, size)
        ]
    )
