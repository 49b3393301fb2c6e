"""POST /api/documents/* — JBB parsing, serialization and scripted edits."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from beadrope.config import Settings
from beadrope.dependencies import get_settings
from beadrope.engine.edit_applier import apply_edits
from beadrope.engine.store import EditorStore
from beadrope.jbb import parse_jbb, serialize_jbb
from beadrope.models.pattern_document import PatternDocumentModel, SelectionModel
from beadrope.models.requests import EditRequest, JbbRequest, SerializeRequest
from beadrope.models.responses import DocumentResponse, EditResponse, SerializeResponse

router = APIRouter(prefix="/documents")
logger = logging.getLogger(__name__)


@router.post("/parse", response_model=DocumentResponse)
async def parse(req: JbbRequest) -> DocumentResponse:
    doc = parse_jbb(req.jbb)
    return DocumentResponse(
        document=PatternDocumentModel.from_document(doc),
        width=doc.width,
        height=doc.height,
    )


@router.post("/serialize", response_model=SerializeResponse)
async def serialize(req: SerializeRequest) -> SerializeResponse:
    return SerializeResponse(jbb=serialize_jbb(req.document.to_document()))


@router.post("/edit", response_model=EditResponse)
async def edit(req: EditRequest, settings: Settings = Depends(get_settings)) -> EditResponse:
    store = EditorStore(parse_jbb(req.jbb), history_capacity=settings.history_capacity)
    if req.selection is not None:
        store.set_selection(req.selection.to_selection())

    applied = apply_edits(store, req.operations)
    logger.info("Applied %d/%d edit ops", sum(applied), len(applied))

    snap = store.snapshot()
    return EditResponse(
        jbb=serialize_jbb(snap.document),
        document=PatternDocumentModel.from_document(snap.document),
        applied=applied,
        selection=SelectionModel.from_selection(snap.selection),
        dirty=snap.dirty,
        can_undo=snap.can_undo,
        can_redo=snap.can_redo,
    )
