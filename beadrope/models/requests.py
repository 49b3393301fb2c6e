"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from beadrope.engine.document import MAX_HEIGHT
from beadrope.models.edit_ops import EditOp
from beadrope.models.pattern_document import PatternDocumentModel, SelectionModel


class JbbRequest(BaseModel):
    jbb: str = Field(..., description="JBB document text")


class SerializeRequest(BaseModel):
    document: PatternDocumentModel


class EditRequest(BaseModel):
    jbb: str = Field(..., description="JBB document text to edit")
    operations: list[EditOp] = Field(default_factory=list)
    selection: SelectionModel | None = Field(default=None, description="Selection in effect before the first op")


class LayoutRequest(BaseModel):
    jbb: str = Field(..., description="JBB document text")
    shift: int | None = Field(default=None, description="Simulation shift; defaults to the document's view shift")
    row_start: int | None = Field(default=None, description="First array row (inclusive)")
    row_end: int | None = Field(default=None, description="Last array row (exclusive)")


class ReportRequest(BaseModel):
    jbb: str = Field(..., description="JBB document text")
    pattern_name: str = Field(default="design.jbb")


class PrintChunksRequest(BaseModel):
    total_rows: int = Field(..., ge=0, le=MAX_HEIGHT)
    chunk_size: int | None = Field(default=None, gt=0)
    marker_every: int = Field(default=10, gt=0, description="Row ruler spacing")


class ProjectSaveRequest(BaseModel):
    name: str = Field(default="design.jbb")
    jbb: str = Field(..., description="JBB document text to store")


class RecentFileRequest(BaseModel):
    name: str = Field(default="", description="File name; .jbb is appended when missing")
    jbb: str = Field(..., description="JBB document text")
