"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from beadrope.models.pattern_document import PatternDocumentModel, SelectionModel


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"


class DocumentResponse(BaseModel):
    document: PatternDocumentModel
    width: int = 0
    height: int = 0


class SerializeResponse(BaseModel):
    jbb: str


class EditResponse(BaseModel):
    jbb: str
    document: PatternDocumentModel
    applied: list[bool] = Field(default_factory=list)
    selection: SelectionModel | None = None
    dirty: bool = False
    can_undo: bool = False
    can_redo: bool = False


class PreviewCellModel(BaseModel):
    x: float
    y: float
    width: float
    color_index: int
    source_x: int
    source_y: int


class LayoutResponse(BaseModel):
    cells: list[PreviewCellModel] = Field(default_factory=list)
    min_x: float = 0.0
    max_x: float = 1.0
    min_y: float = 0.0
    max_y: float = 1.0


class ReportEntryModel(BaseModel):
    label: str
    value: str


class ColorCountModel(BaseModel):
    color_index: int
    count: int
    symbol: str = " "
    symbol_color: list[int] = Field(default_factory=list, description="RGBA to draw the symbol over this color")


class ReportResponse(BaseModel):
    entries: list[ReportEntryModel] = Field(default_factory=list)
    color_counts: list[ColorCountModel] = Field(default_factory=list)
    bead_runs: list[ColorCountModel] = Field(default_factory=list)
    used_color_count: int = 0
    used_height: int = 0
    repeat: int = 0


class RowMarkerModel(BaseModel):
    offset: int = Field(..., description="Grid line within the chunk, counted from its first row")
    row: int = Field(..., description="Rows of rope below that line")


class PrintChunkModel(BaseModel):
    start: int
    end: int
    label: str
    markers: list[RowMarkerModel] = Field(default_factory=list)


class PrintChunksResponse(BaseModel):
    chunks: list[PrintChunkModel] = Field(default_factory=list)


class ProjectResponse(BaseModel):
    id: str
    name: str
    updated_at: float
    jbb: str


class RecentFileModel(BaseModel):
    id: str
    name: str
    updated_at: float
    jbb: str


class RecentFilesResponse(BaseModel):
    files: list[RecentFileModel] = Field(default_factory=list)
