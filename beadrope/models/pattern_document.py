"""JSON form of a pattern document for the HTTP API."""

from __future__ import annotations

from dataclasses import asdict

from pydantic import BaseModel, Field

from beadrope.engine.document import (
    DEFAULT_PALETTE,
    DEFAULT_TOOL,
    TOOLS,
    CellPoint,
    PatternDocument,
    Selection,
    ViewState,
    grid_from_rows,
)


class ViewModel(BaseModel):
    draft_visible: bool = True
    corrected_visible: bool = True
    simulation_visible: bool = True
    report_visible: bool = True
    draw_colors: bool = True
    draw_symbols: bool = False
    symbols: str = ViewState().symbols
    selected_tool: str = "pencil"
    selected_color: int = 1
    zoom: int = 2
    scroll: int = 0
    shift: int = 0


class PatternDocumentModel(BaseModel):
    version: int = 1
    author: str = ""
    organization: str = ""
    notes: str = ""
    palette: list[tuple[int, int, int, int]] = Field(default_factory=lambda: list(DEFAULT_PALETTE))
    view: ViewModel = Field(default_factory=ViewModel)
    rows: list[list[int]] = Field(default_factory=list)

    @classmethod
    def from_document(cls, doc: PatternDocument) -> PatternDocumentModel:
        return cls(
            version=doc.version,
            author=doc.author,
            organization=doc.organization,
            notes=doc.notes,
            palette=list(doc.palette),
            view=ViewModel(**asdict(doc.view)),
            rows=doc.rows(),
        )

    def to_document(self) -> PatternDocument:
        view = self.view.model_dump()
        if view["selected_tool"] not in TOOLS:
            view["selected_tool"] = DEFAULT_TOOL
        return PatternDocument(
            grid=grid_from_rows(self.rows),
            palette=tuple(tuple(c) for c in self.palette) or DEFAULT_PALETTE,
            author=self.author,
            organization=self.organization,
            notes=self.notes,
            version=self.version,
            view=ViewState(**view),
        )


class PointModel(BaseModel):
    x: int
    y: int


class SelectionModel(BaseModel):
    start: PointModel
    end: PointModel

    @classmethod
    def from_selection(cls, selection: Selection | None) -> SelectionModel | None:
        if selection is None:
            return None
        return cls(
            start=PointModel(x=selection.start.x, y=selection.start.y),
            end=PointModel(x=selection.end.x, y=selection.end.y),
        )

    def to_selection(self) -> Selection:
        return Selection(CellPoint(self.start.x, self.start.y), CellPoint(self.end.x, self.end.y))
