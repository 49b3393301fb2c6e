"""/api/projects and /api/recent-files — the working project and recent files."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from beadrope.dependencies import get_store
from beadrope.jbb import parse_jbb
from beadrope.models.requests import ProjectSaveRequest, RecentFileRequest
from beadrope.models.responses import ProjectResponse, RecentFileModel, RecentFilesResponse
from beadrope.storage.store import ProjectRecord, ProjectStore, RecentFileRecord

router = APIRouter()


def _recent(record: RecentFileRecord) -> RecentFileModel:
    return RecentFileModel(id=record.id, name=record.name, updated_at=record.updated_at, jbb=record.content)


def _project(record: ProjectRecord) -> ProjectResponse:
    return ProjectResponse(id=record.id, name=record.name, updated_at=record.updated_at, jbb=record.content)


@router.get("/projects/{project_id}", response_model=ProjectResponse)
async def load_project(project_id: str, store: ProjectStore = Depends(get_store)) -> ProjectResponse:
    record = store.load_project(project_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Unknown project {project_id!r}")
    return _project(record)


@router.put("/projects/{project_id}", response_model=ProjectResponse)
async def save_project(
    project_id: str,
    req: ProjectSaveRequest,
    store: ProjectStore = Depends(get_store),
) -> ProjectResponse:
    # Parse first so that only well-formed documents are stored
    record = ProjectRecord.from_document(project_id, req.name, parse_jbb(req.jbb))
    store.save_project(record)
    return _project(record)


@router.get("/recent-files", response_model=RecentFilesResponse)
async def list_recent_files(limit: int | None = None, store: ProjectStore = Depends(get_store)) -> RecentFilesResponse:
    return RecentFilesResponse(files=[_recent(r) for r in store.list_recent_files(limit)])


@router.post("/recent-files", response_model=RecentFileModel)
async def save_recent_file(req: RecentFileRequest, store: ProjectStore = Depends(get_store)) -> RecentFileModel:
    parse_jbb(req.jbb)
    return _recent(store.save_recent_file(req.name, req.jbb))


@router.delete("/recent-files/{file_id}")
async def delete_recent_file(file_id: str, store: ProjectStore = Depends(get_store)) -> dict:
    if not store.delete_recent_file(file_id):
        raise HTTPException(status_code=404, detail=f"Unknown recent file {file_id!r}")
    return {"status": "deleted", "id": file_id}
