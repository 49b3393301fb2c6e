"""Project store — JSON-file persistence for the working project and recent files.

Documents are stored as JBB text, so a stored project round-trips through the
same parser and serializer as files on disk.

Layout under ``data_dir``:
    projects.json      {project_id: ProjectRecord}
    recent_files.json  [RecentFileRecord, ...]
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import asdict, dataclass
from pathlib import Path

from beadrope.engine.document import PatternDocument
from beadrope.jbb import parse_jbb, serialize_jbb

logger = logging.getLogger(__name__)

_DEFAULT_DATA_DIR = Path(__file__).parent / "data"

LOCAL_PROJECT_ID = "local-default"
DEFAULT_RECENT_NAME = "design.jbb"
MAX_RECENT_FILES = 12


@dataclass
class ProjectRecord:
    id: str
    name: str
    updated_at: float
    content: str  # JBB text

    @classmethod
    def from_document(cls, project_id: str, name: str, document: PatternDocument) -> ProjectRecord:
        return cls(id=project_id, name=name, updated_at=time.time(), content=serialize_jbb(document))

    def document(self) -> PatternDocument:
        return parse_jbb(self.content)


@dataclass
class RecentFileRecord:
    id: str
    name: str
    updated_at: float
    content: str


def normalize_recent_name(name: str) -> str:
    trimmed = name.strip()
    if not trimmed:
        return DEFAULT_RECENT_NAME
    return trimmed if trimmed.lower().endswith(".jbb") else f"{trimmed}.jbb"


def recent_id(name: str) -> str:
    return normalize_recent_name(name).lower()


class ProjectStore:
    """File-backed store for the current project and the recent-files list."""

    def __init__(self, data_dir: Path | None = None, max_recent: int = MAX_RECENT_FILES) -> None:
        self.data_dir = Path(data_dir) if data_dir else _DEFAULT_DATA_DIR
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.projects_file = self.data_dir / "projects.json"
        self.recent_file = self.data_dir / "recent_files.json"
        self.max_recent = max_recent

    # --- projects ---

    def load_project(self, project_id: str) -> ProjectRecord | None:
        data = self._read(self.projects_file, {})
        raw = data.get(project_id)
        return ProjectRecord(**raw) if raw else None

    def save_project(self, record: ProjectRecord) -> None:
        data = self._read(self.projects_file, {})
        data[record.id] = asdict(record)
        self._write(self.projects_file, data)
        logger.info("Saved project %s", record.id)

    # --- recent files ---

    def save_recent_file(self, name: str, content: str) -> RecentFileRecord:
        """Insert or refresh a recent file, evicting the oldest beyond the limit."""
        normalized = normalize_recent_name(name)
        record = RecentFileRecord(
            id=recent_id(normalized),
            name=normalized,
            updated_at=time.time(),
            content=content,
        )
        records = [r for r in self._load_recent() if r.id != record.id]
        records.append(record)
        records.sort(key=lambda r: r.updated_at)
        if len(records) > self.max_recent:
            stale = records[: len(records) - self.max_recent]
            logger.debug("Evicting %d stale recent file(s)", len(stale))
            records = records[len(stale):]
        self._save_recent(records)
        return record

    def list_recent_files(self, limit: int | None = None) -> list[RecentFileRecord]:
        """Newest first."""
        records = sorted(self._load_recent(), key=lambda r: r.updated_at)[::-1]
        return records[: limit if limit is not None else self.max_recent]

    def delete_recent_file(self, file_id: str) -> bool:
        records = self._load_recent()
        kept = [r for r in records if r.id != file_id]
        if len(kept) == len(records):
            return False
        self._save_recent(kept)
        return True

    def _load_recent(self) -> list[RecentFileRecord]:
        return [RecentFileRecord(**r) for r in self._read(self.recent_file, [])]

    def _save_recent(self, records: list[RecentFileRecord]) -> None:
        self._write(self.recent_file, [asdict(r) for r in records])

    @staticmethod
    def _read(path: Path, default):
        if not path.exists():
            return default
        with open(path, encoding="utf-8") as f:
            return json.load(f)

    @staticmethod
    def _write(path: Path, data) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)


# Singleton
_store: ProjectStore | None = None


def get_project_store() -> ProjectStore:
    """Get or create the global ProjectStore, rooted at the configured data dir."""
    global _store
    if _store is None:
        from beadrope.config import settings

        _store = ProjectStore(
            data_dir=Path(settings.data_dir) if settings.data_dir else None,
            max_recent=settings.max_recent_files,
        )
    return _store
