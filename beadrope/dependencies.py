"""FastAPI dependency injection."""

from __future__ import annotations

from beadrope.config import settings
from beadrope.storage.store import ProjectStore, get_project_store


def get_settings():
    return settings


def get_store() -> ProjectStore:
    return get_project_store()
