"""Public SDK surface for Reissue.

This module provides a stable import path for pipeline users.
It re-exports the primary client and typed option models.
"""

from __future__ import annotations

from core.config import ReissueConfig
from core.errors import (
    ReissueConfigError,
    ReissueError,
    ReissueSourceError,
    ReissueStoreError,
)
from core.types import (
    CatalogSnapshot,
    EntityStats,
    RunOptions,
    RunReport,
    SourceLocations,
)
from ingest.pipeline import run_catalog_pipeline
from store.catalog_sdk import ReissueClient

__all__ = [
    "CatalogSnapshot",
    "EntityStats",
    "ReissueClient",
    "ReissueConfig",
    "ReissueConfigError",
    "ReissueError",
    "ReissueSourceError",
    "ReissueStoreError",
    "RunOptions",
    "RunReport",
    "SourceLocations",
    "run_catalog_pipeline",
]
