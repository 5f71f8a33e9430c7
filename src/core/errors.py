"""Reissue exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Per-row problems are counted, never raised; only source-level and
store-level failures surface as exceptions.
"""

from __future__ import annotations


class ReissueError(Exception):
    """Base exception for all Reissue failures."""

    stage = "run"


class ReissueConfigError(ReissueError):
    """Raised for invalid runtime configuration or run files."""

    stage = "configure"


class ReissueSourceError(ReissueError):
    """Raised when a raw source is missing or cannot be parsed."""

    stage = "read_sources"


class ReissueStoreError(ReissueError):
    """Raised when the normalized store cannot be reached or written."""

    stage = "load"
