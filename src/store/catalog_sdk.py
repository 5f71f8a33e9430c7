"""Python SDK for catalog operations.

This module exposes high-level APIs for running the cleaning pipeline
and inspecting the normalized store.
"""

from __future__ import annotations

from core.config import ReissueConfig
from core.run_file import load_run_file
from core.types import CatalogSnapshot, RunOptions, RunReport, SourceLocations
from ingest.pipeline import run_catalog_pipeline
from store.catalog_store import CatalogStore


class ReissueClient:
    """Primary SDK entry point for catalog runs."""

    def __init__(self, config: ReissueConfig | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
        """
        self._config = config or ReissueConfig.from_env()

    @property
    def config(self) -> ReissueConfig:
        """Runtime configuration used by this client."""
        return self._config

    def default_options(self) -> RunOptions:
        """Build run options from the client configuration."""
        return RunOptions(
            sources=SourceLocations.from_directory(self._config.source_dir),
            database_url=self._config.database_url,
            duration_unit=self._config.duration_unit,
        )

    def run(self, options: RunOptions | None = None) -> RunReport:
        """Rebuild the normalized store from raw sources.

        Args:
            options: Optional run options; config defaults when omitted.

        Returns:
            Successful run report.

        Raises:
            ReissueSourceError: If a raw source is missing or malformed.
            ReissueStoreError: If the store cannot be reached or written.
        """
        return run_catalog_pipeline(options or self.default_options())

    def run_file(self, run_file_path: str) -> RunReport:
        """Run the pipeline with options loaded from a YAML run file.

        Raises:
            ReissueConfigError: If the run file is invalid.
        """
        return self.run(load_run_file(run_file_path, self._config))

    def catalog(self, database_url: str | None = None) -> CatalogSnapshot:
        """Read the current contents of the normalized store."""
        store = CatalogStore(database_url or self._config.database_url)
        try:
            return store.read_catalog()
        finally:
            store.dispose()

    def table_counts(self, database_url: str | None = None) -> dict[str, int]:
        """Return row counts per catalog table."""
        store = CatalogStore(database_url or self._config.database_url)
        try:
            return store.table_counts()
        finally:
            store.dispose()
