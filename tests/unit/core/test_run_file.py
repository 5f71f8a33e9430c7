"""Unit tests for YAML run-file parsing."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from core.config import ReissueConfig
from core.errors import ReissueConfigError
from core.run_file import load_run_file


def _write_run_file(tmp_path: Path, content: str) -> Path:
    run_file = tmp_path / "run.yaml"
    run_file.write_text(content, encoding="utf-8")
    return run_file


def test_load_run_file_resolves_relative_sources(tmp_path: Path) -> None:
    """Relative paths should resolve against the run file directory."""
    run_file = _write_run_file(
        tmp_path,
        "version: 1\n"
        "sources:\n"
        "  directory: raw\n"
        "  tracks: extra/tracks.csv\n"
        "store:\n"
        "  database_url: sqlite:///catalog.db\n"
        "duration_unit: seconds\n",
    )

    options = load_run_file(str(run_file), ReissueConfig.from_env())

    assert options.sources.genres == (tmp_path / "raw" / "genres.csv").resolve()
    assert options.sources.tracks == (tmp_path / "extra" / "tracks.csv").resolve()
    assert options.database_url == "sqlite:///catalog.db"
    assert options.duration_unit == "seconds"


def test_load_run_file_falls_back_to_config(tmp_path: Path) -> None:
    """Omitted sections should use the runtime configuration."""
    config = replace(
        ReissueConfig.from_env(),
        source_dir=tmp_path / "env-raw",
        database_url="sqlite:///env.db",
        duration_unit="minutes",
    )
    run_file = _write_run_file(tmp_path, "version: 1\n")

    options = load_run_file(str(run_file), config)

    assert options.sources.albums == tmp_path / "env-raw" / "albums.csv"
    assert (options.database_url, options.duration_unit) == ("sqlite:///env.db", "minutes")


@pytest.mark.parametrize(
    "content",
    [
        "version: 2\n",
        "version: 1\nunknown: true\n",
        "version: 1\nsources:\n  lyrics: lyrics.csv\n",
        "version: 1\nduration_unit: hours\n",
        "version: [1\n",
        "",
    ],
)
def test_load_run_file_rejects_invalid_files(tmp_path: Path, content: str) -> None:
    """Invalid run files should raise config errors."""
    run_file = _write_run_file(tmp_path, content)

    with pytest.raises(ReissueConfigError):
        load_run_file(str(run_file), ReissueConfig.from_env())


def test_load_run_file_raises_for_missing_file(tmp_path: Path) -> None:
    """A missing run file should raise a config error."""
    with pytest.raises(ReissueConfigError):
        load_run_file(str(tmp_path / "missing.yaml"), ReissueConfig.from_env())
