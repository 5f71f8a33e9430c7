"""Unit tests for CLI command handling."""

from __future__ import annotations

from pathlib import Path

from cli.main import main
from tests.fixture_paths import fixture_path, sqlite_url


def test_cli_run_prints_status_and_counts(tmp_path: Path, capsys) -> None:
    """CLI run should print the success status and one line per entity."""
    args = [
        "--database-url",
        sqlite_url(tmp_path),
        "run",
        "--source-dir",
        str(fixture_path("catalog_raw")),
        "--duration-unit",
        "minutes",
    ]

    exit_code = main(args)
    lines = capsys.readouterr().out.strip().splitlines()

    assert exit_code == 0
    assert lines[0] == "status=succeeded"
    assert [line.split("\t")[0] for line in lines[1:]] == ["genres", "artists", "albums", "tracks"]
    assert "accepted=6" in lines[4] and "loaded=5" in lines[4]


def test_cli_run_reports_failed_stage(tmp_path: Path, capsys) -> None:
    """CLI run should report the failing stage and exit non-zero."""
    args = [
        "--database-url",
        sqlite_url(tmp_path),
        "run",
        "--source-dir",
        str(tmp_path / "missing"),
    ]

    exit_code = main(args)
    error_output = capsys.readouterr().err

    assert exit_code == 1 and "stage=read_sources" in error_output


def test_cli_run_file_and_summary(tmp_path: Path, capsys) -> None:
    """CLI run-file should load the run file and summary should show counts."""
    database_url = sqlite_url(tmp_path)
    run_file = tmp_path / "run.yaml"
    run_file.write_text(
        "version: 1\n"
        f"sources:\n  directory: {fixture_path('catalog_raw')}\n"
        f"store:\n  database_url: {database_url}\n",
        encoding="utf-8",
    )

    run_exit_code = main(["run-file", str(run_file)])
    capsys.readouterr()
    summary_exit_code = main(["--database-url", database_url, "summary"])
    summary_lines = capsys.readouterr().out.strip().splitlines()

    assert run_exit_code == 0 and summary_exit_code == 0
    assert summary_lines == ["genres\t3", "artists\t4", "albums\t3", "tracks\t5"]


def test_cli_run_succeeds_with_oversized_duration(tmp_path: Path, capsys) -> None:
    """An unstorable duration should not turn a CLI run into a failure."""
    source_dir = tmp_path / "raw"
    source_dir.mkdir()
    sources = {
        "genres": "Name\nRock\n",
        "artists": "Name,BirthDate,GenreName\nA,,Rock\n",
        "albums": "Title,ReleaseDate,ArtistName\nX,,A\n",
        "tracks": "Title,Duration,AlbumTitle\nT1,1e18,X\n",
    }
    for entity, content in sources.items():
        (source_dir / f"{entity}.csv").write_text(content, encoding="utf-8")

    exit_code = main(["--database-url", sqlite_url(tmp_path), "run", "--source-dir", str(source_dir)])
    lines = capsys.readouterr().out.strip().splitlines()

    assert exit_code == 0
    assert lines[0] == "status=succeeded" and "loaded=1" in lines[4]
