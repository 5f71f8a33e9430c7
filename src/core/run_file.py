"""Typed run-file parsing for declarative catalog runs.

This module loads and validates YAML run files that locate the raw
sources and the normalized store for one pipeline run. Values left out
of the file fall back to the runtime configuration.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, cast

import yaml

from core.config import ReissueConfig, parse_duration_unit
from core.constants import ENTITY_LOAD_ORDER, RUN_FILE_VERSION
from core.errors import ReissueConfigError
from core.types import RunOptions, SourceLocations

_ROOT_KEYS = {"version", "sources", "store", "duration_unit"}
_SOURCE_KEYS = {"directory", *ENTITY_LOAD_ORDER}
_STORE_KEYS = {"database_url"}


def load_run_file(run_file_path: str, config: ReissueConfig) -> RunOptions:
    """Load and validate a YAML run file from disk.

    Relative source paths resolve against the run file's directory.

    Args:
        run_file_path: File path to YAML run file.
        config: Runtime configuration supplying defaults.

    Returns:
        Fully validated run options.

    Raises:
        ReissueConfigError: If file is invalid or schema checks fail.
    """
    run_file = Path(run_file_path).expanduser().resolve()
    payload = _load_yaml_payload(run_file)
    root_mapping = _expect_mapping(payload, "run file root")
    _validate_keys(root_mapping, _ROOT_KEYS, "run file")
    _parse_version(root_mapping)
    sources = _parse_sources(root_mapping, run_file.parent, config)
    database_url = _parse_database_url(root_mapping, config)
    raw_unit = _optional_string(root_mapping, "duration_unit")
    duration_unit = parse_duration_unit(raw_unit) if raw_unit else config.duration_unit
    return RunOptions(sources=sources, database_url=database_url, duration_unit=duration_unit)


def _load_yaml_payload(run_file: Path) -> object:
    if not run_file.exists():
        raise ReissueConfigError(
            f"Run file does not exist at {run_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(run_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise ReissueConfigError(
            f"Failed to read run file at {run_file}: {error}. Check file permissions and retry."
        ) from error
    except yaml.YAMLError as error:
        raise ReissueConfigError(
            f"Failed to parse YAML run file at {run_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        raise ReissueConfigError(f"Run file at {run_file} is empty. Define at least 'version'.")
    return payload


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if isinstance(value, Mapping):
        normalized_mapping = {}
        for key, payload in value.items():
            if not isinstance(key, str):
                raise ReissueConfigError(
                    f"Invalid {context}: expected string keys, got {type(key).__name__}."
                )
            normalized_mapping[key] = payload
        return normalized_mapping
    raise ReissueConfigError(
        f"Invalid {context}: expected object mapping, got {type(value).__name__}."
    )


def _parse_version(root_mapping: Mapping[str, object]) -> int:
    raw_version = root_mapping.get("version")
    if not isinstance(raw_version, int) or isinstance(raw_version, bool):
        raise ReissueConfigError(
            f"Run file field 'version' must be an integer. Set version: {RUN_FILE_VERSION}."
        )
    if raw_version != RUN_FILE_VERSION:
        raise ReissueConfigError(
            f"Unsupported run file version {raw_version}. Use version: {RUN_FILE_VERSION}."
        )
    return raw_version


def _parse_sources(
    root_mapping: Mapping[str, object],
    base_dir: Path,
    config: ReissueConfig,
) -> SourceLocations:
    raw_sources = root_mapping.get("sources")
    if raw_sources is None:
        return SourceLocations.from_directory(config.source_dir)
    sources_mapping = _expect_mapping(raw_sources, "run file sources")
    _validate_keys(sources_mapping, _SOURCE_KEYS, "run file sources")
    directory = _optional_string(sources_mapping, "directory")
    source_dir = _resolve_path(directory, base_dir) if directory else config.source_dir
    defaults = SourceLocations.from_directory(source_dir).as_mapping()
    paths = {}
    for entity in ENTITY_LOAD_ORDER:
        override = _optional_string(sources_mapping, entity)
        paths[entity] = _resolve_path(override, base_dir) if override else defaults[entity]
    return SourceLocations(**paths)


def _parse_database_url(root_mapping: Mapping[str, object], config: ReissueConfig) -> str:
    raw_store = root_mapping.get("store")
    if raw_store is None:
        return config.database_url
    store_mapping = _expect_mapping(raw_store, "run file store")
    _validate_keys(store_mapping, _STORE_KEYS, "run file store")
    return _optional_string(store_mapping, "database_url") or config.database_url


def _resolve_path(raw_path: str, base_dir: Path) -> Path:
    path = Path(raw_path).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path.resolve()


def _optional_string(mapping: Mapping[str, object], field_name: str) -> str | None:
    raw_value = mapping.get(field_name)
    if raw_value is None:
        return None
    if isinstance(raw_value, str):
        normalized_value = raw_value.strip()
        return normalized_value if normalized_value else None
    raise ReissueConfigError(f"Run file field '{field_name}' must be a string when provided.")


def _validate_keys(mapping: Mapping[str, object], allowed_keys: set[str], context: str) -> None:
    unknown_keys = sorted(set(mapping) - allowed_keys)
    if unknown_keys:
        raise ReissueConfigError(f"The {context} contains unknown fields: {', '.join(unknown_keys)}.")
