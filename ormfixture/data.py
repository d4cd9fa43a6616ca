"""Fixture data file loading."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator

from ormfixture.exceptions import InvalidConfigError

DATA_FILE_SUFFIX = ".json"


def resolve_data_file(path: str | Path, base_dir: str | Path | None = None) -> Path:
    """
    Resolve a data file path.

    Args:
        path: Absolute path, or path relative to base_dir
        base_dir: Directory relative paths are resolved against

    Returns:
        Resolved path (existence is not checked)
    """
    data_file = Path(path)
    if not data_file.is_absolute() and base_dir is not None:
        data_file = Path(base_dir) / data_file
    return data_file


def load_data_file(path: str | Path) -> dict[Any, Any] | list[Any]:
    """
    Load fixture rows from a JSON data file.

    Args:
        path: Path to the data file

    Returns:
        Parsed JSON object (alias -> row) or array (index -> row)

    Raises:
        InvalidConfigError: If the file doesn't exist or isn't an object or array
        json.JSONDecodeError: If the file contains invalid JSON
    """
    data_file = Path(path)
    if not data_file.is_file():
        raise InvalidConfigError(f"Fixture data file does not exist: {data_file}")

    with open(data_file, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, (dict, list)):
        raise InvalidConfigError(
            f"Fixture data file must contain an object or an array: {data_file}"
        )
    return data


def iter_rows(data: dict[Any, Any] | list[Any]) -> Iterator[tuple[Any, dict[str, Any]]]:
    """Yield (alias, row) pairs; list entries are aliased by index."""
    items = data.items() if isinstance(data, dict) else enumerate(data)
    for alias, row in items:
        if not isinstance(row, dict):
            raise InvalidConfigError(f"Fixture row {alias!r} must be an object, got {type(row).__name__}")
        yield alias, row


def list_data_files(base_dir: str | Path) -> list[str]:
    """
    List all data file names in a directory.

    Returns:
        Sorted names without the .json extension
    """
    return sorted(f.stem for f in Path(base_dir).glob(f"*{DATA_FILE_SUFFIX}"))


def data_file_exists(path: str | Path, base_dir: str | Path | None = None) -> bool:
    """Check if a data file exists."""
    return resolve_data_file(path, base_dir).is_file()
