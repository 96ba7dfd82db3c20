"""Atomic file write utilities.

Writes go through the atomicwrites library: a file is either completely
written or left untouched, so an interrupted save never corrupts the
preference store, known_hosts or .gitignore.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from atomicwrites import atomic_write  # type: ignore[import-untyped]

__all__ = [
    "atomic_write_json",
    "atomic_write_text",
]


def atomic_write_text(
    path: Path | str,
    content: str,
    *,
    encoding: str = "utf-8",
    mkdir: bool = True,
) -> None:
    """Write text content to a file atomically.

    Args:
        path: Destination file path (Path or str).
        content: Text content to write.
        encoding: Character encoding to use. Defaults to "utf-8".
        mkdir: If True, create parent directories if they don't exist.

    Raises:
        OSError: If the write or rename operation fails.
    """
    file_path = Path(path)

    if mkdir:
        file_path.parent.mkdir(parents=True, exist_ok=True)

    with atomic_write(str(file_path), mode="w", encoding=encoding, overwrite=True) as f:
        f.write(content)


def atomic_write_json(
    path: Path | str,
    data: Any,
    *,
    indent: int | None = 2,
    ensure_ascii: bool = False,
    encoding: str = "utf-8",
    mkdir: bool = True,
) -> None:
    """Write data as JSON to a file atomically.

    Args:
        path: Destination file path (Path or str).
        data: Data to serialize as JSON. Must be JSON-serializable.
        indent: Number of spaces for JSON indentation, or None for compact output.
        ensure_ascii: If True, escape non-ASCII characters.
        encoding: Character encoding to use.
        mkdir: If True, create parent directories if they don't exist.

    Raises:
        OSError: If the write or rename operation fails.
        TypeError: If the data is not JSON-serializable.
    """
    content = json.dumps(data, indent=indent, ensure_ascii=ensure_ascii)
    atomic_write_text(path, content, encoding=encoding, mkdir=mkdir)
