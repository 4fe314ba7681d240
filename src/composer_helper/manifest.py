"""Locate a Composer project and read its JSON files.

Purpose
-------
Provide the file-level primitives of the manifest reader: resolving the
project root that holds composer.json and decoding Composer's JSON files
with a precise error for each way they can be unusable.

Contents
--------
* :func:`default_base_path` - Project root derived from this package's location
* :func:`resolve_base_path` - Validate an explicit or default project root
* :func:`check_file_readable` - Existence and permission check
* :func:`read_json_file` - Read and decode a JSON file

System Role
-----------
The lowest layer of the library. :class:`composer_helper.helper.ComposerHelper`
builds every manifest and installed-packages query on these functions.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from .exceptions import EmptyFileError, MalformedJsonError, ManifestFileNotFoundError

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "composer.json"

# Levels between the package directory and the project root when checked
# out as <root>/vendor/<vendor>/<name>/src/composer_helper
_INSTALL_DEPTH = 4


def default_base_path() -> Path:
    """Return the project root assumed from where this package lives.

    Returns:
        The directory ``_INSTALL_DEPTH + 1`` levels above the package
        directory, or the filesystem root for shallower installs.
    """
    package_dir = Path(__file__).resolve().parent
    parents = package_dir.parents
    return parents[min(_INSTALL_DEPTH, len(parents) - 1)]


def check_file_readable(path: Path | str) -> None:
    """Ensure ``path`` is an existing, readable regular file.

    Raises:
        ManifestFileNotFoundError: If the file is missing, is not a regular
            file, or cannot be read by the current process.
    """
    path = Path(path)
    if not path.is_file() or not os.access(path, os.R_OK):
        raise ManifestFileNotFoundError(
            f"File '{path}' not found or you do not have permissions to read it"
        )


def resolve_base_path(explicit_path: Path | str | None = None) -> Path:
    """Resolve the directory that holds the project's composer.json.

    Args:
        explicit_path: Project root to use. Trailing separators are trimmed.
            When None or empty, :func:`default_base_path` is used.

    Returns:
        The project root.

    Raises:
        ManifestFileNotFoundError: If the root has no readable composer.json.

    Example:
        >>> resolve_base_path("/nonexistent/project/")  # doctest: +ELLIPSIS
        Traceback (most recent call last):
        ...
        composer_helper.exceptions.ManifestFileNotFoundError: File not found. ...
    """
    raw = str(explicit_path) if explicit_path else ""
    if raw:
        trimmed = raw.rstrip("/\\") or raw[0]
        base_path = Path(trimmed)
    else:
        base_path = default_base_path()

    logger.debug("Resolved Composer project root to %s", base_path)
    check_file_readable(base_path / MANIFEST_FILENAME)
    return base_path


def read_json_file(path: Path | str) -> Any:
    """Read and decode a JSON file.

    Args:
        path: File to read.

    Returns:
        The decoded JSON value.

    Raises:
        ManifestFileNotFoundError: If the file is missing or unreadable.
        EmptyFileError: If the file has zero length.
        MalformedJsonError: If the content is not valid JSON.
    """
    path = Path(path)
    check_file_readable(path)

    content = path.read_text(encoding="utf-8")
    if not content:
        raise EmptyFileError(path)

    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise MalformedJsonError(f"{path}: {exc.msg} (line {exc.lineno}, column {exc.colno})") from exc


__all__ = [
    "MANIFEST_FILENAME",
    "check_file_readable",
    "default_base_path",
    "read_json_file",
    "resolve_base_path",
]
