"""Error taxonomy for reading Composer files and decoding command output.

Contents
--------
* :class:`ComposerHelperError` - Base class for all errors raised here
* :class:`ManifestFileNotFoundError` - A file or directory is missing or unreadable
* :class:`EmptyFileError` - A file exists but has no content
* :class:`MalformedJsonError` - Content is present but is not the expected JSON

Failures raised by the composer binary itself are not part of this
hierarchy; they reach the caller unchanged.
"""

from __future__ import annotations

from pathlib import Path


class ComposerHelperError(Exception):
    """Base class for errors raised by composer_helper."""


class ManifestFileNotFoundError(ComposerHelperError, FileNotFoundError):
    """A required file or directory does not exist or cannot be read."""

    def __init__(self, detail: str = "") -> None:
        message = "File not found." + (f" {detail}" if detail else "")
        super().__init__(message)


class EmptyFileError(ComposerHelperError, ValueError):
    """A file exists but contains zero bytes."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"File {self.path} is empty.")


class MalformedJsonError(ComposerHelperError, ValueError):
    """Content could not be decoded as the expected JSON document."""


__all__ = [
    "ComposerHelperError",
    "EmptyFileError",
    "MalformedJsonError",
    "ManifestFileNotFoundError",
]
