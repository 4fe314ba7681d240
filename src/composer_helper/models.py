"""Domain models for Composer project data (dataclasses).

Purpose
-------
Define the data structures handed back to callers once raw Composer JSON
has been validated by the Pydantic schemas in schemas.py.

Contents
--------
* :class:`LatestStatus` - How far an installed package is behind its latest release
* :class:`InstalledPackage` - One entry of vendor/composer/installed.json
* :class:`OutdatedPackage` - One entry of the ``composer outdated`` report

Data Flow Pattern
-----------------
composer JSON → Pydantic (validate) → Dataclass (domain) → caller
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeAlias

# Decoded JSON when a JSON format was requested, otherwise the raw text
CommandResult: TypeAlias = Any


class LatestStatus(str, Enum):
    """Update status reported by ``composer outdated``.

    Attributes:
        UP_TO_DATE: The installed version is the latest one.
        SEMVER_SAFE_UPDATE: A newer version satisfies the declared constraint.
        UPDATE_POSSIBLE: A newer version exists outside the declared constraint.
        UNKNOWN: Composer did not report a status.
    """

    UP_TO_DATE = "up-to-date"
    SEMVER_SAFE_UPDATE = "semver-safe-update"
    UPDATE_POSSIBLE = "update-possible"
    UNKNOWN = "unknown"


def _empty_str_dict() -> dict[str, str]:
    """Return an empty constraint mapping for dataclass defaults."""
    return {}


def _empty_any_dict() -> dict[str, Any]:
    """Return an empty metadata mapping for dataclass defaults."""
    return {}


@dataclass(frozen=True, slots=True)
class InstalledPackage:
    """A package recorded in the installed-packages snapshot.

    Attributes:
        name: Package name such as ``vendor/pkg``.
        version: Installed version string.
        require: Dependency name to constraint, including ``ext-*`` entries.
        extra: Package-specific metadata, opaque to this library.
        type: Composer package type (``library``, ``composer-plugin``, ...).
        description: Short package description.
    """

    name: str
    version: str = ""
    require: dict[str, str] = field(default_factory=_empty_str_dict)
    extra: dict[str, Any] = field(default_factory=_empty_any_dict)
    type: str = "library"
    description: str = ""


@dataclass(frozen=True, slots=True)
class OutdatedPackage:
    """A package entry from the ``composer outdated`` JSON report."""

    name: str
    version: str
    latest: str | None
    latest_status: LatestStatus
    description: str | None = None


__all__ = [
    "CommandResult",
    "InstalledPackage",
    "LatestStatus",
    "OutdatedPackage",
]
