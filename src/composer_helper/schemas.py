"""Pydantic schemas for Composer JSON crossing the package boundary.

Purpose
-------
Validate the shapes read from composer.json, installed.json and the
``composer outdated --format json`` report before they are turned into
domain dataclasses.

Composer keys use dashes (``require-dev``, ``vendor-dir``); the schemas
expose them as snake_case attributes through aliases.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _empty_str_dict() -> dict[str, str]:
    """Return empty constraint mapping for default factory."""
    return {}


def _empty_any_dict() -> dict[str, Any]:
    """Return empty metadata mapping for default factory."""
    return {}


def _empty_array_as_mapping(value: Any) -> Any:
    """PHP encodes an empty array as ``[]``; treat it as an empty mapping."""
    if value == []:
        return {}
    return value


class ManifestConfigSchema(BaseModel):
    """Schema for the ``config`` section of composer.json."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    vendor_dir: str | None = Field(default=None, alias="vendor-dir")
    bin_dir: str | None = Field(default=None, alias="bin-dir")


class ManifestSchema(BaseModel):
    """Schema for the parts of composer.json this library consumes."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    require: dict[str, str] = Field(default_factory=_empty_str_dict)
    require_dev: dict[str, str] = Field(default_factory=_empty_str_dict, alias="require-dev")
    config: ManifestConfigSchema = Field(default_factory=ManifestConfigSchema)

    @field_validator("require", "require_dev", "config", mode="before")
    @classmethod
    def _empty_list_as_mapping(cls, value: Any) -> Any:
        return _empty_array_as_mapping(value)


class InstalledPackageSchema(BaseModel):
    """Schema for one package entry of vendor/composer/installed.json."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    version: str = ""
    require: dict[str, str] = Field(default_factory=_empty_str_dict)
    extra: dict[str, Any] = Field(default_factory=_empty_any_dict)
    type: str = "library"
    description: str = ""

    @field_validator("require", "extra", mode="before")
    @classmethod
    def _empty_list_as_mapping(cls, value: Any) -> Any:
        return _empty_array_as_mapping(value)


class OutdatedPackageSchema(BaseModel):
    """Schema for one entry of the ``composer outdated`` report."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: str
    version: str = ""
    latest: str | None = None
    latest_status: str = Field(default="unknown", alias="latest-status")
    description: str | None = None


def _empty_outdated_list() -> list[OutdatedPackageSchema]:
    """Return empty list for default factory."""
    return []


class OutdatedReportSchema(BaseModel):
    """Schema for the ``composer outdated --format json`` document."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    installed: list[OutdatedPackageSchema] = Field(default_factory=_empty_outdated_list)


__all__ = [
    "InstalledPackageSchema",
    "ManifestConfigSchema",
    "ManifestSchema",
    "OutdatedPackageSchema",
    "OutdatedReportSchema",
]
