"""Facade over a Composer project and the composer binary.

Purpose
-------
Answer questions about a PHP project managed by Composer: what it requires,
what is installed, which native extensions the installed packages need and
which packages are outdated. File-based answers come from composer.json and
vendor/composer/installed.json; computed answers are delegated to composer
itself through :meth:`ComposerHelper.run_command`.

Contents
--------
* :class:`ComposerHelper` - Stateless query facade bound to one project root
* :func:`create_helper` - Build a helper from the layered configuration

System Role
-----------
The main entry point of the library. Every query re-reads the files it
needs; nothing is cached between calls.
"""

from __future__ import annotations

import json
import logging
import platform
import re
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, cast

from pydantic import ValidationError

from .application import Application, ComposerApplication
from .config import get_composer_settings
from .exceptions import ComposerHelperError, MalformedJsonError, ManifestFileNotFoundError
from .limits import DEFAULT_MEMORY_LIMIT, relaxed_limits
from .manifest import MANIFEST_FILENAME, read_json_file, resolve_base_path
from .models import CommandResult, InstalledPackage, LatestStatus, OutdatedPackage
from .output import BufferedOutput
from .schemas import InstalledPackageSchema, ManifestSchema, OutdatedReportSchema

logger = logging.getLogger(__name__)

_RE_EXTENSION = re.compile(r"^ext-(.+)$")
_FORMAT_FLAGS = ("--format", "-f")


def _wants_json(arguments: Mapping[str, Any]) -> bool:
    """Return True when the arguments request JSON formatted output."""
    return any(arguments.get(flag) == "json" for flag in _FORMAT_FLAGS)


def _installed_entries(data: Any, path: Path) -> list[Any]:
    """Return the package list from either installed.json layout.

    Composer 1 writes a bare list; Composer 2 wraps it as
    ``{"packages": [...], "dev": ..., "dev-package-names": [...]}``.
    """
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get("packages"), list):
        return data["packages"]
    raise MalformedJsonError(f"{path}: expected a package list")


def _to_installed_package(schema: InstalledPackageSchema) -> InstalledPackage:
    return InstalledPackage(
        name=schema.name,
        version=schema.version,
        require=dict(schema.require),
        extra=dict(schema.extra),
        type=schema.type,
        description=schema.description,
    )


def _latest_status(value: str) -> LatestStatus:
    try:
        return LatestStatus(value)
    except ValueError:
        return LatestStatus.UNKNOWN


def _lookup_command() -> str:
    """Return the host's binary lookup command."""
    return "where" if platform.system().lower().startswith("win") else "which"


@dataclass
class ComposerHelper:
    """Query facade bound to one Composer project.

    Attributes:
        base_path: Project root holding composer.json. None or empty derives
            it from where this package is installed.
        application: The wrapped package manager. Defaults to the composer
            executable run inside ``base_path``.
        memory_limit: COMPOSER_MEMORY_LIMIT applied around expensive commands.

    Raises:
        ManifestFileNotFoundError: On construction, if the project root has
            no readable composer.json.
    """

    base_path: Path | str | None = None
    application: Application | None = None
    memory_limit: str = DEFAULT_MEMORY_LIMIT
    _root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Resolve the project root and the default application."""
        self._root = resolve_base_path(self.base_path)
        self.base_path = self._root
        if self.application is None:
            self.application = ComposerApplication(working_dir=self._root)

    # ── Manifest reader ──────────────────────────────────────────────────

    @property
    def manifest_path(self) -> Path:
        """Path of the project's composer.json."""
        return self._root / MANIFEST_FILENAME

    @property
    def default_vendor_path(self) -> Path:
        return self._root / "vendor"

    @property
    def default_binary_path(self) -> Path:
        return self.default_vendor_path / "bin"

    def get_manifest(self) -> dict[str, Any]:
        """Read composer.json.

        Raises:
            ManifestFileNotFoundError: If the file is missing or unreadable.
            EmptyFileError: If the file is empty.
            MalformedJsonError: If it is not a JSON object.
        """
        data = read_json_file(self.manifest_path)
        if not isinstance(data, dict):
            raise MalformedJsonError(f"{self.manifest_path}: expected a JSON object")
        return data

    def _manifest_schema(self, manifest: dict[str, Any] | None = None) -> ManifestSchema:
        if manifest is None:
            manifest = self.get_manifest()
        try:
            return ManifestSchema.model_validate(manifest)
        except ValidationError as exc:
            raise MalformedJsonError(f"{self.manifest_path}: {exc}") from exc

    def _configured_dir(self, key: str, default: Path, label: str) -> Path:
        """Resolve a ``config`` directory override or its default."""
        try:
            manifest = self.get_manifest()
        except ComposerHelperError:
            if not default.is_dir():
                raise ManifestFileNotFoundError(f"The {label} folder is missing.") from None
            return default

        configured = getattr(self._manifest_schema(manifest).config, key)
        if configured:
            return self._root / configured
        return default

    def get_vendor_path(self) -> Path:
        """Return the vendor directory, honouring ``config.vendor-dir``."""
        return self._configured_dir("vendor_dir", self.default_vendor_path, "vendor")

    def get_binary_path(self) -> Path:
        """Return the binaries directory, honouring ``config.bin-dir``."""
        return self._configured_dir("bin_dir", self.default_binary_path, "bin")

    def get_installed(self) -> list[InstalledPackage]:
        """Read vendor/composer/installed.json.

        Returns:
            Installed packages in file order.
        """
        path = self.get_vendor_path() / "composer" / "installed.json"
        entries = _installed_entries(read_json_file(path), path)
        try:
            packages = [_to_installed_package(InstalledPackageSchema.model_validate(entry)) for entry in entries]
        except ValidationError as exc:
            raise MalformedJsonError(f"{path}: {exc}") from exc

        logger.debug("Read %d installed packages from %s", len(packages), path)
        return packages

    def locate_binary(self, name: str) -> str:
        """Find an executable, preferring the project's bin directory.

        Falls back to ``where``/``which`` and returns the last line it
        prints. The lookup's exit status is ignored, so an unknown binary
        yields whatever the host printed, usually ``""``.
        """
        candidate = self.get_binary_path() / name
        if candidate.is_file():
            return str(candidate)

        lookup = _lookup_command()
        logger.debug("%s not in %s, asking %s", name, candidate.parent, lookup)
        completed = subprocess.run([lookup, name], capture_output=True, text=True, check=False)
        lines = completed.stdout.strip().splitlines()
        return lines[-1] if lines else ""

    # ── Command facade ───────────────────────────────────────────────────

    def run_command(self, name: str, arguments: Mapping[str, Any] | None = None) -> CommandResult:
        """Run a composer command and return its final output chunk.

        Args:
            name: Composer command such as ``outdated`` or ``show``.
            arguments: Options in the form accepted by
                :func:`composer_helper.application.build_argv`.

        Returns:
            The decoded JSON value when ``--format``/``-f`` is ``"json"``,
            otherwise the last captured chunk verbatim (``""`` when nothing
            was written).

        Raises:
            MalformedJsonError: If JSON was requested but the final chunk
                does not decode.
        """
        merged = {**(arguments or {}), "command": name}
        output = BufferedOutput()

        application = cast(Application, self.application)
        application.run(merged, output)

        store = output.drain()
        payload = store[-1] if store else ""
        logger.debug("%s produced %d output chunks", name, len(store))

        if not _wants_json(merged):
            return payload
        try:
            return json.loads(payload)
        except json.JSONDecodeError as exc:
            raise MalformedJsonError(f"composer {name} did not end with JSON: {exc.msg}") from exc

    # ── Derived queries ──────────────────────────────────────────────────

    def get_requirements(self) -> dict[str, str]:
        return dict(self._manifest_schema().require)

    def get_dev_requirements(self) -> dict[str, str]:
        return dict(self._manifest_schema().require_dev)

    def get_all_requirements(self) -> dict[str, str]:
        """Runtime and dev requirements; dev constraints win on shared keys."""
        manifest = self._manifest_schema()
        return {**manifest.require, **manifest.require_dev}

    def get_php_requirement(self) -> str | None:
        """The declared PHP version constraint, if any."""
        return self.get_requirements().get("php")

    def get_extras(self) -> dict[str, dict[str, Any]]:
        """Map package name to its ``extra`` metadata, skipping empty ones."""
        return {package.name: package.extra for package in self.get_installed() if package.extra}

    def get_extension_requirements(self) -> dict[str, list[str]]:
        """Collect ``ext-*`` constraints declared by installed packages.

        Returns:
            Extension name (without the ``ext-`` prefix) to its distinct
            constraints in first-seen order.

        Example:
            ``{"ext-json": ">=1.0"}`` in two packages and
            ``{"ext-mbstring": "*"}`` in one give
            ``{"json": [">=1.0"], "mbstring": ["*"]}``.
        """
        collected: dict[str, list[str]] = {}
        for package in self.get_installed():
            for dependency, constraint in package.require.items():
                match = _RE_EXTENSION.match(dependency)
                if match:
                    collected.setdefault(match.group(1), []).append(constraint)

        return {extension: list(dict.fromkeys(constraints)) for extension, constraints in collected.items()}

    def get_installed_versions(self) -> dict[str, str]:
        return {package.name: package.version for package in self.get_installed()}

    def get_outdated(self) -> list[dict[str, Any]]:
        """Ask composer which installed packages are outdated.

        Runs ``composer outdated --format json`` non-interactively and
        quietly with relaxed memory and time limits. Each entry carries
        ``name``, ``version``, ``latest``, ``latest-status`` and
        ``description``.

        Returns:
            The report's ``installed`` list, or ``[]`` when absent.
        """
        with relaxed_limits(self.memory_limit):
            report = self.run_command("outdated", {"--format": "json", "-n": True, "-q": True})

        if not isinstance(report, dict):
            return []
        return list(report.get("installed") or [])

    def get_outdated_packages(self) -> list[OutdatedPackage]:
        """Typed variant of :meth:`get_outdated`."""
        try:
            report = OutdatedReportSchema.model_validate({"installed": self.get_outdated()})
        except ValidationError as exc:
            raise MalformedJsonError(f"composer outdated: {exc}") from exc

        return [
            OutdatedPackage(
                name=entry.name,
                version=entry.version,
                latest=entry.latest,
                latest_status=_latest_status(entry.latest_status),
                description=entry.description,
            )
            for entry in report.installed
        ]


def create_helper(
    base_path: Path | str | None = None,
    *,
    application: Application | None = None,
) -> ComposerHelper:
    """Create a ComposerHelper from the layered configuration.

    Args:
        base_path: Project root; falls back to the configured ``base_path``
            and then to the install-location default.
        application: Replacement for the configured composer executable.

    Returns:
        Configured helper instance.
    """
    settings = get_composer_settings()
    root = base_path or settings.base_path or None
    if application is None:
        resolved = resolve_base_path(root)
        return ComposerHelper(
            base_path=resolved,
            application=ComposerApplication(binary=settings.binary, working_dir=resolved),
            memory_limit=settings.memory_limit,
        )
    return ComposerHelper(base_path=root, application=application, memory_limit=settings.memory_limit)


__all__ = [
    "ComposerHelper",
    "create_helper",
]
