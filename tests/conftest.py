"""Shared fixtures: throwaway Composer projects and a scripted application."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from composer_helper.output import OutputSink

TESTDATA_DIR = Path(__file__).parent / "testdata"


@dataclass
class ScriptedApplication:
    """Application double that writes canned chunks and records its calls."""

    chunks: list[str] = field(default_factory=list)
    error: Exception | None = None
    calls: list[dict[str, Any]] = field(default_factory=list)

    def run(self, arguments: Mapping[str, Any], output: OutputSink) -> None:
        self.calls.append(dict(arguments))
        for chunk in self.chunks:
            output.write(chunk)
        if self.error is not None:
            raise self.error


ProjectFactory = Callable[..., Path]


@pytest.fixture
def make_project(tmp_path: Path) -> ProjectFactory:
    """Create a project directory with composer.json and optional vendor files.

    ``manifest`` and ``installed`` accept either JSON-serialisable data or a
    raw string written verbatim.
    """

    def _write(path: Path, content: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content if isinstance(content, str) else json.dumps(content), encoding="utf-8")

    def factory(
        manifest: Any = None,
        installed: Any = None,
        *,
        vendor_dir: str = "vendor",
        name: str = "project",
    ) -> Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        _write(root / "composer.json", {"name": "acme/project"} if manifest is None else manifest)
        if installed is not None:
            _write(root / vendor_dir / "composer" / "installed.json", installed)
        return root

    return factory


@pytest.fixture
def scripted_application() -> ScriptedApplication:
    return ScriptedApplication()


@pytest.fixture
def sample_project(make_project: ProjectFactory) -> Path:
    """A project built from the bundled testdata files."""
    manifest = (TESTDATA_DIR / "composer_app.json").read_text(encoding="utf-8")
    installed = (TESTDATA_DIR / "installed_v2.json").read_text(encoding="utf-8")
    return make_project(manifest, installed, name="storefront")
