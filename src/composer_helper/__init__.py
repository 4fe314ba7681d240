"""Public package surface for reading Composer projects.

This package locates a PHP project's composer.json, reads the manifest and
the installed-packages snapshot, and runs the composer binary to obtain
results composer computes itself, such as the outdated-package report.

Main API
--------
* :class:`ComposerHelper` - Query facade bound to one project root
* :func:`create_helper` - Build a helper from the layered configuration
* :class:`BufferedOutput` - In-memory sink for captured command output
"""

from __future__ import annotations

from .__init__conf__ import print_info
from .application import Application, ComposerApplication
from .config import get_composer_settings, get_config
from .exceptions import (
    ComposerHelperError,
    EmptyFileError,
    MalformedJsonError,
    ManifestFileNotFoundError,
)
from .helper import ComposerHelper, create_helper
from .limits import relaxed_limits
from .manifest import read_json_file, resolve_base_path
from .models import InstalledPackage, LatestStatus, OutdatedPackage
from .output import BufferedOutput, OutputSink

__all__ = [
    "Application",
    "BufferedOutput",
    "ComposerApplication",
    "ComposerHelper",
    "ComposerHelperError",
    "EmptyFileError",
    "InstalledPackage",
    "LatestStatus",
    "MalformedJsonError",
    "ManifestFileNotFoundError",
    "OutdatedPackage",
    "OutputSink",
    "create_helper",
    "get_composer_settings",
    "get_config",
    "print_info",
    "read_json_file",
    "relaxed_limits",
    "resolve_base_path",
]
