"""Static package metadata surfaced to CLI commands and documentation.

Purpose
-------
Keep the distribution identity and the lib_layered_config identifiers in
one place so the CLI ``info`` command and :mod:`composer_helper.config`
agree on them.
"""

from __future__ import annotations

name = "composer_helper"
title = "Read Composer manifests and drive the composer binary from Python"
version = "1.0.0"
shell_command = "composer-helper"

# Identifiers used by lib_layered_config to derive platform config paths
LAYEREDCONF_VENDOR = "composer-helper"
LAYEREDCONF_APP = "Composer Helper"
LAYEREDCONF_SLUG = "composer-helper"


def print_info() -> None:
    """Print the package metadata as aligned ``key = value`` lines.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for composer_helper:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("shell_command", shell_command),
        ("config_slug", LAYEREDCONF_SLUG),
    ]
    pad = max(len(label) for label, _ in fields)
    print(f"Info for {name}:\n")
    for label, value in fields:
        print(f"    {label.ljust(pad)} = {value}")
