"""Display the merged composer-helper configuration.

Purpose
-------
Back the CLI ``config`` command: render the configuration assembled by
:func:`composer_helper.config.get_config` either as TOML-like sections or as
JSON, optionally narrowed to one section.

Contents
--------
* :func:`display_config` – prints configuration in the requested format
"""

from __future__ import annotations

import json
from typing import Any

import click

from .config import get_config


def _format_value(value: Any) -> str:
    """Render one value the way it would appear in a TOML file."""
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _echo_section(section_name: str, section_data: Any) -> None:
    click.echo(f"\n[{section_name}]")
    if isinstance(section_data, dict):
        for key, value in section_data.items():
            click.echo(f"  {key} = {_format_value(value)}")
    else:
        click.echo(f"  {_format_value(section_data)}")


def _require_section(config: Any, section: str) -> Any:
    """Return a non-empty section or exit with status 1."""
    section_data = config.get(section, default={})
    if not section_data:
        click.echo(f"Section '{section}' not found or empty", err=True)
        raise SystemExit(1)
    return section_data


def display_config(*, format: str = "human", section: str | None = None) -> None:
    """Print the effective configuration from all layered sources.

    Args:
        format: ``"human"`` for TOML-like output or ``"json"``.
        section: Only print this section when given.

    Side Effects:
        Writes to stdout via click.echo(). Raises SystemExit(1) if the
        requested section does not exist.

    Example:
        >>> display_config(section="composer")  # doctest: +SKIP
        <BLANKLINE>
        [composer]
          binary = "composer"
          memory_limit = "4096M"
          base_path = ""
    """
    config = get_config()
    as_json = format.lower() == "json"

    if section:
        section_data = _require_section(config, section)
        if as_json:
            click.echo(json.dumps({section: section_data}, indent=2))
        else:
            _echo_section(section, section_data)
        return

    if as_json:
        click.echo(config.to_json(indent=2))
        return

    data: dict[str, Any] = config.as_dict()
    for section_name, section_data in data.items():
        _echo_section(section_name, section_data)


__all__ = [
    "display_config",
]
