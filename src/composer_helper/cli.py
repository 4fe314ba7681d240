"""Command-line surface for composer-helper.

Query commands print their result as JSON on stdout so it can be piped into
other tools; ``outdated`` prints one line per package unless ``--json`` is given. Library errors become a one-line message and exit status 1.
"""

from __future__ import annotations

import json
import logging
import subprocess
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

import click

from . import __init__conf__
from .config_show import display_config
from .exceptions import ComposerHelperError
from .helper import ComposerHelper, create_helper

F = TypeVar("F", bound=Callable[..., Any])

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


def _translate_errors(func: F) -> F:
    """Turn library and composer failures into click errors."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except ComposerHelperError as exc:
            raise click.ClickException(str(exc)) from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip()
            raise click.ClickException(f"composer exited with status {exc.returncode}. {detail}".strip()) from exc

    return wrapper  # type: ignore[return-value]


def _helper(ctx: click.Context) -> ComposerHelper:
    """Build the helper lazily so ``info`` and ``config`` work anywhere."""
    return create_helper(ctx.obj["base_path"])


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__init__conf__.version, prog_name=__init__conf__.shell_command)
@click.option("--base-path", type=click.Path(file_okay=False), default=None, help="Project root holding composer.json.")
@click.option("-v", "--verbose", is_flag=True, help="Log debug messages to stderr.")
@click.pass_context
def cli(ctx: click.Context, base_path: str | None, verbose: bool) -> None:
    """Inspect a Composer project and drive the composer binary."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["base_path"] = base_path


@cli.command("info")
def cli_info() -> None:
    """Print package metadata."""
    __init__conf__.print_info()


@cli.command("config")
@click.option("--format", "output_format", type=click.Choice(["human", "json"]), default="human", show_default=True)
@click.option("--section", default=None, help="Only show this section.")
def cli_config(output_format: str, section: str | None) -> None:
    """Show the merged configuration."""
    display_config(format=output_format, section=section)


@cli.command("requirements")
@click.option("--dev", "scope", flag_value="dev", help="Only require-dev.")
@click.option("--all", "scope", flag_value="all", help="require and require-dev merged.")
@click.pass_context
@_translate_errors
def cli_requirements(ctx: click.Context, scope: str | None) -> None:
    """Print declared requirements."""
    helper = _helper(ctx)
    if scope == "dev":
        _echo_json(helper.get_dev_requirements())
    elif scope == "all":
        _echo_json(helper.get_all_requirements())
    else:
        _echo_json(helper.get_requirements())


@cli.command("php")
@click.pass_context
@_translate_errors
def cli_php(ctx: click.Context) -> None:
    """Print the declared PHP constraint."""
    _echo_json(_helper(ctx).get_php_requirement())


@cli.command("extensions")
@click.pass_context
@_translate_errors
def cli_extensions(ctx: click.Context) -> None:
    """Print PHP extensions required by installed packages."""
    _echo_json(_helper(ctx).get_extension_requirements())


@cli.command("extras")
@click.pass_context
@_translate_errors
def cli_extras(ctx: click.Context) -> None:
    """Print installed packages' extra metadata."""
    _echo_json(_helper(ctx).get_extras())


@cli.command("outdated")
@click.option("--json", "as_json", is_flag=True, help="Print the raw composer report as JSON.")
@click.pass_context
@_translate_errors
def cli_outdated(ctx: click.Context, as_json: bool) -> None:
    """Print the packages composer reports as outdated."""
    helper = _helper(ctx)
    if as_json:
        _echo_json(helper.get_outdated())
        return
    for package in helper.get_outdated_packages():
        click.echo(f"{package.name} {package.version} -> {package.latest or '?'} ({package.latest_status.value})")


@cli.command("binary")
@click.argument("name")
@click.pass_context
@_translate_errors
def cli_binary(ctx: click.Context, name: str) -> None:
    """Print where an executable lives."""
    click.echo(_helper(ctx).locate_binary(name))


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return its exit code."""
    try:
        cli.main(args=argv, prog_name=__init__conf__.shell_command, standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 1
    return 0


__all__ = [
    "cli",
    "main",
]
