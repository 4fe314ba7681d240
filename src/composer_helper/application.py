"""Drive the composer binary and route its output into a sink.

Purpose
-------
Give the command facade a single seam for "run the package manager with
these arguments and write what it prints to this sink". The production
implementation runs the ``composer`` executable as a blocking subprocess;
tests substitute any object satisfying :class:`Application`.

Contents
--------
* :class:`Application` - Protocol for the wrapped package-manager application
* :func:`build_argv` - Turn an argument mapping into a command line
* :func:`wants_quiet` - Whether an argument mapping asks for quiet output
* :class:`ComposerApplication` - Subprocess-backed implementation

Output Routing
--------------
Composer prints progress and warnings on stderr and the command's data on
stdout. Each non-blank stderr line becomes one chunk, then the whole of
stdout becomes the final chunk, so the last captured chunk is always the
command's data.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from .output import OutputSink

logger = logging.getLogger(__name__)

_QUIET_FLAGS = ("-q", "--quiet")


class Application(Protocol):
    """The wrapped package-manager application."""

    def run(self, arguments: Mapping[str, Any], output: OutputSink) -> None:  # pragma: no cover
        """Run the command described by ``arguments``, writing to ``output``.

        Implementations run to completion before returning and raise on
        failure.
        """
        ...


def _is_flag(key: str) -> bool:
    return key.startswith("-")


def wants_quiet(arguments: Mapping[str, Any]) -> bool:
    """Return True when ``arguments`` enable ``-q`` or ``--quiet``."""
    return any(bool(arguments.get(flag)) for flag in _QUIET_FLAGS)


def _append_option(argv: list[str], key: str, value: Any) -> None:
    """Append one mapping entry to ``argv``."""
    if value is None or value is False:
        return
    if value is True:
        argv.append(key)
        return

    values = value if isinstance(value, (list, tuple)) else [value]
    for item in values:
        if _is_flag(key):
            argv.extend([key, str(item)])
        else:
            argv.append(str(item))


def build_argv(binary: str, arguments: Mapping[str, Any], *, skip: tuple[str, ...] = ()) -> list[str]:
    """Build a command line from an argument mapping.

    Args:
        binary: Executable to run.
        arguments: ``command`` plus options. Flag keys (starting with ``-``)
            map ``True`` to a bare flag, ``False``/``None`` to nothing and
            any other value to ``key value``; lists repeat the option.
            Other keys contribute their values as positional arguments.
        skip: Keys to leave out of the command line.

    Returns:
        The argv list, command first.

    Example:
        >>> build_argv("composer", {"command": "outdated", "--format": "json", "-n": True})
        ['composer', 'outdated', '--format', 'json', '-n']
        >>> build_argv("composer", {"command": "show", "package": ["a/b"], "--all": False})
        ['composer', 'show', 'a/b']
    """
    argv = [binary]
    command = arguments.get("command")
    if command:
        argv.append(str(command))

    for key, value in arguments.items():
        if key == "command" or key in skip:
            continue
        _append_option(argv, key, value)
    return argv


@dataclass
class ComposerApplication:
    """Run the composer executable as a blocking subprocess.

    Attributes:
        binary: Name or path of the composer executable.
        working_dir: Directory the command runs in; the current directory
            when None.
    """

    binary: str = "composer"
    working_dir: Path | None = None

    def run(self, arguments: Mapping[str, Any], output: OutputSink) -> None:
        """Run composer and write its diagnostics and data to ``output``.

        A quiet request drops the stderr chunks instead of passing ``-q``
        through, since composer's own quiet mode also silences the data.

        Raises:
            FileNotFoundError: If the binary cannot be executed.
            subprocess.CalledProcessError: If composer exits non-zero. The
                output is written to ``output`` before this is raised.
        """
        quiet = wants_quiet(arguments)
        argv = build_argv(self.binary, arguments, skip=_QUIET_FLAGS)
        logger.info("Running %s", " ".join(argv))

        completed = subprocess.run(
            argv,
            cwd=self.working_dir,
            capture_output=True,
            text=True,
            check=False,
        )

        if not quiet:
            for line in completed.stderr.splitlines():
                if line.strip():
                    output.write(line)

        payload = completed.stdout.rstrip()
        if payload:
            output.write(payload)

        logger.debug("composer exited with %d", completed.returncode)
        completed.check_returncode()


__all__ = [
    "Application",
    "ComposerApplication",
    "build_argv",
    "wants_quiet",
]
