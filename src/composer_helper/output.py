"""In-memory sink for the text a wrapped console application writes.

Contents
--------
* :class:`OutputSink` - Protocol for anything that accepts written messages
* :class:`BufferedOutput` - Ordered in-memory accumulator drained on demand
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


class OutputSink(Protocol):
    """Receiver of the messages an application writes."""

    def write(self, message: str) -> None:  # pragma: no cover
        """Accept one message."""
        ...


def _empty_store() -> list[str]:
    """Return an empty message list for dataclass defaults."""
    return []


@dataclass(slots=True)
class BufferedOutput:
    """Capture written messages in order until they are drained.

    One instance belongs to exactly one command invocation.

    Example:
        >>> output = BufferedOutput()
        >>> output.write("Loading composer repositories")
        >>> output.write('{"installed": []}')
        >>> output.drain()
        ['Loading composer repositories', '{"installed": []}']
        >>> output.drain()
        []
    """

    _store: list[str] = field(default_factory=_empty_store)

    def write(self, message: str) -> None:
        """Append ``message`` to the buffer as is."""
        self._store.append(message)

    def drain(self) -> list[str]:
        """Return every captured message and leave the buffer empty."""
        store, self._store = self._store, []
        return store

    def __len__(self) -> int:
        return len(self._store)


__all__ = [
    "BufferedOutput",
    "OutputSink",
]
