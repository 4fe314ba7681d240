"""Scoped relaxation of composer's memory and process-time limits.

Expensive commands such as ``composer outdated`` can exceed composer's
default memory ceiling. Composer reads its limits from the environment of
the process that starts it, so relaxing them means adjusting this
process's environment around the call and putting it back afterwards.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)

MEMORY_LIMIT_ENV = "COMPOSER_MEMORY_LIMIT"
PROCESS_TIMEOUT_ENV = "COMPOSER_PROCESS_TIMEOUT"

DEFAULT_MEMORY_LIMIT = "4096M"


@contextmanager
def relaxed_limits(memory_limit: str = DEFAULT_MEMORY_LIMIT) -> Iterator[None]:
    """Raise composer's limits for the duration of the ``with`` block.

    The previous values (or their absence) are restored on every exit
    path, including when the block raises.

    Args:
        memory_limit: Value for ``COMPOSER_MEMORY_LIMIT`` (``-1`` for none).

    Example:
        >>> with relaxed_limits("2G"):
        ...     os.environ["COMPOSER_MEMORY_LIMIT"]
        '2G'
    """
    relaxed = {MEMORY_LIMIT_ENV: memory_limit, PROCESS_TIMEOUT_ENV: "0"}
    previous = {key: os.environ.get(key) for key in relaxed}

    logger.debug("Relaxing composer limits: %s", relaxed)
    os.environ.update(relaxed)
    try:
        yield
    finally:
        for key, value in previous.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value


__all__ = [
    "DEFAULT_MEMORY_LIMIT",
    "MEMORY_LIMIT_ENV",
    "PROCESS_TIMEOUT_ENV",
    "relaxed_limits",
]
