"""Configuration management using lib_layered_config.

Purpose
-------
Provides a centralized configuration loader that merges defaults, application
configs, host configs, user configs, .env files, and environment variables
following a deterministic precedence order.

Contents
--------
* :func:`get_config` – loads configuration with lib_layered_config
* :func:`get_default_config_path` – returns path to bundled default config
* :func:`get_composer_settings` – returns settings for driving composer

Configuration identifiers (vendor, app, slug) are imported from
:mod:`composer_helper.__init__conf__` as LAYEREDCONF_* constants.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from lib_layered_config import Config, read_config

from . import __init__conf__
from .limits import DEFAULT_MEMORY_LIMIT

# Environment variable prefix for native (short) env vars
_ENV_PREFIX = "COMPOSER_HELPER_"


def get_default_config_path() -> Path:
    """Return the path to the bundled default configuration file.

    Example:
        >>> path = get_default_config_path()
        >>> path.name
        'defaultconfig.toml'
        >>> path.exists()
        True
    """
    return Path(__file__).parent / "defaultconfig.toml"


@lru_cache(maxsize=1)
def get_config(*, start_dir: str | None = None) -> Config:
    """Load layered configuration with application defaults.

    Loads configuration from multiple sources in precedence order:
    defaults → app → host → user → dotenv → env

    Args:
        start_dir: Optional directory that seeds .env discovery. Defaults to
            current working directory when None.

    Returns:
        Immutable configuration object with provenance tracking.

    Note:
        This function is cached (maxsize=1); call ``get_config.cache_clear()``
        to force a reload.
    """
    return read_config(
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        default_file=get_default_config_path(),
        start_dir=start_dir,
    )


@dataclass(frozen=True, slots=True)
class ComposerSettings:
    """Immutable settings for driving composer.

    Attributes:
        binary: Name or path of the composer executable.
        memory_limit: COMPOSER_MEMORY_LIMIT used for expensive commands.
        base_path: Project root holding composer.json (empty = derive it).
    """

    binary: str
    memory_limit: str
    base_path: str


def get_composer_settings() -> ComposerSettings:
    """Get composer settings from configuration with environment variable overrides.

    Settings are resolved in the following precedence order (highest wins):
    1. Native environment variables (COMPOSER_HELPER_BINARY, etc.)
    2. lib_layered_config environment variables (COMPOSER_HELPER___COMPOSER__*, etc.)
    3. User config file (~/.config/composer-helper/config.toml)
    4. Host config file
    5. Application config file
    6. Default config (bundled defaultconfig.toml)

    Example:
        >>> settings = get_composer_settings()  # doctest: +SKIP
        >>> settings.binary  # doctest: +SKIP
        'composer'
    """
    config = get_config()
    composer_section = config.get("composer", default={})

    binary = composer_section.get("binary", "composer")
    memory_limit = composer_section.get("memory_limit", DEFAULT_MEMORY_LIMIT)
    base_path = composer_section.get("base_path", "")

    # Native environment variables have highest precedence
    if env_binary := os.environ.get(f"{_ENV_PREFIX}BINARY"):
        binary = env_binary

    if env_memory := os.environ.get(f"{_ENV_PREFIX}MEMORY_LIMIT"):
        memory_limit = env_memory

    if env_base := os.environ.get(f"{_ENV_PREFIX}BASE_PATH"):
        base_path = env_base

    return ComposerSettings(
        binary=str(binary) or "composer",
        memory_limit=str(memory_limit),
        base_path=str(base_path),
    )


__all__ = [
    "ComposerSettings",
    "get_composer_settings",
    "get_config",
    "get_default_config_path",
]
