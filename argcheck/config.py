# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Environment-driven settings."""

from __future__ import annotations

import functools
import logging
import os
from dataclasses import dataclass

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_NAME_FORMAT = "check_%s"

_FALSY = ("", "0", "false", "no", "off")


def _env_flag(name: str, default: str = "1") -> bool:
    return os.getenv(name, default).strip().lower() not in _FALSY


def validate_name_format(name_format: str) -> str:
    """Ensure *name_format* expands a single suffix via ``%``."""

    try:
        expanded = name_format % ("suffix",)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(
            f"Checker name format {name_format!r} must contain exactly one '%s' placeholder"
        ) from exc
    if not expanded.isidentifier():
        raise ConfigurationError(
            f"Checker name format {name_format!r} does not expand to an identifier"
        )
    return name_format


@dataclass(frozen=True)
class Settings:
    name_format: str = DEFAULT_NAME_FORMAT
    infer_names: bool = True
    telemetry: bool = True


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, read once from the environment."""

    settings = Settings(
        name_format=validate_name_format(
            os.getenv("ARGCHECK_NAME_FORMAT", DEFAULT_NAME_FORMAT)
        ),
        infer_names=_env_flag("ARGCHECK_INFER_NAMES"),
        telemetry=_env_flag("ARGCHECK_TELEMETRY"),
    )
    logger.debug("Loaded argcheck settings: %s", settings)
    return settings


def reload_settings() -> Settings:
    """Drop the cached settings and read the environment again."""

    get_settings.cache_clear()
    return get_settings()


__all__ = [
    "DEFAULT_NAME_FORMAT",
    "Settings",
    "get_settings",
    "reload_settings",
    "validate_name_format",
]
