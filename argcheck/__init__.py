# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""argcheck - human-readable argument checking for teaching-oriented packages."""

from .config import Settings, get_settings, reload_settings
from .decorator import check_args
from .exceptions import (
    ArgCheckError,
    CheckerLookupError,
    ConfigurationError,
    MissingReferenceError,
    UsageError,
    ValidationFailure,
)
from .plan import CheckPlan
from .registry import CheckerRegistry, get_default_registry
from .runtime import apply_checks, check_
from .validation import Checker, ReferenceChecker, checker, checker_against

__version__ = "0.1.0"

__all__ = [
    "ArgCheckError",
    "CheckPlan",
    "Checker",
    "CheckerLookupError",
    "CheckerRegistry",
    "ConfigurationError",
    "MissingReferenceError",
    "ReferenceChecker",
    "Settings",
    "UsageError",
    "ValidationFailure",
    "apply_checks",
    "check_",
    "check_args",
    "checker",
    "checker_against",
    "get_default_registry",
    "get_settings",
    "reload_settings",
]
