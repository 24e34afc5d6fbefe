# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Exception hierarchy for argcheck.

Three kinds of failure are kept apart:

* :class:`ValidationFailure` - the *input data* is wrong (a predicate was false).
* :class:`UsageError` - a checker was *called* incorrectly (e.g. no ``ref``).
* :class:`CheckerLookupError` / :class:`ConfigurationError` - the validation
  *definition* itself is broken.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

_UNSET = object()


class ArgCheckError(Exception):
    """Base class for every error raised by argcheck."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationFailure(ArgCheckError, ValueError):
    """A checker's predicate did not hold for the supplied value."""

    def __init__(
        self,
        message: str,
        *,
        argument: str,
        value: Any,
        checker: Optional[str] = None,
        reference: Any = _UNSET,
    ):
        super().__init__(message)
        self.argument = argument
        self.value = value
        self.checker = checker
        self._reference = reference

    @property
    def has_reference(self) -> bool:
        return self._reference is not _UNSET

    @property
    def reference(self) -> Any:
        """The reference value for referenced checkers, ``None`` otherwise."""
        return None if self._reference is _UNSET else self._reference


class UsageError(ArgCheckError, TypeError):
    """A checker was invoked in a way its definition does not allow."""


class MissingReferenceError(UsageError):
    """A referenced checker was called without its ``ref`` argument."""

    def __init__(self, checker: Optional[str] = None):
        where = f" to '{checker}'" if checker else ""
        super().__init__(
            f"Did not provide a `ref` argument{where}: missing reference argument."
        )
        self.checker = checker


class CheckerLookupError(ArgCheckError, LookupError):
    """One or more named checkers could not be resolved."""

    def __init__(self, names: Sequence[str], *, name_format: Optional[str] = None):
        self.names = tuple(names)
        self.name_format = name_format
        listed = ", ".join(f"'{n}'" for n in self.names)
        super().__init__(f"Could not find checker(s): {listed}")


class ConfigurationError(ArgCheckError):
    """A checker, registry, plan or guard was defined incorrectly."""


__all__ = [
    "ArgCheckError",
    "ValidationFailure",
    "UsageError",
    "MissingReferenceError",
    "CheckerLookupError",
    "ConfigurationError",
]
