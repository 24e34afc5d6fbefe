# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Named checker registry."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Final, Iterator, List, Optional

from .config import get_settings, validate_name_format
from .exceptions import CheckerLookupError, ConfigurationError
from .telemetry.metrics import record_lookup_failure
from .validation import Checker, ReferenceChecker
from .validation.predicate import PredicateLike

logger = logging.getLogger(__name__)


class CheckerRegistry:
    """A mapping from full checker names (``check_character``) to callables.

    Registries are filled while checkers are defined and only read afterwards.
    Call :meth:`freeze` once definitions are complete to make that explicit.
    """

    def __init__(self, name_format: Optional[str] = None) -> None:
        self._name_format = validate_name_format(name_format) if name_format is not None else None
        self._checkers: Dict[str, Callable[..., Any]] = {}
        self._frozen = False

    @property
    def name_format(self) -> str:
        return self._name_format or get_settings().name_format

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "CheckerRegistry":
        self._frozen = True
        logger.debug("Checker registry frozen with %d checker(s)", len(self._checkers))
        return self

    def register(self, name: str, fn: Callable[..., Any], *, replace: bool = False) -> Callable[..., Any]:
        """Register *fn* under the full checker *name* and return it."""

        if self._frozen:
            raise ConfigurationError(f"Cannot register '{name}': checker registry is frozen")
        if not isinstance(name, str) or not name.isidentifier():
            raise ConfigurationError(f"Checker name {name!r} is not a valid identifier")
        if not callable(fn):
            raise ConfigurationError(f"Checker '{name}' must be callable")
        if name in self._checkers:
            if not replace:
                raise ConfigurationError(f"Checker '{name}' is already registered")
            logger.warning("Replacing registered checker '%s'", name)

        if isinstance(fn, Checker) and fn.name is None:
            fn.name = name
        self._checkers[name] = fn
        logger.debug("Registered checker '%s'", name)
        return fn

    def define(self, suffix: str, predicate: PredicateLike, message: str) -> Checker:
        """Create a :class:`Checker` named after *suffix* and register it."""

        name = self.name_format % (suffix,)
        return self.register(name, Checker(predicate, message, name=name))

    def define_against(self, suffix: str, predicate: PredicateLike, message: str) -> ReferenceChecker:
        """Create a :class:`ReferenceChecker` named after *suffix* and register it."""

        name = self.name_format % (suffix,)
        return self.register(name, ReferenceChecker(predicate, message, name=name))

    def get(self, name: str, default: Any = None) -> Any:
        return self._checkers.get(name, default)

    def resolve(self, suffix: str, name_format: Optional[str] = None) -> Callable[..., Any]:
        """Return the checker for *suffix* expanded through *name_format*."""

        fmt = validate_name_format(name_format) if name_format is not None else self.name_format
        name = fmt % (suffix,)
        try:
            return self._checkers[name]
        except KeyError:
            record_lookup_failure(1)
            logger.error("No checker registered as '%s'", name)
            raise CheckerLookupError([name], name_format=fmt) from None

    def names(self) -> List[str]:
        return sorted(self._checkers)

    def __getitem__(self, name: str) -> Callable[..., Any]:
        return self._checkers[name]

    def __contains__(self, name: object) -> bool:
        return name in self._checkers

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._checkers)

    def __repr__(self) -> str:
        state = ", frozen" if self._frozen else ""
        return f"CheckerRegistry({self.names()!r}{state})"


_DEFAULT_REGISTRY: Final[CheckerRegistry] = CheckerRegistry()


def get_default_registry() -> CheckerRegistry:
    """Return the process-wide checker registry."""

    return _DEFAULT_REGISTRY


__all__ = ["CheckerRegistry", "get_default_registry"]
