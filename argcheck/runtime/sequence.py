# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Apply a series of ``check_...`` functions by their short names.

.. code-block:: python

    check_character = checker("isinstance(x, str)", "'%s' is not class 'str'.")
    check_nonempty = checker("len(x) > 0", "`%s` must be non-empty.")

    def helloworld(name):
        return "Hello, %s!" % check_(name, "character", "nonempty")

Names are resolved in the caller's scopes (locals, module globals), then in
the process-wide registry, then in builtins, unless an explicit ``registry``
is supplied. Every name is resolved before any check runs. Checks then run
left to right and stop at the first failure, which propagates unwrapped.
"""

from __future__ import annotations

import builtins
import inspect
import logging
from collections.abc import Mapping
from types import FrameType
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple, Union

from ..config import get_settings, validate_name_format
from ..exceptions import CheckerLookupError, ConfigurationError, MissingReferenceError, UsageError
from ..registry import CheckerRegistry, get_default_registry
from ..telemetry.metrics import record_lookup_failure, record_usage_error
from ..validation import Checker, ReferenceChecker

logger = logging.getLogger(__name__)

# Sentinel for entries that carry no reference value
NO_REF = object()
_UNRESOLVED = object()

CheckEntry = Union[str, Callable[..., Any], Tuple[Any, Any]]
RegistryLike = Union[CheckerRegistry, Mapping]


def _split_entry(entry: Any) -> Tuple[Any, Any]:
    if isinstance(entry, tuple):
        if len(entry) != 2:
            raise ConfigurationError(
                f"Check entry {entry!r} must be a name, a callable or a (name, ref) pair"
            )
        return entry[0], entry[1]
    return entry, NO_REF


def _as_entries(check_names: Any) -> Sequence[Any]:
    if check_names is None:
        return ()
    if isinstance(check_names, str) or callable(check_names):
        return (check_names,)
    if isinstance(check_names, Iterable):
        return list(check_names)
    raise ConfigurationError(
        f"Check names must be a string, a callable or a sequence of those, not {type(check_names).__name__}"
    )


def caller_scopes(frame: Optional[FrameType]) -> List[Mapping]:
    """Lookup chain for a call made from *frame*."""

    scopes: List[Mapping] = []
    if frame is not None:
        scopes.extend([frame.f_locals, frame.f_globals])
    scopes.extend([get_default_registry(), vars(builtins)])
    return scopes


def _lookup(name: str, scopes: Sequence[Any]) -> Any:
    for scope in scopes:
        if name in scope:
            candidate = scope[name]
            if callable(candidate):
                return candidate
    return _UNRESOLVED


def resolve_checks(
    check_names: Any,
    name_format: Optional[str] = None,
    *,
    registry: Optional[RegistryLike] = None,
    scopes: Sequence[Any] = (),
) -> List[Tuple[Callable[..., Any], Any]]:
    """Resolve every entry of *check_names* to ``(checker, ref)`` pairs.

    :raises CheckerLookupError: listing every name that could not be found.
    """

    fmt = validate_name_format(name_format) if name_format is not None else get_settings().name_format
    search = [registry] if registry is not None else list(scopes)

    resolved: List[Tuple[Callable[..., Any], Any]] = []
    missing: List[str] = []
    for entry in _as_entries(check_names):
        target, ref = _split_entry(entry)
        if callable(target):
            resolved.append((target, ref))
            continue
        if not isinstance(target, str):
            raise ConfigurationError(
                f"Check entry {target!r} must be a checker name or a callable"
            )
        full_name = fmt % (target,)
        fn = _lookup(full_name, search)
        if fn is _UNRESOLVED:
            missing.append(full_name)
        else:
            resolved.append((fn, ref))

    if missing:
        record_lookup_failure(len(missing))
        logger.error("Could not resolve checker(s): %s", ", ".join(missing))
        raise CheckerLookupError(missing, name_format=fmt)
    return resolved


def run_checks(
    x: Any,
    checks: Sequence[Tuple[Callable[..., Any], Any]],
    *,
    name: Optional[str] = None,
    frame: Optional[FrameType] = None,
    callee: Any = None,
) -> Any:
    """Thread *x* through resolved *checks*, stopping at the first failure."""

    value = x
    for fn, ref in checks:
        if isinstance(fn, Checker):
            if isinstance(fn, ReferenceChecker):
                if ref is NO_REF:
                    record_usage_error(fn.name)
                    raise MissingReferenceError(fn.name)
                refs: Tuple[Any, ...] = (ref,)
            elif ref is not NO_REF:
                raise UsageError(f"Checker '{fn.__name__}' does not take a reference argument")
            else:
                refs = ()
            value = fn._evaluate(value, refs, name=name, frame=frame, callee=callee)
        elif ref is NO_REF:
            value = fn(value)
        else:
            value = fn(value, ref)
    return value


def apply_checks(
    x: Any,
    check_names: Any,
    name_format: Optional[str] = None,
    *,
    registry: Optional[RegistryLike] = None,
    name: Optional[str] = None,
) -> Any:
    """Apply the checkers named by *check_names* to *x*, in order.

    :param x: the value to check.
    :param check_names: checker suffixes (``"character"`` for
                        ``check_character``), callables, or ``(suffix, ref)``
                        pairs for referenced checkers.
    :param name_format: expands a suffix into a full checker name; defaults
                        to ``check_%s`` (see ``ARGCHECK_NAME_FORMAT``).
    :param registry: if given, the only place names are looked up.
    :param name: the label used in failure messages; inferred from the call
                 site when omitted.
    :return: *x*, if every check passes.
    """

    frame = inspect.currentframe()
    caller = frame.f_back if frame else None
    try:
        checks = resolve_checks(
            check_names, name_format, registry=registry, scopes=caller_scopes(caller)
        )
        return run_checks(x, checks, name=name, frame=caller, callee=apply_checks)
    finally:
        del frame, caller


def check_(
    x: Any,
    *check_names: CheckEntry,
    fmt: Optional[str] = None,
    registry: Optional[RegistryLike] = None,
    name: Optional[str] = None,
) -> Any:
    """Variadic spelling of :func:`apply_checks`: ``check_(x, "character", "nonempty")``."""

    frame = inspect.currentframe()
    caller = frame.f_back if frame else None
    try:
        checks = resolve_checks(
            list(check_names), fmt, registry=registry, scopes=caller_scopes(caller)
        )
        return run_checks(x, checks, name=name, frame=caller, callee=check_)
    finally:
        del frame, caller


__all__ = [
    "NO_REF",
    "apply_checks",
    "caller_scopes",
    "check_",
    "resolve_checks",
    "run_checks",
]
