# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Declarative argument checks loaded from YAML.

A plan file lists, per function id, the checks each parameter must pass::

    name_format: "check_%s"
    functions:
      greet:
        name: [character, scalar, nonempty]
        title: character

Referenced checks are written as a one-entry mapping whose value is the
reference, e.g. ``- among: [Alice, Bob, Carl]``.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from .config import validate_name_format
from .decorator import check_args
from .exceptions import ConfigurationError
from .runtime.guard import Rules, check_arguments, normalize_rules
from .runtime.sequence import RegistryLike, caller_scopes

logger = logging.getLogger(__name__)


def _parse_entry(function_id: str, param: str, entry: Any) -> Any:
    if isinstance(entry, str):
        return entry
    if isinstance(entry, Mapping) and len(entry) == 1:
        ((suffix, ref),) = entry.items()
        if isinstance(suffix, str):
            return (suffix, ref)
    raise ConfigurationError(
        f"Check for '{function_id}.{param}' must be a checker name or a "
        f"single-key mapping of name to reference, not {entry!r}"
    )


def _parse_function(function_id: str, params: Any) -> Rules:
    if params is None:
        return {}
    if not isinstance(params, Mapping):
        raise ConfigurationError(f"Checks for '{function_id}' must be a mapping of parameter names")

    rules: Dict[str, Any] = {}
    for param, entries in params.items():
        if not isinstance(entries, list):
            entries = [entries]
        rules[str(param)] = [_parse_entry(function_id, str(param), entry) for entry in entries]
    return normalize_rules(rules)


@dataclass
class CheckPlan:
    """Per-function argument rules."""

    functions: Dict[str, Rules] = field(default_factory=dict)
    name_format: Optional[str] = None
    source: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Any, *, source: Optional[str] = None) -> "CheckPlan":
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ConfigurationError("Check plan must be a mapping at the top level")

        unknown = set(data) - {"functions", "name_format"}
        if unknown:
            raise ConfigurationError(f"Unknown check plan key(s): {sorted(unknown)}")

        name_format = data.get("name_format")
        if name_format is not None:
            if not isinstance(name_format, str):
                raise ConfigurationError("Check plan 'name_format' must be a string")
            validate_name_format(name_format)

        functions = data.get("functions") or {}
        if not isinstance(functions, Mapping):
            raise ConfigurationError("Check plan 'functions' must be a mapping of function ids")

        parsed = {
            str(function_id): _parse_function(str(function_id), params)
            for function_id, params in functions.items()
        }
        logger.debug(
            "Loaded check plan with %d function(s) from %s", len(parsed), source or "mapping"
        )
        return cls(functions=parsed, name_format=name_format, source=source)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "CheckPlan":
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(f"Cannot read check plan {path}: {exc}") from exc
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Check plan {path} is not valid YAML: {exc}") from exc
        return cls.from_mapping(data, source=str(path))

    def rules_for(self, function_id: str) -> Rules:
        """Rules for *function_id*; unknown ids have none."""

        return dict(self.functions.get(function_id, {}))

    def validate(
        self,
        function_id: str,
        arguments: Mapping[str, Any],
        *,
        registry: Optional[RegistryLike] = None,
    ) -> Mapping[str, Any]:
        """Check *arguments* against the rules of *function_id* and return them.

        Without *registry*, checker names are looked up like :func:`~argcheck.runtime.sequence.apply_checks`
        does: in the caller's locals and module globals, then the default
        registry, then builtins.
        """

        frame = inspect.currentframe()
        caller = frame.f_back if frame else None
        try:
            check_arguments(
                arguments,
                self.rules_for(function_id),
                name_format=self.name_format,
                registry=registry,
                scopes=caller_scopes(caller),
            )
        finally:
            del frame, caller
        return arguments

    def guard(self, function_id: str, **options: Any):
        """Return a :func:`~argcheck.decorator.check_args` decorator for *function_id*.

        *options* are ``check_args`` options (``registry``, ``on_fail``,
        ``name_format``). The rules go in positionally, so parameters that
        share an option's name are still checked.
        """

        options.setdefault("name_format", self.name_format)
        return check_args(self.rules_for(function_id), **options)


__all__ = ["CheckPlan"]
