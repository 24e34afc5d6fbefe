# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Helper functions used by the argument guard and check plans."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from ..exceptions import ConfigurationError
from .sequence import RegistryLike, resolve_checks, run_checks

logger = logging.getLogger(__name__)

Rules = Dict[str, Tuple[Any, ...]]


def normalize_rules(rules: Mapping[str, Any]) -> Rules:
    """Turn ``{param: entry | [entries]}`` into ``{param: (entries...)}``.

    A list or tuple value is a sequence of entries. A ``(name, ref)`` pair
    therefore has to sit inside a list: ``{"name": [("among", names)]}``.
    """

    normalized: Rules = {}
    for param, value in rules.items():
        if not isinstance(param, str) or not param.isidentifier():
            raise ConfigurationError(f"Rule key {param!r} is not a valid parameter name")
        if isinstance(value, (list, tuple)):
            entries = tuple(value)
        elif isinstance(value, str) or callable(value):
            entries = (value,)
        else:
            raise ConfigurationError(
                f"Rule for '{param}' must be a check name, a callable or a list of those"
            )
        normalized[param] = entries
    return normalized


def validate_rule_keys(
    rules: Mapping[str, Any],
    allowed_params: Sequence[str],
    *,
    has_var_kwargs: bool = False,
    where: str = "function",
) -> None:
    """Reject rules that reference parameters *where* does not have."""

    if has_var_kwargs:
        return
    invalid = set(rules) - set(allowed_params)
    if invalid:
        logger.error(
            "Argument checks for %s reference unknown parameters: %s",
            where,
            ", ".join(sorted(invalid)),
        )
        raise ConfigurationError(
            f"Argument checks for {where} reference undefined parameter(s): {sorted(invalid)}"
        )


def check_arguments(
    arguments: Mapping[str, Any],
    rules: Rules,
    *,
    name_format: Optional[str] = None,
    registry: Optional[RegistryLike] = None,
    scopes: Sequence[Any] = (),
) -> None:
    """Run each ruled argument through its checks, labelled by parameter name.

    Rules for arguments absent from *arguments* are skipped. All names are
    resolved before any argument is checked.
    """

    plan = [
        (param, resolve_checks(entries, name_format, registry=registry, scopes=scopes))
        for param, entries in rules.items()
        if param in arguments
    ]
    for param, checks in plan:
        run_checks(arguments[param], checks, name=param)


__all__ = [
    "Rules",
    "check_arguments",
    "normalize_rules",
    "validate_rule_keys",
]
