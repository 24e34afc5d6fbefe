"""Runtime helpers: check sequencing and argument guarding."""

from .guard import Rules, check_arguments, normalize_rules, validate_rule_keys
from .sequence import NO_REF, apply_checks, caller_scopes, check_, resolve_checks, run_checks

__all__ = [
    "NO_REF",
    "Rules",
    "apply_checks",
    "caller_scopes",
    "check_",
    "check_arguments",
    "normalize_rules",
    "resolve_checks",
    "run_checks",
    "validate_rule_keys",
]
