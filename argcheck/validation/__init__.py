"""Validation package - checker factories and their supporting pieces.

Checkers are pure: they return their input untouched on success and raise
a descriptive :class:`~argcheck.exceptions.ValidationFailure` otherwise.
"""

from .checker import Checker, ReferenceChecker, checker, checker_against
from .naming import DEFAULT_LABEL, call_site_label
from .predicate import Predicate, compile_predicate, render_reference, validate_template

__all__ = [
    "Checker",
    "ReferenceChecker",
    "checker",
    "checker_against",
    "DEFAULT_LABEL",
    "call_site_label",
    "Predicate",
    "compile_predicate",
    "render_reference",
    "validate_template",
]
