# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Checker factories.

A checker is built from two pieces of developer input, a predicate and an
error-message template, and yields a callable that is transparent on success:

.. code-block:: python

    from argcheck import checker, checker_against

    check_character = checker("isinstance(x, str)", "'%s' must be a character.")
    check_nonempty = checker("len(x) > 0", "`%s` must be non-empty.")
    check_among = checker_against("x in ref", "'%s' is not among %s")

    def helloworld(name):
        check_among(check_character(name), ["Alice", "Bob", "Carl"])
        return f"Hello, {name}!"

    helloworld("Carl")     # 'Hello, Carl!'
    helloworld(1)          # ValidationFailure: 'name' must be a character.
    helloworld("Robert")   # ValidationFailure: 'name' is not among ('Alice', 'Bob', 'Carl')

Checkers print their predicate and template when inspected, so a function's
argument validation documents itself.
"""

from __future__ import annotations

import inspect
import logging
from types import FrameType
from typing import Any, Optional, Tuple

from ..config import get_settings
from ..exceptions import MissingReferenceError, ValidationFailure
from ..telemetry.metrics import record_check, record_usage_error
from .naming import DEFAULT_LABEL, call_site_label
from .predicate import PredicateLike, compile_predicate, render_reference, validate_template

logger = logging.getLogger(__name__)

# Sentinel object to detect an omitted reference argument
_MISSING = object()


class Checker:
    """A named, reusable ``check(x) -> x`` validation callable."""

    params: Tuple[str, ...] = ("x",)

    def __init__(self, predicate: PredicateLike, message: str, *, name: Optional[str] = None):
        self.predicate = compile_predicate(predicate, self.params)
        self.message = validate_template(message, len(self.params))
        self.name = name

    @property
    def name(self) -> Optional[str]:
        return self._name

    @name.setter
    def name(self, value: Optional[str]) -> None:
        self._name = value
        self.__name__ = self.__qualname__ = value or type(self).__name__.lower()
        self.__doc__ = f"Check that `{self.expression}` holds; otherwise fail with {self.message!r}."

    @property
    def expression(self) -> str:
        """Source text of the predicate."""
        return self.predicate.source

    def __call__(self, x: Any, *, name: Optional[str] = None) -> Any:
        frame = inspect.currentframe()
        try:
            return self._evaluate(x, (), name=name, frame=frame.f_back if frame else None, callee=self)
        finally:
            del frame

    def __repr__(self) -> str:
        label = f" {self._name}" if self._name else ""
        return f"<{type(self).__name__}{label}: {self.expression} | {self.message!r}>"

    def _evaluate(
        self,
        x: Any,
        refs: Tuple[Any, ...],
        *,
        name: Optional[str],
        frame: Optional[FrameType],
        callee: Any,
    ) -> Any:
        """Run the predicate; return *x* or raise :class:`ValidationFailure`.

        *frame* and *callee* describe the call site used to infer a label when
        *name* is not given. They are only consulted on failure.
        """

        if self.predicate(x, *refs):
            record_check(self._name, True)
            return x

        record_check(self._name, False)
        label = name if name is not None else self._infer_label(frame, callee)
        message = self._format(label, refs)
        logger.debug("Check %s failed for argument '%s'", self.__name__, label)
        failure_kwargs = {"reference": refs[0]} if refs else {}
        raise ValidationFailure(
            message,
            argument=label,
            value=x,
            checker=self._name,
            **failure_kwargs,
        )

    def _format(self, label: str, refs: Tuple[Any, ...]) -> str:
        return self.message % (label,)

    @staticmethod
    def _infer_label(frame: Optional[FrameType], callee: Any) -> str:
        if not get_settings().infer_names:
            return DEFAULT_LABEL
        return call_site_label(frame, callee)


class ReferenceChecker(Checker):
    """A ``check(x, ref) -> x`` callable whose predicate also sees ``ref``."""

    params = ("x", "ref")

    def __call__(self, x: Any, ref: Any = _MISSING, *, name: Optional[str] = None) -> Any:
        if ref is _MISSING:
            record_usage_error(self._name)
            raise MissingReferenceError(self._name)
        frame = inspect.currentframe()
        try:
            return self._evaluate(x, (ref,), name=name, frame=frame.f_back if frame else None, callee=self)
        finally:
            del frame

    def _format(self, label: str, refs: Tuple[Any, ...]) -> str:
        return self.message % (label, render_reference(refs[0]))


def checker(predicate: PredicateLike, message: str, *, name: Optional[str] = None) -> Checker:
    """Build a ``check(x) -> x`` function.

    :param predicate: a test written only in terms of ``x``, either as an
                      expression string (``"isinstance(x, int)"``) or a
                      one-argument callable. Sub-fields such as ``x.field``
                      or ``x["key"]`` are fine.
    :param message: a ``%``-template with a single ``%s``, filled with the
                    name of the argument handed to the checker.
    :param name: optional checker name used in ``repr``, logs and metrics.
    :raises ConfigurationError: if the predicate refers to anything other
                                than ``x`` and builtins, or the template does
                                not have exactly one ``%s``.

    Expression strings are compiled and evaluated with :func:`eval`. Treat
    them as trusted developer input, like the rest of your source code, and
    never build them from user data. A callable predicate is the preferred
    form whenever the check is not a short, self-describing expression.
    """

    return Checker(predicate, message, name=name)


def checker_against(predicate: PredicateLike, message: str, *, name: Optional[str] = None) -> ReferenceChecker:
    """Build a ``check(x, ref) -> x`` function.

    Like :func:`checker`, but the predicate is written in terms of ``x`` and
    ``ref`` and the template takes two ``%s``: the argument's name, then the
    rendered reference. Calling the result without ``ref`` raises
    :class:`~argcheck.exceptions.MissingReferenceError` before the predicate
    is evaluated.
    """

    return ReferenceChecker(predicate, message, name=name)


__all__ = ["Checker", "ReferenceChecker", "checker", "checker_against"]
