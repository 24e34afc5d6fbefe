# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Predicate and message-template handling for checkers."""

from __future__ import annotations

import ast
import builtins
import inspect
import itertools
import symtable
import textwrap
from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass
from typing import Any, Callable, Tuple, Union

from ..exceptions import ConfigurationError

_BUILTIN_NAMES = frozenset(dir(builtins))
_MAX_RENDERED_ITEMS = 20

PredicateLike = Union[str, Callable[..., Any]]


@dataclass(frozen=True)
class Predicate:
    """A compiled predicate plus the human-readable text it came from."""

    func: Callable[..., Any]
    source: str
    params: Tuple[str, ...]

    def __call__(self, *args: Any) -> bool:
        return bool(self.func(*args))


def compile_predicate(predicate: PredicateLike, params: Tuple[str, ...]) -> Predicate:
    """Turn an expression string or a callable into a :class:`Predicate`.

    Expression strings may only refer to *params*, to names they bind
    themselves (comprehension targets, lambda arguments) and to builtins.
    """

    if isinstance(predicate, str):
        return _compile_expression(predicate, params)
    if callable(predicate):
        _check_arity(predicate, params)
        return Predicate(predicate, _describe_callable(predicate), params)
    raise ConfigurationError(
        f"Predicate must be an expression string or a callable, not {type(predicate).__name__}"
    )


def _compile_expression(source: str, params: Tuple[str, ...]) -> Predicate:
    text = source.strip()
    try:
        tree = ast.parse(text, mode="eval")
    except SyntaxError as exc:
        raise ConfigurationError(
            f"Predicate {text!r} is not a valid Python expression: {exc.msg}"
        ) from exc

    free = _free_names(text, params) - _BUILTIN_NAMES
    if free:
        raise ConfigurationError(
            f"Predicate {text!r} may only refer to {', '.join(params)}; "
            f"found free name(s): {', '.join(sorted(free))}"
        )

    code = compile(tree, f"<predicate: {text}>", "eval")

    def evaluate(*args: Any) -> Any:
        # Values live in the globals mapping so nested scopes can see them.
        namespace: dict[str, Any] = {"__builtins__": builtins}
        namespace.update(zip(params, args))
        return eval(code, namespace)  # noqa: S307

    return Predicate(evaluate, text, params)


def _free_names(text: str, params: Tuple[str, ...]) -> set[str]:
    """Names *text* reads from outside, scope by scope.

    The expression is analysed as the body of ``lambda <params>: ...`` so a
    comprehension target only counts as bound inside its own comprehension.
    """

    wrapper = f"lambda {', '.join(params)}: (\n{text}\n)"
    module = symtable.symtable(wrapper, "<predicate>", "exec")

    free: set[str] = set()
    pending = list(module.get_children())
    while pending:
        table = pending.pop()
        free.update(
            symbol.get_name()
            for symbol in table.get_symbols()
            if symbol.is_referenced() and symbol.is_global()
        )
        pending.extend(table.get_children())
    return free


def _check_arity(func: Callable[..., Any], params: Tuple[str, ...]) -> None:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        # Some builtins expose no signature; trust them.
        return
    try:
        signature.bind(*params)
    except TypeError as exc:
        raise ConfigurationError(
            f"Predicate {_describe_callable(func)} must accept {len(params)} "
            f"positional argument(s) ({', '.join(params)})"
        ) from exc


def _describe_callable(func: Callable[..., Any]) -> str:
    name = getattr(func, "__qualname__", None) or getattr(func, "__name__", None)
    if name == "<lambda>":
        return _lambda_source(func) or name
    return name or repr(func)


def _lambda_source(func: Callable[..., Any]) -> str | None:
    """Best-effort recovery of ``lambda x: ...`` text from the defining line."""

    try:
        raw = inspect.getsource(func)
    except (OSError, TypeError):
        return None
    try:
        tree = ast.parse(textwrap.dedent(raw).strip())
    except SyntaxError:
        return None
    lambdas = [node for node in ast.walk(tree) if isinstance(node, ast.Lambda)]
    if len(lambdas) != 1:
        return None
    return ast.unparse(lambdas[0])


def validate_template(message: Any, slots: int) -> str:
    """Ensure *message* is a ``%``-template with exactly *slots* ``%s`` fields."""

    if not isinstance(message, str):
        raise ConfigurationError(
            f"Message template must be a string, not {type(message).__name__}"
        )
    try:
        message % (("",) * slots)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(
            f"Message template {message!r} must contain exactly {slots} '%s' placeholder(s)"
        ) from exc
    return message


def render_reference(ref: Any) -> str:
    """Render a reference value for the second slot of a failure message.

    Sequences and sets become a parenthesised, comma-joined list of item
    reprs, e.g. ``('Alice', 'Bob', 'Carl')``. Sets are sorted when their
    items allow it. Everything else uses ``repr``.
    """

    if isinstance(ref, (str, bytes, bytearray, Mapping)):
        return repr(ref)
    if isinstance(ref, Set):
        try:
            items = sorted(ref)
        except TypeError:
            items = list(ref)
    elif isinstance(ref, Sequence):
        items = list(itertools.islice(ref, _MAX_RENDERED_ITEMS + 1))
    else:
        return repr(ref)

    rendered = [repr(item) for item in items[:_MAX_RENDERED_ITEMS]]
    if len(items) > _MAX_RENDERED_ITEMS:
        rendered.append("...")
    return "(" + ", ".join(rendered) + ")"


__all__ = [
    "Predicate",
    "PredicateLike",
    "compile_predicate",
    "render_reference",
    "validate_template",
]
