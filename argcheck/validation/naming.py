# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Best-effort recovery of the source-level name of a checked argument.

When a checker fails without an explicit ``name=``, the failure message should
still say *which* variable was wrong. We look at the caller's frame, parse its
current source statement, locate the call to the checker object and render the
call's first argument:

* a bare identifier renders as itself (``check(count)`` -> ``count``);
* a nested call renders as its innermost first argument
  (``check(len(items))`` -> ``items``);
* anything else goes through :func:`ast.unparse` (``check(1)`` -> ``1``).

This is a heuristic, not a general expression resolver. It needs the caller's
source to be available (no REPL one-liners, no ``exec`` strings) and gives up
quietly on statements it cannot parse. Passing ``name=`` explicitly is always
preferred.
"""

from __future__ import annotations

import ast
import builtins
import inspect
import linecache
import logging
import textwrap
from types import FrameType
from typing import Any, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_LABEL = "x"

_MAX_STATEMENT_LINES = 10
_UNRESOLVED = object()


def call_site_label(frame: Optional[FrameType], callee: Any, *, default: str = DEFAULT_LABEL) -> str:
    """Return the label of the first argument *frame* passed to *callee*."""

    if frame is None:
        return default
    try:
        call = _find_call(frame, callee)
    except (OSError, TypeError, ValueError, RecursionError):
        logger.debug("Could not inspect call site in %s", frame.f_code.co_filename, exc_info=True)
        return default
    if call is None:
        return default
    return _argument_label(call) or default


def _find_call(frame: FrameType, callee: Any) -> Optional[ast.Call]:
    lineno = frame.f_lineno
    lines = linecache.getlines(frame.f_code.co_filename, frame.f_globals)
    if not lines or lineno is None or lineno > len(lines):
        return None

    position = _instruction_position(frame)
    for tree, first_lineno, shift, first_line_fix in _statements_around(lines, lineno):
        candidates = [
            node
            for node in ast.walk(tree)
            if isinstance(node, ast.Call) and _resolve(node.func, frame) is callee
        ]
        if not candidates:
            continue
        candidates.sort(key=lambda node: (node.lineno, node.col_offset))

        if position is not None and len(candidates) > 1:
            for node in candidates:
                col = node.col_offset + shift + (first_line_fix if node.lineno == 1 else 0)
                if (node.lineno + first_lineno - 1, col) == position:
                    return node
        return candidates[0]
    return None


def _statements_around(lines: List[str], lineno: int) -> Iterator[Tuple[ast.AST, int, int, int]]:
    """Yield parseable snippets that contain line *lineno*.

    The current line is tried first, then snippets starting on earlier lines
    for calls sitting on a continuation line. Each item is the tree, the
    snippet's first line number, the indentation removed by dedenting and the
    extra column shift applied to the first line.
    """

    last = min(lineno - 1 + _MAX_STATEMENT_LINES, len(lines))
    for start in range(lineno - 1, max(lineno - 1 - _MAX_STATEMENT_LINES, -1), -1):
        for end in range(lineno, last + 1):
            raw = "".join(lines[start:end])
            text = textwrap.dedent(raw)
            shift = len(raw.splitlines()[0]) - len(text.splitlines()[0])

            first_line_fix = 0
            if text.startswith("elif "):
                text = text[2:]
                first_line_fix = 2
            if text.rstrip().endswith(":"):
                text = text.rstrip() + "\n    pass\n"

            try:
                tree = ast.parse(text)
            except SyntaxError:
                continue
            yield tree, start + 1, shift, first_line_fix
            break


def _resolve(node: ast.expr, frame: FrameType) -> Any:
    """Resolve a ``name`` or ``a.b.c`` expression in *frame* without side effects."""

    if isinstance(node, ast.Name):
        for scope in (frame.f_locals, frame.f_globals, vars(builtins)):
            if node.id in scope:
                return scope[node.id]
        return _UNRESOLVED
    if isinstance(node, ast.Attribute):
        base = _resolve(node.value, frame)
        if base is _UNRESOLVED:
            return _UNRESOLVED
        try:
            return inspect.getattr_static(base, node.attr)
        except AttributeError:
            return _UNRESOLVED
    return _UNRESOLVED


def _instruction_position(frame: FrameType) -> Optional[Tuple[int, int]]:
    # Column information for the current instruction exists on 3.11+ only.
    info = inspect.getframeinfo(frame, context=0)
    positions = getattr(info, "positions", None)
    if positions is None or positions.lineno is None or positions.col_offset is None:
        return None
    return positions.lineno, positions.col_offset


def _first_argument(call: ast.Call) -> Optional[ast.expr]:
    if call.args:
        return call.args[0]
    for keyword in call.keywords:
        if keyword.arg == "x":
            return keyword.value
    if call.keywords and call.keywords[0].arg is not None:
        return call.keywords[0].value
    return None


def _argument_label(call: ast.Call) -> Optional[str]:
    node = _first_argument(call)
    if node is None:
        return None
    while isinstance(node, ast.Call):
        inner = _first_argument(node)
        if inner is None:
            break
        node = inner
    if isinstance(node, ast.Name):
        return node.id
    return ast.unparse(node)


__all__ = ["DEFAULT_LABEL", "call_site_label"]
