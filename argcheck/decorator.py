# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

# argcheck/decorator.py

import builtins
import functools
import inspect
import logging
from typing import Any, Callable, Mapping, Optional

from .exceptions import ConfigurationError, ValidationFailure
from .registry import get_default_registry
from .runtime.guard import check_arguments, normalize_rules, validate_rule_keys
from .runtime.sequence import RegistryLike

logger = logging.getLogger(__name__)

# Sentinel object to detect if a parameter was provided by the user
_sentinel = object()


def check_args(
    rules: Optional[Mapping[str, Any]] = None,
    /,
    *,
    registry: Optional[RegistryLike] = None,
    name_format: Optional[str] = None,
    on_fail: Any = _sentinel,
    **more_rules: Any,
):
    """
    Declare the checks a function's arguments must pass.

    Each rule key names a parameter of the decorated function. Its value is a
    check entry (a checker suffix, a callable, or a ``(suffix, ref)`` pair
    inside a list) or a list of entries, applied in order. Failure messages
    name the parameter, so no call-site inspection is needed.

    :param rules: Optional. A mapping of parameter names to checks, passed by
                  position. Use it for parameters called ``registry``,
                  ``name_format`` or ``on_fail``, which as keywords would be
                  taken as options of this decorator.
    :param more_rules: Further rules given as keywords.
    :param registry: Optional. If given, the only place checker names are
                     looked up. Otherwise names resolve in the decorated
                     function's module globals, then the default registry,
                     then builtins.
    :param name_format: Optional. Expands suffixes into checker names;
                        defaults to ``check_%s``.
    :param on_fail: Optional. Determines the behavior when an argument fails
                    its checks. If it is a callable, it is invoked and its
                    result returned; the :class:`ValidationFailure` is passed
                    as an argument if the callable accepts it. Any other
                    value is returned directly. If not provided, the
                    ``ValidationFailure`` is raised.

    .. code-block:: python

        from argcheck import check_args, checker

        check_character = checker("isinstance(x, str)", "'%s' must be a character.")
        check_nonempty = checker("len(x) > 0", "`%s` must be non-empty.")

        @check_args(name=["character", "nonempty"])
        def helloworld(name):
            return f"Hello, {name}!"

        # Return a static value instead of raising
        @check_args(count=[check_positive], on_fail=None)
        def repeat(word, count): ...

        # A parameter that shares its name with an option
        @check_args({"registry": "character"})
        def connect(registry): ...

    Usage errors (missing reference arguments) and lookup errors always
    propagate; ``on_fail`` only handles failed checks.
    """

    if rules is None:
        rules = {}
    elif not isinstance(rules, Mapping):
        raise ConfigurationError(
            f"Positional rules must be a mapping of parameter names, not {type(rules).__name__}"
        )
    duplicated = set(rules) & set(more_rules)
    if duplicated:
        raise ConfigurationError(
            f"Rules for {sorted(duplicated)} are given both positionally and as keywords"
        )
    normalized = normalize_rules({**rules, **more_rules})

    def decorator(func: Callable):
        signature = inspect.signature(func)
        allowed_params = tuple(signature.parameters.keys())
        var_kwargs = next(
            (
                param.name
                for param in signature.parameters.values()
                if param.kind == inspect.Parameter.VAR_KEYWORD
            ),
            None,
        )
        validate_rule_keys(
            normalized,
            allowed_params,
            has_var_kwargs=var_kwargs is not None,
            where=f"'{func.__qualname__}'",
        )

        def _scopes():
            return [func.__globals__, get_default_registry(), vars(builtins)]

        def _validate(args, kwargs) -> None:
            bound = signature.bind(*args, **kwargs)
            bound.apply_defaults()
            arguments = dict(bound.arguments)
            if var_kwargs is not None:
                arguments.update(arguments.pop(var_kwargs, {}))
            check_arguments(
                arguments,
                normalized,
                name_format=name_format,
                registry=registry,
                scopes=_scopes(),
            )

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            """Wrapper for synchronous functions."""
            try:
                _validate(args, kwargs)
            except ValidationFailure as failure:
                return _handle_failure(failure)
            return func(*args, **kwargs)

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            """Wrapper for asynchronous functions."""
            try:
                _validate(args, kwargs)
            except ValidationFailure as failure:
                return _handle_failure(failure)
            return await func(*args, **kwargs)

        def _handle_failure(failure: ValidationFailure):
            """Executes the user-supplied `on_fail` handler or raises by default."""

            logger.debug(
                "Argument '%s' of %s failed validation: %s",
                failure.argument,
                func.__qualname__,
                failure.message,
            )
            if on_fail is _sentinel:
                raise failure

            # Static value supplied (e.g. None/False)
            if not callable(on_fail):
                return on_fail

            try:
                inspect.signature(on_fail).bind(failure)
            except TypeError:
                return on_fail()
            except ValueError:
                # No introspectable signature; assume it takes the failure.
                pass
            return on_fail(failure)

        # Choose the appropriate wrapper based on whether the decorated function is sync or async
        if inspect.iscoroutinefunction(func):
            wrapper = async_wrapper
        else:
            wrapper = sync_wrapper

        # Attach the rules for introspection
        wrapper.__argcheck_rules__ = normalized
        return wrapper

    return decorator


__all__ = ["check_args"]
