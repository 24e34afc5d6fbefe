# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""
Tests for @check_args - declarative argument checks on a function.

Key concepts:
- Rules: each keyword names a parameter and lists the checks it must pass
- Labels: failure messages name the parameter, never the value
- Custom handlers: on_fail replaces the raised ValidationFailure
- Sync vs Async: both kinds of function are wrapped transparently
"""
from __future__ import annotations

import pytest

from argcheck import (
    CheckerLookupError,
    ConfigurationError,
    MissingReferenceError,
    ValidationFailure,
    check_args,
    checker,
    checker_against,
)

check_character = checker("isinstance(x, str)", "'%s' must be a character.")
check_nonempty = checker("len(x) > 0", "`%s` must be non-empty.")
check_positive = checker("x > 0", "`%s` must be positive.")
check_among = checker_against("x in ref", "'%s' is not among %s")
valid_character = checker("isinstance(x, str)", "'%s' must really be a character.")

GUESTS = ["Alice", "Bob", "Carl"]


@check_args(name=["character", "nonempty"])
def helloworld(name):
    return f"Hello, {name}!"


@check_args(name=["character", ("among", GUESTS)], times=check_positive)
def greet(name, times=1):
    return " ".join([f"Hello, {name}!"] * times)


def test_valid_arguments_reach_the_function():
    assert helloworld("Carl") == "Hello, Carl!"
    assert greet("Bob", times=2) == "Hello, Bob! Hello, Bob!"


def test_failure_names_the_parameter():
    """
    GIVEN: A function whose `name` parameter must be character
    WHEN: We call it with a number
    THEN: The failure names the parameter `name`
    """
    with pytest.raises(ValidationFailure) as excinfo:
        helloworld(1)

    assert str(excinfo.value) == "'name' must be a character."
    assert excinfo.value.argument == "name"
    assert excinfo.value.value == 1


def test_reference_entry_is_checked():
    with pytest.raises(ValidationFailure, match=r"'name' is not among \('Alice', 'Bob', 'Carl'\)"):
        greet("Robert")


def test_defaults_are_checked():
    @check_args(times=check_positive)
    def repeat(word, times=0):
        return word * times

    with pytest.raises(ValidationFailure, match="`times` must be positive."):
        repeat("a")


def test_keyword_arguments_are_checked():
    with pytest.raises(ValidationFailure, match="`times` must be positive."):
        greet(name="Bob", times=-1)


def test_function_body_does_not_run_on_failure():
    calls = []

    @check_args(name="character")
    def record(name):
        calls.append(name)

    with pytest.raises(ValidationFailure):
        record(3)
    assert calls == []


def test_var_kwargs_contents_are_checked():
    @check_args(title="character")
    def build(**fields):
        return fields

    assert build(title="Dr") == {"title": "Dr"}
    assert build(other=1) == {"other": 1}
    with pytest.raises(ValidationFailure, match="'title' must be a character."):
        build(title=5)


def test_rules_for_unknown_parameters_fail_at_decoration():
    with pytest.raises(ConfigurationError, match="undefined parameter"):

        @check_args(nmae="character")
        def broken(name):
            return name


def test_malformed_rule_fails_at_decoration():
    with pytest.raises(ConfigurationError):
        check_args(name=42)


def test_unknown_checker_is_reported_on_call():
    @check_args(name="numeric")
    def typo(name):
        return name

    with pytest.raises(CheckerLookupError, match="check_numeric"):
        typo(1)


def test_missing_reference_is_a_usage_error():
    @check_args(name="among", on_fail=None)
    def pick(name):
        return name

    with pytest.raises(MissingReferenceError):
        pick("Bob")


def test_rules_are_attached_for_introspection():
    assert helloworld.__argcheck_rules__ == {"name": ("character", "nonempty")}
    assert helloworld.__name__ == "helloworld"


def test_explicit_registry(registry):
    @check_args(registry=registry, value=["character", "scalar"])
    def show(value):
        return value

    assert show("x") == "x"
    with pytest.raises(ValidationFailure, match="'value' must be a character."):
        show(1)


def test_default_registry_is_searched(default_registry):
    default_registry.define("even", "x % 2 == 0", "`%s` must be even.")

    @check_args(n="even")
    def half(n):
        return n // 2

    assert half(4) == 2
    with pytest.raises(ValidationFailure, match="`n` must be even."):
        half(3)


def test_parameters_named_like_options_are_checked(registry):
    """
    GIVEN: A function whose parameters are called `registry` and `on_fail`
    WHEN: Their rules are passed as a positional mapping
    THEN: They are checked like any other parameter, and options still apply
    """

    @check_args({"registry": "character", "on_fail": ["character"]}, registry=registry)
    def connect(registry, on_fail="raise"):
        return registry

    assert connect("db") == "db"
    with pytest.raises(ValidationFailure, match="'registry' must be a character."):
        connect(5)
    with pytest.raises(ValidationFailure, match="'on_fail' must be a character."):
        connect("db", on_fail=3)
    assert connect.__argcheck_rules__ == {"registry": ("character",), "on_fail": ("character",)}


def test_positional_and_keyword_rules_combine():
    @check_args({"name": "character"}, times=check_positive)
    def repeat(name, times):
        return name * times

    assert repeat("a", 2) == "aa"
    with pytest.raises(ValidationFailure, match="`times` must be positive."):
        repeat("a", 0)


def test_rule_given_both_ways_is_rejected():
    with pytest.raises(ConfigurationError, match="both positionally and as keywords"):
        check_args({"name": "character"}, name="nonempty")


def test_positional_rules_must_be_a_mapping():
    with pytest.raises(ConfigurationError, match="mapping"):
        check_args(["character"])


def test_custom_name_format():
    @check_args(name_format="valid_%s", name="character")
    def hello(name):
        return name

    assert hello("ok") == "ok"
    with pytest.raises(ValidationFailure, match="must really be"):
        hello(1)


# ------------------------------------------------------------------
# on_fail handling
# ------------------------------------------------------------------


def test_on_fail_static_value():
    @check_args(name="character", on_fail=None)
    def hello(name):
        return name

    assert hello(1) is None
    assert hello("ok") == "ok"


def test_on_fail_handler_receives_failure():
    @check_args(name="character", on_fail=lambda failure: f"bad {failure.argument}")
    def hello(name):
        return name

    assert hello(1) == "bad name"


def test_on_fail_handler_without_arguments():
    @check_args(name="character", on_fail=lambda: "fallback")
    def hello(name):
        return name

    assert hello(1) == "fallback"


# ------------------------------------------------------------------
# Async functions
# ------------------------------------------------------------------


@check_args(name=["character", "nonempty"])
async def ahelloworld(name):
    return f"Hello, {name}!"


@pytest.mark.anyio
async def test_async_function_passes():
    assert await ahelloworld("Carl") == "Hello, Carl!"


@pytest.mark.anyio
async def test_async_function_fails_before_awaiting():
    with pytest.raises(ValidationFailure, match="`name` must be non-empty."):
        await ahelloworld("")


@pytest.mark.anyio
async def test_async_on_fail():
    @check_args(name="character", on_fail=False)
    async def hello(name):
        return True

    assert await hello(1) is False
