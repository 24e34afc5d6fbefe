# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Hello-world demo - readable argument checks for beginner-facing functions.

Shows the three ways to apply checkers: nesting calls, naming them in a
sequence, and declaring them on the function (inline or from a YAML plan).

Run with:
    python examples/helloworld_demo.py
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from argcheck import (
    CheckPlan,
    MissingReferenceError,
    ValidationFailure,
    check_,
    check_args,
    checker,
    checker_against,
)

EXAMPLES_DIR = Path(__file__).resolve().parent
PLAN_PATH = EXAMPLES_DIR / "helloworld_checks.yaml"

GUESTS = ["Alice", "Bob", "Carl"]


# =============================================================================
# Checkers
# =============================================================================

check_character = checker("isinstance(x, str)", "'%s' is not class 'str'.")
check_scalar = checker(
    "not isinstance(x, (list, tuple, set, frozenset, dict))", "`%s` must be a single value."
)
check_nonempty = checker("len(x) > 0", "`%s` must be non-empty.")
check_among = checker_against("x in ref", "'%s' is not among %s")


# =============================================================================
# Checked functions
# =============================================================================

def helloworld_nested(name):
    """Chain checkers by nesting: each returns its input on success."""
    return "Hello, %s!" % check_nonempty(check_scalar(check_character(name)))


def helloworld_sequence(name):
    """Name the checkers; they run left to right and stop at the first failure."""
    return "Hello, %s!" % check_(name, "character", "scalar", "nonempty", ("among", GUESTS))


@check_args(name=["character", "scalar", "nonempty"])
def helloworld_declared(name):
    return f"Hello, {name}!"


plan = CheckPlan.from_file(PLAN_PATH)


@plan.guard("greet", registry={
    "check_character": check_character,
    "check_scalar": check_scalar,
    "check_nonempty": check_nonempty,
})
async def greet(name, title="Dr"):
    await asyncio.sleep(0)
    return f"Good morning, {title} {name}."


# =============================================================================
# Scenarios
# =============================================================================

def _attempt(label, call):
    try:
        print(f"  ✓ {label}: {call()}")
    except ValidationFailure as e:
        print(f"  ✗ {label}: {e}")


def demo_nested():
    print("\n" + "=" * 70)
    print("SCENARIO 1: Nested checker calls")
    print("=" * 70)
    _attempt("helloworld_nested('Carl')", lambda: helloworld_nested("Carl"))
    _attempt("helloworld_nested(1)", lambda: helloworld_nested(1))
    _attempt("helloworld_nested(['a', 'b'])", lambda: helloworld_nested(["a", "b"]))


def demo_sequence():
    print("\n" + "=" * 70)
    print("SCENARIO 2: Checks named in a sequence")
    print("=" * 70)
    _attempt("helloworld_sequence('Bob')", lambda: helloworld_sequence("Bob"))
    _attempt("helloworld_sequence('')", lambda: helloworld_sequence(""))
    _attempt("helloworld_sequence('Robert')", lambda: helloworld_sequence("Robert"))

    print("\nForgetting the reference is a usage error, not a failed check:")
    try:
        check_among("Carl")
    except MissingReferenceError as e:
        print(f"  ✗ {e}")


def demo_declared():
    print("\n" + "=" * 70)
    print("SCENARIO 3: Checks declared on the function")
    print("=" * 70)
    _attempt("helloworld_declared('Alice')", lambda: helloworld_declared("Alice"))
    _attempt("helloworld_declared(42)", lambda: helloworld_declared(42))


async def demo_plan():
    print("\n" + "=" * 70)
    print(f"SCENARIO 4: Checks loaded from {PLAN_PATH.name}")
    print("=" * 70)
    for name, title in (("Carl", "Dr"), ("", "Dr"), ("Carl", 3)):
        try:
            print(f"  ✓ {await greet(name, title=title)}")
        except ValidationFailure as e:
            print(f"  ✗ {e}")


def main():
    print("\nSelf-documenting checkers:")
    for fn in (check_character, check_scalar, check_nonempty, check_among):
        print(f"  {fn!r}")
    demo_nested()
    demo_sequence()
    demo_declared()
    asyncio.run(demo_plan())


if __name__ == "__main__":
    main()
