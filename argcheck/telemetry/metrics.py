# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Metric instrument definitions for argcheck."""

from __future__ import annotations

import logging
from typing import Optional

from ..config import get_settings
from .runtime import meter

logger = logging.getLogger(__name__)

check_total = meter.create_counter(
    name="argcheck.check.total",
    description="Counts checker evaluations, partitioned by checker and pass/fail status.",
    unit="1",
)

usage_error_total = meter.create_counter(
    name="argcheck.usage_error.total",
    description="Counts checkers invoked without a required reference argument.",
    unit="1",
)

lookup_failure_total = meter.create_counter(
    name="argcheck.lookup.failure.total",
    description="Counts check names that could not be resolved to a checker.",
    unit="1",
)


def record_check(checker: Optional[str], passed: bool) -> None:
    """Count one checker evaluation."""

    if not get_settings().telemetry:
        return
    try:
        check_total.add(
            1, {"checker": checker or "anonymous", "status": "pass" if passed else "fail"}
        )
    except Exception:
        # Telemetry must never interfere with user code
        logger.debug("Failed to record check metric", exc_info=True)


def record_usage_error(checker: Optional[str]) -> None:
    if not get_settings().telemetry:
        return
    try:
        usage_error_total.add(1, {"checker": checker or "anonymous"})
    except Exception:
        logger.debug("Failed to record usage error metric", exc_info=True)


def record_lookup_failure(count: int) -> None:
    if not get_settings().telemetry:
        return
    try:
        lookup_failure_total.add(count)
    except Exception:
        logger.debug("Failed to record lookup failure metric", exc_info=True)


__all__ = [
    "check_total",
    "usage_error_total",
    "lookup_failure_total",
    "record_check",
    "record_usage_error",
    "record_lookup_failure",
]
