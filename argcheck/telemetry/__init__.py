"""Telemetry package - OpenTelemetry counters for checker activity."""

from .metrics import (
    check_total,
    lookup_failure_total,
    record_check,
    record_lookup_failure,
    record_usage_error,
    usage_error_total,
)

__all__ = [
    "check_total",
    "usage_error_total",
    "lookup_failure_total",
    "record_check",
    "record_usage_error",
    "record_lookup_failure",
]
