"""Custom exceptions

Classifies the few conditions the analytics core refuses to absorb.
Degenerate inputs (empty buckets, dangling edges, cycles) are not errors.
"""

from __future__ import annotations

from uuid import UUID


class AnalyticsError(Exception):
    """Base class for analytics errors"""


class ProbeNotFoundError(AnalyticsError):
    """Requested subtree root is absent from the dependency graph."""

    def __init__(self, probe_id: UUID) -> None:
        self.probe_id = probe_id
        super().__init__(f"probe {probe_id} not found in organization")


class InvalidProbeIdError(AnalyticsError):
    """Probe identifier is not a valid UUID."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"invalid probe ID {value!r}: must be a valid UUID")


class InvalidPeriodError(AnalyticsError):
    """Statistics period is not one of the supported windows."""

    def __init__(self, period: str, choices: tuple[str, ...]) -> None:
        self.period = period
        self.choices = choices
        if len(choices) > 1:
            expected = ", ".join(choices[:-1]) + f", or {choices[-1]}"
        else:
            expected = "".join(choices)
        super().__init__(f"invalid period {period!r}: must be {expected}")


class ConfigurationError(AnalyticsError):
    """Configuration error

    Raised when an environment variable holds a value that cannot be
    interpreted and has no safe default.
    """
