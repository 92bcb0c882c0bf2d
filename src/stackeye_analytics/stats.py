"""Probe statistics from aggregated time buckets

The API only retains per-bucket counts and averages for probe results, so
overall figures are reconstructed from those buckets. Percentile latencies
are estimated with a weighted walk over bucket averages: the reported p95/p99
is the average of the bucket that contains the percentile boundary, not a
sample-level order statistic. If raw per-check samples ever become available
the estimate should be replaced by an exact computation.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import NamedTuple
from uuid import UUID

import structlog

from stackeye_analytics.config import PERIODS, StatsConfig
from stackeye_analytics.exceptions import InvalidPeriodError
from stackeye_analytics.models import AggregatedBucket, PeriodWindow, StatsSummary

logger = structlog.get_logger(component="stats")

P95 = 0.95
P99 = 0.99


class WeightedValue(NamedTuple):
    """A bucket's average response time weighted by its check count"""

    value: float
    weight: int


def parse_period(period: str | None = None, now: datetime | None = None) -> PeriodWindow:
    """Resolve a statistics period into a bucket size and time range

    Args:
        period: One of "24h", "7d" or "30d" (defaults to STACKEYE_STATS_PERIOD,
            then "24h")
        now: Reference time (defaults to the current UTC time)

    Returns:
        The aggregate interval and [start, end] window for the period

    Raises:
        InvalidPeriodError: The period is not supported
    """
    if period is None:
        period = StatsConfig.from_env().default_period
    if period not in PERIODS:
        raise InvalidPeriodError(period, tuple(PERIODS))

    aggregate, lookback = PERIODS[period]
    end = now if now is not None else datetime.now(timezone.utc)
    return PeriodWindow(period=period, aggregate=aggregate, start=end - lookback, end=end)


def calculate_weighted_percentiles(values: Sequence[WeightedValue], total_weight: int) -> tuple[float, float]:
    """Estimate p95 and p99 from weighted bucket averages

    Values are sorted ascending (stable, so ties keep input order) and walked
    while accumulating weight. Each percentile is the value of the first entry
    whose cumulative weight reaches the percentile's share of ``total_weight``.
    Space is O(buckets); buckets are never expanded into per-check samples.

    Args:
        values: Bucket averages with their check counts
        total_weight: Total number of checks across all buckets

    Returns:
        (p95, p99); (0.0, 0.0) when there is nothing to weigh
    """
    if not values or total_weight <= 0:
        return 0.0, 0.0

    ordered = sorted(values, key=lambda wv: wv.value)
    p95_target = total_weight * P95
    p99_target = total_weight * P99

    p95: float | None = None
    p99: float | None = None
    cumulative = 0
    for wv in ordered:
        cumulative += wv.weight
        if p95 is None and cumulative >= p95_target:
            p95 = wv.value
        if p99 is None and cumulative >= p99_target:
            p99 = wv.value
            break

    # Thresholds can be missed when the weights don't add up to total_weight
    largest = ordered[-1].value
    return (
        p95 if p95 is not None else largest,
        p99 if p99 is not None else largest,
    )


def calculate_percentiles(times: Sequence[float]) -> tuple[float, float]:
    """Index-based p95/p99 over unweighted values

    Args:
        times: Response times; each value counts once

    Returns:
        (p95, p99); (0.0, 0.0) for an empty sequence
    """
    if not times:
        return 0.0, 0.0

    ordered = sorted(times)
    last = len(ordered) - 1
    p95 = ordered[min(int(len(ordered) * P95), last)]
    p99 = ordered[min(int(len(ordered) * P99), last)]
    return p95, p99


def summarize_buckets(
    buckets: Sequence[AggregatedBucket],
    *,
    probe_id: UUID | None = None,
    period: str | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
) -> StatsSummary:
    """Compute single-period statistics from aggregated buckets

    Counts are summed, the average is weighted by each bucket's check count
    and min/max span all buckets. Buckets may arrive in any order.

    When there are no checks at all every metric is zero, including
    ``min_response_ms`` and ``max_response_ms``.

    Args:
        buckets: Aggregated results for the period
        probe_id: Probe the buckets belong to (echoed)
        period: Period label such as "24h" (echoed)
        start: Start of the queried range (echoed)
        end: End of the queried range (echoed)

    Returns:
        The computed summary
    """
    log = logger.bind(probe_id=str(probe_id) if probe_id else None, period=period, buckets=len(buckets))

    total_checks = sum(b.total_checks for b in buckets)
    if total_checks == 0:
        log.debug("no checks in period")
        return StatsSummary(
            probe_id=probe_id,
            period=period,
            start=start,
            end=end,
            time_buckets=len(buckets),
        )

    success_checks = sum(b.success_checks for b in buckets)
    failure_checks = sum(b.failure_checks for b in buckets)
    weighted_sum = sum(b.avg_response_ms * b.total_checks for b in buckets)

    weighted = [WeightedValue(b.avg_response_ms, b.total_checks) for b in buckets if b.total_checks > 0]
    p95, p99 = calculate_weighted_percentiles(weighted, total_checks)

    summary = StatsSummary(
        probe_id=probe_id,
        period=period,
        uptime_percent=success_checks / total_checks * 100,
        total_checks=total_checks,
        success_checks=success_checks,
        failure_checks=failure_checks,
        avg_response_ms=weighted_sum / total_checks,
        p95_response_ms=p95,
        p99_response_ms=p99,
        min_response_ms=min(b.min_response_ms for b in buckets),
        max_response_ms=max(b.max_response_ms for b in buckets),
        start=start,
        end=end,
        time_buckets=len(buckets),
    )
    log.debug("stats summarized", total_checks=total_checks, uptime_percent=round(summary.uptime_percent, 3))
    return summary
