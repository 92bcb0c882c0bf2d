"""Data models

Pydantic models for the API payloads consumed by the analytics core and the
structures it produces. Field names follow the API's snake_case JSON so
decoded responses can be passed to ``model_validate`` directly.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

UNREACHABLE_STATUS = "unreachable"


class AggregatedBucket(BaseModel):
    """One aggregated time window of probe results"""

    model_config = ConfigDict(frozen=True)

    time_bucket: datetime | None = None
    total_checks: int = 0
    success_checks: int = 0
    failure_checks: int = 0
    avg_response_ms: float = 0.0
    min_response_ms: int = 0
    max_response_ms: int = 0
    uptime_percent: float | None = None


class StatsSummary(BaseModel):
    """Single-period statistics computed from aggregated buckets

    ``p95_response_ms`` and ``p99_response_ms`` are estimated from bucket
    averages, not from individual check results.
    """

    probe_id: UUID | None = None
    period: str | None = None
    uptime_percent: float = 0.0
    total_checks: int = 0
    success_checks: int = 0
    failure_checks: int = 0
    avg_response_ms: float = 0.0
    p95_response_ms: float = 0.0
    p99_response_ms: float = 0.0
    min_response_ms: int = 0
    max_response_ms: int = 0
    start: datetime | None = None
    end: datetime | None = None
    time_buckets: int = 0


class PeriodWindow(BaseModel):
    """Resolved statistics period: bucket size and time range"""

    model_config = ConfigDict(frozen=True)

    period: str
    aggregate: str
    start: datetime
    end: datetime


class DependencyNode(BaseModel):
    """A probe in the organization dependency graph"""

    model_config = ConfigDict(frozen=True)

    probe_id: UUID
    name: str
    status: str = ""
    is_unreachable: bool = False

    @property
    def effective_status(self) -> str:
        """Status shown to users; unreachable overrides the probe's own status."""
        if self.is_unreachable:
            return UNREACHABLE_STATUS
        return self.status


class DependencyEdge(BaseModel):
    """Parent to child dependency: the child depends on the parent being healthy"""

    model_config = ConfigDict(frozen=True)

    from_probe_id: UUID
    to_probe_id: UUID


class DependencyGraph(BaseModel):
    """Organization dependency graph as returned by the API

    ``root_probes`` and ``orphan_probes`` are computed server-side; when a
    payload omits them they are derived from the nodes and edges.
    """

    model_config = ConfigDict(frozen=True)

    nodes: list[DependencyNode] = Field(default_factory=list)
    edges: list[DependencyEdge] = Field(default_factory=list)
    root_probes: list[UUID] | None = None
    orphan_probes: list[UUID] | None = None


class TreeNode(BaseModel):
    """Render-ready tree node carrying a display name and effective status"""

    name: str
    status: str = ""
    children: list[TreeNode] = Field(default_factory=list)
