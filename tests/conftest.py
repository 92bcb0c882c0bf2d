"""Shared test fixtures"""

from __future__ import annotations

import os
from datetime import datetime, timezone
from uuid import UUID

import pytest

from stackeye_analytics.models import AggregatedBucket, DependencyEdge, DependencyGraph, DependencyNode

ROUTER_ID = UUID("11111111-1111-4111-8111-111111111111")
API_ID = UUID("22222222-2222-4222-8222-222222222222")
DATABASE_ID = UUID("33333333-3333-4333-8333-333333333333")
CACHE_ID = UUID("44444444-4444-4444-8444-444444444444")
STANDALONE_ID = UUID("55555555-5555-4555-8555-555555555555")
MISSING_ID = UUID("99999999-9999-4999-8999-999999999999")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove variables that would leak in from the developer's shell"""
    for key in list(os.environ.keys()):
        if key.startswith("STACKEYE_") or key == "NO_COLOR":
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def now() -> datetime:
    return datetime(2026, 1, 19, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_buckets() -> list[AggregatedBucket]:
    """Two hourly buckets with different latency profiles"""
    return [
        AggregatedBucket(
            total_checks=100,
            success_checks=95,
            failure_checks=5,
            avg_response_ms=150.0,
            min_response_ms=50,
            max_response_ms=300,
        ),
        AggregatedBucket(
            total_checks=100,
            success_checks=98,
            failure_checks=2,
            avg_response_ms=120.0,
            min_response_ms=40,
            max_response_ms=250,
        ),
    ]


@pytest.fixture
def sample_nodes() -> list[DependencyNode]:
    """Router -> API -> (Database, Cache), plus one standalone probe"""
    return [
        DependencyNode(probe_id=ROUTER_ID, name="Router", status="up"),
        DependencyNode(probe_id=API_ID, name="API Server", status="down"),
        DependencyNode(probe_id=DATABASE_ID, name="Database", status="down", is_unreachable=True),
        DependencyNode(probe_id=CACHE_ID, name="Cache", status="up"),
        DependencyNode(probe_id=STANDALONE_ID, name="Marketing Site", status="up"),
    ]


@pytest.fixture
def sample_edges() -> list[DependencyEdge]:
    return [
        DependencyEdge(from_probe_id=ROUTER_ID, to_probe_id=API_ID),
        DependencyEdge(from_probe_id=API_ID, to_probe_id=DATABASE_ID),
        DependencyEdge(from_probe_id=API_ID, to_probe_id=CACHE_ID),
    ]


@pytest.fixture
def sample_graph(sample_nodes: list[DependencyNode], sample_edges: list[DependencyEdge]) -> DependencyGraph:
    """Graph with server-computed roots and orphans"""
    return DependencyGraph(
        nodes=sample_nodes,
        edges=sample_edges,
        root_probes=[ROUTER_ID],
        orphan_probes=[STANDALONE_ID],
    )


CHAIN_DEPTH = 1500


@pytest.fixture
def long_chain() -> tuple[list[DependencyNode], list[DependencyEdge]]:
    """A single dependency chain deeper than the interpreter's recursion limit"""
    ids = [UUID(int=i + 1) for i in range(CHAIN_DEPTH)]
    nodes = [DependencyNode(probe_id=probe_id, name=f"hop-{i}", status="up") for i, probe_id in enumerate(ids)]
    edges = [DependencyEdge(from_probe_id=parent, to_probe_id=child) for parent, child in zip(ids, ids[1:])]
    return nodes, edges
