"""StackEye analytics core

Turns the aggregated probe statistics and dependency graphs returned by the
StackEye API into uptime/latency summaries and rendered dependency trees.

Usage:
    from stackeye_analytics import summarize_buckets, build_forest, render_tree

    summary = summarize_buckets(buckets, period="24h")
    print(render_tree(build_forest(nodes, edges, root_ids)))
"""

from stackeye_analytics.models import (
    AggregatedBucket,
    DependencyEdge,
    DependencyGraph,
    DependencyNode,
    StatsSummary,
    TreeNode,
)
from stackeye_analytics.stats import calculate_weighted_percentiles, parse_period, summarize_buckets
from stackeye_analytics.tree import (
    build_forest,
    build_orphan_nodes,
    build_subtree,
    render_orphan_section,
    render_tree,
)

__all__ = [
    "AggregatedBucket",
    "DependencyEdge",
    "DependencyGraph",
    "DependencyNode",
    "StatsSummary",
    "TreeNode",
    "build_forest",
    "build_orphan_nodes",
    "build_subtree",
    "calculate_weighted_percentiles",
    "parse_period",
    "render_orphan_section",
    "render_tree",
    "summarize_buckets",
]
__version__ = "0.1.0"
