"""Dependency tree construction

Builds render-ready trees from the flat node/edge lists of an organization
dependency graph. Edges point from parent to child. Dangling edges, duplicate
roots, shared children and cycles are tolerated; only a missing explicit
subtree root is an error.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from uuid import UUID

import structlog

from stackeye_analytics.exceptions import InvalidProbeIdError, ProbeNotFoundError
from stackeye_analytics.models import DependencyEdge, DependencyGraph, DependencyNode, TreeNode

logger = structlog.get_logger(component="tree.builder")


def parse_probe_id(value: str | UUID) -> UUID:
    """Validate a probe identifier

    Raises:
        InvalidProbeIdError: The value is not a UUID
    """
    if isinstance(value, UUID):
        return value
    try:
        return UUID(value)
    except (ValueError, TypeError, AttributeError) as e:
        raise InvalidProbeIdError(str(value)) from e


def _index_nodes(nodes: Iterable[DependencyNode]) -> dict[UUID, DependencyNode]:
    return {node.probe_id: node for node in nodes}


def _children_map(edges: Iterable[DependencyEdge], node_map: dict[UUID, DependencyNode]) -> dict[UUID, list[UUID]]:
    """Group child IDs by parent, dropping edges that reference unknown probes."""
    children: dict[UUID, list[UUID]] = {}
    for edge in edges:
        if edge.from_probe_id not in node_map or edge.to_probe_id not in node_map:
            logger.debug(
                "dangling edge dropped",
                from_probe_id=str(edge.from_probe_id),
                to_probe_id=str(edge.to_probe_id),
            )
            continue
        children.setdefault(edge.from_probe_id, []).append(edge.to_probe_id)
    return children


def _new_tree_node(node: DependencyNode) -> TreeNode:
    return TreeNode(name=node.name, status=node.effective_status)


def _visit(probe_id: UUID, node_map: dict[UUID, DependencyNode], visited: set[UUID]) -> TreeNode | None:
    """Per-node build step; None for a probe already placed in this build."""
    if probe_id in visited:
        logger.debug("probe already visited", probe_id=str(probe_id))
        return None
    visited.add(probe_id)
    return _new_tree_node(node_map[probe_id])


def _grow(
    root: TreeNode,
    root_id: UUID,
    node_map: dict[UUID, DependencyNode],
    children_map: dict[UUID, list[UUID]],
    visited: set[UUID],
) -> TreeNode:
    """Attach descendants to ``root`` depth first, in edge order.

    Uses an explicit stack so arbitrarily deep chains do not hit the
    interpreter's recursion limit. A child already in ``visited`` is omitted
    along with everything below it, which breaks cycles.
    """
    stack: list[tuple[TreeNode, Iterator[UUID]]] = [(root, iter(children_map.get(root_id, ())))]
    while stack:
        parent, pending = stack[-1]
        child_id = next(pending, None)
        if child_id is None:
            stack.pop()
            continue
        child = _visit(child_id, node_map, visited)
        if child is None:
            continue
        parent.children.append(child)
        stack.append((child, iter(children_map.get(child_id, ()))))
    return root


def build_forest(
    nodes: Sequence[DependencyNode],
    edges: Sequence[DependencyEdge],
    root_ids: Iterable[UUID],
) -> list[TreeNode]:
    """Build one tree per root

    A probe appears at most once across the whole forest: a root already
    reached from an earlier root is skipped, and roots missing from the node
    set contribute nothing.

    Args:
        nodes: All probes in the graph
        edges: Parent to child dependencies
        root_ids: Probes to start from, in display order

    Returns:
        The root tree nodes
    """
    node_map = _index_nodes(nodes)
    children_map = _children_map(edges, node_map)
    visited: set[UUID] = set()

    forest: list[TreeNode] = []
    for root_id in root_ids:
        if root_id not in node_map:
            logger.debug("root not in graph", probe_id=str(root_id))
            continue
        root = _visit(root_id, node_map, visited)
        if root is not None:
            forest.append(_grow(root, root_id, node_map, children_map, visited))
    return forest


def build_subtree(
    nodes: Sequence[DependencyNode],
    edges: Sequence[DependencyEdge],
    start_probe_id: str | UUID,
) -> TreeNode:
    """Build the tree rooted at one user-selected probe

    Args:
        nodes: All probes in the graph
        edges: Parent to child dependencies
        start_probe_id: Probe to start from, as a UUID or its string form

    Returns:
        The subtree root

    Raises:
        InvalidProbeIdError: ``start_probe_id`` is not a UUID
        ProbeNotFoundError: The probe is not in the graph
    """
    probe_id = parse_probe_id(start_probe_id)
    node_map = _index_nodes(nodes)
    if probe_id not in node_map:
        raise ProbeNotFoundError(probe_id)

    root = _new_tree_node(node_map[probe_id])
    return _grow(root, probe_id, node_map, _children_map(edges, node_map), {probe_id})


def build_orphan_nodes(nodes: Sequence[DependencyNode], orphan_ids: Iterable[UUID]) -> list[TreeNode]:
    """Flat tree nodes for orphan probes, skipping IDs missing from the graph."""
    node_map = _index_nodes(nodes)
    return [
        TreeNode(name=node_map[probe_id].name, status=node_map[probe_id].effective_status)
        for probe_id in orphan_ids
        if probe_id in node_map
    ]


def _linked_ids(nodes: Sequence[DependencyNode], edges: Sequence[DependencyEdge]) -> tuple[set[UUID], set[UUID]]:
    """(probes with a parent, probes with a child), ignoring dangling edges."""
    known = {node.probe_id for node in nodes}
    has_parent: set[UUID] = set()
    has_child: set[UUID] = set()
    for edge in edges:
        if edge.from_probe_id in known and edge.to_probe_id in known:
            has_child.add(edge.from_probe_id)
            has_parent.add(edge.to_probe_id)
    return has_parent, has_child


def find_root_ids(nodes: Sequence[DependencyNode], edges: Sequence[DependencyEdge]) -> list[UUID]:
    """Probes with children but no parent, in node order."""
    has_parent, has_child = _linked_ids(nodes, edges)
    return [node.probe_id for node in nodes if node.probe_id not in has_parent and node.probe_id in has_child]


def find_orphan_ids(nodes: Sequence[DependencyNode], edges: Sequence[DependencyEdge]) -> list[UUID]:
    """Probes with neither parent nor children, in node order."""
    has_parent, has_child = _linked_ids(nodes, edges)
    return [node.probe_id for node in nodes if node.probe_id not in has_parent and node.probe_id not in has_child]


def resolve_root_ids(graph: DependencyGraph) -> list[UUID]:
    """Server-provided roots, or roots derived from the edges when absent."""
    if graph.root_probes is not None:
        return list(graph.root_probes)
    return find_root_ids(graph.nodes, graph.edges)


def resolve_orphan_ids(graph: DependencyGraph) -> list[UUID]:
    """Server-provided orphans, or orphans derived from the edges when absent."""
    if graph.orphan_probes is not None:
        return list(graph.orphan_probes)
    return find_orphan_ids(graph.nodes, graph.edges)
