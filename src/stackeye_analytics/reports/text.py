"""Plain-text reports

Renders the probe statistics block and the full dependency tree screen with
Jinja2 templates.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from uuid import UUID

import structlog
from jinja2 import Environment, FileSystemLoader, select_autoescape

from stackeye_analytics.config import TreeConfig
from stackeye_analytics.models import DependencyGraph, StatsSummary
from stackeye_analytics.tree import (
    build_forest,
    build_orphan_nodes,
    build_subtree,
    render_orphan_section,
    render_tree,
    resolve_orphan_ids,
    resolve_root_ids,
)

logger = structlog.get_logger(component="reports")


def _get_template_env() -> Environment:
    """Jinja2 environment over the bundled templates"""
    template_dir = Path(__file__).parent / "templates"
    return Environment(
        loader=FileSystemLoader(template_dir),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def _render(template_name: str, **context: object) -> str:
    text = _get_template_env().get_template(template_name).render(**context)
    return text.rstrip("\n") + "\n"


def _format_time(value: datetime | None) -> str:
    if value is None:
        return "-"
    return value.strftime("%Y-%m-%d %H:%M %Z").strip()


def render_stats_report(summary: StatsSummary) -> str:
    """Render a statistics summary as a labelled text block

    Args:
        summary: Output of ``summarize_buckets``

    Returns:
        Report text ending with a newline
    """
    title = "Probe Statistics"
    if summary.probe_id is not None:
        title = f"{title} ({summary.probe_id})"

    return _render(
        "probe_stats.txt.j2",
        title=title,
        summary=summary,
        start=_format_time(summary.start),
        end=_format_time(summary.end),
    )


def render_dependency_report(
    graph: DependencyGraph,
    start_probe_id: str | UUID | None = None,
    use_ascii: bool | None = None,
    orphan_title: str | None = None,
    config: TreeConfig | None = None,
) -> str:
    """Render the dependency tree screen for an organization

    Without ``start_probe_id`` every root is drawn and orphan probes follow
    in their own section. With it only that probe's subtree is drawn and the
    orphan section is left out. Rendering options not passed explicitly come
    from ``config``, read from the environment when omitted.

    Args:
        graph: Organization dependency graph
        start_probe_id: Probe to start the tree from
        use_ascii: Use ASCII connectors instead of box-drawing characters
        orphan_title: Heading of the orphan section
        config: Tree rendering settings

    Returns:
        Report text ending with a newline

    Raises:
        InvalidProbeIdError: ``start_probe_id`` is not a UUID
        ProbeNotFoundError: ``start_probe_id`` is not in the graph
    """
    if config is None:
        config = TreeConfig.from_env()
    if use_ascii is None:
        use_ascii = config.use_ascii
    if orphan_title is None:
        orphan_title = config.orphan_title

    log = logger.bind(nodes=len(graph.nodes), edges=len(graph.edges))

    tree_text = ""
    orphan_text = ""
    if graph.nodes:
        if start_probe_id is not None:
            forest = [build_subtree(graph.nodes, graph.edges, start_probe_id)]
        else:
            forest = build_forest(graph.nodes, graph.edges, resolve_root_ids(graph))
            orphans = build_orphan_nodes(graph.nodes, resolve_orphan_ids(graph))
            orphan_text = render_orphan_section(orphan_title, orphans)
        tree_text = render_tree(forest, use_ascii=use_ascii)
        log.debug("dependency tree built", roots=len(forest))

    return _render(
        "dependency_tree.txt.j2",
        has_nodes=bool(graph.nodes),
        tree_text=tree_text,
        orphan_text=orphan_text,
    )
