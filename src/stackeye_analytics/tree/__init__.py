"""Dependency tree building and rendering"""

from stackeye_analytics.tree.builder import (
    build_forest,
    build_orphan_nodes,
    build_subtree,
    find_orphan_ids,
    find_root_ids,
    parse_probe_id,
    resolve_orphan_ids,
    resolve_root_ids,
)
from stackeye_analytics.tree.renderer import (
    ASCII_GLYPHS,
    UNICODE_GLYPHS,
    GlyphSet,
    TreeLine,
    format_label,
    iter_tree_lines,
    render_orphan_section,
    render_tree,
)

__all__ = [
    # Builder
    "build_forest",
    "build_subtree",
    "build_orphan_nodes",
    "find_root_ids",
    "find_orphan_ids",
    "resolve_root_ids",
    "resolve_orphan_ids",
    "parse_probe_id",
    # Renderer
    "GlyphSet",
    "UNICODE_GLYPHS",
    "ASCII_GLYPHS",
    "TreeLine",
    "format_label",
    "iter_tree_lines",
    "render_tree",
    "render_orphan_section",
]
