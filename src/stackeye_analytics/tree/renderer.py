"""Dependency tree text rendering

Roots are printed flush left; descendants are drawn with branch connectors
("├── " / "└── ", or "+-- " / "`-- " in ASCII mode). Both glyph sets produce
the same structure, only the characters differ.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import NamedTuple

from stackeye_analytics.models import TreeNode


@dataclass(frozen=True)
class GlyphSet:
    """Characters used to draw branches"""

    pipe: str
    tee: str
    corner: str
    dash: str

    @property
    def branch(self) -> str:
        return f"{self.tee}{self.dash}{self.dash} "

    @property
    def last_branch(self) -> str:
        return f"{self.corner}{self.dash}{self.dash} "

    @property
    def continuation(self) -> str:
        return f"{self.pipe}   "


UNICODE_GLYPHS = GlyphSet(pipe="│", tee="├", corner="└", dash="─")
ASCII_GLYPHS = GlyphSet(pipe="|", tee="+", corner="`", dash="-")
BLANK_CONTINUATION = "    "


def glyphs_for(use_ascii: bool) -> GlyphSet:
    return ASCII_GLYPHS if use_ascii else UNICODE_GLYPHS


class TreeLine(NamedTuple):
    """One rendered line: indentation plus connector, name and status"""

    prefix: str
    name: str
    status: str


def format_label(name: str, status: str) -> str:
    """Label a node as name [STATUS], or just the name when there is no status."""
    if not status:
        return name
    return f"{name} [{status.upper()}]"


def _walk(root: TreeNode, glyphs: GlyphSet) -> Iterator[TreeLine]:
    """Pre-order lines of one tree, using an explicit stack for deep chains."""
    # (node, line prefix, prefix handed down to its children)
    stack: list[tuple[TreeNode, str, str]] = [(root, "", "")]
    while stack:
        node, prefix, child_indent = stack.pop()
        yield TreeLine(prefix, node.name, node.status)

        last = len(node.children) - 1
        for i in range(last, -1, -1):
            if i == last:
                stack.append((node.children[i], child_indent + glyphs.last_branch, child_indent + BLANK_CONTINUATION))
            else:
                stack.append((node.children[i], child_indent + glyphs.branch, child_indent + glyphs.continuation))


def iter_tree_lines(forest: Sequence[TreeNode], use_ascii: bool = False) -> Iterator[TreeLine]:
    """Yield the lines of every tree in the forest, depth first."""
    glyphs = glyphs_for(use_ascii)
    for root in forest:
        yield from _walk(root, glyphs)


def render_tree(forest: Sequence[TreeNode], use_ascii: bool = False) -> str:
    """Render a forest as indented text

    Args:
        forest: Root tree nodes; each is drawn as a separate tree
        use_ascii: Use plain ASCII connectors instead of box-drawing characters

    Returns:
        Newline-terminated lines, or an empty string for an empty forest
    """
    return "".join(
        f"{line.prefix}{format_label(line.name, line.status)}\n" for line in iter_tree_lines(forest, use_ascii)
    )


def render_orphan_section(title: str, orphans: Sequence[TreeNode]) -> str:
    """Render a titled flat list of orphan nodes

    Returns:
        A blank line, "<title>:" and one "  - " line per orphan; an empty
        string when there are no orphans
    """
    if not orphans:
        return ""

    lines = [f"\n{title}:\n"]
    lines.extend(f"  - {format_label(orphan.name, orphan.status)}\n" for orphan in orphans)
    return "".join(lines)
