"""Coloured terminal output for dependency trees

Prints the same lines as ``tree.renderer`` with the status label coloured:
UP green, DOWN red, UNREACHABLE yellow. Colour detection (NO_COLOR,
TERM=dumb, piped output) is left to rich in auto mode.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.text import Text

from stackeye_analytics.config import DisplayConfig, TreeConfig
from stackeye_analytics.models import TreeNode
from stackeye_analytics.tree.renderer import iter_tree_lines

STATUS_STYLES: dict[str, str] = {
    "up": "green",
    "down": "red",
    "unreachable": "yellow",
    "degraded": "yellow",
    "paused": "dim",
    "pending": "dim",
}


def status_style(status: str) -> str:
    """Rich style for a status; empty for unknown statuses."""
    return STATUS_STYLES.get(status.lower(), "")


def make_console(config: DisplayConfig | None = None) -> Console:
    """Console honouring the configured colour mode"""
    if config is None:
        config = DisplayConfig.from_env()

    if config.color == "never":
        return Console(color_system=None, highlight=False)
    if config.color == "always":
        return Console(force_terminal=True, highlight=False)
    return Console(highlight=False)


def _label(name: str, status: str) -> Text:
    text = Text(name)
    if status:
        text.append(" [")
        text.append(status.upper(), style=status_style(status))
        text.append("]")
    return text


def print_tree(forest: Sequence[TreeNode], console: Console | None = None, use_ascii: bool | None = None) -> None:
    """Print a forest with coloured status labels

    Args:
        forest: Root tree nodes
        console: Destination console (a new one from the environment if omitted)
        use_ascii: Use ASCII connectors instead of box-drawing characters
            (defaults to STACKEYE_TREE_ASCII)
    """
    if use_ascii is None:
        use_ascii = TreeConfig.from_env().use_ascii
    console = console or make_console()
    for line in iter_tree_lines(forest, use_ascii):
        console.print(Text(line.prefix) + _label(line.name, line.status), soft_wrap=True)


def print_orphan_section(title: str, orphans: Sequence[TreeNode], console: Console | None = None) -> None:
    """Print the orphan section; nothing when there are no orphans."""
    if not orphans:
        return

    console = console or make_console()
    console.print()
    console.print(Text(f"{title}:"), soft_wrap=True)
    for orphan in orphans:
        console.print(Text("  - ") + _label(orphan.name, orphan.status), soft_wrap=True)
