"""
Tree Command - Inspect the file tree of a source map.

Usage:
    mapburst tree dist/app.js             # Show the tree with sizes
    mapburst tree dist/app.js --depth 2   # Only the top two levels
"""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from ...core.errors import MapburstError
from ...core.types import TreeNode
from ...layout.partition import partition
from ...tree.builder import build_tree, friendly_bytes
from ..utils import configure_logging, echo_error, read_sourcemap

console = Console()


def _label(node: TreeNode, value: int) -> str:
    if node.is_file:
        return f"{escape(node.name)} [dim]{friendly_bytes(node.size)} · {node.loc} loc[/dim]"
    return f"[bold cyan]{escape(node.name)}[/bold cyan] [dim]{friendly_bytes(value)}[/dim]"


def render_tree(root: TreeNode, depth: Optional[int] = None) -> Tree:
    """Build a rich tree; directories show their aggregated size."""
    nodes = partition(root)
    branches = {0: Tree(_label(root, nodes[0].value))}
    for node in nodes[1:]:
        if depth is not None and node.depth > depth:
            continue
        branches[node.index] = branches[node.parent].add(_label(node.data, node.value))
    return branches[0]


@click.command("tree")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--depth", type=click.IntRange(min=1), default=None, help="Maximum depth to display")
@click.option("-v", "--verbose", is_flag=True, help="Show detailed output")
def tree(file: str, depth: Optional[int], verbose: bool):
    """
    Show the files embedded in FILE's source map.
    """
    configure_logging(verbose)
    try:
        root = build_tree(read_sourcemap(Path(file)))
    except (MapburstError, OSError) as e:
        echo_error(str(e))
        sys.exit(1)

    console.print(render_tree(root, depth))
