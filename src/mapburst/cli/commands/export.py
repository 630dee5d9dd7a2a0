"""
JSON Command - Export the serialized file tree.

Emits exactly the data literal embedded in the HTML page, for editors and
other tooling that want to draw their own view.
"""

import json
import sys
from pathlib import Path
from typing import Optional

import click

from ...core.errors import MapburstError
from ...tree.builder import build_tree
from ..utils import configure_logging, echo_error, echo_success, read_sourcemap


@click.command("json")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", default=None, help="Write to this file instead of stdout")
@click.option("--no-contents", is_flag=True, help="Drop file contents from the output")
@click.option("-v", "--verbose", is_flag=True, help="Show detailed output")
def export_json(file: str, output: Optional[str], no_contents: bool, verbose: bool):
    """
    Print the file tree of FILE's source map as JSON.
    """
    configure_logging(verbose)
    try:
        root = build_tree(read_sourcemap(Path(file)))
    except (MapburstError, OSError) as e:
        echo_error(str(e))
        sys.exit(1)

    if no_contents:
        for node in root.files():
            node.contents = None

    content = json.dumps(root.to_dict(), indent=2)
    if output is None:
        click.echo(content)
        return

    Path(output).write_text(content, encoding="utf-8")
    echo_success(f"Generated: {output}")
