"""
Build Command - Generate sunburst pages.

Reads each generated JS/CSS file (or a standalone .map), resolves its
source map, and writes a self-contained HTML visualization.
"""

import logging
import sys
import time
from pathlib import Path
from typing import Optional, Tuple

import click

from ...config import load_config
from ...core.errors import MapburstError
from ...html import build_html, open_visualization
from ..utils import configure_logging, echo_error, echo_info, echo_success, html_output_path, read_sourcemap

logger = logging.getLogger(__name__)


@click.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("-d", "--dir", "directory", default=None, help="Output directory (created if missing)")
@click.option("-t", "--title", default=None, help="Page title (defaults to the map's file entry)")
@click.option("--open", "open_browser", is_flag=True, help="Open the first page in a browser")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Config file (default: ./mapburst.yaml)")
@click.option("-v", "--verbose", is_flag=True, help="Show detailed output")
def build(
    files: Tuple[str, ...],
    directory: Optional[str],
    title: Optional[str],
    open_browser: bool,
    config_path: Optional[str],
    verbose: bool,
):
    """
    Visualize the source maps of FILES as HTML sunbursts.

    \b
    Examples:
      mapburst build dist/app.js            # writes dist/app.html
      mapburst build -d viz dist/*.js       # writes into viz/
    """
    configure_logging(verbose)
    started = time.monotonic()

    try:
        config = load_config(Path(config_path) if config_path else None)
    except MapburstError as e:
        echo_error(str(e))
        sys.exit(1)

    directory = directory or config.directory
    title = title if title is not None else config.title
    open_browser = open_browser or config.open

    if directory:
        Path(directory).mkdir(parents=True, exist_ok=True)

    written = []
    for file in files:
        source = Path(file)
        try:
            sourcemap = read_sourcemap(source)
            page = build_html(sourcemap, title=title)
        except (MapburstError, OSError) as e:
            echo_error(f"{source}: {e}")
            sys.exit(1)

        output = html_output_path(source, directory)
        output.write_text(page, encoding="utf-8")
        written.append(output)
        echo_success(f"Generated: {output}")
        logger.debug(f"{source}: {len(sourcemap.sources)} sources -> {output}")

    if open_browser and written:
        open_visualization(written[0].read_text(encoding="utf-8"), str(written[0]))
    elif written:
        echo_info(f"Open: file://{written[0].absolute()}")

    elapsed_ms = round((time.monotonic() - started) * 1000)
    click.echo(f"Finished in {elapsed_ms}ms", err=True)
