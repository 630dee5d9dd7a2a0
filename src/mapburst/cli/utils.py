"""
CLI Utilities - Shared helper functions for command line operations.

This module provides common functionality used across the CLI commands,
including formatted printing, logging setup and source map loading.
"""

import logging
from pathlib import Path
from typing import Optional

import click

from ..core.errors import SourceMapInDifferentFileError
from ..core.types import SourceMap
from ..sourcemap import extract_sourcemap, load_sourcemap

logger = logging.getLogger(__name__)

# Files that already are a source map rather than generated code
MAP_SUFFIXES = {".map", ".json"}


def echo_success(message: str) -> None:
    """
    Print a success message with a green checkmark.

    Args:
        message (str): The message to display.
    """
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_info(message: str) -> None:
    """Print an informational message, dimmed."""
    click.echo(click.style(f"   {message}", dim=True))


def configure_logging(verbose: bool) -> None:
    """Route library logs to stderr; DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(message)s",
        datefmt="[%X]",
    )


def read_sourcemap(path: Path) -> SourceMap:
    """
    Load the source map belonging to ``path``.

    A ``.map``/``.json`` file is read as the map itself. Otherwise the
    inline annotation is extracted; when it points to a separate file,
    that file is read relative to ``path``'s directory.

    Raises:
        MapburstError: Any extraction or validation failure.
    """
    if path.suffix in MAP_SUFFIXES:
        return load_sourcemap(path.read_bytes())

    contents = path.read_text(encoding="utf-8")
    try:
        raw = extract_sourcemap(contents)
    except SourceMapInDifferentFileError as e:
        map_path = (path.parent / e.reference).resolve()
        logger.debug(f"{path.name}: reading external sourcemap {map_path}")
        return load_sourcemap(map_path.read_bytes())
    return load_sourcemap(raw)


def html_output_path(source: Path, directory: Optional[str]) -> Path:
    """``<basename>.html`` next to ``source`` or inside ``directory``."""
    parent = Path(directory) if directory else source.parent
    return parent / f"{source.stem}.html"
