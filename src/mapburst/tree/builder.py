"""
Tree Builder - Source map to directory/file hierarchy.

Turns the flat, index-aligned ``sources``/``sourcesContent`` lists of a
source map into a nested tree rooted at ``/``. Each file leaf is annotated
with its byte size, deflated size, line count and a display table.
"""

import logging
import re
import zlib
from typing import Any, Dict, List, Union
from urllib.parse import urlsplit

from ..core.types import LeafInfo, SourceMap, TableFn, TreeNode

logger = logging.getLogger(__name__)

GIGABYTES = 1024 ** 3
MEGABYTES = 1024 ** 2
KILOBYTES = 1024

URL_AUTHORITY = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:(?://[^/?#]*)?")
URL_SUFFIX = re.compile(r"[?#]")


def friendly_bytes(size: int) -> str:
    """
    Format a byte count for display.

    Examples:
        >>> friendly_bytes(7)
        '7 b'
        >>> friendly_bytes(1536)
        '1.50 kb'
    """
    if size > GIGABYTES:
        return f"{size / GIGABYTES:.2f} gb"
    if size > MEGABYTES:
        return f"{size / MEGABYTES:.2f} mb"
    if size > KILOBYTES:
        return f"{size / KILOBYTES:.2f} kb"
    return f"{size} b"


def no_extra_rows(leaf: LeafInfo) -> Dict[str, Any]:
    return {}


def url_path(source: str) -> str:
    """The path component of a source URL, without query or fragment."""
    try:
        return urlsplit(source).path
    except ValueError:
        # Bracketed hosts that are not IPv6 literals, e.g. webpack://[name]/
        path = URL_AUTHORITY.sub("", source, count=1)
        return URL_SUFFIX.split(path, maxsplit=1)[0]


def path_segments(source: str) -> List[str]:
    """Split the URL path of a source entry into non-empty segments."""
    return [part for part in url_path(source).split("/") if part]


def measure(contents: str) -> tuple[int, int, int]:
    """Return (size, deflated size, line count) of a source file."""
    raw = contents.encode("utf-8")
    return len(raw), len(zlib.compress(raw)), len(contents.split("\n"))


def build_tree(
    sourcemap: Union[SourceMap, Dict[str, Any]],
    table: TableFn = no_extra_rows,
) -> TreeNode:
    """
    Build the file tree of a source map.

    Args:
        sourcemap: A validated :class:`SourceMap` or a raw dict with
            ``sources`` and ``sourcesContent``. Length agreement is checked
            upstream by :func:`mapburst.sourcemap.load_sourcemap`.
        table: Called once per source with its :class:`LeafInfo`; the
            returned rows are merged into the leaf's table after the
            ``Name`` and ``Size`` defaults (and may override them).

    Returns:
        The root node, named ``/``.
    """
    if not isinstance(sourcemap, SourceMap):
        sourcemap = SourceMap.model_validate(sourcemap)

    root = TreeNode(name="/")
    for source, contents in sourcemap.entries():
        segments = path_segments(source)
        if not segments:
            # The root stays a directory; a pathless source has no leaf to land on
            logger.warning(f"Skipping source without a file path: {source!r}")
            continue

        node = root
        for part in segments:
            child = node.child(part)
            if child is None:
                child = TreeNode(name=part)
                node.children.append(child)
            node = child

        size, size_gzipped, loc = measure(contents)
        rows: Dict[str, Any] = {
            "Name": source,
            "Size": f"{friendly_bytes(size)} ({friendly_bytes(size_gzipped)} gz)",
        }
        rows.update(table(LeafInfo(
            name=source,
            contents=contents,
            size=size,
            sizeGzipped=size_gzipped,
            loc=loc,
        )))

        # Last write wins when two sources resolve to the same leaf
        node.size = size
        node.size_gzipped = size_gzipped
        node.loc = loc
        node.contents = contents
        node.table = rows

    logger.debug(f"Built tree from {len(sourcemap.sources)} sources")
    return root
