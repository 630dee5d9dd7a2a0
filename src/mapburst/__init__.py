"""
mapburst - Source Map Sunburst Visualizer.

mapburst turns a JavaScript/CSS source map, with its embedded original
sources, into a self-contained HTML sunburst: one arc per file, sized by
bytes, with breadcrumbs, click-to-zoom and content search.

Key Components:
- sourcemap: Locating, decoding and validating source maps
- tree: Source list to directory/file hierarchy
- layout: Partition layout and arc geometry
- render: Sunburst scene, highlighting and search
- html: The generated page

Usage:
    from mapburst import build_html

    page = build_html(sourcemap, title="app.js")
"""

__version__ = "0.3.0"

from .core.errors import (
    CannotExtractSourceMapError,
    ErrorCode,
    InvalidSourceMapError,
    MapburstError,
    SourceMapHasNoSourcesContentError,
    SourceMapInDifferentFileError,
)
from .core.types import SourceMap, TreeNode
from .html import build_html
from .sourcemap import extract_sourcemap, load_sourcemap
from .tree.builder import build_tree, friendly_bytes

__all__ = [
    "__version__",
    "CannotExtractSourceMapError",
    "ErrorCode",
    "InvalidSourceMapError",
    "MapburstError",
    "SourceMap",
    "SourceMapHasNoSourcesContentError",
    "SourceMapInDifferentFileError",
    "TreeNode",
    "build_html",
    "build_tree",
    "extract_sourcemap",
    "friendly_bytes",
    "load_sourcemap",
]
