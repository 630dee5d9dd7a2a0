from .errors import (
    CannotExtractSourceMapError,
    ConfigError,
    ErrorCode,
    InvalidSourceMapError,
    MapburstError,
    SourceMapHasNoSourcesContentError,
    SourceMapInDifferentFileError,
)
from .types import LeafInfo, SourceMap, TableFn, TreeNode

__all__ = [
    "CannotExtractSourceMapError",
    "ConfigError",
    "ErrorCode",
    "InvalidSourceMapError",
    "LeafInfo",
    "MapburstError",
    "SourceMap",
    "SourceMapHasNoSourcesContentError",
    "SourceMapInDifferentFileError",
    "TableFn",
    "TreeNode",
]
