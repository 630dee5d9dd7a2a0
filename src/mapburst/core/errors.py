"""
Error kinds for source map handling.

Every failure is fail-fast: raised to the caller, never retried. Each error
carries a stable ``code`` so callers can branch on the kind without relying
on the message text.
"""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Stable identifiers for each failure kind."""
    CANNOT_EXTRACT_SOURCEMAP = "CANNOT_EXTRACT_SOURCEMAP"
    SOURCEMAP_IN_DIFFERENT_FILE = "SOURCEMAP_IN_DIFFERENT_FILE"
    INVALID_SOURCEMAP = "INVALID_SOURCEMAP"
    SOURCEMAP_HAS_NO_SOURCESCONTENT = "SOURCEMAP_HAS_NO_SOURCESCONTENT"
    INVALID_CONFIG = "INVALID_CONFIG"


class MapburstError(Exception):
    """Base class for all mapburst errors."""
    code: ErrorCode


class CannotExtractSourceMapError(MapburstError):
    """
    Raised when a file holds zero, or more than one, sourceMappingURL comment.

    Attributes:
        matches: Number of comments found.
    """
    code = ErrorCode.CANNOT_EXTRACT_SOURCEMAP

    def __init__(self, matches: int):
        self.matches = matches
        amount = "no" if matches == 0 else "too many"
        super().__init__(f"Saw {amount} sourceMappingURL comments ({matches} found)")


class SourceMapInDifferentFileError(MapburstError):
    """
    Raised when the sourceMappingURL points at a separate file.

    The caller is expected to resolve ``reference`` itself (usually relative
    to the generated file) and load the map from there.
    """
    code = ErrorCode.SOURCEMAP_IN_DIFFERENT_FILE

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(f"sourceMappingURL points to a different file: {reference}")


class InvalidSourceMapError(MapburstError, TypeError):
    """Raised when the supplied value is not a parseable source map object."""
    code = ErrorCode.INVALID_SOURCEMAP

    def __init__(self, message: str = "sourcemap must be a mapping or a JSON document", cause: Any = None):
        self.cause = cause
        super().__init__(message)


class SourceMapHasNoSourcesContentError(MapburstError, TypeError):
    """Raised when sources/sourcesContent are missing or not index-aligned."""
    code = ErrorCode.SOURCEMAP_HAS_NO_SOURCESCONTENT

    def __init__(self, message: str = "sourcemap does not contain sourcesContent"):
        super().__init__(message)


class ConfigError(MapburstError):
    """Raised when a mapburst.yaml file cannot be read or validated."""
    code = ErrorCode.INVALID_CONFIG
