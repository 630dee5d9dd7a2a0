"""
Source Map Extraction and Validation.

Finds the ``sourceMappingURL`` annotation in a generated JS/CSS file, decodes
inline base64 maps, and validates that a map carries the original contents
of every source (the visualization cannot be built without them).
"""

import base64
import binascii
import json
import logging
import re
from collections.abc import Mapping
from typing import Any, Dict, Union

from pydantic import ValidationError

from .core.errors import (
    CannotExtractSourceMapError,
    InvalidSourceMapError,
    SourceMapHasNoSourcesContentError,
    SourceMapInDifferentFileError,
)
from .core.types import SourceMap

logger = logging.getLogger(__name__)

# Line (//#) and block (/*# ... */) annotations; the legacy "@" marker is accepted too.
SOURCE_MAP_COMMENT = re.compile(
    r"^(?://|/\*)[#@]\s*sourceMappingURL\s*=\s*(\S+?)\s*(?:\*/)?[ \t]*$",
    re.MULTILINE,
)

INLINE_PRELUDE = re.compile(r"^data:application/json;(?:charset=[^;,]+;)?base64,(.*)$", re.DOTALL)

BytesOrText = Union[str, bytes, bytearray]


def _to_text(code: BytesOrText) -> str:
    if isinstance(code, (bytes, bytearray)):
        return bytes(code).decode("utf-8")
    return code


def find_sourcemap_reference(code: BytesOrText) -> str:
    """
    Return the single sourceMappingURL reference in ``code``.

    Raises:
        CannotExtractSourceMapError: If there is not exactly one annotation.
    """
    references = SOURCE_MAP_COMMENT.findall(_to_text(code))
    if len(references) != 1:
        raise CannotExtractSourceMapError(len(references))
    return references[0]


def extract_sourcemap(code: BytesOrText) -> Dict[str, Any]:
    """
    Extract an inline source map from generated code.

    Args:
        code: Contents of a generated JavaScript or CSS file.

    Returns:
        The decoded source map as a dict. It is not validated; pass it
        through :func:`load_sourcemap` before building a tree.

    Raises:
        CannotExtractSourceMapError: No annotation, or more than one.
        SourceMapInDifferentFileError: The annotation is not an inline data
            URL; ``reference`` holds the text to resolve.
        InvalidSourceMapError: The inline payload is not base64 JSON.
    """
    reference = find_sourcemap_reference(code)
    inline = INLINE_PRELUDE.match(reference)
    if not inline:
        raise SourceMapInDifferentFileError(reference)

    try:
        payload = base64.b64decode(inline.group(1)).decode("utf-8")
        sourcemap = json.loads(payload)
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise InvalidSourceMapError(f"inline sourcemap could not be decoded: {e}", cause=e) from e

    if not isinstance(sourcemap, dict):
        raise InvalidSourceMapError("inline sourcemap is not a JSON object")

    logger.debug(f"Extracted inline sourcemap ({len(payload)} bytes)")
    return sourcemap


def parse_sourcemap(value: Any) -> Dict[str, Any]:
    """
    Coerce a mapping, JSON text or JSON bytes into a plain dict.

    Raises:
        InvalidSourceMapError: If the value is not an object or parseable JSON object.
    """
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (str, bytes, bytearray)):
        try:
            parsed = json.loads(_to_text(value))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise InvalidSourceMapError(cause=e) from e
        if isinstance(parsed, dict):
            return parsed
    raise InvalidSourceMapError()


def load_sourcemap(value: Any) -> SourceMap:
    """
    Parse and validate a source map.

    An already validated :class:`SourceMap` is returned as is.

    Raises:
        InvalidSourceMapError: Not an object or JSON document.
        SourceMapHasNoSourcesContentError: ``sources``/``sourcesContent``
            missing, mismatched, or holding an entry without contents.
    """
    if isinstance(value, SourceMap):
        return value

    data = parse_sourcemap(value)

    sources = data.get("sources")
    contents = data.get("sourcesContent")
    if not isinstance(sources, list) or not isinstance(contents, list) or len(sources) != len(contents):
        raise SourceMapHasNoSourcesContentError()
    if any(entry is None for entry in contents):
        raise SourceMapHasNoSourcesContentError("sourcemap has sources without sourcesContent")

    try:
        return SourceMap.model_validate(data)
    except ValidationError as e:
        raise SourceMapHasNoSourcesContentError(f"sourcemap sources are malformed: {e}") from e
