"""Shared fixtures for mapburst tests."""

import base64
import json

import pytest

from mapburst.core.types import TreeNode
from mapburst.tree.builder import build_tree


def inline_annotation(sourcemap: dict, block: bool = False) -> str:
    """A sourceMappingURL comment carrying ``sourcemap`` as base64 JSON."""
    payload = base64.b64encode(json.dumps(sourcemap).encode("utf-8")).decode("ascii")
    url = f"data:application/json;base64,{payload}"
    return f"/*# sourceMappingURL={url}*/" if block else f"//# sourceMappingURL={url}"


@pytest.fixture
def sourcemap() -> dict:
    """Two files sharing the /foo directory."""
    return {
        "file": "foo.js",
        "sources": ["/foo/bar.js", "/foo/baz.js"],
        "sourcesContent": ["aaa\nbbb", "ccc\nddd"],
    }


@pytest.fixture
def nested_sourcemap() -> dict:
    """
    Sizes chosen so the layout is easy to check by hand:

        /            100
        ├── a         40
        │   ├── x.js  10
        │   └── b     30
        │       └── y.js 30
        └── c.js      60
    """
    return {
        "file": "bundle.js",
        "sources": ["/a/x.js", "/a/b/y.js", "/c.js"],
        "sourcesContent": ["x" * 10, "y" * 30, "z" * 60],
    }


@pytest.fixture
def nested_tree(nested_sourcemap) -> TreeNode:
    return build_tree(nested_sourcemap)


@pytest.fixture
def annotate():
    """Factory for inline sourceMappingURL comments."""
    return inline_annotation
