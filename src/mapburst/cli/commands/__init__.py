"""
CLI Commands Package.

Each command is implemented in its own module for maintainability.
"""

from . import build
from . import export
from . import tree

__all__ = [
    "build",
    "export",
    "tree",
]
