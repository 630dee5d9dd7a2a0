from .builder import build_tree, friendly_bytes, path_segments

__all__ = ["build_tree", "friendly_bytes", "path_segments"]
