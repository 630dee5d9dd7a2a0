from .context import EventHub, RenderContext, Timeline, compute_viewport
from .highlight import HighlightEngine
from .search import Debouncer, SearchController, contents_match, search_param
from .sunburst import Sunburst

__all__ = [
    "Debouncer",
    "EventHub",
    "HighlightEngine",
    "RenderContext",
    "SearchController",
    "Sunburst",
    "Timeline",
    "compute_viewport",
    "contents_match",
    "search_param",
]
