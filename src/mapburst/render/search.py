"""
Search Controller.

Turns text typed into the search box into a highlight over file contents.
Input is debounced on the leading edge: an event is accepted only if the
interval has elapsed since the last *accepted* event, so a burst of
keystrokes applies the first one and ignores the rest of the burst.
"""

import logging
import re
import time
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import parse_qs, urlsplit

from ..config import DEBOUNCE_MS
from ..layout.partition import PartitionedNode
from .sunburst import Sunburst

logger = logging.getLogger(__name__)

SearchPredicate = Callable[[PartitionedNode, str], bool]
Clock = Callable[[], float]

SEARCH_TARGET = "#search"


def monotonic_ms() -> float:
    return time.monotonic() * 1000


@dataclass
class Debouncer:
    """Leading-edge gate: ``{last_accepted_at}`` plus a fixed interval."""
    interval: float = DEBOUNCE_MS
    last_accepted_at: Optional[float] = None

    def accept(self, now: float) -> bool:
        if self.last_accepted_at is not None and now - self.last_accepted_at < self.interval:
            return False
        self.last_accepted_at = now
        return True


def contents_match(node: PartitionedNode, text: str) -> bool:
    """Case-sensitive regex search over a file's contents; directories never match."""
    contents = node.data.contents
    if not contents:
        return False
    return re.search(text, contents) is not None


def search_param(url: str) -> Optional[str]:
    """The ``search`` parameter of a page URL, from its query or its fragment."""
    parts = urlsplit(url)
    for params in (parts.query, parts.fragment):
        values = parse_qs(params).get("search")
        if values and values[0]:
            return values[0]
    return None


class SearchController:
    """Debounced search box bound to a :class:`Sunburst`."""

    def __init__(
        self,
        sunburst: Sunburst,
        predicate: Optional[SearchPredicate] = None,
        clock: Clock = monotonic_ms,
        interval: float = DEBOUNCE_MS,
    ):
        self.sunburst = sunburst
        self.predicate = predicate
        self.clock = clock
        self.debouncer = Debouncer(interval=interval)
        self.value = ""

    def bind(self) -> None:
        """Listen for ``input`` events on the search box."""
        self.sunburst.context.events.on(SEARCH_TARGET, "input", self.search)

    def load(self, url: str) -> bool:
        """Pre-fill and run the search named in the page URL, if any."""
        initial = search_param(url)
        if initial is None:
            return False
        return self.search(initial)

    def search(self, text: str) -> bool:
        """
        Apply ``text`` unless it arrives inside the debounce window.

        Returns:
            True if the input was accepted.
        """
        self.value = text
        if not self.debouncer.accept(self.clock()):
            logger.debug(f"Search '{text}' ignored (debounced)")
            return False

        self.sunburst.hide_stats()
        self.sunburst.update_breadcrumbs([])
        matched = self.sunburst.highlight_nodes(self._build_predicate(text))
        logger.debug(f"Search '{text}' matched {matched} arcs")
        return True

    def _build_predicate(self, text: str) -> Callable[[PartitionedNode], bool]:
        predicate = self.predicate or contents_match
        if self.predicate is None:
            try:
                re.compile(text)
            except re.error as e:
                # Nothing matches an invalid pattern; every arc is dimmed
                logger.warning(f"Invalid search pattern '{text}': {e}")
                return lambda node: False

        return lambda node: bool(predicate(node, text))
