"""
Highlight Engine.

Dims every arc, then brings the arcs matching a predicate back to full
opacity. Each call re-evaluates all arcs; there is no incremental state.
"""

import logging
from typing import TYPE_CHECKING, Callable, List

from ..config import DIMMED_OPACITY, FADE_DURATION_MS
from ..layout.partition import PartitionedNode, ancestor_path, ancestors

if TYPE_CHECKING:
    from .sunburst import Sunburst

logger = logging.getLogger(__name__)

NodePredicate = Callable[[PartitionedNode], bool]

FULL_OPACITY = 1.0


class HighlightEngine:
    """Opacity and ancestor-path logic for a :class:`Sunburst`."""

    def __init__(self, sunburst: "Sunburst", dimmed: float = DIMMED_OPACITY):
        self.sunburst = sunburst
        self.dimmed = dimmed

    def highlight_nodes(self, predicate: NodePredicate) -> int:
        """
        Dim all arcs, then fully show those matching ``predicate``.

        Returns:
            The number of matching arcs.
        """
        # An instant highlight replaces any fade still in flight
        self.sunburst.context.timeline.interrupt("fade")
        matched = 0
        for arc in self.sunburst.arcs:
            arc.opacity = self.dimmed
        for arc in self.sunburst.arcs:
            if predicate(arc.node):
                arc.opacity = FULL_OPACITY
                matched += 1
        logger.debug(f"Highlighted {matched}/{len(self.sunburst.arcs)} arcs")
        return matched

    def highlight_ancestor_path(self, node: PartitionedNode) -> List[PartitionedNode]:
        """
        Focus ``node``: breadcrumbs, stats and highlight follow its path.

        The breadcrumb trail and the highlighted arcs cover the node and its
        ancestors (root excluded).

        Returns:
            The ancestors of ``node``, root-first, excluding the root and
            ``node`` itself.
        """
        nodes = self.sunburst.nodes
        path = ancestor_path(nodes, node)
        on_path = {step.index for step in path}

        self.sunburst.update_breadcrumbs(path)
        self.sunburst.update_stats(node)
        self.highlight_nodes(lambda candidate: candidate.index in on_path)
        return ancestors(nodes, node)

    def reset_highlights(self) -> None:
        """Fade every arc back to full opacity and show the stats panel."""
        arcs = list(self.sunburst.arcs)
        start = [arc.opacity for arc in arcs]

        def tick(t: float) -> None:
            for arc, opacity in zip(arcs, start):
                arc.opacity = opacity + (FULL_OPACITY - opacity) * t

        self.sunburst.context.timeline.start("fade", FADE_DURATION_MS, tick)
        self.sunburst.stats.opacity = FULL_OPACITY
