"""
Sunburst Renderer.

Draws one arc per partitioned node, animates click-to-zoom by tweening the
scale domains, and keeps the breadcrumb trail and stats panel in step with
the pointer. The scene is a plain object model that can be serialised to
SVG/HTML markup; all host interaction goes through a :class:`RenderContext`.

Only the two scales (and the color assignment) survive a redraw; arcs,
breadcrumbs and layout are rebuilt by every :meth:`Sunburst.visualize`.
"""

import html
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ..config import (
    BREADCRUMB_HEIGHT,
    BREADCRUMB_SPACING,
    BREADCRUMB_TAIL,
    BREADCRUMB_WIDTH,
    HEADER_OFFSET,
    PALETTE,
    ZOOM_DURATION_MS,
    ZOOMED_INNER_RADIUS,
)
from ..core.types import TreeNode
from ..layout.arc import ArcGeometry, Scales, arc_path, compute_arc
from ..layout.partition import PartitionedNode, partition
from ..layout.scale import interpolate
from .context import RenderContext
from .highlight import HighlightEngine, NodePredicate

logger = logging.getLogger(__name__)

ARC_TARGET = "arc"
WINDOW_TARGET = "window"

KIBI = 1024


def to_size(size: int) -> str:
    """Compact size label used in the stats panel."""
    if size > KIBI:
        return f"{size / KIBI:,.2f}kb"
    return f"{size}b"


class OrdinalColors:
    """Assigns palette colors to names in first-seen order, cycling."""

    def __init__(self, palette: Sequence[str] = PALETTE):
        self.palette = list(palette)
        self._assigned: Dict[str, str] = {}

    def __call__(self, name: str) -> str:
        if name not in self._assigned:
            self._assigned[name] = self.palette[len(self._assigned) % len(self.palette)]
        return self._assigned[name]


@dataclass
class ArcElement:
    node: PartitionedNode
    fill: str
    geometry: ArcGeometry
    path: str
    opacity: float = 1.0

    @property
    def title(self) -> str:
        return f"{self.node.name}\n{self.node.value}"


@dataclass
class Breadcrumb:
    name: str
    depth: int
    node: int
    fill: str
    points: str = ""
    x: float = 0.0

    @property
    def key(self) -> Tuple[str, int]:
        return self.name, self.depth


@dataclass
class StatsPanel:
    opacity: float = 1.0
    html: str = ""


@dataclass
class BreadcrumbTrail:
    crumbs: List[Breadcrumb] = field(default_factory=list)
    visible: bool = False


def breadcrumb_points(position: int) -> str:
    """Chevron polygon; every crumb after the first gets a notch on its left."""
    w, h, tail = BREADCRUMB_WIDTH, BREADCRUMB_HEIGHT, BREADCRUMB_TAIL
    shape = f"0,0 {w},0 {w + tail},{h / 2:g} {w},{h} 0,{h}"
    if position > 0:
        return f"{shape} {tail},{h / 2:g}"
    return shape


class Sunburst:
    """Stateful drawing shell around the pure partition/arc functions."""

    def __init__(self, context: RenderContext, tree: Optional[TreeNode] = None, palette: Sequence[str] = PALETTE):
        self.context = context
        self.radius = context.radius
        self.scales = Scales.for_radius(self.radius)
        self.color = OrdinalColors(palette)
        self.highlighter = HighlightEngine(self)
        self.nodes: List[PartitionedNode] = []
        self.arcs: List[ArcElement] = []
        self.breadcrumbs = BreadcrumbTrail()
        self.stats = StatsPanel()
        self.total_size = 0
        self.tree: Optional[TreeNode] = None
        if tree is not None:
            self.visualize(tree)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------
    def visualize(self, tree: TreeNode) -> None:
        """Clear the mount point and draw ``tree`` from scratch."""
        events = self.context.events
        events.off(self.context.selector)
        events.off(ARC_TARGET)
        events.off(WINDOW_TARGET)

        self.breadcrumbs = BreadcrumbTrail()
        self.stats = StatsPanel()
        self.tree = tree
        self.nodes = partition(tree)
        self.total_size = self.nodes[0].value
        self.arcs = [self._draw_arc(node) for node in self.nodes]

        events.on(ARC_TARGET, "mouseover", self._on_mouseover)
        events.on(ARC_TARGET, "click", self._on_click)
        events.on(self.context.selector, "mouseleave", self.reset_highlights)
        events.on(WINDOW_TARGET, "resize", self._on_resize)
        logger.debug(f"Drew {len(self.arcs)} arcs, total size {self.total_size}")

    def fill_for(self, node: PartitionedNode) -> str:
        """Directories own a color; files take their parent's."""
        if node.has_children or node.parent is None:
            return self.color(node.name)
        return self.color(self.nodes[node.parent].name)

    def _draw_arc(self, node: PartitionedNode) -> ArcElement:
        geometry = compute_arc(node, self.scales)
        return ArcElement(node=node, fill=self.fill_for(node), geometry=geometry, path=arc_path(geometry))

    def redraw_paths(self) -> None:
        for arc in self.arcs:
            arc.geometry = compute_arc(arc.node, self.scales)
            arc.path = arc_path(arc.geometry)

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------
    def _on_mouseover(self, index: int) -> None:
        self.highlight_ancestor_path(self.nodes[index])

    def _on_click(self, index: int) -> None:
        self.zoom_to_node(self.nodes[index])

    def _on_resize(self, *args) -> None:
        # The viewport is fixed at load time; a resize only redraws
        self.visualize(self.tree)

    def zoom_to_node(self, node: PartitionedNode) -> None:
        """
        Animate the scales so ``node`` fills the full circle.

        Every arc path is recomputed on each frame of the transition. A
        second zoom simply supersedes the first.
        """
        x_domain = interpolate(self.scales.x.domain, (node.x0, node.x1))
        y_domain = interpolate(self.scales.y.domain, (node.y0, 1.0))
        y_range = interpolate(self.scales.y.range, (ZOOMED_INNER_RADIUS if node.y0 else 0.0, self.radius))

        def tick(t: float) -> None:
            self.scales.x.domain = x_domain(t)
            self.scales.y.domain = y_domain(t)
            self.scales.y.range = y_range(t)
            self.redraw_paths()

        logger.debug(f"Zooming to {node.name} (depth {node.depth})")
        self.context.timeline.start("zoom", ZOOM_DURATION_MS, tick)

    def highlight_nodes(self, predicate: NodePredicate) -> int:
        return self.highlighter.highlight_nodes(predicate)

    def highlight_ancestor_path(self, node: PartitionedNode) -> List[PartitionedNode]:
        return self.highlighter.highlight_ancestor_path(node)

    def reset_highlights(self) -> None:
        self.highlighter.reset_highlights()

    def update_breadcrumbs(self, sequence: Sequence[PartitionedNode]) -> None:
        """
        Render one chevron per node in ``sequence``, left to right.

        Crumbs are keyed by (name, depth): a crumb whose key is still in the
        sequence is kept and moved, the rest are created or removed.
        """
        existing = {crumb.key: crumb for crumb in self.breadcrumbs.crumbs}
        crumbs: List[Breadcrumb] = []
        for position, node in enumerate(sequence):
            crumb = existing.get((node.name, node.depth))
            if crumb is None:
                crumb = Breadcrumb(
                    name=node.name,
                    depth=node.depth,
                    node=node.index,
                    fill=self.fill_for(node),
                )
            crumb.points = breadcrumb_points(position)
            crumb.x = position * (BREADCRUMB_WIDTH + BREADCRUMB_SPACING)
            crumbs.append(crumb)
        self.breadcrumbs.crumbs = crumbs
        self.breadcrumbs.visible = True

    def update_stats(self, node: PartitionedNode) -> None:
        """Show the side panel for a file or directory."""
        self.stats.opacity = 1.0
        data = node.data
        name = html.escape(data.name)
        if not data.is_file:
            self.stats.html = f"<h2>{name}</h2><em>Directory</em>"
            return

        rows = [
            ("Size", f"{to_size(data.size)} ({to_size(data.size_gzipped or 0)} gz)"),
            ("LOC", f"{data.loc or 0:,}"),
        ]
        rows.extend((str(key), str(value)) for key, value in (data.table or {}).items())
        body = "".join(
            f"<tr><th>{html.escape(key)}</th><td>{html.escape(value)}</td></tr>" for key, value in rows
        )
        self.stats.html = f"<h2>{name}</h2><em>File</em><table>{body}</table>"

    def hide_stats(self) -> None:
        self.stats.opacity = 0.0

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_svg(self) -> str:
        """The current scene as standalone SVG markup."""
        width, height = self.context.width, self.context.height
        svg = ET.Element("svg", {
            "xmlns": "http://www.w3.org/2000/svg",
            "width": f"{width:g}",
            "height": f"{height + HEADER_OFFSET:g}",
        })
        rings = ET.SubElement(svg, "g", {
            "transform": f"translate({width / 2:g},{height / 2 + HEADER_OFFSET:g})",
        })
        for arc in self.arcs:
            path = ET.SubElement(rings, "path", {
                "d": arc.path,
                "style": f"fill: {arc.fill}; opacity: {arc.opacity:g};",
            })
            ET.SubElement(path, "title").text = arc.title

        trail = ET.SubElement(svg, "g", {
            "class": "breadcrumbs",
            "width": f"{width:g}",
            "height": str(BREADCRUMB_HEIGHT),
            "style": "" if self.breadcrumbs.visible else "visibility: hidden;",
        })
        for crumb in self.breadcrumbs.crumbs:
            group = ET.SubElement(trail, "g", {"transform": f"translate({crumb.x:g}, 0)"})
            ET.SubElement(group, "polygon", {"points": crumb.points, "style": f"fill: {crumb.fill};"})
            label = ET.SubElement(group, "text", {
                "x": f"{(BREADCRUMB_WIDTH + BREADCRUMB_TAIL) / 2:g}",
                "y": f"{BREADCRUMB_HEIGHT / 2:g}",
                "dy": "0.35em",
                "text-anchor": "middle",
            })
            label.text = crumb.name
        return ET.tostring(svg, encoding="unicode")

    def stats_html(self) -> str:
        return f'<div id="stats" style="opacity: {self.stats.opacity:g}">{self.stats.html}</div>'

    def render(self) -> str:
        """Markup for the mount point: the SVG followed by the stats panel."""
        return self.to_svg() + self.stats_html()
