"""
Visualization Page Builder.

Produces a single self-contained HTML page for a source map:

- The serialized file tree, embedded as a data literal.
- A static SVG snapshot of the sunburst, so the page reads before scripts run.
- A dependency-free client script that takes over the mount point and adds zoom,
  breadcrumbs, the stats panel and debounced content search.
"""

import json
import logging
import re
import webbrowser
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from .config import (
    DEBOUNCE_MS,
    DIMMED_OPACITY,
    FADE_DURATION_MS,
    MIN_SIZE,
    PALETTE,
    PAD_ANGLE,
    ZOOM_DURATION_MS,
    ZOOMED_INNER_RADIUS,
)
from .core.types import TableFn, TreeNode
from .render.context import RenderContext
from .render.sunburst import Sunburst
from .sourcemap import load_sourcemap
from .tree.builder import build_tree as default_build_tree
from .tree.builder import no_extra_rows

logger = logging.getLogger(__name__)

BuildTreeFn = Callable[[Any, TableFn], Any]

DEFAULT_STYLE = """
body {
    margin: 0;
    padding: 16px;
    background: #fafafa;
    color: #171717;
    font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
}

h1 { font-size: 20px; margin: 0 0 12px; }

#search {
    width: 320px;
    padding: 6px 10px;
    border: 1px solid #d4d4d4;
    border-radius: 6px;
    font-family: "SF Mono", "Fira Code", monospace;
}

#graph { position: relative; }

#graph path { stroke: #fff; cursor: pointer; }

#graph text { font-size: 11px; fill: #171717; pointer-events: none; }

#stats {
    position: absolute;
    top: 40px;
    right: 0;
    width: 280px;
    transition: opacity 0.3s;
}

#stats table { border-collapse: collapse; font-size: 12px; }
#stats th { text-align: left; padding-right: 12px; color: #525252; }
#stats td { word-break: break-all; }
"""

DEFAULT_SCRIPT = """
(function () {
  var settings = window.MAPBURST_SETTINGS;
  var SVG_NS = 'http://www.w3.org/2000/svg';
  var TAU = 2 * Math.PI;
  var HALF_PI = Math.PI / 2;
  var EPSILON = 1e-12;
  var KIBI = 1024;

  function toSize(size) {
    if (size > KIBI) {
      return (size / KIBI).toLocaleString(undefined, { minimumFractionDigits: 2, maximumFractionDigits: 2 }) + 'kb';
    }
    return size + 'b';
  }

  function escapeHtml(value) {
    return String(value).replace(/[&<>"']/g, function (c) {
      return { '&': '&amp;', '<': '&lt;', '>': '&gt;', '"': '&quot;', "'": '&#39;' }[c];
    });
  }

  function svgElement(parent, tag, attrs) {
    var el = document.createElementNS(SVG_NS, tag);
    Object.keys(attrs || {}).forEach(function (key) { el.setAttribute(key, attrs[key]); });
    parent.appendChild(el);
    return el;
  }

  // Breadth-first layout; parent/children are indices into the returned list
  function partition(tree) {
    var nodes = [];
    var queue = [{ data: tree, parent: null, depth: 0 }];
    while (queue.length) {
      var item = queue.shift();
      var node = { index: nodes.length, data: item.data, parent: item.parent, depth: item.depth,
        children: [], value: 0, height: 0, x0: 0, x1: 0, y0: 0, y1: 0 };
      nodes.push(node);
      if (item.parent !== null) {
        nodes[item.parent].children.push(node.index);
      }
      (item.data.children || []).forEach(function (child) {
        queue.push({ data: child, parent: node.index, depth: item.depth + 1 });
      });
    }
    for (var i = nodes.length - 1; i >= 0; i--) {
      var n = nodes[i];
      n.value = n.data.size || 0;
      n.children.forEach(function (c) {
        n.value += nodes[c].value;
        n.height = Math.max(n.height, nodes[c].height + 1);
      });
    }
    var rings = nodes[0].height + 1;
    nodes[0].x1 = 1;
    nodes[0].y1 = 1 / rings;
    nodes.forEach(function (parent) {
      var k = parent.value ? (parent.x1 - parent.x0) / parent.value : 0;
      var x = parent.x0;
      parent.children.forEach(function (c) {
        var child = nodes[c];
        child.x0 = x;
        x += child.value * k;
        child.x1 = x;
        child.y0 = child.depth / rings;
        child.y1 = (child.depth + 1) / rings;
      });
    });
    return nodes;
  }

  function Scale(range, transform) {
    this.domain = [0, 1];
    this.range = range;
    this.transform = transform || function (v) { return v; };
  }

  Scale.prototype.map = function (value) {
    var d0 = this.transform(this.domain[0]);
    var d1 = this.transform(this.domain[1]);
    if (d1 === d0) {
      return (this.range[0] + this.range[1]) / 2;
    }
    return this.range[0] + (this.range[1] - this.range[0]) * (this.transform(value) - d0) / (d1 - d0);
  };

  function sqrt(v) { return v < 0 ? -Math.sqrt(-v) : Math.sqrt(v); }

  function interpolate(a, b) {
    return function (t) { return [a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t]; };
  }

  function easeCubicInOut(t) {
    t *= 2;
    if (t <= 1) {
      return t * t * t / 2;
    }
    t -= 2;
    return (t * t * t + 2) / 2;
  }

  function asin(v) { return v >= 1 ? HALF_PI : v <= -1 ? -HALF_PI : Math.asin(v); }

  function PathBuilder() { this.parts = []; this.started = false; this.last = [0, 0]; }

  PathBuilder.prototype.moveTo = function (x, y) {
    this.parts.push('M' + x + ',' + y);
    this.started = true;
    this.last = [x, y];
  };

  PathBuilder.prototype.lineTo = function (x, y) {
    this.parts.push('L' + x + ',' + y);
    this.last = [x, y];
  };

  PathBuilder.prototype.arc = function (r, a0, a1, ccw) {
    var dx = r * Math.cos(a0), dy = r * Math.sin(a0);
    var sweep = ccw ? 0 : 1;
    var da = ccw ? a0 - a1 : a1 - a0;
    if (!this.started) {
      this.moveTo(dx, dy);
    } else if (Math.abs(this.last[0] - dx) > EPSILON || Math.abs(this.last[1] - dy) > EPSILON) {
      this.lineTo(dx, dy);
    }
    if (!r) {
      return;
    }
    if (da < 0) {
      da = da % TAU + TAU;
    }
    if (da > TAU - EPSILON) {
      this.parts.push('A' + r + ',' + r + ',0,1,' + sweep + ',' + (-dx) + ',' + (-dy));
      this.parts.push('A' + r + ',' + r + ',0,1,' + sweep + ',' + dx + ',' + dy);
      this.last = [dx, dy];
    } else if (da > EPSILON) {
      var x1 = r * Math.cos(a1), y1 = r * Math.sin(a1);
      this.parts.push('A' + r + ',' + r + ',0,' + (da >= Math.PI ? 1 : 0) + ',' + sweep + ',' + x1 + ',' + y1);
      this.last = [x1, y1];
    }
  };

  PathBuilder.prototype.close = function () { return this.parts.join('') + 'Z'; };

  function arcPath(startAngle, endAngle, r0, r1, padAngle) {
    if (r1 < r0) {
      var swap = r0; r0 = r1; r1 = swap;
    }
    var a0 = startAngle - HALF_PI, a1 = endAngle - HALF_PI;
    var da = Math.abs(a1 - a0);
    var cw = a1 > a0;
    var path = new PathBuilder();
    if (!(r1 > EPSILON)) {
      path.moveTo(0, 0);
      return path.close();
    }
    if (da > TAU - EPSILON) {
      path.moveTo(r1 * Math.cos(a0), r1 * Math.sin(a0));
      path.arc(r1, a0, a1, !cw);
      if (r0 > EPSILON) {
        path.moveTo(r0 * Math.cos(a1), r0 * Math.sin(a1));
        path.arc(r0, a1, a0, cw);
      }
      return path.close();
    }
    var a00 = a0, a01 = a0, a10 = a1, a11 = a1, da0 = da, da1 = da;
    var ap = padAngle / 2;
    var rp = ap > EPSILON ? Math.sqrt(r0 * r0 + r1 * r1) : 0;
    if (rp > EPSILON) {
      var dir = cw ? 1 : -1;
      var p0 = r0 > EPSILON ? asin(rp / r0 * Math.sin(ap)) : HALF_PI;
      var p1 = asin(rp / r1 * Math.sin(ap));
      da0 -= p0 * 2;
      if (da0 > EPSILON) { a00 += p0 * dir; a10 -= p0 * dir; } else { da0 = 0; a00 = a10 = (a0 + a1) / 2; }
      da1 -= p1 * 2;
      if (da1 > EPSILON) { a01 += p1 * dir; a11 -= p1 * dir; } else { da1 = 0; a01 = a11 = (a0 + a1) / 2; }
    }
    path.moveTo(r1 * Math.cos(a01), r1 * Math.sin(a01));
    if (da1 > EPSILON) {
      path.arc(r1, a01, a11, !cw);
    }
    if (!(r0 > EPSILON) || !(da0 > EPSILON)) {
      path.lineTo(r0 * Math.cos(a10), r0 * Math.sin(a10));
    } else {
      path.arc(r0, a10, a00, cw);
    }
    return path.close();
  }

  // Named transitions driven by animation frames; a same-name start supersedes
  function Timeline() { this.running = {}; }

  Timeline.prototype.start = function (name, duration, tick) {
    var self = this;
    var token = {};
    this.running[name] = token;
    var started = null;
    tick(0);
    function frame(now) {
      if (self.running[name] !== token) {
        return;
      }
      if (started === null) {
        started = now;
      }
      var progress = duration ? Math.min(1, (now - started) / duration) : 1;
      tick(easeCubicInOut(progress));
      if (progress < 1) {
        window.requestAnimationFrame(frame);
      } else {
        delete self.running[name];
      }
    }
    window.requestAnimationFrame(frame);
  };

  Timeline.prototype.interrupt = function (name) { delete this.running[name]; };

  function Sunburst(options, tree) {
    this.selector = options.selector;
    this.width = options.width;
    this.height = options.height;
    this.radius = Math.min(this.width, this.height) / 2;
    this.scaleX = new Scale([0, TAU]);
    this.scaleY = new Scale([0, this.radius], sqrt);
    this.colors = {};
    this.timeline = new Timeline();
    if (tree) {
      this.visualize(tree);
    }
  }

  Sunburst.prototype.color = function (name) {
    if (!(name in this.colors)) {
      this.colors[name] = settings.palette[Object.keys(this.colors).length % settings.palette.length];
    }
    return this.colors[name];
  };

  Sunburst.prototype.fill = function (node) {
    var owner = node.children.length || node.parent === null ? node : this.nodes[node.parent];
    return this.color(owner.data.name);
  };

  Sunburst.prototype.arcFor = function (node) {
    var clamp = function (a) { return Math.max(0, Math.min(TAU, a)); };
    return arcPath(
      clamp(this.scaleX.map(node.x0)),
      clamp(this.scaleX.map(node.x1)),
      Math.max(0, this.scaleY.map(node.y0)),
      Math.max(0, this.scaleY.map(node.y1) - 1),
      settings.padAngle
    );
  };

  Sunburst.prototype.visualize = function (tree) {
    var self = this;
    var mount = document.querySelector(this.selector);
    mount.innerHTML = '';
    var svg = svgElement(mount, 'svg', { width: this.width, height: this.height + 30 });
    var rings = svgElement(svg, 'g', {
      transform: 'translate(' + this.width / 2 + ',' + (this.height / 2 + 30) + ')'
    });
    this.breadcrumbs = svgElement(svg, 'g', { 'class': 'breadcrumbs', style: 'visibility: hidden;' });
    this.crumbs = [];
    this.stats = document.createElement('div');
    this.stats.id = 'stats';
    mount.appendChild(this.stats);

    this.nodes = partition(tree);
    this.paths = this.nodes.map(function (node) {
      var path = svgElement(rings, 'path', { d: self.arcFor(node) });
      path.style.fill = self.fill(node);
      path.addEventListener('mouseover', function () { self.highlightNode(node); });
      path.addEventListener('click', function () { self.zoomToNode(node); });
      svgElement(path, 'title').textContent = node.data.name + '\\n' + node.value;
      return path;
    });
    if (!this.boundLeave) {
      mount.addEventListener('mouseleave', function () { self.resetHighlights(); });
      this.boundLeave = true;
    }
  };

  Sunburst.prototype.redraw = function () {
    var self = this;
    this.paths.forEach(function (path, i) { path.setAttribute('d', self.arcFor(self.nodes[i])); });
  };

  Sunburst.prototype.zoomToNode = function (node) {
    var self = this;
    var xd = interpolate(this.scaleX.domain, [node.x0, node.x1]);
    var yd = interpolate(this.scaleY.domain, [node.y0, 1]);
    var yr = interpolate(this.scaleY.range, [node.y0 ? settings.zoomedInnerRadius : 0, this.radius]);
    this.timeline.start('zoom', settings.zoomDuration, function (t) {
      self.scaleX.domain = xd(t);
      self.scaleY.domain = yd(t);
      self.scaleY.range = yr(t);
      self.redraw();
    });
  };

  Sunburst.prototype.highlightNodes = function (shouldHighlight) {
    var self = this;
    this.timeline.interrupt('fade');
    this.paths.forEach(function (path, i) {
      path.style.opacity = shouldHighlight(self.nodes[i]) ? 1 : settings.dimmedOpacity;
    });
  };

  Sunburst.prototype.highlightNode = function (node) {
    var sequence = [];
    for (var n = node; n.parent !== null; n = this.nodes[n.parent]) {
      sequence.unshift(n);
    }
    this.updateBreadcrumbs(sequence);
    this.updateStats(node);
    this.highlightNodes(function (candidate) { return sequence.indexOf(candidate) >= 0; });
  };

  Sunburst.prototype.resetHighlights = function () {
    var paths = this.paths;
    var start = paths.map(function (path) { return Number(path.style.opacity || 1); });
    this.timeline.start('fade', settings.fadeDuration, function (t) {
      paths.forEach(function (path, i) { path.style.opacity = start[i] + (1 - start[i]) * t; });
    });
    this.stats.style.opacity = '1';
  };

  Sunburst.prototype.hideStats = function () {
    this.stats.style.opacity = '0';
  };

  Sunburst.prototype.updateStats = function (node) {
    var data = node.data;
    this.stats.style.opacity = '1';
    if (!('size' in data)) {
      this.stats.innerHTML = '<h2>' + escapeHtml(data.name) + '</h2><em>Directory</em>';
      return;
    }
    var rows = '<tr><th>Size</th><td>' + toSize(data.size) + ' (' + toSize(data.sizeGzipped || 0) + ' gz)</td></tr>' +
      '<tr><th>LOC</th><td>' + (data.loc || 0).toLocaleString() + '</td></tr>';
    Object.keys(data.table || {}).forEach(function (key) {
      rows += '<tr><th>' + escapeHtml(key) + '</th><td>' + escapeHtml(data.table[key]) + '</td></tr>';
    });
    this.stats.innerHTML = '<h2>' + escapeHtml(data.name) + '</h2><em>File</em><table>' + rows + '</table>';
  };

  Sunburst.prototype.updateBreadcrumbs = function (sequence) {
    var self = this;
    var width = 100, height = 20, tail = 10, spacing = 3;
    var shape = '0,0 ' + width + ',0 ' + (width + tail) + ',' + height / 2 + ' ' + width + ',' + height + ' 0,' + height;
    var existing = {};
    this.crumbs.forEach(function (crumb) { existing[crumb.key] = crumb; });
    var kept = {};
    this.crumbs = sequence.map(function (node, i) {
      var key = node.data.name + '@' + node.depth;
      var crumb = existing[key];
      if (!crumb) {
        var group = svgElement(self.breadcrumbs, 'g');
        var polygon = svgElement(group, 'polygon');
        polygon.style.fill = self.fill(node);
        svgElement(group, 'text', {
          x: (width + tail) / 2, y: height / 2, dy: '0.35em', 'text-anchor': 'middle'
        }).textContent = node.data.name;
        crumb = { key: key, group: group, polygon: polygon };
      }
      crumb.polygon.setAttribute('points', i > 0 ? shape + ' ' + tail + ',' + height / 2 : shape);
      crumb.group.setAttribute('transform', 'translate(' + i * (width + spacing) + ', 0)');
      kept[key] = true;
      return crumb;
    });
    Object.keys(existing).forEach(function (key) {
      if (!kept[key]) {
        existing[key].group.remove();
      }
    });
    this.breadcrumbs.style.visibility = '';
  };

  function defaultFilter(node, input) {
    return Boolean(node.data && node.data.contents && new RegExp(input).test(node.data.contents));
  }

  document.addEventListener('DOMContentLoaded', function () {
    var params = new URLSearchParams(window.location.search || window.location.hash.slice(1));
    if (!params.get('search')) {
      params = new URLSearchParams(window.location.hash.slice(1));
    }
    var header = document.body ? document.body.clientHeight : 0;
    var height = Math.min(window.innerHeight - header, settings.minSize);
    var graph = new Sunburst({ selector: '#graph', width: settings.minSize, height: height }, window.data);
    window.addEventListener('resize', function () { graph.visualize(window.data); });

    var filterFunction = window.filterFunction || defaultFilter;
    var searchInput = document.getElementById('search');
    if (!(searchInput instanceof HTMLInputElement)) {
      return;
    }
    var lastAccepted = null;
    function searchGraph() {
      var now = Date.now();
      if (lastAccepted !== null && now - lastAccepted < settings.debounce) {
        return;
      }
      lastAccepted = now;
      graph.hideStats();
      graph.updateBreadcrumbs([]);
      var matcher;
      try {
        matcher = function (node) { return filterFunction(node, searchInput.value); };
        if (filterFunction === defaultFilter) {
          new RegExp(searchInput.value);
        }
      } catch (patternError) {
        matcher = function () { return false; };
      }
      graph.highlightNodes(matcher);
    }
    if (params.get('search')) {
      searchInput.value = params.get('search');
      searchGraph();
    }
    searchInput.addEventListener('input', searchGraph);
  });
})();
"""

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>__TITLE__</title>
    <style>__STYLE__</style>
</head>
<body>
    <h1>__TITLE__</h1>
    <input id="search" type="search" placeholder="Search file contents (regex)" autocomplete="off">
    <div id="graph">__SNAPSHOT__</div>
    <script type="text/javascript">
        window.MAPBURST_SETTINGS = __SETTINGS__;
        __SCRIPT__
        ;;
        var data = (__TREE_DATA__)
    </script>
</body>
</html>
"""

PLACEHOLDER = re.compile(r"__(TITLE|STYLE|SNAPSHOT|SETTINGS|SCRIPT|TREE_DATA)__")


def client_settings() -> Dict[str, Any]:
    """Constants shared between the Python renderer and the browser client."""
    return {
        "palette": PALETTE,
        "minSize": MIN_SIZE,
        "debounce": DEBOUNCE_MS,
        "zoomDuration": ZOOM_DURATION_MS,
        "fadeDuration": FADE_DURATION_MS,
        "dimmedOpacity": DIMMED_OPACITY,
        "padAngle": PAD_ANGLE,
        "zoomedInnerRadius": ZOOMED_INNER_RADIUS,
    }


def _script_json(value: Any, indent: Optional[int] = None) -> str:
    # "</" would end the surrounding <script> element early
    return json.dumps(value, indent=indent).replace("</", "<\\/")


def _escape_text(value: str) -> str:
    return value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def build_html(
    sourcemap: Any,
    *,
    title: str = "",
    script: Optional[str] = None,
    style: Optional[str] = None,
    build_tree: BuildTreeFn = default_build_tree,
    table: TableFn = no_extra_rows,
) -> str:
    """
    Generate the visualization page for a source map.

    Args:
        sourcemap: Mapping, JSON text or JSON bytes.
        title: Page title; defaults to the map's ``file`` entry.
        script: Client script; defaults to the built-in client.
        style: Stylesheet; defaults to the built-in one.
        build_tree: Called as ``build_tree(sourcemap, table)``; its
            JSON-serializable result is embedded as ``data``.
        table: Extra stats rows per file, see :func:`mapburst.tree.build_tree`.

    Raises:
        InvalidSourceMapError: ``sourcemap`` is not a parseable object.
        SourceMapHasNoSourcesContentError: contents are missing or misaligned.
    """
    parsed = load_sourcemap(sourcemap)
    tree = build_tree(parsed, table)

    snapshot = ""
    if isinstance(tree, TreeNode):
        snapshot = Sunburst(RenderContext(), tree).render()
        tree_data = tree.to_dict()
    else:
        tree_data = tree

    page_title = _escape_text(title or parsed.file or "")
    values = {
        "TITLE": page_title,
        "STYLE": DEFAULT_STYLE if style is None else style,
        "SNAPSHOT": snapshot,
        "SETTINGS": _script_json(client_settings()),
        "SCRIPT": DEFAULT_SCRIPT if script is None else script,
        "TREE_DATA": _script_json(tree_data, indent=2),
    }
    # Single pass, so placeholder-like text inside values is left alone
    return PLACEHOLDER.sub(lambda match: values[match.group(1)], HTML_TEMPLATE)


def open_visualization(html_content: str, output_path: str = "sourcemap.html") -> str:
    """
    Write the page and open it in the browser.
    """
    out_file = Path(output_path)
    out_file.write_text(html_content, encoding="utf-8")

    webbrowser.open(out_file.resolve().as_uri())

    return str(out_file)
