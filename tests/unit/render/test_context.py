"""Unit tests for the rendering context: timeline, events, viewport."""

import pytest

from mapburst.config import MIN_SIZE
from mapburst.render.context import EventHub, RenderContext, Timeline, compute_viewport, ease_cubic_in_out


class TestEasing:
    @pytest.mark.parametrize("t,expected", [(0, 0), (0.25, 0.0625), (0.5, 0.5), (0.75, 0.9375), (1, 1)])
    def test_cubic_in_out(self, t, expected):
        assert ease_cubic_in_out(t) == pytest.approx(expected)


class TestTimeline:
    def test_start_applies_initial_state(self):
        seen = []
        Timeline().start("zoom", 300, seen.append)
        assert seen == [0.0]

    def test_advance_runs_frames(self):
        seen = []
        timeline = Timeline(easing=lambda t: t)
        timeline.start("zoom", 300, seen.append)
        timeline.advance(150)
        assert seen[-1] == pytest.approx(0.5)
        assert timeline.active == ["zoom"]
        assert len(seen) > 2

    def test_flush_completes_and_removes(self):
        seen = []
        timeline = Timeline()
        timeline.start("fade", 500, seen.append)
        timeline.flush()
        assert seen[-1] == 1.0
        assert timeline.active == []

    def test_same_name_supersedes(self):
        first, second = [], []
        timeline = Timeline()
        timeline.start("zoom", 300, first.append)
        timeline.advance(50)
        calls = len(first)
        timeline.start("zoom", 300, second.append)
        timeline.flush()
        assert len(first) == calls
        assert second[-1] == 1.0

    def test_different_names_run_together(self):
        timeline = Timeline()
        timeline.start("zoom", 300, lambda t: None)
        timeline.start("fade", 500, lambda t: None)
        assert sorted(timeline.active) == ["fade", "zoom"]

    def test_interrupt_keeps_last_state(self):
        seen = []
        timeline = Timeline()
        timeline.start("fade", 500, seen.append)
        timeline.advance(100)
        timeline.interrupt("fade")
        last = seen[-1]
        timeline.flush()
        assert seen[-1] == last
        assert 0 < last < 1

    def test_zero_duration_finishes_on_first_step(self):
        seen = []
        timeline = Timeline()
        timeline.start("zoom", 0, seen.append)
        timeline.step(1)
        assert seen == [0.0, 1.0]
        assert timeline.active == []


class TestEventHub:
    def test_emit_calls_handlers_with_args(self):
        hub = EventHub()
        received = []
        hub.on("arc", "click", received.append)
        assert hub.emit("arc", "click", 3) == 1
        assert received == [3]

    def test_emit_without_handlers(self):
        assert EventHub().emit("arc", "click", 0) == 0

    def test_off_drops_all_events_of_target(self):
        hub = EventHub()
        hub.on("arc", "click", lambda i: None)
        hub.on("arc", "mouseover", lambda i: None)
        hub.on("#search", "input", lambda text: None)
        hub.off("arc")
        assert hub.emit("arc", "click", 0) == 0
        assert hub.emit("arc", "mouseover", 0) == 0
        assert hub.emit("#search", "input", "x") == 1


class TestViewport:
    def test_radius_is_half_the_smaller_side(self):
        assert RenderContext(width=800, height=600).radius == 300

    def test_defaults(self):
        context = RenderContext()
        assert context.selector == "#graph"
        assert (context.width, context.height) == (MIN_SIZE, MIN_SIZE)

    def test_height_follows_window(self):
        assert compute_viewport(700, 100) == (960, 600)

    def test_height_is_capped(self):
        assert compute_viewport(2000) == (960, 960)
