"""
Rendering Context.

Everything the sunburst needs from its host is passed in explicitly: the
mount selector, the viewport, a timeline that drives transitions, and an
event hub for pointer/input events. Nothing is read from ambient globals.

Transitions are fire-and-forget. Starting a transition under a name that is
already running replaces it; nothing is awaited.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Tuple

from ..config import FRAMES_PER_SECOND, MIN_SIZE

logger = logging.getLogger(__name__)

Tick = Callable[[float], None]
Handler = Callable[..., None]


def ease_cubic_in_out(t: float) -> float:
    t *= 2
    if t <= 1:
        return t * t * t / 2
    t -= 2
    return (t * t * t + 2) / 2


@dataclass
class Transition:
    name: str
    duration: float
    tick: Tick
    elapsed: float = 0.0

    @property
    def done(self) -> bool:
        return self.elapsed >= self.duration


class Timeline:
    """
    Deterministic animation clock.

    The host advances it (one animation frame at a time in a browser-like
    loop, or in bulk in tests); every running transition recomputes its
    state on each frame.
    """

    def __init__(self, fps: int = FRAMES_PER_SECOND, easing: Callable[[float], float] = ease_cubic_in_out):
        self.frame_ms = 1000.0 / fps
        self.easing = easing
        self._running: Dict[str, Transition] = {}

    @property
    def active(self) -> List[str]:
        return list(self._running)

    def start(self, name: str, duration: float, tick: Tick) -> Transition:
        """Schedule ``tick(t)`` for t in (0, 1] over ``duration`` ms."""
        if name in self._running:
            logger.debug(f"Transition '{name}' superseded")
        transition = Transition(name=name, duration=max(duration, 0.0), tick=tick)
        self._running[name] = transition
        tick(0.0)
        return transition

    def interrupt(self, name: str) -> None:
        """Drop a running transition, leaving its last computed state."""
        self._running.pop(name, None)

    def step(self, ms: float) -> None:
        for name, transition in list(self._running.items()):
            transition.elapsed = min(transition.elapsed + ms, transition.duration)
            progress = transition.elapsed / transition.duration if transition.duration else 1.0
            transition.tick(self.easing(progress))
            if transition.done and self._running.get(name) is transition:
                del self._running[name]

    def advance(self, ms: float) -> None:
        """Run whole frames covering ``ms`` milliseconds."""
        remaining = ms
        while remaining > 0 and self._running:
            frame = min(self.frame_ms, remaining)
            self.step(frame)
            remaining -= frame

    def flush(self) -> None:
        """Run every transition to completion."""
        while self._running:
            self.step(self.frame_ms)


class EventHub:
    """Minimal subscribe/emit registry keyed by (target, event)."""

    def __init__(self):
        self._handlers: Dict[Tuple[str, str], List[Handler]] = defaultdict(list)

    def on(self, target: str, event: str, handler: Handler) -> None:
        self._handlers[(target, event)].append(handler)

    def off(self, target: str) -> None:
        for key in [key for key in self._handlers if key[0] == target]:
            del self._handlers[key]

    def emit(self, target: str, event: str, *args: Any) -> int:
        handlers = list(self._handlers.get((target, event), []))
        for handler in handlers:
            handler(*args)
        return len(handlers)


@dataclass
class RenderContext:
    """Mount point, viewport and host services for one sunburst."""
    selector: str = "#graph"
    width: float = MIN_SIZE
    height: float = MIN_SIZE
    timeline: Timeline = field(default_factory=Timeline)
    events: EventHub = field(default_factory=EventHub)

    @property
    def radius(self) -> float:
        return min(self.width, self.height) / 2


def compute_viewport(window_height: float, body_height: float = 0, min_size: int = MIN_SIZE) -> Tuple[int, float]:
    """
    Drawing size derived from the host window at load time.

    Width is fixed at ``min_size``; height is whatever the window leaves
    below the page body, bounded above by ``min_size``.
    """
    return min_size, min(window_height - body_height, min_size)
