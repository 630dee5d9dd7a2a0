"""
Continuous scales and interpolation used by the sunburst view.

The browser client implements the same linear and square-root scales, so
geometry computed in Python matches what the page draws.
"""

import math
from typing import Callable, Sequence, Tuple

Pair = Tuple[float, float]


def interpolate(start: Sequence[float], end: Sequence[float]) -> Callable[[float], Pair]:
    """Return t -> element-wise linear blend of two pairs, t in [0, 1]."""
    a0, a1 = start
    b0, b1 = end

    def at(t: float) -> Pair:
        return a0 + (b0 - a0) * t, a1 + (b1 - a1) * t

    return at


class LinearScale:
    """Linear mapping from a domain pair onto a range pair."""

    def __init__(self, domain: Pair = (0.0, 1.0), range_: Pair = (0.0, 1.0)):
        self.domain: Pair = tuple(domain)
        self.range: Pair = tuple(range_)

    def _transform(self, value: float) -> float:
        return value

    def __call__(self, value: float) -> float:
        d0, d1 = (self._transform(v) for v in self.domain)
        r0, r1 = self.range
        if d1 == d0:
            return (r0 + r1) / 2
        t = (self._transform(value) - d0) / (d1 - d0)
        return r0 + (r1 - r0) * t

    def copy(self) -> "LinearScale":
        return type(self)(self.domain, self.range)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(domain={self.domain}, range={self.range})"


class SqrtScale(LinearScale):
    """
    Square-root scale.

    Used for the radius so that ring *area*, not ring width, grows linearly
    with normalized depth.
    """

    def _transform(self, value: float) -> float:
        return math.copysign(math.sqrt(abs(value)), value)
