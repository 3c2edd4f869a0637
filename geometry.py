from __future__ import annotations
import math
from typing import List, Tuple

Point = Tuple[float, float]

# 2**10 segments, the same ceiling as ten levels of halving
MAX_CURVE_SEGMENTS = 1024

def as_point(value) -> Point:
    if hasattr(value, 'x') and hasattr(value, 'y'):
        return (float(value.x), float(value.y))
    x, y = value
    return (float(x), float(y))

def is_finite_point(point: Point) -> bool:
    return math.isfinite(point[0]) and math.isfinite(point[1])

class Viewport:
    """Maps the logical square [-extent, extent]^2 onto an output rectangle.

    The square is fitted (uniform scale, centered) and the y axis is flipped,
    so logical "up" is output "down" and the logical origin lands on the
    exact center of the output.
    """

    def __init__(self, extent: float, width: float, height: float):
        self.extent = float(extent)
        self.width = width
        self.height = height
        self.scale = min(width, height) / (2.0 * self.extent)
        self.center = (width / 2.0, height / 2.0)

    @classmethod
    def fit(cls, extent: float, width: float, height: float) -> 'Viewport':
        return cls(extent, width, height)

    def to_output(self, point: Point) -> Point:
        cx, cy = self.center
        return (cx + point[0] * self.scale, cy - point[1] * self.scale)

    def to_output_length(self, length: float) -> float:
        return length * self.scale

    def __repr__(self) -> str:
        return f"Viewport(extent={self.extent}, width={self.width}, height={self.height})"

def flatten_quadratic(p0: Point, p1: Point, p2: Point, tolerance: float = 0.5) -> List[Point]:
    """Approximate a quadratic Bezier with a polyline.

    The curve is sampled at evenly spaced parameters. The chord error of a
    quadratic over a parameter step ``1/n`` is ``|p0 - 2*p1 + p2| / (4 * n^2)``,
    so ``n`` is picked to keep that below ``tolerance``. The first and last
    points are exactly ``p0`` and ``p2``.
    """
    ddx = p0[0] - 2.0 * p1[0] + p2[0]
    ddy = p0[1] - 2.0 * p1[1] + p2[1]
    deviation = math.hypot(ddx, ddy)
    if deviation == 0.0:
        return [p0, p2]

    segments = min(MAX_CURVE_SEGMENTS, max(1, math.ceil(math.sqrt(deviation / (4.0 * tolerance)))))
    points = [p0]
    for i in range(1, segments):
        t = i / segments
        u = 1.0 - t
        points.append((u * u * p0[0] + 2.0 * u * t * p1[0] + t * t * p2[0],
                       u * u * p0[1] + 2.0 * u * t * p1[1] + t * t * p2[1]))
    points.append(p2)
    return points
