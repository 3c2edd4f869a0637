from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple
import numpy as np
from PIL import Image
from colors import Color, blend_colors
from geometry import Viewport, flatten_quadratic, is_finite_point
from path_builder import ORIGIN, Close, LineTo, MoveTo, Path, QuadTo
from renderer import Renderer, check_background, normalize_size
from shapes import Circle, Line, LineEnd, QuadraticBezier, Stroke

LOGGER = logging.getLogger(__name__)

FINE_TOLERANCE = 0.1
COARSE_TOLERANCE = 0.5
AA_SAMPLE_OFFSETS = ((0.25, 0.25), (0.75, 0.25), (0.25, 0.75), (0.75, 0.75))
CENTER_SAMPLE_OFFSETS = ((0.5, 0.5),)

Subpath = Tuple[np.ndarray, bool]

class RasterImage:
    """An RGBA8 pixel buffer, ``height x width x 4``."""

    def __init__(self, buffer: np.ndarray):
        self.buffer = buffer

    @property
    def width(self) -> int:
        return self.buffer.shape[1]

    @property
    def height(self) -> int:
        return self.buffer.shape[0]

    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        return tuple(int(c) for c in self.buffer[y, x])

    def to_pil(self) -> Image.Image:
        return Image.fromarray(self.buffer)

    def save(self, path, format: Optional[str] = None):
        self.to_pil().save(path, format=format)

@dataclass
class RasterFrame:
    buffer: np.ndarray
    viewport: Viewport

    @property
    def width(self) -> int:
        return self.buffer.shape[1]

    @property
    def height(self) -> int:
        return self.buffer.shape[0]

@dataclass
class PixelWindow:
    x0: int
    y0: int
    x1: int
    y1: int

    def grid(self, offset_x: float = 0.5, offset_y: float = 0.5) -> Tuple[np.ndarray, np.ndarray]:
        xs = np.arange(self.x0, self.x1, dtype=np.float64) + offset_x
        ys = np.arange(self.y0, self.y1, dtype=np.float64) + offset_y
        return np.meshgrid(xs, ys)

class RasterRenderer(Renderer[RasterFrame, RasterImage]):
    def __init__(self, size=None, background: Optional[Color] = None,
                 anti_alias: bool = True, fine_curves: bool = True):
        self.size = normalize_size(size, integral=True)
        self.background = check_background(background)
        self.anti_alias = bool(anti_alias)
        self.fine_curves = bool(fine_curves)

    @property
    def tolerance(self) -> float:
        return FINE_TOLERANCE if self.fine_curves else COARSE_TOLERANCE

    def begin(self, canvas) -> RasterFrame:
        if self.size is not None:
            width, height = self.size
        else:
            width = height = max(1, int(round(canvas.size)))

        buffer = np.zeros((height, width, 4), dtype=np.float32)
        if self.background is not None:
            buffer[:, :] = np.asarray(self.background.clamped().to_tuple(), dtype=np.float32)
        return RasterFrame(buffer, Viewport.fit(canvas.extent, width, height))

    def finish(self, target: RasterFrame) -> RasterImage:
        pixels = np.rint(np.clip(target.buffer, 0.0, 1.0) * 255.0).astype(np.uint8)
        return RasterImage(pixels)

    def draw_circle(self, target: RasterFrame, circle: Circle, stroke: Optional[Stroke],
                    fill: Optional[Color]):
        cx, cy = target.viewport.to_output(circle.center)
        radius = target.viewport.to_output_length(circle.radius)
        if not (is_finite_point((cx, cy)) and math.isfinite(radius)):
            LOGGER.debug("skipping circle with non-finite geometry: %r", circle)
            return
        if radius <= 0:
            return

        half_width = _half_width(target, stroke)
        reach = radius + (half_width or 0.0) + 1.0
        window = self._window(target, cx - reach, cy - reach, cx + reach, cy + reach)
        if window is None:
            return

        gx, gy = window.grid()
        distance = np.hypot(gx - cx, gy - cy) - radius

        if fill is not None:
            self._composite(target, window, self._coverage(distance), fill)
        if half_width:
            self._composite(target, window, self._coverage(np.abs(distance) - half_width), stroke.color)

    def draw_line(self, target: RasterFrame, line: Line, stroke: Optional[Stroke],
                  fill: Optional[Color]):
        self.draw_path(target, line.to_path(), stroke, fill)

    def draw_quadratic_bezier(self, target: RasterFrame, curve: QuadraticBezier,
                              stroke: Optional[Stroke], fill: Optional[Color]):
        self.draw_path(target, curve.to_path(), stroke, fill)

    def draw_path(self, target: RasterFrame, path: Path, stroke: Optional[Stroke],
                  fill: Optional[Color]):
        if not all(is_finite_point(p) for p in path.points()):
            LOGGER.debug("skipping path with non-finite geometry")
            return

        subpaths = self._flatten(target, path)
        if not subpaths:
            return

        if fill is not None:
            self._fill_subpaths(target, subpaths, fill)
        half_width = _half_width(target, stroke)
        if half_width:
            self._stroke_subpaths(target, subpaths, half_width, stroke)

    def _flatten(self, target: RasterFrame, path: Path) -> List[Subpath]:
        to_output = target.viewport.to_output
        subpaths: List[Subpath] = []
        current: list = []
        drawn = False
        start = to_output(ORIGIN)

        for segment in path:
            if isinstance(segment, MoveTo):
                # a bare move draws nothing
                if drawn:
                    subpaths.append((np.asarray(current), False))
                start = to_output(segment.point)
                current = [start]
                drawn = False
                continue
            if isinstance(segment, Close):
                if current:
                    subpaths.append((np.asarray(current), True))
                current = []
                drawn = False
                continue

            # after a close the pen is back at the subpath start
            if not current:
                current = [start]
            if isinstance(segment, LineTo):
                current.append(to_output(segment.point))
            elif isinstance(segment, QuadTo):
                control = to_output(segment.control)
                end = to_output(segment.point)
                current.extend(flatten_quadratic(current[-1], control, end, self.tolerance)[1:])
            drawn = True

        if drawn:
            subpaths.append((np.asarray(current), False))
        return subpaths

    def _fill_subpaths(self, target: RasterFrame, subpaths: List[Subpath], color: Color):
        polygons = [points for points, _ in subpaths if len(points) >= 3]
        if not polygons:
            return

        everything = np.concatenate(polygons)
        min_x, min_y = everything.min(axis=0)
        max_x, max_y = everything.max(axis=0)
        window = self._window(target, min_x - 1, min_y - 1, max_x + 1, max_y + 1)
        if window is None:
            return

        offsets = AA_SAMPLE_OFFSETS if self.anti_alias else CENTER_SAMPLE_OFFSETS
        coverage = np.zeros((window.y1 - window.y0, window.x1 - window.x0), dtype=np.float32)
        for offset_x, offset_y in offsets:
            px, py = window.grid(offset_x, offset_y)
            coverage += (_winding_numbers(px, py, polygons) != 0)
        coverage /= len(offsets)

        self._composite(target, window, coverage, color)

    def _stroke_subpaths(self, target: RasterFrame, subpaths: List[Subpath],
                         half_width: float, stroke: Stroke):
        everything = np.concatenate([points for points, _ in subpaths])
        min_x, min_y = everything.min(axis=0)
        max_x, max_y = everything.max(axis=0)
        reach = half_width * math.sqrt(2.0) + 1.0
        window = self._window(target, min_x - reach, min_y - reach, max_x + reach, max_y + reach)
        if window is None:
            return

        gx, gy = window.grid()
        distance = np.full(gx.shape, np.inf)
        for points, closed in subpaths:
            points = _drop_repeats(points)
            if closed and len(points) > 1 and not np.array_equal(points[0], points[-1]):
                points = np.vstack((points, points[:1]))
            if len(points) == 1:
                # a zero-length subpath, open or closed, shows only its caps
                points = np.vstack((points, points))
                closed = False

            last = len(points) - 2
            for i in range(last + 1):
                start_cap = stroke.line_end if not closed and i == 0 else LineEnd.ROUND
                end_cap = stroke.line_end if not closed and i == last else LineEnd.ROUND
                segment = _segment_distance(gx, gy, points[i], points[i + 1], half_width,
                                            start_cap, end_cap)
                np.minimum(distance, segment, out=distance)

        self._composite(target, window, self._coverage(distance), stroke.color)

    def _window(self, target: RasterFrame, min_x: float, min_y: float,
                max_x: float, max_y: float) -> Optional[PixelWindow]:
        if not all(math.isfinite(v) for v in (min_x, min_y, max_x, max_y)):
            LOGGER.debug("skipping unbounded shape")
            return None
        x0 = max(0, int(math.floor(min_x)))
        y0 = max(0, int(math.floor(min_y)))
        x1 = min(target.width, int(math.ceil(max_x)) + 1)
        y1 = min(target.height, int(math.ceil(max_y)) + 1)
        if x0 >= x1 or y0 >= y1:
            return None
        return PixelWindow(x0, y0, x1, y1)

    def _coverage(self, distance: np.ndarray) -> np.ndarray:
        if self.anti_alias:
            return np.clip(0.5 - distance, 0.0, 1.0).astype(np.float32)
        return (distance <= 0.0).astype(np.float32)

    def _composite(self, target: RasterFrame, window: PixelWindow, coverage: np.ndarray,
                   color: Color):
        if not coverage.any():
            return
        region = target.buffer[window.y0:window.y1, window.x0:window.x1]
        blend_colors(region, color, coverage)

def _half_width(target: RasterFrame, stroke: Optional[Stroke]) -> Optional[float]:
    if stroke is None:
        return None
    half_width = target.viewport.to_output_length(stroke.width) / 2.0
    if not (math.isfinite(half_width) and half_width > 0):
        return None
    return half_width

def _drop_repeats(points: np.ndarray) -> np.ndarray:
    if len(points) < 2:
        return points
    keep = np.ones(len(points), dtype=bool)
    keep[1:] = np.any(points[1:] != points[:-1], axis=1)
    return points[keep]

def _segment_distance(px: np.ndarray, py: np.ndarray, a, b, half_width: float,
                      start_cap: LineEnd, end_cap: LineEnd) -> np.ndarray:
    ax, ay = a
    bx, by = b
    rx = px - ax
    ry = py - ay
    dx = bx - ax
    dy = by - ay
    length = math.hypot(dx, dy)

    if length == 0.0:
        if LineEnd.ROUND in (start_cap, end_cap):
            return np.hypot(rx, ry) - half_width
        if LineEnd.SQUARE in (start_cap, end_cap):
            return np.maximum(np.abs(rx), np.abs(ry)) - half_width
        return np.full(px.shape, np.inf)

    ux = dx / length
    uy = dy / length
    along = rx * ux + ry * uy
    across = np.abs(ry * ux - rx * uy)
    start_extent = half_width if start_cap is LineEnd.SQUARE else 0.0
    end_extent = half_width if end_cap is LineEnd.SQUARE else 0.0

    distance = np.maximum(across - half_width,
                          np.maximum(-along - start_extent, along - length - end_extent))
    if start_cap is LineEnd.ROUND:
        distance = np.minimum(distance, np.hypot(rx, ry) - half_width)
    if end_cap is LineEnd.ROUND:
        distance = np.minimum(distance, np.hypot(px - bx, py - by) - half_width)
    return distance

def _winding_numbers(px: np.ndarray, py: np.ndarray, polygons: List[np.ndarray]) -> np.ndarray:
    winding = np.zeros(px.shape, dtype=np.int32)
    for points in polygons:
        starts = points
        ends = np.roll(points, -1, axis=0)
        for (x0, y0), (x1, y1) in zip(starts, ends):
            if y0 == y1:
                continue
            cross = (x1 - x0) * (py - y0) - (y1 - y0) * (px - x0)
            if y0 <= y1:
                winding += ((y0 <= py) & (y1 > py) & (cross > 0)).astype(np.int32)
            else:
                winding -= ((y1 <= py) & (y0 > py) & (cross < 0)).astype(np.int32)
    return winding
