from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union
from geometry import Point, as_point

ORIGIN = (0.0, 0.0)

@dataclass(frozen=True)
class MoveTo:
    point: Point

@dataclass(frozen=True)
class LineTo:
    point: Point

@dataclass(frozen=True)
class QuadTo:
    control: Point
    point: Point

@dataclass(frozen=True)
class Close:
    pass

Segment = Union[MoveTo, LineTo, QuadTo, Close]

class Path:
    """An immutable, ordered sequence of path segments in logical space."""

    __slots__ = ('_segments',)

    def __init__(self, segments=()):
        self._segments: Tuple[Segment, ...] = tuple(segments)

    @property
    def segments(self) -> Tuple[Segment, ...]:
        return self._segments

    @property
    def is_empty(self) -> bool:
        return len(self._segments) == 0

    def points(self) -> List[Point]:
        points = []
        for segment in self._segments:
            if isinstance(segment, QuadTo):
                points.append(segment.control)
            if not isinstance(segment, Close):
                points.append(segment.point)
        return points

    def bounds(self) -> Optional[Tuple[float, float, float, float]]:
        points = self.points()
        if not points:
            return None
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        return (min(xs), min(ys), max(xs), max(ys))

    def to_path(self) -> 'Path':
        return self

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._segments == other._segments

    def __hash__(self) -> int:
        return hash(self._segments)

    def __repr__(self) -> str:
        return f"Path({list(self._segments)!r})"

class PathBuilder:
    def __init__(self):
        self._segments: List[Segment] = []
        self._subpath_start: Optional[Point] = None
        self._needs_move = True

    def _ensure_current_point(self):
        if self._needs_move:
            self.move_to(self._subpath_start if self._subpath_start is not None else ORIGIN)

    def move_to(self, point) -> 'PathBuilder':
        point = as_point(point)
        self._segments.append(MoveTo(point))
        self._subpath_start = point
        self._needs_move = False
        return self

    def line_to(self, point) -> 'PathBuilder':
        self._ensure_current_point()
        self._segments.append(LineTo(as_point(point)))
        return self

    def quad_to(self, control, point) -> 'PathBuilder':
        self._ensure_current_point()
        self._segments.append(QuadTo(as_point(control), as_point(point)))
        return self

    def close(self) -> 'PathBuilder':
        if not self._needs_move:
            self._segments.append(Close())
            self._needs_move = True
        return self

    def finish(self) -> Path:
        return Path(self._segments)

    @classmethod
    def from_line(cls, start, end) -> Path:
        return cls().move_to(start).line_to(end).finish()

    @classmethod
    def from_quadratic(cls, start, control, end) -> Path:
        return cls().move_to(start).quad_to(control, end).finish()
