from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple
import xml.etree.ElementTree as ET
from colors import Color
from errors import RendererConfigError
from geometry import Point, Viewport
from path_builder import ORIGIN, Close, LineTo, MoveTo, Path, QuadTo
from renderer import Renderer, check_background, normalize_size
from shapes import Circle, Line, QuadraticBezier, Stroke

LOGGER = logging.getLogger(__name__)

SVG_NAMESPACE = 'http://www.w3.org/2000/svg'
DEFAULT_PRECISION = 3

@dataclass
class SvgDocument:
    root: ET.Element
    viewport: Viewport

class SvgRenderer(Renderer[SvgDocument, str]):
    """Emits the canvas as an SVG document string.

    ``precision`` is the number of decimal places written for every number,
    so the same canvas always yields the same text. ``inline_styles`` writes
    paint into a single ``style`` attribute instead of presentation
    attributes, and ``non_scaling_stroke`` marks stroked elements with
    ``vector-effect="non-scaling-stroke"``. Neither changes the picture at
    the configured size.
    """

    def __init__(self, size=None, background: Optional[Color] = None,
                 inline_styles: bool = False, non_scaling_stroke: bool = False,
                 precision: int = DEFAULT_PRECISION):
        if isinstance(precision, bool) or not isinstance(precision, int) or precision < 0:
            raise RendererConfigError(f"precision must be a non-negative int, got {precision!r}")
        self.size = normalize_size(size, integral=False)
        self.background = check_background(background)
        self.inline_styles = bool(inline_styles)
        self.non_scaling_stroke = bool(non_scaling_stroke)
        self.precision = precision

    def begin(self, canvas) -> SvgDocument:
        if self.size is not None:
            width, height = self.size
        else:
            width = height = float(canvas.size)

        w = self._number(width)
        h = self._number(height)
        root = ET.Element('svg', {
            'xmlns': SVG_NAMESPACE,
            'width': w,
            'height': h,
            'viewBox': f'0 0 {w} {h}',
        })
        if self.background is not None:
            rect = ET.SubElement(root, 'rect', {'x': '0', 'y': '0', 'width': w, 'height': h})
            self._apply_paint(rect, self._fill_paint(self.background), stroked=False)
        return SvgDocument(root, Viewport.fit(canvas.extent, width, height))

    def finish(self, target: SvgDocument) -> str:
        LOGGER.debug("finished svg document with %d element(s)", len(target.root))
        return ET.tostring(target.root, encoding='unicode')

    def draw_circle(self, target: SvgDocument, circle: Circle, stroke: Optional[Stroke],
                    fill: Optional[Color]):
        cx, cy = target.viewport.to_output(circle.center)
        element = ET.SubElement(target.root, 'circle', {
            'cx': self._number(cx),
            'cy': self._number(cy),
            'r': self._number(target.viewport.to_output_length(circle.radius)),
        })
        self._paint(target, element, stroke, fill)

    def draw_line(self, target: SvgDocument, line: Line, stroke: Optional[Stroke],
                  fill: Optional[Color]):
        x1, y1 = target.viewport.to_output(line.start)
        x2, y2 = target.viewport.to_output(line.end)
        element = ET.SubElement(target.root, 'line', {
            'x1': self._number(x1),
            'y1': self._number(y1),
            'x2': self._number(x2),
            'y2': self._number(y2),
        })
        self._paint(target, element, stroke, fill)

    def draw_quadratic_bezier(self, target: SvgDocument, curve: QuadraticBezier,
                              stroke: Optional[Stroke], fill: Optional[Color]):
        self.draw_path(target, curve.to_path(), stroke, fill)

    def draw_path(self, target: SvgDocument, path: Path, stroke: Optional[Stroke],
                  fill: Optional[Color]):
        element = ET.SubElement(target.root, 'path', {'d': self.path_data(target.viewport, path)})
        self._paint(target, element, stroke, fill)

    def path_data(self, viewport: Viewport, path: Path) -> str:
        commands = []
        has_current = False
        for segment in path:
            if isinstance(segment, MoveTo):
                commands.append('M ' + self._point(viewport, segment.point))
                has_current = True
                continue
            if not has_current:
                commands.append('M ' + self._point(viewport, ORIGIN))
                has_current = True
            if isinstance(segment, LineTo):
                commands.append('L ' + self._point(viewport, segment.point))
            elif isinstance(segment, QuadTo):
                commands.append('Q ' + self._point(viewport, segment.control) + ' '
                                + self._point(viewport, segment.point))
            elif isinstance(segment, Close):
                commands.append('Z')
        return ' '.join(commands)

    def _paint(self, target: SvgDocument, element: ET.Element, stroke: Optional[Stroke],
               fill: Optional[Color]):
        items = self._fill_paint(fill)
        stroked = False
        if stroke is not None:
            width = target.viewport.to_output_length(stroke.width)
            if math.isfinite(width) and width > 0:
                items.extend(self._stroke_paint(stroke, width))
                stroked = True
        self._apply_paint(element, items, stroked)

    def _fill_paint(self, fill: Optional[Color]) -> List[Tuple[str, str]]:
        if fill is None:
            return [('fill', 'none')]
        items = [('fill', fill.as_hex())]
        alpha = fill.clamped().a
        if alpha < 1.0:
            items.append(('fill-opacity', self._number(alpha)))
        return items

    def _stroke_paint(self, stroke: Stroke, width: float) -> List[Tuple[str, str]]:
        items = [
            ('stroke', stroke.color.as_hex()),
            ('stroke-width', self._number(width)),
            ('stroke-linecap', stroke.line_end.value),
        ]
        alpha = stroke.color.clamped().a
        if alpha < 1.0:
            items.append(('stroke-opacity', self._number(alpha)))
        return items

    def _apply_paint(self, element: ET.Element, items: List[Tuple[str, str]], stroked: bool):
        if self.inline_styles:
            element.set('style', ';'.join(f'{name}:{value}' for name, value in items))
        else:
            for name, value in items:
                element.set(name, value)
        if stroked and self.non_scaling_stroke:
            element.set('vector-effect', 'non-scaling-stroke')

    def _point(self, viewport: Viewport, point: Point) -> str:
        x, y = viewport.to_output(point)
        return f'{self._number(x)} {self._number(y)}'

    def _number(self, value: float) -> str:
        return format_number(value, self.precision)

def format_number(value: float, precision: int) -> str:
    text = f'{value:.{precision}f}'
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    if text == '-0':
        text = '0'
    return text
