from __future__ import annotations
import logging
import os
import sys
from typing import Optional
from canvas import Canvas
from colors import Color
from errors import VectorCanvasError
from raster_renderer import RasterRenderer
from shapes import LineEnd, Stroke
from svg_renderer import DEFAULT_PRECISION, SvgRenderer

FORMATS = ('png', 'svg')

def build_smile_canvas() -> Canvas:
    # the camera spans (-1, -1) to (1, 1)
    canvas = Canvas(1000)

    canvas.draw_circle((0.0, 0.0), 1.0, None, Color.from_hex("#fecb00"))

    eye = Stroke(Color.black(), 0.2, LineEnd.ROUND)
    canvas.draw_line((-0.5, 0.25), (-0.5, 0.0), eye)
    canvas.draw_line((0.5, 0.25), (0.5, 0.0), eye)

    canvas.draw_quadratic_bezier((-0.5, -0.3), (0.0, -0.5), (0.5, -0.3),
                                 Stroke.new(Color.black(), 0.02, LineEnd.ROUND))
    return canvas

def output_paths(output: Optional[str], formats: tuple[str, ...]) -> dict[str, str]:
    if output is None:
        base = "smile"
    elif os.path.isdir(output):
        base = os.path.join(output, "smile")
    else:
        base = os.path.splitext(output)[0]
    return {fmt: f"{base}.{fmt}" for fmt in formats}

def render_smile(output: Optional[str] = None, formats: tuple[str, ...] = FORMATS,
                 width: int = None, height: int = None, background: Optional[Color] = None,
                 anti_aliasing: bool = True, precision: int = DEFAULT_PRECISION,
                 verbose: bool = False) -> bool:
    canvas = build_smile_canvas()
    size = None
    if width or height:
        size = (width or int(canvas.size), height or int(canvas.size))

    if verbose:
        print(f"Canvas: {canvas!r}")
        print(f"Output size: {size or canvas.size}")
        if background is not None:
            print(f"Background color: {background.as_hex(include_alpha=True)}")

    try:
        paths = output_paths(output, formats)
        if 'png' in paths:
            image = canvas.render(RasterRenderer(size, background, anti_aliasing, True))
            image.save(paths['png'])
            print(f"[OK] Rendered {image.width}x{image.height} -> {paths['png']}")
        if 'svg' in paths:
            markup = canvas.render(SvgRenderer(size, background, False, False, precision))
            with open(paths['svg'], 'w', encoding='utf-8') as f:
                f.write(markup)
            print(f"[OK] Rendered svg -> {paths['svg']}")
    except VectorCanvasError as e:
        print(f"Error: {e}")
        return False
    except OSError as e:
        print(f"Error writing output: {e}")
        return False

    return True

def parse_background(value: str) -> Color:
    if ',' not in value:
        return Color.from_hex(value)
    parts = value.split(',')
    if len(parts) not in (3, 4):
        raise ValueError(value)
    channels = [max(0, min(255, int(p.strip()))) for p in parts]
    return Color.from_rgba8(*channels)

def print_usage():
    print("Smile example renderer")
    print("Usage: python main.py [options]")
    print("\nOptions:")
    print("  -v, --verbose          Print detailed information")
    print("  -o, --output PATH      Output directory or base file name (default: ./smile)")
    print("  -w, --width WIDTH      Output width (default: canvas size)")
    print("  -h, --height HEIGHT    Output height (default: canvas size)")
    print("  -b, --background BG    Background as R,G,B[,A] or hex (default: transparent)")
    print("  -aa, --anti-aliasing   Anti-aliasing on/off for png output (default: on)")
    print("  --format FORMAT        png, svg or both (default: both)")
    print("  --precision N          Decimal places in svg output (default: 3)")
    print("  --help                 Show this message")

def main(argv: list[str] = None) -> int:
    args = sys.argv[1:] if argv is None else argv

    verbose = False
    output = None
    width = None
    height = None
    background = None
    anti_aliasing = True
    formats = FORMATS
    precision = DEFAULT_PRECISION

    i = 0
    while i < len(args):
        arg = args[i]
        value = args[i + 1] if i + 1 < len(args) else None
        if arg in ['-v', '--verbose']:
            verbose = True
        elif arg == '--help':
            print_usage()
            return 0
        elif arg in ['-o', '--output']:
            if value is None:
                print("Error: -o/--output requires a path argument")
                return 2
            output = value
            i += 1
        elif arg in ['-w', '--width', '-h', '--height']:
            if value is None:
                print(f"Error: {arg} requires a value")
                return 2
            try:
                size = int(value)
            except ValueError:
                print(f"Error: {arg} must be an integer")
                return 2
            if size <= 0:
                print(f"Error: {arg} must be positive")
                return 2
            if arg in ['-w', '--width']:
                width = size
            else:
                height = size
            i += 1
        elif arg in ['-b', '--background']:
            if value is None:
                print("Error: -b/--background requires a color")
                return 2
            try:
                background = parse_background(value)
            except ValueError:
                print("Error: Background must be R,G,B[,A] integers or a hex color (e.g., 255,255,255 or #ffffff)")
                return 2
            i += 1
        elif arg in ['-aa', '--anti-aliasing']:
            if value is not None and value.lower() in ['true', '1', 'yes', 'on']:
                anti_aliasing = True
                i += 1
            elif value is not None and value.lower() in ['false', '0', 'no', 'off']:
                anti_aliasing = False
                i += 1
            else:
                anti_aliasing = True
        elif arg == '--format':
            if value not in ['png', 'svg', 'both']:
                print("Error: --format must be png, svg or both")
                return 2
            formats = FORMATS if value == 'both' else (value,)
            i += 1
        elif arg == '--precision':
            try:
                precision = int(value)
            except (TypeError, ValueError):
                print("Error: --precision must be an integer")
                return 2
            i += 1
        else:
            print(f"Unknown option: {arg}")
            return 2
        i += 1

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if render_smile(output, formats, width, height, background, anti_aliasing, precision, verbose):
        return 0
    return 1

if __name__ == "__main__":
    sys.exit(main())
