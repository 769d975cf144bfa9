from __future__ import annotations

import argparse
import logging
import random
import sys

from . import config
from .color import Color
from .image_io import load_texture, save_canvas
from .mesh import MeshParseError, load_obj
from .rasterizer import FILL_METHODS
from .scene import WINDINGS, render
from .shading import FILLED, RANDOM, STYLE_KINDS, TEXTURED, WIREFRAME, DrawStyle


def _hex_color(text: str) -> Color:
    try:
        return Color.from_hex(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="softraster",
        description="Render an OBJ mesh to an image with a CPU rasterizer.",
    )
    parser.add_argument("mesh", nargs="?", help="Wavefront OBJ file. Omit for a blank image.")
    parser.add_argument("texture", nargs="?", help="Texture image for the textured style.")
    parser.add_argument("-o", "--output", default=config.OUTPUT_PATH, help="Output image path.")
    parser.add_argument("--width", type=_positive_int, default=config.WIDTH)
    parser.add_argument("--height", type=_positive_int, default=config.HEIGHT)
    parser.add_argument(
        "--style",
        choices=STYLE_KINDS,
        default=None,
        help="Shading style (default: textured with a texture, random otherwise).",
    )
    parser.add_argument("--color", type=_hex_color, default=Color(*config.BASE_COLOR), help="#RRGGBB for filled/wireframe.")
    parser.add_argument("--clear-color", type=_hex_color, default=Color(*config.CLEAR_COLOR), help="#RRGGBB background.")
    parser.add_argument("--fill", choices=FILL_METHODS, default=config.FILL, help="Triangle fill method.")
    parser.add_argument("--outline", action="store_true", help="Draw triangle edges over the fill.")
    parser.add_argument("--winding", choices=WINDINGS, default=config.WINDING, help="Front-face winding order.")
    parser.add_argument("--no-cull", action="store_true", help="Draw back-facing triangles too.")
    parser.add_argument("--triangulate", action="store_true", help="Split polygons into triangles.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random style.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    kind = args.style or (TEXTURED if args.texture else RANDOM)
    if kind == TEXTURED and not args.texture:
        print("error: textured style needs a texture file", file=sys.stderr)
        return 2
    if kind == TEXTURED and args.fill == "sweep":
        print("error: sweep fill supports solid styles only", file=sys.stderr)
        return 2

    log = logging.getLogger("softraster")
    mesh = None
    if args.mesh:
        try:
            mesh = load_obj(args.mesh, triangulate=args.triangulate)
        except MeshParseError as e:
            print(f"error: {e}", file=sys.stderr)
            return 2
        except OSError as e:
            # An unreadable mesh still renders, as a cleared image.
            log.warning("could not read mesh %s: %s", args.mesh, e)

    if kind == WIREFRAME:
        style = DrawStyle.wireframe(args.color)
    elif kind == FILLED:
        style = DrawStyle.filled(args.color)
    elif kind == RANDOM:
        style = DrawStyle.filled_random()
    else:
        try:
            style = DrawStyle.textured(load_texture(args.texture))
        except (OSError, ValueError) as e:
            print(f"error: {e}", file=sys.stderr)
            return 2

    canvas, stats = render(
        mesh,
        style,
        width=args.width,
        height=args.height,
        clear_color=args.clear_color,
        winding=args.winding,
        cull=not args.no_cull,
        fill=args.fill,
        outline=Color(*config.OUTLINE_COLOR) if args.outline else None,
        rng=random.Random(args.seed),
    )
    log.debug("%r", stats)

    try:
        save_canvas(canvas, args.output)
    except OSError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
