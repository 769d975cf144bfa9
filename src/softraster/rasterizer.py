from __future__ import annotations

import math
import random
from collections import namedtuple

import numpy as np

from . import config
from .canvas import Canvas
from .shading import TEXTURED, WIREFRAME, DrawStyle, flat_color, make_shader

BARYCENTRIC = "barycentric"
SWEEP = "sweep"

FILL_METHODS = (BARYCENTRIC, SWEEP)

ScreenPoint = namedtuple("ScreenPoint", ["x", "y"])


def line_pixels(x0: int, y0: int, x1: int, y1: int):
    """Yield the Bresenham pixels from (x0, y0) to (x1, y1).

    Steep lines swap axes so the loop always walks the major axis, low to
    high. Produces max(|dx|, |dy|) + 1 pixels and the same set in either
    direction.
    """
    steep = abs(x0 - x1) < abs(y0 - y1)
    if steep:
        x0, y0 = y0, x0
        x1, y1 = y1, x1
    if x0 > x1:
        x0, x1 = x1, x0
        y0, y1 = y1, y0

    dx = x1 - x0
    dy = y1 - y0
    derror2 = abs(dy) * 2
    step = 1 if dy > 0 else -1
    error2 = 0
    y = y0
    for x in range(x0, x1 + 1):
        yield (y, x) if steep else (x, y)
        error2 += derror2
        if error2 > dx:
            y += step
            error2 -= dx * 2


def draw_line(canvas: Canvas, x0: int, y0: int, x1: int, y1: int, color) -> None:
    """Plot a line with no depth test. Off-canvas pixels are dropped."""
    w, h = canvas.width, canvas.height
    for x, y in line_pixels(int(x0), int(y0), int(x1), int(y1)):
        if 0 <= x < w and 0 <= y < h:
            canvas.point(x, y, color)


def draw_triangle_edges(canvas: Canvas, p1, p2, p3, color) -> None:
    x1, y1 = int(p1.x), int(p1.y)
    x2, y2 = int(p2.x), int(p2.y)
    x3, y3 = int(p3.x), int(p3.y)
    draw_line(canvas, x1, y1, x2, y2, color)
    draw_line(canvas, x2, y2, x3, y3, color)
    draw_line(canvas, x1, y1, x3, y3, color)


def barycentric(p1, p2, p3, p) -> tuple[float, float, float]:
    """Weights (a, b, c) of p against triangle p1 p2 p3 (2D, z ignored).

    A zero-area triangle gives NaN weights, which fail every inside test.
    """
    x1, y1 = p1.x, p1.y
    x2, y2 = p2.x, p2.y
    x3, y3 = p3.x, p3.y
    denom = (x1 - x3) * (y2 - y3) - (y1 - y3) * (x2 - x3)
    if denom == 0:
        nan = float("nan")
        return (nan, nan, nan)
    a = ((p.x - x3) * (y2 - y3) + (x3 - x2) * (p.y - y3)) / denom
    b = ((x3 - p.x) * (y1 - y3) + (x3 - x1) * (y3 - p.y)) / denom
    return (a, b, 1.0 - a - b)


def is_point_inside_triangle(p1, p2, p3, p, epsilon: float = config.EPSILON) -> bool:
    a, b, c = barycentric(p1, p2, p3, p)
    return a >= -epsilon and b >= -epsilon and c >= -epsilon


def fill_triangle_barycentric(
    canvas: Canvas,
    p1,
    p2,
    p3,
    shade,
    epsilon: float = config.EPSILON,
) -> int:
    """Depth-tested fill of a screen-space triangle.

    p1..p3 are Point3f (pixel x, y and depth z). Every pixel of the clamped
    bounding box is tested against the barycentric weights; depth is
    interpolated affinely. Returns the number of pixels written.
    """
    x1, y1, z1 = p1.x, p1.y, p1.z
    x2, y2, z2 = p2.x, p2.y, p2.z
    x3, y3, z3 = p3.x, p3.y, p3.z

    denom = (x1 - x3) * (y2 - y3) - (y1 - y3) * (x2 - x3)
    if denom == 0:
        return 0

    min_x = max(0, int(math.floor(min(x1, x2, x3))))
    max_x = min(canvas.width - 1, int(math.ceil(max(x1, x2, x3))))
    min_y = max(0, int(math.floor(min(y1, y2, y3))))
    max_y = min(canvas.height - 1, int(math.ceil(max(y1, y2, y3))))
    if min_x > max_x or min_y > max_y:
        return 0

    yy, xx = np.mgrid[min_y : max_y + 1, min_x : max_x + 1]
    a = ((xx - x3) * (y2 - y3) + (x3 - x2) * (yy - y3)) / denom
    b = ((x3 - xx) * (y1 - y3) + (x3 - x1) * (y3 - yy)) / denom
    c = 1.0 - a - b
    mask = (a >= -epsilon) & (b >= -epsilon) & (c >= -epsilon)
    if not np.any(mask):
        return 0

    a, b, c = a[mask], b[mask], c[mask]
    zs = a * z1 + b * z2 + c * z3
    return canvas.plot(
        xx[mask],
        yy[mask],
        zs,
        lambda keep: shade(a[keep], b[keep], c[keep]),
    )


def intersect_y(p1, p2, y: int) -> float:
    """x where the edge p1-p2 crosses row y."""
    if p1.x == p2.x:
        return float(p1.x)
    if p1.y == p2.y:
        # Horizontal edge: the row reaches its far end.
        return float(p2.x)
    x1, y1 = float(p1.x), float(p1.y)
    x2, y2 = float(p2.x), float(p2.y)
    delta = (y2 - y1) / (x2 - x1)
    return (y - y1) / delta + x1


def fill_triangle_sweep(canvas: Canvas, u, v, w, color) -> None:
    """Scanline fill of an integer triangle. No depth test."""
    points = sorted(
        (ScreenPoint(int(p.x), int(p.y)) for p in (u, v, w)),
        key=lambda p: p.y,
    )
    top, mid, bottom = points
    last_x = canvas.width - 1

    for y in range(max(top.y, 0), min(bottom.y, canvas.height - 1) + 1):
        x0 = intersect_y(top, bottom, y)
        if y <= mid.y:
            x1 = intersect_y(top, mid, y)
        else:
            x1 = intersect_y(mid, bottom, y)
        left_x = max(int(math.ceil(min(x0, x1))), 0)
        right_x = min(int(max(x0, x1)), last_x)
        if left_x > right_x:
            continue
        draw_line(canvas, left_x, y, right_x, y, color)


def fill_triangle(
    canvas: Canvas,
    p1,
    p2,
    p3,
    style: DrawStyle,
    intensity: float = 1.0,
    *,
    fill: str = config.FILL,
    epsilon: float = config.EPSILON,
    rng: random.Random | None = None,
    outline=None,
) -> int:
    """Draw one screen-space triangle in the given style.

    Wireframe styles draw the three edges unlit. Other styles fill with
    `fill_triangle_barycentric` (depth tested) or `fill_triangle_sweep`.
    ``outline`` draws the edges in that color over the fill. Returns the
    number of depth-tested pixels written.
    """
    if style.kind == WIREFRAME:
        draw_triangle_edges(canvas, p1, p2, p3, style.color)
        return 0

    if fill == BARYCENTRIC:
        shade = make_shader(style, intensity, rng)
        written = fill_triangle_barycentric(canvas, p1, p2, p3, shade, epsilon)
    elif fill == SWEEP:
        if style.kind == TEXTURED:
            raise ValueError("sweep fill supports solid styles only")
        fill_triangle_sweep(canvas, p1, p2, p3, flat_color(style, intensity, rng))
        written = 0
    else:
        raise ValueError(f"unknown fill method {fill!r}")

    if outline is not None:
        draw_triangle_edges(canvas, p1, p2, p3, outline)
    return written
