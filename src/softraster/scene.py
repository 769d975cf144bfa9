from __future__ import annotations

import logging
import random
from collections import Counter

from . import config
from .canvas import Canvas
from .linalg import Point3f, Vec3
from .mesh import TRIANGLE, Mesh, MeshObject
from .rasterizer import fill_triangle
from .shading import TEXTURED, DrawStyle

log = logging.getLogger(__name__)

WINDINGS = ("ccw", "cw")


class RenderStats:
    """Per-render counters: triangles drawn, culled, skipped, degenerate, pixels."""

    def __init__(self):
        self.drawn = 0
        self.culled = 0
        self.skipped = 0
        self.degenerate = 0
        self.pixels = 0

    def __repr__(self):
        return (
            f"RenderStats(drawn={self.drawn}, culled={self.culled}, skipped={self.skipped}, "
            f"degenerate={self.degenerate}, pixels={self.pixels})"
        )


def face_normal(v1: Vec3, v2: Vec3, v3: Vec3) -> Vec3:
    """Unnormalized normal, facing -z for a counter-clockwise triangle."""
    return (v3 - v1).cross(v2 - v1)


def project(v: Vec3, width: int, height: int) -> Point3f:
    """Model space [-1, 1] to pixel space; depth passes through unscaled."""
    return Point3f(
        int((v.x + 1.0) * width / 2.0),
        int((v.y + 1.0) * height / 2.0),
        v.z,
    )


def draw_object(
    canvas: Canvas,
    obj: MeshObject,
    style: DrawStyle,
    *,
    light_dir=config.LIGHT_DIR,
    winding: str = config.WINDING,
    cull: bool = True,
    fill: str = config.FILL,
    epsilon: float = config.EPSILON,
    outline=None,
    rng: random.Random | None = None,
    stats: RenderStats | None = None,
) -> RenderStats:
    if winding not in WINDINGS:
        raise ValueError(f"winding must be one of {WINDINGS}, got {winding!r}")
    if stats is None:
        stats = RenderStats()

    light = Vec3.from_seq(light_dir).normalized()
    sign = 1.0 if winding == "ccw" else -1.0
    unsupported: Counter[str] = Counter()

    for face in obj.faces:
        if face.kind != TRIANGLE:
            unsupported[face.kind] += 1
            stats.skipped += 1
            continue

        i1, i2, i3 = face.vertices
        v1, v2, v3 = obj.vertices[i1], obj.vertices[i2], obj.vertices[i3]
        normal = face_normal(v1, v2, v3) * sign
        if normal.length() == 0:
            log.debug("%s: degenerate triangle %s", obj.name, face.vertices)
            stats.degenerate += 1
            continue

        intensity = normal.normalized().dot(light)
        if cull and intensity < 0:
            stats.culled += 1
            continue

        face_style = style
        if style.kind == TEXTURED:
            if None in face.tex_coords:
                unsupported["untextured triangle"] += 1
                stats.skipped += 1
                continue
            face_style = style.with_uvs(obj.tex_coords[i] for i in face.tex_coords)

        p1 = project(v1, canvas.width, canvas.height)
        p2 = project(v2, canvas.width, canvas.height)
        p3 = project(v3, canvas.width, canvas.height)
        stats.pixels += fill_triangle(
            canvas,
            p1,
            p2,
            p3,
            face_style,
            intensity,
            fill=fill,
            epsilon=epsilon,
            rng=rng,
            outline=outline,
        )
        stats.drawn += 1

    for kind, count in sorted(unsupported.items()):
        log.warning("%s: skipped %d %s primitive(s)", obj.name, count, kind)
    return stats


def draw_mesh(canvas: Canvas, mesh: Mesh, style: DrawStyle, **kwargs) -> RenderStats:
    """Draw every object of the mesh in file order. See `draw_object`."""
    stats = kwargs.pop("stats", None) or RenderStats()
    for obj in mesh:
        draw_object(canvas, obj, style, stats=stats, **kwargs)
    return stats


def render(
    mesh: Mesh | None,
    style: DrawStyle,
    width: int = config.WIDTH,
    height: int = config.HEIGHT,
    clear_color=config.CLEAR_COLOR,
    **kwargs,
) -> tuple[Canvas, RenderStats]:
    """Fresh canvas, cleared, with the mesh drawn into it."""
    canvas = Canvas(width, height)
    canvas.clear(clear_color)
    stats = RenderStats()
    if mesh is not None:
        draw_mesh(canvas, mesh, style, stats=stats, **kwargs)
    log.info("rendered %dx%d: %r", width, height, stats)
    return canvas, stats
