from .canvas import Canvas
from .color import Color
from .linalg import Point3f, Vec3
from .mesh import Mesh, MeshObject, MeshParseError, load_obj, parse_obj
from .rasterizer import barycentric, draw_line, fill_triangle, line_pixels
from .scene import RenderStats, draw_mesh, draw_object, render
from .shading import DrawStyle, Texture

__all__ = [
    "Canvas",
    "Color",
    "DrawStyle",
    "Mesh",
    "MeshObject",
    "MeshParseError",
    "Point3f",
    "RenderStats",
    "Texture",
    "Vec3",
    "barycentric",
    "draw_line",
    "draw_mesh",
    "draw_object",
    "fill_triangle",
    "line_pixels",
    "load_obj",
    "parse_obj",
    "render",
]
