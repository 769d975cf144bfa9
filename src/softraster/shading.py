from __future__ import annotations

import random
from collections import namedtuple
from collections.abc import Callable

import numpy as np

from .color import Color

WIREFRAME = "wireframe"
FILLED = "filled"
RANDOM = "random"
TEXTURED = "textured"

STYLE_KINDS = (WIREFRAME, FILLED, RANDOM, TEXTURED)

# (a, b, c) barycentric weight arrays -> (n, 3) uint8 colors
Shader = Callable[[np.ndarray, np.ndarray, np.ndarray], np.ndarray]


class Texture:
    """RGB texel grid addressed bottom-up: row 0 is v = 0."""

    def __init__(self, pixels: np.ndarray):
        pixels = np.asarray(pixels)
        if pixels.ndim != 3 or pixels.shape[2] != 3 or pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise ValueError(f"texture must be a non-empty (h, w, 3) array, got shape {pixels.shape}")
        self.pixels = np.ascontiguousarray(pixels, dtype=np.uint8)
        self.height, self.width = self.pixels.shape[:2]

    def sample(self, u: float, v: float) -> Color:
        tx = min(max(int(u * self.width), 0), self.width - 1)
        ty = min(max(int(v * self.height), 0), self.height - 1)
        r, g, b = self.pixels[ty, tx]
        return Color(int(r), int(g), int(b))

    def sample_many(self, us: np.ndarray, vs: np.ndarray) -> np.ndarray:
        # astype truncates toward zero, matching int() in `sample`.
        tx = np.clip((us * self.width).astype(np.int64), 0, self.width - 1)
        ty = np.clip((vs * self.height).astype(np.int64), 0, self.height - 1)
        return self.pixels[ty, tx]


class DrawStyle(namedtuple("DrawStyle", ["kind", "color", "texture", "uvs"])):
    """One of four shading policies, picked by ``kind``.

    wireframe(color)        edges only, unlit, no depth test
    filled(color)           base color scaled by light intensity
    filled_random()         one random color per triangle, lit
    textured(texture, uvs)  texture lookup scaled by light intensity
    """

    __slots__ = ()

    @classmethod
    def wireframe(cls, color=(255, 255, 255)) -> DrawStyle:
        return cls(WIREFRAME, Color(*color), None, None)

    @classmethod
    def filled(cls, color) -> DrawStyle:
        return cls(FILLED, Color(*color), None, None)

    @classmethod
    def filled_random(cls) -> DrawStyle:
        return cls(RANDOM, None, None, None)

    @classmethod
    def textured(cls, texture: Texture, uvs=None) -> DrawStyle:
        if texture is None:
            raise ValueError("textured style needs a texture")
        return cls(TEXTURED, None, texture, tuple(uvs) if uvs is not None else None)

    def with_uvs(self, uvs) -> DrawStyle:
        """Bind one triangle's three texture coordinates."""
        return self._replace(uvs=tuple(uvs))


def scale_pixels(pixels: np.ndarray, intensity: float) -> np.ndarray:
    """Vectorized `Color.scale` over an (n, 3) uint8 array."""
    k = max(intensity, 0.0)
    scaled = (pixels.astype(np.float64) * k).astype(np.int64) & 0xFF
    return scaled.astype(np.uint8)


def flat_color(style: DrawStyle, intensity: float, rng: random.Random | None = None) -> Color:
    """Lit color for the solid styles; textured styles have no single color."""
    if style.kind == FILLED:
        return style.color.scale(intensity)
    if style.kind == RANDOM:
        return Color.random(rng).scale(intensity)
    raise ValueError(f"no flat color for {style.kind!r} style")


def _solid(color: Color) -> Shader:
    rgb = np.array(color, dtype=np.uint8)

    def shade(a, b, c):
        return np.broadcast_to(rgb, (a.size, 3))

    return shade


def make_shader(style: DrawStyle, intensity: float, rng: random.Random | None = None) -> Shader:
    """Resolve a style into a per-pixel color function for one triangle.

    The style is inspected here, once per triangle. A random style rolls its
    color now so every pixel of the triangle shares it.
    """
    if style.kind in (FILLED, RANDOM):
        return _solid(flat_color(style, intensity, rng))

    if style.kind == TEXTURED:
        if style.uvs is None or len(style.uvs) != 3:
            raise ValueError("textured style needs three texture coordinates per triangle")
        t1, t2, t3 = style.uvs
        texture = style.texture

        def shade(a, b, c):
            us = a * t1.x + b * t2.x + c * t3.x
            vs = a * t1.y + b * t2.y + c * t3.y
            return scale_pixels(texture.sample_many(us, vs), intensity)

        return shade

    if style.kind == WIREFRAME:
        raise ValueError("wireframe style draws edges and has no pixel shader")
    raise ValueError(f"unknown draw style {style.kind!r}")
