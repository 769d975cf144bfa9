from __future__ import annotations

from collections.abc import Callable

import numpy as np

from .color import Color


class Canvas:
    """Software framebuffer with a per-pixel depth buffer.

    Both buffers are flat arrays indexed by ``y * width + x``. The origin is
    bottom-left; `export` flips rows for top-left image formats. Depth holds
    the largest z accepted so far (larger is nearer) and starts at -inf.
    """

    def __init__(self, width: int, height: int):
        self.width = int(width)
        self.height = int(height)
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"canvas size must be positive, got {width}x{height}")
        size = self.width * self.height
        self.color = np.zeros((size, 3), dtype=np.uint8)
        self.depth = np.full(size, -np.inf, dtype=np.float64)

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} canvas")
        return y * self.width + x

    def clear(self, color: tuple[int, int, int]) -> None:
        self.color[:, 0] = color[0]
        self.color[:, 1] = color[1]
        self.color[:, 2] = color[2]

    def clear_depth(self) -> None:
        self.depth.fill(-np.inf)

    def point(self, x: int, y: int, color: tuple[int, int, int]) -> None:
        self.color[self._index(x, y)] = color

    def get(self, x: int, y: int) -> Color:
        r, g, b = self.color[self._index(x, y)]
        return Color(int(r), int(g), int(b))

    def depth_at(self, x: int, y: int) -> float:
        return float(self.depth[self._index(x, y)])

    def check_and_set_depth(self, x: int, y: int, z: float) -> bool:
        i = self._index(x, y)
        # NaN never compares greater, so it is rejected here.
        if z > self.depth[i]:
            self.depth[i] = z
            return True
        return False

    def plot(
        self,
        xs: np.ndarray,
        ys: np.ndarray,
        zs: np.ndarray,
        shade: Callable[[np.ndarray], np.ndarray],
    ) -> int:
        """Depth-test many distinct pixels and write the ones that pass.

        ``shade(keep)`` receives the boolean pass mask over the inputs and
        must return an (n, 3) uint8 array, one color per passing pixel.
        Depth and color are updated together here and nowhere else.
        """
        if xs.size == 0:
            return 0
        idx = ys * self.width + xs
        keep = zs > self.depth[idx]
        if not np.any(keep):
            return 0
        kidx = idx[keep]
        self.depth[kidx] = zs[keep]
        self.color[kidx] = shade(keep)
        return int(kidx.size)

    def line(self, x0: int, y0: int, x1: int, y1: int, color: tuple[int, int, int]) -> None:
        # Local import: the rasterizer depends on Canvas.
        from .rasterizer import draw_line

        draw_line(self, x0, y0, x1, y1, color)

    def export(self) -> np.ndarray:
        """(height, width, 3) uint8 pixels, top row first."""
        return self.color.reshape(self.height, self.width, 3)[::-1].copy()
