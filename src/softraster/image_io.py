from __future__ import annotations

import numpy as np
import pygame

from .canvas import Canvas
from .shading import Texture


def save_image(pixels: np.ndarray, path) -> None:
    """Write (h, w, 3) uint8 pixels, top row first, to an image file.

    The format follows the file extension. Raises OSError when the file
    cannot be written.
    """
    h, w = pixels.shape[:2]
    surf = pygame.Surface((w, h), 0, 24)
    # pygame surfarray is (w, h, c), pixel buffers are (h, w, c).
    pygame.surfarray.blit_array(surf, np.transpose(pixels, (1, 0, 2)))
    try:
        pygame.image.save(surf, str(path))
    except pygame.error as e:
        raise OSError(f"could not write image {path}: {e}") from e


def save_canvas(canvas: Canvas, path) -> None:
    save_image(canvas.export(), path)


def load_pixels(path) -> np.ndarray:
    """(h, w, 3) uint8 pixels of an image file, top row first."""
    try:
        surf = pygame.image.load(str(path))
    except (pygame.error, FileNotFoundError) as e:
        raise OSError(f"could not read image {path}: {e}") from e
    return np.ascontiguousarray(np.transpose(pygame.surfarray.array3d(surf), (1, 0, 2)))


def load_texture(path) -> Texture:
    """Load an image as a texture, flipped so row 0 is the bottom (v = 0)."""
    return Texture(load_pixels(path)[::-1])
