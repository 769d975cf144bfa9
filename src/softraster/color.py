from __future__ import annotations

import random
from collections import namedtuple


class Color(namedtuple("Color", ["r", "g", "b"])):
    """8-bit RGB triple. Plain tuple underneath, so numpy accepts it as-is."""

    __slots__ = ()

    def scale(self, factor: float) -> Color:
        # Negative light clamps to black; results narrow to 8 bits by
        # wrapping, the same as an unsigned byte cast.
        k = max(factor, 0.0)
        return Color(
            int(self.r * k) & 0xFF,
            int(self.g * k) & 0xFF,
            int(self.b * k) & 0xFF,
        )

    @classmethod
    def random(cls, rng: random.Random | None = None) -> Color:
        src = rng if rng is not None else random
        return cls(src.randrange(256), src.randrange(256), src.randrange(256))

    @classmethod
    def from_hex(cls, text: str) -> Color:
        val = str(text).strip().lstrip("#")
        if len(val) != 6:
            raise ValueError(f"expected #RRGGBB, got {text!r}")
        try:
            return cls(int(val[0:2], 16), int(val[2:4], 16), int(val[4:6], 16))
        except ValueError:
            raise ValueError(f"expected #RRGGBB, got {text!r}") from None


BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)
