"""8-bit textures with wrap-around addressing and point or bilinear sampling."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
from PIL import Image as PILImage

from hlabgfx.geometry import Vec2, Vec3


def interpolate_bilinear(
    dx: float, dy: float, c00: Vec3, c10: Vec3, c01: Vec3, c11: Vec3
) -> Vec3:
    """Blend four corner colours by the fractional offsets ``dx`` and ``dy``."""
    a = c00 * (1.0 - dx) + c10 * dx
    b = c01 * (1.0 - dx) + c11 * dx
    return a * (1.0 - dy) + b * dy


class Texture:
    """An image held as a (height, width, channels) uint8 array."""

    def __init__(self, image):
        array = np.asarray(image, dtype=np.uint8)
        if array.ndim != 3 or array.shape[2] < 3:
            raise ValueError("image must have shape (height, width, channels>=3)")
        if array.shape[0] == 0 or array.shape[1] == 0:
            raise ValueError("texture must not be empty")
        self.image = array

    @property
    def width(self) -> int:
        return self.image.shape[1]

    @property
    def height(self) -> int:
        return self.image.shape[0]

    @property
    def channels(self) -> int:
        return self.image.shape[2]

    def get_wrapped(self, i: int, j: int) -> Vec3:
        """Return the RGB colour at column ``i``, row ``j``, wrapping at the edges."""
        r, g, b = self.image[j % self.height, i % self.width, :3]
        return Vec3(r / 255.0, g / 255.0, b / 255.0)

    def sample_point(self, uv: Vec2) -> Vec3:
        """Nearest-texel sampling."""
        x = uv.x * self.width - 0.5 + 0.5
        y = uv.y * self.height - 0.5 + 0.5
        return self.get_wrapped(int(x), int(y))

    def sample_linear(self, uv: Vec2) -> Vec3:
        """Bilinear sampling between the four nearest texel centres."""
        x = uv.x * self.width - 0.5
        y = uv.y * self.height - 0.5
        i = math.floor(x)
        j = math.floor(y)
        return interpolate_bilinear(
            x - i,
            y - j,
            self.get_wrapped(i, j),
            self.get_wrapped(i + 1, j),
            self.get_wrapped(i, j + 1),
            self.get_wrapped(i + 1, j + 1),
        )


def load_texture(filename) -> Texture:
    """Read an image file as a texture, keeping an alpha channel if it has one."""
    with PILImage.open(filename) as source:
        has_alpha = source.mode in ("RGBA", "LA") or (
            source.mode == "P" and "transparency" in source.info
        )
        data = np.array(source.convert("RGBA" if has_alpha else "RGB"), dtype=np.uint8)
    return Texture(data)


def texture_from_pixels(width: int, height: int, pixels: Sequence[Vec3]) -> Texture:
    """Build an RGB texture from row-major colours in [0, 1]."""
    if len(pixels) != width * height:
        raise ValueError(
            f"expected {width * height} pixels for {width}x{height}, got {len(pixels)}"
        )
    data = np.array([tuple(colour) for colour in pixels], dtype=np.float64)
    scaled = np.clip(data * 255.0, 0.0, 255.0).astype(np.uint8)
    return Texture(scaled.reshape(height, width, 3))