"""Floating-point RGBA images with separable blurs and a bloom effect."""

from __future__ import annotations

from collections.abc import Callable, Sequence

import numpy as np
from PIL import Image as PILImage

_BOX_SCALE = np.float32(0.2)
_GAUSSIAN_WEIGHTS = tuple(
    np.float32(w) for w in (0.0545, 0.2442, 0.4026, 0.2442, 0.0545)
)
_LUMINANCE = (np.float32(0.2126), np.float32(0.7152), np.float32(0.0722))
_KERNEL_SIZE = 5


def _windows(rgb: np.ndarray, axis: int) -> list[np.ndarray]:
    """Return the five edge-clamped neighbour planes along ``axis``, offsets -2..2."""
    radius = _KERNEL_SIZE // 2
    pad = [(0, 0)] * rgb.ndim
    pad[axis] = (radius, radius)
    padded = np.pad(rgb, pad, mode="edge")
    length = rgb.shape[axis]
    planes = []
    for k in range(_KERNEL_SIZE):
        index = [slice(None)] * rgb.ndim
        index[axis] = slice(k, k + length)
        planes.append(padded[tuple(index)])
    return planes


def _box(planes: Sequence[np.ndarray]) -> np.ndarray:
    total = np.zeros_like(planes[0])
    for plane in planes:
        total += plane
    return total * _BOX_SCALE


def _gaussian(planes: Sequence[np.ndarray]) -> np.ndarray:
    total = np.zeros_like(planes[0])
    for plane, weight in zip(planes, _GAUSSIAN_WEIGHTS):
        total += plane * weight
    return total


class Image:
    """An image held as a (height, width, 4) float32 array of RGBA values in [0, 1]."""

    def __init__(self, pixels=None, channels: int = 0):
        if pixels is None:
            pixels = np.zeros((0, 0, 4), dtype=np.float32)
        array = np.array(pixels, dtype=np.float32)
        if array.ndim != 3 or array.shape[2] != 4:
            raise ValueError("pixels must have shape (height, width, 4)")
        self.pixels = array
        self.channels = channels

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def read_from_file(self, filename) -> None:
        """Load an image file; RGB is scaled to [0, 1] and alpha set to 1."""
        with PILImage.open(filename) as source:
            has_alpha = source.mode in ("RGBA", "LA") or (
                source.mode == "P" and "transparency" in source.info
            )
            converted = source.convert("RGBA" if has_alpha else "RGB")
            data = np.asarray(converted, dtype=np.float32)
        height, width, channels = data.shape
        pixels = np.ones((height, width, 4), dtype=np.float32)
        pixels[..., :3] = data[..., :3] / np.float32(255.0)
        self.pixels = pixels
        self.channels = channels

    def write_png(self, filename) -> None:
        """Write the image as 8-bit PNG with the channel count it was read with.

        Only the colour channels are written; a fourth channel stays zero.
        """
        if self.channels not in (3, 4):
            raise ValueError(f"cannot write an image with {self.channels} channels")
        out = np.zeros((self.height, self.width, self.channels), dtype=np.uint8)
        scaled = self.pixels[..., :3] * np.float32(255.0)
        out[..., :3] = np.clip(scaled, 0.0, 255.0).astype(np.uint8)
        PILImage.fromarray(out).save(filename, format="PNG")

    def get_pixel(self, i: int, j: int) -> np.ndarray:
        """Return a writable view of the pixel at column i, row j, clamped to the edges."""
        i = min(max(i, 0), self.width - 1)
        j = min(max(j, 0), self.height - 1)
        return self.pixels[j, i]

    def _separable(self, combine: Callable[[Sequence[np.ndarray]], np.ndarray]) -> None:
        if self.pixels.size == 0:
            return
        for axis in (1, 0):
            rgb = self.pixels[..., :3]
            self.pixels[..., :3] = combine(_windows(rgb, axis))

    def box_blur5(self) -> None:
        """Average each pixel with its two neighbours on each side, across then down."""
        self._separable(_box)

    def gaussian_blur5(self) -> None:
        """Apply a five-tap Gaussian kernel across then down."""
        self._separable(_gaussian)

    def bloom(self, th: float, num_repeat: int, weight: float = 1.0) -> None:
        """Blur the parts brighter than ``th`` and add the weighted original back."""
        backup = self.pixels.copy()
        rgb = self.pixels[..., :3]
        luminance = (
            rgb[..., 0] * _LUMINANCE[0]
            + _LUMINANCE[1] * rgb[..., 1]
            + _LUMINANCE[2] * rgb[..., 2]
        )
        rgb[luminance < np.float32(th)] = 0.0
        for _ in range(num_repeat):
            self.gaussian_blur5()
        combined = self.pixels[..., :3] + backup[..., :3] * np.float32(weight)
        self.pixels[..., :3] = np.clip(combined, 0.0, 1.0)