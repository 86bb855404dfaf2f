"""Command that renders the default ray-traced scene to a PNG file."""

from __future__ import annotations

import argparse
import sys
import time

from hlabgfx.image import Image
from hlabgfx.raytracer import Raytracer, build_default_scene


def _positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {text}")
    return value


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Ray trace the sphere and skybox scene and write it as PNG."
    )
    parser.add_argument("--width", type=_positive_int, default=1280)
    parser.add_argument("--height", type=_positive_int, default=720)
    parser.add_argument("--assets", default=".", help="directory holding the textures")
    parser.add_argument("--output", default="result.png")
    return parser


def main(argv=None) -> int:
    args = _parser().parse_args(argv)

    try:
        objects, light = build_default_scene(args.assets)
    except OSError as exc:
        print(f"Error: loading textures failed: {exc}", file=sys.stderr)
        return 1

    raytracer = Raytracer(args.width, args.height, objects, light)

    start = time.perf_counter()
    pixels = raytracer.render()
    elapsed_ms = int((time.perf_counter() - start) * 1000)
    print(f"{elapsed_ms / 1000.0} sec")

    Image(pixels, channels=3).write_png(args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())