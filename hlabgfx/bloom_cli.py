"""Command that applies the bloom effect to an image file and saves a PNG."""

from __future__ import annotations

import argparse
import sys
import time

from hlabgfx.image import Image


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Apply a bloom effect to an image and write the result as PNG."
    )
    parser.add_argument("input", nargs="?", default="image_1_360.jpg")
    parser.add_argument("output", nargs="?", default="result.png")
    parser.add_argument("--threshold", type=float, default=0.1)
    parser.add_argument("--repeat", type=int, default=100)
    parser.add_argument("--weight", type=float, default=0.5)
    return parser


def main(argv=None) -> int:
    args = _parser().parse_args(argv)

    image = Image()
    try:
        image.read_from_file(args.input)
    except OSError:
        print(f"Error: reading {args.input} failed.", file=sys.stderr)
        return 1
    print(image.width, image.height, image.channels)

    start = time.perf_counter()
    image.bloom(args.threshold, args.repeat, args.weight)
    elapsed_ms = int((time.perf_counter() - start) * 1000)
    print(f"{elapsed_ms / 1000.0} sec")

    image.write_png(args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())