#!/usr/bin/env python3
"""Render the showcase scene.

This script demonstrates end-to-end rendering with the Whitted ray tracer:
it builds the showcase scene (checkered mirror floor, striped wall, three
spheres), renders it on the Taichi CPU backend and writes the image.

Usage:
    python -m examples.render_showcase [options]

Options:
    --width WIDTH       Image width in pixels (default: 400)
    --height HEIGHT     Image height in pixels (default: 225)
    --depth DEPTH       Reflection depth budget (default: 5)
    --output OUTPUT     Output file path, .png or .ppm (default: showcase.png)
    --serial            Evaluate pixels serially instead of in parallel
    --show              Open a Matplotlib preview window after rendering
    --quiet             Suppress progress output

Example:
    python -m examples.render_showcase --width 200 --height 100 --output showcase.ppm
"""

import argparse
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the showcase scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=400,
        help="Image width in pixels (default: 400)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=225,
        help="Image height in pixels (default: 225)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=5,
        help="Reflection depth budget (default: 5)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="showcase.png",
        help="Output file path, .png or .ppm (default: showcase.png)",
    )
    parser.add_argument(
        "--serial",
        action="store_true",
        help="Evaluate pixels serially instead of in parallel",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Open a Matplotlib preview window after rendering",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_showcase(
    width: int = 400,
    height: int = 225,
    depth: int = 5,
    output_path: str = "showcase.png",
    serial: bool = False,
    show: bool = False,
    quiet: bool = False,
) -> Path:
    """Render the showcase scene and save to file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        depth: Reflection depth budget.
        output_path: Output file path; the suffix selects PPM or PNG.
        serial: If True, evaluate pixels serially.
        show: If True, open a preview window when done.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from whitted.preview.export import save_png, save_ppm
    from whitted.scene.showcase import create_showcase_scene

    if not quiet:
        print(f"Creating showcase scene ({width}x{height})...")

    world, camera = create_showcase_scene(width, height)

    if not quiet:
        mode = "serial" if serial else "parallel"
        print(f"Rendering {len(world)} shapes, depth {depth} ({mode})...")

    start_time = time.time()
    image = camera.render(world, remaining=depth, parallel=not serial)
    render_time = time.time() - start_time

    if not quiet:
        print(f"  Rendered in {render_time:.2f}s")

    output_file = Path(output_path)
    if output_file.suffix.lower() == ".ppm":
        save_ppm(image, output_file)
    else:
        save_png(image, output_file)

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")

    if show:
        from whitted.preview.display import show_image

        show_image(image, title=f"Showcase {width}x{height}")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    ti.init(arch=ti.cpu, default_fp=ti.f64)
    if not args.quiet:
        print("Using CPU backend")

    try:
        render_showcase(
            width=args.width,
            height=args.height,
            depth=args.depth,
            output_path=args.output,
            serial=args.serial,
            show=args.show,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
