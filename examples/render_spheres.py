#!/usr/bin/env python3
"""Render the default sphere scene.

This script renders the fixed demonstration scene (a matte sphere between
two metal spheres on a large ground sphere, seen through a wide-aperture lens)
and writes it as a plain-text PPM file. Run without options it renders the
200x100 image at 100 samples per pixel to hello_world.ppm.

Usage:
    python examples/render_spheres.py [options]

Options:
    --width WIDTH       Image width in pixels (default: 200)
    --height HEIGHT     Image height in pixels (default: 100)
    --samples SAMPLES   Number of samples per pixel (default: 100)
    --seed SEED         Seed of the per-pixel random streams (default: 0)
    --output OUTPUT     Output file path (default: hello_world.ppm)
    --png PNG           Also save a PNG copy to this path
    --cpu               Force the CPU backend
    --quiet             Suppress progress output

Example:
    python examples/render_spheres.py --width 400 --height 200 --samples 50
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the default sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=200,
        help="Image width in pixels (default: 200)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=100,
        help="Image height in pixels (default: 100)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=100,
        help="Number of samples per pixel (default: 100)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Seed of the per-pixel random streams (default: 0)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="hello_world.ppm",
        help="Output file path (default: hello_world.ppm)",
    )
    parser.add_argument(
        "--png",
        type=str,
        default=None,
        help="Also save a PNG copy to this path",
    )
    parser.add_argument(
        "--cpu",
        action="store_true",
        help="Force the CPU backend",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_spheres(
    width: int = 200,
    height: int = 100,
    num_samples: int = 100,
    seed: int = 0,
    output_path: str = "hello_world.ppm",
    png_path: str | None = None,
    quiet: bool = False,
) -> Path:
    """Render the default scene and save it.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        num_samples: Number of samples per pixel.
        seed: Seed of the per-pixel random streams.
        output_path: Output file path (PPM).
        png_path: Optional path of an additional PNG copy.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved PPM file.
    """
    # Lazy imports to allow Taichi initialization first
    from spheretrace.camera.thin_lens import setup_camera
    from spheretrace.core.renderer import Renderer
    from spheretrace.preview.export import save_png
    from spheretrace.scene.default import create_default_scene

    if not quiet:
        print(f"Creating default scene ({width}x{height})...")

    world, camera, settings = create_default_scene(
        width=width,
        height=height,
        samples_per_pixel=num_samples,
        seed=seed,
    )
    setup_camera(camera)

    if not quiet:
        print(f"Rendering {len(world)} spheres at {num_samples} samples per pixel...")

    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (current / target) * 100 if target > 0 else 0
            rows_per_sec = current / elapsed if elapsed > 0 else 0
            print(
                f"\r  Progress: {current}/{target} rows "
                f"({progress_pct:.1f}%) - {rows_per_sec:.1f} rows/s",
                end="",
                flush=True,
            )

    image = Renderer(settings).render(callback=progress_callback)

    if not quiet:
        print()  # Newline after progress

    output_file = Path(output_path)
    image.save(output_file)
    if png_path is not None:
        save_png(image, png_path)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        if png_path is not None:
            print(f"PNG copy: {Path(png_path).absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Initialize Taichi
    # Use GPU if available, fall back to CPU
    if args.cpu:
        ti.init(arch=ti.cpu)
    else:
        try:
            ti.init(arch=ti.gpu)
            if not args.quiet:
                print("Using GPU backend")
        except Exception:
            ti.init(arch=ti.cpu)
            if not args.quiet:
                print("Using CPU backend")

    try:
        render_spheres(
            width=args.width,
            height=args.height,
            num_samples=args.samples,
            seed=args.seed,
            output_path=args.output,
            png_path=args.png,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
