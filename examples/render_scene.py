#!/usr/bin/env python3
"""Render one of the built-in scenes to an image file.

The image is accumulated progressively: each batch of samples is one pass
over the image, rendered on a pool of worker processes, and folded into the
film. A fixed ``--seed`` reproduces the same image for any ``--workers``.

Usage:
    python examples/render_scene.py [options]

Options:
    --scene NAME        Scene to render (default: cornell_box)
    --width WIDTH       Image width in pixels (default: 400)
    --height HEIGHT     Image height in pixels (default: width / aspect)
    --samples SAMPLES   Samples per pixel (default: 100)
    --max-depth DEPTH   Maximum bounces per path (default: 50)
    --seed SEED         Random seed (default: 0)
    --workers N         Worker processes (default: all CPUs)
    --batch-size SIZE   Samples per progress update (default: 10)
    --output OUTPUT     Output file; .png or .ppm (default: <scene>.png)
    --gamma GAMMA       Gamma encoding exponent (default: 2.0)
    --tone-map METHOD   none, reinhard or exposure (default: none)
    --no-bvh            Test every primitive linearly
    --preview           Show the result in a Matplotlib window
    --quiet             Suppress progress output
    --verbose           Enable debug logging

Example:
    python examples/render_scene.py --scene cornell_sphere --width 200 --samples 64
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from lumitrace.core.progressive import ProgressiveRenderer
from lumitrace.core.render import RenderConfig
from lumitrace.preview.display import TONE_MAP_METHODS, show_preview
from lumitrace.preview.export import save_png
from lumitrace.scene.catalog import SCENE_NAMES, build_scene

logger = logging.getLogger("render_scene")

# Aspect ratio used when only the width is given
DEFAULT_ASPECT = {
    "bouncing_spheres": 16.0 / 9.0,
    "perlin_spheres": 16.0 / 9.0,
    "simple_light": 16.0 / 9.0,
    "material_showcase": 16.0 / 9.0,
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a built-in scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--scene", choices=SCENE_NAMES, default="cornell_box", help="Scene to render")
    parser.add_argument("--width", type=int, default=400, help="Image width in pixels (default: 400)")
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Image height in pixels (default: derived from the scene's aspect ratio)",
    )
    parser.add_argument(
        "--samples", type=int, default=100, help="Samples per pixel (default: 100)"
    )
    parser.add_argument(
        "--max-depth", type=int, default=50, help="Maximum bounces per path (default: 50)"
    )
    parser.add_argument("--seed", type=int, default=0, help="Random seed (default: 0)")
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker processes (default: all CPUs)",
    )
    parser.add_argument(
        "--batch-size", type=int, default=10, help="Samples per progress update (default: 10)"
    )
    parser.add_argument(
        "--output", type=str, default=None, help="Output file path (default: <scene>.png)"
    )
    parser.add_argument("--gamma", type=float, default=2.0, help="Gamma exponent (default: 2.0)")
    parser.add_argument(
        "--tone-map", choices=TONE_MAP_METHODS, default="none", help="Tone mapping method"
    )
    parser.add_argument("--no-bvh", action="store_true", help="Do not build a BVH")
    parser.add_argument("--preview", action="store_true", help="Show the image when done")
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def render_scene(args: argparse.Namespace) -> Path:
    """Render the scene described by ``args`` and save it.

    Returns:
        Path to the saved image file.
    """
    import numpy as np

    height = args.height
    if height is None:
        height = max(1, round(args.width / DEFAULT_ASPECT.get(args.scene, 1.0)))

    config = RenderConfig(
        width=args.width,
        height=height,
        samples_per_pixel=args.samples,
        max_depth=args.max_depth,
        seed=args.seed,
        workers=args.workers,
    )

    if not args.quiet:
        print(f"Creating {args.scene} scene ({config.width}x{config.height})...")
    scene_rng = np.random.default_rng(args.seed)
    scene = build_scene(args.scene, config.aspect_ratio, scene_rng, use_bvh=not args.no_bvh)

    renderer = ProgressiveRenderer(scene, config)

    if not args.quiet:
        print(f"Rendering {config.samples_per_pixel} samples per pixel "
              f"on {config.resolved_workers()} worker(s)...")

    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        if args.quiet:
            return
        elapsed = time.time() - start_time
        progress_pct = (current / target) * 100 if target > 0 else 0
        samples_per_sec = current / elapsed if elapsed > 0 else 0
        print(
            f"\r  Progress: {current}/{target} samples "
            f"({progress_pct:.1f}%) - {samples_per_sec:.2f} spp/s",
            end="",
            flush=True,
        )

    renderer.render(
        num_samples=config.samples_per_pixel,
        batch_size=args.batch_size,
        callback=progress_callback,
    )
    if not args.quiet:
        print()

    output_file = Path(args.output if args.output is not None else f"{args.scene}.png")
    save_png(renderer, output_file, tone_map=args.tone_map, gamma=args.gamma)

    if not args.quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {time.time() - start_time:.2f}s")

    if args.preview:
        show_preview(renderer, tone_map=args.tone_map, gamma=args.gamma)

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        render_scene(args)
        return 0
    except (ValueError, RuntimeError, OSError) as e:
        logger.debug("Render failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
