"""Row-parallel pixel loop.

A pass renders ``samples`` rays per pixel over the whole image and returns
the per-pixel mean. Rows are independent tasks: each row draws from its own
generator seeded with ``SeedSequence(seed, spawn_key=(pass_index, row))``,
so the output of a pass depends only on the seed and pass index, never on
the number of workers or on the order rows complete in.

With ``workers > 1`` the rows are distributed over a process pool; each
worker receives the scene once through the pool initializer. ``workers=1``
renders in the calling process.

Example:
    >>> from lumitrace.core.render import RenderConfig, render_image
    >>> from lumitrace.scene.cornell_box import cornell_box
    >>> config = RenderConfig(width=200, height=200, samples_per_pixel=16, workers=4)
    >>> image = render_image(cornell_box(config.aspect_ratio), config)
"""

from __future__ import annotations

import logging
import os
import time
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from lumitrace.core.integrator import ray_color
from lumitrace.scene.scene import Scene

logger = logging.getLogger(__name__)


@dataclass
class RenderConfig:
    """Settings for one render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Total samples per pixel.
        max_depth: Maximum number of bounces per path.
        seed: Seed for every random stream used while rendering.
        workers: Worker processes; None uses every CPU.
    """

    width: int = 400
    height: int = 225
    samples_per_pixel: int = 100
    max_depth: int = 50
    seed: int = 0
    workers: int | None = 1

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {self.width}x{self.height}")
        if self.samples_per_pixel <= 0:
            raise ValueError("samples_per_pixel must be positive")
        if self.max_depth <= 0:
            raise ValueError("max_depth must be positive")
        if self.seed < 0:
            raise ValueError("seed must be non-negative")
        if self.workers is not None and self.workers <= 0:
            raise ValueError("workers must be positive")

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def resolved_workers(self) -> int:
        return self.workers if self.workers is not None else (os.cpu_count() or 1)


def row_generator(seed: int, pass_index: int, row: int) -> np.random.Generator:
    """Private random generator for one row of one pass."""
    return np.random.default_rng(np.random.SeedSequence(entropy=seed, spawn_key=(pass_index, row)))


def render_row(
    scene: Scene,
    width: int,
    height: int,
    row: int,
    samples: int,
    max_depth: int,
    seed: int,
    pass_index: int = 0,
) -> npt.NDArray[np.float64]:
    """Render one image row (row 0 is the top) and return per-pixel means.

    Returns:
        Array of shape (width, 3).
    """
    rng = row_generator(seed, pass_index, row)
    j = height - 1 - row
    out = np.zeros((width, 3))

    for i in range(width):
        r = g = b = 0.0
        for _ in range(samples):
            s = (i + rng.random()) / width
            t = (j + rng.random()) / height
            ray = scene.camera.get_ray(s, t, rng)
            color = ray_color(ray, scene.world, scene.background, max_depth, rng, scene.lights)
            r += color.x
            g += color.y
            b += color.z
        out[i] = (r / samples, g / samples, b / samples)

    return out


# =============================================================================
# Worker Pool
# =============================================================================

_worker_scene: Scene | None = None


def _init_worker(scene: Scene) -> None:
    global _worker_scene
    _worker_scene = scene


def _render_row_task(args: tuple[int, int, int, int, int, int, int]) -> tuple[int, npt.NDArray]:
    row, width, height, samples, max_depth, seed, pass_index = args
    return row, render_row(_worker_scene, width, height, row, samples, max_depth, seed, pass_index)


def render_pass(
    scene: Scene,
    config: RenderConfig,
    samples: int | None = None,
    pass_index: int = 0,
) -> npt.NDArray[np.float64]:
    """Render one pass over the whole image.

    Args:
        scene: Scene to render.
        config: Image size, depth, seed and worker count.
        samples: Samples per pixel in this pass. Defaults to
            ``config.samples_per_pixel``.
        pass_index: Distinguishes the random streams of successive passes.

    Returns:
        Per-pixel mean radiance, shape (height, width, 3), row 0 at the top.
    """
    if samples is None:
        samples = config.samples_per_pixel
    if samples <= 0:
        raise ValueError("samples must be positive")

    width, height = config.width, config.height
    workers = min(config.resolved_workers(), height)
    image = np.zeros((height, width, 3))

    logger.debug(
        "Pass %d: %dx%d, %d spp, %d worker(s)", pass_index, width, height, samples, workers
    )
    start = time.perf_counter()

    if workers == 1:
        for row in range(height):
            image[row] = render_row(
                scene, width, height, row, samples, config.max_depth, config.seed, pass_index
            )
    else:
        tasks = [
            (row, width, height, samples, config.max_depth, config.seed, pass_index)
            for row in range(height)
        ]
        chunksize = max(1, height // (workers * 4))
        with ProcessPoolExecutor(
            max_workers=workers, initializer=_init_worker, initargs=(scene,)
        ) as pool:
            for row, values in pool.map(_render_row_task, tasks, chunksize=chunksize):
                image[row] = values

    logger.debug("Pass %d finished in %.2fs", pass_index, time.perf_counter() - start)
    return image


def render_image(scene: Scene, config: RenderConfig) -> npt.NDArray[np.float64]:
    """Render ``config.samples_per_pixel`` samples in a single pass.

    Returns:
        Linear radiance, shape (height, width, 3), row 0 at the top.
    """
    logger.info(
        "Rendering %s at %dx%d with %d spp",
        scene.name,
        config.width,
        config.height,
        config.samples_per_pixel,
    )
    return render_pass(scene, config)
