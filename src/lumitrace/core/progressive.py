"""Progressive renderer for iterative sample accumulation.

This module wraps the pixel loop and the film to support:
- Progressive rendering that refines over time
- Batch rendering (several samples per pixel per pass)
- Progress callbacks for UI updates
- Easy reset and re-render

Every batch is one pass of the pixel loop with its own pass index, so a
given seed and batch schedule always reproduce the same image.

Example:
    >>> from lumitrace.core.progressive import ProgressiveRenderer
    >>> from lumitrace.core.render import RenderConfig
    >>> from lumitrace.scene.cornell_box import cornell_box
    >>>
    >>> config = RenderConfig(width=200, height=200, seed=7, workers=4)
    >>> renderer = ProgressiveRenderer(cornell_box(config.aspect_ratio), config)
    >>> renderer.render(64, batch_size=16)
    >>> image = renderer.get_image_numpy(gamma=2.0)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path

import numpy as np
import numpy.typing as npt

from lumitrace.core.film import Film
from lumitrace.core.render import RenderConfig, render_pass
from lumitrace.scene.scene import Scene

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (current_samples, total_target_samples)
ProgressCallback = Callable[[int, int], None]


class ProgressiveRenderer:
    """A progressive renderer that accumulates samples over time.

    Attributes:
        scene: The scene being rendered.
        config: Image size, depth, seed and worker count.
    """

    def __init__(self, scene: Scene, config: RenderConfig, arch: str = "cpu") -> None:
        self.scene = scene
        self.config = config
        self._passes = 0
        self._film = Film(arch)
        self._film.setup(config.width, config.height)

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def sample_count(self) -> int:
        """Get the current number of accumulated samples per pixel."""
        return self._film.sample_count

    @property
    def pass_count(self) -> int:
        return self._passes

    def reset(self) -> None:
        """Clear the accumulated image; the next pass starts from index 0."""
        self._film.clear()
        self._passes = 0

    def _render_batch(self, batch: int) -> None:
        pass_mean = render_pass(self.scene, self.config, samples=batch, pass_index=self._passes)
        self._film.add_pass(pass_mean, batch)
        self._passes += 1

    def render_progressive(
        self,
        num_samples: int = 1,
        batch_size: int = 1,
    ) -> Generator[tuple[int, int], None, None]:
        """Render samples progressively, yielding progress after each batch.

        Args:
            num_samples: Total number of samples per pixel to add.
            batch_size: Samples per pixel rendered before each yield.

        Yields:
            Tuple of (current_total_samples, target_total_samples).
        """
        if num_samples <= 0:
            return
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")

        target_samples = self.sample_count + num_samples
        logger.info(
            "Rendering %s: %d spp in batches of %d", self.scene.name, num_samples, batch_size
        )

        remaining = num_samples
        while remaining > 0:
            batch = min(batch_size, remaining)
            self._render_batch(batch)
            remaining -= batch
            yield (self.sample_count, target_samples)

    def render(
        self,
        num_samples: int = 1,
        batch_size: int = 1,
        callback: ProgressCallback | None = None,
    ) -> None:
        """Render samples progressively with optional progress callback.

        Accumulates into the existing image; call repeatedly to keep refining.

        Args:
            num_samples: Total number of samples per pixel to add.
            batch_size: Samples per pixel rendered before each callback.
            callback: Called after each batch with
                (current_total_samples, target_total_samples).

        Example:
            >>> def progress(current, target):
            ...     print(f"Progress: {current}/{target} samples")
            >>> renderer.render(100, batch_size=10, callback=progress)
        """
        for current, target in self.render_progressive(num_samples, batch_size):
            if callback is not None:
                callback(current, target)

    def get_linear_numpy(self) -> npt.NDArray[np.float32]:
        """Accumulated linear radiance, unclamped, shape (height, width, 3)."""
        return self._film.to_numpy()

    def get_image_numpy(self, gamma: float = 1.0) -> npt.NDArray[np.float32]:
        """Get the rendered image clamped to [0, 1] and optionally gamma corrected.

        Args:
            gamma: Gamma correction value. Default 1.0 (linear).

        Returns:
            NumPy array of shape (height, width, 3) with dtype float32.
        """
        image = np.clip(self.get_linear_numpy(), 0.0, 1.0)
        if gamma != 1.0:
            image = np.power(image, 1.0 / gamma)
        return image.astype(np.float32)

    def get_image_uint8(self, gamma: float = 2.0) -> npt.NDArray[np.uint8]:
        """Get the rendered image as an 8-bit array (gamma 2 by default)."""
        from lumitrace.preview.export import image_to_uint8

        return image_to_uint8(self.get_image_numpy(gamma=gamma))

    def save_image(self, filepath: str | Path, gamma: float = 2.0) -> None:
        """Save the rendered image; the format follows the file extension."""
        from lumitrace.preview.export import save_image_from_array

        save_image_from_array(self.get_image_uint8(gamma=gamma), filepath)

    def __repr__(self) -> str:
        return (
            f"ProgressiveRenderer(width={self.width}, height={self.height}, "
            f"samples={self.sample_count})"
        )
