"""Taichi accumulation buffer for progressive rendering.

The film keeps a running per-pixel mean of every pass folded into it. Each
pass arrives as a NumPy array of per-pixel means together with the number of
samples behind them; a Taichi kernel scrubs non-finite values, clamps
negatives and merges the pass:

    n_new = n_old + spp
    mean_new = mean_old + (pass_mean - mean_old) * spp / n_new

Buffers are laid out in image order: row 0 is the top of the picture.

Example:
    >>> from lumitrace.core.film import Film
    >>> film = Film()
    >>> film.setup(320, 240)
    >>> film.add_pass(pass_mean, samples_per_pixel=4)
    >>> image = film.to_numpy()
"""

import logging

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

logger = logging.getLogger(__name__)

# Type alias for 3D vectors
vec3 = tm.vec3

_backend_initialized = False


def init_backend(arch: str = "cpu") -> None:
    """Initialize the Taichi runtime once per process.

    Later calls are no-ops, so fields allocated by one film are never
    invalidated by another film re-initializing the runtime.

    Args:
        arch: Taichi architecture name, e.g. "cpu", "gpu" or "vulkan".
    """
    global _backend_initialized
    if _backend_initialized:
        return
    ti.init(arch=getattr(ti, arch), default_fp=ti.f32)
    _backend_initialized = True
    logger.debug("Initialized Taichi backend (%s)", arch)


@ti.kernel
def _accumulate(
    color: ti.template(),
    count: ti.template(),
    sample: ti.types.ndarray(),
    spp: ti.i32,
):
    for r, c in color:
        value = vec3(sample[r, c, 0], sample[r, c, 1], sample[r, c, 2])

        # Replace NaN/Inf with zero, then clamp negatives
        for k in ti.static(range(3)):
            if tm.isnan(value[k]) or tm.isinf(value[k]):
                value[k] = 0.0
        value = tm.max(value, vec3(0.0, 0.0, 0.0))

        count[r, c] += spp
        n = count[r, c]
        color[r, c] += (value - color[r, c]) * (ti.cast(spp, ti.f32) / ti.cast(n, ti.f32))


class Film:
    """Per-pixel running mean of linear radiance, stored in Taichi fields."""

    def __init__(self, arch: str = "cpu") -> None:
        init_backend(arch)
        self._width = 0
        self._height = 0
        self._color = None
        self._count = None

    def setup(self, width: int, height: int) -> None:
        """Allocate (or reallocate) the buffers and clear them.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Film dimensions must be positive, got {width}x{height}")
        if (width, height) != (self._width, self._height) or self._color is None:
            self._color = ti.Vector.field(3, dtype=ti.f32, shape=(height, width))
            self._count = ti.field(dtype=ti.i32, shape=(height, width))
            self._width = width
            self._height = height
        self.clear()

    def _check_setup(self) -> None:
        if self._color is None:
            raise RuntimeError("Film not set up. Call setup() first.")

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def sample_count(self) -> int:
        """Samples accumulated per pixel (uniform across the film)."""
        self._check_setup()
        return int(self._count[0, 0])

    def clear(self) -> None:
        """Zero the color buffer and sample counts."""
        self._check_setup()
        self._color.fill(0.0)
        self._count.fill(0)

    def add_pass(self, pass_mean: npt.NDArray, samples_per_pixel: int) -> None:
        """Fold one pass of per-pixel means into the running average.

        Args:
            pass_mean: Array of shape (height, width, 3).
            samples_per_pixel: Number of samples averaged in ``pass_mean``.

        Raises:
            RuntimeError: If the film has not been set up.
            ValueError: On a shape mismatch or a non-positive sample count.
        """
        self._check_setup()
        expected = (self._height, self._width, 3)
        if pass_mean.shape != expected:
            raise ValueError(f"Pass shape {pass_mean.shape} does not match film {expected}")
        if samples_per_pixel <= 0:
            raise ValueError("samples_per_pixel must be positive")

        sample = np.ascontiguousarray(pass_mean, dtype=np.float32)
        _accumulate(self._color, self._count, sample, samples_per_pixel)

    def to_numpy(self) -> npt.NDArray[np.float32]:
        """Linear (unclamped) image of shape (height, width, 3)."""
        self._check_setup()
        return self._color.to_numpy().astype(np.float32)
