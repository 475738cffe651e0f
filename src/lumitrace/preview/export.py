"""Image export through Pillow.

Images are written as 8-bit RGB; the file format follows the extension, so
``.png`` and ``.ppm`` (the plain format the renderer historically wrote)
both work.

Example:
    >>> from lumitrace.preview.export import save_png
    >>> save_png(renderer, "cornell.png", tone_map="reinhard")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from lumitrace.preview.display import ToneMapMethod, process_image_for_display

if TYPE_CHECKING:
    from lumitrace.core.progressive import ProgressiveRenderer

logger = logging.getLogger(__name__)


def image_to_uint8(image: npt.NDArray) -> npt.NDArray[np.uint8]:
    """Quantize a display-ready [0, 1] image to 8 bits.

    Each channel maps to ``int(256 * clamp(c, 0, 0.999))`` so that 1.0 lands
    on 255 and every bin has equal width.
    """
    clamped = np.clip(np.asarray(image, dtype=np.float64), 0.0, 0.999)
    return (256.0 * clamped).astype(np.uint8)


def encode_image(
    image: npt.NDArray,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.0,
    exposure: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Tone map, gamma encode and quantize a linear image."""
    processed = process_image_for_display(image, tone_map=tone_map, gamma=gamma, exposure=exposure)
    return image_to_uint8(processed)


def save_image_from_array(image: npt.NDArray, filepath: str | Path) -> None:
    """Write an (H, W, 3) array to ``filepath``.

    uint8 arrays are written as-is; float arrays are treated as display-ready
    values in [0, 1] and quantized first.
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {image.shape}")
    if image.dtype != np.uint8:
        image = image_to_uint8(image)

    path = Path(filepath)
    PILImage.fromarray(np.ascontiguousarray(image)).save(path)
    logger.info("Wrote %dx%d image to %s", image.shape[1], image.shape[0], path)


def save_png(
    renderer: ProgressiveRenderer,
    filepath: str | Path,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.0,
    exposure: float = 1.0,
) -> None:
    """Encode the renderer's accumulated image and write it to ``filepath``."""
    encoded = encode_image(
        renderer.get_linear_numpy(), tone_map=tone_map, gamma=gamma, exposure=exposure
    )
    save_image_from_array(encoded, filepath)


def compute_rmse(image_a: npt.NDArray, image_b: npt.NDArray) -> float:
    """Root mean squared error between two images of the same shape.

    Raises:
        ValueError: If the shapes differ.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(f"Image shapes must match: {image_a.shape} vs {image_b.shape}")
    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
