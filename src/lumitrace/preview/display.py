"""Tone mapping, gamma and Matplotlib preview of rendered images.

The renderer produces linear radiance that can exceed 1 (lights, bright
highlights). Before display or export an image goes through:

1. Optional tone mapping that compresses HDR values into [0, 1]
2. Gamma encoding (gamma 2 matches a square-root transfer)
3. A final clamp to [0, 1]

Example:
    >>> from lumitrace.preview.display import process_image_for_display, show_preview
    >>> ready = process_image_for_display(linear, tone_map="reinhard", gamma=2.0)
    >>> show_preview(renderer, tone_map="reinhard")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from lumitrace.core.progressive import ProgressiveRenderer

# Type alias for tone mapping options
ToneMapMethod = Literal["none", "reinhard", "exposure"]

TONE_MAP_METHODS = ("none", "reinhard", "exposure")


def tone_map_reinhard(image: npt.NDArray) -> npt.NDArray[np.float32]:
    """Reinhard operator ``c / (1 + c)`` applied per channel."""
    image = np.maximum(image, 0.0)
    return (image / (1.0 + image)).astype(np.float32)


def tone_map_exposure(image: npt.NDArray, exposure: float = 1.0) -> npt.NDArray[np.float32]:
    """Exposure operator ``1 - exp(-c * exposure)``; larger exposure is brighter."""
    if exposure <= 0.0:
        raise ValueError(f"exposure must be positive, got {exposure}")
    image = np.maximum(image, 0.0)
    return (1.0 - np.exp(-image * exposure)).astype(np.float32)


def apply_gamma(image: npt.NDArray, gamma: float = 2.0) -> npt.NDArray[np.float32]:
    """Clamp to [0, 1] and encode with ``out = in ** (1 / gamma)``."""
    if gamma <= 0.0:
        raise ValueError(f"gamma must be positive, got {gamma}")
    image = np.clip(image, 0.0, 1.0)
    if gamma == 1.0:
        return image.astype(np.float32)
    return np.power(image, 1.0 / gamma).astype(np.float32)


def process_image_for_display(
    image: npt.NDArray,
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.0,
    exposure: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Run the full display pipeline on a linear image.

    Args:
        image: Linear image of shape (H, W, 3).
        tone_map: "none", "reinhard" or "exposure".
        gamma: Gamma encoding exponent.
        exposure: Used by the "exposure" operator only.

    Returns:
        Display-ready float32 image in [0, 1].

    Raises:
        ValueError: For an unknown tone mapping method.
    """
    if tone_map == "reinhard":
        result = tone_map_reinhard(image)
    elif tone_map == "exposure":
        result = tone_map_exposure(image, exposure)
    elif tone_map == "none":
        result = np.asarray(image, dtype=np.float32)
    else:
        raise ValueError(f"Unknown tone mapping method: {tone_map}")

    return np.clip(apply_gamma(result, gamma), 0.0, 1.0)


def show_preview(
    renderer: ProgressiveRenderer,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.0,
    exposure: float = 1.0,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 8),
    block: bool = True,
) -> None:
    """Show the renderer's current image in a Matplotlib window.

    The default title reports the accumulated samples per pixel.
    """
    import matplotlib.pyplot as plt

    display_image = process_image_for_display(
        renderer.get_linear_numpy(), tone_map=tone_map, gamma=gamma, exposure=exposure
    )

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image)
    ax.axis("off")

    if title is None:
        title = f"{renderer.scene.name} - {renderer.sample_count} spp"
        if tone_map != "none":
            title += f" ({tone_map})"
    ax.set_title(title)

    fig.tight_layout()
    plt.show(block=block)
