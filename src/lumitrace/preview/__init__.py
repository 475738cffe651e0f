"""Preview module for output and visualization.

Components:
    display: Tone mapping, gamma encoding and Matplotlib preview
    export: 8-bit image export via Pillow (PNG, PPM, ...)

Example:
    >>> from lumitrace.preview import save_png, show_preview
    >>> renderer.render(100)
    >>> show_preview(renderer, tone_map="reinhard")
    >>> save_png(renderer, "output.png", gamma=2.0)
"""

from lumitrace.preview.display import (
    TONE_MAP_METHODS,
    ToneMapMethod,
    apply_gamma,
    process_image_for_display,
    show_preview,
    tone_map_exposure,
    tone_map_reinhard,
)
from lumitrace.preview.export import (
    compute_rmse,
    encode_image,
    image_to_uint8,
    save_image_from_array,
    save_png,
)

__all__ = [
    # Display
    "show_preview",
    "tone_map_reinhard",
    "tone_map_exposure",
    "apply_gamma",
    "process_image_for_display",
    "ToneMapMethod",
    "TONE_MAP_METHODS",
    # Export
    "save_png",
    "save_image_from_array",
    "encode_image",
    "image_to_uint8",
    "compute_rmse",
]
