"""Textures: maps from surface coordinates to color.

Every texture implements ``value(u, v, p) -> Color`` where (u, v) are the
surface texture coordinates from the hit record and ``p`` is the hit point.
Materials accept either a plain ``Color`` or a texture; ``as_texture`` turns
a color into a ``SolidColor``.

Example:
    >>> checker = CheckerTexture(Color(0.2, 0.3, 0.1), Color(0.9, 0.9, 0.9))
    >>> checker.value(0.0, 0.0, Point3(0.1, 0.2, 0.3))
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from pathlib import Path

import numpy as np
from PIL import Image

from lumitrace.core.vec3 import Color, Point3
from lumitrace.materials.perlin import NoiseType, Perlin

logger = logging.getLogger(__name__)

# Returned by an image texture with no pixel data
MISSING_IMAGE_COLOR = Color(0.0, 1.0, 1.0)


class Texture(ABC):
    """A color lookup over a surface."""

    @abstractmethod
    def value(self, u: float, v: float, p: Point3) -> Color:
        """Return the color at texture coordinates (u, v) and point ``p``."""


def as_texture(albedo: Color | Texture) -> Texture:
    """Wrap a plain color in ``SolidColor``; pass textures through."""
    if isinstance(albedo, Texture):
        return albedo
    return SolidColor(albedo)


class SolidColor(Texture):
    """Texture with one color everywhere."""

    def __init__(self, color: Color) -> None:
        self.color = color

    def value(self, u: float, v: float, p: Point3) -> Color:
        return self.color

    def __repr__(self) -> str:
        return f"SolidColor({self.color!r})"


class CheckerTexture(Texture):
    """3-D checker pattern alternating between two textures.

    The cell is chosen by the sign of ``sin(s*x) * sin(s*y) * sin(s*z)``;
    negative picks ``odd``.
    """

    def __init__(self, odd: Color | Texture, even: Color | Texture, scale: float = 10.0) -> None:
        self.odd = as_texture(odd)
        self.even = as_texture(even)
        self.scale = float(scale)

    def value(self, u: float, v: float, p: Point3) -> Color:
        s = self.scale
        sines = math.sin(s * p.x) * math.sin(s * p.y) * math.sin(s * p.z)
        if sines < 0.0:
            return self.odd.value(u, v, p)
        return self.even.value(u, v, p)


class NoiseTexture(Texture):
    """Procedural texture driven by Perlin noise.

    Args:
        perlin: Noise generator.
        noise_type: Noise flavour; decides how noise maps to intensity.
        scale: Spatial frequency multiplier.
        color: Color scaled by the noise intensity.
        depth: Number of turbulence octaves for NET and MARBLE.
        phase: Turbulence amplitude inside the MARBLE sine.
    """

    def __init__(
        self,
        perlin: Perlin,
        noise_type: NoiseType = NoiseType.SMOOTH,
        scale: float = 1.0,
        color: Color = Color(1.0, 1.0, 1.0),
        depth: int = 7,
        phase: float = 10.0,
    ) -> None:
        self.perlin = perlin
        self.noise_type = noise_type
        self.scale = float(scale)
        self.color = color
        self.depth = depth
        self.phase = float(phase)

    def value(self, u: float, v: float, p: Point3) -> Color:
        scaled = p * self.scale
        if self.noise_type is NoiseType.NET:
            intensity = self.perlin.turb(scaled, self.depth, self.noise_type)
        elif self.noise_type is NoiseType.MARBLE:
            turbulence = self.perlin.turb(p, self.depth, self.noise_type)
            intensity = 0.5 * (1.0 + math.sin(scaled.z + self.phase * turbulence))
        elif self.noise_type is NoiseType.SMOOTH:
            # Gradient noise lies in [-1, 1]
            intensity = 0.5 * (1.0 + self.perlin.noise(scaled, self.noise_type))
        else:
            intensity = self.perlin.noise(scaled, self.noise_type)
        return self.color * intensity


class ImageTexture(Texture):
    """Texture looked up from an RGB image.

    ``u`` and ``v`` are clamped to [0, 1] and ``v`` is flipped so that v = 1
    is the top row. Without pixel data the texture is solid cyan, which makes
    a missing image obvious in the render.

    Args:
        data: ``(height, width, 3)`` uint8 array, or None.
    """

    def __init__(self, data: np.ndarray | None = None) -> None:
        self.data = data

    @classmethod
    def from_file(cls, path: str | Path) -> ImageTexture:
        """Load an image through Pillow.

        A file that cannot be read is logged and yields an empty texture.
        """
        try:
            with Image.open(path) as img:
                data = np.asarray(img.convert("RGB"), dtype=np.uint8)
        except OSError as exc:
            logger.error("Could not load texture image %s: %s", path, exc)
            return cls(None)
        logger.debug("Loaded texture image %s (%dx%d)", path, data.shape[1], data.shape[0])
        return cls(data)

    def value(self, u: float, v: float, p: Point3) -> Color:
        if self.data is None:
            return MISSING_IMAGE_COLOR

        height, width = self.data.shape[:2]
        u = min(max(u, 0.0), 1.0)
        v = 1.0 - min(max(v, 0.0), 1.0)

        i = min(int(u * width), width - 1)
        j = min(int(v * height), height - 1)

        r, g, b = self.data[j, i, :3]
        scale = 1.0 / 255.0
        return Color(float(r) * scale, float(g) * scale, float(b) * scale)
