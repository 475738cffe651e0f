"""Scene container and backgrounds.

A ``Scene`` bundles everything one render needs: the hittable root, the
camera, the optional light-sampling target and the background seen by rays
that escape.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from lumitrace.camera.camera import Camera
from lumitrace.core.ray import Ray
from lumitrace.core.vec3 import Color
from lumitrace.geometry.hittable import Hittable


class Background(ABC):
    """Radiance for rays that miss every object."""

    @abstractmethod
    def value(self, ray: Ray) -> Color:
        """Return the background radiance seen along ``ray``."""


@dataclass(frozen=True)
class SolidBackground(Background):
    """The same color in every direction."""

    color: Color = field(default_factory=lambda: Color(0.0, 0.0, 0.0))

    def value(self, ray: Ray) -> Color:
        return self.color


@dataclass(frozen=True)
class SkyGradient(Background):
    """Vertical blend from ``horizon`` (looking down) to ``zenith`` (looking up).

    The blend factor is ``0.5 * (unit_direction.y + 1)``.
    """

    horizon: Color = field(default_factory=lambda: Color(1.0, 1.0, 1.0))
    zenith: Color = field(default_factory=lambda: Color(0.5, 0.7, 1.0))

    def value(self, ray: Ray) -> Color:
        unit_direction = ray.direction.unit_vector()
        t = 0.5 * (unit_direction.y + 1.0)
        return self.horizon * (1.0 - t) + self.zenith * t


@dataclass
class Scene:
    """A renderable scene.

    Attributes:
        world: Root of the geometry (BVH or list).
        camera: Camera generating primary rays.
        lights: Light-sampling target, or None to sample materials only.
            Its members must implement ``pdf_value`` and ``random``.
        background: Radiance for escaping rays.
        name: Label used in logs.
    """

    world: Hittable
    camera: Camera
    lights: Hittable | None = None
    background: Background = field(default_factory=SolidBackground)
    name: str = "scene"
