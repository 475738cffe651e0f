"""Thin-lens camera with a shutter interval.

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

The focus plane sits ``focus_dist`` in front of the lens. Rays start at a
random point on a lens disk of radius ``aperture / 2``, which blurs
everything off the focus plane; an aperture of 0 is a pinhole. Each ray also
carries a time drawn uniformly from the shutter interval, which produces
motion blur for moving spheres.

Example:
    >>> import numpy as np
    >>> from lumitrace.camera.camera import Camera
    >>> camera = Camera(
    ...     lookfrom=Vec3(278, 278, -800),
    ...     lookat=Vec3(278, 278, 0),
    ...     vfov=40.0,
    ...     aspect_ratio=1.0,
    ... )
    >>> ray = camera.get_ray(0.5, 0.5, np.random.default_rng(0))
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from lumitrace.core.ray import Ray, random_in_unit_disk
from lumitrace.core.vec3 import Point3, Vec3


@dataclass
class Camera:
    """Configuration and derived geometry of a thin-lens camera.

    Attributes:
        lookfrom: Camera position in world space.
        lookat: Point the camera is looking at.
        vup: Up direction used to orient the camera.
        vfov: Vertical field of view in degrees.
        aspect_ratio: Width divided by height of the output image.
        aperture: Lens diameter; 0 disables depth of field.
        focus_dist: Distance from the lens to the plane in perfect focus.
        time0: Shutter open time.
        time1: Shutter close time.
    """

    lookfrom: Point3
    lookat: Point3
    vup: Vec3 = field(default_factory=lambda: Vec3(0.0, 1.0, 0.0))
    vfov: float = 40.0
    aspect_ratio: float = 1.0
    aperture: float = 0.0
    focus_dist: float = 10.0
    time0: float = 0.0
    time1: float = 0.0

    def __post_init__(self) -> None:
        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"vfov must be in (0, 180) degrees, got {self.vfov}")
        if self.aspect_ratio <= 0.0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if self.aperture < 0.0:
            raise ValueError(f"aperture must be non-negative, got {self.aperture}")
        if self.focus_dist <= 0.0:
            raise ValueError(f"focus_dist must be positive, got {self.focus_dist}")
        if self.time1 < self.time0:
            raise ValueError("Shutter interval must satisfy time0 <= time1")

        theta = math.radians(self.vfov)
        h = math.tan(theta / 2.0)
        viewport_height = 2.0 * h
        viewport_width = self.aspect_ratio * viewport_height

        self.w = (self.lookfrom - self.lookat).unit_vector()
        self.u = self.vup.cross(self.w).unit_vector()
        self.v = self.w.cross(self.u)

        self.origin = self.lookfrom
        self.horizontal = self.u * (viewport_width * self.focus_dist)
        self.vertical = self.v * (viewport_height * self.focus_dist)
        self.lower_left_corner = (
            self.origin
            - self.horizontal / 2.0
            - self.vertical / 2.0
            - self.w * self.focus_dist
        )
        self.lens_radius = self.aperture / 2.0

    def get_ray(self, s: float, t: float, rng) -> Ray:
        """Generate a ray through normalized image coordinates (s, t).

        Args:
            s: Horizontal coordinate, 0 at the left edge and 1 at the right.
            t: Vertical coordinate, 0 at the bottom and 1 at the top.
            rng: ``numpy.random.Generator`` for lens and time samples.
        """
        if self.lens_radius > 0.0:
            rd = random_in_unit_disk(rng) * self.lens_radius
            offset = self.u * rd.x + self.v * rd.y
        else:
            offset = Vec3(0.0, 0.0, 0.0)

        if self.time1 > self.time0:
            time = self.time0 + (self.time1 - self.time0) * rng.random()
        else:
            time = self.time0

        origin = self.origin + offset
        direction = (
            self.lower_left_corner + self.horizontal * s + self.vertical * t - origin
        )
        return Ray(origin, direction, time)
