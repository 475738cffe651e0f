"""Homogeneous participating medium (fog, smoke).

The medium fills the volume enclosed by a boundary hittable. A ray entering
the volume travels a random free-flight distance ``-ln(U) / density`` before
scattering; if that distance exceeds the path length inside the boundary the
ray passes through untouched.

The boundary must be convex: the ray is assumed to enter and leave it once.
"""

from __future__ import annotations

import math

from lumitrace.core.aabb import AABB
from lumitrace.core.ray import Ray
from lumitrace.core.vec3 import Color, Vec3
from lumitrace.geometry.hittable import HitRecord, Hittable
from lumitrace.materials.isotropic import Isotropic
from lumitrace.materials.textures import Texture

# Offset past the entry point when searching for the exit point
EXIT_SEARCH_OFFSET = 0.0001


class ConstantMedium(Hittable):
    """Volume of constant density bounded by ``boundary``.

    Args:
        boundary: Convex hittable enclosing the medium.
        density: Scattering density; must be positive.
        albedo: Color or texture for the isotropic phase function.
    """

    def __init__(self, boundary: Hittable, density: float, albedo: Color | Texture) -> None:
        if density <= 0.0:
            raise ValueError(f"Medium density must be positive, got {density}")
        self.boundary = boundary
        self.density = float(density)
        self.neg_inv_density = -1.0 / self.density
        self.phase_function = Isotropic(albedo)

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> HitRecord | None:
        if rng is None:
            raise ValueError("ConstantMedium.hit requires a random generator")

        rec1 = self.boundary.hit(ray, -math.inf, math.inf, rng)
        if rec1 is None:
            return None
        rec2 = self.boundary.hit(ray, rec1.t + EXIT_SEARCH_OFFSET, math.inf, rng)
        if rec2 is None:
            return None

        t_enter = max(rec1.t, t_min)
        t_exit = min(rec2.t, t_max)
        if t_enter >= t_exit:
            return None
        t_enter = max(t_enter, 0.0)

        ray_length = ray.direction.length()
        distance_inside = (t_exit - t_enter) * ray_length
        # 1 - U lies in (0, 1], keeping the logarithm finite
        hit_distance = self.neg_inv_density * math.log(1.0 - rng.random())
        if hit_distance > distance_inside:
            return None

        t = t_enter + hit_distance / ray_length
        # Normal and face are arbitrary inside a volume
        return HitRecord(
            p=ray.at(t),
            normal=Vec3(1.0, 0.0, 0.0),
            t=t,
            front_face=True,
            material=self.phase_function,
        )

    def bounding_box(self, time0: float, time1: float) -> AABB | None:
        return self.boundary.bounding_box(time0, time1)
