"""Axis-aligned rectangle primitive.

A rectangle lies in one of the three coordinate planes at a constant
coordinate ``k`` and spans ``[a0, a1] x [b0, b1]`` on the other two axes:

    Plane.XY: x in [a0, a1], y in [b0, b1], z = k
    Plane.XZ: x in [a0, a1], z in [b0, b1], y = k
    Plane.YZ: y in [a0, a1], z in [b0, b1], x = k

Intersection solves for the ray parameter at the plane, then bounds-checks
the two in-plane coordinates. The outward normal is the positive axis
perpendicular to the plane; texture coordinates are linear fractions across
the rectangle.

Rectangles can be explicit light-sampling targets: ``random`` picks a point
uniformly on the area and ``pdf_value`` converts the area density to solid
angle.

Example:
    >>> from lumitrace.geometry.aarect import AaRect, Plane
    >>> light = AaRect(213, 343, 227, 332, 554, light_material, Plane.XZ)
"""

from __future__ import annotations

import math
from enum import Enum
from typing import TYPE_CHECKING

from lumitrace.core.aabb import AABB
from lumitrace.core.ray import Ray
from lumitrace.core.vec3 import Point3, Vec3
from lumitrace.geometry.hittable import HitRecord, Hittable

if TYPE_CHECKING:
    from lumitrace.materials.material import Material

# Directions closer than this to the rectangle plane are not sampled
GRAZING_COSINE = 1e-8

# Minimum ray parameter used when probing the rectangle for light sampling
PDF_T_MIN = 0.001


class Plane(Enum):
    """Orientation of an axis-aligned rectangle.

    The value is ``(a_axis, b_axis, k_axis)``: the two in-plane axes and the
    axis the rectangle is perpendicular to.
    """

    XY = (0, 1, 2)
    XZ = (0, 2, 1)
    YZ = (1, 2, 0)


class AaRect(Hittable):
    """Rectangle perpendicular to one coordinate axis."""

    def __init__(
        self,
        a0: float,
        a1: float,
        b0: float,
        b1: float,
        k: float,
        material: Material,
        plane: Plane,
    ) -> None:
        if a1 <= a0 or b1 <= b0:
            raise ValueError(f"Degenerate rectangle extent: [{a0}, {a1}] x [{b0}, {b1}]")
        self.a0 = float(a0)
        self.a1 = float(a1)
        self.b0 = float(b0)
        self.b1 = float(b1)
        self.k = float(k)
        self.material = material
        self.plane = plane

    @property
    def area(self) -> float:
        return (self.a1 - self.a0) * (self.b1 - self.b0)

    def _point(self, a: float, b: float, k: float) -> Point3:
        coords = [0.0, 0.0, 0.0]
        a_axis, b_axis, k_axis = self.plane.value
        coords[a_axis] = a
        coords[b_axis] = b
        coords[k_axis] = k
        return Vec3(*coords)

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> HitRecord | None:
        a_axis, b_axis, k_axis = self.plane.value

        d_k = ray.direction[k_axis]
        if d_k == 0.0:
            # Parallel to the plane
            return None

        t = (self.k - ray.origin[k_axis]) / d_k
        if t <= t_min or t > t_max:
            return None

        a = ray.origin[a_axis] + t * ray.direction[a_axis]
        b = ray.origin[b_axis] + t * ray.direction[b_axis]
        if a < self.a0 or a > self.a1 or b < self.b0 or b > self.b1:
            return None

        u = (a - self.a0) / (self.a1 - self.a0)
        v = (b - self.b0) / (self.b1 - self.b0)
        outward_normal = self._point(0.0, 0.0, 1.0)
        return HitRecord.from_outward_normal(
            ray, t, ray.at(t), outward_normal, self.material, u, v
        )

    def bounding_box(self, time0: float, time1: float) -> AABB | None:
        # AABB pads the zero-width dimension
        return AABB(
            self._point(self.a0, self.b0, self.k),
            self._point(self.a1, self.b1, self.k),
        )

    def pdf_value(self, origin: Point3, direction: Vec3) -> float:
        rec = self.hit(Ray(origin, direction), PDF_T_MIN, math.inf)
        if rec is None:
            return 0.0

        length_squared = direction.length_squared()
        distance_squared = rec.t * rec.t * length_squared
        cosine = abs(direction.dot(rec.normal)) / math.sqrt(length_squared)
        if cosine < GRAZING_COSINE:
            return 0.0

        return distance_squared / (cosine * self.area)

    def random(self, origin: Point3, rng) -> Vec3:
        a = self.a0 + (self.a1 - self.a0) * rng.random()
        b = self.b0 + (self.b1 - self.b0) * rng.random()
        return self._point(a, b, self.k) - origin

    def __repr__(self) -> str:
        return (
            f"AaRect({self.plane.name}, a=[{self.a0}, {self.a1}], "
            f"b=[{self.b0}, {self.b1}], k={self.k})"
        )
