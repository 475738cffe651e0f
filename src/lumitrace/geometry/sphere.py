"""Sphere primitives with analytic ray-sphere intersection.

The intersection solves the quadratic obtained from |P(t) - C|^2 = r^2:

    a*t^2 + 2*half_b*t + c = 0

where:
    a = dot(direction, direction)
    half_b = dot(oc, direction)
    c = dot(oc, oc) - radius^2
    oc = origin - center

The smaller root inside the accepted interval is preferred, falling back to
the larger one. A non-positive discriminant is treated as a miss.

A negative radius is allowed: the geometry is identical but the outward
normal points inward, which models hollow glass shells.

Example:
    >>> from lumitrace.geometry.sphere import Sphere
    >>> sphere = Sphere(Vec3(0, 0, -1), 0.5, material)
    >>> rec = sphere.hit(ray, 0.001, float("inf"))
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from lumitrace.core.aabb import AABB
from lumitrace.core.onb import ONB
from lumitrace.core.ray import Ray, random_to_sphere
from lumitrace.core.vec3 import Point3, Vec3
from lumitrace.geometry.hittable import HitRecord, Hittable

if TYPE_CHECKING:
    from lumitrace.materials.material import Material

# Minimum ray parameter used when probing the sphere for light sampling
PDF_T_MIN = 0.001


def get_sphere_uv(p: Vec3) -> tuple[float, float]:
    """Spherical texture coordinates of a point on the unit sphere.

    u = 1 - (atan2(z, x) + pi) / 2pi and v = (asin(y) + pi/2) / pi.

    Args:
        p: A unit direction from the sphere center.

    Returns:
        The (u, v) pair, each in [0, 1].
    """
    phi = math.atan2(p.z, p.x)
    theta = math.asin(max(-1.0, min(1.0, p.y)))
    u = 1.0 - (phi + math.pi) / (2.0 * math.pi)
    v = (theta + math.pi / 2.0) / math.pi
    return u, v


def _solve_sphere(
    ray: Ray, center: Point3, radius: float, t_min: float, t_max: float
) -> float | None:
    """Return the accepted root of the ray-sphere quadratic, or None."""
    oc = ray.origin - center
    a = ray.direction.length_squared()
    half_b = oc.dot(ray.direction)
    c = oc.length_squared() - radius * radius

    discriminant = half_b * half_b - a * c
    if discriminant <= 0.0:
        return None

    root = math.sqrt(discriminant)
    t = (-half_b - root) / a
    if t_min < t < t_max:
        return t
    t = (-half_b + root) / a
    if t_min < t < t_max:
        return t
    return None


class Sphere(Hittable):
    """A stationary sphere defined by center point and radius."""

    def __init__(self, center: Point3, radius: float, material: Material) -> None:
        if radius == 0.0:
            raise ValueError("Sphere radius must be non-zero")
        self.center = center
        self.radius = float(radius)
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> HitRecord | None:
        t = _solve_sphere(ray, self.center, self.radius, t_min, t_max)
        if t is None:
            return None

        p = ray.at(t)
        outward_normal = (p - self.center) / self.radius
        u, v = get_sphere_uv(outward_normal)
        return HitRecord.from_outward_normal(ray, t, p, outward_normal, self.material, u, v)

    def bounding_box(self, time0: float, time1: float) -> AABB | None:
        r = Vec3.splat(abs(self.radius))
        return AABB(self.center - r, self.center + r)

    def pdf_value(self, origin: Point3, direction: Vec3) -> float:
        """Density of uniformly sampling the cone subtended by the sphere."""
        if self.hit(Ray(origin, direction), PDF_T_MIN, math.inf) is None:
            return 0.0

        distance_squared = (self.center - origin).length_squared()
        if distance_squared == 0.0:
            return 0.0
        ratio =self.radius * self.radius / distance_squared
        if ratio >= 1.0:
            # Origin on or inside the sphere: no finite cone to sample
            return 0.0
        cos_theta_max = math.sqrt(1.0 - ratio)
        solid_angle = 2.0 * math.pi * (1.0 - cos_theta_max)
        return 1.0 / solid_angle

    def random(self, origin: Point3, rng) -> Vec3:
        direction = self.center - origin
        distance_squared = direction.length_squared()
        if distance_squared == 0.0:
            return Vec3(1.0, 0.0, 0.0)
        uvw = ONB.build_from_w(direction)
        return uvw.local_vector(random_to_sphere(rng, self.radius, distance_squared))

    def __repr__(self) -> str:
        return f"Sphere(center={self.center!r}, radius={self.radius})"


class MovingSphere(Hittable):
    """A sphere whose center moves linearly from ``center0`` at ``time0``
    to ``center1`` at ``time1``. Used for motion blur."""

    def __init__(
        self,
        center0: Point3,
        center1: Point3,
        time0: float,
        time1: float,
        radius: float,
        material: Material,
    ) -> None:
        if radius == 0.0:
            raise ValueError("MovingSphere radius must be non-zero")
        if time1 == time0:
            raise ValueError("MovingSphere requires time1 != time0")
        self.center0 = center0
        self.center1 = center1
        self.time0 = float(time0)
        self.time1 = float(time1)
        self.radius = float(radius)
        self.material = material

    def center(self, time: float) -> Point3:
        """Center of the sphere at ``time`` (linearly interpolated)."""
        fraction = (time - self.time0) / (self.time1 - self.time0)
        return self.center0 + (self.center1 - self.center0) * fraction

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> HitRecord | None:
        center = self.center(ray.time)
        t = _solve_sphere(ray, center, self.radius, t_min, t_max)
        if t is None:
            return None

        p = ray.at(t)
        outward_normal = (p - center) / self.radius
        u, v = get_sphere_uv(outward_normal)
        return HitRecord.from_outward_normal(ray, t, p, outward_normal, self.material, u, v)

    def bounding_box(self, time0: float, time1: float) -> AABB | None:
        r = Vec3.splat(abs(self.radius))
        c0 = self.center(time0)
        c1 = self.center(time1)
        box0 = AABB(c0 - r, c0 + r)
        box1 = AABB(c1 - r, c1 + r)
        return AABB.surrounding_box(box0, box1)
