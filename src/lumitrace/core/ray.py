"""Ray data structure and vector utilities for Monte Carlo ray tracing.

This module provides the fundamental Ray dataclass together with the vector
helpers used by materials and sampling code: reflection, refraction, the
Schlick reflectance approximation and the random direction generators.

Every random helper takes the active ``numpy.random.Generator`` as an explicit
argument; nothing in the renderer draws from a global random source.

Example:
    >>> import numpy as np
    >>> from lumitrace.core.ray import Ray
    >>> from lumitrace.core.vec3 import Vec3
    >>> ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))
    >>> ray.at(5.0)  # Point 5 units along the ray
    Vec3(0.0, 0.0, -5.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from lumitrace.core.vec3 import Point3, Vec3


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point, a direction vector and a time sample.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. It is not required to be
            normalized; intersection routines account for its length.
        time: The instant (within the camera shutter interval) at which the
            ray exists. Used for motion blur.
    """

    origin: Point3
    direction: Vec3
    time: float = 0.0

    def at(self, t: float) -> Point3:
        """Compute the point along the ray at parameter t.

        Args:
            t: The parameter value. Positive values are in front of the origin.

        Returns:
            The point origin + t * direction.
        """
        return self.origin + self.direction * t


# =============================================================================
# Vector Utility Functions
# =============================================================================


def reflect(v: Vec3, n: Vec3) -> Vec3:
    """Reflect a vector about a normal.

    Args:
        v: The incoming direction (pointing toward the surface).
        n: The surface normal (should be unit length).

    Returns:
        The mirrored direction.
    """
    return v - n * (2.0 * v.dot(n))


def refract(uv: Vec3, n: Vec3, etai_over_etat: float) -> Vec3:
    """Refract a unit vector through a surface using Snell's law.

    The caller is responsible for checking total internal reflection first;
    this function assumes a refracted direction exists.

    Args:
        uv: The incoming direction (unit length).
        n: The surface normal facing against ``uv`` (unit length).
        etai_over_etat: Ratio of refractive indices (incident / transmitted).

    Returns:
        The refracted direction.
    """
    cos_theta = min((-uv).dot(n), 1.0)
    r_out_perp = (uv + n * cos_theta) * etai_over_etat
    r_out_parallel = n * -math.sqrt(abs(1.0 - r_out_perp.length_squared()))
    return r_out_perp + r_out_parallel


def schlick(cosine: float, ref_idx: float) -> float:
    """Compute Fresnel reflectance using Schlick's approximation.

    R(theta) = R0 + (1 - R0)(1 - cos theta)^5 with R0 = ((1 - n) / (1 + n))^2.

    Args:
        cosine: Cosine of the angle between incident direction and normal.
        ref_idx: Ratio of refractive indices.

    Returns:
        The approximate reflectance, in [0, 1] for cosine in [0, 1].
    """
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * (1.0 - cosine) ** 5


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================


def random_in_unit_sphere(rng) -> Vec3:
    """Generate a random point inside the unit sphere by rejection sampling."""
    while True:
        p = Vec3.random(rng, -1.0, 1.0)
        if p.length_squared() < 1.0:
            return p


def random_unit_vector(rng) -> Vec3:
    """Generate a unit vector uniformly distributed on the sphere."""
    a = 2.0 * math.pi * rng.random()
    z = 2.0 * rng.random() - 1.0
    r = math.sqrt(1.0 - z * z)
    return Vec3(r * math.cos(a), r * math.sin(a), z)


def random_in_unit_disk(rng) -> Vec3:
    """Generate a random point (x, y, 0) inside the unit disk.

    Used for thin-lens depth of field.
    """
    while True:
        p = Vec3(2.0 * rng.random() - 1.0, 2.0 * rng.random() - 1.0, 0.0)
        if p.length_squared() < 1.0:
            return p


def random_cosine_direction(rng) -> Vec3:
    """Generate a direction with a cosine-weighted distribution.

    The distribution has PDF = cos(theta) / pi about the local +z axis.

    Returns:
        A random unit direction in the local frame (z-up).
    """
    r1 = rng.random()
    r2 = rng.random()
    z = math.sqrt(1.0 - r2)

    phi = 2.0 * math.pi * r1
    sqrt_r2 = math.sqrt(r2)
    return Vec3(math.cos(phi) * sqrt_r2, math.sin(phi) * sqrt_r2, z)


def random_to_sphere(rng, radius: float, distance_squared: float) -> Vec3:
    """Sample a direction inside the cone subtended by a sphere.

    The cone axis is the local +z axis. When the viewpoint is on or inside the
    sphere the cone degenerates to the full hemisphere.

    Args:
        rng: A ``numpy.random.Generator``.
        radius: Radius of the target sphere.
        distance_squared: Squared distance from the viewpoint to the center.

    Returns:
        A unit direction in the local frame.
    """
    r1 = rng.random()
    r2 = rng.random()
    cos_theta_max = math.sqrt(max(0.0, 1.0 - radius * radius / distance_squared))
    z = 1.0 + r2 * (cos_theta_max - 1.0)

    phi = 2.0 * math.pi * r1
    sin_theta = math.sqrt(max(0.0, 1.0 - z * z))
    return Vec3(math.cos(phi) * sin_theta, math.sin(phi) * sin_theta, z)
