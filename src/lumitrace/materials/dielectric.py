"""Dielectric (glass/water) material.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when the refracted sine would exceed 1

The material reflects on total internal reflection, otherwise it picks
reflection with probability equal to the Schlick reflectance and refraction
the rest of the time. Clear glass does not absorb, so attenuation is white.

Example:
    >>> glass = Dielectric(1.5)
    >>> bubble = Sphere(Vec3(0, 1, 0), -0.45, glass)  # hollow shell
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from lumitrace.core.ray import Ray, reflect, refract, schlick
from lumitrace.core.vec3 import Color
from lumitrace.materials.material import Material, ScatterRecord

if TYPE_CHECKING:
    from lumitrace.geometry.hittable import HitRecord

WHITE = Color(1.0, 1.0, 1.0)


class Dielectric(Material):
    """Transparent material with index of refraction ``ref_idx``.

    Common values: water 1.33, glass 1.5, diamond 2.4.
    """

    def __init__(self, ref_idx: float) -> None:
        if ref_idx <= 0.0:
            raise ValueError(f"Refraction index must be positive, got {ref_idx}")
        self.ref_idx = float(ref_idx)

    def refraction_ratio(self, front_face: bool) -> float:
        """Ratio eta_i / eta_t: entering goes air to glass, exiting the reverse."""
        return 1.0 / self.ref_idx if front_face else self.ref_idx

    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> ScatterRecord | None:
        etai_over_etat = self.refraction_ratio(rec.front_face)

        unit_direction = ray_in.direction.unit_vector()
        cos_theta = min((-unit_direction).dot(rec.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        if etai_over_etat * sin_theta > 1.0:
            # Total internal reflection
            direction = reflect(unit_direction, rec.normal)
        elif rng.random() < schlick(cos_theta, etai_over_etat):
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, etai_over_etat)

        return ScatterRecord(attenuation=WHITE, skip_pdf_ray=Ray(rec.p, direction, ray_in.time))
