"""Metal (specular reflective) material.

The reflected direction is the mirror of the incoming one about the normal,
perturbed by ``fuzz`` times a random point in the unit sphere:

    R = I - 2(I . N)N + fuzz * random_in_unit_sphere

A reflection that ends up pointing into the surface is absorbed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lumitrace.core.ray import Ray, random_in_unit_sphere, reflect
from lumitrace.core.vec3 import Color
from lumitrace.materials.material import Material, ScatterRecord

if TYPE_CHECKING:
    from lumitrace.geometry.hittable import HitRecord


class Metal(Material):
    """Reflective metal.

    Attributes:
        albedo: Reflected color tint.
        fuzz: Roughness in [0, 1]; 0 is a perfect mirror.
    """

    def __init__(self, albedo: Color, fuzz: float = 0.0) -> None:
        if fuzz < 0.0:
            raise ValueError(f"Metal fuzz must be non-negative, got {fuzz}")
        self.albedo = albedo
        self.fuzz = min(float(fuzz), 1.0)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> ScatterRecord | None:
        reflected = reflect(ray_in.direction.unit_vector(), rec.normal)
        if self.fuzz > 0.0:
            reflected = reflected + random_in_unit_sphere(rng) * self.fuzz

        if reflected.dot(rec.normal) <= 0.0:
            return None

        return ScatterRecord(
            attenuation=self.albedo,
            skip_pdf_ray=Ray(rec.p, reflected, ray_in.time),
        )
