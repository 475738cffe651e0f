"""Isotropic phase function for participating media."""

from __future__ import annotations

from typing import TYPE_CHECKING

from lumitrace.core.ray import Ray, random_in_unit_sphere
from lumitrace.core.vec3 import Color
from lumitrace.materials.material import Material, ScatterRecord
from lumitrace.materials.textures import Texture, as_texture

if TYPE_CHECKING:
    from lumitrace.geometry.hittable import HitRecord


class Isotropic(Material):
    """Scatters uniformly in all directions; used by ``ConstantMedium``.

    The new direction is drawn here and followed directly, so the integrator
    does not mix it with light sampling.
    """

    def __init__(self, albedo: Color | Texture) -> None:
        self.albedo = as_texture(albedo)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> ScatterRecord | None:
        scattered = Ray(rec.p, random_in_unit_sphere(rng), ray_in.time)
        return ScatterRecord(
            attenuation=self.albedo.value(rec.u, rec.v, rec.p),
            skip_pdf_ray=scattered,
        )
