"""Lambertian (ideal diffuse) material.

Scattered directions follow a cosine-weighted hemisphere around the surface
normal, so the material hands the integrator a ``CosinePdf`` instead of a
ray. Its scattering density is ``max(0, cos theta) / pi``.

Example:
    >>> red = Lambertian(Color(0.65, 0.05, 0.05))
    >>> checkered = Lambertian(CheckerTexture(Color(0.2, 0.3, 0.1), Color(0.9, 0.9, 0.9)))
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from lumitrace.core.pdf import CosinePdf
from lumitrace.core.ray import Ray
from lumitrace.core.vec3 import Color
from lumitrace.materials.material import Material, ScatterRecord
from lumitrace.materials.textures import Texture, as_texture

if TYPE_CHECKING:
    from lumitrace.geometry.hittable import HitRecord


class Lambertian(Material):
    """Diffuse reflector with a color or texture albedo."""

    def __init__(self, albedo: Color | Texture) -> None:
        self.albedo = as_texture(albedo)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> ScatterRecord | None:
        return ScatterRecord(
            attenuation=self.albedo.value(rec.u, rec.v, rec.p),
            pdf=CosinePdf(rec.normal),
        )

    def scattering_pdf(self, ray_in: Ray, rec: HitRecord, scattered: Ray) -> float:
        cosine = rec.normal.dot(scattered.direction.unit_vector())
        return max(0.0, cosine) / math.pi
