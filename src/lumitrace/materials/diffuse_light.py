"""Emissive material for area lights."""

from __future__ import annotations

from typing import TYPE_CHECKING

from lumitrace.core.ray import Ray
from lumitrace.core.vec3 import Color
from lumitrace.materials.material import BLACK, Material, ScatterRecord
from lumitrace.materials.textures import Texture, as_texture

if TYPE_CHECKING:
    from lumitrace.geometry.hittable import HitRecord


class DiffuseLight(Material):
    """One-sided emitter. Never scatters; emits only from its front face."""

    def __init__(self, emit: Color | Texture) -> None:
        self.emit = as_texture(emit)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> ScatterRecord | None:
        return None

    def emitted(self, ray_in: Ray, rec: HitRecord) -> Color:
        if not rec.front_face:
            return BLACK
        return self.emit.value(rec.u, rec.v, rec.p)
