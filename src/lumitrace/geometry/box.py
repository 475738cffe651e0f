"""Axis-aligned box built from six rectangles."""

from __future__ import annotations

from typing import TYPE_CHECKING

from lumitrace.core.aabb import AABB
from lumitrace.core.ray import Ray
from lumitrace.core.vec3 import Point3, Vec3
from lumitrace.geometry.aarect import AaRect, Plane
from lumitrace.geometry.hittable import FlipFace, HitRecord, Hittable, HittableList

if TYPE_CHECKING:
    from lumitrace.materials.material import Material


class Box(Hittable):
    """Box spanning the corners ``p0`` and ``p1``.

    The faces at the ``p1`` side are plain rectangles; the faces at the ``p0``
    side are wrapped in ``FlipFace`` so every face reports its outward side as
    the front face.
    """

    def __init__(self, p0: Point3, p1: Point3, material: Material) -> None:
        self.box_min = Vec3(min(p0.x, p1.x), min(p0.y, p1.y), min(p0.z, p1.z))
        self.box_max = Vec3(max(p0.x, p1.x), max(p0.y, p1.y), max(p0.z, p1.z))
        lo, hi = self.box_min, self.box_max

        self.sides = HittableList(
            [
                AaRect(lo.x, hi.x, lo.y, hi.y, hi.z, material, Plane.XY),
                FlipFace(AaRect(lo.x, hi.x, lo.y, hi.y, lo.z, material, Plane.XY)),
                AaRect(lo.x, hi.x, lo.z, hi.z, hi.y, material, Plane.XZ),
                FlipFace(AaRect(lo.x, hi.x, lo.z, hi.z, lo.y, material, Plane.XZ)),
                AaRect(lo.y, hi.y, lo.z, hi.z, hi.x, material, Plane.YZ),
                FlipFace(AaRect(lo.y, hi.y, lo.z, hi.z, lo.x, material, Plane.YZ)),
            ]
        )

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> HitRecord | None:
        return self.sides.hit(ray, t_min, t_max, rng)

    def bounding_box(self, time0: float, time1: float) -> AABB | None:
        return AABB(self.box_min, self.box_max)
