"""Instance transforms: translation and rotation about the Y axis.

Both wrappers move the incoming ray into the child's object space, intersect
the child there, and move the resulting hit point and normal back to world
space. The wrapped child is shared, not copied.
"""

from __future__ import annotations

import math
from dataclasses import replace

from lumitrace.core.aabb import AABB
from lumitrace.core.ray import Ray
from lumitrace.core.vec3 import Vec3
from lumitrace.geometry.hittable import HitRecord, Hittable


class Translate(Hittable):
    """Displace a hittable by ``offset``."""

    def __init__(self, obj: Hittable, offset: Vec3) -> None:
        self.obj = obj
        self.offset = offset

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> HitRecord | None:
        moved = Ray(ray.origin - self.offset, ray.direction, ray.time)
        rec = self.obj.hit(moved, t_min, t_max, rng)
        if rec is None:
            return None

        return replace(rec, p=rec.p + self.offset)

    def bounding_box(self, time0: float, time1: float) -> AABB | None:
        box = self.obj.bounding_box(time0, time1)
        if box is None:
            return None
        return AABB(box.minimum + self.offset, box.maximum + self.offset)


class RotateY(Hittable):
    """Rotate a hittable by ``angle`` degrees about the Y axis.

    The bounding box is computed once, at construction, by rotating all eight
    corners of the child's box over the given time interval.
    """

    def __init__(
        self,
        obj: Hittable,
        angle: float,
        time0: float = 0.0,
        time1: float = 1.0,
    ) -> None:
        self.obj = obj
        radians = math.radians(angle)
        self.sin_theta = math.sin(radians)
        self.cos_theta = math.cos(radians)

        child_box = obj.bounding_box(time0, time1)
        self.bbox = None if child_box is None else self._rotated_box(child_box)

    def _rotated_box(self, box: AABB) -> AABB:
        lo = [math.inf, math.inf, math.inf]
        hi = [-math.inf, -math.inf, -math.inf]

        for i in range(2):
            for j in range(2):
                for k in range(2):
                    x = i * box.maximum.x + (1 - i) * box.minimum.x
                    y = j * box.maximum.y + (1 - j) * box.minimum.y
                    z = k * box.maximum.z + (1 - k) * box.minimum.z

                    new_x = self.cos_theta * x + self.sin_theta * z
                    new_z = -self.sin_theta * x + self.cos_theta * z

                    for axis, value in enumerate((new_x, y, new_z)):
                        lo[axis] = min(lo[axis], value)
                        hi[axis] = max(hi[axis], value)

        return AABB(Vec3(*lo), Vec3(*hi))

    def _to_object(self, v: Vec3) -> Vec3:
        return Vec3(
            self.cos_theta * v.x - self.sin_theta * v.z,
            v.y,
            self.sin_theta * v.x + self.cos_theta * v.z,
        )

    def _to_world(self, v: Vec3) -> Vec3:
        return Vec3(
            self.cos_theta * v.x + self.sin_theta * v.z,
            v.y,
            -self.sin_theta * v.x + self.cos_theta * v.z,
        )

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> HitRecord | None:
        rotated = Ray(self._to_object(ray.origin), self._to_object(ray.direction), ray.time)
        rec = self.obj.hit(rotated, t_min, t_max, rng)
        if rec is None:
            return None

        # Rotation preserves which side of the surface was struck
        return replace(rec, p=self._to_world(rec.p), normal=self._to_world(rec.normal))

    def bounding_box(self, time0: float, time1: float) -> AABB | None:
        return self.bbox
