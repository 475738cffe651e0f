"""Axis-aligned bounding boxes.

Bounding boxes are used by the BVH to cheaply reject ray/primitive tests.
A box is built from two corner points; dimensions narrower than ``PADDING``
(for example an axis-aligned rectangle) are widened symmetrically so the slab
test never works with a degenerate interval.
"""

from __future__ import annotations

from lumitrace.core.ray import Ray
from lumitrace.core.vec3 import Point3, Vec3

# Minimum extent of any box dimension
PADDING = 0.0001


class AABB:
    """Axis-aligned bounding box with ``minimum[i] <= maximum[i]`` on every axis.

    Attributes:
        minimum: The lower corner.
        maximum: The upper corner.
    """

    __slots__ = ("minimum", "maximum")

    def __init__(self, a: Point3, b: Point3) -> None:
        lo = [min(a[i], b[i]) for i in range(3)]
        hi = [max(a[i], b[i]) for i in range(3)]
        for i in range(3):
            if hi[i] - lo[i] < PADDING:
                mid = 0.5 * (lo[i] + hi[i])
                lo[i] = mid - 0.5 * PADDING
                hi[i] = mid + 0.5 * PADDING
        self.minimum = Vec3(*lo)
        self.maximum = Vec3(*hi)

    def __repr__(self) -> str:
        return f"AABB(minimum={self.minimum!r}, maximum={self.maximum!r})"

    def __getstate__(self) -> tuple[Vec3, Vec3]:
        return (self.minimum, self.maximum)

    def __setstate__(self, state: tuple[Vec3, Vec3]) -> None:
        self.minimum, self.maximum = state

    def hit(self, ray: Ray, t_min: float, t_max: float) -> bool:
        """Slab test: does the ray overlap the box anywhere in [t_min, t_max]?

        Each axis shrinks the running parameter interval; the test fails as
        soon as the interval is empty. A ray parallel to a slab misses unless
        its origin lies between the two planes.
        """
        origin = ray.origin
        direction = ray.direction
        for axis in range(3):
            d = direction[axis]
            o = origin[axis]
            lo = self.minimum[axis]
            hi = self.maximum[axis]
            if d == 0.0:
                if o < lo or o > hi:
                    return False
                continue
            inv_d = 1.0 / d
            t0 = (lo - o) * inv_d
            t1 = (hi - o) * inv_d
            if inv_d < 0.0:
                t0, t1 = t1, t0
            if t0 > t_min:
                t_min = t0
            if t1 < t_max:
                t_max = t1
            if t_max <= t_min:
                return False
        return True

    def contains(self, p: Point3, tolerance: float = 0.0) -> bool:
        """Return True if ``p`` lies inside the box (inclusive, with tolerance)."""
        return all(
            self.minimum[i] - tolerance <= p[i] <= self.maximum[i] + tolerance
            for i in range(3)
        )

    def contains_box(self, other: AABB) -> bool:
        return self.contains(other.minimum) and self.contains(other.maximum)

    @staticmethod
    def surrounding_box(box0: AABB, box1: AABB) -> AABB:
        """Return the tightest box enclosing both inputs."""
        small = Vec3(
            min(box0.minimum.x, box1.minimum.x),
            min(box0.minimum.y, box1.minimum.y),
            min(box0.minimum.z, box1.minimum.z),
        )
        big = Vec3(
            max(box0.maximum.x, box1.maximum.x),
            max(box0.maximum.y, box1.maximum.y),
            max(box0.maximum.z, box1.maximum.z),
        )
        return AABB(small, big)
