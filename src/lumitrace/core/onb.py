"""Orthonormal basis for mapping local sampling directions into world space."""

from __future__ import annotations

from lumitrace.core.vec3 import Vec3


class ONB:
    """Three mutually perpendicular unit vectors ``u``, ``v``, ``w``.

    ``w`` is the supplied normal; ``u`` and ``v`` are derived by crossing it
    with a helper axis that is guaranteed not to be parallel to it.
    """

    __slots__ = ("u", "v", "w")

    def __init__(self, u: Vec3, v: Vec3, w: Vec3) -> None:
        self.u = u
        self.v = v
        self.w = w

    @classmethod
    def build_from_w(cls, n: Vec3) -> ONB:
        """Build a basis whose ``w`` axis is the direction of ``n``."""
        w = n.unit_vector()
        # Choose a vector not parallel to w
        a = Vec3(0.0, 1.0, 0.0) if abs(w.x) > 0.9 else Vec3(1.0, 0.0, 0.0)
        v = w.cross(a).unit_vector()
        u = w.cross(v)
        return cls(u, v, w)

    def local(self, a: float, b: float, c: float) -> Vec3:
        """Map local coordinates (a, b, c) to ``a*u + b*v + c*w``."""
        return self.u * a + self.v * b + self.w * c

    def local_vector(self, a: Vec3) -> Vec3:
        return self.local(a.x, a.y, a.z)

    def __getstate__(self) -> tuple[Vec3, Vec3, Vec3]:
        return (self.u, self.v, self.w)

    def __setstate__(self, state: tuple[Vec3, Vec3, Vec3]) -> None:
        self.u, self.v, self.w = state
