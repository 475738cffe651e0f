"""Hit records and the polymorphic ``Hittable`` contract.

Every primitive and composite in the scene implements ``Hittable``:

    hit(ray, t_min, t_max, rng=None) -> HitRecord | None
    bounding_box(time0, time1) -> AABB | None

Primitives usable as explicit light-sampling targets additionally override
``pdf_value(origin, direction)`` and ``random(origin, rng)``. The set of
implementations is closed: spheres, moving spheres, axis-aligned rectangles,
boxes, constant media, translate/rotate/flip-face wrappers, lists and BVH
nodes.

Children are shared rather than owned; the same primitive may be referenced
from a BVH leaf and from the light-sampling target at once. Nothing is mutated
after construction, and a fresh ``HitRecord`` is returned per query.

Example:
    >>> from lumitrace.core.ray import Ray
    >>> from lumitrace.core.vec3 import Color, Vec3
    >>> from lumitrace.geometry import HittableList, Sphere
    >>> from lumitrace.materials import Lambertian
    >>> world = HittableList([Sphere(Vec3(0, 0, -1), 0.5, Lambertian(Color(0.5, 0.5, 0.5)))])
    >>> rec = world.hit(Ray(Vec3(0, 0, 0), Vec3(0, 0, -1)), 0.001, float("inf"))
    >>> rec.t
    0.5
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from lumitrace.core.aabb import AABB
from lumitrace.core.ray import Ray
from lumitrace.core.vec3 import Point3, Vec3

if TYPE_CHECKING:
    from lumitrace.materials.material import Material


@dataclass
class HitRecord:
    """Record of a ray-surface intersection.

    Attributes:
        p: The point where the ray struck the surface.
        normal: Unit surface normal, always oriented against the incoming ray.
        t: Ray parameter of the hit.
        front_face: True if the ray struck the outward-facing side.
        material: The material of the struck surface.
        u: Surface texture coordinate.
        v: Surface texture coordinate.
    """

    p: Point3
    normal: Vec3
    t: float
    front_face: bool
    material: Material
    u: float = 0.0
    v: float = 0.0

    @classmethod
    def from_outward_normal(
        cls,
        ray: Ray,
        t: float,
        p: Point3,
        outward_normal: Vec3,
        material: Material,
        u: float = 0.0,
        v: float = 0.0,
    ) -> HitRecord:
        """Create a record, orienting the normal against the incoming ray."""
        front_face, normal = face_normal(ray, outward_normal)
        return cls(p=p, normal=normal, t=t, front_face=front_face, material=material, u=u, v=v)


def face_normal(ray: Ray, outward_normal: Vec3) -> tuple[bool, Vec3]:
    """Return ``(front_face, normal)`` for a surface with the given outward normal."""
    front_face = ray.direction.dot(outward_normal) < 0.0
    unit = outward_normal.unit_vector()
    return front_face, unit if front_face else -unit


class Hittable(ABC):
    """Anything a ray can intersect."""

    @abstractmethod
    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> HitRecord | None:
        """Return the nearest intersection with ``t`` in (t_min, t_max), or None.

        Args:
            ray: The ray to test.
            t_min: Lower bound of the accepted ray parameter.
            t_max: Upper bound of the accepted ray parameter.
            rng: Optional ``numpy.random.Generator``; required only by
                volumes that sample a scattering distance.
        """

    @abstractmethod
    def bounding_box(self, time0: float, time1: float) -> AABB | None:
        """Return a box enclosing the primitive over [time0, time1].

        None means the primitive is unbounded and cannot be placed in a BVH.
        """

    def pdf_value(self, origin: Point3, direction: Vec3) -> float:
        """Solid-angle density of sampling ``direction`` toward this shape."""
        return 0.0

    def random(self, origin: Point3, rng) -> Vec3:
        """Sample a direction from ``origin`` toward this shape."""
        return Vec3(1.0, 0.0, 0.0)


class HittableList(Hittable):
    """A flat collection of hittables tested linearly.

    Also usable as a light-sampling target made of several lights: the
    density is the mean of the members' densities and sampling picks a member
    uniformly at random.
    """

    def __init__(self, objects: Iterable[Hittable] = ()) -> None:
        self.objects: list[Hittable] = list(objects)

    def add(self, obj: Hittable) -> None:
        """Append a hittable; only valid while the scene is being assembled."""
        self.objects.append(obj)

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self):
        return iter(self.objects)

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> HitRecord | None:
        closest = None
        closest_so_far = t_max

        for obj in self.objects:
            rec = obj.hit(ray, t_min, closest_so_far, rng)
            if rec is not None:
                closest_so_far = rec.t
                closest = rec

        return closest

    def bounding_box(self, time0: float, time1: float) -> AABB | None:
        if not self.objects:
            return None

        output_box = None
        for obj in self.objects:
            box = obj.bounding_box(time0, time1)
            if box is None:
                return None
            output_box = box if output_box is None else AABB.surrounding_box(output_box, box)

        return output_box

    def pdf_value(self, origin: Point3, direction: Vec3) -> float:
        if not self.objects:
            return 0.0
        weight = 1.0 / len(self.objects)
        return sum(weight * obj.pdf_value(origin, direction) for obj in self.objects)

    def random(self, origin: Point3, rng) -> Vec3:
        if not self.objects:
            return Vec3(1.0, 0.0, 0.0)
        index = int(rng.integers(0, len(self.objects)))
        return self.objects[index].random(origin, rng)


class FlipFace(Hittable):
    """Wrapper that reports the opposite ``front_face`` of its child.

    Used to make one-sided emitters (ceiling lights) face into a room and to
    give box faces an outward front side.
    """

    def __init__(self, obj: Hittable) -> None:
        self.obj = obj

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> HitRecord | None:
        rec = self.obj.hit(ray, t_min, t_max, rng)
        if rec is None:
            return None
        return replace(rec, front_face=not rec.front_face)

    def bounding_box(self, time0: float, time1: float) -> AABB | None:
        return self.obj.bounding_box(time0, time1)

    def pdf_value(self, origin: Point3, direction: Vec3) -> float:
        return self.obj.pdf_value(origin, direction)

    def random(self, origin: Point3, rng) -> Vec3:
        return self.obj.random(origin, rng)
