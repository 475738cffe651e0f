"""Geometry module for shape primitives and spatial acceleration.

Components:
    hittable: Hit records, the ``Hittable`` contract, lists and face flipping
    sphere: Stationary and moving spheres
    aarect: Axis-aligned rectangles in the XY, XZ and YZ planes
    box: Boxes built from six rectangles
    transform: Translation and Y-axis rotation wrappers
    medium: Constant-density participating media
    bvh: Bounding volume hierarchy

Every shape returns a fresh ``HitRecord`` or None:
    rec = shape.hit(ray, t_min, t_max, rng=None)
"""

from .aarect import AaRect, Plane
from .box import Box
from .bvh import BvhConstructionError, BvhNode, MissingBoundingBoxWarning
from .hittable import FlipFace, HitRecord, Hittable, HittableList
from .medium import ConstantMedium
from .sphere import MovingSphere, Sphere
from .transform import RotateY, Translate

__all__ = [
    "HitRecord",
    "Hittable",
    "HittableList",
    "FlipFace",
    "Sphere",
    "MovingSphere",
    "AaRect",
    "Plane",
    "Box",
    "Translate",
    "RotateY",
    "ConstantMedium",
    "BvhNode",
    "BvhConstructionError",
    "MissingBoundingBoxWarning",
]
