"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    vec3: Three-component vector used for points, directions and colors
    ray: Ray data structure, reflection/refraction and random directions
    aabb: Axis-aligned bounding boxes and the slab test
    onb: Orthonormal basis for local-to-world transforms
    pdf: Direction sampling strategies (cosine, toward shapes, mixtures)
    integrator: Recursive light transport (``ray_color``)
    film: Taichi accumulation buffer
    render: Row-parallel pixel loop
    progressive: Progressive accumulation across passes

Randomness never lives in the scene: every sampling routine takes the active
``numpy.random.Generator`` as an argument.
"""

from .aabb import AABB
from .onb import ONB
from .pdf import CosinePdf, HittablePdf, MixturePdf, Pdf
from .ray import (
    Ray,
    random_cosine_direction,
    random_in_unit_disk,
    random_in_unit_sphere,
    random_to_sphere,
    random_unit_vector,
    reflect,
    refract,
    schlick,
)
from .vec3 import Color, Point3, Vec3

# Note: integrator, film, render and progressive are NOT imported here to
# avoid circular imports and to keep Taichi out of plain geometry imports.
# Import them directly, e.g.:
#   from lumitrace.core.progressive import ProgressiveRenderer

__all__ = [
    "Vec3",
    "Point3",
    "Color",
    "Ray",
    "reflect",
    "refract",
    "schlick",
    "random_in_unit_sphere",
    "random_unit_vector",
    "random_in_unit_disk",
    "random_cosine_direction",
    "random_to_sphere",
    "AABB",
    "ONB",
    "Pdf",
    "CosinePdf",
    "HittablePdf",
    "MixturePdf",
]
