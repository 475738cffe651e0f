"""Lookup of scene builders by name."""

from __future__ import annotations

from lumitrace.scene.cornell_box import CornellBoxParams, cornell_box, cornell_smoke
from lumitrace.scene.scene import Scene
from lumitrace.scene.showcase import (
    bouncing_spheres,
    material_showcase,
    perlin_spheres,
    simple_light,
)

SCENE_NAMES = (
    "cornell_box",
    "cornell_metal",
    "cornell_sphere",
    "cornell_smoke",
    "bouncing_spheres",
    "perlin_spheres",
    "simple_light",
    "material_showcase",
)


def build_scene(name: str, aspect_ratio: float = 1.0, rng=None, use_bvh: bool = True) -> Scene:
    """Build the named scene.

    Args:
        name: One of ``SCENE_NAMES``.
        aspect_ratio: Width over height of the output image.
        rng: Generator for random scene content and BVH construction.
        use_bvh: Accelerate the scene with a BVH where it has one.

    Raises:
        ValueError: If ``name`` is not a known scene.
    """
    if name == "cornell_box":
        return cornell_box(aspect_ratio, CornellBoxParams(use_bvh=use_bvh), rng)
    if name == "cornell_metal":
        return cornell_box(aspect_ratio, CornellBoxParams(variant="metal", use_bvh=use_bvh), rng)
    if name == "cornell_sphere":
        return cornell_box(aspect_ratio, CornellBoxParams(variant="sphere", use_bvh=use_bvh), rng)
    if name == "cornell_smoke":
        params = CornellBoxParams(light_intensity=7.0, use_bvh=use_bvh)
        return cornell_smoke(aspect_ratio, params, rng)
    if name == "bouncing_spheres":
        return bouncing_spheres(aspect_ratio, rng, use_bvh=use_bvh)
    if name == "perlin_spheres":
        return perlin_spheres(aspect_ratio, rng)
    if name == "simple_light":
        return simple_light(aspect_ratio, rng)
    if name == "material_showcase":
        return material_showcase(aspect_ratio, rng)
    raise ValueError(f"Unknown scene {name!r}; expected one of {', '.join(SCENE_NAMES)}")
