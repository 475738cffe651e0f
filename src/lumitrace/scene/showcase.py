"""Outdoor and small demonstration scenes.

Each builder takes the output aspect ratio and a ``numpy.random.Generator``;
scenes with random content (sphere placement, Perlin tables, BVH axes) draw
all of it from that generator, so a seed fully determines the scene.
"""

from __future__ import annotations

import logging

import numpy as np

from lumitrace.camera.camera import Camera
from lumitrace.core.vec3 import Color, Point3, Vec3
from lumitrace.geometry.aarect import AaRect, Plane
from lumitrace.geometry.bvh import BvhNode
from lumitrace.geometry.hittable import Hittable, HittableList
from lumitrace.geometry.sphere import MovingSphere, Sphere
from lumitrace.materials.dielectric import Dielectric
from lumitrace.materials.diffuse_light import DiffuseLight
from lumitrace.materials.lambertian import Lambertian
from lumitrace.materials.metal import Metal
from lumitrace.materials.perlin import NoiseType, Perlin
from lumitrace.materials.textures import CheckerTexture, NoiseTexture
from lumitrace.scene.scene import Scene, SkyGradient, SolidBackground

logger = logging.getLogger(__name__)


def _outdoor_camera(
    aspect_ratio: float,
    lookfrom: Point3 = Point3(13.0, 2.0, 3.0),
    lookat: Point3 = Point3(0.0, 0.0, 0.0),
    vfov: float = 20.0,
) -> Camera:
    return Camera(
        lookfrom=lookfrom,
        lookat=lookat,
        vup=Vec3(0.0, 1.0, 0.0),
        vfov=vfov,
        aspect_ratio=aspect_ratio,
        aperture=0.0,
        focus_dist=10.0,
        time0=0.0,
        time1=1.0,
    )


def bouncing_spheres(
    aspect_ratio: float = 16.0 / 9.0,
    rng=None,
    bound: int = 15,
    use_bvh: bool = True,
) -> Scene:
    """Field of small random spheres around three large ones.

    Diffuse spheres bounce upward during the shutter interval (motion blur).
    The ground is a checker texture.

    Args:
        aspect_ratio: Width over height of the output image.
        rng: Generator for sphere placement and the BVH.
        bound: The small spheres occupy a ``2*bound`` square grid.
        use_bvh: Put the small spheres in a BVH.
    """
    if rng is None:
        rng = np.random.default_rng(0)

    small: list[Hittable] = []
    for a in range(-bound, bound):
        for b in range(-bound, bound):
            radius = rng.uniform(0.1, 0.3)
            choose_mat = rng.random()
            center = Point3(a + 0.9 * rng.random(), radius, b + 0.9 * rng.random())

            if (center - Point3(4.0, radius, 0.0)).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                albedo = Color.random(rng) * Color.random(rng)
                center1 = center + Vec3(0.0, rng.uniform(0.0, 0.5), 0.0)
                small.append(MovingSphere(center, center1, 0.0, 1.0, radius, Lambertian(albedo)))
            elif choose_mat < 0.95:
                small.append(Sphere(center, radius, Metal(Color.random(rng, 0.3, 1.0), 0.0)))
            else:
                small.append(Sphere(center, radius, Dielectric(1.5)))

    world = HittableList()
    if small:
        world.add(BvhNode.build(small, 0.0, 1.0, rng) if use_bvh else HittableList(small))

    checker = CheckerTexture(Color(0.2, 0.3, 0.1), Color(0.9, 0.9, 0.9))
    world.add(Sphere(Point3(0.5, -1000.0, 0.0), 1000.0, Lambertian(checker)))
    world.add(Sphere(Point3(0.0, 1.0, 0.0), 1.0, Dielectric(1.5)))
    world.add(Sphere(Point3(-4.0, 1.0, 0.0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))))
    world.add(Sphere(Point3(4.0, 1.0, 0.0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)))

    logger.info("Built bouncing spheres with %d small spheres", len(small))
    return Scene(
        world=world,
        camera=_outdoor_camera(aspect_ratio),
        background=SkyGradient(),
        name="bouncing_spheres",
    )


def perlin_spheres(
    aspect_ratio: float = 16.0 / 9.0,
    rng=None,
    noise_type: NoiseType = NoiseType.MARBLE,
    scale: float = 4.0,
) -> Scene:
    """A noise-textured sphere resting on a noise-textured ground sphere."""
    if rng is None:
        rng = np.random.default_rng(0)

    texture = NoiseTexture(Perlin(rng), noise_type=noise_type, scale=scale)
    world = HittableList(
        [
            Sphere(Point3(0.0, -1000.0, 0.0), 1000.0, Lambertian(texture)),
            Sphere(Point3(0.0, 2.0, 0.0), 2.0, Lambertian(texture)),
        ]
    )
    return Scene(
        world=world,
        camera=_outdoor_camera(aspect_ratio, vfov=40.0),
        background=SkyGradient(),
        name="perlin_spheres",
    )


def simple_light(aspect_ratio: float = 16.0 / 9.0, rng=None) -> Scene:
    """Noise-textured spheres lit only by a spherical and a rectangular light.

    Both lights form the light-sampling target.
    """
    if rng is None:
        rng = np.random.default_rng(0)

    texture = NoiseTexture(Perlin(rng), noise_type=NoiseType.MARBLE, scale=4.0)
    light = DiffuseLight(Color(4.0, 4.0, 4.0))

    light_sphere = Sphere(Point3(0.0, 7.0, 0.0), 2.0, light)
    light_rect = AaRect(3.0, 5.0, 1.0, 3.0, -2.0, light, Plane.XY)

    world = HittableList(
        [
            Sphere(Point3(0.0, -1000.0, 0.0), 1000.0, Lambertian(texture)),
            Sphere(Point3(0.0, 2.0, 0.0), 2.0, Lambertian(texture)),
            light_sphere,
            light_rect,
        ]
    )
    return Scene(
        world=world,
        camera=_outdoor_camera(aspect_ratio, Point3(26.0, 3.0, 6.0), Point3(0.0, 2.0, 0.0)),
        lights=HittableList([light_sphere, light_rect]),
        background=SolidBackground(Color(0.0, 0.0, 0.0)),
        name="simple_light",
    )


def material_showcase(aspect_ratio: float = 16.0 / 9.0, rng=None) -> Scene:
    """Diffuse, fuzzed-metal and hollow-glass spheres under a sky.

    The glass sphere contains a second sphere with a negative radius, which
    turns it into a thin bubble.
    """
    glass = Dielectric(1.5)
    world = HittableList(
        [
            Sphere(Point3(0.0, -100.5, -1.0), 100.0, Lambertian(Color(0.8, 0.8, 0.0))),
            Sphere(Point3(0.0, 0.0, -1.0), 0.5, Lambertian(Color(0.1, 0.2, 0.5))),
            Sphere(Point3(1.0, 0.0, -1.0), 0.5, Metal(Color(0.8, 0.6, 0.2), 0.3)),
            Sphere(Point3(-1.0, 0.0, -1.0), 0.5, glass),
            Sphere(Point3(-1.0, 0.0, -1.0), -0.45, glass),
        ]
    )
    camera = Camera(
        lookfrom=Point3(-2.0, 2.0, 1.0),
        lookat=Point3(0.0, 0.0, -1.0),
        vup=Vec3(0.0, 1.0, 0.0),
        vfov=40.0,
        aspect_ratio=aspect_ratio,
        aperture=0.1,
        focus_dist=(Point3(-2.0, 2.0, 1.0) - Point3(0.0, 0.0, -1.0)).length(),
    )
    return Scene(world=world, camera=camera, background=SkyGradient(), name="material_showcase")
