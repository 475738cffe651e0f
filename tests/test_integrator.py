"""Tests for the recursive radiance estimator.

Tests cover:
- Depth limit and background lookups
- Lambertian, mirror, glass and emissive surfaces end to end
- Light sampling through the mixture PDF
"""

import math

import pytest


def _world(*objects):
    from lumitrace.geometry.hittable import HittableList

    return HittableList(objects)


class TestRayColorBasics:
    """Tests for termination and misses."""

    def test_zero_depth_is_black(self, rng, diffuse_gray):
        from lumitrace.core.integrator import ray_color
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Color, Vec3
        from lumitrace.geometry.sphere import Sphere
        from lumitrace.scene.scene import SolidBackground

        world = _world(Sphere(Vec3(0.0, 0.0, -1.0), 0.5, diffuse_gray))
        background = SolidBackground(Color(1.0, 1.0, 1.0))
        ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))

        assert ray_color(ray, world, background, 0, rng) == Color(0.0, 0.0, 0.0)

    def test_miss_returns_background(self, rng, diffuse_gray):
        from lumitrace.core.integrator import ray_color
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Color, Vec3
        from lumitrace.geometry.sphere import Sphere
        from lumitrace.scene.scene import SkyGradient

        world = _world(Sphere(Vec3(0.0, 0.0, -1.0), 0.5, diffuse_gray))
        sky = SkyGradient()
        ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0))

        assert ray_color(ray, world, sky, 50, rng) == sky.value(ray)

    def test_sky_gradient_endpoints(self):
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Color, Vec3
        from lumitrace.scene.scene import SkyGradient

        sky = SkyGradient()
        up = sky.value(Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 5.0, 0.0)))
        down = sky.value(Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, -5.0, 0.0)))
        assert up == Color(0.5, 0.7, 1.0)
        assert down == Color(1.0, 1.0, 1.0)


class TestEndToEnd:
    """Small scenes with known answers."""

    def test_lambertian_under_uniform_sky(self, rng):
        """A diffuse sphere under a uniform sky is tinted but never brighter."""
        from lumitrace.core.integrator import ray_color
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Color, Vec3
        from lumitrace.geometry.sphere import Sphere
        from lumitrace.materials.lambertian import Lambertian
        from lumitrace.scene.scene import SolidBackground

        albedo = Color(0.5, 0.6, 0.7)
        background = SolidBackground(Color(0.8, 0.9, 1.0))
        world = _world(Sphere(Vec3(0.0, 0.0, -2.0), 0.5, Lambertian(albedo)))
        ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))

        for _ in range(20):
            color = ray_color(ray, world, background, 50, rng)
            for channel in range(3):
                assert 0.0 < color[channel]
                assert color[channel] <= background.color[channel] + 1e-9
                assert color[channel] <= albedo[channel] + 1e-9
            # One bounce off a convex sphere always escapes to the sky
            assert color[0] == pytest.approx(albedo[0] * background.color[0])

    def test_mirror_returns_reflected_background(self, rng):
        """A perfect mirror shows exactly the background in the mirrored direction."""
        from lumitrace.core.integrator import ray_color
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Color, Vec3
        from lumitrace.geometry.sphere import Sphere
        from lumitrace.materials.metal import Metal
        from lumitrace.scene.scene import SolidBackground

        background = SolidBackground(Color(0.3, 0.6, 0.9))
        world = _world(Sphere(Vec3(0.0, 0.0, -2.0), 0.5, Metal(Color(1.0, 1.0, 1.0), fuzz=0.0)))
        ray = Ray(Vec3(0.0, 0.2, 0.0), Vec3(0.0, 0.0, -1.0))

        assert ray_color(ray, world, background, 50, rng) == Color(0.3, 0.6, 0.9)

    def test_tinted_mirror_is_deterministic(self):
        import numpy as np

        from lumitrace.core.integrator import ray_color
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Color, Vec3
        from lumitrace.geometry.sphere import Sphere
        from lumitrace.materials.metal import Metal
        from lumitrace.scene.scene import SkyGradient

        world = _world(Sphere(Vec3(0.0, 0.0, -2.0), 0.5, Metal(Color(0.8, 0.5, 0.5))))
        ray = Ray(Vec3(0.0, 0.1, 0.0), Vec3(0.0, 0.0, -1.0))
        a = ray_color(ray, world, SkyGradient(), 50, np.random.default_rng(1))
        b = ray_color(ray, world, SkyGradient(), 50, np.random.default_rng(2))
        assert a == b

    def test_glass_head_on_passes_background_through(self, rng):
        """Clear glass neither absorbs nor tints a head-on ray."""
        from lumitrace.core.integrator import ray_color
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Color, Vec3
        from lumitrace.geometry.sphere import Sphere
        from lumitrace.materials.dielectric import Dielectric
        from lumitrace.scene.scene import SolidBackground

        background = SolidBackground(Color(0.2, 0.4, 0.6))
        world = _world(Sphere(Vec3(0.0, 0.0, -2.0), 0.5, Dielectric(1.5)))
        ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))

        for _ in range(20):
            assert ray_color(ray, world, background, 50, rng) == Color(0.2, 0.4, 0.6)

    def test_emitter_hit_and_miss(self, rng):
        """A direct hit on a light returns its emission; a miss returns black."""
        from lumitrace.core.integrator import ray_color
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Color, Vec3
        from lumitrace.geometry.aarect import AaRect, Plane
        from lumitrace.materials.diffuse_light import DiffuseLight
        from lumitrace.scene.scene import SolidBackground

        light = AaRect(-1.0, 1.0, -1.0, 1.0, -5.0, DiffuseLight(Color(4.0, 3.0, 2.0)), Plane.XY)
        world = _world(light)
        black = SolidBackground()

        hit = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))
        miss = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0))
        assert ray_color(hit, world, black, 50, rng, lights=light) == Color(4.0, 3.0, 2.0)
        assert ray_color(miss, world, black, 50, rng, lights=light) == Color(0.0, 0.0, 0.0)

    def test_back_of_light_is_dark(self, rng):
        from lumitrace.core.integrator import ray_color
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Color, Vec3
        from lumitrace.geometry.aarect import AaRect, Plane
        from lumitrace.materials.diffuse_light import DiffuseLight
        from lumitrace.scene.scene import SolidBackground

        light = AaRect(-1.0, 1.0, -1.0, 1.0, -5.0, DiffuseLight(Color(4.0, 3.0, 2.0)), Plane.XY)
        ray = Ray(Vec3(0.0, 0.0, -10.0), Vec3(0.0, 0.0, 1.0))
        assert ray_color(ray, _world(light), SolidBackground(), 50, rng) == Color(0.0, 0.0, 0.0)


class TestLightSampling:
    """Tests for mixing light sampling with material sampling."""

    def _floor_and_light(self):
        from lumitrace.core.vec3 import Color
        from lumitrace.geometry.aarect import AaRect, Plane
        from lumitrace.geometry.hittable import FlipFace
        from lumitrace.materials.diffuse_light import DiffuseLight
        from lumitrace.materials.lambertian import Lambertian

        floor = AaRect(-10.0, 10.0, -10.0, 10.0, 0.0, Lambertian(Color(0.5, 0.5, 0.5)), Plane.XZ)
        # Facing down onto the floor
        light = FlipFace(AaRect(-0.5, 0.5, -0.5, 0.5, 2.0, DiffuseLight(Color(10.0, 10.0, 10.0)), Plane.XZ))
        return _world(floor, light), light

    def test_estimates_are_finite_and_non_negative(self, rng):
        from lumitrace.core.integrator import ray_color
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Vec3
        from lumitrace.scene.scene import SolidBackground

        world, light = self._floor_and_light()
        ray = Ray(Vec3(0.0, 1.0, 3.0), Vec3(0.0, -1.0, -3.0))
        for _ in range(200):
            color = ray_color(ray, world, SolidBackground(), 10, rng, lights=light)
            for channel in color:
                assert math.isfinite(channel)
                assert channel >= 0.0

    def test_light_sampling_reduces_variance(self):
        """Both estimators agree on the mean; sampling the light is less noisy."""
        import numpy as np

        from lumitrace.core.integrator import ray_color
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Vec3
        from lumitrace.scene.scene import SolidBackground

        world, light = self._floor_and_light()
        ray = Ray(Vec3(0.0, 1.0, 3.0), Vec3(0.0, -1.0, -3.0))
        background = SolidBackground()

        n = 3000
        rng_a = np.random.default_rng(7)
        rng_b = np.random.default_rng(8)
        with_lights = np.array([ray_color(ray, world, background, 2, rng_a, lights=light).x for _ in range(n)])
        without = np.array([ray_color(ray, world, background, 2, rng_b).x for _ in range(n)])

        assert with_lights.mean() == pytest.approx(without.mean(), rel=0.25)
        assert with_lights.std() < without.std()
