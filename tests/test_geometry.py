"""Unit tests for rectangles, boxes, instance transforms and media.

Tests cover:
- Axis-aligned rectangle intersection, uv and light sampling
- Boxes assembled from six rectangles
- FlipFace, Translate and RotateY wrappers
- Hittable lists
- Constant-density media
"""

import math

import pytest


def _xz_light(material, y=554.0):
    from lumitrace.geometry.aarect import AaRect, Plane

    return AaRect(213.0, 343.0, 227.0, 332.0, y, material, Plane.XZ)


class TestAaRect:
    """Tests for axis-aligned rectangles."""

    def test_hit_inside_extent(self, diffuse_gray):
        """Test a ray crossing an XY rectangle inside its extent."""
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Vec3
        from lumitrace.geometry.aarect import AaRect, Plane

        rect = AaRect(-1.0, 1.0, -1.0, 1.0, -2.0, diffuse_gray, Plane.XY)
        rec = rect.hit(Ray(Vec3(0.5, 0.0, 0.0), Vec3(0.0, 0.0, -1.0)), 0.001, math.inf)

        assert rec is not None
        assert rec.t == pytest.approx(2.0)
        assert rec.p == Vec3(0.5, 0.0, -2.0)
        assert rec.u == pytest.approx(0.75)
        assert rec.v == pytest.approx(0.5)
        # Outward normal is +z; the ray travels -z so it sees the front
        assert rec.front_face
        assert rec.normal == Vec3(0.0, 0.0, 1.0)

    def test_interval_open_at_t_min(self, diffuse_gray):
        """A hit exactly at t_min is rejected; one exactly at t_max is kept."""
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Vec3
        from lumitrace.geometry.aarect import AaRect, Plane

        rect = AaRect(-1.0, 1.0, -1.0, 1.0, -1.0, diffuse_gray, Plane.XY)
        ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))

        assert rect.hit(ray, 1.0, math.inf) is None
        rec = rect.hit(ray, 0.001, 1.0)
        assert rec is not None
        assert rec.t == 1.0

    def test_miss_outside_extent(self, diffuse_gray):
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Vec3
        from lumitrace.geometry.aarect import AaRect, Plane

        rect = AaRect(-1.0, 1.0, -1.0, 1.0, -2.0, diffuse_gray, Plane.XY)
        assert rect.hit(Ray(Vec3(1.5, 0.0, 0.0), Vec3(0.0, 0.0, -1.0)), 0.001, math.inf) is None

    def test_parallel_ray_misses(self, diffuse_gray):
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Vec3
        from lumitrace.geometry.aarect import AaRect, Plane

        rect = AaRect(-1.0, 1.0, -1.0, 1.0, 0.0, diffuse_gray, Plane.YZ)
        assert rect.hit(Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0)), 0.001, math.inf) is None

    def test_from_below_is_back_face(self, diffuse_gray):
        """An XZ rectangle seen from below reports a back-face hit."""
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Vec3

        light = _xz_light(diffuse_gray)
        rec = light.hit(Ray(Vec3(278.0, 0.0, 278.0), Vec3(0.0, 1.0, 0.0)), 0.001, math.inf)
        assert rec.t == pytest.approx(554.0)
        assert not rec.front_face
        assert rec.normal == Vec3(0.0, -1.0, 0.0)

    def test_degenerate_extent_rejected(self, diffuse_gray):
        from lumitrace.geometry.aarect import AaRect, Plane

        with pytest.raises(ValueError):
            AaRect(1.0, 1.0, 0.0, 1.0, 0.0, diffuse_gray, Plane.XY)

    def test_bounding_box_is_padded(self, diffuse_gray):
        from lumitrace.core.vec3 import Vec3

        box = _xz_light(diffuse_gray).bounding_box(0.0, 1.0)
        assert box.minimum.y < 554.0 < box.maximum.y
        assert box.contains(Vec3(300.0, 554.0, 300.0))

    def test_area(self, diffuse_gray):
        assert _xz_light(diffuse_gray).area == pytest.approx(130.0 * 105.0)


class TestAaRectPdf:
    """Tests for sampling directions toward a rectangle."""

    def test_random_directions_hit_rect(self, rng, diffuse_gray):
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Vec3

        light = _xz_light(diffuse_gray)
        origin = Vec3(278.0, 100.0, 278.0)
        for _ in range(100):
            direction = light.random(origin, rng)
            rec = light.hit(Ray(origin, direction), 0.001, math.inf)
            assert rec is not None
            assert rec.t == pytest.approx(1.0)

    def test_pdf_value_straight_up(self, diffuse_gray):
        """Straight above a point, density is distance^2 / area."""
        from lumitrace.core.vec3 import Vec3

        light = _xz_light(diffuse_gray)
        origin = Vec3(278.0, 454.0, 278.0)
        expected = 100.0 ** 2 / light.area
        assert light.pdf_value(origin, Vec3(0.0, 1.0, 0.0)) == pytest.approx(expected)
        assert light.pdf_value(origin, Vec3(0.0, 7.0, 0.0)) == pytest.approx(expected)

    def test_pdf_zero_when_missing(self, diffuse_gray):
        from lumitrace.core.vec3 import Vec3

        light = _xz_light(diffuse_gray)
        assert light.pdf_value(Vec3(278.0, 0.0, 278.0), Vec3(0.0, -1.0, 0.0)) == 0.0

    def test_pdf_integrates_to_one(self, rng, diffuse_gray):
        """Importance sampling the cosine-free integrand 1 gives 1."""
        import numpy as np

        from lumitrace.core.ray import random_unit_vector
        from lumitrace.core.vec3 import Vec3

        light = _xz_light(diffuse_gray)
        origin = Vec3(278.0, 500.0, 278.0)
        n = 20000
        # Uniform sphere sampling: E[pdf / (1 / 4pi)] = integral of pdf = 1
        values = [light.pdf_value(origin, random_unit_vector(rng)) for _ in range(n)]
        estimate = 4.0 * math.pi * float(np.mean(values))
        assert estimate == pytest.approx(1.0, abs=0.1)


class TestFlipFace:
    """Tests for the face-flipping wrapper."""

    def test_flips_front_face_only(self, diffuse_gray):
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Vec3
        from lumitrace.geometry.hittable import FlipFace

        light = _xz_light(diffuse_gray)
        flipped = FlipFace(light)
        ray = Ray(Vec3(278.0, 0.0, 278.0), Vec3(0.0, 1.0, 0.0))

        plain = light.hit(ray, 0.001, math.inf)
        rec = flipped.hit(ray, 0.001, math.inf)
        assert rec.front_face is not plain.front_face
        assert rec.t == plain.t
        assert rec.normal == plain.normal

    def test_delegates_box_and_sampling(self, diffuse_gray):
        from lumitrace.core.vec3 import Vec3
        from lumitrace.geometry.hittable import FlipFace

        light = _xz_light(diffuse_gray)
        flipped = FlipFace(light)
        origin = Vec3(278.0, 454.0, 278.0)
        assert flipped.bounding_box(0.0, 1.0).minimum == light.bounding_box(0.0, 1.0).minimum
        assert flipped.pdf_value(origin, Vec3(0.0, 1.0, 0.0)) == light.pdf_value(
            origin, Vec3(0.0, 1.0, 0.0)
        )


class TestHittableList:
    """Tests for linear hittable collections."""

    def test_returns_nearest(self, diffuse_gray):
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Vec3
        from lumitrace.geometry.hittable import HittableList
        from lumitrace.geometry.sphere import Sphere

        far = Sphere(Vec3(0.0, 0.0, -10.0), 1.0, diffuse_gray)
        near = Sphere(Vec3(0.0, 0.0, -4.0), 1.0, diffuse_gray)
        world = HittableList([far, near])

        rec = world.hit(Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0)), 0.001, math.inf)
        assert rec.t == pytest.approx(3.0)

    def test_empty_list(self):
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Vec3
        from lumitrace.geometry.hittable import HittableList

        world = HittableList()
        assert world.hit(Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0)), 0.001, math.inf) is None
        assert world.bounding_box(0.0, 1.0) is None
        assert len(world) == 0

    def test_bounding_box_is_union(self, diffuse_gray):
        from lumitrace.core.vec3 import Vec3
        from lumitrace.geometry.hittable import HittableList
        from lumitrace.geometry.sphere import Sphere

        world = HittableList(
            [
                Sphere(Vec3(-2.0, 0.0, 0.0), 1.0, diffuse_gray),
                Sphere(Vec3(3.0, 1.0, 0.0), 0.5, diffuse_gray),
            ]
        )
        box = world.bounding_box(0.0, 1.0)
        assert box.minimum == Vec3(-3.0, -1.0, -1.0)
        assert box.maximum == Vec3(3.5, 1.5, 1.0)

    def test_pdf_is_mean_of_members(self, diffuse_gray):
        """A list of lights has the mean density of its members."""
        from lumitrace.core.vec3 import Vec3
        from lumitrace.geometry.hittable import HittableList
        from lumitrace.geometry.sphere import Sphere

        light = _xz_light(diffuse_gray)
        ball = Sphere(Vec3(0.0, 0.0, 0.0), 1.0, diffuse_gray)
        lights = HittableList([light, ball])
        origin = Vec3(278.0, 454.0, 278.0)
        direction = Vec3(0.0, 1.0, 0.0)

        expected = 0.5 * light.pdf_value(origin, direction) + 0.5 * ball.pdf_value(origin, direction)
        assert lights.pdf_value(origin, direction) == pytest.approx(expected)


class TestBox:
    """Tests for six-sided boxes."""

    def test_hit_from_outside_is_front_face(self, diffuse_gray):
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Vec3
        from lumitrace.geometry.box import Box

        box = Box(Vec3(0.0, 0.0, 0.0), Vec3(1.0, 2.0, 3.0), diffuse_gray)
        # One ray per face, each approaching from outside
        rays = [
            Ray(Vec3(0.5, 1.0, 10.0), Vec3(0.0, 0.0, -1.0)),
            Ray(Vec3(0.5, 1.0, -10.0), Vec3(0.0, 0.0, 1.0)),
            Ray(Vec3(0.5, 10.0, 1.5), Vec3(0.0, -1.0, 0.0)),
            Ray(Vec3(0.5, -10.0, 1.5), Vec3(0.0, 1.0, 0.0)),
            Ray(Vec3(10.0, 1.0, 1.5), Vec3(-1.0, 0.0, 0.0)),
            Ray(Vec3(-10.0, 1.0, 1.5), Vec3(1.0, 0.0, 0.0)),
        ]
        for ray in rays:
            rec = box.hit(ray, 0.001, math.inf)
            assert rec is not None
            assert rec.front_face
            assert rec.normal.dot(ray.direction) < 0.0

    def test_inside_hit_is_back_face(self, diffuse_gray):
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Vec3
        from lumitrace.geometry.box import Box

        box = Box(Vec3(0.0, 0.0, 0.0), Vec3(1.0, 1.0, 1.0), diffuse_gray)
        rec = box.hit(Ray(Vec3(0.5, 0.5, 0.5), Vec3(1.0, 0.0, 0.0)), 0.001, math.inf)
        assert rec.t == pytest.approx(0.5)
        assert not rec.front_face

    def test_corner_order_does_not_matter(self, diffuse_gray):
        from lumitrace.core.vec3 import Vec3
        from lumitrace.geometry.box import Box

        box = Box(Vec3(1.0, 2.0, 3.0), Vec3(0.0, 0.0, 0.0), diffuse_gray)
        bbox = box.bounding_box(0.0, 1.0)
        assert bbox.minimum == Vec3(0.0, 0.0, 0.0)
        assert bbox.maximum == Vec3(1.0, 2.0, 3.0)


class TestTranslate:
    """Tests for the translation wrapper."""

    def test_hit_is_offset(self, diffuse_gray):
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Vec3
        from lumitrace.geometry.sphere import Sphere
        from lumitrace.geometry.transform import Translate

        moved = Translate(Sphere(Vec3(0.0, 0.0, 0.0), 1.0, diffuse_gray), Vec3(5.0, 0.0, 0.0))
        ray = Ray(Vec3(5.0, 0.0, 5.0), Vec3(0.0, 0.0, -1.0))
        rec = moved.hit(ray, 0.001, math.inf)

        assert rec.t == pytest.approx(4.0)
        assert rec.p == Vec3(5.0, 0.0, 1.0)
        assert rec.front_face
        assert Translate(
            Sphere(Vec3(0.0, 0.0, 0.0), 1.0, diffuse_gray), Vec3(5.0, 0.0, 0.0)
        ).hit(Ray(Vec3(0.0, 0.0, 5.0), Vec3(0.0, 0.0, -1.0)), 0.001, math.inf) is None

    def test_bounding_box_is_offset(self, diffuse_gray):
        from lumitrace.core.vec3 import Vec3
        from lumitrace.geometry.box import Box
        from lumitrace.geometry.transform import Translate

        moved = Translate(Box(Vec3(0.0, 0.0, 0.0), Vec3(1.0, 1.0, 1.0), diffuse_gray), Vec3(2.0, 3.0, 4.0))
        box = moved.bounding_box(0.0, 1.0)
        assert box.minimum == Vec3(2.0, 3.0, 4.0)
        assert box.maximum == Vec3(3.0, 4.0, 5.0)


class TestRotateY:
    """Tests for rotation about the Y axis."""

    def test_quarter_turn_moves_sphere(self, diffuse_gray):
        """A +90 degree turn maps +x to -z."""
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Vec3
        from lumitrace.geometry.sphere import Sphere
        from lumitrace.geometry.transform import RotateY

        rotated = RotateY(Sphere(Vec3(3.0, 0.0, 0.0), 1.0, diffuse_gray), 90.0)
        rec = rotated.hit(Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0)), 0.001, math.inf)

        assert rec is not None
        assert rec.t == pytest.approx(2.0)
        assert rec.p.z == pytest.approx(-2.0)
        assert rec.normal.z == pytest.approx(1.0)
        assert rec.front_face

    def test_bounding_box_contains_rotated_corners(self, diffuse_gray):
        from lumitrace.core.vec3 import Vec3
        from lumitrace.geometry.box import Box
        from lumitrace.geometry.transform import RotateY

        rotated = RotateY(Box(Vec3(0.0, 0.0, 0.0), Vec3(165.0, 330.0, 165.0), diffuse_gray), 15.0)
        box = rotated.bounding_box(0.0, 1.0)
        theta = math.radians(15.0)
        for x in (0.0, 165.0):
            for z in (0.0, 165.0):
                corner = Vec3(
                    math.cos(theta) * x + math.sin(theta) * z,
                    330.0,
                    -math.sin(theta) * x + math.cos(theta) * z,
                )
                assert box.contains(corner, tolerance=1e-9)
        assert box.maximum.y == pytest.approx(330.0)

    def test_hits_inside_bounding_box(self, rng, diffuse_gray):
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Vec3
        from lumitrace.geometry.box import Box
        from lumitrace.geometry.transform import RotateY, Translate

        shape = Translate(
            RotateY(Box(Vec3(0.0, 0.0, 0.0), Vec3(2.0, 3.0, 1.0), diffuse_gray), -18.0),
            Vec3(1.0, 0.0, -1.0),
        )
        box = shape.bounding_box(0.0, 1.0)
        hits = 0
        for _ in range(200):
            origin = Vec3.random(rng, -10.0, 10.0)
            target = Vec3.random(rng, -1.0, 3.0)
            rec = shape.hit(Ray(origin, target - origin), 0.001, math.inf)
            if rec is not None:
                hits += 1
                assert box.contains(rec.p, tolerance=1e-6)
        assert hits > 0


class TestConstantMedium:
    """Tests for homogeneous participating media."""

    def test_requires_rng(self, diffuse_gray):
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Color, Vec3
        from lumitrace.geometry.medium import ConstantMedium
        from lumitrace.geometry.sphere import Sphere

        fog = ConstantMedium(Sphere(Vec3(0.0, 0.0, 0.0), 1.0, diffuse_gray), 1.0, Color(1.0, 1.0, 1.0))
        with pytest.raises(ValueError):
            fog.hit(Ray(Vec3(0.0, 0.0, 5.0), Vec3(0.0, 0.0, -1.0)), 0.001, math.inf)

    @pytest.mark.parametrize("density", [0.0, -1.0])
    def test_rejects_non_positive_density(self, density, diffuse_gray):
        from lumitrace.core.vec3 import Color, Vec3
        from lumitrace.geometry.medium import ConstantMedium
        from lumitrace.geometry.sphere import Sphere

        with pytest.raises(ValueError):
            ConstantMedium(Sphere(Vec3(0.0, 0.0, 0.0), 1.0, diffuse_gray), density, Color(1.0, 1.0, 1.0))

    def test_scatter_points_inside_boundary(self, rng, diffuse_gray):
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Color, Vec3
        from lumitrace.geometry.medium import ConstantMedium
        from lumitrace.geometry.sphere import Sphere
        from lumitrace.materials.isotropic import Isotropic

        fog = ConstantMedium(Sphere(Vec3(0.0, 0.0, 0.0), 1.0, diffuse_gray), 2.0, Color(1.0, 1.0, 1.0))
        ray = Ray(Vec3(0.0, 0.0, 5.0), Vec3(0.0, 0.0, -1.0))
        hits = 0
        for _ in range(500):
            rec = fog.hit(ray, 0.001, math.inf, rng)
            if rec is not None:
                hits += 1
                assert 4.0 <= rec.t <= 6.0
                assert rec.p.length() <= 1.0 + 1e-9
                assert isinstance(rec.material, Isotropic)
        # Path of length 2 at density 2: P(scatter) = 1 - exp(-4) ~ 0.98
        assert 440 < hits < 500

    def test_transmission_matches_beer_lambert(self, rng, diffuse_gray):
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Color, Vec3
        from lumitrace.geometry.medium import ConstantMedium
        from lumitrace.geometry.sphere import Sphere

        fog = ConstantMedium(Sphere(Vec3(0.0, 0.0, 0.0), 1.0, diffuse_gray), 0.5, Color(1.0, 1.0, 1.0))
        ray = Ray(Vec3(0.0, 0.0, 5.0), Vec3(0.0, 0.0, -1.0))
        n = 4000
        passed = sum(fog.hit(ray, 0.001, math.inf, rng) is None for _ in range(n))
        assert passed / n == pytest.approx(math.exp(-1.0), abs=0.03)

    def test_ray_starting_inside(self, rng, diffuse_gray):
        """A ray starting inside the volume scatters ahead of its origin."""
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Color, Vec3
        from lumitrace.geometry.medium import ConstantMedium
        from lumitrace.geometry.sphere import Sphere

        fog = ConstantMedium(Sphere(Vec3(0.0, 0.0, 0.0), 1.0, diffuse_gray), 50.0, Color(1.0, 1.0, 1.0))
        ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(1.0, 0.0, 0.0))
        for _ in range(50):
            rec = fog.hit(ray, 0.001, math.inf, rng)
            if rec is not None:
                assert 0.001 <= rec.t <= 1.0

    def test_miss_outside_boundary(self, rng, diffuse_gray):
        from lumitrace.core.ray import Ray
        from lumitrace.core.vec3 import Color, Vec3
        from lumitrace.geometry.medium import ConstantMedium
        from lumitrace.geometry.sphere import Sphere

        fog = ConstantMedium(Sphere(Vec3(0.0, 0.0, 0.0), 1.0, diffuse_gray), 100.0, Color(1.0, 1.0, 1.0))
        ray = Ray(Vec3(0.0, 3.0, 5.0), Vec3(0.0, 0.0, -1.0))
        assert fog.hit(ray, 0.001, math.inf, rng) is None
