"""Cornell box scenes.

The Cornell box is the classic test scene for global illumination:

- 5 walls forming an open box (left, right, back, floor, ceiling)
- Left wall green, right wall red (as seen from the camera)
- Back, floor and ceiling white
- A rectangular area light just below the ceiling
- Two white boxes rotated about Y, or one of the variants below

The box spans 0 to 555 on every axis; the camera sits at z = -800 looking
through the open front toward +Z.

Variants:
    "boxes": two white boxes (the standard scene)
    "metal": the tall box is polished aluminium
    "sphere": the short box is replaced by a glass sphere

Example:
    >>> from lumitrace.scene.cornell_box import CornellBoxParams, cornell_box
    >>> scene = cornell_box(params=CornellBoxParams(variant="sphere"))
    >>> scene.lights
    AaRect(XZ, a=[213.0, 343.0], b=[227.0, 332.0], k=554.0)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from lumitrace.camera.camera import Camera
from lumitrace.core.vec3 import Color, Point3, Vec3
from lumitrace.geometry.aarect import AaRect, Plane
from lumitrace.geometry.box import Box
from lumitrace.geometry.bvh import BvhNode
from lumitrace.geometry.hittable import FlipFace, Hittable, HittableList
from lumitrace.geometry.medium import ConstantMedium
from lumitrace.geometry.sphere import Sphere
from lumitrace.geometry.transform import RotateY, Translate
from lumitrace.materials.dielectric import Dielectric
from lumitrace.materials.diffuse_light import DiffuseLight
from lumitrace.materials.lambertian import Lambertian
from lumitrace.materials.material import Material
from lumitrace.materials.metal import Metal
from lumitrace.scene.scene import Scene, SolidBackground

logger = logging.getLogger(__name__)

# =============================================================================
# Cornell Box Parameters
# =============================================================================

VARIANTS = ("boxes", "metal", "sphere")


@dataclass
class CornellBoxParams:
    """Parameters for configuring a Cornell box scene.

    Attributes:
        light_intensity: Multiplier applied to ``light_color``.
        light_color: RGB color of the light before scaling.
        left_wall_color: RGB albedo of the wall on the image's left.
        right_wall_color: RGB albedo of the wall on the image's right.
        white_color: RGB albedo of the back wall, floor, ceiling and boxes.
        variant: One of "boxes", "metal" or "sphere".
        use_bvh: Wrap the world in a bounding volume hierarchy.

    Example:
        >>> params = CornellBoxParams()
        >>> params.light_intensity
        15.0
        >>> warm = CornellBoxParams(light_color=(1.0, 0.9, 0.8), variant="metal")
    """

    light_intensity: float = 15.0
    light_color: tuple[float, float, float] = (1.0, 1.0, 1.0)
    left_wall_color: tuple[float, float, float] = (0.12, 0.45, 0.15)
    right_wall_color: tuple[float, float, float] = (0.65, 0.05, 0.05)
    white_color: tuple[float, float, float] = (0.73, 0.73, 0.73)
    variant: str = "boxes"
    use_bvh: bool = True

    def __post_init__(self) -> None:
        if self.variant not in VARIANTS:
            raise ValueError(f"Unknown Cornell box variant {self.variant!r}; expected one of {VARIANTS}")
        if self.light_intensity < 0.0:
            raise ValueError("light_intensity must be non-negative")

    @property
    def emission(self) -> Color:
        return Color(*self.light_color) * self.light_intensity


# =============================================================================
# Cornell Box Constants
# =============================================================================

BOX_SIZE = 555.0

# Ceiling light, in the XZ plane just below the ceiling
LIGHT_X = (213.0, 343.0)
LIGHT_Z = (227.0, 332.0)
LIGHT_Y = 554.0

# Smoke scene light is larger and dimmer
SMOKE_LIGHT_X = (113.0, 443.0)
SMOKE_LIGHT_Z = (127.0, 432.0)
SMOKE_LIGHT_INTENSITY = 7.0
SMOKE_DENSITY = 0.01

ALUMINIUM_ALBEDO = (0.8, 0.85, 0.88)
GLASS_IOR = 1.5


def cornell_camera(aspect_ratio: float = 1.0) -> Camera:
    """The camera shared by all Cornell box scenes."""
    return Camera(
        lookfrom=Point3(278.0, 278.0, -800.0),
        lookat=Point3(278.0, 278.0, 0.0),
        vup=Vec3(0.0, 1.0, 0.0),
        vfov=40.0,
        aspect_ratio=aspect_ratio,
        aperture=0.0,
        focus_dist=10.0,
        time0=0.0,
        time1=1.0,
    )


def _add_walls(objects: list[Hittable], params: CornellBoxParams, white: Material) -> None:
    green = Lambertian(Color(*params.left_wall_color))
    red = Lambertian(Color(*params.right_wall_color))
    s = BOX_SIZE

    # Left wall (x = 555), facing in
    objects.append(FlipFace(AaRect(0.0, s, 0.0, s, s, green, Plane.YZ)))
    # Right wall (x = 0)
    objects.append(AaRect(0.0, s, 0.0, s, 0.0, red, Plane.YZ))
    # Ceiling, facing down
    objects.append(FlipFace(AaRect(0.0, s, 0.0, s, s, white, Plane.XZ)))
    # Floor
    objects.append(AaRect(0.0, s, 0.0, s, 0.0, white, Plane.XZ))
    # Back wall, facing the camera
    objects.append(FlipFace(AaRect(0.0, s, 0.0, s, s, white, Plane.XY)))


def _tall_box(material: Material) -> Hittable:
    box = Box(Point3(0.0, 0.0, 0.0), Point3(165.0, 330.0, 165.0), material)
    return Translate(RotateY(box, 15.0, 0.0, 1.0), Vec3(265.0, 0.0, 295.0))


def _short_box(material: Material) -> Hittable:
    box = Box(Point3(0.0, 0.0, 0.0), Point3(165.0, 165.0, 165.0), material)
    return Translate(RotateY(box, -18.0, 0.0, 1.0), Vec3(130.0, 0.0, 65.0))


def _assemble(objects: list[Hittable], use_bvh: bool, rng) -> Hittable:
    if not use_bvh:
        return HittableList(objects)
    if rng is None:
        rng = np.random.default_rng(0)
    return BvhNode.build(objects, 0.0, 1.0, rng)


# =============================================================================
# Cornell Box Factories
# =============================================================================


def cornell_box(
    aspect_ratio: float = 1.0,
    params: CornellBoxParams | None = None,
    rng=None,
) -> Scene:
    """Create a Cornell box scene.

    Args:
        aspect_ratio: Width over height of the output image.
        params: Wall colors, light and variant. Defaults to
            ``CornellBoxParams()``.
        rng: Generator used to build the BVH. A fixed seed is used when
            omitted so the scene is reproducible.

    Returns:
        A ``Scene`` with a black background whose light-sampling target is
        the ceiling light.
    """
    if params is None:
        params = CornellBoxParams()

    white = Lambertian(Color(*params.white_color))
    light = DiffuseLight(params.emission)

    objects: list[Hittable] = []
    objects.append(FlipFace(AaRect(*LIGHT_X, *LIGHT_Z, LIGHT_Y, light, Plane.XZ)))
    _add_walls(objects, params, white)

    if params.variant == "metal":
        objects.append(_tall_box(Metal(Color(*ALUMINIUM_ALBEDO), 0.0)))
    else:
        objects.append(_tall_box(white))

    if params.variant == "sphere":
        objects.append(Sphere(Point3(190.0, 90.0, 190.0), 90.0, Dielectric(GLASS_IOR)))
    else:
        objects.append(_short_box(white))

    # Sampling target only; its material is never consulted
    lights = AaRect(*LIGHT_X, *LIGHT_Z, LIGHT_Y, light, Plane.XZ)

    logger.info("Built Cornell box (%s) with %d objects", params.variant, len(objects))
    return Scene(
        world=_assemble(objects, params.use_bvh, rng),
        camera=cornell_camera(aspect_ratio),
        lights=lights,
        background=SolidBackground(Color(0.0, 0.0, 0.0)),
        name=f"cornell_box[{params.variant}]",
    )


def cornell_smoke(
    aspect_ratio: float = 1.0,
    params: CornellBoxParams | None = None,
    rng=None,
) -> Scene:
    """Cornell box with the two boxes replaced by black and white smoke."""
    if params is None:
        params = CornellBoxParams(light_intensity=SMOKE_LIGHT_INTENSITY)

    white = Lambertian(Color(*params.white_color))
    light = DiffuseLight(params.emission)

    objects: list[Hittable] = []
    objects.append(FlipFace(AaRect(*SMOKE_LIGHT_X, *SMOKE_LIGHT_Z, LIGHT_Y, light, Plane.XZ)))
    _add_walls(objects, params, white)

    objects.append(ConstantMedium(_tall_box(white), SMOKE_DENSITY, Color(0.0, 0.0, 0.0)))
    objects.append(ConstantMedium(_short_box(white), SMOKE_DENSITY, Color(1.0, 1.0, 1.0)))

    lights = AaRect(*SMOKE_LIGHT_X, *SMOKE_LIGHT_Z, LIGHT_Y, light, Plane.XZ)

    logger.info("Built Cornell smoke with %d objects", len(objects))
    return Scene(
        world=_assemble(objects, params.use_bvh, rng),
        camera=cornell_camera(aspect_ratio),
        lights=lights,
        background=SolidBackground(Color(0.0, 0.0, 0.0)),
        name="cornell_smoke",
    )
