"""Scene module: scene container, backgrounds and ready-made scenes.

Components:
    scene: ``Scene`` plus solid and sky-gradient backgrounds
    cornell_box: Cornell box family (boxes, metal, glass sphere, smoke)
    showcase: Bouncing spheres, Perlin spheres, simple light, materials
    catalog: Build a scene by name
"""

from .catalog import SCENE_NAMES, build_scene
from .cornell_box import CornellBoxParams, cornell_box, cornell_smoke
from .scene import Background, Scene, SkyGradient, SolidBackground
from .showcase import bouncing_spheres, material_showcase, perlin_spheres, simple_light

__all__ = [
    "Scene",
    "Background",
    "SolidBackground",
    "SkyGradient",
    "CornellBoxParams",
    "cornell_box",
    "cornell_smoke",
    "bouncing_spheres",
    "perlin_spheres",
    "simple_light",
    "material_showcase",
    "SCENE_NAMES",
    "build_scene",
]
