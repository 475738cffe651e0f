"""Materials module for surface and volume scattering.

Components:
    material: Base ``Material`` interface and ``ScatterRecord``
    lambertian: Ideal diffuse reflection, importance-sampled
    metal: Specular reflection with optional fuzz
    dielectric: Glass-like refraction with Schlick reflectance
    diffuse_light: One-sided area light emission
    isotropic: Uniform phase function for fog and smoke
    textures: Solid, checker, noise and image textures
    perlin: Perlin noise generator

Each material provides:
    - scatter(): Absorb, or return an attenuation plus a ray or a PDF
    - emitted(): Radiance emitted at the hit
    - scattering_pdf(): Density of the material lobe (PDF materials only)
"""

from .dielectric import Dielectric
from .diffuse_light import DiffuseLight
from .isotropic import Isotropic
from .lambertian import Lambertian
from .material import Material, ScatterRecord
from .metal import Metal
from .perlin import NoiseType, Perlin
from .textures import (
    CheckerTexture,
    ImageTexture,
    NoiseTexture,
    SolidColor,
    Texture,
    as_texture,
)

__all__ = [
    "Material",
    "ScatterRecord",
    "Lambertian",
    "Metal",
    "Dielectric",
    "DiffuseLight",
    "Isotropic",
    "Texture",
    "SolidColor",
    "CheckerTexture",
    "NoiseTexture",
    "ImageTexture",
    "as_texture",
    "Perlin",
    "NoiseType",
]
