"""Recursive Monte Carlo light transport.

``ray_color`` estimates the radiance arriving along one ray:

1. Out of bounces: black.
2. Miss: the background color for the ray's direction.
3. Hit: emitted radiance, plus the scattered contribution if the material
   scatters at all.
4. Rays the material fully determines (mirror reflection, refraction,
   isotropic fog) are followed directly and weighted by attenuation.
5. Otherwise a direction is drawn from an equal mixture of "toward the
   lights" and the material's own PDF, and the recursive radiance is
   weighted by ``scattering_pdf / pdf_value``:

       L = Le + attenuation * s(dir) * L(dir) / p(dir)

Directions whose mixture density is not meaningfully positive contribute
nothing; only the emitted term is returned for them.

Example:
    >>> import numpy as np
    >>> from lumitrace.core.integrator import ray_color
    >>> from lumitrace.scene.cornell_box import cornell_box
    >>> scene = cornell_box()
    >>> rng = np.random.default_rng(42)
    >>> ray = scene.camera.get_ray(0.5, 0.5, rng)
    >>> color = ray_color(ray, scene.world, scene.background, 50, rng, scene.lights)
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from lumitrace.core.pdf import CosinePdf, HittablePdf, MixturePdf
from lumitrace.core.ray import Ray
from lumitrace.core.vec3 import Color

if TYPE_CHECKING:
    from lumitrace.geometry.hittable import Hittable
    from lumitrace.scene.scene import Background

# =============================================================================
# Constants
# =============================================================================

# Minimum hit distance; avoids self-intersection (shadow acne)
T_MIN = 0.001

# Densities at or below this are treated as zero
PDF_EPSILON = 1e-8

BLACK = Color(0.0, 0.0, 0.0)


def ray_color(
    ray: Ray,
    world: Hittable,
    background: Background,
    depth: int,
    rng,
    lights: Hittable | None = None,
) -> Color:
    """Estimate the radiance carried back along ``ray``.

    Args:
        ray: The ray to trace.
        world: Root of the scene (BVH or list).
        background: Provides ``value(ray)`` for rays that escape.
        depth: Bounces left before the path is cut off.
        rng: ``numpy.random.Generator`` owned by the caller.
        lights: Optional light-sampling target. Without one, probabilistic
            scattering samples the material's own PDF only.

    Returns:
        Linear radiance estimate.
    """
    if depth <= 0:
        return BLACK

    rec = world.hit(ray, T_MIN, math.inf, rng)
    if rec is None:
        return background.value(ray)

    emitted = rec.material.emitted(ray, rec)
    srec = rec.material.scatter(ray, rec, rng)
    if srec is None:
        return emitted

    if srec.skip_pdf_ray is not None:
        return emitted + srec.attenuation * ray_color(
            srec.skip_pdf_ray, world, background, depth - 1, rng, lights
        )

    material_pdf = srec.pdf if srec.pdf is not None else CosinePdf(rec.normal)
    if lights is not None:
        pdf = MixturePdf([HittablePdf(lights, rec.p), material_pdf])
    else:
        pdf = material_pdf

    scattered = Ray(rec.p, pdf.generate(rng), ray.time)
    pdf_val = pdf.value(scattered.direction)
    if not pdf_val > PDF_EPSILON:
        return emitted

    scattering_pdf = rec.material.scattering_pdf(ray, rec, scattered)
    if scattering_pdf <= 0.0:
        return emitted

    incoming = ray_color(scattered, world, background, depth - 1, rng, lights)
    return emitted + srec.attenuation * incoming * (scattering_pdf / pdf_val)
