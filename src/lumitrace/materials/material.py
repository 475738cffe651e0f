"""Material interface and scatter records.

A material answers three questions about a hit:

    scatter(ray_in, rec, rng) -> ScatterRecord | None
    emitted(ray_in, rec) -> Color
    scattering_pdf(ray_in, rec, scattered) -> float

``scatter`` returns None when the material absorbs the ray (lights, metal
reflecting into the surface). Otherwise the record carries the attenuation
and exactly one of:

    skip_pdf_ray: a ray to follow directly (metal, dielectric, isotropic)
    pdf: a distribution to importance-sample (Lambertian)

Only materials that return a ``pdf`` implement ``scattering_pdf``. The
integrator follows ``skip_pdf_ray`` without consulting any density, so the
specular materials never reach ``scattering_pdf``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from lumitrace.core.ray import Ray
from lumitrace.core.vec3 import Color

if TYPE_CHECKING:
    from lumitrace.core.pdf import Pdf
    from lumitrace.geometry.hittable import HitRecord

BLACK = Color(0.0, 0.0, 0.0)


@dataclass
class ScatterRecord:
    """Result of a successful scatter.

    Attributes:
        attenuation: Color the continuing radiance is multiplied by.
        skip_pdf_ray: Ray to follow directly, for deterministic or
            self-sampled scattering.
        pdf: Distribution to sample when ``skip_pdf_ray`` is None.
    """

    attenuation: Color
    skip_pdf_ray: Ray | None = None
    pdf: Pdf | None = None


class Material(ABC):
    """Surface or volume scattering behaviour."""

    @abstractmethod
    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> ScatterRecord | None:
        """Scatter ``ray_in`` at ``rec``; None if the ray is absorbed."""

    def emitted(self, ray_in: Ray, rec: HitRecord) -> Color:
        """Radiance emitted at the hit. Black for non-emissive materials."""
        return BLACK

    def scattering_pdf(self, ray_in: Ray, rec: HitRecord, scattered: Ray) -> float:
        """Density of the material's own lobe in the ``scattered`` direction."""
        raise NotImplementedError(
            f"{type(self).__name__} scatters without a density; follow skip_pdf_ray instead"
        )
