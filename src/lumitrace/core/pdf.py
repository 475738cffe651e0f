"""Probability density functions over scattering directions.

Three strategies are provided:

- ``CosinePdf``: cosine-weighted hemisphere around a surface normal.
- ``HittablePdf``: directions toward a known shape (usually a light).
- ``MixturePdf``: equal-weight mixture of N component PDFs.

Mixing "toward the lights" with "the material's natural lobe" is multiple
importance sampling: each strategy covers the directions the other samples
poorly.

Example:
    >>> pdf = MixturePdf([HittablePdf(lights, rec.p), CosinePdf(rec.normal)])
    >>> direction = pdf.generate(rng)
    >>> density = pdf.value(direction)
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

from lumitrace.core.onb import ONB
from lumitrace.core.ray import random_cosine_direction
from lumitrace.core.vec3 import Point3, Vec3

if TYPE_CHECKING:
    from lumitrace.geometry.hittable import Hittable


class Pdf(ABC):
    """A sampleable distribution of directions."""

    @abstractmethod
    def value(self, direction: Vec3) -> float:
        """Density of ``direction`` with respect to solid angle."""

    @abstractmethod
    def generate(self, rng) -> Vec3:
        """Draw a direction from the distribution."""


class CosinePdf(Pdf):
    """Cosine-weighted hemisphere around ``w``."""

    def __init__(self, w: Vec3) -> None:
        self.uvw = ONB.build_from_w(w)

    def value(self, direction: Vec3) -> float:
        cosine = direction.unit_vector().dot(self.uvw.w)
        return max(0.0, cosine) / math.pi

    def generate(self, rng) -> Vec3:
        return self.uvw.local_vector(random_cosine_direction(rng))


class HittablePdf(Pdf):
    """Directions from ``origin`` toward the shape ``target``."""

    def __init__(self, target: Hittable, origin: Point3) -> None:
        self.target = target
        self.origin = origin

    def value(self, direction: Vec3) -> float:
        return self.target.pdf_value(self.origin, direction)

    def generate(self, rng) -> Vec3:
        return self.target.random(self.origin, rng)


class MixturePdf(Pdf):
    """Equal-weight mixture of one or more PDFs."""

    def __init__(self, components: Sequence[Pdf]) -> None:
        if len(components) == 0:
            raise ValueError("MixturePdf requires at least one component")
        self.components = list(components)

    def value(self, direction: Vec3) -> float:
        weight = 1.0 / len(self.components)
        return sum(weight * pdf.value(direction) for pdf in self.components)

    def generate(self, rng) -> Vec3:
        index = int(rng.integers(0, len(self.components)))
        return self.components[index].generate(rng)
