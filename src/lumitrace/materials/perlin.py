"""Perlin noise generator.

The generator holds 256 random floats, 256 random unit vectors and three
random permutations of 0..255, all drawn once from the generator passed at
construction. Lookups hash the lattice cell through the permutations.

Noise flavours:
    SQUARE: blocky value noise at 4x frequency, no interpolation.
    TRILINEAR: value noise with Hermite-smoothed trilinear interpolation.
    SMOOTH, NET, MARBLE: gradient noise over random unit vectors. NET and
        MARBLE are consumed through ``turb`` by ``NoiseTexture``.
"""

from __future__ import annotations

import math
from enum import Enum

import numpy as np

from lumitrace.core.vec3 import Point3

POINT_COUNT = 256


class NoiseType(Enum):
    """Filtering applied to raw Perlin noise."""

    SQUARE = "square"
    TRILINEAR = "trilinear"
    SMOOTH = "smooth"
    NET = "net"
    MARBLE = "marble"


def _hermite(t: float) -> float:
    return t * t * (3.0 - 2.0 * t)


def trilinear_interp(c: np.ndarray, u: float, v: float, w: float) -> float:
    """Trilinear interpolation of a 2x2x2 array of lattice values."""
    accum = 0.0
    for i in range(2):
        for j in range(2):
            for k in range(2):
                accum += (
                    (i * u + (1 - i) * (1.0 - u))
                    * (j * v + (1 - j) * (1.0 - v))
                    * (k * w + (1 - k) * (1.0 - w))
                    * c[i, j, k]
                )
    return float(accum)


def perlin_interp(c: np.ndarray, u: float, v: float, w: float) -> float:
    """Interpolate gradient vectors ``c`` (shape 2x2x2x3) at (u, v, w)."""
    uu, vv, ww = _hermite(u), _hermite(v), _hermite(w)
    accum = 0.0
    for i in range(2):
        for j in range(2):
            for k in range(2):
                weight = (u - i) * c[i, j, k, 0] + (v - j) * c[i, j, k, 1] + (w - k) * c[i, j, k, 2]
                accum += (
                    (i * uu + (1 - i) * (1.0 - uu))
                    * (j * vv + (1 - j) * (1.0 - vv))
                    * (k * ww + (1 - k) * (1.0 - ww))
                    * weight
                )
    return float(accum)


class Perlin:
    """Lattice noise generator seeded from an explicit random generator.

    Args:
        rng: ``numpy.random.Generator`` used to fill the lookup tables.
    """

    def __init__(self, rng) -> None:
        self.ranfloat = rng.random(POINT_COUNT)

        vectors = rng.uniform(-1.0, 1.0, size=(POINT_COUNT, 3))
        norms = np.linalg.norm(vectors, axis=1, keepdims=True)
        self.ranvec = vectors / np.where(norms == 0.0, 1.0, norms)

        self.perm_x = rng.permutation(POINT_COUNT)
        self.perm_y = rng.permutation(POINT_COUNT)
        self.perm_z = rng.permutation(POINT_COUNT)

    def _hash(self, i: int, j: int, k: int) -> int:
        return int(self.perm_x[i & 255] ^ self.perm_y[j & 255] ^ self.perm_z[k & 255])

    def noise(self, p: Point3, noise_type: NoiseType = NoiseType.SMOOTH) -> float:
        """Evaluate raw noise of the given flavour at ``p``."""
        if noise_type is NoiseType.SQUARE:
            i = int(4.0 * p.x)
            j = int(4.0 * p.y)
            k = int(4.0 * p.z)
            return float(self.ranfloat[self._hash(i, j, k)])

        fi, fj, fk = math.floor(p.x), math.floor(p.y), math.floor(p.z)
        u, v, w = p.x - fi, p.y - fj, p.z - fk
        i, j, k = int(fi), int(fj), int(fk)

        if noise_type is NoiseType.TRILINEAR:
            c = np.empty((2, 2, 2))
            for di in range(2):
                for dj in range(2):
                    for dk in range(2):
                        c[di, dj, dk] = self.ranfloat[self._hash(i + di, j + dj, k + dk)]
            return trilinear_interp(c, _hermite(u), _hermite(v), _hermite(w))

        c = np.empty((2, 2, 2, 3))
        for di in range(2):
            for dj in range(2):
                for dk in range(2):
                    c[di, dj, dk] = self.ranvec[self._hash(i + di, j + dj, k + dk)]
        return perlin_interp(c, u, v, w)

    def turb(self, p: Point3, depth: int = 7, noise_type: NoiseType = NoiseType.SMOOTH) -> float:
        """Sum ``depth`` octaves of noise with halving weights; non-negative."""
        accum = 0.0
        temp_p = p
        weight = 1.0
        for _ in range(depth):
            accum += weight * self.noise(temp_p, noise_type)
            weight *= 0.5
            temp_p = temp_p * 2.0
        return abs(accum)
