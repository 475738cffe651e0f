"""Three-component vector used for points, directions and colors.

The renderer does not distinguish between positions, displacements and RGB
colors: all of them are ``Vec3`` instances and callers keep track of the
semantics. Multiplying two vectors is component-wise (used for color
attenuation); ``dot`` and ``cross`` provide the geometric products.

Example:
    >>> from lumitrace.core.vec3 import Vec3
    >>> a = Vec3(1.0, 2.0, 3.0)
    >>> b = Vec3(0.0, 1.0, 0.0)
    >>> a.dot(b)
    2.0
    >>> (a * 2.0).length_squared()
    56.0
"""

from __future__ import annotations

import math
from collections.abc import Iterator

# Components smaller than this are treated as zero by near_zero()
NEAR_ZERO_EPSILON = 1e-8


class Vec3:
    """An immutable-by-convention 3D vector of floats.

    Attributes:
        x: First component (red channel when used as a color).
        y: Second component (green channel).
        z: Third component (blue channel).
    """

    __slots__ = ("x", "y", "z")

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    @classmethod
    def splat(cls, value: float) -> Vec3:
        """Create a vector with all three components equal to ``value``."""
        return cls(value, value, value)

    @classmethod
    def random(cls, rng, low: float = 0.0, high: float = 1.0) -> Vec3:
        """Create a vector with components drawn uniformly from [low, high).

        Args:
            rng: A ``numpy.random.Generator``.
            low: Lower bound of each component.
            high: Upper bound of each component.
        """
        span = high - low
        return cls(
            low + span * rng.random(),
            low + span * rng.random(),
            low + span * rng.random(),
        )

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, other: Vec3 | float) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vec3(self.x * other, self.y * other, self.z * other)

    def __rmul__(self, other: float) -> Vec3:
        return Vec3(self.x * other, self.y * other, self.z * other)

    def __truediv__(self, t: float) -> Vec3:
        inv = 1.0 / t
        return Vec3(self.x * inv, self.y * inv, self.z * inv)

    # -------------------------------------------------------------------------
    # Container protocol
    # -------------------------------------------------------------------------

    def __getitem__(self, axis: int) -> float:
        if axis == 0:
            return self.x
        if axis == 1:
            return self.y
        if axis == 2:
            return self.z
        raise IndexError(f"Vec3 axis out of range: {axis}")

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __len__(self) -> int:
        return 3

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self) -> int:
        return hash((self.x, self.y, self.z))

    def __repr__(self) -> str:
        return f"Vec3({self.x}, {self.y}, {self.z})"

    def __getstate__(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __setstate__(self, state: tuple[float, float, float]) -> None:
        self.x, self.y, self.z = state

    # -------------------------------------------------------------------------
    # Geometry
    # -------------------------------------------------------------------------

    def dot(self, other: Vec3) -> float:
        """Return the dot product with ``other``."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        """Return the cross product ``self x other``."""
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def unit_vector(self) -> Vec3:
        """Return this vector scaled to unit length.

        A zero-length vector is returned unchanged (as the zero vector)
        rather than producing NaN components.
        """
        length = self.length()
        if length == 0.0:
            return Vec3(0.0, 0.0, 0.0)
        return self / length

    def near_zero(self) -> bool:
        """Return True if every component is within NEAR_ZERO_EPSILON of zero."""
        return (
            abs(self.x) < NEAR_ZERO_EPSILON
            and abs(self.y) < NEAR_ZERO_EPSILON
            and abs(self.z) < NEAR_ZERO_EPSILON
        )

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


# Semantic aliases; the renderer does not enforce the distinction.
Point3 = Vec3
Color = Vec3
