"""Bounding volume hierarchy over hittables.

The tree is built once, before rendering, by recursively splitting the
primitives on a randomly chosen axis:

1. Pick X, Y or Z uniformly at random.
2. One primitive: both children reference it.
3. Two primitives: order them by their box minimum on the axis.
4. More: sort by box minimum on the axis, split at the middle, recurse.

Each node caches the union of its children's boxes. Queries test the node's
box first, then the left child, then the right child with ``t_max`` shrunk to
the left hit, so the globally nearest hit is returned.

A child without a bounding box cannot be placed in the tree. The node that
received it is reported through ``MissingBoundingBoxWarning`` and degrades to
an empty node that never reports a hit.

Example:
    >>> import numpy as np
    >>> from lumitrace.geometry.bvh import BvhNode
    >>> rng = np.random.default_rng(0)
    >>> root = BvhNode.build(world.objects, 0.0, 1.0, rng)
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Sequence

from lumitrace.core.aabb import AABB
from lumitrace.core.ray import Ray
from lumitrace.core.vec3 import Vec3
from lumitrace.geometry.hittable import HitRecord, Hittable

logger = logging.getLogger(__name__)


class BvhConstructionError(ValueError):
    """Raised when a BVH is built over an empty collection."""


class MissingBoundingBoxWarning(RuntimeWarning):
    """Issued when a primitive without a bounding box is placed in a BVH."""


def _box_min(obj: Hittable, axis: int, time0: float, time1: float) -> float:
    box = obj.bounding_box(time0, time1)
    # Unbounded children sort first; the node holding them degrades anyway
    return box.minimum[axis] if box is not None else float("-inf")


class BvhNode(Hittable):
    """Interior node of the hierarchy.

    Attributes:
        left: Left subtree or primitive; None for a degraded node.
        right: Right subtree or primitive; may be the same object as ``left``.
        box: Union of both children's boxes.
    """

    def __init__(self, left: Hittable | None, right: Hittable | None, box: AABB) -> None:
        self.left = left
        self.right = right
        self.box = box

    @classmethod
    def build(
        cls,
        objects: Sequence[Hittable],
        time0: float,
        time1: float,
        rng,
    ) -> BvhNode:
        """Build a hierarchy over ``objects``.

        The input sequence is not modified.

        Args:
            objects: Primitives to partition.
            time0: Start of the shutter interval used for bounding boxes.
            time1: End of the shutter interval.
            rng: ``numpy.random.Generator`` used to pick split axes.

        Returns:
            The root node.

        Raises:
            BvhConstructionError: If ``objects`` is empty.
        """
        if len(objects) == 0:
            raise BvhConstructionError("Cannot build a BVH from an empty collection")

        root = cls._build(list(objects), time0, time1, rng)
        logger.debug("Built BVH over %d primitives", len(objects))
        return root

    @classmethod
    def _build(cls, objects: list[Hittable], time0: float, time1: float, rng) -> BvhNode:
        axis = int(rng.integers(0, 3))
        count = len(objects)

        if count == 1:
            left = right = objects[0]
        elif count == 2:
            first, second = objects
            if _box_min(first, axis, time0, time1) <= _box_min(second, axis, time0, time1):
                left, right = first, second
            else:
                left, right = second, first
        else:
            objects.sort(key=lambda obj: _box_min(obj, axis, time0, time1))
            mid = count // 2
            left = cls._build(objects[:mid], time0, time1, rng)
            right = cls._build(objects[mid:], time0, time1, rng)

        box_left = left.bounding_box(time0, time1)
        box_right = right.bounding_box(time0, time1)
        if box_left is None or box_right is None:
            message = f"No bounding box for BVH child among {count} primitive(s); node dropped"
            logger.warning(message)
            warnings.warn(message, MissingBoundingBoxWarning, stacklevel=2)
            origin = Vec3(0.0, 0.0, 0.0)
            return cls(None, None, AABB(origin, origin))

        return cls(left, right, AABB.surrounding_box(box_left, box_right))

    @property
    def is_empty(self) -> bool:
        return self.left is None

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> HitRecord | None:
        if self.left is None or not self.box.hit(ray, t_min, t_max):
            return None

        hit_left = self.left.hit(ray, t_min, t_max, rng)
        if self.right is self.left:
            return hit_left

        hit_right = self.right.hit(
            ray, t_min, hit_left.t if hit_left is not None else t_max, rng
        )
        return hit_right if hit_right is not None else hit_left

    def bounding_box(self, time0: float, time1: float) -> AABB | None:
        return self.box
