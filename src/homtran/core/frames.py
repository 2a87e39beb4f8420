"""Functional helpers for chained coordinate frames.

Thin wrappers over :class:`~homtran.core.transform.Transform` for walking a
chain of frames from the root outwards.
"""

from __future__ import annotations

from collections.abc import Iterable

from .quaternion import UnitQuaternion
from .transform import Transform
from .types import ArrayLike, Vector3


def identity() -> Transform:
    """Create an identity transform."""
    return Transform(UnitQuaternion.identity())


def compose_chain(transforms: Iterable[Transform]) -> Transform:
    """Compose a chain of transforms, outermost frame first.

    ``compose_chain([A, B, C])`` equals ``A * B * C``: a point in ``C``'s
    local frame is mapped through ``C``, then ``B``, then ``A``.

    Args:
        transforms: Transforms ordered from the root frame outwards

    Returns:
        Combined transform, identity for an empty chain
    """
    combined = identity()
    for tf in transforms:
        combined = combined * tf
    return combined


def to_world(point_local: ArrayLike, tf: Transform) -> Vector3:
    """Map a point from ``tf``'s local frame to its reference frame."""
    return tf.transform(point_local)


def from_world(point_world: ArrayLike, tf: Transform) -> Vector3:
    """Map a point from ``tf``'s reference frame to its local frame."""
    return tf.inverse().transform(point_world)


def relative_to(tf: Transform, reference: Transform) -> Transform:
    """Pose of ``tf`` expressed in ``reference``'s local frame.

    Both transforms must be relative to the same reference frame.
    """
    return reference.inverse() * tf


__all__ = [
    "identity",
    "compose_chain",
    "to_world",
    "from_world",
    "relative_to",
]
