"""Rigid homogeneous transformations.

A :class:`Transform` is the pose of a local reference frame relative to a
reference frame: an orientation (unit quaternion) and a translation (origin of
the local frame in reference coordinates). For a point ``p`` in local
coordinates, ``translation + quaternion.transform(p)`` is the same point in
reference coordinates.

Poses may be given relative to another Transform ``rel_to``:

- ``local=True``: the quaternion and translation are measured in ``rel_to``'s
  own frame.
- ``local=False``: they are measured in the global frame, relative to
  ``rel_to``.

Matrix layout (row-major 4x4)::

    [ R00 R01 R02 tx ]
    [ R10 R11 R12 ty ]
    [ R20 R21 R22 tz ]
    [  0   0   0   1 ]
"""

from __future__ import annotations

import numpy as np

from .errors import InvalidArgument
from .logging import get_logger
from .quaternion import QuaternionLike, UnitQuaternion, as_vector3
from .types import ArrayLike, Matrix4, Vector3

logger = get_logger(__name__)

# Euclidean norm bound on the deviation of the last matrix row from [0, 0, 0, 1]
LAST_ROW_TOL = 1e-15

_LAST_ROW = np.array([0.0, 0.0, 0.0, 1.0])


def compose_orientation(
    q: QuaternionLike, rel_to: Transform | None = None, local: bool = True
) -> QuaternionLike:
    """Orientation of a frame given ``q`` relative to ``rel_to``.

    Args:
        q: Orientation relative to ``rel_to`` (or to the global frame if None)
        rel_to: Reference transform, only read
        local: If True, ``q`` is measured in ``rel_to``'s frame, otherwise in
            the global frame

    Returns:
        Orientation relative to the global frame
    """
    if rel_to is None:
        return q
    if local:
        return rel_to.quaternion * q
    return q * rel_to.quaternion


def compose_translation(
    t: ArrayLike, rel_to: Transform | None = None, local: bool = True
) -> Vector3:
    """Translation of a frame given ``t`` relative to ``rel_to``.

    Uses ``rel_to``'s orientation, not the orientation of the frame being
    built, so the order in which orientation and translation are set does not
    matter.

    Args:
        t: Translation relative to ``rel_to`` (or to the global frame if None)
        rel_to: Reference transform, only read
        local: If True, ``t`` is measured in ``rel_to``'s frame, otherwise in
            the global frame

    Returns:
        Translation relative to the global frame, a new array
    """
    t = as_vector3(t, "translation")
    if rel_to is None:
        return t
    if local:
        return rel_to.translation + rel_to.quaternion.transform(t)
    return rel_to.translation + t


class Transform:
    """Orientation + translation of a local frame relative to a reference frame."""

    __slots__ = ("_quaternion", "_translation")

    def __init__(
        self,
        quaternion: QuaternionLike | None = None,
        translation: ArrayLike | None = None,
        rel_to: Transform | None = None,
        local: bool = True,
    ):
        """Create a transform, optionally relative to another one.

        Args:
            quaternion: Orientation, identity if None
            translation: Translation 3-vector, zero if None
            rel_to: Transform relative to which ``quaternion`` and
                ``translation`` are given; None means the global frame
            local: If True, measured in ``rel_to``'s frame, otherwise in the
                global frame
        """
        if quaternion is None:
            quaternion = UnitQuaternion.identity()
        if translation is None:
            translation = np.zeros(3)
        self._quaternion = compose_orientation(quaternion, rel_to, local)
        self._translation = compose_translation(translation, rel_to, local)

    @classmethod
    def from_matrix(cls, m: ArrayLike) -> Transform:
        """Create a transform from a 4x4 homogeneous matrix.

        Raises:
            InvalidArgument: See :meth:`set_matrix`
        """
        tf = cls()
        tf.set_matrix(m)
        return tf

    @property
    def quaternion(self) -> QuaternionLike:
        return self._quaternion

    @property
    def translation(self) -> Vector3:
        return self._translation.copy()

    def get_quaternion(self) -> QuaternionLike:
        return self._quaternion

    def get_translation(self) -> Vector3:
        return self._translation.copy()

    def set_quaternion(
        self, q: QuaternionLike, rel_to: Transform | None = None, local: bool = True
    ) -> None:
        self._quaternion = compose_orientation(q, rel_to, local)

    def set_translation(
        self, t: ArrayLike, rel_to: Transform | None = None, local: bool = True
    ) -> None:
        self._translation = compose_translation(t, rel_to, local)

    def set_matrix(self, m: ArrayLike) -> None:
        """Replace orientation and translation from a 4x4 homogeneous matrix.

        The transform is left unchanged if ``m`` is rejected.

        Args:
            m: 4x4 array-like; the upper-left 3x3 block must be orthonormal
                and the last row must be [0, 0, 0, 1]

        Raises:
            InvalidArgument: If ``m`` is not 4x4, its last row deviates from
                [0, 0, 0, 1] by more than LAST_ROW_TOL, its translation column
                is not finite, or its rotation block is rejected by the
                quaternion type
        """
        try:
            m = np.array(m, dtype=np.float64)
        except (TypeError, ValueError) as exc:
            raise InvalidArgument("Matrix must be a 4x4 array of numbers") from exc
        if m.shape != (4, 4):
            logger.debug("Rejected matrix", {"shape": m.shape})
            raise InvalidArgument(f"Matrix must be 4x4, got shape {m.shape}")

        deviation = np.linalg.norm(m[3] - _LAST_ROW)
        if not deviation <= LAST_ROW_TOL:
            logger.debug("Rejected matrix", {"last_row": m[3].tolist()})
            raise InvalidArgument(f"Final row must be [0, 0, 0, 1], got {m[3].tolist()}")

        if not np.all(np.isfinite(m[:3, 3])):
            logger.debug("Rejected matrix", {"translation": m[:3, 3].tolist()})
            raise InvalidArgument(f"Translation must be finite, got {m[:3, 3].tolist()}")

        q = type(self._quaternion).from_rotation_matrix(m[:3, :3])
        self._quaternion = q
        self._translation = m[:3, 3].copy()

    def get_matrix(self) -> Matrix4:
        """Return the 4x4 homogeneous matrix of this transform."""
        m = np.eye(4)
        m[:3, :3] = self._quaternion.to_rotation_matrix()
        m[:3, 3] = self._translation
        return m

    def transform(self, v: ArrayLike) -> Vector3:
        """Map a point from the local frame to the reference frame."""
        return self._translation + self._quaternion.transform(v)

    def inverse(self) -> Transform:
        """Return the transform mapping reference coordinates to local ones."""
        q_inv = self._quaternion.inverse()
        t_inv = q_inv.transform(-1.0 * self._translation)
        return Transform(q_inv, t_inv)

    def compose(self, other: Transform) -> Transform:
        """Return ``self * other``.

        The result maps a point in ``other``'s local frame through ``other``
        into this transform's local frame, then through this transform.
        """
        q = self._quaternion * other._quaternion
        t = self._quaternion.transform(other._translation) + self._translation
        return Transform(q, t)

    def __mul__(self, other: Transform) -> Transform:
        if not isinstance(other, Transform):
            return NotImplemented
        return self.compose(other)

    def __repr__(self) -> str:
        return f"Transform(quaternion={self._quaternion!r}, translation={self._translation.tolist()!r})"


__all__ = [
    "LAST_ROW_TOL",
    "Transform",
    "compose_orientation",
    "compose_translation",
]
