"""Unit quaternions for rigid rotations.

Quaternion convention: (w, x, y, z), scalar first. Products compose rotations
right to left: ``a * b`` rotates by ``b`` first, then by ``a``.

The algebra itself is delegated to ``scipy.spatial.transform.Rotation``; this
module only fixes the convention, validates input and exposes the small
capability set a :class:`~homtran.core.transform.Transform` relies on.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np
from scipy.spatial.transform import Rotation

from .errors import InvalidArgument
from .types import ArrayLike, Matrix3, Vector3

# Frobenius norm bound on R @ R.T - I, and on det(R) - 1
ORTHONORMAL_TOL = 1e-12

_CONJUGATE = np.array([1.0, -1.0, -1.0, -1.0])


def as_vector3(v: ArrayLike, name: str = "vector") -> Vector3:
    """Copy ``v`` into a float64 array of shape (3,).

    Raises:
        InvalidArgument: If ``v`` does not hold exactly three numbers
    """
    try:
        arr = np.array(v, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"{name} must be a 3-vector of numbers") from exc
    if arr.shape != (3,):
        raise InvalidArgument(f"{name} must have shape (3,), got {arr.shape}")
    return arr


@runtime_checkable
class QuaternionLike(Protocol):
    """Capabilities a Transform requires from its orientation type."""

    def __mul__(self, other: QuaternionLike) -> QuaternionLike: ...

    def transform(self, v: ArrayLike) -> Vector3: ...

    def inverse(self) -> QuaternionLike: ...

    def to_rotation_matrix(self) -> Matrix3: ...

    @classmethod
    def from_rotation_matrix(cls, m: ArrayLike) -> QuaternionLike: ...

    def norm(self) -> float: ...

    def distance(self, other: QuaternionLike) -> float: ...


class UnitQuaternion:
    """Rotation stored as a normalized (w, x, y, z) quaternion."""

    __slots__ = ("_q",)

    def __init__(self, w: float = 1.0, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        q = np.array([w, x, y, z], dtype=np.float64)
        norm = np.linalg.norm(q)
        if not np.isfinite(norm) or norm == 0.0:
            raise InvalidArgument(f"Quaternion must be finite and non-zero, got {q.tolist()}")
        self._q = q / norm

    @classmethod
    def identity(cls) -> UnitQuaternion:
        return cls(1.0, 0.0, 0.0, 0.0)

    @classmethod
    def _from_rotation(cls, rotation: Rotation) -> UnitQuaternion:
        w, x, y, z = rotation.as_quat(canonical=False, scalar_first=True)
        return cls(w, x, y, z)

    @classmethod
    def from_angle_axis(cls, angle: float, axis: ArrayLike) -> UnitQuaternion:
        """Rotation of ``angle`` radians about ``axis`` (right-hand rule).

        Args:
            angle: Rotation angle in radians
            axis: Rotation axis, any non-zero length

        Returns:
            UnitQuaternion
        """
        axis = as_vector3(axis, "axis")
        length = np.linalg.norm(axis)
        if length == 0.0:
            raise InvalidArgument("Rotation axis must be non-zero")
        return cls._from_rotation(Rotation.from_rotvec(axis * (float(angle) / length)))

    @classmethod
    def from_rotation_matrix(cls, m: ArrayLike) -> UnitQuaternion:
        """Decode a proper 3x3 rotation matrix.

        Raises:
            InvalidArgument: If ``m`` is not 3x3, not orthonormal, or a reflection
        """
        try:
            R = np.array(m, dtype=np.float64)
        except (TypeError, ValueError) as exc:
            raise InvalidArgument("Rotation matrix must be a 3x3 array of numbers") from exc
        if R.shape != (3, 3):
            raise InvalidArgument(f"Rotation matrix must be 3x3, got shape {R.shape}")
        if not np.all(np.isfinite(R)):
            raise InvalidArgument("Rotation matrix must be finite")

        deviation = np.linalg.norm(R @ R.T - np.eye(3))
        if deviation > ORTHONORMAL_TOL:
            raise InvalidArgument(
                f"Rotation matrix must be orthonormal (|R R^T - I| = {deviation:.3e})"
            )
        det = np.linalg.det(R)
        if abs(det - 1.0) > ORTHONORMAL_TOL:
            raise InvalidArgument(f"Rotation matrix must have determinant +1, got {det:.6f}")

        return cls._from_rotation(Rotation.from_matrix(R))

    def _rotation(self) -> Rotation:
        return Rotation.from_quat(self._q, scalar_first=True)

    @property
    def components(self) -> np.ndarray:
        """Copy of (w, x, y, z)."""
        return self._q.copy()

    @property
    def w(self) -> float:
        return float(self._q[0])

    @property
    def x(self) -> float:
        return float(self._q[1])

    @property
    def y(self) -> float:
        return float(self._q[2])

    @property
    def z(self) -> float:
        return float(self._q[3])

    def __mul__(self, other: UnitQuaternion) -> UnitQuaternion:
        if not isinstance(other, UnitQuaternion):
            return NotImplemented
        return self._from_rotation(self._rotation() * other._rotation())

    def transform(self, v: ArrayLike) -> Vector3:
        """Rotate a 3-vector."""
        return self._rotation().apply(as_vector3(v))

    def inverse(self) -> UnitQuaternion:
        # conjugate; already unit norm
        inv = object.__new__(type(self))
        inv._q = self._q * _CONJUGATE
        return inv

    def to_rotation_matrix(self) -> Matrix3:
        return self._rotation().as_matrix()

    def norm(self) -> float:
        return float(np.linalg.norm(self._q))

    def distance(self, other: UnitQuaternion) -> float:
        """Euclidean norm of the component difference.

        ``q`` and ``-q`` encode the same rotation but are 2 apart here.
        """
        return float(np.linalg.norm(self._q - other._q))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnitQuaternion):
            return NotImplemented
        return bool(np.array_equal(self._q, other._q))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        w, x, y, z = self._q
        return f"UnitQuaternion(w={w!r}, x={x!r}, y={y!r}, z={z!r})"


__all__ = [
    "ORTHONORMAL_TOL",
    "QuaternionLike",
    "UnitQuaternion",
    "as_vector3",
]
