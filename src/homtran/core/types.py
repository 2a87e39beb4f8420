"""Type aliases for homogeneous transformations."""

import numpy as np
from numpy.typing import ArrayLike, NDArray

# Numeric shapes
Vector3 = NDArray[np.float64]  # (3,)
Matrix3 = NDArray[np.float64]  # (3, 3)
Matrix4 = NDArray[np.float64]  # (4, 4)

__all__ = [
    "ArrayLike",
    "Vector3",
    "Matrix3",
    "Matrix4",
]
