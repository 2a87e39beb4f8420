"""Rigid homogeneous transformations.

Represent the pose of a reference frame as a unit quaternion and a translation,
build poses relative to other frames, map points between frames, and convert
to and from 4x4 homogeneous matrices.
"""

from .core.errors import ConfigError, HomtranError, InvalidArgument
from .core.quaternion import UnitQuaternion
from .core.transform import Transform

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "HomtranError",
    "InvalidArgument",
    "Transform",
    "UnitQuaternion",
]
