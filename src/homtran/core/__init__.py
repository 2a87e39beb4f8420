"""Core numeric types: quaternions, transforms, frames and configuration."""

from .errors import ConfigError, HomtranError, InvalidArgument
from .quaternion import QuaternionLike, UnitQuaternion
from .transform import Transform, compose_orientation, compose_translation

__all__ = [
    "ConfigError",
    "HomtranError",
    "InvalidArgument",
    "QuaternionLike",
    "UnitQuaternion",
    "Transform",
    "compose_orientation",
    "compose_translation",
]
