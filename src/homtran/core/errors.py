"""Exception types for homogeneous transformations."""


class HomtranError(Exception):
    """Base exception for all homtran errors."""

    pass


class InvalidArgument(HomtranError, ValueError):
    """Malformed numeric input (matrix shape, last row, rotation block, vector size)."""

    pass


class ConfigError(HomtranError):
    """Frame configuration errors."""

    pass


__all__ = [
    "HomtranError",
    "InvalidArgument",
    "ConfigError",
]
