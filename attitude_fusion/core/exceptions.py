"""Exceptions raised by the orientation algebra."""


class OrientationError(ValueError):
    """Base exception for degenerate rotation inputs."""
    pass


class DegenerateAxisError(OrientationError):
    """Rotation axis is zero or non-finite, so no direction can be derived."""
    pass


class ZeroQuaternionError(OrientationError):
    """Quaternion has zero (or non-finite) norm and cannot be normalized or inverted."""
    pass
