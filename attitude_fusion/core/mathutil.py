"""Threshold helpers shared by the quaternion algebra and the filter."""

from typing import Union

import numpy as np
from numpy.typing import ArrayLike

NEAR_ZERO = 1e-5

Number = Union[int, float]


def near_zero(value: Union[Number, ArrayLike], tol: float = NEAR_ZERO) -> bool:
    """Check whether a scalar or vector is close to zero.

    Vectors are checked component by component, not by magnitude: every
    component must individually be below the tolerance.

    Args:
        value: Scalar or vector.
        tol: Exclusive absolute tolerance.

    Returns:
        True if every component satisfies ``|c| < tol``.
    """
    arr = np.asarray(value)
    if arr.ndim == 0:
        return bool(abs(arr) < tol)
    return bool(np.all(np.abs(arr) < tol))


def near_equal(a: Union[Number, ArrayLike], b: Union[Number, ArrayLike],
               tol: float = NEAR_ZERO) -> bool:
    """Check whether two scalars (or vectors, component-wise) are within tolerance."""
    return near_zero(np.subtract(a, b), tol)


def clamp(value, lo, hi):
    """Clamp value into [lo, hi].

    The bounds are not checked against each other; lo > hi is the caller's
    problem.
    """
    if value < lo:
        return lo
    if value > hi:
        return hi
    return value
