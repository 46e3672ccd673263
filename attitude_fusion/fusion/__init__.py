"""Orientation fusion and climate handling."""

from .complementary_filter import ComplementaryFilter, FilterState
from .climate import Climate
from .imu import ImuNano33

__all__ = [
    "ComplementaryFilter",
    "FilterState",
    "Climate",
    "ImuNano33",
]
