"""Façade bundling the orientation filter with climate readings.

Mirrors the sensor set of an Arduino Nano 33 BLE Sense style board: a
6-axis IMU for orientation plus temperature, humidity and pressure sensors.
"""

import logging
from typing import Optional, Union

from numpy.typing import ArrayLike

from ..core.config import Config
from ..core.quaternion import Quaternion
from ..core.types import ImuSample
from ..core.units import PressureUnit, TempUnit
from .climate import Climate
from .complementary_filter import (
    DEFAULT_GYRO_FAVORING,
    ComplementaryFilter,
    FilterState,
)

logger = logging.getLogger(__name__)


class ImuNano33:
    """Orientation filter and climate store behind one interface."""

    def __init__(
        self,
        gyro_favoring: float = DEFAULT_GYRO_FAVORING,
        initial_orientation: Optional[Quaternion] = None,
        precision: str = "double",
    ):
        """Initialize the façade.

        Args:
            gyro_favoring: Filter blend weight, clamped to [0, 1].
            initial_orientation: Orientation restored by ``reset_imu``.
                Identity if None.
            precision: "double" or "single" floating-point width.
        """
        if initial_orientation is None:
            initial_orientation = Quaternion.identity()
        self._initial_orientation = initial_orientation
        self._filter = ComplementaryFilter(
            gyro_favoring=gyro_favoring,
            initial_orientation=initial_orientation,
            precision=precision,
        )
        self._climate = Climate()

    @classmethod
    def from_config(cls, config: Config) -> "ImuNano33":
        cfg = config.filter
        return cls(
            gyro_favoring=cfg.gyro_favoring,
            initial_orientation=Quaternion.from_array(cfg.initial_orientation),
            precision=cfg.precision,
        )

    @property
    def filter(self) -> ComplementaryFilter:
        return self._filter

    @property
    def climate(self) -> Climate:
        return self._climate

    def update_climate(self, temperature: float, humidity: float, pressure: float) -> None:
        """Store climate data (Celsius, percent, kPa)."""
        self._climate.update(temperature, humidity, pressure)

    def update_imu(self, accel: ArrayLike, gyro: ArrayLike, dt: float) -> Quaternion:
        return self._filter.update(accel, gyro, dt)

    def update_imu_accel(self, accel: ArrayLike) -> Quaternion:
        return self._filter.update_accel(accel)

    def update_imu_gyro(self, gyro: ArrayLike, dt: float) -> Quaternion:
        return self._filter.update_gyro(gyro, dt)

    def update(
        self,
        accel: ArrayLike,
        gyro: ArrayLike,
        dt: float,
        temperature: float,
        humidity: float,
        pressure: float,
    ) -> Quaternion:
        """Update orientation and climate data in one call."""
        q = self.update_imu(accel, gyro, dt)
        self.update_climate(temperature, humidity, pressure)
        return q

    def process(self, sample: ImuSample, dt: float) -> Quaternion:
        """Feed one sample; climate fields are stored when all are present."""
        q = self.update_imu(sample.acc, sample.gyr, dt)
        if sample.has_climate:
            self.update_climate(sample.temperature, sample.humidity, sample.pressure)
        return q

    def reset_imu(self) -> None:
        """Return to the orientation given at construction."""
        logger.debug("Resetting orientation to %r", self._initial_orientation)
        self._filter.set_orientation(self._initial_orientation)

    def zero_imu(self) -> None:
        """Return to the identity orientation."""
        self._filter.reset()

    def reset_climate(self) -> None:
        self._climate.reset()

    def set_orientation(self, q: Quaternion) -> None:
        self._filter.set_orientation(q)

    def set_gyro_favoring(self, favoring: float) -> None:
        self._filter.set_gyro_favoring(favoring)

    @property
    def orientation(self) -> Quaternion:
        return self._filter.orientation

    @property
    def gyro_favoring(self) -> float:
        return self._filter.gyro_favoring

    def state(self) -> FilterState:
        return self._filter.snapshot()

    def get_temperature(self, unit: Union[str, TempUnit] = TempUnit.CELSIUS) -> float:
        return self._climate.get_temperature(unit)

    def get_pressure(self, unit: Union[str, PressureUnit] = PressureUnit.KPA) -> float:
        return self._climate.get_pressure(unit)

    def get_humidity(self) -> float:
        return self._climate.get_humidity()

    def climate_data_exists(self) -> bool:
        return self._climate.data_exists()
