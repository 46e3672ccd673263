"""Climate data store with unit conversion."""

from typing import Union

from ..core.units import (
    PressureUnit,
    TempUnit,
    celsius_to,
    kpa_to,
    parse_pressure_unit,
    parse_temp_unit,
    to_celsius,
    to_kpa,
)


class Climate:
    """Latest temperature, humidity and pressure readings.

    Values are kept in Celsius, percent relative humidity and kilopascal and
    converted on read. Until ``update`` is called, ``data_exists`` is False.
    ``reset`` only clears that flag; the last values stay readable.
    """

    def __init__(self):
        self._data_exists = False
        self._temperature = 0.0
        self._humidity = 0.0
        self._pressure = 0.0

    def __repr__(self) -> str:
        return (
            f"Climate(data_exists={self._data_exists}, "
            f"temperature={self._temperature}, humidity={self._humidity}, "
            f"pressure={self._pressure})"
        )

    def data_exists(self) -> bool:
        return self._data_exists

    def update(
        self,
        temperature: float,
        humidity: float,
        pressure: float,
        temp_unit: Union[str, TempUnit] = TempUnit.CELSIUS,
        pressure_unit: Union[str, PressureUnit] = PressureUnit.KPA,
    ) -> None:
        """Store a new reading.

        Args:
            temperature: Temperature in ``temp_unit``.
            humidity: Relative humidity in percent.
            pressure: Pressure in ``pressure_unit``.
            temp_unit: Unit of ``temperature``, Celsius by default.
            pressure_unit: Unit of ``pressure``, kPa by default.
        """
        self._temperature = to_celsius(temperature, parse_temp_unit(temp_unit))
        self._humidity = humidity
        self._pressure = to_kpa(pressure, parse_pressure_unit(pressure_unit))
        self._data_exists = True

    def reset(self) -> None:
        self._data_exists = False

    def get_temperature(self, unit: Union[str, TempUnit] = TempUnit.CELSIUS) -> float:
        return celsius_to(self._temperature, parse_temp_unit(unit))

    def get_pressure(self, unit: Union[str, PressureUnit] = PressureUnit.KPA) -> float:
        return kpa_to(self._pressure, parse_pressure_unit(unit))

    def get_humidity(self) -> float:
        return self._humidity
