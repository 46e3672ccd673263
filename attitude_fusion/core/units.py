"""Temperature and pressure units.

Climate values are stored in Celsius and kilopascal; each unit maps to a pair
of linear conversions (from the stored unit, back to the stored unit).
"""

from enum import Enum
from typing import Callable, Dict, Tuple, Union


class TempUnit(Enum):
    FAHRENHEIT = "fahrenheit"
    CELSIUS = "celsius"
    KELVIN = "kelvin"


class PressureUnit(Enum):
    KPA = "kpa"
    ATM = "atm"    # standard atmosphere, sea level at 0 C
    MMHG = "mmhg"
    PSI = "psi"


Conversion = Tuple[Callable[[float], float], Callable[[float], float]]

_TEMP_CONVERSIONS: Dict[TempUnit, Conversion] = {
    TempUnit.CELSIUS: (lambda c: c, lambda c: c),
    TempUnit.FAHRENHEIT: (lambda c: c * (9.0 / 5.0) + 32.0,
                          lambda f: (f - 32.0) * (5.0 / 9.0)),
    TempUnit.KELVIN: (lambda c: c + 273.15, lambda k: k - 273.15),
}

UNITS_PER_KPA: Dict[PressureUnit, float] = {
    PressureUnit.KPA: 1.0,
    PressureUnit.ATM: 0.00986923266716,
    PressureUnit.MMHG: 7.50062,
    PressureUnit.PSI: 0.1450377377,
}


def parse_temp_unit(unit: Union[str, TempUnit]) -> TempUnit:
    """Resolve a unit name such as "kelvin" to a TempUnit.

    Raises:
        ValueError: If the name is unknown.
    """
    if isinstance(unit, TempUnit):
        return unit
    return TempUnit(str(unit).lower())


def parse_pressure_unit(unit: Union[str, PressureUnit]) -> PressureUnit:
    """Resolve a unit name such as "psi" to a PressureUnit.

    Raises:
        ValueError: If the name is unknown.
    """
    if isinstance(unit, PressureUnit):
        return unit
    return PressureUnit(str(unit).lower())


def celsius_to(celsius: float, unit: TempUnit) -> float:
    return _TEMP_CONVERSIONS[unit][0](celsius)


def to_celsius(value: float, unit: TempUnit) -> float:
    return _TEMP_CONVERSIONS[unit][1](value)


def kpa_to(kpa: float, unit: PressureUnit) -> float:
    return kpa * UNITS_PER_KPA[unit]


def to_kpa(value: float, unit: PressureUnit) -> float:
    return value / UNITS_PER_KPA[unit]
