"""Value types shared by the filter, validation and replay."""

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class ImuSample:
    """One IMU reading as it comes off a recording.

    Units:
    - Accelerometer: any consistent unit, only the direction is used
      (an all-zero vector means "no reading")
    - Gyroscope: rad/s, body frame
    - Temperature: Celsius, humidity: percent, pressure: kPa
    """
    seq: int
    timestamp: float  # seconds
    ax: float
    ay: float
    az: float
    gx: float
    gy: float
    gz: float
    temperature: Optional[float] = None
    humidity: Optional[float] = None
    pressure: Optional[float] = None

    @property
    def acc(self) -> NDArray[np.float64]:
        return np.array((self.ax, self.ay, self.az), dtype=np.float64)

    @property
    def gyr(self) -> NDArray[np.float64]:
        return np.array((self.gx, self.gy, self.gz), dtype=np.float64)

    @property
    def acc_magnitude(self) -> float:
        return float(np.linalg.norm(self.acc))

    @property
    def has_climate(self) -> bool:
        """True if temperature, humidity and pressure are all present."""
        return None not in (self.temperature, self.humidity, self.pressure)


@dataclass(frozen=True)
class EulerAngles:
    """Roll, pitch and yaw in radians, ZYX order (yaw applied first)."""
    roll: float
    pitch: float
    yaw: float

    @property
    def roll_deg(self) -> float:
        return float(np.rad2deg(self.roll))

    @property
    def pitch_deg(self) -> float:
        return float(np.rad2deg(self.pitch))

    @property
    def yaw_deg(self) -> float:
        return float(np.rad2deg(self.yaw))


@dataclass
class ValidationResult:
    """Outcome of a plausibility check.

    Any error makes the result invalid; warnings never do.
    """
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        self.is_valid = False
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)
