"""Pytest fixtures for orientation estimation tests."""

from pathlib import Path

import numpy as np
import pytest
from numpy.typing import NDArray

from attitude_fusion.core.config import Config
from attitude_fusion.core.quaternion import Quaternion
from attitude_fusion.core.types import ImuSample

RECORDING_HEADER = (
    "# IMU Data Log\n"
    "# Format: time_abs(s), seq, ax, ay, az, gx, gy, gz, mx, my, mz, temp\n"
    "time_abs,seq,ax,ay,az,gx,gy,gz,mx,my,mz,temp\n"
)


@pytest.fixture
def config() -> Config:
    """Create default configuration for tests."""
    return Config()


@pytest.fixture
def basis() -> tuple:
    """Unit vectors i, j, k."""
    return (
        np.array([1.0, 0.0, 0.0]),
        np.array([0.0, 1.0, 0.0]),
        np.array([0.0, 0.0, 1.0]),
    )


@pytest.fixture
def sample_quaternion() -> Quaternion:
    """Create a sample non-identity quaternion.

    Represents a 30 degree rotation about Z axis.
    """
    angle = np.deg2rad(30)
    return Quaternion(
        w=np.cos(angle / 2),
        x=0.0,
        y=0.0,
        z=np.sin(angle / 2),
    )


@pytest.fixture
def stationary_sample() -> ImuSample:
    """A level, stationary sample with gravity along -Z."""
    return ImuSample(
        seq=1,
        timestamp=1000.0,
        ax=0.0,
        ay=0.0,
        az=-9.81,
        gx=0.0,
        gy=0.0,
        gz=0.0,
        temperature=24.5,
        humidity=40.0,
        pressure=101.325,
    )


@pytest.fixture
def nan_sample() -> ImuSample:
    """An IMU sample with a NaN accelerometer value."""
    return ImuSample(
        seq=1,
        timestamp=1000.0,
        ax=float("nan"),
        ay=0.0,
        az=-9.81,
        gx=0.0,
        gy=0.0,
        gz=0.0,
    )


@pytest.fixture
def gyro_steps() -> NDArray[np.float64]:
    """A short sequence of non-trivial angular rates in rad/s."""
    np.random.seed(42)
    return np.random.normal(0.0, 1.0, (20, 3))


@pytest.fixture
def recording_file(tmp_path: Path) -> Path:
    """Write a 1 second, 100 Hz recording of a slow yaw rotation."""
    lines = [RECORDING_HEADER]
    for n in range(101):
        t = n * 0.01
        lines.append(
            f"{t:.6f},{n + 1},0.0,0.0,-9.81,0.0,0.0,0.5,"
            f"20.0,5.0,45.0,24.50\n"
        )
    path = tmp_path / "imu_data.log"
    path.write_text("".join(lines), encoding="utf-8")
    return path
