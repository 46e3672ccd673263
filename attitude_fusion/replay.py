"""Replay of recorded IMU logs through the orientation filter.

Recordings use the CSV layout written by the IMU logger::

    # IMU Data Log
    time_abs,seq,ax,ay,az,gx,gy,gz,mx,my,mz,temp
    0.000000,1,0.01,-0.02,-9.80,0.001,0.000,-0.002,20.1,5.0,44.9,24.50

Lines starting with ``#`` are comments. Optional ``humidity`` (percent) and
``pressure`` (kPa) columns add climate data. Magnetometer columns are ignored.
"""

import csv
import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from .core.config import Config
from .core.quaternion import QuaternionOps
from .core.types import ImuSample
from .core.units import parse_pressure_unit, parse_temp_unit
from .core.validation import QuaternionValidator, SampleValidator, validate_dt
from .fusion.imu import ImuNano33

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("time_abs", "seq", "ax", "ay", "az", "gx", "gy", "gz")


class RecordingError(Exception):
    """Recording file is malformed."""
    pass


def _optional_float(row: dict, key: str) -> Optional[float]:
    value = row.get(key)
    if value is None or value.strip() == "":
        return None
    return float(value)


def _row_to_sample(row: dict) -> ImuSample:
    return ImuSample(
        seq=int(row["seq"]),
        timestamp=float(row["time_abs"]),
        ax=float(row["ax"]),
        ay=float(row["ay"]),
        az=float(row["az"]),
        gx=float(row["gx"]),
        gy=float(row["gy"]),
        gz=float(row["gz"]),
        temperature=_optional_float(row, "temp"),
        humidity=_optional_float(row, "humidity"),
        pressure=_optional_float(row, "pressure"),
    )


def read_recording(path: Union[str, Path]) -> List[ImuSample]:
    """Parse a CSV recording into samples.

    Args:
        path: Recording file.

    Returns:
        Samples in file order.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        RecordingError: If columns are missing or a row can't be parsed.
    """
    with open(path, "r", encoding="utf-8", newline="") as f:
        lines = [
            line for line in f
            if line.strip() and not line.lstrip().startswith("#")
        ]

    reader = csv.DictReader(lines)
    fieldnames = [name.strip() for name in (reader.fieldnames or [])]
    reader.fieldnames = fieldnames
    missing = [col for col in REQUIRED_COLUMNS if col not in fieldnames]
    if missing:
        raise RecordingError(f"{path}: missing columns {missing}")

    samples = []
    for row_num, row in enumerate(reader, start=1):
        try:
            samples.append(_row_to_sample(row))
        except (TypeError, ValueError) as e:
            raise RecordingError(f"{path}: row {row_num}: {e}") from e

    logger.info("Loaded %d samples from %s", len(samples), path)
    return samples


def _format_output(sample: ImuSample, imu: ImuNano33, dt: float, config: Config) -> dict:
    output = imu.state().to_dict()
    output.update({
        "seq": sample.seq,
        "timestamp": sample.timestamp,
        "dt_ms": dt * 1000,
    })

    if config.output.include_euler:
        euler = QuaternionOps.to_euler(imu.orientation)
        output.update({
            "roll": euler.roll_deg,
            "pitch": euler.pitch_deg,
            "yaw": euler.yaw_deg,
        })

    if imu.climate_data_exists():
        temp_unit = parse_temp_unit(config.climate.temperature_unit)
        pressure_unit = parse_pressure_unit(config.climate.pressure_unit)
        output.update({
            "temperature": imu.get_temperature(temp_unit),
            "temperature_unit": temp_unit.value,
            "humidity": imu.get_humidity(),
            "pressure": imu.get_pressure(pressure_unit),
            "pressure_unit": pressure_unit.value,
        })

    return output


def replay(
    samples: Iterable[ImuSample],
    imu: ImuNano33,
    config: Config,
) -> Iterator[dict]:
    """Run samples through validation and the filter.

    The first valid sample only sets the time base. Invalid samples and
    time steps are skipped and logged; a diverged orientation is reset to
    the initial one.

    Yields:
        One output dict per ``config.output.emit_every`` processed samples.
    """
    validator = SampleValidator(config)
    quat_validator = QuaternionValidator(config)
    last_timestamp: Optional[float] = None
    processed = 0

    for sample in samples:
        validation = validator.validate_sample(sample)
        if not validation.is_valid:
            for error in validation.errors:
                logger.warning("Sample %d rejected: %s", sample.seq, error)
            continue

        for warning in validation.warnings:
            logger.debug("Sample %d: %s", sample.seq, warning)

        if last_timestamp is None:
            last_timestamp = sample.timestamp
            continue

        dt = sample.timestamp - last_timestamp
        dt_validation = validate_dt(dt, config)
        if not dt_validation.is_valid:
            logger.warning("Invalid dt: %s", dt_validation.errors)
            continue
        last_timestamp = sample.timestamp

        for warning in dt_validation.warnings:
            logger.debug("Sample %d: %s", sample.seq, warning)

        q = imu.process(sample, dt)

        quat_validation = quat_validator.validate(q)
        if not quat_validation.is_valid:
            logger.warning(
                "Orientation invalid after sample %d (%s), resetting",
                sample.seq, "; ".join(quat_validation.errors),
            )
            imu.reset_imu()
            continue

        processed += 1
        if processed % config.output.emit_every == 0:
            yield _format_output(sample, imu, dt, config)
