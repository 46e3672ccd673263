#!/usr/bin/env python3
"""Command-line entry point.

Replays a recorded IMU log through the complementary filter and writes one
JSON-formatted orientation per processed sample to stdout.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

import yaml

from .core.config import load_config
from .core.exceptions import OrientationError
from .fusion.imu import ImuNano33
from .replay import RecordingError, read_recording, replay

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application.

    Args:
        verbose: If True, set DEBUG level; otherwise INFO.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Replay an IMU recording through the complementary filter"
    )
    parser.add_argument(
        "recording",
        type=str,
        help="CSV recording (time_abs,seq,ax,ay,az,gx,gy,gz,...)",
    )
    parser.add_argument(
        "-c", "--config",
        type=str,
        default=None,
        help="Path to configuration file",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--favoring",
        type=float,
        default=None,
        help="Override filter.gyro_favoring (0 trusts the accelerometer, 1 the gyro)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Application entry point.

    Returns:
        Exit code.
    """
    args = build_parser().parse_args(argv)

    setup_logging(verbose=args.verbose)

    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        logger.error("Configuration error: %s", e)
        return 1
    except (ValueError, TypeError, yaml.YAMLError) as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    if args.favoring is not None:
        config.filter.gyro_favoring = args.favoring

    try:
        samples = read_recording(args.recording)
    except FileNotFoundError as e:
        logger.error("Recording not found: %s", e)
        return 1
    except RecordingError as e:
        logger.error("Malformed recording: %s", e)
        return 1

    imu = ImuNano33.from_config(config)
    emitted = 0
    try:
        for output in replay(samples, imu, config):
            print(json.dumps(output), flush=True)
            emitted += 1
    except OrientationError as e:
        logger.error("Filter update failed: %s", e)
        return 1

    logger.info("Emitted %d of %d samples", emitted, len(samples))
    logger.info("Final orientation: %r", imu.orientation)
    return 0


if __name__ == "__main__":
    sys.exit(main())
