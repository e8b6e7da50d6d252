#!/usr/bin/env python3
"""Convert a raw two-channel sensor capture into a Standard ISHNE file."""

import argparse
import sys
from datetime import date
from typing import List, Optional

from ..core.config import Config, ISHNEConfig
from ..core.exceptions import ECGISHNEError
from ..packaging.converter import ISHNEConverter
from ..packaging.header_builder import HeaderBuilder


def build_header(args: argparse.Namespace, config: Config) -> HeaderBuilder:
    """
    Stage header fields from command-line options.

    Raises:
        ECGISHNEError: The first rejected option
    """
    builder = HeaderBuilder(config)
    steps = [
        ("--first-name", args.first_name, builder.set_first_name),
        ("--last-name", args.last_name, builder.set_last_name),
        ("--id", args.id, builder.set_id),
        ("--sex", args.sex, builder.set_sex),
        ("--birth-date", args.birth_date, builder.set_birth_date),
        ("--record-date", args.record_date, builder.set_record_date),
        ("--start-time", args.start_time, builder.set_start_time),
        ("--leads", args.leads, builder.set_number_of_leads),
        ("--sampling-rate", args.sampling_rate, builder.set_sampling_rate),
        ("--recorder", args.recorder, builder.set_recorder),
        ("--var-block", args.var_block, builder.set_variable_block),
    ]
    for option, value, setter in steps:
        if value is None:
            continue
        if not setter(value):
            raise ECGISHNEError(f"{option}: {builder.last_error}")

    builder.set_file_date(date.today())
    return builder


def main(argv: Optional[List[str]] = None) -> int:
    """Main function."""
    parser = argparse.ArgumentParser(description="Raw ECG capture to ISHNE converter")
    parser.add_argument("input", help="Raw sensor capture (5-byte frames)")
    parser.add_argument("output", help="ISHNE file to create")
    parser.add_argument("--first-name", help="Subject first name (max 40)")
    parser.add_argument("--last-name", help="Subject last name (max 40)")
    parser.add_argument("--id", help="Subject ID (max 20)")
    parser.add_argument("--sex", choices=["Man", "Woman"], help="Subject sex")
    parser.add_argument("--birth-date", help="Date of birth (e.g. 1980-04-23)")
    parser.add_argument("--record-date", help="Date of recording")
    parser.add_argument("--start-time", help="Start time (HH:MM:SS)")
    parser.add_argument("--leads", type=int, default=None, help="Number of stored leads")
    parser.add_argument("--sampling-rate", type=int, default=None, help="Sampling rate (Hz)")
    parser.add_argument("--recorder", help="Type of recorder")
    parser.add_argument("--var-block", help="ASCII text for the variable length block")
    parser.add_argument("--magic-number", default=None, help="8-character file tag")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Logging level")

    args = parser.parse_args(argv)

    try:
        # Create configuration
        config = Config.create_default()
        config.log_level = args.log_level
        if args.magic_number is not None:
            config.ishne = ISHNEConfig(magic_number=args.magic_number)
        config.configure_logging()

        builder = build_header(args, config)
        package = ISHNEConverter(config).convert(args.input, args.output, builder)

    except (ECGISHNEError, ValueError) as e:
        print(f"Conversion failed: {e}")
        return 1

    print(f"Wrote {args.output}: {package.size} bytes, "
          f"{package.sample_count} samples, checksum 0x{package.checksum:04X}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
