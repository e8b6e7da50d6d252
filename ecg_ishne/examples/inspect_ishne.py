#!/usr/bin/env python3
"""
ISHNE file inspector - print the header of a Standard ISHNE file and
check its checksum.

Usage:
    python inspect_ishne.py recording.ecg
    python inspect_ishne.py recording.ecg --samples 10
    python inspect_ishne.py recording.ecg --magic-number ABCDEFGH
"""

import argparse
import sys
from typing import List, Optional

from ..core.config import Config, ISHNEConfig
from ..core.exceptions import ECGISHNEError
from ..core.models import Package
from ..packaging.reader import ISHNEReader


def _format_date(values) -> str:
    day, month, year = values
    return f"{day:02d}/{month:02d}/{year:04d}"


def describe(package: Package) -> List[str]:
    """Human readable summary lines for a package."""
    fixed = package.header.fixed
    hour, minute, second = fixed.start_time
    lines = [
        f"Magic number:      {package.magic_number}",
        f"Checksum:          0x{package.checksum:04X}",
        f"File version:      {fixed.file_version}",
        f"Subject:           {fixed.first_name} {fixed.last_name} (ID {fixed.subject_id or '-'})",
        f"Sex code:          {fixed.sex}",
        f"Birth date:        {_format_date(fixed.birth_date)}",
        f"Record date:       {_format_date(fixed.record_date)}",
        f"File date:         {_format_date(fixed.file_date)}",
        f"Start time:        {hour:02d}:{minute:02d}:{second:02d}",
        f"Leads:             {fixed.n_leads}",
        f"Sampling rate:     {fixed.sampling_rate} Hz",
        f"Recorder:          {fixed.recorder or '-'}",
        f"Var block size:    {fixed.var_length_block_size}",
        f"ECG block offset:  {fixed.offset_ecg_block}",
        f"Samples:           {fixed.sample_size_ecg}",
    ]
    if fixed.sampling_rate and fixed.n_leads:
        duration = fixed.sample_size_ecg / fixed.n_leads / fixed.sampling_rate
        lines.append(f"Duration:          {duration:.2f} s")
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    """Main function."""
    parser = argparse.ArgumentParser(description="Inspect a Standard ISHNE file")
    parser.add_argument("file", help="ISHNE file to inspect")
    parser.add_argument("--samples", type=int, default=0, help="Print the first N time steps")
    parser.add_argument("--no-crc", action="store_true", help="Skip checksum validation")
    parser.add_argument("--magic-number", default=None, help="Expected 8-character file tag")

    args = parser.parse_args(argv)

    try:
        config = Config.create_default()
        if args.magic_number is not None:
            config.ishne = ISHNEConfig(magic_number=args.magic_number)
        package = ISHNEReader(config, verify_crc=not args.no_crc).read(args.file)
    except (ECGISHNEError, ValueError) as e:
        print(f"Inspection failed: {e}")
        return 1

    for line in describe(package):
        print(line)

    if args.samples > 0:
        data = package.to_numpy()
        for index, row in enumerate(data[:args.samples]):
            values = ", ".join(str(int(v)) for v in row)
            print(f"  [{index}] {values}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
