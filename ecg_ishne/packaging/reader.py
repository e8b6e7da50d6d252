"""ISHNE file reader for ECG ISHNE system."""

import struct
from pathlib import Path
from typing import Optional, Union

from ..core.config import Config
from ..core.exceptions import CRCError, PacketParseError
from ..core.layout import (
    FIXED_BLOCK_SIZE,
    MAGIC_NUMBER_SIZE,
    PREAMBLE_SIZE,
    SAMPLE_WIDTH,
    VAR_BLOCK_OFFSET,
)
from ..core.models import Header, Package, VariableBlock
from ..protocols.crc import validate_crc
from ..protocols.serializer import parse_fixed_block
from .files import read_all_bytes


class ISHNEReader:
    """Parser for assembled ISHNE files."""

    def __init__(self, config: Optional[Config] = None, verify_crc: bool = True):
        """
        Initialize reader.

        Args:
            config: Configuration object (defaults used when omitted)
            verify_crc: Reject files whose header checksum does not match
        """
        self.config = config if config is not None else Config.create_default()
        self._magic_number = self.config.ishne.magic_number.encode('ascii')
        self._crc_method = self.config.ishne.crc_method
        self._verify_crc = verify_crc

    def read(self, path: Union[str, Path]) -> Package:
        """Read and parse a file."""
        return self.parse(read_all_bytes(path))

    def parse(self, data: bytes) -> Package:
        """
        Parse a complete ISHNE file.

        Args:
            data: File contents

        Returns:
            Parsed Package

        Raises:
            PacketParseError: If the file is malformed
            CRCError: If the header checksum does not match
        """
        if len(data) < VAR_BLOCK_OFFSET:
            raise PacketParseError(f"File too short: {len(data)} < {VAR_BLOCK_OFFSET}")

        magic = data[:MAGIC_NUMBER_SIZE]
        if magic != self._magic_number:
            raise PacketParseError(f"Bad magic number: {magic!r}")

        (checksum,) = struct.unpack("<H", data[MAGIC_NUMBER_SIZE:PREAMBLE_SIZE])
        fixed = parse_fixed_block(data[PREAMBLE_SIZE:VAR_BLOCK_OFFSET])

        var_size = fixed.var_length_block_size
        if fixed.offset_var_length_block != VAR_BLOCK_OFFSET:
            raise PacketParseError(
                f"Variable block offset {fixed.offset_var_length_block} is not {VAR_BLOCK_OFFSET}"
            )
        if fixed.offset_ecg_block != fixed.expected_offset_ecg_block:
            raise PacketParseError(
                f"ECG block offset {fixed.offset_ecg_block} does not follow a "
                f"{var_size}-byte variable block"
            )
        if len(data) < fixed.offset_ecg_block:
            raise PacketParseError(f"File truncated inside variable block: {len(data)} < {fixed.offset_ecg_block}")

        header_bytes = data[PREAMBLE_SIZE:fixed.offset_ecg_block]
        if self._verify_crc and not validate_crc(header_bytes, checksum, self._crc_method):
            raise CRCError(f"Header checksum mismatch: stored 0x{checksum:04X}")

        samples = data[fixed.offset_ecg_block:]
        expected = fixed.sample_size_ecg * SAMPLE_WIDTH
        if len(samples) != expected:
            raise PacketParseError(
                f"Sample area length mismatch: got {len(samples)}, expected {expected}"
            )

        variable = VariableBlock(data=data[VAR_BLOCK_OFFSET:fixed.offset_ecg_block]) if var_size else None
        return Package(
            magic_number=magic.decode('ascii'),
            checksum=checksum,
            header=Header(fixed=fixed, variable=variable),
            header_bytes=header_bytes,
            samples=samples,
        )

    def get_file_info(self, data: bytes) -> dict:
        """
        Get basic file information without full parsing.

        Args:
            data: File contents

        Returns:
            Dictionary with file info
        """
        try:
            if len(data) < VAR_BLOCK_OFFSET:
                return {"error": "Data too short for header"}

            fixed = parse_fixed_block(data[PREAMBLE_SIZE:PREAMBLE_SIZE + FIXED_BLOCK_SIZE])
            (checksum,) = struct.unpack("<H", data[MAGIC_NUMBER_SIZE:PREAMBLE_SIZE])
            header_bytes = data[PREAMBLE_SIZE:fixed.offset_ecg_block]

            return {
                "magic_number": data[:MAGIC_NUMBER_SIZE].decode('ascii', errors='replace'),
                "checksum": checksum,
                "checksum_valid": validate_crc(header_bytes, checksum, self._crc_method),
                "first_name": fixed.first_name,
                "last_name": fixed.last_name,
                "subject_id": fixed.subject_id,
                "n_leads": fixed.n_leads,
                "sampling_rate": fixed.sampling_rate,
                "sample_size_ecg": fixed.sample_size_ecg,
                "var_length_block_size": fixed.var_length_block_size,
                "offset_ecg_block": fixed.offset_ecg_block,
                "total_length": len(data),
            }
        except PacketParseError as e:
            return {"error": str(e)}
