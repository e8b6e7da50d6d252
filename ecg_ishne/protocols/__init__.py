"""Protocol implementations for ECG ISHNE system."""

from .crc import CRC_FUNCTIONS, calculate_crc
from .serializer import serialize_header, parse_fixed_block

__all__ = ["CRC_FUNCTIONS", "calculate_crc", "serialize_header", "parse_fixed_block"]
