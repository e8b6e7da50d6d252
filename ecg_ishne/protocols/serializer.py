"""Header serializer for ECG ISHNE system."""

import struct
from typing import Any, Dict, List

from ..core.exceptions import PacketParseError
from ..core.layout import FIXED_BLOCK_FIELDS, FIXED_BLOCK_SIZE, FIXED_BLOCK_STRUCT
from ..core.models import FixedBlock, Header


def _pack_values(fixed: FixedBlock) -> List[Any]:
    values: List[Any] = []
    for spec in FIXED_BLOCK_FIELDS:
        value = getattr(fixed, spec.name)
        if spec.is_text:
            # struct's "s" code null-pads to the field width
            values.append(value if isinstance(value, bytes) else value.encode('ascii'))
        elif spec.length == 1:
            values.append(int(value))
        else:
            values.extend(int(item) for item in value)
    return values


def serialize_fixed_block(fixed: FixedBlock) -> bytes:
    """
    Render the fixed block as exactly 512 little-endian bytes.

    Args:
        fixed: Fixed block to render

    Returns:
        Serialized fixed block
    """
    return FIXED_BLOCK_STRUCT.pack(*_pack_values(fixed))


def serialize_header(header: Header) -> bytes:
    """
    Render fixed block followed by the variable block, if any.

    The declared ``var_length_block_size`` is trusted; the assembler checks
    it against the variable block before calling this.

    Args:
        header: Header to render

    Returns:
        ``512 + var_length_block_size`` bytes
    """
    data = serialize_fixed_block(header.fixed)
    if header.variable is not None:
        data += header.variable.data
    return data


def parse_fixed_block(data: bytes) -> FixedBlock:
    """
    Parse a 512-byte fixed block.

    Args:
        data: Serialized fixed block (extra trailing bytes are ignored)

    Returns:
        Parsed FixedBlock

    Raises:
        PacketParseError: If the block is short or holds invalid values
    """
    if len(data) < FIXED_BLOCK_SIZE:
        raise PacketParseError(f"Fixed block too short: {len(data)} < {FIXED_BLOCK_SIZE}")

    try:
        values = FIXED_BLOCK_STRUCT.unpack(data[:FIXED_BLOCK_SIZE])
    except struct.error as e:
        raise PacketParseError(f"Fixed block unpacking failed: {e}")

    fields: Dict[str, Any] = {}
    position = 0
    for spec in FIXED_BLOCK_FIELDS:
        if spec.is_text:
            raw = values[position]
            position += 1
            if spec.name == "reserved":
                fields[spec.name] = raw.rstrip(b"\x00")
            else:
                fields[spec.name] = raw.split(b"\x00", 1)[0].decode('ascii', errors='replace')
        elif spec.length == 1:
            fields[spec.name] = values[position]
            position += 1
        else:
            fields[spec.name] = list(values[position:position + spec.length])
            position += spec.length

    try:
        return FixedBlock(**fields)
    except ValueError as e:
        raise PacketParseError(f"Invalid fixed block values: {e}")
