"""Byte layout of the ISHNE output file.

File structure::

    8B magic number + 2B checksum + 512B fixed block + var block + ECG samples

The fixed block is described once in ``FIXED_BLOCK_FIELDS``; the struct
format and the file offsets used by the serializer and the reader are both
derived from that table.
"""

import struct
from typing import Dict, NamedTuple, Tuple


MAGIC_NUMBER_SIZE = 8
CHECKSUM_SIZE = 2
PREAMBLE_SIZE = MAGIC_NUMBER_SIZE + CHECKSUM_SIZE  # 10
FIXED_BLOCK_SIZE = 512
VAR_BLOCK_OFFSET = PREAMBLE_SIZE + FIXED_BLOCK_SIZE  # 522

MAX_LEADS = 12
SAMPLE_WIDTH = 2  # int16 per lead per time step


class FieldSpec(NamedTuple):
    """One fixed block field."""
    name: str   # attribute name on FixedBlock
    code: str   # struct code (without byte order)
    length: int  # number of values for array fields, byte width for strings

    @property
    def is_text(self) -> bool:
        return self.code == "s"

    @property
    def format(self) -> str:
        return f"{self.length}{self.code}"

    @property
    def size(self) -> int:
        return struct.calcsize("<" + self.format)


FIXED_BLOCK_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec("var_length_block_size", "I", 1),
    FieldSpec("sample_size_ecg", "I", 1),
    FieldSpec("offset_var_length_block", "I", 1),
    FieldSpec("offset_ecg_block", "I", 1),
    FieldSpec("file_version", "h", 1),
    FieldSpec("first_name", "s", 40),
    FieldSpec("last_name", "s", 40),
    FieldSpec("subject_id", "s", 20),
    FieldSpec("sex", "H", 1),
    FieldSpec("race", "H", 1),
    FieldSpec("birth_date", "H", 3),
    FieldSpec("record_date", "H", 3),
    FieldSpec("file_date", "H", 3),
    FieldSpec("start_time", "H", 3),
    FieldSpec("n_leads", "H", 1),
    FieldSpec("lead_spec", "h", MAX_LEADS),
    FieldSpec("lead_qual", "h", MAX_LEADS),
    FieldSpec("resolution", "h", MAX_LEADS),
    FieldSpec("pacemaker", "h", 1),
    FieldSpec("recorder", "s", 40),
    FieldSpec("sampling_rate", "H", 1),
    FieldSpec("proprietary", "s", 80),
    FieldSpec("copyright", "s", 80),
    FieldSpec("reserved", "s", 88),
)

FIXED_BLOCK_FORMAT = "<" + "".join(spec.format for spec in FIXED_BLOCK_FIELDS)
FIXED_BLOCK_STRUCT = struct.Struct(FIXED_BLOCK_FORMAT)

if FIXED_BLOCK_STRUCT.size != FIXED_BLOCK_SIZE:
    raise RuntimeError(f"Fixed block layout is {FIXED_BLOCK_STRUCT.size} bytes, expected {FIXED_BLOCK_SIZE}")

TEXT_WIDTHS: Dict[str, int] = {
    spec.name: spec.length for spec in FIXED_BLOCK_FIELDS if spec.is_text
}


def _field_offsets() -> Dict[str, int]:
    offsets = {}
    position = PREAMBLE_SIZE
    for spec in FIXED_BLOCK_FIELDS:
        offsets[spec.name] = position
        position += spec.size
    return offsets


# Offsets from the start of the file
FIELD_OFFSETS: Dict[str, int] = _field_offsets()


def ecg_block_offset(var_length_block_size: int) -> int:
    """Offset of the first ECG sample for a given variable block size."""
    return VAR_BLOCK_OFFSET + var_length_block_size
