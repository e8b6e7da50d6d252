"""Data models for ECG ISHNE system."""

import struct
from typing import Annotated, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator
from enum import Enum
import numpy as np

from .layout import (
    MAX_LEADS,
    PREAMBLE_SIZE,
    SAMPLE_WIDTH,
    TEXT_WIDTHS,
    VAR_BLOCK_OFFSET,
    ecg_block_offset,
)


UINT32_MAX = 0xFFFFFFFF

UInt16 = Annotated[int, Field(ge=0, le=0xFFFF)]
Int16 = Annotated[int, Field(ge=-32768, le=32767)]
Triple = Tuple[UInt16, UInt16, UInt16]


class Sex(int, Enum):
    """Subject sex codes."""
    UNKNOWN = 0
    MAN = 1
    WOMAN = 2


def _zero_leads() -> List[int]:
    return [0] * MAX_LEADS


class FixedBlock(BaseModel):
    """The fixed-length (512 bytes) header block.

    Every assignment is validated, so a rejected value leaves the block
    untouched. Text fields hold ASCII strings no longer than their fixed
    width; they are null-padded when serialized.
    """
    model_config = ConfigDict(validate_assignment=True)

    var_length_block_size: int = Field(default=0, ge=0, le=UINT32_MAX, description="Size of variable length block (bytes)")
    sample_size_ecg: int = Field(default=0, ge=0, le=UINT32_MAX, description="Size of ECG (samples)")
    offset_var_length_block: int = Field(default=VAR_BLOCK_OFFSET, ge=0, le=UINT32_MAX, description="Offset of variable length block")
    offset_ecg_block: int = Field(default=VAR_BLOCK_OFFSET, ge=0, le=UINT32_MAX, description="Offset of ECG block")
    file_version: Int16 = Field(default=0, description="Version of the file")
    first_name: str = Field(default="", max_length=TEXT_WIDTHS["first_name"], description="Subject first name")
    last_name: str = Field(default="", max_length=TEXT_WIDTHS["last_name"], description="Subject last name")
    subject_id: str = Field(default="", max_length=TEXT_WIDTHS["subject_id"], description="Subject ID")
    sex: int = Field(default=0, ge=0, le=2, description="0: unknown, 1: male, 2: female")
    race: int = Field(default=0, ge=0, le=9, description="0: unknown, 1: Caucasian, 2: Black, 3: Oriental, 4-9: reserved")
    birth_date: Triple = Field(default=(0, 0, 0), description="Date of birth (day, month, year)")
    record_date: Triple = Field(default=(0, 0, 0), description="Date of recording (day, month, year)")
    file_date: Triple = Field(default=(0, 0, 0), description="Date of creation of output file (day, month, year)")
    start_time: Triple = Field(default=(0, 0, 0), description="Start time (hour, minute, second)")
    n_leads: int = Field(default=2, ge=0, le=MAX_LEADS, description="Number of stored leads")
    lead_spec: List[Int16] = Field(default_factory=_zero_leads, min_length=MAX_LEADS, max_length=MAX_LEADS)
    lead_qual: List[Int16] = Field(default_factory=_zero_leads, min_length=MAX_LEADS, max_length=MAX_LEADS)
    resolution: List[Int16] = Field(default_factory=_zero_leads, min_length=MAX_LEADS, max_length=MAX_LEADS,
                                    description="Amplitude resolution in nV")
    pacemaker: Int16 = Field(default=0, description="Pacemaker code")
    recorder: str = Field(default="", max_length=TEXT_WIDTHS["recorder"], description="Type of recorder")
    sampling_rate: UInt16 = Field(default=250, description="Sampling rate in Hz")
    proprietary: str = Field(default="", max_length=TEXT_WIDTHS["proprietary"], description="Proprietary of ECG")
    copyright: str = Field(default="", max_length=TEXT_WIDTHS["copyright"], description="Copyright and restriction of diffusion")
    reserved: bytes = Field(default=b"", max_length=TEXT_WIDTHS["reserved"])

    @field_validator('first_name', 'last_name', 'subject_id', 'recorder', 'proprietary', 'copyright')
    @classmethod
    def validate_ascii(cls, v):
        """Text fields are stored as ASCII."""
        if not v.isascii():
            raise ValueError("Text fields must be ASCII")
        return v

    @property
    def expected_offset_ecg_block(self) -> int:
        """ECG block offset implied by ``var_length_block_size``."""
        return ecg_block_offset(self.var_length_block_size)


class VariableBlock(BaseModel):
    """Producer-defined variable-length block, stored uninterpreted."""
    data: bytes = Field(default=b"", description="Raw variable block contents")

    @field_validator('data', mode='before')
    @classmethod
    def encode_text(cls, v):
        """Accept ASCII text as well as raw bytes."""
        if isinstance(v, str):
            try:
                return v.encode('ascii')
            except UnicodeEncodeError:
                raise ValueError("Variable block text must be ASCII")
        return v

    @property
    def size(self) -> int:
        """Serialized length in bytes."""
        return len(self.data)


class Header(BaseModel):
    """Fixed block plus optional variable block."""
    model_config = ConfigDict(validate_assignment=True)

    fixed: FixedBlock = Field(default_factory=FixedBlock)
    variable: Optional[VariableBlock] = Field(default=None)

    @property
    def variable_block_size(self) -> int:
        """Actual variable block length (0 when absent)."""
        return self.variable.size if self.variable is not None else 0

    @property
    def is_consistent(self) -> bool:
        """Declared variable block size matches the actual block."""
        return self.fixed.var_length_block_size == self.variable_block_size


class Package(BaseModel):
    """An assembled ISHNE package, immutable once built."""
    model_config = ConfigDict(frozen=True)

    magic_number: str = Field(..., min_length=8, max_length=8, description="8-byte ASCII tag")
    checksum: int = Field(..., ge=0, le=0xFFFF, description="CRC-CCITT of the serialized header")
    header: Header = Field(..., description="Header the checksum was computed over")
    header_bytes: bytes = Field(..., description="Serialized fixed and variable blocks")
    samples: bytes = Field(default=b"", description="Transcoded ECG samples (int16 LE, leads interleaved)")

    @property
    def sample_count(self) -> int:
        """Number of 16-bit samples across all leads."""
        return len(self.samples) // SAMPLE_WIDTH

    @property
    def size(self) -> int:
        """Total file size in bytes."""
        return PREAMBLE_SIZE + len(self.header_bytes) + len(self.samples)

    def to_bytes(self) -> bytes:
        """Render the complete output file."""
        return b"".join((
            self.magic_number.encode('ascii'),
            struct.pack("<H", self.checksum),
            self.header_bytes,
            self.samples,
        ))

    def to_numpy(self) -> np.ndarray:
        """Samples as an (n, n_leads) int16 array."""
        n_leads = self.header.fixed.n_leads or 1
        data = np.frombuffer(self.samples, dtype='<i2')
        usable = len(data) - len(data) % n_leads
        return data[:usable].reshape(-1, n_leads)

