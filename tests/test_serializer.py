"""Tests for the fixed block layout and header serializer."""

import struct

import pytest

from ecg_ishne.core.exceptions import PacketParseError
from ecg_ishne.core.layout import (
    FIELD_OFFSETS,
    FIXED_BLOCK_SIZE,
    FIXED_BLOCK_STRUCT,
    PREAMBLE_SIZE,
    VAR_BLOCK_OFFSET,
    ecg_block_offset,
)
from ecg_ishne.core.models import FixedBlock, Header, VariableBlock
from ecg_ishne.packaging.header_builder import HeaderBuilder
from ecg_ishne.protocols.serializer import parse_fixed_block, serialize_fixed_block, serialize_header


EXPECTED_OFFSETS = {
    "var_length_block_size": 10,
    "sample_size_ecg": 14,
    "offset_var_length_block": 18,
    "offset_ecg_block": 22,
    "file_version": 26,
    "first_name": 28,
    "last_name": 68,
    "subject_id": 108,
    "sex": 128,
    "race": 130,
    "birth_date": 132,
    "record_date": 138,
    "file_date": 144,
    "start_time": 150,
    "n_leads": 156,
    "lead_spec": 158,
    "lead_qual": 182,
    "resolution": 206,
    "pacemaker": 230,
    "recorder": 232,
    "sampling_rate": 272,
    "proprietary": 274,
    "copyright": 354,
    "reserved": 434,
}


def _field(data: bytes, name: str, size: int) -> bytes:
    """Slice a field out of a serialized header using file offsets."""
    start = FIELD_OFFSETS[name] - PREAMBLE_SIZE
    return data[start:start + size]


def test_layout_offsets():
    assert FIELD_OFFSETS == EXPECTED_OFFSETS
    assert FIXED_BLOCK_STRUCT.size == FIXED_BLOCK_SIZE == 512
    assert VAR_BLOCK_OFFSET == 522


def test_default_fixed_block_is_512_bytes():
    assert len(serialize_fixed_block(FixedBlock())) == 512


@pytest.mark.parametrize("name,width,value", [
    ("first_name", 40, "Jane"),
    ("last_name", 40, "Doe"),
    ("subject_id", 20, "001"),
    ("recorder", 40, "Holter"),
    ("proprietary", 80, "ACME"),
    ("copyright", 80, "(c) ACME"),
])
def test_text_fields_are_null_padded(name, width, value):
    data = serialize_fixed_block(FixedBlock(**{name: value}))
    assert _field(data, name, width) == value.encode('ascii') + b"\x00" * (width - len(value))


def test_full_width_text_has_no_terminator():
    data = serialize_fixed_block(FixedBlock(subject_id="A" * 20))
    assert _field(data, "subject_id", 20) == b"A" * 20
    assert _field(data, "sex", 2) == b"\x00\x00"


def test_numeric_fields_are_little_endian():
    builder = HeaderBuilder()
    assert builder.set_sex("Woman")
    assert builder.set_number_of_leads(2)
    assert builder.set_sampling_rate(1000)
    assert builder.set_birth_date("1980-04-23")
    assert builder.set_start_time("13:05:09")
    assert builder.set_lead_spec([-9, 11])
    assert builder.set_file_version(-2)
    assert builder.set_var_length_block_size(0x01020304)
    data = serialize_fixed_block(builder.header.fixed)

    assert _field(data, "var_length_block_size", 4) == b"\x04\x03\x02\x01"
    assert _field(data, "file_version", 2) == struct.pack("<h", -2)
    assert _field(data, "sex", 2) == b"\x02\x00"
    assert _field(data, "n_leads", 2) == b"\x02\x00"
    assert _field(data, "sampling_rate", 2) == struct.pack("<H", 1000)
    assert _field(data, "birth_date", 6) == struct.pack("<3H", 23, 4, 1980)
    assert _field(data, "start_time", 6) == struct.pack("<3H", 13, 5, 9)
    assert _field(data, "lead_spec", 24) == struct.pack("<12h", -9, 11, *([0] * 10))


def test_reserved_area_is_zero_filled():
    data = serialize_fixed_block(FixedBlock())
    assert _field(data, "reserved", 88) == b"\x00" * 88

    data = serialize_fixed_block(FixedBlock(reserved=b"\x07\x08"))
    assert _field(data, "reserved", 88) == b"\x07\x08" + b"\x00" * 86


@pytest.mark.parametrize("n", [0, 1, 12])
def test_number_of_leads_round_trips(n):
    builder = HeaderBuilder()
    assert builder.set_number_of_leads(n)
    parsed = parse_fixed_block(serialize_fixed_block(builder.header.fixed))
    assert parsed.n_leads == n


def test_variable_block_is_appended_verbatim():
    header = Header(fixed=FixedBlock(var_length_block_size=5), variable=VariableBlock(data=b"hello"))
    data = serialize_header(header)
    assert len(data) == 512 + 5
    assert data[512:] == b"hello"


def test_header_without_variable_block():
    assert len(serialize_header(Header())) == 512


def test_parse_fixed_block_restores_fields():
    fixed = FixedBlock(first_name="Jane", last_name="Doe", subject_id="001", sex=2,
                       birth_date=(23, 4, 1980), resolution=[2500] * 12, reserved=b"\x01")
    parsed = parse_fixed_block(serialize_fixed_block(fixed))
    assert parsed.model_dump() == fixed.model_dump()


def test_parse_fixed_block_rejects_short_data():
    with pytest.raises(PacketParseError):
        parse_fixed_block(b"\x00" * 100)


def test_parse_fixed_block_rejects_invalid_values():
    data = bytearray(serialize_fixed_block(FixedBlock()))
    start = FIELD_OFFSETS["n_leads"] - PREAMBLE_SIZE
    data[start:start + 2] = struct.pack("<H", 13)
    with pytest.raises(PacketParseError):
        parse_fixed_block(bytes(data))


@pytest.mark.parametrize("size", [0, 1, 1000])
def test_ecg_block_offset(size):
    assert ecg_block_offset(size) == 10 + 512 + size
