"""Tests for configuration models."""

import logging

import pytest
from pydantic import ValidationError as PydanticValidationError

from ecg_ishne.core.config import Config, CRCMethod, ISHNEConfig, RawFormatConfig
from ecg_ishne.core.exceptions import ConfigurationError


def test_defaults():
    config = Config.create_default()
    assert config.ishne.magic_number == "ISHNE1.0"
    assert config.ishne.sampling_rate == 250
    assert config.ishne.crc_method is CRCMethod.CRC16_CCITT
    assert config.raw.frame_size == 5
    assert config.raw.channel_count == 2
    assert config.log_level == "INFO"


def test_dict_round_trip():
    config = Config(ishne=ISHNEConfig(file_version=2), log_level="DEBUG")
    restored = Config.from_dict(config.to_dict())
    assert restored.ishne.file_version == 2
    assert restored.log_level == "DEBUG"


@pytest.mark.parametrize("magic", ["ISHNE", "ISHNE1.0X", "ISHNÉ1.0"])
def test_magic_number_must_be_8_ascii_characters(magic):
    with pytest.raises(PydanticValidationError):
        ISHNEConfig(magic_number=magic)


def test_date_formats_cannot_be_empty():
    with pytest.raises(PydanticValidationError):
        ISHNEConfig(date_formats=[])


def test_raw_frame_geometry_must_be_consistent():
    with pytest.raises(PydanticValidationError):
        RawFormatConfig(frame_size=6)
    assert RawFormatConfig(frame_size=9, channel_count=4).channel_count == 4


def test_log_level_is_validated_on_assignment():
    config = Config.create_default()
    with pytest.raises(PydanticValidationError):
        config.log_level = "VERBOSE"


def test_configure_logging_sets_package_level():
    config = Config(log_level="DEBUG")
    config.configure_logging()
    package_logger = logging.getLogger("ecg_ishne")
    assert package_logger.level == logging.DEBUG
    assert not package_logger.disabled

    Config(enable_logging=False).configure_logging()
    assert package_logger.disabled

    Config(log_level="INFO").configure_logging()
    assert not package_logger.disabled
    assert package_logger.level == logging.INFO


def test_from_dict_wraps_invalid_configuration():
    with pytest.raises(ConfigurationError):
        Config.from_dict({"ishne": {"magic_number": "short"}})
