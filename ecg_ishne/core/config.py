"""Configuration management for ECG ISHNE system."""

import logging
from typing import Dict, Any, List
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from enum import Enum

from .exceptions import ConfigurationError


class CRCMethod(str, Enum):
    """Available header checksum methods."""
    CRC16_CCITT = "crc16_ccitt"
    CRC16_CCITT_BITWISE = "crc16_ccitt_bitwise"
    CRC16_CCITT_TABLE = "crc16_ccitt_table"
    CRC16_XMODEM = "crc16_xmodem"


class ISHNEConfig(BaseModel):
    """Output file configuration."""
    magic_number: str = Field(default="ISHNE1.0", description="8-byte ASCII file tag")
    file_version: int = Field(default=1, ge=-32768, le=32767, description="Version of the file")
    sampling_rate: int = Field(default=250, ge=1, le=65535, description="Sampling rate in Hz")
    crc_method: CRCMethod = Field(default=CRCMethod.CRC16_CCITT, description="Header checksum method")
    date_formats: List[str] = Field(
        default_factory=lambda: ["%Y-%m-%d", "%d/%m/%Y", "%d.%m.%Y"],
        description="strptime formats tried when parsing date strings",
    )

    @field_validator('magic_number')
    @classmethod
    def validate_magic_number(cls, v):
        """Magic number must be exactly 8 ASCII characters."""
        if not v.isascii() or len(v) != 8:
            raise ValueError("Magic number must be exactly 8 ASCII characters")
        return v

    @field_validator('date_formats')
    @classmethod
    def validate_date_formats(cls, v):
        """At least one date format is required."""
        if not v:
            raise ValueError("At least one date format must be configured")
        return v


class RawFormatConfig(BaseModel):
    """Raw sensor frame layout."""
    frame_size: int = Field(default=5, ge=1, description="Bytes per raw frame")
    reserved_bytes: int = Field(default=1, ge=0, description="Leading bytes ignored in each frame")
    channel_count: int = Field(default=2, ge=1, le=12, description="Number of channels per frame")

    @model_validator(mode="after")
    def validate_frame_geometry(self):
        """Channels must fill the frame after the reserved bytes."""
        if self.reserved_bytes + 2 * self.channel_count != self.frame_size:
            raise ValueError(
                f"Frame of {self.frame_size} bytes cannot hold {self.reserved_bytes} reserved bytes "
                f"and {self.channel_count} big-endian 16-bit channels"
            )
        return self


class Config(BaseModel):
    """Main configuration for ECG ISHNE system."""
    model_config = ConfigDict(use_enum_values=False, validate_assignment=True)

    ishne: ISHNEConfig = Field(default_factory=ISHNEConfig)
    raw: RawFormatConfig = Field(default_factory=RawFormatConfig)

    # Advanced options
    log_level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    enable_logging: bool = Field(default=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create configuration from dictionary."""
        try:
            return cls(**data)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    @classmethod
    def create_default(cls) -> 'Config':
        """Create default configuration."""
        return cls(
            ishne=ISHNEConfig(),
            raw=RawFormatConfig(),
        )

    def configure_logging(self) -> None:
        """Apply ``log_level`` to the package logger."""
        package_logger = logging.getLogger("ecg_ishne")
        if not self.enable_logging:
            package_logger.disabled = True
            return
        package_logger.disabled = False
        package_logger.setLevel(self.log_level)
        if not logging.getLogger().handlers and not package_logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
            package_logger.addHandler(handler)
