"""ECG ISHNE - Convert raw two-channel ECG captures into Standard ISHNE files."""

__version__ = "0.1.0"
__author__ = "Mehrshad"
__email__ = "mehrshadtaji61@gmail.com"

# Core imports for easy access
from .core.config import Config, ISHNEConfig, RawFormatConfig, CRCMethod
from .core.models import FixedBlock, VariableBlock, Header, Package, Sex
from .core.exceptions import (
    ECGISHNEError,
    ConfigurationError,
    ValidationError,
    ParseError,
    PackageIOError,
    ProtocolError,
    CRCError,
    PacketParseError,
)
from .data_acquisition.raw_transcoder import RawTranscoder, transcode_raw_samples
from .packaging.header_builder import HeaderBuilder
from .packaging.assembler import PackageAssembler
from .packaging.reader import ISHNEReader
from .packaging.converter import ISHNEConverter
from .protocols.crc import crc16_ccitt, calculate_crc, validate_crc
from .protocols.serializer import serialize_header

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__email__",

    # Configuration
    "Config",
    "ISHNEConfig",
    "RawFormatConfig",
    "CRCMethod",

    # Data models
    "FixedBlock",
    "VariableBlock",
    "Header",
    "Package",
    "Sex",

    # Exceptions
    "ECGISHNEError",
    "ConfigurationError",
    "ValidationError",
    "ParseError",
    "PackageIOError",
    "ProtocolError",
    "CRCError",
    "PacketParseError",

    # Core components
    "HeaderBuilder",
    "PackageAssembler",
    "ISHNEReader",
    "ISHNEConverter",
    "RawTranscoder",

    # Encoding utilities
    "transcode_raw_samples",
    "serialize_header",
    "crc16_ccitt",
    "calculate_crc",
    "validate_crc",
]
