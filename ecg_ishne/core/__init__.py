"""Core module for ECG ISHNE system."""

from .config import Config
from .models import FixedBlock, VariableBlock, Header, Package
from .exceptions import ECGISHNEError, ConfigurationError, ValidationError, ParseError, PackageIOError

__all__ = [
    "Config", "FixedBlock", "VariableBlock", "Header", "Package",
    "ECGISHNEError", "ConfigurationError", "ValidationError", "ParseError", "PackageIOError",
]
