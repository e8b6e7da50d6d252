"""Command-line tools for ECG ISHNE system."""

from .convert_raw import main as convert_main
from .inspect_ishne import main as inspect_main
from .mock_sensor import main as mock_sensor_main

__all__ = ["convert_main", "inspect_main", "mock_sensor_main"]
