"""Raw capture to ISHNE file conversion pipeline."""

import logging
from pathlib import Path
from typing import Optional, Union

from ..core.config import Config
from ..core.models import Header, Package
from ..data_acquisition.raw_transcoder import RawTranscoder
from .assembler import PackageAssembler
from .files import read_all_bytes
from .header_builder import HeaderBuilder


logger = logging.getLogger(__name__)


class ISHNEConverter:
    """Reads a raw sensor capture, transcodes it and writes an ISHNE file."""

    def __init__(self, config: Optional[Config] = None, assembler: Optional[PackageAssembler] = None):
        """
        Initialize converter.

        Args:
            config: Configuration object (defaults used when omitted)
            assembler: Package assembler (one is built from ``config`` when omitted)
        """
        self.config = config if config is not None else Config.create_default()
        self.transcoder = RawTranscoder(self.config)
        self.assembler = assembler if assembler is not None else PackageAssembler(self.config)

    def build_package(self, header: Header, raw: bytes) -> Package:
        """Transcode raw bytes and assemble them with ``header``."""
        samples = self.transcoder.transcode(raw)
        logger.debug("Transcoded %d raw bytes into %d sample bytes", len(raw), len(samples))
        return self.assembler.assemble(header, samples)

    def convert(self,
                raw_path: Union[str, Path],
                output_path: Union[str, Path],
                builder: Optional[HeaderBuilder] = None) -> Package:
        """
        Convert one raw capture file.

        Args:
            raw_path: Raw sensor capture
            output_path: ISHNE file to create
            builder: Staged header; a default header is used when omitted

        Returns:
            The written Package

        Raises:
            PackageIOError: If reading, creating or writing fails
            ValidationError: If the header is inconsistent
        """
        header = (builder if builder is not None else HeaderBuilder(self.config)).header
        raw = read_all_bytes(raw_path)
        package = self.build_package(header, raw)
        self.assembler.write(package, output_path)
        return package
