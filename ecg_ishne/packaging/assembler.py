"""Package assembler for ECG ISHNE system."""

import logging
from pathlib import Path
from typing import Callable, Optional, Union

from ..core.config import Config
from ..core.exceptions import ValidationError
from ..core.layout import SAMPLE_WIDTH, VAR_BLOCK_OFFSET, ecg_block_offset
from ..core.models import Header, Package
from ..protocols.crc import calculate_crc
from ..protocols.serializer import serialize_header
from .files import write_file


logger = logging.getLogger(__name__)

Writer = Callable[[Union[str, Path], bytes], None]


class PackageAssembler:
    """Builds immutable packages from a header and transcoded samples."""

    def __init__(self, config: Optional[Config] = None, writer: Optional[Writer] = None):
        """
        Initialize package assembler.

        Args:
            config: Configuration object (defaults used when omitted)
            writer: File-write collaborator, ``writer(path, data)``
        """
        self.config = config if config is not None else Config.create_default()
        self._writer = writer if writer is not None else write_file
        self._magic_number = self.config.ishne.magic_number
        self._crc_method = self.config.ishne.crc_method

    def finalize_header(self, header: Header, samples: bytes) -> Header:
        """
        Return a copy of ``header`` with its derived fields filled in.

        Raises:
            ValidationError: If the declared variable block size does not
                match the variable block, or samples are not whole int16s
        """
        if not header.is_consistent:
            raise ValidationError(
                f"Variable block size mismatch: header declares "
                f"{header.fixed.var_length_block_size}, block holds {header.variable_block_size}"
            )
        if len(samples) % SAMPLE_WIDTH:
            raise ValidationError(f"Sample stream length {len(samples)} is not a multiple of {SAMPLE_WIDTH}")

        finalized = header.model_copy(deep=True)
        fixed = finalized.fixed
        fixed.sample_size_ecg = len(samples) // SAMPLE_WIDTH
        fixed.offset_var_length_block = VAR_BLOCK_OFFSET
        fixed.offset_ecg_block = ecg_block_offset(fixed.var_length_block_size)
        return finalized

    def assemble(self, header: Header, samples: bytes) -> Package:
        """
        Assemble a package.

        Args:
            header: Staged header (not modified)
            samples: Transcoded samples

        Returns:
            Immutable Package
        """
        samples = bytes(samples)
        finalized = self.finalize_header(header, samples)
        header_bytes = serialize_header(finalized)
        checksum = calculate_crc(header_bytes, self._crc_method)

        package = Package(
            magic_number=self._magic_number,
            checksum=checksum,
            header=finalized,
            header_bytes=header_bytes,
            samples=samples,
        )
        logger.info(
            "Assembled package: %d samples, %d header bytes, checksum 0x%04X",
            package.sample_count, len(header_bytes), checksum,
        )
        return package

    def verify(self, package: Package) -> bool:
        """Check the checksum still matches the package's header."""
        current = serialize_header(package.header)
        if current != package.header_bytes:
            return False
        return calculate_crc(current, self._crc_method) == package.checksum

    def write(self, package: Package, path: Union[str, Path]) -> None:
        """
        Hand the rendered package to the file-write collaborator.

        Raises:
            PackageIOError: If the file cannot be created or written
        """
        data = package.to_bytes()
        self._writer(path, data)
        logger.info("Wrote %d bytes to %s", len(data), path)
