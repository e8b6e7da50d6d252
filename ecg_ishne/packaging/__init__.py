"""Header building, package assembly and file reading."""

from .header_builder import HeaderBuilder
from .assembler import PackageAssembler
from .reader import ISHNEReader
from .converter import ISHNEConverter

__all__ = ["HeaderBuilder", "PackageAssembler", "ISHNEReader", "ISHNEConverter"]
