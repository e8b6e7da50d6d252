"""File primitives used by the converter.

Each failure is raised as ``PackageIOError`` naming the phase that failed.
"""

from pathlib import Path
from typing import BinaryIO, Union

from ..core.exceptions import PackageIOError


PathLike = Union[str, Path]


def read_all_bytes(path: PathLike) -> bytes:
    """Read a whole file."""
    try:
        with open(path, 'rb') as f:
            return f.read()
    except OSError as e:
        raise PackageIOError("read", path, e) from e


def create_file(path: PathLike) -> BinaryIO:
    """Create (or truncate) a file for binary writing."""
    try:
        return open(path, 'wb')
    except OSError as e:
        raise PackageIOError("create", path, e) from e


def write_bytes(handle: BinaryIO, data: bytes) -> None:
    """Write all of ``data`` to an open handle and flush it."""
    try:
        handle.write(data)
        handle.flush()
    except OSError as e:
        raise PackageIOError("write", getattr(handle, 'name', '<stream>'), e) from e


def write_file(path: PathLike, data: bytes) -> None:
    """Create ``path`` and write ``data``; a partial file is left as is on failure."""
    handle = create_file(path)
    try:
        write_bytes(handle, data)
    finally:
        handle.close()
