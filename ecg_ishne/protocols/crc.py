"""CRC implementations for ECG ISHNE system.

The ISHNE header checksum is CRC-CCITT: polynomial x^16 + x^12 + x^5 + 1
(0x1021), register preset to 0xFFFF, no reflection, no final XOR. Three
equivalent routines are provided; ``crc16_ccitt`` is the one used for
output files, the bitwise and table versions are references it is checked
against.
"""

from typing import Dict, Callable, List, Union
import numpy as np
from ..core.exceptions import CRCError


CCITT_POLYNOMIAL = 0x1021
CCITT_INITIAL = 0xFFFF


def _as_bytes(payload: Union[bytes, bytearray, memoryview, np.ndarray]) -> bytes:
    if isinstance(payload, np.ndarray):
        return payload.astype(np.uint8, copy=False).tobytes()
    return bytes(payload)


def crc16_ccitt(payload: Union[bytes, np.ndarray]) -> int:
    """CRC-16/CCITT on a split high/low accumulator.

    Each byte is folded into the high half, the low nibble of the result is
    mixed back in, and the polynomial taps (bits 12, 5 and 0) are applied as
    nibble shifts of that intermediate value.
    """
    high = (CCITT_INITIAL >> 8) & 0xFF
    low = CCITT_INITIAL & 0xFF

    for byte in _as_bytes(payload):
        x = byte ^ high
        x ^= x >> 4
        high = low ^ ((x << 4) & 0xFF) ^ (x >> 3)
        low = ((x << 5) & 0xFF) ^ x

    return (high << 8) | low


def crc16_ccitt_bitwise(payload: Union[bytes, np.ndarray]) -> int:
    """CRC-16/CCITT (polynomial 0x1021, initial value 0xFFFF), bit by bit."""
    crc = CCITT_INITIAL

    for byte in _as_bytes(payload):
        crc ^= (byte << 8)
        for _ in range(8):
            if crc & 0x8000:
                crc = (crc << 1) ^ CCITT_POLYNOMIAL
            else:
                crc <<= 1
        crc &= 0xFFFF
    return crc


def _build_ccitt_table() -> List[int]:
    table = []
    for index in range(256):
        crc = index << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = ((crc << 1) ^ CCITT_POLYNOMIAL) & 0xFFFF
            else:
                crc = (crc << 1) & 0xFFFF
        table.append(crc)
    return table


CCITT_TABLE: List[int] = _build_ccitt_table()


def crc16_ccitt_table(payload: Union[bytes, np.ndarray]) -> int:
    """CRC-16/CCITT (polynomial 0x1021, initial value 0xFFFF), table driven."""
    crc = CCITT_INITIAL

    for byte in _as_bytes(payload):
        crc = ((crc << 8) & 0xFFFF) ^ CCITT_TABLE[((crc >> 8) ^ byte) & 0xFF]
    return crc


def crc16_xmodem(payload: Union[bytes, np.ndarray]) -> int:
    """CRC-16/XMODEM (polynomial 0x1021, initial value 0x0000)."""
    crc = 0x0000

    for byte in _as_bytes(payload):
        crc ^= (byte << 8)
        for _ in range(8):
            if crc & 0x8000:
                crc = (crc << 1) ^ CCITT_POLYNOMIAL
            else:
                crc <<= 1
        crc &= 0xFFFF
    return crc


# Dictionary of available CRC functions
CRC_FUNCTIONS: Dict[str, Callable[[Union[bytes, np.ndarray]], int]] = {
    'crc16_ccitt': crc16_ccitt,
    'crc16_ccitt_bitwise': crc16_ccitt_bitwise,
    'crc16_ccitt_table': crc16_ccitt_table,
    'crc16_xmodem': crc16_xmodem,
}


def _method_name(method) -> str:
    return getattr(method, 'value', method)


def calculate_crc(payload: Union[bytes, np.ndarray], method: str = 'crc16_ccitt') -> int:
    """
    Calculate CRC for payload using specified method.

    Args:
        payload: Data to calculate CRC for
        method: CRC method name or ``CRCMethod`` member

    Returns:
        Calculated CRC value

    Raises:
        CRCError: If method is not supported
    """
    name = _method_name(method)
    if name not in CRC_FUNCTIONS:
        raise CRCError(f"Unsupported CRC method: {name}")

    try:
        return CRC_FUNCTIONS[name](payload)
    except (TypeError, ValueError) as e:
        raise CRCError(f"CRC calculation failed: {e}")


def validate_crc(payload: Union[bytes, np.ndarray], received_crc: int, method: str = 'crc16_ccitt') -> bool:
    """
    Validate CRC for payload.

    Args:
        payload: Data to validate
        received_crc: Received CRC value
        method: CRC method to use

    Returns:
        True if CRC is valid, False otherwise
    """
    try:
        calculated_crc = calculate_crc(payload, method)
        return calculated_crc == received_crc
    except CRCError:
        return False


def list_available_methods() -> list:
    """Get list of available CRC methods."""
    return list(CRC_FUNCTIONS.keys())
