"""NTP header byte packing and the client request packet."""
from typing import Tuple

from simplentp.utils.constants import (
    PACKET_SIZE, CLIENT_LEAP, CLIENT_VERSION, CLIENT_MODE,
)

# Byte 0 layout: LI (2 bits) | VN (3 bits) | Mode (3 bits)
LEAP_SHIFT = 6
LEAP_MASK = 0x03
VERSION_SHIFT = 3
VERSION_MASK = 0x07
MODE_MASK = 0x07


def pack_header(leap: int, version: int, mode: int) -> int:
    if not 0 <= leap <= LEAP_MASK:
        raise ValueError(f"leap indicator out of range: {leap}")
    if not 0 <= version <= VERSION_MASK:
        raise ValueError(f"version out of range: {version}")
    if not 0 <= mode <= MODE_MASK:
        raise ValueError(f"mode out of range: {mode}")
    return (leap << LEAP_SHIFT) | (version << VERSION_SHIFT) | mode


def unpack_header(first_byte: int) -> Tuple[int, int, int]:
    """Split byte 0 into (leap indicator, version number, mode)."""
    leap = (first_byte >> LEAP_SHIFT) & LEAP_MASK
    version = (first_byte >> VERSION_SHIFT) & VERSION_MASK
    mode = first_byte & MODE_MASK
    return leap, version, mode


def build_request() -> bytes:
    """Return a fresh 48-byte client request (LI=0, VN=3, Mode=3 -> 0x1B)."""
    header = pack_header(CLIENT_LEAP, CLIENT_VERSION, CLIENT_MODE)
    return bytes([header]) + bytes(PACKET_SIZE - 1)
