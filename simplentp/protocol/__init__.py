"""Protocol Layer - NTP packet construction and decoding."""

from .packet import build_request, pack_header, unpack_header
from .fixedpoint import (
    NtpTimestamp, parse_short_format, parse_timestamp_format,
    parse_timestamp_split, ntp_to_iso8601, format_float,
)
from .fields import LeapIndicator, Mode, Stratum, StratumClass
from .decoder import DecodedFields, DisplayOptions, FIELD_ORDER, decode_packet

__all__ = [
    "build_request", "pack_header", "unpack_header",
    # Fixed-point helpers
    "NtpTimestamp", "parse_short_format", "parse_timestamp_format",
    "parse_timestamp_split", "ntp_to_iso8601", "format_float",
    # Header fields
    "LeapIndicator", "Mode", "Stratum", "StratumClass",
    # Decoder
    "DecodedFields", "DisplayOptions", "FIELD_ORDER", "decode_packet",
]
