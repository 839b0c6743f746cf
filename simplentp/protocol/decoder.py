"""Decoder for the 48-byte NTP reply.

Byte layout (RFC 5905 section 7.3, without extension fields):

    0       LI | VN | Mode
    1       Stratum
    2       Poll (exponent, read unsigned)
    3       Precision (signed exponent)
    4-8     Root Delay (16.16)
    8-12    Root Dispersion (16.16)
    12-16   Reference ID
    16-24   Reference Timestamp (32.32)
    24-32   Origin Timestamp
    32-40   Receive Timestamp
    40-48   Transmit Timestamp
"""
import logging
import struct
from dataclasses import dataclass, field
from typing import List, Tuple

from simplentp.utils.constants import PACKET_SIZE
from simplentp.utils.exceptions import DecodeError
from simplentp.utils.logger import get_logger
from .packet import unpack_header
from .fixedpoint import NtpTimestamp, parse_short_format, format_float
from .fields import LeapIndicator, Mode, Stratum

log = get_logger(__name__)

# (attribute, label) in display order
FIELD_ORDER: Tuple[Tuple[str, str], ...] = (
    ("leap_indicator", "Leap Indicator"),
    ("version_number", "Version Number"),
    ("mode", "Mode"),
    ("stratum", "Stratum"),
    ("poll_interval", "Poll Interval"),
    ("precision", "Precision"),
    ("root_delay", "Root Delay"),
    ("root_dispersion", "Root Dispersion"),
    ("reference_id", "Reference ID"),
    ("reference_timestamp", "Reference Timestamp"),
    ("origin_timestamp", "Origin Timestamp"),
    ("receive_timestamp", "Receive Timestamp"),
    ("transmit_timestamp", "Transmit Timestamp"),
)


@dataclass(frozen=True)
class DisplayOptions:
    ipv4_reference_id: bool = False
    milliseconds: bool = False

    @property
    def time_unit(self) -> str:
        return " ms" if self.milliseconds else " seconds"

    def scale(self, seconds: float) -> float:
        return seconds * 1000 if self.milliseconds else seconds


def render_reference_id(reference_id: bytes, stratum: Stratum, ipv4: bool = False) -> str:
    """Render the reference identifier.

    Stratum 1 carries an ASCII clock source code; anything else is shown as
    hex. The dotted-decimal form is only a hint, the identifier is not
    necessarily an address.
    """
    if stratum.is_primary:
        return "".join(chr(b) for b in reference_id if b != 0)

    text = reference_id.hex().upper()
    if ipv4:
        text += " (IPv4 form: " + ".".join(str(b) for b in reference_id) + ")"
    return text


@dataclass(frozen=True)
class DecodedFields:
    leap_indicator: LeapIndicator
    version_number: int
    mode: Mode
    stratum: Stratum
    poll_interval: int
    precision: int
    root_delay: float
    root_dispersion: float
    reference_id: bytes
    reference_timestamp: NtpTimestamp
    origin_timestamp: NtpTimestamp
    receive_timestamp: NtpTimestamp
    transmit_timestamp: NtpTimestamp
    options: DisplayOptions = field(default_factory=DisplayOptions)

    @property
    def poll_interval_seconds(self) -> int:
        return 2 ** self.poll_interval

    @property
    def precision_seconds(self) -> float:
        return 2.0 ** self.precision

    def _scaled(self, seconds: float) -> str:
        return format_float(self.options.scale(seconds)) + self.options.time_unit

    def render(self) -> List[str]:
        """Display strings for all thirteen fields, in FIELD_ORDER."""
        return [
            self.leap_indicator.describe(),
            str(self.version_number),
            self.mode.describe(),
            self.stratum.describe(),
            f"{self.poll_interval_seconds} seconds",
            self._scaled(self.precision_seconds),
            self._scaled(self.root_delay),
            self._scaled(self.root_dispersion),
            render_reference_id(self.reference_id, self.stratum, self.options.ipv4_reference_id),
            self.reference_timestamp.describe(),
            self.origin_timestamp.describe(),
            self.receive_timestamp.describe(),
            self.transmit_timestamp.describe(),
        ]

    def rows(self) -> List[Tuple[str, str]]:
        return [(label, text) for (_attr, label), text in zip(FIELD_ORDER, self.render())]


def decode_packet(data: bytes, options: DisplayOptions = None) -> DecodedFields:
    """Decode an NTP reply.

    Args:
        data: Reply bytes; at least 48 are required, extra bytes are ignored
        options: Rendering options (defaults to seconds, no IPv4 hint)

    Returns:
        DecodedFields

    Raises:
        DecodeError: If the reply is shorter than 48 bytes
    """
    if options is None:
        options = DisplayOptions()
    if data is None or len(data) < PACKET_SIZE:
        size = 0 if data is None else len(data)
        raise DecodeError(f"NTP reply too short: {size} bytes (expected {PACKET_SIZE})")

    data = bytes(data[:PACKET_SIZE])
    leap, version, mode = unpack_header(data[0])
    precision = struct.unpack("!b", data[3:4])[0]

    fields = DecodedFields(
        leap_indicator=LeapIndicator(leap),
        version_number=version,
        mode=Mode(mode),
        stratum=Stratum(data[1]),
        poll_interval=data[2],
        precision=precision,
        root_delay=parse_short_format(data[4:8]),
        root_dispersion=parse_short_format(data[8:12]),
        reference_id=data[12:16],
        reference_timestamp=NtpTimestamp.from_bytes(data[16:24]),
        origin_timestamp=NtpTimestamp.from_bytes(data[24:32]),
        receive_timestamp=NtpTimestamp.from_bytes(data[32:40]),
        transmit_timestamp=NtpTimestamp.from_bytes(data[40:48]),
        options=options,
    )

    if log.isEnabledFor(logging.DEBUG):
        for label, text in fields.rows():
            log.debug("%s: %s", label, text)

    return fields
