"""Fixed-point conversions for NTP short and timestamp formats.

Short format is 16.16 unsigned seconds, timestamp format is 32.32 unsigned
seconds since 1900-01-01 00:00:00 UTC.
"""
import struct
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Tuple

from simplentp.utils.constants import UNIX_TIME_OFFSET

SHORT_FRACTION_SCALE = 2 ** -16
TIMESTAMP_FRACTION_SCALE = 2 ** -32
NANOSECONDS = 1_000_000_000

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_short_format(data: bytes) -> float:
    seconds, fraction = struct.unpack("!HH", data[:4])
    return seconds + fraction * SHORT_FRACTION_SCALE


def parse_timestamp_format(data: bytes) -> float:
    seconds, fraction = struct.unpack("!II", data[:8])
    return seconds + fraction * TIMESTAMP_FRACTION_SCALE


def fraction_to_nanoseconds(fraction: int) -> int:
    # round(fraction / 2**32 * 1e9), half-up, in exact integer arithmetic
    return (fraction * NANOSECONDS + (1 << 31)) >> 32


def parse_timestamp_split(data: bytes) -> Tuple[int, int]:
    """Return (NTP seconds, nanoseconds) for an 8-byte timestamp."""
    seconds, fraction = struct.unpack("!II", data[:8])
    return seconds, fraction_to_nanoseconds(fraction)


def ntp_to_iso8601(seconds: int, nanoseconds: int) -> str:
    """Render NTP seconds + nanoseconds as extended ISO-8601 in UTC.

    The NTP-to-Unix offset is subtracted here, so values before 1970 (such
    as an all-zero origin timestamp) come out as 1900 dates.
    """
    seconds += nanoseconds // NANOSECONDS
    nanoseconds %= NANOSECONDS
    dt = _UNIX_EPOCH + timedelta(seconds=seconds - UNIX_TIME_OFFSET)
    return (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
        f"T{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"
        f".{nanoseconds:09d}Z"
    )


def format_float(value: float) -> str:
    """Shortest round-trip decimal in positional notation, no trailing '.0'."""
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


@dataclass(frozen=True)
class NtpTimestamp:
    seconds: int
    fraction: int

    @classmethod
    def from_bytes(cls, data: bytes) -> "NtpTimestamp":
        seconds, fraction = struct.unpack("!II", data[:8])
        return cls(seconds, fraction)

    @property
    def value(self) -> float:
        return self.seconds + self.fraction * TIMESTAMP_FRACTION_SCALE

    @property
    def nanoseconds(self) -> int:
        return fraction_to_nanoseconds(self.fraction)

    @property
    def unix_seconds(self) -> int:
        return self.seconds - UNIX_TIME_OFFSET

    def to_iso8601(self) -> str:
        return ntp_to_iso8601(self.seconds, self.nanoseconds)

    def describe(self) -> str:
        return f"{format_float(self.value)} ({self.to_iso8601()})"
