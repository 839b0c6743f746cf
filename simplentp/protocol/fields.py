from dataclasses import dataclass
from enum import Enum, IntEnum


class _DescribedEnum(IntEnum):
    def __new__(cls, value, description):
        obj = int.__new__(cls, value)
        obj._value_ = value
        obj.description = description
        return obj

    def describe(self) -> str:
        return f"{int(self)} ({self.description})"


class LeapIndicator(_DescribedEnum):
    NO_WARNING = 0, "No Warning"
    LAST_MINUTE_61 = 1, "Last minute of the day has 61 seconds"
    LAST_MINUTE_59 = 2, "Last minute of the day has 59 seconds"
    UNKNOWN = 3, "Unknown"


class Mode(_DescribedEnum):
    RESERVED = 0, "Reserved"
    SYMMETRIC_ACTIVE = 1, "Symmetric Active"
    SYMMETRIC_PASSIVE = 2, "Symmetric Passive"
    CLIENT = 3, "Client"
    SERVER = 4, "Server"
    BROADCAST = 5, "Broadcast"
    CONTROL = 6, "NTP Control Message"
    PRIVATE = 7, "Reserved for private use"


class StratumClass(Enum):
    UNSPECIFIED = "Unspecified or invalid"
    PRIMARY = "Primary Server"
    SECONDARY = "Secondary Server"
    UNSYNCHRONIZED = "Unsynchronized"
    RESERVED = "Reserved"

    @classmethod
    def for_level(cls, level: int) -> "StratumClass":
        if level == 0:
            return cls.UNSPECIFIED
        if level == 1:
            return cls.PRIMARY
        if 2 <= level <= 15:
            return cls.SECONDARY
        if level == 16:
            return cls.UNSYNCHRONIZED
        return cls.RESERVED


@dataclass(frozen=True)
class Stratum:
    level: int

    def __post_init__(self):
        if not 0 <= self.level <= 255:
            raise ValueError(f"stratum out of range: {self.level}")

    @property
    def kind(self) -> StratumClass:
        return StratumClass.for_level(self.level)

    @property
    def description(self) -> str:
        return self.kind.value

    @property
    def is_primary(self) -> bool:
        return self.kind is StratumClass.PRIMARY

    def describe(self) -> str:
        return f"{self.level} ({self.description})"
