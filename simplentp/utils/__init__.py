from .constants import (
    NTP_PORT, NTP_TIMEOUT, PACKET_SIZE, UNIX_TIME_OFFSET, MAX_PORT,
)
from .exceptions import (
    SimpleNtpException, ValidationError,
    TransportError, ResolutionError, QueryTimeoutError,
    ProtocolError, DecodeError,
)
from .logger import get_logger, configure_logging

__all__ = [
    'NTP_PORT', 'NTP_TIMEOUT', 'PACKET_SIZE', 'UNIX_TIME_OFFSET', 'MAX_PORT',
    'SimpleNtpException', 'ValidationError',
    'TransportError', 'ResolutionError', 'QueryTimeoutError',
    'ProtocolError', 'DecodeError',
    'get_logger', 'configure_logging',
]
