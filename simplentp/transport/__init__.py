from .base import Transport
from .udp import UdpTransport


def create_transport(host: str, port: int, timeout: float) -> Transport:
    """Create a UDP transport to an NTP server.

    Args:
        host: Server host name or address (e.g., 'time.google.com', '192.0.2.1')
        port: UDP port
        timeout: Deadline for the whole exchange, in seconds (must be positive)

    Returns:
        UdpTransport instance, already connected
    """
    return UdpTransport(host=host, port=port, timeout=timeout)


__all__ = [
    'Transport',
    'UdpTransport',
    'create_transport',
]
