from simplentp.protocol import build_request, decode_packet, DecodedFields, DisplayOptions
from simplentp.transport import create_transport
from simplentp.utils.constants import PACKET_SIZE
from simplentp.utils.logger import get_logger

log = get_logger(__name__)


def query_server(host: str, port: int, timeout: float) -> bytes:
    """Send one client request and return the raw reply.

    No retries: any failure raises a TransportError subclass.
    """
    request = build_request()
    log.debug("Querying %s:%d (timeout %ss)", host, port, timeout)
    with create_transport(host, port, timeout) as transport:
        transport.write(request)
        return transport.read(PACKET_SIZE)


def probe(host: str, port: int, timeout: float, options: DisplayOptions = None) -> DecodedFields:
    reply = query_server(host, port, timeout)
    return decode_packet(reply, options)
