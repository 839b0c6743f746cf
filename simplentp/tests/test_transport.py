import socket
import threading
import time
import unittest
from unittest import mock

from simplentp.client import probe, query_server
from simplentp.protocol import DisplayOptions
from simplentp.transport import UdpTransport, create_transport
from simplentp.utils.exceptions import QueryTimeoutError, ResolutionError, TransportError


REPLY = bytes([0x24, 0x01, 0x06, 0xEC]) + bytes(8) + b"GPS\x00" + bytes(32)


class _Responder(threading.Thread):
    """Answers a single datagram on 127.0.0.1 with a canned reply."""

    def __init__(self, reply: bytes):
        super().__init__(daemon=True)
        self.reply = reply
        self.request = None
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self.sock.bind(("127.0.0.1", 0))
        self.sock.settimeout(5)
        self.port = self.sock.getsockname()[1]

    def run(self):
        try:
            data, addr = self.sock.recvfrom(512)
            self.request = data
            self.sock.sendto(self.reply, addr)
        finally:
            self.sock.close()


class TestLoopbackExchange(unittest.TestCase):
    def test_query_server_round_trip(self):
        responder = _Responder(REPLY)
        responder.start()
        reply = query_server("127.0.0.1", responder.port, 5)
        responder.join(5)
        self.assertEqual(reply, REPLY)
        self.assertEqual(responder.request, b"\x1b" + bytes(47))

    def test_probe_decodes_reply(self):
        responder = _Responder(REPLY)
        responder.start()
        fields = probe("127.0.0.1", responder.port, 5, DisplayOptions())
        responder.join(5)
        self.assertEqual(fields.stratum.level, 1)
        self.assertEqual(fields.render()[8], "GPS")

    def test_short_reply_is_returned_as_is(self):
        responder = _Responder(b"\x24\x01")
        responder.start()
        reply = query_server("127.0.0.1", responder.port, 5)
        responder.join(5)
        self.assertEqual(reply, b"\x24\x01")


class TestTransportErrors(unittest.TestCase):
    def test_silent_peer_times_out(self):
        silent = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        silent.bind(("127.0.0.1", 0))
        port = silent.getsockname()[1]
        try:
            started = time.monotonic()
            with self.assertRaises(QueryTimeoutError):
                query_server("127.0.0.1", port, 1)
            self.assertLess(time.monotonic() - started, 3.0)
        finally:
            silent.close()

    def test_closed_port_fails_without_hanging(self):
        probe_sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        probe_sock.bind(("127.0.0.1", 0))
        port = probe_sock.getsockname()[1]
        probe_sock.close()

        started = time.monotonic()
        # Either ICMP port unreachable (refused) or a plain timeout
        with self.assertRaises(TransportError):
            query_server("127.0.0.1", port, 1)
        self.assertLess(time.monotonic() - started, 3.0)

    def test_resolution_failure(self):
        with mock.patch(
            "simplentp.transport.udp.socket.getaddrinfo",
            side_effect=socket.gaierror(-2, "Name or service not known"),
        ):
            with self.assertRaises(ResolutionError) as cm:
                create_transport("no-such-host.invalid", 123, 1)
        self.assertIn("no-such-host.invalid", cm.exception.message)
        self.assertIsInstance(cm.exception, TransportError)

    def test_expired_deadline_fails_before_io(self):
        transport = UdpTransport("127.0.0.1", 123, 1)
        try:
            transport._deadline = time.monotonic() - 1
            with self.assertRaises(QueryTimeoutError):
                transport.write(b"\x1b" + bytes(47))
        finally:
            transport.close()

    def test_timeout_must_be_positive(self):
        for value in (0, -1):
            with self.assertRaises(ValueError):
                UdpTransport("127.0.0.1", 123, value)

    def test_oversized_timeout_is_a_transport_error(self):
        with self.assertRaises(TransportError) as cm:
            UdpTransport("127.0.0.1", 123, 99999999999)
        self.assertIn("Unusable timeout", cm.exception.message)
        self.assertIsInstance(cm.exception.__cause__, (OverflowError, ValueError))

    def test_oversized_timeout_on_write_is_a_transport_error(self):
        transport = UdpTransport("127.0.0.1", 123, 1)
        try:
            transport._deadline = time.monotonic() + 99999999999
            with self.assertRaises(TransportError):
                transport.write(b"\x1b" + bytes(47))
        finally:
            transport.close()


class TestTransportLifecycle(unittest.TestCase):
    def test_context_manager_closes_socket(self):
        with create_transport("127.0.0.1", 123, 1) as transport:
            self.assertTrue(transport.is_open)
        self.assertFalse(transport.is_open)

    def test_close_is_idempotent(self):
        transport = create_transport("127.0.0.1", 123, 1)
        transport.close()
        transport.close()
        self.assertFalse(transport.is_open)

    def test_closed_transport_rejects_io(self):
        transport = create_transport("127.0.0.1", 123, 1)
        transport.close()
        with self.assertRaises(TransportError):
            transport.read()

    def test_socket_closed_on_failure(self):
        silent = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        silent.bind(("127.0.0.1", 0))
        port = silent.getsockname()[1]
        try:
            with mock.patch.object(UdpTransport, "close", autospec=True, side_effect=UdpTransport.close) as close:
                with self.assertRaises(QueryTimeoutError):
                    query_server("127.0.0.1", port, 1)
                self.assertTrue(close.called)
        finally:
            silent.close()


if __name__ == "__main__":
    unittest.main()
