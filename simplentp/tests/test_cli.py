import socket
import unittest
from unittest import mock

from typer.testing import CliRunner

from simplentp import __version__
from simplentp.cli.app import app, _preprocess_query_shortcut
from simplentp.utils.exceptions import QueryTimeoutError, ResolutionError


REPLY = (
    bytes([0x24, 0x02, 0x06, 0xEC])
    + bytes([0x00, 0x01, 0x80, 0x00])
    + bytes([0x00, 0x00, 0x40, 0x00])
    + bytes([0x01, 0x02, 0x03, 0x04])
    + bytes(24)
    + bytes.fromhex("83AA7E80" "80000000")
)

_CLEAN_ENV = {
    "SIMPLENTP_HOST": None,
    "SIMPLENTP_PORT": None,
    "SIMPLENTP_TIMEOUT": None,
    "SIMPLENTP_IPV4": None,
    "SIMPLENTP_MS": None,
    "SIMPLENTP_DEBUG": None,
}


class TestQueryCommand(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()

    def _invoke(self, args, **kwargs):
        return self.runner.invoke(app, args, env=_CLEAN_ENV, **kwargs)

    def test_prints_decoded_fields(self):
        with mock.patch("simplentp.cli.commands.query.query_server", return_value=REPLY) as query:
            result = self._invoke(["query", "time.example.org", "-p", "1123", "-t", "3"])

        self.assertEqual(result.exit_code, 0, result.output)
        query.assert_called_once_with("time.example.org", 1123, 3)
        self.assertIn("time.example.org:1123", result.output)
        self.assertIn("4 (Server)", result.output)
        self.assertIn("2 (Secondary Server)", result.output)
        self.assertIn("64 seconds", result.output)
        self.assertIn("1.5 seconds", result.output)
        self.assertIn("01020304", result.output)
        self.assertNotIn("IPv4 form", result.output)
        self.assertIn("2208988800.5 (1970-01-01T00:00:00.500000000Z)", result.output)
        self.assertIn("This value is normally 0 when you are using this tool.", result.output)

    def test_display_options(self):
        with mock.patch("simplentp.cli.commands.query.query_server", return_value=REPLY):
            result = self._invoke(["query", "time.example.org", "--ipv4", "--ms"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("01020304 (IPv4 form: 1.2.3.4)", result.output)
        self.assertIn("1500 ms", result.output)
        self.assertIn("250 ms", result.output)

    def test_invalid_port_and_timeout_use_defaults(self):
        with mock.patch("simplentp.cli.commands.query.query_server", return_value=REPLY) as query:
            result = self._invoke(["query", "time.example.org", "--port=70000", "--timeout=-1"])

        self.assertEqual(result.exit_code, 0, result.output)
        query.assert_called_once_with("time.example.org", 123, 10)

    def test_raw_output(self):
        with mock.patch("simplentp.cli.commands.query.query_server", return_value=REPLY):
            result = self._invoke(["query", "time.example.org", "--raw"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("240206EC", result.output)
        self.assertIn("48 bytes", result.output)

    def test_empty_host(self):
        with mock.patch("simplentp.cli.commands.query.query_server") as query:
            result = self._invoke(["query", "  "])

        self.assertEqual(result.exit_code, 1)
        self.assertIn("NTP server host is empty!", result.output)
        query.assert_not_called()

    def test_transport_error(self):
        error = QueryTimeoutError("No reply from time.example.org:123 within 10s")
        with mock.patch("simplentp.cli.commands.query.query_server", side_effect=error):
            result = self._invoke(["query", "time.example.org"])

        self.assertEqual(result.exit_code, 1)
        self.assertIn("An error occurred during the request", result.output)
        self.assertIn("No reply from time.example.org:123", result.output)

    def test_resolution_error(self):
        error = ResolutionError("Failed to resolve nowhere.invalid")
        with mock.patch("simplentp.cli.commands.query.query_server", side_effect=error):
            result = self._invoke(["query", "nowhere.invalid"])

        self.assertEqual(result.exit_code, 1)
        self.assertIn("Failed to resolve nowhere.invalid", result.output)

    def test_short_reply(self):
        with mock.patch("simplentp.cli.commands.query.query_server", return_value=REPLY[:20]):
            result = self._invoke(["query", "time.example.org"])

        self.assertEqual(result.exit_code, 1)
        self.assertIn("An error occurred during the parsing", result.output)

    def test_huge_timeout_shows_error_panel(self):
        silent = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        silent.bind(("127.0.0.1", 0))
        port = silent.getsockname()[1]
        try:
            result = self._invoke(["query", "127.0.0.1", "-p", str(port), "-t", "99999999999"])
        finally:
            silent.close()

        self.assertEqual(result.exit_code, 1)
        self.assertIsInstance(result.exception, SystemExit)
        self.assertIn("An error occurred during the request", result.output)
        self.assertIn("Unusable timeout", result.output)


class TestOtherCommands(unittest.TestCase):
    def test_version(self):
        result = CliRunner().invoke(app, ["version"], env=_CLEAN_ENV)
        self.assertEqual(result.exit_code, 0)
        self.assertIn(__version__, result.output)

    def test_no_command_shows_help(self):
        result = CliRunner().invoke(app, [], env=_CLEAN_ENV)
        self.assertEqual(result.exit_code, 0)
        self.assertIn("query", result.output)


class TestQueryShortcut(unittest.TestCase):
    def test_host_first(self):
        self.assertEqual(
            _preprocess_query_shortcut(["simplentp", "ntp.nict.jp", "-p", "123"]),
            ["simplentp", "query", "ntp.nict.jp", "-p", "123"],
        )

    def test_options_first(self):
        self.assertEqual(
            _preprocess_query_shortcut(["simplentp", "--ms", "ntp.nict.jp"]),
            ["simplentp", "query", "--ms", "ntp.nict.jp"],
        )

    def test_global_flag_stays_in_front(self):
        self.assertEqual(
            _preprocess_query_shortcut(["simplentp", "--debug", "ntp.nict.jp"]),
            ["simplentp", "--debug", "query", "ntp.nict.jp"],
        )

    def test_known_commands_untouched(self):
        for argv in (
            ["simplentp"],
            ["simplentp", "version"],
            ["simplentp", "--help"],
            ["simplentp", "query", "ntp.nict.jp"],
            ["simplentp", "--debug", "query", "ntp.nict.jp"],
            ["simplentp", "--debug"],
        ):
            self.assertEqual(_preprocess_query_shortcut(argv), argv)


if __name__ == "__main__":
    unittest.main()
