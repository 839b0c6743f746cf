from typing import Optional

import typer

from simplentp.client import query_server
from simplentp.protocol import decode_packet
from simplentp.utils.exceptions import SimpleNtpException
from simplentp.utils.logger import get_logger
from ..helpers import OutputHelper
from ..config import ConfigManager
from ..app import app

log = get_logger(__name__)


@app.command(name="query")
def query_cmd(
    host: Optional[str] = typer.Argument(
        None,
        help="NTP server host (e.g. ntp.nict.jp, time.cloudflare.com, time.google.com, time.windows.com)",
        show_default=False
    ),
    port: Optional[int] = typer.Option(
        None,
        "--port", "-p",
        help="UDP port (default 123; out-of-range values fall back to 123)",
        show_default=False
    ),
    timeout: Optional[int] = typer.Option(
        None,
        "--timeout", "-t",
        help="Timeout in seconds (default 10; zero or negative falls back to 10)",
        show_default=False
    ),
    ipv4: bool = typer.Option(
        False,
        "--ipv4", "-4",
        help="Display IPv4 form of reference ID (e.g. 1942E605 -> 25.66.230.5). "
             "The reference ID is NOT always an IPv4 address, see RFC 5905 7.3."
    ),
    milliseconds: bool = typer.Option(
        False,
        "--ms", "-m",
        help="Display precision, root delay and root dispersion in milliseconds (not the poll interval)"
    ),
    raw: bool = typer.Option(
        False,
        "--raw",
        help="Also print the raw reply as hex"
    ),
):
    """
    Query an NTP server and show every field of its reply.
    """
    try:
        config = ConfigManager.resolve(
            host=host,
            port=port,
            timeout=timeout,
            ipv4=ipv4,
            milliseconds=milliseconds,
        )
        reply = query_server(config.host, config.port, config.timeout)
        if raw:
            OutputHelper.print_raw(reply)
        fields = decode_packet(reply, config.display_options())
    except SimpleNtpException as e:
        log.debug("Query failed: %s", e)
        OutputHelper.handle_error(e)
        raise typer.Exit(1)

    OutputHelper.print_fields(fields.rows(), title=config.address)
