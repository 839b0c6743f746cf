"""Output formatting and display utilities."""
import sys

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import get_panel_box, CONSOLE_WIDTH
from simplentp.utils.exceptions import (
    SimpleNtpException, ValidationError, TransportError, DecodeError,
)


# Guidance shown under a field value
FIELD_HINTS = {
    "Origin Timestamp": "This value is normally 0 when you are using this tool.",
}


def format_hex_words(data: bytes) -> str:
    """Format bytes as space separated 32-bit words, 4 words per line."""
    words = [data[i:i + 4].hex().upper() for i in range(0, len(data), 4)]
    lines = [" ".join(words[i:i + 4]) for i in range(0, len(words), 4)]
    return "\n".join(lines)


class OutputHelper:
    """Output formatting and display utilities."""

    @staticmethod
    def _get_console(stderr: bool = False) -> Console:
        # Built per call so redirected streams (tests, pipes) are honoured
        return Console(width=CONSOLE_WIDTH, file=sys.stderr if stderr else sys.stdout, legacy_windows=False)

    @staticmethod
    def print_panel(content, title: str = "", border_style: str = "blue", stderr: bool = False):
        """Print content in a rich panel box."""
        OutputHelper._get_console(stderr).print(Panel(content, title=title, title_align="left", border_style=border_style, box=get_panel_box(), expand=True, width=CONSOLE_WIDTH))

    @staticmethod
    def create_fields_table(rows) -> Table:
        """Two-column table of (label, value) rows."""
        table = Table(show_header=False, box=None, pad_edge=False, expand=True)
        table.add_column("Field", style="bright_cyan", no_wrap=True)
        table.add_column("Value", overflow="fold")
        for label, value in rows:
            text = escape(value)
            hint = FIELD_HINTS.get(label)
            if hint:
                text += f"\n[dim]{hint}[/dim]"
            table.add_row(f"{label}:", text)
        return table

    @staticmethod
    def print_fields(rows, title: str = "NTP Response"):
        OutputHelper.print_panel(OutputHelper.create_fields_table(rows), title=title, border_style="green")

    @staticmethod
    def print_raw(data: bytes, title: str = "Raw Reply"):
        OutputHelper.print_panel(
            f"[dim]{len(data)} bytes[/dim]\n{format_hex_words(data)}",
            title=title,
            border_style="dim",
        )

    @staticmethod
    def handle_error(error: Exception) -> bool:
        """
        Show an error panel for a failed query.

        Args:
            error: The exception to handle

        Returns:
            True if error was handled, False if it should be re-raised
        """
        if not isinstance(error, SimpleNtpException):
            return False

        if isinstance(error, ValidationError):
            message = escape(error.message)
        elif isinstance(error, TransportError):
            message = f"An error occurred during the request:\n{escape(error.message)}"
        elif isinstance(error, DecodeError):
            message = f"An error occurred during the parsing:\n{escape(error.message)}"
        else:
            message = escape(error.message)

        OutputHelper.print_panel(
            message,
            title="Error",
            border_style="red",
            stderr=True,
        )
        return True
