import sys
from typing import List

import click
import typer
from rich.console import Console
from rich.panel import Panel

from simplentp import __version__
from simplentp.utils.logger import configure_logging
from .helpers import OutputHelper, EnvironmentManager, get_panel_box, CONSOLE_WIDTH
from .config import ConfigManager


KNOWN_COMMANDS = {'query', 'version'}
GLOBAL_FLAGS = {'--debug'}
HELP_FLAGS = {'--help', '-h'}


def _preprocess_query_shortcut(argv: List[str]) -> List[str]:
    """Turn ``simplentp HOST ...`` into ``simplentp query HOST ...``.

    Leading global flags stay in front of the inserted command.
    """
    args = list(argv)
    insert_at = 1
    while insert_at < len(args) and args[insert_at] in GLOBAL_FLAGS:
        insert_at += 1

    rest = args[insert_at:]
    if not rest:
        return args
    if rest[0] in KNOWN_COMMANDS or rest[0] in HELP_FLAGS:
        return args

    args.insert(insert_at, 'query')
    return args


def _handle_usage_error(e):
    console = Console(width=CONSOLE_WIDTH, file=sys.stderr)

    error_msg = str(e.format_message()) if hasattr(e, 'format_message') else str(e)

    cmd_name = None
    if e.ctx and e.ctx.info_name and e.ctx.info_name != 'simplentp':
        cmd_name = e.ctx.info_name

    if cmd_name:
        usage = f"[bold cyan]Usage:[/bold cyan] simplentp {cmd_name} [OPTIONS] [ARGS]..."
    else:
        usage = "[bold cyan]Usage:[/bold cyan] simplentp [OPTIONS] COMMAND [ARGS]..."

    console.print(Panel(
        f"{usage}\n\n[red]{error_msg}[/red]",
        title="Error",
        border_style="red",
        box=get_panel_box(),
        width=CONSOLE_WIDTH
    ))


app = typer.Typer(
    rich_markup_mode="rich",
    add_completion=False,
    no_args_is_help=False,
    pretty_exceptions_show_locals=False,
    pretty_exceptions_enable=False,
    help="Query an NTP server and show the decoded reply."
)


def _print_main_help():
    lines = []
    lines.append("[bold]Simple NTP query tool[/bold]")
    lines.append("[dim]Sends one client request and decodes every header field of the reply[/dim]")
    lines.append("")
    lines.append("[bold cyan]Usage:[/bold cyan]")
    lines.append("  simplentp [yellow][OPTIONS][/yellow] [green]COMMAND[/green] [[dim]ARGS[/dim]]...")
    lines.append("  simplentp [green]HOST[/green] [[dim]ARGS[/dim]]...   [dim]# same as 'query HOST'[/dim]")
    lines.append("")
    lines.append("[bold cyan]Global Options:[/bold cyan]")
    lines.append("  [yellow]--debug[/yellow]            Show diagnostic log output")
    lines.append("")
    lines.append("[bold cyan]Commands:[/bold cyan]")
    for cmd, desc in (
        ("query", "Query an NTP server (e.g. ntp.nict.jp, time.cloudflare.com, time.google.com)"),
        ("version", "Show simplentp version information"),
    ):
        lines.append(f"  [green]{cmd:<12}[/green] {desc}")
    lines.append("")
    lines.append("[dim]Do not execute many times in a short time![/dim]")
    lines.append("[dim]Use 'simplentp COMMAND --help' for detailed help on each command.[/dim]")

    OutputHelper.print_panel(
        "\n".join(lines),
        title="simplentp",
        border_style="bright_blue"
    )


# =============================================================================
# App Callback
# =============================================================================

@app.callback(invoke_without_command=True)
def cli(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Show diagnostic log output",
        is_eager=True
    ),
):
    """
    Query an NTP server and show the decoded reply.
    """
    configure_logging(debug or ConfigManager.debug_enabled())

    if ctx.invoked_subcommand is None:
        _print_main_help()
        raise typer.Exit()


# =============================================================================
# Import all commands to register them with the app
# =============================================================================
from .commands import query, utility

# These imports are for side-effect (command registration)
_command_modules = (query, utility)


# =============================================================================
# Main Entry Point
# =============================================================================

def main():
    # Handle -v / --version
    if len(sys.argv) == 2 and sys.argv[1] in ('--version', '-v'):
        OutputHelper.print_panel(
            f"[bright_blue]simplentp[/bright_blue] version [bright_green]{__version__}[/bright_green]",
            title="Version",
            border_style="green"
        )
        sys.exit(0)

    sys.argv = _preprocess_query_shortcut(sys.argv)

    try:
        EnvironmentManager.load_env_file()
        result = app(standalone_mode=False)
        exit_code = result if isinstance(result, int) else 0
    except click.exceptions.UsageError as e:
        _handle_usage_error(e)
        exit_code = 2
    except click.exceptions.Abort:
        print()
        exit_code = 1
    except KeyboardInterrupt:
        print()
        exit_code = 130
    sys.exit(exit_code)


if __name__ == '__main__':
    main()
