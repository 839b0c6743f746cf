from simplentp import __version__
from ..helpers import OutputHelper
from ..app import app


@app.command(name="version")
def version_cmd():
    """
    Show simplentp version information.

    Alias: simplentp -v
    """
    OutputHelper.print_panel(
        f"simplentp [green]{__version__}[/green]",
        title="Version",
        border_style="cyan"
    )
