"""Logger setup shared by the library and the CLI."""
import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "simplentp"


def get_logger(name: str = None) -> logging.Logger:
    """Return a logger under the ``simplentp`` namespace."""
    if not name or name == ROOT_LOGGER:
        return logging.getLogger(ROOT_LOGGER)
    if name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure_logging(debug: bool = False) -> logging.Logger:
    """Attach a RichHandler to the package logger (once) and set its level."""
    log = logging.getLogger(ROOT_LOGGER)
    if not any(isinstance(h, RichHandler) for h in log.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        log.addHandler(handler)
        log.propagate = False
    log.setLevel(logging.DEBUG if debug else logging.WARNING)
    return log
