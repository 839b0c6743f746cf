from .config import (
    QueryConfig, ConfigManager,
    resolve_host, resolve_port, resolve_timeout,
)
from .app import app, main

__all__ = [
    'QueryConfig', 'ConfigManager',
    'resolve_host', 'resolve_port', 'resolve_timeout',
    'app', 'main'
]
