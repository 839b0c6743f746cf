"""
Configuration for the simplentp CLI.

Handles:
- Environment variable defaults (SIMPLENTP_*)
- Input policy for host, port and timeout
- Resolution order: CLI option -> environment -> built-in default
"""

import os
from dataclasses import dataclass
from typing import Optional

from simplentp.protocol import DisplayOptions
from simplentp.utils.constants import NTP_PORT, NTP_TIMEOUT, MAX_PORT
from simplentp.utils.exceptions import ValidationError


ENV_HOST = "SIMPLENTP_HOST"
ENV_PORT = "SIMPLENTP_PORT"
ENV_TIMEOUT = "SIMPLENTP_TIMEOUT"
ENV_IPV4 = "SIMPLENTP_IPV4"
ENV_MS = "SIMPLENTP_MS"
ENV_DEBUG = "SIMPLENTP_DEBUG"

_TRUE_VALUES = {"1", "true", "yes", "on"}


# ============================================================================
# Input Policy
# ============================================================================

def resolve_host(host: Optional[str]) -> str:
    host = (host or "").strip()
    if not host:
        raise ValidationError("NTP server host is empty!")
    return host


def resolve_port(port: Optional[int]) -> int:
    """Out-of-range ports fall back to the NTP port."""
    if port is None or port < 0 or port > MAX_PORT:
        return NTP_PORT
    return port


def resolve_timeout(timeout: Optional[int]) -> int:
    """Zero or negative timeouts fall back to the default."""
    if timeout is None or timeout <= 0:
        return NTP_TIMEOUT
    return timeout


# ============================================================================
# Environment
# ============================================================================

def env_int(name: str) -> Optional[int]:
    value = os.environ.get(name, "").strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def env_bool(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUE_VALUES


# ============================================================================
# Query Configuration
# ============================================================================

@dataclass(frozen=True)
class QueryConfig:
    host: str
    port: int = NTP_PORT
    timeout: int = NTP_TIMEOUT
    ipv4_reference_id: bool = False
    milliseconds: bool = False

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    def display_options(self) -> DisplayOptions:
        return DisplayOptions(
            ipv4_reference_id=self.ipv4_reference_id,
            milliseconds=self.milliseconds,
        )


class ConfigManager:
    """Builds a QueryConfig from CLI values and the environment."""

    @staticmethod
    def resolve(host: str = None, port: int = None, timeout: int = None,
                ipv4: bool = False, milliseconds: bool = False) -> QueryConfig:
        if host is None or not host.strip():
            host = os.environ.get(ENV_HOST)
        if port is None:
            port = env_int(ENV_PORT)
        if timeout is None:
            timeout = env_int(ENV_TIMEOUT)

        return QueryConfig(
            host=resolve_host(host),
            port=resolve_port(port),
            timeout=resolve_timeout(timeout),
            ipv4_reference_id=ipv4 or env_bool(ENV_IPV4),
            milliseconds=milliseconds or env_bool(ENV_MS),
        )

    @staticmethod
    def debug_enabled() -> bool:
        return env_bool(ENV_DEBUG)
