"""
Client Settings

Configuration is read from the environment once at start-up; command-line
options given to ``termchat`` take precedence.

Environment:
    TERMCHAT_NAME             Name announced to peers (default: login name)
    TERMCHAT_LOG_FILE         Diagnostic log file (default: termchat.log)
    TERMCHAT_LOG_LEVEL        Logging level name (default: WARNING)
    TERMCHAT_CONNECT_TIMEOUT  Seconds allowed for dialing (default: 5)
"""

import getpass
import logging
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional, Tuple

DEFAULT_LOG_FILE = "termchat.log"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_CONNECT_TIMEOUT = 5.0


def _default_name() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "anonymous"


def parse_log_level(value: str) -> int:
    """
    Convert a level name such as ``"info"`` to its logging constant.

    Raises:
        ValueError: If the name is not a logging level
    """
    level = logging.getLevelName(value.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value!r}")
    return level


def parse_address(value: str) -> Tuple[str, int]:
    """
    Split ``host:port`` into its parts.

    Raises:
        ValueError: If the port is missing or not a valid number
    """
    host, sep, port = value.rpartition(":")
    if not sep or not host:
        raise ValueError(f"Expected HOST:PORT, got {value!r}")
    try:
        port_number = int(port)
    except ValueError:
        raise ValueError(f"Invalid port in {value!r}") from None
    if not 0 < port_number < 65536:
        raise ValueError(f"Port out of range in {value!r}")
    return host, port_number


@dataclass(frozen=True)
class ClientSettings:
    """
    Runtime configuration of the client.

    Attributes:
        name: Name announced to peers after connecting
        log_file: File diagnostics are appended to
        log_level: Logging level constant
        connect_timeout: Seconds allowed for dialing a peer
        connect_to: Optional (host, port) dialed at start-up
    """

    name: str
    log_file: str = DEFAULT_LOG_FILE
    log_level: int = logging.WARNING
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    connect_to: Optional[Tuple[str, int]] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientSettings":
        """
        Build settings from environment variables.

        Raises:
            ValueError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ

        timeout_raw = env.get("TERMCHAT_CONNECT_TIMEOUT", str(DEFAULT_CONNECT_TIMEOUT))
        try:
            timeout = float(timeout_raw)
        except ValueError:
            raise ValueError(
                f"TERMCHAT_CONNECT_TIMEOUT must be a number, got {timeout_raw!r}"
            ) from None
        if timeout <= 0:
            raise ValueError("TERMCHAT_CONNECT_TIMEOUT must be positive")

        return cls(
            name=env.get("TERMCHAT_NAME") or _default_name(),
            log_file=env.get("TERMCHAT_LOG_FILE", DEFAULT_LOG_FILE),
            log_level=parse_log_level(env.get("TERMCHAT_LOG_LEVEL", DEFAULT_LOG_LEVEL)),
            connect_timeout=timeout,
        )

    def with_overrides(self, **changes) -> "ClientSettings":
        """Return a copy with every non-None keyword applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
