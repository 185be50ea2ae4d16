"""
UI Bridge

The channels connecting the network and application threads to the
terminal renderer, and the style tables used to colour the lines that
cross them.

Channels:
    - log: status and error entries, rendered in the Log pane
    - chat: conversation lines, rendered in the Conversation pane
    - input: lines committed in the input pane, consumed by the command
      dispatcher

Styles are chosen by prefix. Each table is an ordered tuple of
(marker, style) pairs; the first marker the line starts with wins and a
line matching nothing is rendered unstyled.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from rich.text import Text

from .channel import Channel
from .errors import ChannelClosedError

logger = logging.getLogger(__name__)


class Marker(str, Enum):
    """Line prefixes that select a style."""

    ERROR = "[ERROR"
    INFO = "[INFO"
    DEBUG = "[DEBUG"
    PRIVATE = "(PM)"
    COMMAND = "/"


@dataclass(frozen=True)
class StyleTable:
    """
    Immutable prefix-to-style lookup.

    Attributes:
        rules: (marker, style) pairs in priority order
        default: Style used when no marker matches
    """

    rules: Tuple[Tuple[Marker, str], ...]
    default: str = ""

    def style_for(self, line: str) -> str:
        """Return the style of the first marker ``line`` starts with."""
        for marker, style in self.rules:
            if line.startswith(marker.value):
                return style
        return self.default

    def format(self, line: str) -> Text:
        """Build a styled Text for ``line``."""
        return Text(line, style=self.style_for(line))


LOG_STYLES = StyleTable(
    rules=(
        (Marker.ERROR, "bold red"),
        (Marker.INFO, "bold magenta"),
        (Marker.DEBUG, "bold cyan"),
    )
)

CHAT_STYLES = StyleTable(rules=((Marker.PRIVATE, "yellow"),))

# Lines typed by the user and echoed back into the chat pane
ECHO_STYLES = StyleTable(rules=((Marker.COMMAND, "bold green"),))


@dataclass
class UIBridge:
    """The three channels crossing the UI boundary."""

    log: Channel = field(default_factory=lambda: Channel("log"))
    chat: Channel = field(default_factory=lambda: Channel("chat"))
    input: Channel = field(default_factory=lambda: Channel("input"))

    def log_info(self, message: str) -> None:
        """Push an ``[INFO`` entry to the log pane."""
        self._log(Marker.INFO, message)

    def log_error(self, message: str) -> None:
        """Push an ``[ERROR`` entry to the log pane."""
        self._log(Marker.ERROR, message)

    def log_debug(self, message: str) -> None:
        """Push a ``[DEBUG`` entry to the log pane."""
        self._log(Marker.DEBUG, message)

    def _log(self, marker: Marker, message: str) -> None:
        try:
            self.log.send(f"{marker.value}] {message}")
        except ChannelClosedError:
            logger.debug("Log channel closed, dropping: %s", message)

    def close(self) -> None:
        """Close every channel that is still open."""
        for channel in (self.log, self.chat, self.input):
            if not channel.closed:
                channel.close()
