"""
Error Types

Exceptions raised by the connection wrapper and the channels that carry
data between the network threads and the terminal UI.
"""


class TermchatError(Exception):
    """Base class for all termchat errors."""


class InvalidHandleError(TermchatError, ValueError):
    """Raised when a connection was opened without a stream handle."""


class EndOfStreamError(TermchatError, ConnectionError):
    """Raised when the peer closed the stream cleanly."""


class IOFaultError(TermchatError, ConnectionError):
    """Raised on any other transport failure while reading or writing."""


class ChannelClosedError(TermchatError):
    """Raised when sending on, or closing again, a closed channel."""


class InvalidFrameError(TermchatError, ValueError):
    """Raised when a payload would span more than one frame."""
