"""
termchat

A terminal chat client exchanging line-framed, numerically coded messages
with a remote peer.

Modules:
    - connection: framed line protocol over a TCP socket
    - channel: thread-safe FIFO channels with close semantics
    - pump: reader thread feeding received lines into a channel
    - bridge: the channels and style tables shared with the UI
    - commands: input-line dispatch (/connect, /pm, /shell)
    - ui: the Textual renderer
"""

from .bridge import CHAT_STYLES, ECHO_STYLES, LOG_STYLES, Marker, StyleTable, UIBridge
from .channel import Channel
from .config import ClientSettings
from .connection import FramedConnection
from .errors import (
    ChannelClosedError,
    EndOfStreamError,
    InvalidFrameError,
    InvalidHandleError,
    IOFaultError,
    TermchatError,
)
from .protocol import Frame
from .pump import IOPump, PumpState

__all__ = [
    # Core
    "FramedConnection",
    "Channel",
    "IOPump",
    "PumpState",
    "UIBridge",
    "Frame",
    "ClientSettings",
    # Formatting
    "Marker",
    "StyleTable",
    "LOG_STYLES",
    "CHAT_STYLES",
    "ECHO_STYLES",
    # Errors
    "TermchatError",
    "InvalidHandleError",
    "EndOfStreamError",
    "InvalidFrameError",
    "IOFaultError",
    "ChannelClosedError",
]
