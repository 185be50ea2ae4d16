"""
Framed Connection

This module wraps a TCP socket in a line-oriented protocol. Every frame is
a single line of text terminated by ``\\n`` and optionally prefixed by a
numeric status code and one space::

    220 ready\\n
    (PM) bob: hi\\n

Architecture:
    - Reads go through a buffered reader owned by the connection and are
      only ever issued by one thread (the I/O pump)
    - Writes send the whole frame with a single sendall() and are issued by
      the application thread
    - The two directions share no lock and fail independently
    - Nothing is retried; callers decide what to do with a failure

Usage:
    conn = FramedConnection.dial("server", "127.0.0.1", 2000)
    conn.write_coded(220, "%s", "alice")
    line = conn.read_line()
    conn.close()
"""

import logging
import socket
from typing import Any, BinaryIO, Optional

from .channel import Channel
from .errors import (
    EndOfStreamError,
    InvalidFrameError,
    InvalidHandleError,
    IOFaultError,
)

logger = logging.getLogger(__name__)

ENCODING = "utf-8"


class FramedConnection:
    """
    Line-framed wrapper around a connected socket.

    Attributes:
        name: Label for this connection (peer name or address)
        closed: True once the socket has been released or the peer
                reported end-of-data
        notifications: Channel closed exactly once when the connection is
                       torn down
    """

    def __init__(self, name: str, sock: Optional[socket.socket]):
        """
        Wrap a live socket.

        A missing socket leaves the connection inert: every read or write
        raises InvalidHandleError.

        Args:
            name: Label for this connection
            sock: Connected socket, exclusively owned from now on
        """
        self.name = name
        self.closed = False
        self.notifications = Channel(f"{name}-notifications")
        self._sock: Optional[socket.socket] = None
        self._reader: Optional[BinaryIO] = None

        if sock is None:
            logger.warning("Connection '%s' opened without a socket", name)
            return

        self._sock = sock
        self._reader = sock.makefile("rb")

    @classmethod
    def dial(
        cls,
        name: str,
        host: str,
        port: int,
        timeout: Optional[float] = None,
    ) -> "FramedConnection":
        """
        Open a TCP connection to a peer.

        Args:
            name: Label for the new connection
            host: Peer host name or address
            port: Peer port
            timeout: Seconds allowed for connecting; reads stay blocking

        Raises:
            IOFaultError: If the connection could not be established
        """
        logger.info("Dialing %s:%s", host, port)
        try:
            sock = socket.create_connection((host, port), timeout=timeout)
        except OSError as e:
            raise IOFaultError(f"Could not connect to {host}:{port}: {e}") from e
        sock.settimeout(None)
        return cls(name, sock)

    @classmethod
    def accept(cls, name: str, listener: socket.socket) -> "FramedConnection":
        """
        Accept one peer from a listening socket.

        Raises:
            IOFaultError: If accept() fails
        """
        try:
            sock, address = listener.accept()
        except OSError as e:
            raise IOFaultError(f"Accept failed: {e}") from e
        logger.info("Accepted connection '%s' from %s", name, address)
        return cls(name, sock)

    def read_line(self) -> str:
        """
        Block until one full line is available and return it.

        Exactly one trailing ``\\r\\n`` or ``\\n`` is stripped; a ``\\r``
        anywhere else is kept.

        Returns:
            str: The decoded line

        Raises:
            InvalidHandleError: If the connection has no socket
            EndOfStreamError: If the peer closed the stream; ``closed`` is
                              set before raising
            IOFaultError: On any other transport error
        """
        if self._reader is None:
            raise InvalidHandleError(f"Connection '{self.name}' has no socket")
        if self.closed:
            raise IOFaultError(f"Connection '{self.name}' is closed")

        try:
            data = self._reader.readline()
        except (OSError, ValueError) as e:
            # ValueError: the reader was closed under us by close()
            raise IOFaultError(f"Read from '{self.name}' failed: {e}") from e

        if not data.endswith(b"\n"):
            if data:
                logger.debug(
                    "Discarding %d unterminated bytes from '%s'",
                    len(data),
                    self.name,
                )
            self.closed = True
            raise EndOfStreamError(f"Connection '{self.name}' reached end of stream")

        if data.endswith(b"\r\n"):
            data = data[:-2]
        else:
            data = data[:-1]
        return data.decode(ENCODING, errors="replace")

    def write_coded(self, code: int, fmt: str, *args: Any) -> int:
        """
        Send one frame: ``"<code> <fmt % args>\\n"``.

        The format is only interpolated when arguments are given, so a
        literal ``%`` in a bare message is sent unchanged.

        Args:
            code: Numeric status code
            fmt: Payload or %-style format string
            *args: Values interpolated into fmt

        Returns:
            int: Number of bytes written

        Raises:
            InvalidHandleError: If the connection has no socket
            InvalidFrameError: If the payload contains a line feed before
                               its end
            IOFaultError: If the connection is closed or the write failed
        """
        if self._sock is None:
            raise InvalidHandleError(f"Connection '{self.name}' has no socket")
        if self.closed:
            raise IOFaultError(f"Connection '{self.name}' is closed")

        payload = fmt % args if args else fmt
        if payload.endswith("\n"):
            payload = payload[:-1]
        # A carriage return is never sent in front of the terminator
        payload = payload.rstrip("\r")
        if "\n" in payload:
            raise InvalidFrameError(
                f"Payload for '{self.name}' contains an embedded line feed"
            )
        frame = f"{code} {payload}\n"
        data = frame.encode(ENCODING)

        try:
            self._sock.sendall(data)
        except OSError as e:
            raise IOFaultError(f"Write to '{self.name}' failed: {e}") from e
        return len(data)

    def close(self) -> None:
        """
        Release the socket and signal the notification channel.

        Calling close() twice is a caller error: the second call raises
        ChannelClosedError from the notification channel.

        A pending read_line() in another thread is unblocked and fails with
        EndOfStreamError or IOFaultError.
        """
        self.notifications.close()
        self.closed = True

        if self._sock is None:
            return

        try:
            self._sock.shutdown(socket.SHUT_RDWR)
        except OSError as e:
            # Peer may already be gone (ENOTCONN); release anyway.
            logger.debug("Shutdown of '%s' failed: %s", self.name, e)

        try:
            self._reader.close()
            self._sock.close()
        except OSError as e:
            logger.error("Failed to close connection '%s': %s", self.name, e)
        logger.info("Connection '%s' closed", self.name)

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<FramedConnection {self.name!r} {state}>"
