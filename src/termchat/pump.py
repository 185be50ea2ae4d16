"""
I/O Pump

A dedicated thread that blocks on FramedConnection.read_line() and
forwards every received line into an inbound channel.

The pump makes a single attempt: the first read failure (end of stream or
transport fault) stops it for good. Reconnecting means building a new
connection and a new pump.
"""

import logging
import threading
from enum import Enum
from typing import Optional

from .channel import Channel
from .connection import FramedConnection
from .errors import (
    ChannelClosedError,
    EndOfStreamError,
    InvalidHandleError,
    IOFaultError,
)

logger = logging.getLogger(__name__)


class PumpState(str, Enum):
    RUNNING = "running"
    STOPPED = "stopped"


class IOPump(threading.Thread):
    """
    Reader thread for one connection.

    Attributes:
        connection: Connection read from
        inbound: Channel every received line is sent to
        log: Optional channel told why the pump stopped
        state: RUNNING from construction, and while run() reads, until
               the first read failure; then STOPPED
        lines_read: Number of lines forwarded so far
    """

    def __init__(
        self,
        connection: FramedConnection,
        inbound: Channel,
        log: Optional[Channel] = None,
    ):
        super().__init__(name=f"pump-{connection.name}", daemon=True)
        self.connection = connection
        self.inbound = inbound
        self.log = log
        self.state = PumpState.RUNNING
        self.lines_read = 0

    def run(self) -> None:
        self.state = PumpState.RUNNING
        logger.info("Pump for '%s' started", self.connection.name)
        try:
            while True:
                line = self.connection.read_line()
                self.inbound.send(line)
                self.lines_read += 1
        except EndOfStreamError:
            logger.info("Peer '%s' closed the connection", self.connection.name)
            self._report(f"[INFO] {self.connection.name} disconnected")
        except (IOFaultError, InvalidHandleError) as e:
            if self.connection.closed:
                logger.info("Pump for '%s' stopped by close", self.connection.name)
                self._report(f"[INFO] {self.connection.name} disconnected")
            else:
                logger.error("Read from '%s' failed: %s", self.connection.name, e)
                self._report(f"[ERROR] {self.connection.name}: {e}")
        except ChannelClosedError:
            logger.info("Inbound channel closed, stopping pump")
        finally:
            self.state = PumpState.STOPPED
            logger.info(
                "Pump for '%s' stopped after %d lines",
                self.connection.name,
                self.lines_read,
            )

    def _report(self, message: str) -> None:
        if self.log is None:
            return
        try:
            self.log.send(message)
        except ChannelClosedError:
            logger.debug("Log channel closed, dropping: %s", message)
