"""
Command Dispatcher

Consumes the lines committed in the input pane and turns them into
connection operations.

Commands:
    /connect <host> <port>      dial a peer, replacing any current connection
    /pm <name> <message...>     send a private message
    /shell <name> <command...>  ask a peer to run a command
    anything else               send as a public chat line

Every failure is reported on the log channel; nothing here raises into
the UI.
"""

import logging
import threading
from typing import Callable, Optional, Union

from .bridge import UIBridge
from .config import ClientSettings
from .connection import FramedConnection
from .errors import TermchatError
from .protocol import CODE_CHAT, CODE_HELLO, CODE_PRIVATE, CODE_SHELL
from .pump import IOPump

logger = logging.getLogger(__name__)

USAGE = {
    "/connect": "/connect <host> <port>",
    "/pm": "/pm <name> <message...>",
    "/shell": "/shell <name> <command...>",
}


class CommandDispatcher(threading.Thread):
    """
    Thread reading the input channel and driving one connection at a time.

    Attributes:
        bridge: Channels shared with the UI
        settings: Client settings (name, connect timeout)
        connection: Current connection, if any
        pump: Reader thread of the current connection, if any
    """

    def __init__(
        self,
        bridge: UIBridge,
        settings: ClientSettings,
        dialer: Optional[Callable[..., FramedConnection]] = None,
    ):
        """
        Initialize the dispatcher.

        Args:
            bridge: Channels shared with the UI
            settings: Client settings
            dialer: Optional replacement for FramedConnection.dial
                    (for dependency injection/testing)
        """
        super().__init__(name="command-dispatcher", daemon=True)
        self.bridge = bridge
        self.settings = settings
        self._dialer = dialer or FramedConnection.dial
        self.connection: Optional[FramedConnection] = None
        self.pump: Optional[IOPump] = None

    def run(self) -> None:
        logger.info("Command dispatcher started")
        try:
            for line in self.bridge.input:
                self.dispatch(line)
        finally:
            self.disconnect()
            logger.info("Command dispatcher stopped")

    def dispatch(self, line: str) -> None:
        """Handle one committed input line."""
        line = line.strip()
        if not line:
            return

        if not line.startswith("/"):
            self._send(CODE_CHAT, "%s", line)
            return

        command, _, rest = line.partition(" ")
        args = rest.split()

        if command == "/connect":
            if len(args) != 2:
                self._usage(command)
                return
            self.connect(args[0], args[1])
        elif command in ("/pm", "/shell"):
            name, _, body = rest.strip().partition(" ")
            body = body.strip()
            if not name or not body:
                self._usage(command)
                return
            code = CODE_PRIVATE if command == "/pm" else CODE_SHELL
            self._send(code, "%s %s", name, body)
        else:
            self.bridge.log_error(f"Unknown command: {command}")

    def connect(self, host: str, port: Union[str, int]) -> None:
        """Dial a peer and start pumping its lines into the chat pane."""
        try:
            port_number = int(port)
        except ValueError:
            self.bridge.log_error(f"Invalid port: {port}")
            return

        self.disconnect()
        self.bridge.log_info(f"Connecting to {host}:{port_number}...")
        try:
            connection = self._dialer(
                f"{host}:{port_number}",
                host,
                port_number,
                timeout=self.settings.connect_timeout,
            )
        except TermchatError as e:
            logger.error("Connection failed: %s", e)
            self.bridge.log_error(str(e))
            return

        self.connection = connection
        self.pump = IOPump(connection, self.bridge.chat, self.bridge.log)
        self.pump.start()
        self.bridge.log_info(f"Connected to {connection.name}")
        self._send(CODE_HELLO, "%s", self.settings.name)

    def disconnect(self) -> None:
        """Close the current connection, if it has not been closed yet."""
        connection, self.connection = self.connection, None
        pump, self.pump = self.pump, None
        if connection is None or connection.notifications.closed:
            return
        connection.close()
        if pump is not None:
            pump.join(timeout=2)

    def _send(self, code: int, fmt: str, *args) -> None:
        if self.connection is None or self.connection.closed:
            self.bridge.log_error("Not connected; use /connect <host> <port>")
            return
        try:
            self.connection.write_coded(code, fmt, *args)
        except TermchatError as e:
            logger.error("Write failed: %s", e)
            self.bridge.log_error(f"Send failed: {e}")

    def _usage(self, command: str) -> None:
        self.bridge.log_error(f"Usage: {USAGE[command]}")
