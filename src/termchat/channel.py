"""
Thread-safe Channels

A Channel is an unbounded FIFO queue shared between threads with a
one-shot close. Sends never block. Receives block until a message is
available or the channel is closed; a receive on a closed, drained channel
returns immediately with ``ok=False`` instead of blocking forever.

Usage:
    channel = Channel("chat")
    channel.send("hello")
    message, ok = channel.receive()
"""

import logging
import threading
from collections import deque
from typing import Any, Deque, Iterator, Optional, Tuple

from .errors import ChannelClosedError

logger = logging.getLogger(__name__)


class Channel:
    """
    FIFO message queue with close semantics.

    Attributes:
        name: Label used in log output
    """

    def __init__(self, name: str = "channel"):
        self.name = name
        self._items: Deque[Any] = deque()
        self._cond = threading.Condition()
        self._closed = False

    @property
    def closed(self) -> bool:
        """Whether close() has been called."""
        with self._cond:
            return self._closed

    def send(self, message: Any) -> None:
        """
        Append a message without blocking.

        Raises:
            ChannelClosedError: If the channel has been closed
        """
        with self._cond:
            if self._closed:
                raise ChannelClosedError(f"send on closed channel '{self.name}'")
            self._items.append(message)
            self._cond.notify()

    def receive(self, timeout: Optional[float] = None) -> Tuple[Any, bool]:
        """
        Take the oldest message, blocking until one is available.

        Args:
            timeout: Seconds to wait; None waits until a message arrives or
                     the channel closes

        Returns:
            tuple: (message, ok). ``ok`` is False when the channel is closed
            and drained, or when the timeout expired; message is then None.
        """
        with self._cond:
            self._cond.wait_for(lambda: self._items or self._closed, timeout)
            if self._items:
                return self._items.popleft(), True
            return None, False

    def close(self) -> None:
        """
        Close the channel and wake every blocked receiver.

        Messages already queued can still be received.

        Raises:
            ChannelClosedError: If the channel was already closed
        """
        with self._cond:
            if self._closed:
                raise ChannelClosedError(f"close of closed channel '{self.name}'")
            self._closed = True
            self._cond.notify_all()
        logger.debug("Channel '%s' closed", self.name)

    def __iter__(self) -> Iterator[Any]:
        while True:
            message, ok = self.receive()
            if not ok:
                return
            yield message

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)
