"""
Chat Application UI

Terminal renderer for the chat client, built using the Textual framework.

Threading:
    The Textual event loop owns every widget. Lines arriving on the log and
    chat channels are read by one ChannelForwarder thread per channel; a
    forwarder never touches a widget, it posts a LineReceived message to
    the app (post_message is thread-safe) and the app writes the line on
    its own loop. Lines committed in the input pane go the other way, onto
    the bridge's input channel. On unmount the app closes the log and chat
    channels, which ends the forwarders.
"""

import logging
import threading
from typing import Dict, List, Optional, Sequence

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.css.query import NoMatches
from textual.message import Message
from textual.widgets import Input, RichLog

from ..bridge import CHAT_STYLES, ECHO_STYLES, LOG_STYLES, StyleTable, UIBridge
from ..channel import Channel
from ..errors import ChannelClosedError
from ..protocol import Frame
from .views import VIEWS, PanelKind, ViewDescriptor, stacked_offsets

logger = logging.getLogger(__name__)

# Seconds a forwarder waits on its channel before checking the app is alive
POLL_INTERVAL = 0.25


class LineReceived(Message):
    """A formatted line to append to a pane."""

    def __init__(self, pane: str, line: Text) -> None:
        self.pane = pane
        self.line = line
        super().__init__()


class ChannelForwarder(threading.Thread):
    """
    Thread moving lines from a channel to one pane of the app.

    A line is styled by its payload, so a status code in front of a marker
    (``"201 (PM) hi"``) does not hide it. Stops once the channel is closed
    and drained, or once the app it feeds has stopped running.
    """

    def __init__(self, app: App, channel: Channel, pane: str, styles: StyleTable):
        super().__init__(name=f"forward-{pane}", daemon=True)
        self.app = app
        self.channel = channel
        self.pane = pane
        self.styles = styles

    def run(self) -> None:
        seen_running = False
        while True:
            message, ok = self.channel.receive(timeout=POLL_INTERVAL)
            if ok:
                line = str(message).strip("\r\n")
                style = self.styles.style_for(Frame.parse(line).payload)
                self.app.post_message(LineReceived(self.pane, Text(line, style=style)))
                continue
            if self.channel.closed and not len(self.channel):
                break
            if self.app.is_running:
                seen_running = True
            elif seen_running:
                break
        logger.debug("Forwarder for '%s' finished", self.pane)


class PaneLayout(Container):
    """Container placing its panes from view descriptors on every resize."""

    DEFAULT_CSS = """
    PaneLayout {
        layout: vertical;
        width: 100%;
        height: 100%;
        overflow: hidden hidden;
    }
    """

    def __init__(self, views: Sequence[ViewDescriptor], **kwargs) -> None:
        super().__init__(**kwargs)
        self.views = tuple(views)

    def compose(self) -> ComposeResult:
        for details in self.views:
            if details.editable:
                widget = Input(id=details.name)
            else:
                widget = RichLog(
                    id=details.name,
                    wrap=details.wrap,
                    auto_scroll=details.autoscroll,
                    markup=False,
                    highlight=False,
                )
                widget.can_focus = False
            widget.border_title = details.title
            yield widget

    def on_resize(self, event: events.Resize) -> None:
        self.apply_geometry(event.size.width, event.size.height)

    def apply_geometry(self, width: int, height: int) -> None:
        """Size and position every pane for a ``width`` x ``height`` area."""
        regions = [details.region(width, height) for details in self.views]
        offsets = stacked_offsets(regions)
        for details, region, offset in zip(self.views, regions, offsets):
            try:
                widget = self.query_one(f"#{details.name}")
            except NoMatches:
                continue
            widget.styles.width = region.width
            widget.styles.height = region.height
            widget.styles.offset = offset


class ChatApp(App):
    """Main chat application."""

    TITLE = "termchat"

    CSS = """
    Screen {
        overflow: hidden hidden;
    }

    RichLog {
        border: round $primary;
        scrollbar-size: 1 1;
    }

    Input {
        border: round $accent;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", show=True, priority=True),
    ]

    def __init__(
        self,
        bridge: Optional[UIBridge] = None,
        views: Sequence[ViewDescriptor] = VIEWS,
    ) -> None:
        """
        Initialize the chat application.

        Args:
            bridge: Channels shared with the network and command threads
            views: Panes to show
        """
        super().__init__()
        self.bridge = bridge or UIBridge()
        self.views = tuple(views)
        self.transcript: Dict[str, List[Text]] = {
            details.name: [] for details in self.views
        }
        self._forwarders: List[ChannelForwarder] = []

    def compose(self) -> ComposeResult:
        """Compose the main application layout."""
        yield PaneLayout(self.views, id="panes")

    def on_mount(self) -> None:
        """Seed the panes, focus the input and start the forwarders."""
        for details in self.views:
            for line in details.data:
                self._write(details.name, Text(line))

        try:
            self.query_one(f"#{PanelKind.INPUT.value}", Input).focus()
        except NoMatches:
            logger.warning("No input pane configured")

        self._forwarders = [
            ChannelForwarder(self, self.bridge.log, PanelKind.LOG.value, LOG_STYLES),
            ChannelForwarder(self, self.bridge.chat, PanelKind.CHAT.value, CHAT_STYLES),
        ]
        for forwarder in self._forwarders:
            forwarder.start()

    def on_unmount(self) -> None:
        """Close the inbound channels so the forwarders finish."""
        for channel in (self.bridge.log, self.bridge.chat):
            if not channel.closed:
                channel.close()

    def on_line_received(self, message: LineReceived) -> None:
        """Append a line posted by a forwarder."""
        self._write(message.pane, message.line)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle Enter in the input pane."""
        if event.input.id != PanelKind.INPUT.value:
            return

        data = event.value.strip("\r\n")
        event.input.value = ""
        if not data:
            return

        if data == "/exit":
            self.exit()
            return

        try:
            self.bridge.input.send(data)
        except ChannelClosedError:
            logger.error("Input channel closed, dropping: %s", data)
            self._write(PanelKind.LOG.value, LOG_STYLES.format("[ERROR] Input is closed"))
            return

        self._write(
            PanelKind.CHAT.value,
            Text(f"ME: {data}", style=ECHO_STYLES.style_for(data)),
        )

    def _write(self, pane: str, line: Text) -> None:
        """Append a line to a pane and record it in the transcript."""
        try:
            widget = self.query_one(f"#{pane}", RichLog)
        except NoMatches:
            logger.error("Unknown pane '%s', dropping: %s", pane, line.plain)
            return
        widget.write(line)
        self.transcript.setdefault(pane, []).append(line)
