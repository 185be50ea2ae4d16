"""
Tests for the UI Bridge

Tests for the prefix style tables and the bridge's channels.
"""

import pytest

from termchat import (
    CHAT_STYLES,
    ECHO_STYLES,
    LOG_STYLES,
    ChannelClosedError,
    Marker,
    StyleTable,
    UIBridge,
)


class TestStyleTable:
    """Tests for prefix style lookup."""

    @pytest.mark.parametrize(
        "line,style",
        [
            ("[ERROR] boom", "bold red"),
            ("[INFO hello", "bold magenta"),
            ("[DEBUG] trace", "bold cyan"),
            ("plain text", ""),
            ("see [ERROR] later", ""),
        ],
    )
    def test_log_styles(self, line, style):
        """Test log colouring by severity marker."""
        assert LOG_STYLES.style_for(line) == style

    def test_private_message_style(self):
        """Test that (PM) lines are highlighted in the chat pane."""
        assert CHAT_STYLES.style_for("(PM) hi") == "yellow"
        assert CHAT_STYLES.style_for("bob: hi") == ""

    def test_command_echo_style(self):
        """Test that echoed commands are green."""
        assert ECHO_STYLES.style_for("/connect a 1") == "bold green"
        assert ECHO_STYLES.style_for("hello") == ""

    def test_first_match_wins(self):
        """Test that rule order decides between overlapping markers."""
        table = StyleTable(
            rules=((Marker.COMMAND, "green"), (Marker.PRIVATE, "yellow"))
        )
        assert table.style_for("/(PM)") == "green"

    def test_default_style(self):
        """Test that an unmatched line gets the table default."""
        table = StyleTable(rules=(), default="dim")
        assert table.style_for("anything") == "dim"

    def test_format_returns_styled_text(self):
        """Test that format() keeps the text and applies the style."""
        text = LOG_STYLES.format("[ERROR] boom")
        assert text.plain == "[ERROR] boom"
        assert str(text.style) == "bold red"

    def test_table_is_immutable(self):
        """Test that a style table cannot be modified after construction."""
        with pytest.raises(AttributeError):
            LOG_STYLES.default = "red"


class TestUIBridge:
    """Tests for the bridge channels."""

    def test_has_three_distinct_channels(self):
        """Test that log, chat and input are separate channels."""
        bridge = UIBridge()
        assert len({id(bridge.log), id(bridge.chat), id(bridge.input)}) == 3

    def test_log_helpers_prefix_markers(self):
        """Test the [INFO/[ERROR/[DEBUG helper prefixes."""
        bridge = UIBridge()
        bridge.log_info("hello")
        bridge.log_error("world")
        bridge.log_debug("detail")

        entries = [bridge.log.receive(timeout=0)[0] for _ in range(3)]
        assert entries == ["[INFO] hello", "[ERROR] world", "[DEBUG] detail"]
        assert [LOG_STYLES.style_for(e) for e in entries] == [
            "bold magenta",
            "bold red",
            "bold cyan",
        ]

    def test_log_after_close_is_dropped(self):
        """Test that logging into a closed bridge does not raise."""
        bridge = UIBridge()
        bridge.close()
        bridge.log_error("late")
        assert bridge.log.receive() == (None, False)

    def test_close_tolerates_already_closed_channels(self):
        """Test that close() skips channels someone else closed."""
        bridge = UIBridge()
        bridge.chat.close()
        bridge.close()
        assert bridge.log.closed and bridge.chat.closed and bridge.input.closed
        with pytest.raises(ChannelClosedError):
            bridge.input.send("x")
