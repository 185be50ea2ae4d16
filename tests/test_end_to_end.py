"""
End-to-end Tests

A client connection, its I/O pump and the chat UI talking to a peer over a
real socket pair.
"""

import asyncio
import socket

import pytest

from termchat import FramedConnection, IOPump, PumpState, UIBridge
from termchat.ui import ChatApp


async def wait_for(pilot, predicate, timeout=3.0):
    """Let the app run until predicate() holds."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not met before timeout")
        await pilot.pause(0.02)


@pytest.fixture
def linked():
    """Client and peer connections joined by a socket pair, plus the peer socket."""
    left, right = socket.socketpair()
    client = FramedConnection("client", left)
    peer = FramedConnection("peer", right)
    yield client, peer, right
    for conn in (client, peer):
        if not conn.notifications.closed:
            conn.close()


def test_greeting_and_private_reply_reach_chat_channel(linked):
    """Test the ready/(PM) exchange without a UI."""
    client, peer, peer_sock = linked
    bridge = UIBridge()
    pump = IOPump(client, bridge.chat, bridge.log)
    pump.start()

    client.write_coded(220, "ready")
    assert peer.read_line() == "220 ready"

    peer_sock.sendall(b"(PM) hi\n")
    assert bridge.chat.receive(timeout=2) == ("(PM) hi", True)

    peer.close()
    pump.join(timeout=2)
    assert pump.state == PumpState.STOPPED
    assert client.closed is True
    assert bridge.log.receive(timeout=1) == ("[INFO] client disconnected", True)


@pytest.mark.asyncio
async def test_private_reply_rendered_with_pm_style(linked):
    """Test that a peer's (PM) line shows up highlighted in the chat pane."""
    client, peer, peer_sock = linked
    bridge = UIBridge()
    app = ChatApp(bridge)
    pump = IOPump(client, bridge.chat, bridge.log)

    async with app.run_test(size=(120, 40)) as pilot:
        pump.start()
        client.write_coded(220, "ready")
        assert peer.read_line() == "220 ready"

        peer_sock.sendall(b"(PM) hi\n")
        await wait_for(pilot, lambda: len(app.transcript["chat"]) == 1)

        line = app.transcript["chat"][0]
        assert line.plain == "(PM) hi"
        assert str(line.style) == "yellow"

        peer.close()
        await wait_for(pilot, lambda: len(app.transcript["log"]) == 1)
        assert app.transcript["log"][0].plain == "[INFO] client disconnected"

    bridge.close()
    pump.join(timeout=2)

