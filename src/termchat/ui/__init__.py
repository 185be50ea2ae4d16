"""
UI Package for the Chat Client

This package provides the terminal user interface of termchat using the
Textual framework.
"""

from .app import ChannelForwarder, ChatApp, LineReceived, PaneLayout
from .views import VIEWS, PanelKind, ViewDescriptor

__all__ = [
    "ChatApp",
    "ChannelForwarder",
    "LineReceived",
    "PaneLayout",
    "VIEWS",
    "PanelKind",
    "ViewDescriptor",
]
