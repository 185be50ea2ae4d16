#!/usr/bin/env python3
"""
Chat Client Application

Terminal chat client. Provides a multi-pane terminal user interface using
the Textual framework.

Usage:
    termchat
    termchat --name alice --connect 127.0.0.1:2000
"""

import argparse
import logging
import sys
from typing import List, Optional

from .bridge import UIBridge
from .commands import CommandDispatcher
from .config import ClientSettings, parse_address, parse_log_level

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="termchat", description="Terminal chat client"
    )
    parser.add_argument("--name", help="Name announced to peers")
    parser.add_argument(
        "--connect",
        metavar="HOST:PORT",
        type=parse_address,
        help="Peer to connect to at start-up",
    )
    parser.add_argument("--log-file", help="File diagnostics are appended to")
    parser.add_argument(
        "--log-level", type=parse_log_level, help="Logging level (e.g. INFO)"
    )
    return parser


def load_settings(argv: Optional[List[str]] = None) -> ClientSettings:
    """Combine environment settings with command-line overrides."""
    args = build_parser().parse_args(argv)
    return ClientSettings.from_env().with_overrides(
        name=args.name,
        connect_to=args.connect,
        log_file=args.log_file,
        log_level=args.log_level,
    )


def main(argv: Optional[List[str]] = None):
    """Main entry point for the chat client."""
    try:
        settings = load_settings(argv)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    # Log to a file to avoid interfering with the UI
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.FileHandler(settings.log_file, mode="a")],
    )
    logger.info("Starting chat client as '%s'...", settings.name)

    try:
        from .ui import ChatApp
    except ImportError as e:
        print(f"Error: Could not import UI components: {e}")
        print("Make sure textual is installed: pip install textual")
        sys.exit(1)

    bridge = UIBridge()
    dispatcher = CommandDispatcher(bridge, settings)
    dispatcher.start()
    if settings.connect_to:
        host, port = settings.connect_to
        bridge.input.send(f"/connect {host} {port}")

    try:
        ChatApp(bridge).run()
    except KeyboardInterrupt:
        print("\nExiting...")
    finally:
        bridge.close()
        dispatcher.join(timeout=2)
        logger.info("Chat client stopped")


if __name__ == "__main__":
    main()
