"""
Protocol Codes and Frames

Status codes used on the wire and a small parser splitting a received line
into its optional numeric code and payload.

Frame Format:
    <code> <payload>\\n     coded frame (e.g. "220 alice")
    <payload>\\n            bare chat line (e.g. "(PM) bob: hi")
"""

from dataclasses import dataclass
from typing import Optional

# Public chat message
CODE_CHAT = 200
# Private message: "<name> <message...>"
CODE_PRIVATE = 201
# Remote shell request: "<name> <command...>"
CODE_SHELL = 202
# Greeting sent right after connecting: "<own name>"
CODE_HELLO = 220


@dataclass(frozen=True)
class Frame:
    """
    A received protocol line.

    Attributes:
        code: Numeric status code, or None for a bare line
        payload: Text after the code and its separating space
    """

    code: Optional[int]
    payload: str

    @classmethod
    def parse(cls, line: str) -> "Frame":
        """Split a line into code and payload."""
        head, sep, rest = line.partition(" ")
        if head.isdigit() and head.isascii():
            return cls(int(head), rest if sep else "")
        return cls(None, line)

    def __str__(self) -> str:
        if self.code is None:
            return self.payload
        return f"{self.code} {self.payload}"
