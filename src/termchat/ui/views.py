"""
View Descriptors

Static description of the panes shown by the chat UI. Each pane's
rectangle is computed from the terminal size on every layout pass; the
corner functions return inclusive cell coordinates.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Sequence, Tuple

from textual.geometry import Region

Corner = Callable[[int], int]


class PanelKind(str, Enum):
    INPUT = "input"
    LOG = "log"
    CHAT = "chat"
    USERS = "users"
    HELP = "help"


@dataclass(frozen=True)
class ViewDescriptor:
    """
    Layout metadata for one pane.

    Attributes:
        kind: Which pane this is; its value is also the widget id
        title: Border title
        editable: Whether the user types into this pane
        autoscroll: Whether new lines scroll the pane to the end
        wrap: Whether long lines wrap
        x0, y0, x1, y1: Corner coordinates as functions of terminal
                        width (x) or height (y)
        data: Lines written into the pane when it is created
    """

    kind: PanelKind
    title: str
    x0: Corner
    y0: Corner
    x1: Corner
    y1: Corner
    editable: bool = False
    autoscroll: bool = True
    wrap: bool = True
    data: Tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return self.kind.value

    def region(self, width: int, height: int) -> Region:
        """Rectangle occupied by the pane on a ``width`` x ``height`` screen."""
        x0, y0 = self.x0(width), self.y0(height)
        x1, y1 = self.x1(width), self.y1(height)
        return Region(x0, y0, max(0, x1 - x0 + 1), max(0, y1 - y0 + 1))


def stacked_offsets(regions: Sequence[Region]) -> List[Tuple[int, int]]:
    """
    Offsets placing vertically stacked widgets at absolute positions.

    In a vertical layout each widget naturally starts below the previous
    one, so the offset of widget ``i`` is its target position minus the
    combined height of the widgets before it.
    """
    offsets = []
    natural_y = 0
    for region in regions:
        offsets.append((region.x, region.y - natural_y))
        natural_y += region.height
    return offsets


VIEWS: Tuple[ViewDescriptor, ...] = (
    ViewDescriptor(
        kind=PanelKind.INPUT,
        title="What's On Your Mind?",
        editable=True,
        x0=lambda max_x: 0,
        y0=lambda max_y: 3 * max_y // 4 - 3,
        x1=lambda max_x: max_x - 1,
        y1=lambda max_y: 3 * max_y // 4 - 1,
    ),
    ViewDescriptor(
        kind=PanelKind.LOG,
        title="Log",
        x0=lambda max_x: 0,
        y0=lambda max_y: 3 * max_y // 4,
        x1=lambda max_x: max_x - 1,
        y1=lambda max_y: max_y - 1,
    ),
    ViewDescriptor(
        kind=PanelKind.CHAT,
        title="Conversation",
        x0=lambda max_x: 0,
        y0=lambda max_y: 0,
        x1=lambda max_x: max_x // 3 * 2,
        y1=lambda max_y: 3 * max_y // 4 - 4,
    ),
    ViewDescriptor(
        kind=PanelKind.USERS,
        title="Users",
        x0=lambda max_x: max_x // 3 * 2 + 1,
        y0=lambda max_y: 0,
        x1=lambda max_x: max_x - 1,
        y1=lambda max_y: max_y // 2,
    ),
    ViewDescriptor(
        kind=PanelKind.HELP,
        title="Help",
        x0=lambda max_x: max_x // 3 * 2 + 1,
        y0=lambda max_y: max_y // 2 + 1,
        x1=lambda max_x: max_x - 1,
        y1=lambda max_y: 3 * max_y // 4 - 4,
        data=(
            f"{'/connect':<9} <ip> <port>",
            f"{'/pm':<9} <name> <message...>",
            f"{'/shell':<9} <name> <command...>",
            "/exit",
        ),
    ),
)
