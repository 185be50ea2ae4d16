"""
Tests for View Descriptors

Tests for pane geometry and the default pane list.
"""

import pytest
from textual.geometry import Region

from termchat.ui.views import VIEWS, PanelKind, ViewDescriptor, stacked_offsets


def views_by_kind():
    return {details.kind: details for details in VIEWS}


class TestDefaultViews:
    """Tests for the default pane list."""

    def test_one_pane_per_kind(self):
        """Test that every panel kind appears exactly once."""
        assert sorted(d.kind.value for d in VIEWS) == sorted(k.value for k in PanelKind)

    def test_only_input_is_editable(self):
        """Test that the input pane is the single editable pane."""
        editable = [d.kind for d in VIEWS if d.editable]
        assert editable == [PanelKind.INPUT]

    def test_help_is_seeded_with_commands(self):
        """Test that the help pane lists the commands."""
        help_view = views_by_kind()[PanelKind.HELP]
        assert help_view.data[0] == "/connect  <ip> <port>"
        assert help_view.data[-1] == "/exit"
        assert len(help_view.data) == 4

    def test_descriptors_are_immutable(self):
        """Test that a descriptor cannot be changed after construction."""
        with pytest.raises(AttributeError):
            VIEWS[0].title = "changed"

    def test_name_is_kind_value(self):
        """Test that the widget id comes from the panel kind."""
        assert views_by_kind()[PanelKind.CHAT].name == "chat"


class TestGeometry:
    """Tests for pane rectangles."""

    def test_regions_on_120_by_40(self):
        """Test the layout on a 120x40 terminal."""
        views = views_by_kind()
        assert views[PanelKind.CHAT].region(120, 40) == Region(0, 0, 81, 27)
        assert views[PanelKind.INPUT].region(120, 40) == Region(0, 27, 120, 3)
        assert views[PanelKind.LOG].region(120, 40) == Region(0, 30, 120, 10)
        assert views[PanelKind.USERS].region(120, 40) == Region(81, 0, 39, 21)
        assert views[PanelKind.HELP].region(120, 40) == Region(81, 21, 39, 6)

    def test_panes_do_not_overlap(self):
        """Test that no two panes share a cell."""
        regions = [d.region(120, 40) for d in VIEWS]
        for i, first in enumerate(regions):
            for second in regions[i + 1 :]:
                assert not first.overlaps(second)

    def test_tiny_terminal_gives_empty_not_negative(self):
        """Test that sizes never go negative on a tiny terminal."""
        for details in VIEWS:
            region = details.region(2, 2)
            assert region.width >= 0
            assert region.height >= 0

    def test_custom_descriptor(self):
        """Test a descriptor with fixed corners."""
        details = ViewDescriptor(
            kind=PanelKind.LOG,
            title="Log",
            x0=lambda w: 1,
            y0=lambda h: 2,
            x1=lambda w: w - 2,
            y1=lambda h: h - 3,
        )
        assert details.region(10, 10) == Region(1, 2, 8, 6)


class TestStackedOffsets:
    """Tests for converting regions to vertical-layout offsets."""

    def test_offsets_compensate_for_previous_heights(self):
        """Test that each offset subtracts the heights stacked above it."""
        regions = [Region(0, 10, 5, 3), Region(2, 0, 5, 4), Region(0, 20, 5, 1)]
        assert stacked_offsets(regions) == [(0, 10), (2, -3), (0, 13)]

    def test_empty(self):
        """Test that no regions give no offsets."""
        assert stacked_offsets([]) == []
