"""Tests for the widgets module."""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from unittest.mock import MagicMock

from rich.text import Text

from sprint import resolve
from widgets import SprintHeader, SprintSummary


class TestSprintHeader:
    """Tests for the SprintHeader widget."""

    def test_init(self):
        header = SprintHeader()

        assert header.status == ""
        assert header.label == ""

    def test_update_display(self, two_week_config, display_options):
        header = SprintHeader()
        header.update = MagicMock()

        header.update_display(resolve(date(2026, 1, 8), two_week_config), display_options)

        header.update.assert_called_once()
        assert header.status == "🏃 Sprint 1 · Day 4/10"
        assert header.label == "2026 CW02–CW03"

    def test_label_right_aligned(self, two_week_config, display_options):
        header = SprintHeader()
        header.update = MagicMock()

        header.update_display(resolve(date(2026, 1, 8), two_week_config), display_options)

        text = header.update.call_args[0][0]
        assert isinstance(text, Text)
        assert text.plain.startswith(header.status)
        assert text.plain.endswith(header.label)
        assert len(text.plain) == SprintHeader.TARGET_END_COL

    def test_long_status_keeps_gap(self, two_week_config, display_options):
        header = SprintHeader()
        header.update = MagicMock()
        options = replace(display_options, sprint_name="A very long sprint name for the whole team")

        header.update_display(resolve(date(2026, 1, 8), two_week_config), options)

        text = header.update.call_args[0][0]
        assert f"{header.status}  {header.label}" == text.plain


class TestSprintSummary:
    """Tests for the SprintSummary widget."""

    def test_update_display(self, two_week_config, display_options):
        summary = SprintSummary()
        summary.update = MagicMock()

        summary.update_display(resolve(date(2026, 1, 5), two_week_config), display_options)

        summary.update.assert_called_once()
        assert len(summary.lines) == 7
        assert summary.lines[0] == "Sprint 1"

    def test_includes_tooltip(self, two_week_config, display_options):
        summary = SprintSummary()
        summary.update = MagicMock()

        summary.update_display(resolve(date(2026, 1, 5), two_week_config), display_options, tooltip="hello")

        text = summary.update.call_args[0][0]
        assert text.plain.endswith("hello")

    def test_lines_rendered_in_order(self, two_week_config, display_options):
        summary = SprintSummary()
        summary.update = MagicMock()

        summary.update_display(resolve(date(2026, 1, 10), two_week_config), display_options)

        text = summary.update.call_args[0][0]
        assert text.plain.splitlines() == summary.lines
