"""Tests for the display boundary.

Covers:
- Required vs optional targets
- Value/percent validation
- Progress bar parsing and clamping
- Error indicator, timestamp and fallback note
"""
from __future__ import annotations

from datetime import datetime

import pytest

from display.console import ConsoleDisplay, RecordingDisplay
from display.interface import FALLBACK_NOTE, DisplayError, update_display


NOW = datetime(2026, 1, 15, 10, 30, 0)


class BrokenStatusDisplay(RecordingDisplay):
    """Display whose status target fails on write."""

    def set_status(self, text: str) -> None:
        raise DisplayError("status element detached")


class TestRequiredTargets:
    """Tests for missing display targets."""

    @pytest.mark.parametrize("target", ["value", "percent", "progress", "status"])
    def test_missing_required_target_reports_failure(self, target):
        """A missing required target returns False and writes nothing."""
        d = RecordingDisplay(missing=frozenset([target]))

        ok = update_display(d, "$1,000,000", "50.0%", "Live Progress", now=NOW)

        assert ok is False
        assert d.writes == 0

    def test_missing_optional_targets_still_succeeds(self):
        """Icon, timestamp and note are optional."""
        d = RecordingDisplay(missing=frozenset(["error", "updated_at", "note"]))

        ok = update_display(d, "$1,234,567", "61.7%", "Live Progress", now=NOW)

        assert ok is True
        assert d.value == "$1,234,567"
        assert d.updated_at is None

    def test_display_error_reported_not_raised(self):
        """A DisplayError from a target becomes a False result."""
        d = BrokenStatusDisplay()

        assert update_display(d, "$1", "0.0%", "Live", now=NOW) is False


class TestUpdateValues:
    """Tests for normal updates."""

    def test_normal_update(self):
        """All targets receive the formatted state."""
        d = RecordingDisplay()

        ok = update_display(d, "$1,234,567", "61.7%", "Live Progress", is_error=False, now=NOW)

        assert ok is True
        assert d.value == "$1,234,567"
        assert d.percent == "61.7%"
        assert d.progress == pytest.approx(0.617)
        assert d.status == "Live Progress"
        assert d.error is False
        assert d.updated_at == NOW
        assert d.note is None

    def test_zero_and_max(self):
        """0% and 100% map to empty and full bars."""
        d = RecordingDisplay()

        update_display(d, "$0", "0.0%", "No Balance", now=NOW)
        assert d.progress == 0.0

        update_display(d, "$10,000,000", "100.0%", "Goal Exceeded", now=NOW)
        assert d.progress == 1.0

    def test_timestamp_defaults_to_now(self):
        """Without an explicit time the current time is recorded."""
        d = RecordingDisplay()

        update_display(d, "$5", "0.0%", "Live")

        assert isinstance(d.updated_at, datetime)

    def test_empty_status_left_unchanged(self):
        """Status is only written when non-empty."""
        d = RecordingDisplay(status="Scanning Treasury...")

        ok = update_display(d, "$5", "0.0%", "", now=NOW)

        assert ok is True
        assert d.status == "Scanning Treasury..."


class TestValidation:
    """Tests for invalid inputs."""

    @pytest.mark.parametrize("value", ["", None, 1500])
    def test_invalid_value_fails(self, value):
        """Value must be a non-empty string."""
        d = RecordingDisplay()

        assert update_display(d, value, "50.0%", "Live", now=NOW) is False
        assert d.value == "Loading..."
        assert d.writes == 0

    @pytest.mark.parametrize("percent", ["", None, 25.0])
    def test_invalid_percent_text_writes_nothing(self, percent):
        """A valid value with a bad percent is rejected before any write."""
        d = RecordingDisplay()

        assert update_display(d, "$5", percent, "Live", now=NOW) is False
        assert d.writes == 0
        assert d.value == "Loading..."
        assert d.percent == "0%"
        assert d.progress == 0.0
        assert d.status == "Scanning Treasury..."
        assert d.updated_at is None

    def test_unparsable_percent_zeroes_progress(self):
        """An unparsable percent keeps the text but empties the bar."""
        d = RecordingDisplay(progress=0.5)

        ok = update_display(d, "$500,000", "invalid%", "Invalid Test", now=NOW)

        assert ok is True
        assert d.percent == "invalid%"
        assert d.progress == 0.0
        assert d.status == "Invalid Test"

    def test_out_of_range_percent_clamped(self):
        """Percentages above 100 fill the bar, not overflow it."""
        d = RecordingDisplay()

        update_display(d, "$5", "250%", "Live", now=NOW)

        assert d.progress == 1.0


class TestErrorState:
    """Tests for the error indicator and fallback note."""

    def test_error_state_with_cached_marker(self):
        """A starred value in error state shows the fallback note."""
        d = RecordingDisplay()

        ok = update_display(d, "$450,000*", "22.5%*", "Connection Limited", is_error=True, now=NOW)

        assert ok is True
        assert d.error is True
        assert d.progress == pytest.approx(0.225)
        assert d.note == FALLBACK_NOTE

    def test_recovery_clears_note(self):
        """A later healthy update removes the note."""
        d = RecordingDisplay()
        update_display(d, "$450,000*", "22.5%*", "Connection Limited", is_error=True, now=NOW)

        update_display(d, "$460,000", "23.0%", "Live Progress", now=NOW)

        assert d.error is False
        assert d.note is None


class TestConsoleDisplay:
    """Tests for the terminal renderer."""

    def test_render(self):
        """Rendering shows value, percent, bar and status."""
        d = ConsoleDisplay(bar_width=10)
        update_display(d, "$500,000", "25.0%", "Live Progress", now=NOW)

        out = d.render()

        assert "Treasury: $500,000  (25.0%)" in out
        assert "[##--------]" in out or "[###-------]" in out
        assert "Live Progress" in out
        assert "Updated: 10:30:00" in out
