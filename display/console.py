from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import FrozenSet, Optional

from display.interface import TreasuryDisplay


@dataclass
class RecordingDisplay(TreasuryDisplay):
    """In-memory display; `missing` lists targets it pretends not to have."""

    missing: FrozenSet[str] = frozenset()
    value: str = "Loading..."
    percent: str = "0%"
    progress: float = 0.0
    status: str = "Scanning Treasury..."
    error: bool = False
    updated_at: Optional[datetime] = None
    note: Optional[str] = None
    writes: int = field(default=0, repr=False)

    def supports(self, target: str) -> bool:
        return target not in self.missing

    def set_value(self, text: str) -> None:
        self.value = text
        self.writes += 1

    def set_percent(self, text: str) -> None:
        self.percent = text
        self.writes += 1

    def set_progress(self, ratio: float) -> None:
        self.progress = ratio
        self.writes += 1

    def set_status(self, text: str) -> None:
        self.status = text
        self.writes += 1

    def set_error(self, flag: bool) -> None:
        self.error = flag
        self.writes += 1

    def set_updated_at(self, timestamp: datetime) -> None:
        self.updated_at = timestamp
        self.writes += 1

    def set_note(self, text: Optional[str]) -> None:
        self.note = text
        self.writes += 1


@dataclass
class ConsoleDisplay(RecordingDisplay):
    """Text rendering of the tracker widget for terminals."""

    bar_width: int = 30

    def render(self) -> str:
        filled = int(round(self.progress * self.bar_width))
        bar = "#" * filled + "-" * (self.bar_width - filled)
        icon = "!" if self.error else "+"
        lines = [
            f"Treasury: {self.value}  ({self.percent})",
            f"[{bar}]",
            f"[{icon}] {self.status}",
        ]
        if self.updated_at is not None:
            lines.append(f"Updated: {self.updated_at.strftime('%H:%M:%S')}")
        if self.note:
            lines.append(self.note)
        return "\n".join(lines)
