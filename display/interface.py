"""Display boundary for the treasury widget.

The engine talks to whatever renders the tracker only through
TreasuryDisplay. A renderer may lack some targets; `supports` reports which
ones it has. value, percent, progress and status are required; the error
indicator, timestamp and fallback note are optional.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from common.logging_config import get_logger
from engine.format_engine import read_percent

logger = get_logger(__name__)

REQUIRED_TARGETS = ("value", "percent", "progress", "status")
OPTIONAL_TARGETS = ("error", "updated_at", "note")

FALLBACK_NOTE = "*Using cached data (RPC limit)"
CACHED_MARKER = "*"


class DisplayError(Exception):
    """Raised by a display when a target cannot be written."""

    pass


class TreasuryDisplay(ABC):
    """Capability the tracker renders into."""

    def supports(self, target: str) -> bool:
        return True

    @abstractmethod
    def set_value(self, text: str) -> None: ...

    @abstractmethod
    def set_percent(self, text: str) -> None: ...

    @abstractmethod
    def set_progress(self, ratio: float) -> None:
        """Progress bar fill in [0.0, 1.0]."""

    @abstractmethod
    def set_status(self, text: str) -> None: ...

    def set_error(self, flag: bool) -> None:
        pass

    def set_updated_at(self, timestamp: datetime) -> None:
        pass

    def set_note(self, text: Optional[str]) -> None:
        pass


def _non_empty(s: object) -> bool:
    return isinstance(s, str) and len(s) > 0


def update_display(
    display: TreasuryDisplay,
    value: str,
    percent: str,
    status: str,
    is_error: bool = False,
    now: Optional[datetime] = None,
) -> bool:
    """Write formatted tracker state to `display`.

    Returns False when a required target is missing, when value or percent
    is not a non-empty string (nothing is written then), or when the
    display raises DisplayError.
    An unparsable percent only zeroes the progress bar.
    """
    missing = [t for t in REQUIRED_TARGETS if not display.supports(t)]
    if missing:
        logger.error("Required display targets not found", extra={"targets": missing})
        return False

    if not _non_empty(value):
        logger.warning("Invalid value provided", extra={"value": value})
        return False
    if not _non_empty(percent):
        logger.warning("Invalid percentage provided", extra={"percent": percent})
        return False

    try:
        display.set_value(value)
        display.set_percent(percent)

        pct = read_percent(percent)
        if pct is None:
            logger.warning("Invalid progress bar percentage", extra={"percent": percent})
            pct = 0.0
        display.set_progress(pct / 100.0)

        if _non_empty(status):
            display.set_status(status)

        if display.supports("error"):
            display.set_error(bool(is_error))

        if display.supports("updated_at"):
            display.set_updated_at(now or datetime.now())

        if display.supports("note"):
            if is_error and CACHED_MARKER in value:
                display.set_note(FALLBACK_NOTE)
            else:
                display.set_note(None)
    except DisplayError as e:
        logger.error("Error updating display: %s", e)
        return False

    logger.debug("Display updated", extra={"value": value, "percent": percent, "status": status})
    return True
