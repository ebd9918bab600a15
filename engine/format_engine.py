"""Display formatting for treasury values.

Currency is rendered in en-US style with no fractional digits, rounding
half away from zero. Percentages use one decimal place with the same
half-up rounding on the exact value of the float. Formatting never feeds
back into the totals it renders.
"""
from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from numbers import Real
from typing import Optional

from common.config_loader import validate_goal
from engine.valuation_engine import parse_float_prefix

_WHOLE = Decimal("1")
_TENTH = Decimal("0.1")


def _require_finite(value: object, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"{name} must be a number, got {type(value).__name__}")
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value}")
    return float(value)


def format_usd_value(total: float) -> str:
    """Format a USD amount, e.g. 1234567.89 -> "$1,234,568"."""
    v = _require_finite(total, "total")
    d = Decimal(v)
    with localcontext() as ctx:
        # quantize needs every integer digit inside the context precision
        ctx.prec = max(ctx.prec, d.adjusted() + 2)
        rounded = int(d.quantize(_WHOLE, rounding=ROUND_HALF_UP))
    if rounded < 0:
        return f"-${-rounded:,}"
    return f"${rounded:,}"


def percent_of_goal(total: float, goal: float) -> float:
    """Share of the goal reached, in [0, 100]."""
    t = _require_finite(total, "total")
    validate_goal(_require_finite(goal, "goal"))
    return max(0.0, min(t / goal * 100, 100.0))


def format_percentage(total: float, goal: float) -> str:
    """Format progress toward `goal`, e.g. (500000, 2000000) -> "25.0%"."""
    pct = percent_of_goal(total, goal)
    return f"{Decimal(pct).quantize(_TENTH, rounding=ROUND_HALF_UP)}%"


def read_percent(text: str) -> Optional[float]:
    """Read a displayed percentage back as a number in [0, 100]; None if unparsable."""
    if not isinstance(text, str):
        return None
    # trailing "%" plus any cached-data "*" marker, e.g. "22.5%*"
    v = parse_float_prefix(text.strip().rstrip("*%"))
    if v is None or not math.isfinite(v):
        return None
    return max(0.0, min(v, 100.0))


def parse_percent(text: str) -> float:
    """Like read_percent, but 0.0 when the text is unparsable."""
    v = read_percent(text)
    return 0.0 if v is None else v
