"""Treasury engine.

Runs one valuation pass: aggregate holdings, price them, format the total
and progress toward the fundraising goal, and hand the strings to a
display. Each pass is independent; the only thing carried between passes
is the last good Valuation a caller may keep for fallback rendering.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from common.config_loader import TrackerConfig
from common.logging_config import get_logger
from display.interface import CACHED_MARKER, TreasuryDisplay, update_display
from engine.format_engine import format_percentage, format_usd_value
from engine.valuation_engine import aggregate_by_mint, price_aggregates
from holdings.holding import MintAmountMap, PriceMap, TokenHolding

logger = get_logger(__name__)


@dataclass(frozen=True)
class Valuation:
    """Result of one valuation pass."""

    aggregated: MintAmountMap
    mint_values: Dict[str, float]
    total_usd: float
    quote_usd: float
    formatted_value: str
    formatted_percent: str

    @property
    def priced_mints(self) -> List[str]:
        return sorted(self.mint_values)

    @property
    def unpriced_mints(self) -> List[str]:
        return sorted(m for m in self.aggregated if m not in self.mint_values)


def evaluate(
    holdings: Iterable[TokenHolding],
    price_map: PriceMap,
    config: TrackerConfig,
) -> Valuation:
    agg = aggregate_by_mint(holdings)
    values = price_aggregates(agg, price_map)
    total = sum(values.values(), 0.0)
    quote = sum((v for m, v in values.items() if m in config.quote_mints), 0.0)
    return Valuation(
        aggregated=agg,
        mint_values=values,
        total_usd=total,
        quote_usd=quote,
        formatted_value=format_usd_value(total),
        formatted_percent=format_percentage(total, config.fundraising_goal),
    )


def refresh(
    display: TreasuryDisplay,
    holdings: Iterable[TokenHolding],
    price_map: PriceMap,
    config: TrackerConfig,
    status: str = "Live Progress",
) -> Tuple[Valuation, bool]:
    """Evaluate and render one tick."""
    valuation = evaluate(holdings, price_map, config)
    logger.info(
        "Treasury valued",
        extra={"total_usd": valuation.total_usd, "percent": valuation.formatted_percent},
    )
    ok = update_display(display, valuation.formatted_value, valuation.formatted_percent, status)
    return valuation, ok


def render_fallback(
    display: TreasuryDisplay,
    cached: Optional[Valuation],
    config: TrackerConfig,
    status: str = "Connection Limited",
) -> bool:
    """Show the last good valuation, marked as cached, after a failed fetch."""
    if cached is None:
        value = format_usd_value(0.0)
        percent = format_percentage(0.0, config.fundraising_goal)
    else:
        value, percent = cached.formatted_value, cached.formatted_percent
    logger.warning("Rendering cached treasury value", extra={"value": value})
    return update_display(
        display,
        value + CACHED_MARKER,
        percent + CACHED_MARKER,
        status,
        is_error=True,
    )
