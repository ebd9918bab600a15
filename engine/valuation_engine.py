"""Valuation engine.

Turns raw token holdings and a sparse price map into a USD total.
Aggregation happens first and each mint's aggregate is priced once;
holdings and prices that cannot be used are skipped, never raised.
"""
from __future__ import annotations

import math
import re
from numbers import Real
from typing import Any, Dict, Iterable, Optional

from common.logging_config import get_logger
from holdings.holding import MintAmountMap, PriceMap, TokenHolding

logger = get_logger(__name__)

# Leading decimal number, as parseFloat reads it
_NUMBER_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_float_prefix(text: str) -> Optional[float]:
    """Parse the leading number of `text`; None when there is none."""
    m = _NUMBER_PREFIX.match(text)
    if not m:
        stripped = text.strip()
        if stripped.startswith(("Infinity", "+Infinity")):
            return math.inf
        if stripped.startswith("-Infinity"):
            return -math.inf
        return None
    return float(m.group(1))


def valid_amount(amount: Any) -> bool:
    """True for a finite real number above zero; bools and strings are rejected."""
    if isinstance(amount, bool) or not isinstance(amount, Real):
        return False
    return math.isfinite(amount) and amount > 0


def valid_mint(mint: Any) -> bool:
    """True for a non-empty mint string."""
    return isinstance(mint, str) and len(mint) > 0


def aggregate_by_mint(holdings: Iterable[TokenHolding]) -> MintAmountMap:
    agg: MintAmountMap = {}
    for h in holdings:
        mint = getattr(h, "mint", None)
        amount = getattr(h, "amount", None)
        if not valid_mint(mint) or not valid_amount(amount):
            logger.debug("Skipping holding", extra={"mint": mint, "amount": amount})
            continue
        agg[mint] = agg.get(mint, 0.0) + float(amount)
    return agg


def lookup_price(price_map: PriceMap, mint: str) -> Optional[float]:
    """Finite USD price for `mint`, or None when the entry is unusable."""
    info = price_map.get(mint)
    if not isinstance(info, dict):
        return None
    raw = info.get("price")
    if raw is None or raw == "":
        return None
    if isinstance(raw, bool):
        return None
    if isinstance(raw, Real):
        p: Optional[float] = float(raw)
    elif isinstance(raw, str):
        p = parse_float_prefix(raw)
    else:
        return None
    if p is None or not math.isfinite(p):
        return None
    return p


def price_aggregates(agg: MintAmountMap, price_map: PriceMap) -> Dict[str, float]:
    """USD value per mint for every aggregate that has a usable price."""
    values: Dict[str, float] = {}
    for mint, amount in agg.items():
        p = lookup_price(price_map, mint)
        if p is None:
            logger.warning("No usable price for mint", extra={"mint": mint})
            continue
        values[mint] = amount * p
    return values


def compute_usd_total(holdings: Iterable[TokenHolding], price_map: PriceMap) -> float:
    agg = aggregate_by_mint(holdings)
    return sum(price_aggregates(agg, price_map).values(), 0.0)


def compute_usd_total_per_holding(holdings: Iterable[TokenHolding], price_map: PriceMap) -> float:
    """Price each holding on its own and sum.

    Uses the same holding filter as aggregate_by_mint, so the result matches
    compute_usd_total up to floating-point rounding.
    """
    total = 0.0
    for h in holdings:
        mint = getattr(h, "mint", None)
        amount = getattr(h, "amount", None)
        if not valid_mint(mint) or not valid_amount(amount):
            continue
        p = lookup_price(price_map, mint)
        if p is None:
            continue
        total += float(amount) * p
    return total
