from __future__ import annotations
from typing import List
from engine.treasury_engine import Valuation
from engine.valuation_engine import lookup_price
from holdings.holding import PriceMap

def explain_valuation(valuation: Valuation, price_map: PriceMap) -> List[str]:
    lines = []
    for mint, usd in sorted(valuation.mint_values.items(), key=lambda kv: -kv[1]):
        price = lookup_price(price_map, mint)
        lines.append(f"{mint}: {valuation.aggregated[mint]:,.6g} x ${price:,.4f} = ${usd:,.2f}")
    for mint in valuation.unpriced_mints:
        lines.append(f"{mint}: {valuation.aggregated[mint]:,.6g} (no price, excluded)")
    return lines
