from __future__ import annotations
from typing import Dict, Any
from common.config_loader import TrackerConfig
from engine.treasury_engine import Valuation

def valuation_summary(valuation: Valuation, config: TrackerConfig) -> Dict[str, Any]:
    return {
        "address": config.address,
        "total_usd": valuation.total_usd,
        "quote_usd": valuation.quote_usd,
        "value": valuation.formatted_value,
        "percent": valuation.formatted_percent,
        "goal": config.fundraising_goal,
        "holdings": dict(sorted(valuation.aggregated.items())),
        "unpriced_mints": valuation.unpriced_mints,
    }
