"""Token holdings and price maps as handed to the valuation pipeline.

Holdings come from an account-balance scan and are not trusted: a record
may lack a mint or carry a non-numeric, zero or negative amount. Nothing
here validates them; filtering is the valuation engine's job.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List

import pandas as pd

from common.config_loader import load_yaml

LAMPORTS_PER_SOL = 1_000_000_000

# mint -> {"price": "<numeric string>"}
PriceMap = Dict[str, Dict[str, Any]]
# mint -> aggregated positive amount
MintAmountMap = Dict[str, float]


@dataclass(frozen=True)
class TokenHolding:
    mint: Any  # token mint address; may be None/invalid
    amount: Any  # token units; may be invalid

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "TokenHolding":
        return cls(mint=record.get("mint"), amount=record.get("amount"))


def native_balance_holding(lamports: Any, mint: str) -> TokenHolding:
    """Holding for a native SOL balance reported in lamports."""
    if isinstance(lamports, int) and not isinstance(lamports, bool):
        return TokenHolding(mint=mint, amount=lamports / LAMPORTS_PER_SOL)
    return TokenHolding(mint=mint, amount=lamports)


def holdings_from_records(records: Iterable[Any]) -> List[TokenHolding]:
    out: List[TokenHolding] = []
    for r in records:
        if isinstance(r, TokenHolding):
            out.append(r)
        elif isinstance(r, dict):
            out.append(TokenHolding.from_record(r))
        else:
            out.append(TokenHolding(mint=None, amount=None))
    return out


def _holdings_from_csv(path: Path) -> List[TokenHolding]:
    df = pd.read_csv(path, dtype={"mint": str}, skipinitialspace=True)
    if "mint" not in df.columns or "amount" not in df.columns:
        raise ValueError(f"{path}: CSV must contain 'mint' and 'amount' columns")
    df["amount"] = pd.to_numeric(df["amount"], errors="coerce")
    holdings = []
    for mint, amount in zip(df["mint"], df["amount"]):
        holdings.append(TokenHolding(
            mint=None if pd.isna(mint) else mint,
            amount=None if pd.isna(amount) else float(amount),
        ))
    return holdings


def load_holdings(path: str | Path) -> List[TokenHolding]:
    """Load holdings from a CSV (mint,amount) or YAML/JSON (`holdings:` list) file."""
    p = Path(path)
    if p.suffix.lower() == ".csv":
        return _holdings_from_csv(p)
    raw = load_yaml(p)
    records = raw.get("holdings") if isinstance(raw, dict) else raw
    if not isinstance(records, list):
        raise ValueError(f"{p}: expected a 'holdings' list")
    return holdings_from_records(records)


def load_price_map(path: str | Path) -> PriceMap:
    """Load a price map; accepts the bare map or a price-feed `{"data": {...}}` envelope."""
    raw = load_yaml(path)
    if isinstance(raw, dict) and isinstance(raw.get("data"), dict):
        raw = raw["data"]
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping of mint -> price entry")
    return {str(k): v for k, v in raw.items()}
