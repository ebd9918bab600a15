from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional
import math
import yaml

SOL_MINT = "So11111111111111111111111111111111111111112"


class ConfigError(ValueError):
    """Raised when the tracker configuration cannot be used."""

    pass


def load_yaml(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@dataclass(frozen=True)
class TrackerConfig:
    fundraising_goal: float
    quote_mints: FrozenSet[str]
    native_mint: str = SOL_MINT
    address: Optional[str] = None

    def __post_init__(self) -> None:
        validate_goal(self.fundraising_goal)

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> "TrackerConfig":
        section = raw.get("treasury") if isinstance(raw, dict) else None
        if not isinstance(section, dict):
            raise ConfigError("Missing 'treasury' section")
        if "fundraising_goal" not in section:
            raise ConfigError("Missing treasury.fundraising_goal")
        goal = section["fundraising_goal"]
        if isinstance(goal, bool):
            raise ConfigError(f"fundraising_goal must be a number, got {goal!r}")
        try:
            goal = float(goal)
        except (TypeError, ValueError):
            raise ConfigError(f"fundraising_goal must be a number, got {goal!r}") from None
        native = section.get("native_mint") or SOL_MINT
        quotes = section.get("quote_mints") or [native]
        if not isinstance(quotes, (list, tuple)):
            raise ConfigError("quote_mints must be a list of mint addresses")
        return cls(
            fundraising_goal=goal,
            quote_mints=frozenset(str(m) for m in quotes),
            native_mint=str(native),
            address=section.get("address"),
        )


def validate_goal(goal: float) -> None:
    if isinstance(goal, bool) or not isinstance(goal, (int, float)):
        raise ConfigError(f"fundraising_goal must be a number, got {goal!r}")
    if not math.isfinite(goal) or goal <= 0:
        raise ConfigError(f"fundraising_goal must be positive, got {goal}")


def load_config(path: str | Path = "config/tracker.yaml") -> TrackerConfig:
    return TrackerConfig.from_raw(load_yaml(path))
