from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


Symbol = str

# 10000 bps == 100.00%
BPS_DENOMINATOR = 10_000


@dataclass(frozen=True)
class Entry:
    """
    One position handed to the normalizer. All weights are integer basis
    points; min_weight <= max_weight is assumed, not checked.
    """
    raw_weight: int
    min_weight: int = 0
    max_weight: int = BPS_DENOMINATOR
    active: bool = True


@dataclass(frozen=True)
class AssetSpec:
    """
    Static description of an asset managed by a strategy: its bounds and
    whether it is currently eligible to receive weight.
    """
    symbol: Symbol
    min_weight: int = 0
    max_weight: int = BPS_DENOMINATOR
    active: bool = True


@dataclass
class TargetAllocation:
    """
    Final allocation in basis points per symbol. `target` is the total the
    weights were normalized towards; a best-effort result may miss it.
    """
    weights: Dict[Symbol, int]
    target: int = BPS_DENOMINATOR

    @property
    def total(self) -> int:
        return sum(self.weights.values())

    @property
    def on_target(self) -> bool:
        return self.total == self.target


@dataclass
class RebalanceInstruction:
    """
    Weight-level rebalance instruction. Conversion to order sizes is the
    job of whatever executes the plan.
    """
    symbol: Symbol
    from_weight: int
    to_weight: int
    delta_weight: int
    side: str  # "BUY" | "SELL"
