from __future__ import annotations

from typing import Mapping

from weightnorm.application.plugins.registry import register_balancer
from weightnorm.domain.portfolio.balancers.base import BaseBalancer
from weightnorm.domain.portfolio.errors import OffTargetAllocation
from weightnorm.domain.portfolio.types import (
    BPS_DENOMINATOR,
    RebalanceInstruction,
    Symbol,
    TargetAllocation,
)


@register_balancer(name="threshold", tags={"default"})
class ThresholdBalancer(BaseBalancer):
    """
    Generates rebalance instructions whenever the difference between the
    current and target weight (in bps) is greater than or equal to a
    configured threshold.

    A target allocation that misses its total is refused outright: acting
    on it would commit an incorrect split.
    """
    def plan(
        self,
        current: Mapping[Symbol, int],
        target: TargetAllocation,
        threshold_bps: int = 100,
    ) -> list[RebalanceInstruction]:
        if not target.on_target:
            raise OffTargetAllocation(total=target.total, target=target.target)

        threshold_bps = max(0, min(BPS_DENOMINATOR, int(threshold_bps)))
        instructions: list[RebalanceInstruction] = []

        symbols = set(target.weights.keys()) | set(current.keys())
        for sym in sorted(symbols):
            current_w = int(current.get(sym, 0))
            target_w = int(target.weights.get(sym, 0))
            delta = target_w - current_w
            if delta == 0 or abs(delta) < threshold_bps:
                continue
            side = "BUY" if delta > 0 else "SELL"
            instructions.append(
                RebalanceInstruction(
                    symbol=sym,
                    from_weight=current_w,
                    to_weight=target_w,
                    delta_weight=delta,
                    side=side,
                )
            )
        return instructions
