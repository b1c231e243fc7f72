from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from weightnorm.domain.portfolio.allocators.base import BaseAllocator
from weightnorm.domain.portfolio.errors import OffTargetAllocation
from weightnorm.domain.portfolio.invariants import (
    check_weight_bounds,
    check_weight_sum,
)
from weightnorm.domain.portfolio.normalizer import normalize, reachable_range
from weightnorm.domain.portfolio.types import (
    BPS_DENOMINATOR,
    AssetSpec,
    TargetAllocation,
)
from weightnorm.shared.decorators import logged

_log = logging.getLogger(__name__)


@dataclass(slots=True)
class AllocationService:
    """Runs an allocator and normalizes its raw weights into a TargetAllocation."""

    allocator: BaseAllocator
    target: int = BPS_DENOMINATOR

    @logged
    def build(self, assets: Sequence[AssetSpec]) -> TargetAllocation:
        assets = list(assets)
        mins = [a.min_weight for a in assets]
        maxs = [a.max_weight for a in assets]
        flags = [a.active for a in assets]

        raw = self.allocator.raw_weights(assets, self.target)
        final = normalize(raw, mins, maxs, flags, self.target)
        allocation = TargetAllocation(
            weights={a.symbol: w for a, w in zip(assets, final)},
            target=self.target,
        )

        lo, hi = reachable_range(mins, maxs, flags)
        _log.debug(
            "allocator=%s raw=%s final=%s reachable=[%d, %d]",
            self.allocator.name, raw, final, lo, hi,
        )
        if not allocation.on_target:
            _log.warning(
                "allocation off target: sum=%d target=%d reachable=[%d, %d]",
                allocation.total, self.target, lo, hi,
            )
        return allocation

    def require_on_target(self, assets: Sequence[AssetSpec]) -> TargetAllocation:
        """
        Like `build`, but refuses a best-effort result and re-verifies the
        bounds before handing the allocation out.
        """
        assets = list(assets)
        allocation = self.build(assets)
        if not allocation.on_target:
            raise OffTargetAllocation(total=allocation.total, target=self.target)

        weights = [allocation.weights[a.symbol] for a in assets]
        check_weight_sum(weights, self.target)
        check_weight_bounds(
            weights,
            [a.min_weight for a in assets],
            [a.max_weight for a in assets],
            [a.active for a in assets],
        )
        return allocation
