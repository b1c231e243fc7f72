from __future__ import annotations

from typing import List, Sequence

from weightnorm.application.plugins.registry import register_allocator
from weightnorm.domain.portfolio.allocators.base import BaseAllocator
from weightnorm.domain.portfolio.types import AssetSpec


@register_allocator(name="equal_weight", tags={"default"})
class EqualWeightAllocator(BaseAllocator):
    """
    Gives every active asset the same floor share of the target; inactive
    assets get 0. The division remainder is left for the normalizer to place.
    """
    def raw_weights(self, assets: Sequence[AssetSpec], target: int) -> List[int]:
        n_active = sum(1 for a in assets if a.active)
        if n_active == 0:
            # nothing to do
            return [0] * len(assets)

        w = target // n_active
        return [w if a.active else 0 for a in assets]
