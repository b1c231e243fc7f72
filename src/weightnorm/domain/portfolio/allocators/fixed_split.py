from __future__ import annotations

from typing import List, Sequence, Tuple

from weightnorm.application.plugins.registry import register_allocator
from weightnorm.domain.portfolio.allocators.base import BaseAllocator
from weightnorm.domain.portfolio.types import BPS_DENOMINATOR, AssetSpec


DEFAULT_SPLITS: Tuple[int, ...] = (6000, 4000)


@register_allocator(name="fixed_split", tags={"default"})
class FixedSplitAllocator(BaseAllocator):
    """
    Fixed split over the leading assets, e.g. 60/40. Splits are expressed in
    bps of 10000 and scaled to the requested target. Assets beyond the split
    and inactive assets get 0; the normalizer hands their share to whoever
    still has headroom.
    """
    def __init__(self, splits: Sequence[int] = DEFAULT_SPLITS) -> None:
        self.splits = tuple(int(s) for s in splits)

    def raw_weights(self, assets: Sequence[AssetSpec], target: int) -> List[int]:
        if len(assets) < 2:
            raise ValueError("Need at least 2 assets")

        out: List[int] = []
        for i, asset in enumerate(assets):
            if i >= len(self.splits) or not asset.active:
                out.append(0)
            else:
                out.append(self.splits[i] * target // BPS_DENOMINATOR)
        return out
