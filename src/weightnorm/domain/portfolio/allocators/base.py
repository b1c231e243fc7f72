from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence

from weightnorm.domain.portfolio.types import AssetSpec


class BaseAllocator(ABC):
    """Abstract base class for allocator plugins producing raw bps weights."""

    # Set by decorator
    name: str = ""
    tags: set[str] = set()

    @abstractmethod
    def raw_weights(self, assets: Sequence[AssetSpec], target: int) -> List[int]:
        """
        Raw weights, one per asset and in the same order. Bounds are not
        enforced here; the normalizer takes care of that.
        """
        raise NotImplementedError
