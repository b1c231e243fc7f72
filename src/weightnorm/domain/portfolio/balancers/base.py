from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping

from weightnorm.domain.portfolio.types import (
    RebalanceInstruction,
    Symbol,
    TargetAllocation,
)


class BaseBalancer(ABC):
    """Abstract base class for portfolio balancer / rebalancer plugins."""

    # Set by decorator
    name: str = ""
    tags: set[str] = set()

    @abstractmethod
    def plan(
        self,
        current: Mapping[Symbol, int],
        target: TargetAllocation,
        threshold_bps: int = 100,
    ) -> list[RebalanceInstruction]:
        raise NotImplementedError
