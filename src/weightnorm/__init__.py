"""Bounded basis-point weight normalization for rebalancing strategies."""
from weightnorm.domain.portfolio.errors import (
    InputMismatch,
    InvariantViolation,
    OffTargetAllocation,
    WeightNormError,
)
from weightnorm.domain.portfolio.normalizer import (
    is_reachable,
    normalize,
    normalize_entries,
    reachable_range,
)
from weightnorm.domain.portfolio.types import BPS_DENOMINATOR, Entry

__all__ = [
    "BPS_DENOMINATOR",
    "Entry",
    "InputMismatch",
    "InvariantViolation",
    "OffTargetAllocation",
    "WeightNormError",
    "is_reachable",
    "normalize",
    "normalize_entries",
    "reachable_range",
]
