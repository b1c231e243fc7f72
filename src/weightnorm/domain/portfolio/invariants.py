"""
Post-condition checks for basis-point allocations.

A caller runs these against the normalizer's output before committing an
allocation change. Each check raises InvariantViolation on failure.
"""
from __future__ import annotations

from typing import Optional, Sequence

from weightnorm.domain.portfolio.errors import InputMismatch, InvariantViolation
from weightnorm.domain.portfolio.types import BPS_DENOMINATOR


def check_weight_sum(weights: Sequence[int], expected_sum: int = BPS_DENOMINATOR) -> None:
    total = sum(weights)
    if total != expected_sum:
        raise InvariantViolation(
            f"Weight sum invariant violated: sum is {total}, expected {expected_sum}. "
            f"Weights: [{', '.join(str(w) for w in weights)}]"
        )


def check_non_negative_weights(weights: Sequence[int]) -> None:
    for i, w in enumerate(weights):
        if w < 0:
            raise InvariantViolation(
                f"Non-negative weight invariant violated at index {i}: weight is {w}"
            )


def check_inactive_zero(weights: Sequence[int], active: Sequence[bool]) -> None:
    if len(weights) != len(active):
        raise InputMismatch("Array length mismatch in inactive weight check")
    for i, (w, on) in enumerate(zip(weights, active)):
        if not on and w != 0:
            raise InvariantViolation(
                f"Inactive weight invariant violated at index {i}: weight is {w}, expected 0"
            )


def check_weight_bounds(
    weights: Sequence[int],
    min_weights: Sequence[int],
    max_weights: Sequence[int],
    active: Optional[Sequence[bool]] = None,
) -> None:
    """
    Every weight must lie in [min, max]. When `active` is given, inactive
    entries are only required to be zero.
    """
    n = len(weights)
    if len(min_weights) != n or len(max_weights) != n:
        raise InputMismatch("Array length mismatch in weight bounds check")
    if active is not None:
        check_inactive_zero(weights, active)

    for i in range(n):
        if active is not None and not active[i]:
            continue
        if weights[i] < min_weights[i]:
            raise InvariantViolation(
                f"Weight bounds violated at index {i}: "
                f"weight {weights[i]} is below minimum {min_weights[i]}"
            )
        if weights[i] > max_weights[i]:
            raise InvariantViolation(
                f"Weight bounds violated at index {i}: "
                f"weight {weights[i]} is above maximum {max_weights[i]}"
            )


def check_value_conservation(before: int, after: int, slippage_bps: int = 50) -> None:
    """Loss from `before` to `after` may not exceed `slippage_bps` of `before`."""
    if after >= before:
        return
    loss = before - after
    loss_bps = (loss * BPS_DENOMINATOR) // before
    if loss_bps > slippage_bps:
        raise InvariantViolation(
            f"Value conservation violated: lost {loss_bps} bps, max allowed {slippage_bps} bps. "
            f"Before: {before}, After: {after}, Loss: {loss}"
        )
