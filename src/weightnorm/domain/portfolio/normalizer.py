"""
Fixed-point weight normalizer.

Turns raw basis-point weights into a distribution that respects per-entry
bounds, zeroes inactive entries and sums to a target total. Three phases run
in order:

1. Clamp every active weight into [min, max]; inactive weights become 0.
   If the clamped total already equals the target, return immediately.
2. Rebalance the residual: push it into the largest active weight first
   (ties go to the lowest index), then sweep the remaining entries in index
   order, each absorbing what its headroom allows.
3. Correct: if still off target, move the whole shortfall onto the single
   entry with the greatest headroom in the needed direction, but only when
   that headroom covers it.

When the bounds make the target unreachable the result is returned off
target. That is a value, not an error: callers must check the sum before
acting on it.

The functions here are pure. They keep no state and never log.
"""
from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

from weightnorm.domain.portfolio.errors import InputMismatch
from weightnorm.domain.portfolio.types import BPS_DENOMINATOR, Entry


Headroom = Callable[[int], int]


def normalize(
    raw_weights: Sequence[int],
    min_weights: Sequence[int],
    max_weights: Sequence[int],
    active: Sequence[bool],
    target: int = BPS_DENOMINATOR,
) -> List[int]:
    """
    Normalize `raw_weights` into bounded weights summing to `target`.

    Raises InputMismatch if the four sequences differ in length or the
    target is not strictly positive. Any other outcome, including an
    unreachable target, is returned as a list of the same length.
    """
    _check_lengths(raw_weights, min_weights, max_weights, active)
    if target <= 0:
        raise InputMismatch(f"target must be a positive number of bps, got {target}")

    flags = [bool(a) for a in active]
    weights = _clamp(raw_weights, min_weights, max_weights, flags)

    total = _active_total(weights, flags)
    if total == target:
        return weights

    def up(i: int) -> int:
        return max_weights[i] - weights[i] if max_weights[i] > weights[i] else 0

    def down(i: int) -> int:
        return weights[i] - min_weights[i] if weights[i] > min_weights[i] else 0

    if total < target:
        _rebalance(weights, flags, target - total, up, +1)
    else:
        _rebalance(weights, flags, total - target, down, -1)

    _correct(weights, flags, target, up, down)
    return weights


def normalize_entries(entries: Sequence[Entry], target: int = BPS_DENOMINATOR) -> List[int]:
    """Same as `normalize`, over a sequence of Entry records."""
    return normalize(
        [e.raw_weight for e in entries],
        [e.min_weight for e in entries],
        [e.max_weight for e in entries],
        [e.active for e in entries],
        target,
    )


def reachable_range(
    min_weights: Sequence[int],
    max_weights: Sequence[int],
    active: Sequence[bool],
) -> Tuple[int, int]:
    """Return (sum of active minimums, sum of active maximums)."""
    if len(min_weights) != len(max_weights) or len(min_weights) != len(active):
        raise InputMismatch(
            f"length mismatch: min={len(min_weights)} max={len(max_weights)} "
            f"active={len(active)}"
        )
    lo = sum(m for m, a in zip(min_weights, active) if a)
    hi = sum(m for m, a in zip(max_weights, active) if a)
    return lo, hi


def is_reachable(
    min_weights: Sequence[int],
    max_weights: Sequence[int],
    active: Sequence[bool],
    target: int = BPS_DENOMINATOR,
) -> bool:
    lo, hi = reachable_range(min_weights, max_weights, active)
    return lo <= target <= hi


# ---------------------------------------------------------------------------
# phases
# ---------------------------------------------------------------------------

def _check_lengths(
    raw_weights: Sequence[int],
    min_weights: Sequence[int],
    max_weights: Sequence[int],
    active: Sequence[bool],
) -> None:
    n = len(raw_weights)
    if len(min_weights) != n or len(max_weights) != n or len(active) != n:
        raise InputMismatch(
            f"length mismatch: raw={n} min={len(min_weights)} "
            f"max={len(max_weights)} active={len(active)}"
        )


def _clamp(
    raw_weights: Sequence[int],
    min_weights: Sequence[int],
    max_weights: Sequence[int],
    active: Sequence[bool],
) -> List[int]:
    out: List[int] = []
    for raw, lo, hi, on in zip(raw_weights, min_weights, max_weights, active):
        if not on:
            out.append(0)
        elif raw < lo:
            out.append(int(lo))
        elif raw > hi:
            out.append(int(hi))
        else:
            out.append(int(raw))
    return out


def _active_total(weights: Sequence[int], active: Sequence[bool]) -> int:
    return sum(w for w, on in zip(weights, active) if on)


def _largest_active(weights: Sequence[int], active: Sequence[bool]) -> Optional[int]:
    # strict '>' keeps the lowest index among equal maxima
    best: Optional[int] = None
    for i, w in enumerate(weights):
        if not active[i]:
            continue
        if best is None or w > weights[best]:
            best = i
    return best


def _rebalance(
    weights: List[int],
    active: Sequence[bool],
    amount: int,
    headroom: Headroom,
    sign: int,
) -> None:
    largest = _largest_active(weights, active)
    if largest is None:
        return

    take = min(amount, headroom(largest))
    weights[largest] += sign * take
    amount -= take

    for i in range(len(weights)):
        if amount == 0:
            return
        if not active[i]:
            continue
        take = min(amount, headroom(i))
        if take:
            weights[i] += sign * take
            amount -= take


def _correct(
    weights: List[int],
    active: Sequence[bool],
    target: int,
    up: Headroom,
    down: Headroom,
) -> None:
    total = _active_total(weights, active)
    if total == target:
        return

    if total < target:
        shortfall, headroom, sign = target - total, up, +1
    else:
        shortfall, headroom, sign = total - target, down, -1

    best: Optional[int] = None
    best_room = 0
    for i in range(len(weights)):
        if not active[i]:
            continue
        room = headroom(i)
        if best is None or room > best_room:
            best, best_room = i, room

    # single-entry fixup only; anything else stays off target
    if best is not None and best_room >= shortfall:
        weights[best] += sign * shortfall
