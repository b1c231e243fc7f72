from __future__ import annotations


class WeightNormError(ValueError):
    """Base class for weight allocation errors."""


class InputMismatch(WeightNormError):
    """
    Raised when the parallel weight sequences disagree in length or the
    target total is zero. This is a caller configuration bug; fix the inputs.
    """


class InvariantViolation(WeightNormError):
    """Raised by the post-condition checks in `invariants`."""


class OffTargetAllocation(WeightNormError):
    """
    Raised by callers that refuse to act on a best-effort allocation whose
    weights do not sum to the target.
    """

    def __init__(self, total: int, target: int) -> None:
        super().__init__(
            f"Allocation is off target: sum is {total}, expected {target}."
        )
        self.total = total
        self.target = target
