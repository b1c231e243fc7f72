from __future__ import annotations

import unittest

import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from weightnorm.domain.portfolio.errors import InputMismatch, InvariantViolation
from weightnorm.domain.portfolio.invariants import (
    check_inactive_zero,
    check_non_negative_weights,
    check_value_conservation,
    check_weight_bounds,
    check_weight_sum,
)


class TestWeightSum(unittest.TestCase):
    def test_accepts_exact_sum(self) -> None:
        check_weight_sum([7000, 3000])
        check_weight_sum([70, 30], expected_sum=100)

    def test_rejects_off_target(self) -> None:
        with self.assertRaises(InvariantViolation) as ctx:
            check_weight_sum([3000, 3000])
        self.assertIn("sum is 6000", str(ctx.exception))


class TestBounds(unittest.TestCase):
    def test_within_bounds(self) -> None:
        check_weight_bounds([7000, 3000], [6000, 0], [10000, 3000])

    def test_below_minimum(self) -> None:
        with self.assertRaises(InvariantViolation) as ctx:
            check_weight_bounds([5000, 3000], [6000, 0], [10000, 3000])
        self.assertIn("index 0", str(ctx.exception))

    def test_above_maximum(self) -> None:
        with self.assertRaises(InvariantViolation) as ctx:
            check_weight_bounds([6000, 4000], [6000, 0], [10000, 3000])
        self.assertIn("index 1", str(ctx.exception))

    def test_inactive_entries_only_need_to_be_zero(self) -> None:
        check_weight_bounds([10000, 0], [0, 500], [10000, 10000], [True, False])

    def test_inactive_non_zero_fails(self) -> None:
        with self.assertRaises(InvariantViolation):
            check_weight_bounds([9000, 1000], [0, 0], [10000, 10000], [True, False])

    def test_length_mismatch(self) -> None:
        with self.assertRaises(InputMismatch):
            check_weight_bounds([1, 2], [0], [10, 10])


class TestMisc(unittest.TestCase):
    def test_non_negative(self) -> None:
        check_non_negative_weights([0, 1, 2])
        with self.assertRaises(InvariantViolation):
            check_non_negative_weights([1, -1])

    def test_inactive_zero(self) -> None:
        check_inactive_zero([5, 0], [True, False])
        with self.assertRaises(InvariantViolation):
            check_inactive_zero([5, 1], [True, False])

    def test_value_conservation_within_slippage(self) -> None:
        check_value_conservation(1_000_000, 995_000)  # 50 bps
        check_value_conservation(1_000_000, 1_200_000)

    def test_value_conservation_excess_loss(self) -> None:
        with self.assertRaises(InvariantViolation):
            check_value_conservation(1_000_000, 990_000)
        with self.assertRaises(InvariantViolation):
            check_value_conservation(1_000_000, 999_000, slippage_bps=5)


if __name__ == "__main__":
    unittest.main()
