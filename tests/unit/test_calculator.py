"""Unit tests for calculator.py — per-item limits, clamping, totals."""
from decimal import Decimal

import pytest

from loan_partner.calculator import (
    compute_calculated_amt,
    compute_final_amt,
    evaluate,
    format_amount,
    total_limit,
)
from loan_partner.registry import Property

ZERO = Decimal("0")


class TestCalculatedAmount:
    @pytest.mark.parametrize("appraisal,ltv,expected", [
        (Decimal("100000"), Decimal("70"), Decimal("70000")),
        (Decimal("500000"), Decimal("60"), Decimal("300000")),
        # 12345 * 0.7 = 8641.5 → floor
        (Decimal("12345"), Decimal("70"), Decimal("8641")),
        (Decimal("999"), Decimal("33.3"), Decimal("332")),
        (ZERO, Decimal("70"), ZERO),
    ])
    def test_floor_of_appraisal_times_ltv(self, appraisal, ltv, expected):
        assert compute_calculated_amt(appraisal, ltv) == expected

    def test_result_is_integral(self):
        result = compute_calculated_amt(Decimal("1234.56"), Decimal("70"))
        assert result == result.to_integral_value()

    def test_negative_appraisal_not_clamped(self):
        # -1000 * 0.75 = -750; kept as-is for auditability
        assert compute_calculated_amt(Decimal("-1000"), Decimal("75")) == Decimal("-750")

    def test_ltv_above_hundred_not_rejected(self):
        assert compute_calculated_amt(Decimal("1000"), Decimal("120")) == Decimal("1200")


class TestFinalAmount:
    def test_deduction_subtracted(self):
        assert compute_final_amt(Decimal("300000"), Decimal("20000")) == Decimal("280000")

    def test_clamped_at_zero(self):
        assert compute_final_amt(Decimal("70000"), Decimal("80000")) == ZERO

    def test_negative_calculated_clamped(self):
        assert compute_final_amt(Decimal("-750"), ZERO) == ZERO

    @pytest.mark.parametrize("appraisal,ltv,deduction", [
        (Decimal("0"), Decimal("0"), Decimal("0")),
        (Decimal("1"), Decimal("1"), Decimal("1000")),
        (Decimal("850000"), Decimal("100"), Decimal("0")),
        (Decimal("123456"), Decimal("45.5"), Decimal("99999")),
    ])
    def test_never_negative_for_non_negative_inputs(self, appraisal, ltv, deduction):
        calculated = compute_calculated_amt(appraisal, ltv)
        assert compute_final_amt(calculated, deduction) >= ZERO


class TestEvaluate:
    def test_property_limit(self):
        prop = Property(
            id="a",
            appraisal_value=Decimal("500000"),
            item_ltv=Decimal("60"),
            senior_deduction=Decimal("20000"),
        )
        limit = evaluate(prop)
        assert limit.property is prop
        assert limit.calculated_amt == Decimal("300000")
        assert limit.final_amt == Decimal("280000")

    def test_evaluate_reflects_mutation(self):
        prop = Property(id="a", appraisal_value=Decimal("100000"))
        assert evaluate(prop).final_amt == Decimal("70000")
        prop.item_ltv = Decimal("50")
        assert evaluate(prop).final_amt == Decimal("50000")


class TestTotalLimit:
    def test_sum_of_final_amounts(self):
        limits = [
            evaluate(Property(id="a")),
            evaluate(Property(id="b", appraisal_value=Decimal("500000"), item_ltv=Decimal("60"),
                              senior_deduction=Decimal("20000"))),
            evaluate(Property(id="c", appraisal_value=Decimal("100000"), senior_deduction=Decimal("90000"))),
        ]
        assert total_limit(limits) == Decimal("280000")

    def test_empty_is_zero(self):
        assert total_limit([]) == ZERO


class TestFormatAmount:
    def test_groups_digits(self):
        assert format_amount(Decimal("1234567")) == "1,234,567"

    def test_keeps_fraction(self):
        assert format_amount(Decimal("1234.5")) == "1,234.5"

    def test_zero(self):
        assert format_amount(ZERO) == "0"
