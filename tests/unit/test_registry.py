"""Unit tests for registry.py — add/update/remove/list and input coercion."""
from decimal import Decimal

import pytest

from loan_partner.categories import minor_categories_of
from loan_partner.registry import CollateralRegistry, coerce_amount

ZERO = Decimal("0")


def _registry_with(**fields) -> tuple[CollateralRegistry, str]:
    registry = CollateralRegistry()
    return registry, registry.add(**fields)


class TestCoerceAmount:
    @pytest.mark.parametrize("raw,expected", [
        ("1,250,000", Decimal("1250000")),
        (" 70 ", Decimal("70")),
        (500000, Decimal("500000")),
        (0.5, Decimal("0.5")),
        (Decimal("12.5"), Decimal("12.5")),
        ("-300", Decimal("-300")),
    ])
    def test_parses(self, raw, expected):
        assert coerce_amount(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "", None, "12a", "NaN", "Infinity", float("nan"), True])
    def test_malformed_becomes_zero(self, raw):
        assert coerce_amount(raw) == ZERO

    @pytest.mark.parametrize("raw", ["1e999999", "-1e999999", Decimal("1E+400"), 10 ** 5000, "9" * 40],
                             ids=["str-1e999999", "str-neg-1e999999", "decimal-1e400", "int-10pow5000", "str-forty-nines"])
    def test_out_of_range_becomes_zero(self, raw):
        assert coerce_amount(raw) == ZERO

    def test_upper_bound_still_accepted(self):
        assert coerce_amount("9,999,999,999,999,999") == Decimal("9999999999999999")


class TestAdd:
    def test_defaults(self):
        registry, pid = _registry_with()
        prop = registry.get(pid)
        assert prop.major_category == "주택"
        assert prop.minor_category == "아파트"
        assert prop.item_ltv == Decimal("70")
        assert prop.appraisal_value == ZERO
        assert prop.senior_deduction == ZERO
        assert prop.lot_number == ""

    def test_ids_unique(self):
        registry = CollateralRegistry()
        ids = [registry.add() for _ in range(50)]
        assert len(set(ids)) == 50

    def test_ids_never_reused(self):
        registry = CollateralRegistry()
        first = registry.add()
        registry.remove(first)
        assert registry.add(first) != first

    def test_explicit_id_honoured_once(self):
        registry = CollateralRegistry()
        assert registry.add("1") == "1"
        assert registry.add("1") != "1"

    def test_initial_fields(self):
        registry, pid = _registry_with(appraisal_value="500,000", item_ltv=60, lot_number="101-1")
        prop = registry.get(pid)
        assert prop.appraisal_value == Decimal("500000")
        assert prop.item_ltv == Decimal("60")
        assert prop.lot_number == "101-1"

    def test_insertion_order(self):
        registry = CollateralRegistry()
        ids = [registry.add(lot_number=str(i)) for i in range(3)]
        assert [limit.property.id for limit in registry.list()] == ids


class TestUpdate:
    def test_unknown_id(self):
        registry = CollateralRegistry()
        assert registry.update("missing", {"usage": "x"}) is False

    def test_partial_update(self):
        registry, pid = _registry_with()
        assert registry.update(pid, {"usage": "주거", "appraisal_value": "100000"})
        prop = registry.get(pid)
        assert prop.usage == "주거"
        assert prop.appraisal_value == Decimal("100000")
        assert prop.item_ltv == Decimal("70")

    @pytest.mark.parametrize("major", ["상가", "토지", "공장", "기타", "주택"])
    def test_major_change_resets_minor(self, major):
        registry, pid = _registry_with()
        registry.update(pid, {"minor_category": "다세대"})
        registry.update(pid, {"major_category": major})
        assert registry.get(pid).minor_category == minor_categories_of(major)[0]

    def test_major_and_valid_minor_together(self):
        registry, pid = _registry_with()
        registry.update(pid, {"major_category": "토지", "minor_category": "임야"})
        prop = registry.get(pid)
        assert (prop.major_category, prop.minor_category) == ("토지", "임야")

    def test_major_and_foreign_minor_together(self):
        registry, pid = _registry_with()
        registry.update(pid, {"major_category": "토지", "minor_category": "아파트"})
        assert registry.get(pid).minor_category == "대지"

    def test_unknown_major_rejected(self):
        registry, pid = _registry_with()
        registry.update(pid, {"major_category": "우주선"})
        prop = registry.get(pid)
        assert (prop.major_category, prop.minor_category) == ("주택", "아파트")

    def test_foreign_minor_rejected(self):
        registry, pid = _registry_with()
        registry.update(pid, {"minor_category": "임야"})
        assert registry.get(pid).minor_category == "아파트"

    def test_id_not_patchable(self):
        registry, pid = _registry_with()
        registry.update(pid, {"id": "other"})
        assert registry.get(pid) is not None
        assert registry.get("other") is None

    def test_malformed_number_coerced(self):
        registry, pid = _registry_with(appraisal_value=1000)
        registry.update(pid, {"appraisal_value": "not a number"})
        assert registry.get(pid).appraisal_value == ZERO

    def test_huge_amount_keeps_totals_working(self):
        registry, pid = _registry_with(appraisal_value=100000)
        registry.update(pid, {"appraisal_value": "1e999999"})
        assert registry.get(pid).appraisal_value == ZERO
        assert registry.total_limit() == ZERO
        assert [limit.final_amt for limit in registry.list()] == [ZERO]


class TestRemoveAndList:
    def test_remove(self):
        registry, pid = _registry_with()
        assert registry.remove(pid)
        assert pid not in registry
        assert len(registry) == 0

    def test_remove_absent(self):
        registry = CollateralRegistry()
        assert registry.remove("missing") is False

    def test_list_recomputed_after_edit(self):
        registry, pid = _registry_with(appraisal_value=100000)
        assert registry.list()[0].final_amt == Decimal("70000")
        registry.update(pid, {"senior_deduction": 80000})
        assert registry.list()[0].final_amt == ZERO
        assert registry.list()[0].calculated_amt == Decimal("70000")

    def test_total_limit(self):
        registry = CollateralRegistry()
        registry.add()
        assert registry.total_limit() == ZERO
        registry.add(appraisal_value=500000, item_ltv=60, senior_deduction=20000)
        assert registry.total_limit() == Decimal("280000")

    def test_zero_item_does_not_change_total(self):
        registry = CollateralRegistry()
        registry.add(appraisal_value=100000)
        before = registry.total_limit()
        registry.add(appraisal_value=100000, senior_deduction=100000)
        assert registry.total_limit() == before
