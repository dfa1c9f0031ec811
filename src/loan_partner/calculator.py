"""Collateral loan-limit calculation.

Money is decimal.Decimal throughout; floats never enter the derivation.
Amounts are in thousands of won (천원). The derived figures are recomputed
on every read and never stored on the Property.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal
from typing import TYPE_CHECKING, Iterable

from .config import HUNDRED, ZERO

if TYPE_CHECKING:
    from .registry import Property


@dataclass(frozen=True)
class PropertyLimit:
    property: "Property"
    calculated_amt: Decimal  # floor(appraisal × LTV / 100)
    final_amt: Decimal       # calculated − senior deduction, clamped at 0


def compute_calculated_amt(appraisal_value: Decimal, item_ltv: Decimal) -> Decimal:
    """Return floor(appraisal_value × item_ltv / 100).

    Not clamped: a negative appraisal value yields a negative amount so the
    input stays auditable.
    """
    return (appraisal_value * item_ltv / HUNDRED).to_integral_value(rounding=ROUND_FLOOR)


def compute_final_amt(calculated_amt: Decimal, senior_deduction: Decimal) -> Decimal:
    """Lendable amount after the senior deduction (방공제), never below zero."""
    return max(ZERO, calculated_amt - senior_deduction)


def evaluate(prop: "Property") -> PropertyLimit:
    calculated = compute_calculated_amt(prop.appraisal_value, prop.item_ltv)
    return PropertyLimit(
        property=prop,
        calculated_amt=calculated,
        final_amt=compute_final_amt(calculated, prop.senior_deduction),
    )


def total_limit(limits: Iterable[PropertyLimit]) -> Decimal:
    return sum((limit.final_amt for limit in limits), ZERO)


def format_amount(value: Decimal) -> str:
    """Digit-grouped display string; the value itself is never rounded away."""
    if value == value.to_integral_value():
        return f"{value:,.0f}"
    return f"{value:,}"
