"""Loan session state: location, collateral, and the detail-view selection.

``LoanSession`` is the single state container handed to every consumer.
Each kind of mutation has exactly one entry point here; callers never poke
the registry or selector directly.
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Callable, Mapping, Optional

from .calculator import PropertyLimit
from .config import (
    DEFAULT_ANNUAL_INCOME,
    DEFAULT_FIRST_PROPERTY_ID,
    DEFAULT_FIRST_PROPERTY_USAGE,
    DEFAULT_INTEREST_RATE,
)
from .location import LocationSelector
from .registry import CollateralRegistry, Property, coerce_amount

logger = logging.getLogger(__name__)

ConfirmFn = Callable[[Property], bool]


class LoanSession:
    def __init__(
        self,
        location: Optional[LocationSelector] = None,
        registry: Optional[CollateralRegistry] = None,
    ) -> None:
        self.location = location or LocationSelector()
        if registry is None:
            registry = CollateralRegistry()
            registry.add(DEFAULT_FIRST_PROPERTY_ID, usage=DEFAULT_FIRST_PROPERTY_USAGE)
        self.registry = registry
        # Reserved: kept with the loan but not consumed by the limit derivation.
        self.interest_rate: Decimal = DEFAULT_INTEREST_RATE
        self.annual_income: Decimal = DEFAULT_ANNUAL_INCOME
        self.selected_property_id: Optional[str] = None

    # ── Location ──────────────────────────────────────────────────────────────

    def select_city(self, city: str) -> bool:
        return self.location.set_city(city)

    def select_district(self, district: str) -> bool:
        return self.location.set_district(district)

    def select_neighborhood(self, neighborhood: str) -> bool:
        return self.location.set_neighborhood(neighborhood)

    def select_village(self, village: str) -> bool:
        return self.location.set_village(village)

    # ── Collateral ────────────────────────────────────────────────────────────

    def add_property(self, **initial: Any) -> str:
        """Add a collateral item and open it for editing."""
        property_id = self.registry.add(**initial)
        self.selected_property_id = property_id
        return property_id

    def update_property(self, property_id: str, patch: Mapping[str, Any]) -> bool:
        return self.registry.update(property_id, patch)

    def update_selected(self, patch: Mapping[str, Any]) -> bool:
        if self.selected_property_id is None:
            return False
        return self.registry.update(self.selected_property_id, patch)

    def remove_property(self, property_id: str, confirm: ConfirmFn) -> bool:
        """Delete a collateral item once *confirm* approves it. There is no undo."""
        prop = self.registry.get(property_id)
        if prop is None:
            return False
        if not confirm(prop):
            logger.info("Deletion of collateral %s cancelled", property_id)
            return False
        self.registry.remove(property_id)
        if self.selected_property_id == property_id:
            self.selected_property_id = None
        return True

    def set_interest_rate(self, value: Any) -> None:
        self.interest_rate = coerce_amount(value)

    def set_annual_income(self, value: Any) -> None:
        self.annual_income = coerce_amount(value)

    # ── Selection ─────────────────────────────────────────────────────────────

    def open(self, property_id: str) -> bool:
        if property_id not in self.registry:
            logger.warning("Cannot open unknown collateral %s", property_id)
            return False
        self.selected_property_id = property_id
        return True

    def close(self) -> None:
        # Edits are applied in place, so closing doubles as "save".
        self.selected_property_id = None

    def selected_property(self) -> Optional[Property]:
        if self.selected_property_id is None:
            return None
        return self.registry.get(self.selected_property_id)

    # ── Derived ───────────────────────────────────────────────────────────────

    def limits(self) -> list[PropertyLimit]:
        return self.registry.list()

    def total_limit(self) -> Decimal:
        return self.registry.total_limit()
