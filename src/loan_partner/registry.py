"""Collateral registry: the ordered set of Property records behind a loan.

The registry owns every Property. Field edits go through ``update`` so the
category invariant (minor category belongs to the major category) holds, and
numeric input is coerced rather than rejected.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from .calculator import PropertyLimit, evaluate, total_limit
from .categories import default_minor_of, is_valid_pair, minor_categories_of
from .config import (
    DEFAULT_ITEM_LTV,
    DEFAULT_MAJOR_CATEGORY,
    DEFAULT_MINOR_CATEGORY,
    MAX_AMOUNT_EXPONENT,
    ZERO,
)

logger = logging.getLogger(__name__)

_NUMERIC_FIELDS = frozenset({"appraisal_value", "item_ltv", "senior_deduction"})
_TEXT_FIELDS = frozenset({"lot_number", "usage"})


def coerce_amount(value: Any) -> Decimal:
    """Best-effort numeric parse; anything unparseable becomes 0.

    Accepts ints, floats, Decimals and text such as ``"1,250,000"``. Values
    beyond 10**MAX_AMOUNT_EXPONENT in magnitude are treated as malformed.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    else:
        text = str(value).replace(",", "").replace(" ", "").strip()
        if not text:
            return ZERO
        try:
            result = Decimal(text)
        except InvalidOperation:
            logger.warning("Coerced malformed amount %r to 0", value)
            return ZERO
    if not result.is_finite():
        logger.warning("Coerced non-finite amount %r to 0", value)
        return ZERO
    if result and result.adjusted() > MAX_AMOUNT_EXPONENT:
        logger.warning("Coerced out-of-range amount %r to 0", value)
        return ZERO
    return result


@dataclass
class Property:
    """One collateral item. Amounts are in thousands of won."""
    id: str
    lot_number: str = ""
    usage: str = ""
    major_category: str = DEFAULT_MAJOR_CATEGORY
    minor_category: str = DEFAULT_MINOR_CATEGORY
    appraisal_value: Decimal = ZERO
    item_ltv: Decimal = DEFAULT_ITEM_LTV
    senior_deduction: Decimal = ZERO


_PATCHABLE = frozenset(f.name for f in fields(Property)) - {"id"}


class _IdSource:
    """Millisecond timestamps, bumped so no id is ever handed out twice."""

    def __init__(self) -> None:
        self._last = 0

    def next(self) -> str:
        candidate = time.time_ns() // 1_000_000
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return str(candidate)


class CollateralRegistry:
    def __init__(self) -> None:
        self._properties: list[Property] = []
        self._ids = _IdSource()
        self._issued: set[str] = set()

    # ── Mutations ─────────────────────────────────────────────────────────────

    def add(self, property_id: Optional[str] = None, **initial: Any) -> str:
        """Append a new Property and return its id.

        *property_id* is only honoured when it has never been used in this
        registry; otherwise a fresh id is generated.
        """
        if property_id is None or property_id in self._issued:
            property_id = self._ids.next()
            while property_id in self._issued:
                property_id = self._ids.next()
        self._issued.add(property_id)

        prop = Property(id=property_id)
        self._properties.append(prop)
        if initial:
            self._apply(prop, initial)
        logger.info("Added collateral %s", property_id)
        return property_id

    def update(self, property_id: str, patch: Mapping[str, Any]) -> bool:
        """Apply a partial field update. Returns False when the id is unknown."""
        prop = self.get(property_id)
        if prop is None:
            logger.warning("Update skipped: no collateral %s", property_id)
            return False
        self._apply(prop, patch)
        return True

    def remove(self, property_id: str) -> bool:
        for index, prop in enumerate(self._properties):
            if prop.id == property_id:
                del self._properties[index]
                logger.info("Removed collateral %s", property_id)
                return True
        return False

    def _apply(self, prop: Property, patch: Mapping[str, Any]) -> None:
        for name in patch:
            if name not in _PATCHABLE:
                logger.warning("Ignored unknown collateral field %r", name)

        if "major_category" in patch:
            major = str(patch["major_category"])
            if minor_categories_of(major):
                prop.major_category = major
                prop.minor_category = default_minor_of(major)
            else:
                logger.warning("Rejected unknown major category %r", major)

        if "minor_category" in patch:
            minor = str(patch["minor_category"])
            if is_valid_pair(prop.major_category, minor):
                prop.minor_category = minor
            else:
                logger.warning(
                    "Rejected minor category %r for %s", minor, prop.major_category
                )

        for name in _TEXT_FIELDS & patch.keys():
            value = patch[name]
            setattr(prop, name, "" if value is None else str(value))

        for name in _NUMERIC_FIELDS & patch.keys():
            setattr(prop, name, coerce_amount(patch[name]))

    # ── Queries ───────────────────────────────────────────────────────────────

    def get(self, property_id: str) -> Optional[Property]:
        for prop in self._properties:
            if prop.id == property_id:
                return prop
        return None

    def list(self) -> list[PropertyLimit]:
        """Every Property with freshly derived limits, in insertion order."""
        return [evaluate(prop) for prop in self._properties]

    def total_limit(self) -> Decimal:
        return total_limit(self.list())

    def __len__(self) -> int:
        return len(self._properties)

    def __contains__(self, property_id: object) -> bool:
        return any(prop.id == property_id for prop in self._properties)
