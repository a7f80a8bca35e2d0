"""TaxRule aggregate and the AppliedTax record it produces.

Tax rules are administered independently of any order; the pricing
engine only ever sees a snapshot of the active ones.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from shop_pricing.domain.exceptions import InvalidRuleError, ValidationError
from shop_pricing.domain.model.value_objects import AppliesTo, normalize_rate


class TaxType(Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"

    @classmethod
    def parse(cls, raw: str) -> TaxType:
        try:
            return cls((raw or "").strip().lower())
        except ValueError:
            raise InvalidRuleError(f"Unknown tax type: {raw!r}") from None


@dataclass
class TaxRule:
    """A single levy.

    Use ``TaxRule.create()`` for new rules; it validates the record.
    The ``__init__`` stays simple so repositories can reconstitute
    stored rules as-is.
    """

    id: str
    name: str
    type: TaxType
    applies_to: AppliesTo
    rate: Decimal
    is_active: bool = True

    @staticmethod
    def create(
        id: str,
        name: str,
        type: TaxType,
        applies_to: AppliesTo,
        rate: Decimal,
        is_active: bool = True,
    ) -> TaxRule:
        if not name or not name.strip():
            raise ValidationError("Tax rule name is required")
        if rate < 0:
            raise ValidationError(f"Tax rate cannot be negative, got {rate}")
        if type is TaxType.PERCENTAGE and normalize_rate(rate) > 1:
            raise ValidationError(f"Percentage tax rate cannot exceed 100, got {rate}")
        return TaxRule(
            id=id,
            name=name.strip(),
            type=type,
            applies_to=applies_to,
            rate=rate,
            is_active=is_active,
        )

    @property
    def normalized_rate(self) -> Decimal:
        """Fraction for percentage rules; the flat amount for fixed rules."""
        if self.type is TaxType.PERCENTAGE:
            return normalize_rate(self.rate)
        return self.rate

    def activate(self) -> None:
        self.is_active = True

    def deactivate(self) -> None:
        self.is_active = False


@dataclass(frozen=True)
class AppliedTax:
    """One line of the itemized tax breakdown."""

    id: str
    name: str
    type: TaxType
    applies_to: AppliesTo
    rate: Decimal
    amount: Decimal
