"""Result records produced by the pricing engine.

All of them are immutable and carry amounts already rounded to two
places, so the caller can display and persist them without re-rounding.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from shop_pricing.domain.model.tax_rule import AppliedTax
from shop_pricing.domain.model.value_objects import Money


@dataclass(frozen=True)
class DiscountResult:
    """Outcome of a successful discount evaluation.

    ``discount_amount`` is what the customer saved (shown on the summary).
    ``product_discount`` is the part of it taken off the product subtotal;
    shipping discounts are realized through ``adjusted_delivery_fee``.
    """

    code: str
    discount_amount: Money
    adjusted_delivery_fee: Money
    product_discount: Money


@dataclass(frozen=True)
class TaxComputation:
    total: Money
    breakdown: tuple[AppliedTax, ...]
    effective_rate: Decimal  # display only, never used to recompute total


@dataclass(frozen=True)
class PricingResult:
    subtotal: Money
    discount_amount: Money
    adjusted_delivery_fee: Money
    tax_total: Money
    tax_breakdown: tuple[AppliedTax, ...]
    effective_tax_rate: Decimal
    grand_total: Money
    discount_code: str | None = None
