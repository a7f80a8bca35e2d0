"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world. Money values are
formatted as plain two-place decimal strings (e.g. "1085.00") so what is
displayed and what is persisted match what the engine computed.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CartItemSpec:
    """Input: one cart line as collected by the checkout or order composer."""

    product_id: str
    unit_price: str
    quantity: int


@dataclass(frozen=True)
class AppliedTaxDTO:
    id: str
    name: str
    type: str
    applies_to: str
    rate: str
    amount: str


@dataclass(frozen=True)
class QuoteDTO:
    """Output: a priced order, ready to render or to attach to an order record."""

    currency: str
    subtotal: str
    discount_code: str | None
    discount_amount: str
    delivery_fee: str
    adjusted_delivery_fee: str
    tax_amount: str
    tax_rate: str  # effective rate, display only
    tax_breakdown: list[AppliedTaxDTO]
    grand_total: str
    discount_error: str | None = None

    def order_fields(self) -> dict:
        """The pricing fields persisted on the order record."""
        return {
            "discount_code": self.discount_code,
            "discount_amount": self.discount_amount,
            "adjusted_delivery_fee": self.adjusted_delivery_fee,
            "tax_amount": self.tax_amount,
            "tax_rate": self.tax_rate,
            "tax_breakdown": [
                {
                    "id": t.id,
                    "name": t.name,
                    "type": t.type,
                    "applies_to": t.applies_to,
                    "rate": t.rate,
                    "amount": t.amount,
                }
                for t in self.tax_breakdown
            ],
            "total": self.grand_total,
        }


@dataclass(frozen=True)
class TaxRuleDTO:
    id: str
    name: str
    type: str
    applies_to: str
    rate: str
    is_active: bool


@dataclass(frozen=True)
class DiscountRuleDTO:
    id: str
    code: str
    type: str
    value: str
    applies_to: str
    minimum_amount: str
    maximum_discount: str | None
    valid_from: str
    valid_until: str | None
    usage_limit: int | None
    used_count: int
    is_active: bool
