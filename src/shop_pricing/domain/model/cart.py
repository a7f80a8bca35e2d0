"""Cart: the transient input to a pricing request.

A cart is built fresh for every quote and never mutated by the engine.
"""

from __future__ import annotations

from dataclasses import dataclass

from shop_pricing.domain.exceptions import ValidationError
from shop_pricing.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity


@dataclass(frozen=True)
class CartLine:
    product_id: str
    unit_price: Money
    quantity: Quantity

    @property
    def line_subtotal(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class Cart:
    """Ordered line items; order does not affect totals."""

    lines: tuple[CartLine, ...]
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        for line in self.lines:
            if line.unit_price.currency != self.currency:
                raise ValidationError(
                    f"Cart line '{line.product_id}' is priced in "
                    f"{line.unit_price.currency}, cart uses {self.currency}"
                )

    @staticmethod
    def of(lines: list[CartLine], currency: str = DEFAULT_CURRENCY) -> Cart:
        return Cart(lines=tuple(lines), currency=currency)

    @property
    def subtotal(self) -> Money:
        result = Money.zero(self.currency)
        for line in self.lines:
            result = result + line.line_subtotal
        return result.rounded()

    @property
    def is_empty(self) -> bool:
        return not self.lines
