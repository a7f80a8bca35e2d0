"""Domain service: Pricing Engine.

Turns a cart, a delivery fee, an optional evaluated discount and the
active tax rules into the final, itemized order total. This is the one
authoritative pricing computation; the checkout and the admin order
composer both go through it.

The service is stateless and side-effect free, so identical inputs
always produce an identical ``PricingResult``.
"""

from __future__ import annotations

from shop_pricing.domain.model.cart import Cart
from shop_pricing.domain.model.pricing import DiscountResult, PricingResult
from shop_pricing.domain.model.tax_rule import TaxRule
from shop_pricing.domain.model.value_objects import Money
from shop_pricing.domain.service.tax_calculator import TaxCalculator


class PricingService:

    def __init__(self, tax_calculator: TaxCalculator) -> None:
        self._tax_calculator = tax_calculator

    def price(
        self,
        cart: Cart,
        delivery_fee: Money,
        discount: DiscountResult | None,
        active_tax_rules: list[TaxRule],
    ) -> PricingResult:
        """Price an order.

        Steps:
        1. Subtotal from the cart.
        2. Discount figures, or none with the delivery fee untouched.
        3. Tax on the discounted product base and adjusted delivery fee.
        4. Grand total, floored at zero.
        """
        subtotal = cart.subtotal

        if discount is not None:
            discount_amount = discount.discount_amount
            product_discount = discount.product_discount
            adjusted_delivery_fee = discount.adjusted_delivery_fee
        else:
            discount_amount = Money.zero(cart.currency)
            product_discount = Money.zero(cart.currency)
            adjusted_delivery_fee = delivery_fee.rounded()

        product_base = subtotal.subtract_to_zero(product_discount)
        tax = self._tax_calculator.compute(
            product_base, adjusted_delivery_fee, list(active_tax_rules)
        )

        # Every component is non-negative, so the sum is already >= 0;
        # Money would reject anything else.
        grand_total = (product_base + adjusted_delivery_fee + tax.total).rounded()

        return PricingResult(
            subtotal=subtotal,
            discount_amount=discount_amount,
            adjusted_delivery_fee=adjusted_delivery_fee,
            tax_total=tax.total,
            tax_breakdown=tax.breakdown,
            effective_tax_rate=tax.effective_rate,
            grand_total=grand_total,
            discount_code=discount.code if discount is not None else None,
        )
