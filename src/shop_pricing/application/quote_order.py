"""Application service: Quote Order use case.

The single entry point both the customer checkout and the admin order
composer use to price an order. It coordinates the rule stores, the
discount evaluator and the pricing engine.

A rejected discount code never aborts the quote: the error message is
reported on the DTO and the order is priced without a discount. The
handler keeps no state between calls, so a changed delivery fee always
re-evaluates the code against the new fee.
"""

from __future__ import annotations

import logging
from datetime import datetime

from shop_pricing.application.dto import AppliedTaxDTO, CartItemSpec, QuoteDTO
from shop_pricing.domain.exceptions import (
    DeliveryRequiredError,
    DiscountError,
    ValidationError,
)
from shop_pricing.domain.model.cart import Cart, CartLine
from shop_pricing.domain.model.pricing import DiscountResult, PricingResult
from shop_pricing.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity
from shop_pricing.domain.repository.tax_rule_repository import TaxRuleRepository
from shop_pricing.domain.service.discount_evaluator import DiscountEvaluator
from shop_pricing.domain.service.pricing_service import PricingService

logger = logging.getLogger(__name__)


class QuoteOrderHandler:

    def __init__(
        self,
        tax_repo: TaxRuleRepository,
        discount_evaluator: DiscountEvaluator,
        pricing_service: PricingService,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self._tax_repo = tax_repo
        self._discount_evaluator = discount_evaluator
        self._pricing_service = pricing_service
        self._currency = currency

    def handle(
        self,
        item_specs: list[CartItemSpec],
        delivery_fee: str | None,
        discount_code: str | None = None,
        now: datetime | None = None,
    ) -> QuoteDTO:
        if delivery_fee is None or str(delivery_fee).strip() == "":
            raise DeliveryRequiredError("A delivery option must be selected before pricing")

        cart = self._build_cart(item_specs)
        fee = Money.of(delivery_fee, self._currency)

        discount: DiscountResult | None = None
        discount_error: str | None = None
        if discount_code and discount_code.strip():
            try:
                discount = self._discount_evaluator.evaluate(discount_code, cart, fee, now=now)
            except DiscountError as exc:
                logger.info("Discount code %r rejected: %s", exc.code, exc)
                discount_error = str(exc)

        result = self._pricing_service.price(
            cart, fee, discount, self._tax_repo.list_active()
        )
        return self._to_dto(result, fee, discount_error)

    # --- Input mapping --------------------------------------------------------

    def _build_cart(self, item_specs: list[CartItemSpec]) -> Cart:
        cart = Cart.of(
            [
                CartLine(
                    product_id=spec.product_id,
                    unit_price=Money.of(spec.unit_price, self._currency),
                    quantity=Quantity(spec.quantity),
                )
                for spec in item_specs or []
            ],
            currency=self._currency,
        )
        if cart.is_empty:
            raise ValidationError("Cart must contain at least one item")
        return cart

    # --- Output mapping -------------------------------------------------------

    @staticmethod
    def _to_dto(result: PricingResult, fee: Money, discount_error: str | None) -> QuoteDTO:
        return QuoteDTO(
            currency=result.subtotal.currency,
            subtotal=f"{result.subtotal.amount:.2f}",
            discount_code=result.discount_code,
            discount_amount=f"{result.discount_amount.amount:.2f}",
            delivery_fee=f"{fee.rounded().amount:.2f}",
            adjusted_delivery_fee=f"{result.adjusted_delivery_fee.amount:.2f}",
            tax_amount=f"{result.tax_total.amount:.2f}",
            tax_rate=f"{result.effective_tax_rate:.2f}",
            tax_breakdown=[
                AppliedTaxDTO(
                    id=t.id,
                    name=t.name,
                    type=t.type.value,
                    applies_to=t.applies_to.value,
                    rate=str(t.rate),
                    amount=f"{t.amount:.2f}",
                )
                for t in result.tax_breakdown
            ],
            grand_total=f"{result.grand_total.amount:.2f}",
            discount_error=discount_error,
        )
