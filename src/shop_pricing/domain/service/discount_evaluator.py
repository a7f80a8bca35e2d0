"""Domain service: Discount Evaluator.

Validates a discount code against its constraints and the current cart,
then works out how much it takes off. Evaluation is read-only: the
usage counter is only incremented when an order is committed (see
``DiscountRule.redeem``), so abandoned checkouts never consume quota.

Checks run in a fixed order and the first failure wins:
  1. unknown / corrupt / inactive / outside validity window
  2. usage limit reached
  3. subtotal below the minimum order amount
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from shop_pricing.domain.exceptions import (
    DiscountBelowMinimum,
    DiscountExhausted,
    DiscountInvalid,
    DiscountNotFound,
    InvalidRuleError,
)
from shop_pricing.domain.model.cart import Cart
from shop_pricing.domain.model.discount_rule import (
    DiscountRule,
    DiscountType,
    normalize_code,
)
from shop_pricing.domain.model.pricing import DiscountResult
from shop_pricing.domain.model.value_objects import (
    AppliesTo,
    Money,
    normalize_rate,
    round2,
    to_datetime,
)
from shop_pricing.domain.repository.discount_rule_repository import (
    DiscountRuleRepository,
)

logger = logging.getLogger(__name__)


class DiscountEvaluator:

    def __init__(self, discount_repo: DiscountRuleRepository) -> None:
        self._discount_repo = discount_repo

    def evaluate(
        self,
        code: str,
        cart: Cart,
        delivery_fee: Money,
        now: datetime | None = None,
    ) -> DiscountResult:
        """Return the applied discount, or raise a ``DiscountError``."""
        now = to_datetime(now, "now") or datetime.now(timezone.utc)
        normalized = normalize_code(code)

        try:
            rule = self._discount_repo.get_by_code(normalized) if normalized else None
        except InvalidRuleError as exc:
            logger.error("Discount code %r has a corrupt record: %s", normalized, exc)
            raise DiscountInvalid(
                normalized, f"Discount code '{normalized}' is misconfigured"
            ) from exc
        if rule is None:
            raise DiscountNotFound(normalized or code)
        self._validate(rule, cart, now)

        result = self._compute(rule, cart.subtotal, delivery_fee)
        logger.debug(
            "Discount %s (%s): discount=%s adjusted_delivery=%s",
            rule.code,
            rule.type.value,
            result.discount_amount.amount,
            result.adjusted_delivery_fee.amount,
        )
        return result

    # --- Validation -----------------------------------------------------------

    @staticmethod
    def _validate(rule: DiscountRule, cart: Cart, now: datetime) -> None:
        if not rule.is_active:
            raise DiscountInvalid(rule.code, f"Discount code '{rule.code}' is not active")
        if not rule.is_live_at(now):
            raise DiscountInvalid(
                rule.code, f"Discount code '{rule.code}' is not valid at this time"
            )
        if rule.is_exhausted:
            raise DiscountExhausted(rule.code, rule.usage_limit)  # type: ignore[arg-type]

        subtotal = cart.subtotal.amount
        if subtotal < rule.minimum_amount:
            raise DiscountBelowMinimum(
                rule.code,
                minimum=rule.minimum_amount,
                shortfall=round2(rule.minimum_amount - subtotal),
            )

    # --- Computation ----------------------------------------------------------

    @staticmethod
    def _compute(rule: DiscountRule, subtotal: Money, delivery_fee: Money) -> DiscountResult:
        currency = subtotal.currency
        value = Money(rule.value, currency)

        if rule.type is DiscountType.PERCENTAGE:
            # Percentage discounts only ever touch the product subtotal.
            discount = (subtotal * normalize_rate(rule.value)).rounded()
            if rule.maximum_discount is not None:
                discount = min(discount, Money(rule.maximum_discount, currency).rounded())
            discount = min(discount, subtotal)
            return DiscountResult(
                code=rule.code,
                discount_amount=discount,
                adjusted_delivery_fee=delivery_fee.rounded(),
                product_discount=discount,
            )

        if rule.type is DiscountType.FIXED_AMOUNT:
            if rule.applies_to is AppliesTo.SHIPPING:
                adjusted = delivery_fee.subtract_to_zero(value).rounded()
                return DiscountResult(
                    code=rule.code,
                    discount_amount=(delivery_fee.rounded() - adjusted),
                    adjusted_delivery_fee=adjusted,
                    product_discount=Money.zero(currency),
                )
            discount = min(value, subtotal).rounded()
            return DiscountResult(
                code=rule.code,
                discount_amount=discount,
                adjusted_delivery_fee=delivery_fee.rounded(),
                product_discount=discount,
            )

        if rule.type is DiscountType.FREE_SHIPPING:
            # The saving is reported as the discount but realized via delivery.
            return DiscountResult(
                code=rule.code,
                discount_amount=delivery_fee.rounded(),
                adjusted_delivery_fee=Money.zero(currency),
                product_discount=Money.zero(currency),
            )

        raise DiscountInvalid(rule.code, f"Unsupported discount type {rule.type!r}")
