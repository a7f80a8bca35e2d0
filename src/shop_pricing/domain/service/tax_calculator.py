"""Domain service: Tax Calculator.

Applies every active tax rule to the base it targets and returns an
itemized breakdown. Rules are independent: two rules on the same base
both apply (VAT plus a service levy compound by summing).

When no explicit rule is active, a single global percentage rate (from
configuration) is charged on the product base instead. Explicit rules
always replace the global rate, they never add to it.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from shop_pricing.domain.exceptions import TaxComputationError
from shop_pricing.domain.model.pricing import TaxComputation
from shop_pricing.domain.model.tax_rule import AppliedTax, TaxRule, TaxType
from shop_pricing.domain.model.value_objects import (
    ONE_HUNDRED,
    AppliesTo,
    Money,
    normalize_rate,
    round2,
)

logger = logging.getLogger(__name__)

GLOBAL_TAX_ID = "global"


class TaxCalculator:

    def __init__(self, global_rate: Decimal | None = None) -> None:
        self._global_rate = global_rate

    def compute(
        self,
        product_base: Money,
        shipping_base: Money,
        rules: list[TaxRule],
    ) -> TaxComputation:
        combined_base = product_base + shipping_base

        if rules:
            breakdown = tuple(
                self._apply(rule, product_base, shipping_base, combined_base)
                for rule in rules
            )
        else:
            breakdown = self._apply_global_rate(product_base)

        total = Money(
            round2(sum((t.amount for t in breakdown), Decimal("0"))),
            product_base.currency,
        )
        effective_rate = Decimal("0.00")
        if product_base.amount > 0:
            effective_rate = round2(total.amount / product_base.amount * ONE_HUNDRED)

        logger.debug(
            "Tax on products=%s shipping=%s: total=%s across %d rule(s)",
            product_base.amount,
            shipping_base.amount,
            total.amount,
            len(breakdown),
        )
        return TaxComputation(total=total, breakdown=breakdown, effective_rate=effective_rate)

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _apply(
        rule: TaxRule,
        product_base: Money,
        shipping_base: Money,
        combined_base: Money,
    ) -> AppliedTax:
        if rule.rate < 0:
            logger.error("Tax rule %s (%s) has negative rate %s", rule.id, rule.name, rule.rate)
            raise TaxComputationError(
                f"Tax rule '{rule.name}' has a negative rate ({rule.rate})"
            )

        if rule.applies_to is AppliesTo.PRODUCTS:
            base = product_base
        elif rule.applies_to is AppliesTo.SHIPPING:
            base = shipping_base
        else:
            base = combined_base

        if rule.type is TaxType.PERCENTAGE:
            amount = Decimal("0.00")
            if base.amount > 0:
                amount = round2(base.amount * normalize_rate(rule.rate))
        elif rule.type is TaxType.FIXED:
            # Flat levy, charged once even when the base is zero.
            amount = round2(rule.rate)
        else:
            logger.error("Tax rule %s has unsupported type %r", rule.id, rule.type)
            raise TaxComputationError(f"Tax rule '{rule.name}' has unsupported type {rule.type!r}")

        return AppliedTax(
            id=rule.id,
            name=rule.name,
            type=rule.type,
            applies_to=rule.applies_to,
            rate=rule.rate,
            amount=amount,
        )

    def _apply_global_rate(self, product_base: Money) -> tuple[AppliedTax, ...]:
        rate = self._global_rate
        if rate is None or rate <= 0:
            return ()

        amount = Decimal("0.00")
        if product_base.amount > 0:
            amount = round2(product_base.amount * normalize_rate(rate))
        percent = rate if rate > 1 else rate * ONE_HUNDRED
        return (
            AppliedTax(
                id=GLOBAL_TAX_ID,
                name=f"Tax ({percent.normalize():f}%)",
                type=TaxType.PERCENTAGE,
                applies_to=AppliesTo.PRODUCTS,
                rate=rate,
                amount=amount,
            ),
        )
