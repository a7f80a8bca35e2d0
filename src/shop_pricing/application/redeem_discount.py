"""Application service: Redeem Discount use case.

Runs when an order carrying a discount code is committed, never while
quoting. The limit check and the increment happen on the aggregate
just before it is saved; a transactional store must run this as one
atomic compare-and-increment so two concurrent orders cannot both pass
the check.
"""

from __future__ import annotations

from shop_pricing.domain.exceptions import EntityNotFoundError
from shop_pricing.domain.model.discount_rule import DiscountRule, normalize_code
from shop_pricing.domain.repository.discount_rule_repository import (
    DiscountRuleRepository,
)


class RedeemDiscountHandler:

    def __init__(self, discount_repo: DiscountRuleRepository) -> None:
        self._discount_repo = discount_repo

    def handle(self, code: str) -> DiscountRule:
        normalized = normalize_code(code)
        rule = self._discount_repo.get_by_code(normalized)
        if rule is None:
            raise EntityNotFoundError(f"Discount code '{normalized}' not found")

        rule.redeem()
        self._discount_repo.save(rule)
        return rule
