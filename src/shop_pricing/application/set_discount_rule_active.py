"""Application service: enable or disable a discount code.

A disabled code is kept with its usage history and rejected at checkout
as "not active".
"""

from __future__ import annotations

from shop_pricing.domain.exceptions import EntityNotFoundError
from shop_pricing.domain.model.discount_rule import DiscountRule, normalize_code
from shop_pricing.domain.repository.discount_rule_repository import (
    DiscountRuleRepository,
)


class SetDiscountRuleActiveHandler:

    def __init__(self, discount_repo: DiscountRuleRepository) -> None:
        self._discount_repo = discount_repo

    def handle(self, code: str, active: bool) -> DiscountRule:
        normalized = normalize_code(code)
        rule = self._discount_repo.get_by_code(normalized)
        if rule is None:
            raise EntityNotFoundError(f"Discount code '{normalized}' not found")

        if active:
            rule.activate()
        else:
            rule.deactivate()
        self._discount_repo.save(rule)
        return rule
