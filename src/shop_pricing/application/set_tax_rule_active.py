"""Application service: enable or disable a tax rule.

Only active rules are handed to the pricing engine, so this is how an
admin switches a levy on or off without deleting it.
"""

from __future__ import annotations

from shop_pricing.domain.exceptions import EntityNotFoundError
from shop_pricing.domain.repository.tax_rule_repository import TaxRuleRepository


class SetTaxRuleActiveHandler:

    def __init__(self, tax_repo: TaxRuleRepository) -> None:
        self._tax_repo = tax_repo

    def handle(self, rule_id: str, active: bool) -> None:
        rule = self._tax_repo.get_by_id(rule_id)
        if rule is None:
            raise EntityNotFoundError(f"Tax rule with ID '{rule_id}' not found")

        if active:
            rule.activate()
        else:
            rule.deactivate()
        self._tax_repo.save(rule)
