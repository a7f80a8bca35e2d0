"""Application services: list tax and discount rules (queries)."""

from __future__ import annotations

from shop_pricing.application.dto import DiscountRuleDTO, TaxRuleDTO
from shop_pricing.domain.model.discount_rule import DiscountRule
from shop_pricing.domain.model.tax_rule import TaxRule
from shop_pricing.domain.repository.discount_rule_repository import (
    DiscountRuleRepository,
)
from shop_pricing.domain.repository.tax_rule_repository import TaxRuleRepository

_TIMESTAMP = "%Y-%m-%d %H:%M UTC"


class ListTaxRulesHandler:

    def __init__(self, tax_repo: TaxRuleRepository) -> None:
        self._tax_repo = tax_repo

    def handle(self) -> list[TaxRuleDTO]:
        return [self._to_dto(rule) for rule in self._tax_repo.list_all()]

    @staticmethod
    def _to_dto(rule: TaxRule) -> TaxRuleDTO:
        return TaxRuleDTO(
            id=rule.id,
            name=rule.name,
            type=rule.type.value,
            applies_to=rule.applies_to.value,
            rate=str(rule.rate),
            is_active=rule.is_active,
        )


class ListDiscountRulesHandler:

    def __init__(self, discount_repo: DiscountRuleRepository) -> None:
        self._discount_repo = discount_repo

    def handle(self) -> list[DiscountRuleDTO]:
        return [self._to_dto(rule) for rule in self._discount_repo.list_all()]

    @staticmethod
    def _to_dto(rule: DiscountRule) -> DiscountRuleDTO:
        return DiscountRuleDTO(
            id=rule.id,
            code=rule.code,
            type=rule.type.value,
            value=str(rule.value),
            applies_to=rule.applies_to.value,
            minimum_amount=f"{rule.minimum_amount:.2f}",
            maximum_discount=(
                f"{rule.maximum_discount:.2f}" if rule.maximum_discount is not None else None
            ),
            valid_from=rule.valid_from.strftime(_TIMESTAMP),
            valid_until=(
                rule.valid_until.strftime(_TIMESTAMP) if rule.valid_until is not None else None
            ),
            usage_limit=rule.usage_limit,
            used_count=rule.used_count,
            is_active=rule.is_active,
        )
