"""Application service: Add Tax Rule use case.

Raw input (as typed into the admin form or read from the CLI) is
validated here, at the boundary, so the pricing engine only ever sees
closed ``TaxType`` / ``AppliesTo`` values.
"""

from __future__ import annotations

from shop_pricing.domain.exceptions import ValidationError
from shop_pricing.domain.model.tax_rule import TaxRule, TaxType
from shop_pricing.domain.model.value_objects import AppliesTo, to_decimal
from shop_pricing.domain.repository.tax_rule_repository import TaxRuleRepository


class AddTaxRuleHandler:

    def __init__(self, tax_repo: TaxRuleRepository) -> None:
        self._tax_repo = tax_repo

    def handle(
        self,
        name: str,
        type: str,
        applies_to: str,
        rate: str,
        is_active: bool = True,
    ) -> TaxRule:
        """Add a new tax rule."""
        tax_type = TaxType.parse(type)
        scope = AppliesTo.parse(applies_to)
        rate_value = to_decimal(rate, "tax rate")

        wanted = (name or "").strip().lower()
        for existing in self._tax_repo.list_all():
            if existing.name.lower() == wanted:
                raise ValidationError(f"Tax rule '{name}' already exists")

        rule = TaxRule.create(
            id=self._tax_repo.next_id(),
            name=name,
            type=tax_type,
            applies_to=scope,
            rate=rate_value,
            is_active=is_active,
        )
        self._tax_repo.save(rule)
        return rule
