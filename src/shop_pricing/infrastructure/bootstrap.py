"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from shop_pricing.application.quote_order import QuoteOrderHandler
from shop_pricing.domain.service.discount_evaluator import DiscountEvaluator
from shop_pricing.domain.service.pricing_service import PricingService
from shop_pricing.domain.service.tax_calculator import TaxCalculator
from shop_pricing.infrastructure.persistence.json_discount_rule_repository import (
    JsonDiscountRuleRepository,
)
from shop_pricing.infrastructure.persistence.json_tax_rule_repository import (
    JsonTaxRuleRepository,
)
from shop_pricing.infrastructure.settings import Settings


def settings() -> Settings:
    return Settings.from_env()


def tax_rule_repository(config: Settings | None = None) -> JsonTaxRuleRepository:
    config = config or settings()
    return JsonTaxRuleRepository(config.tax_rules_file)


def discount_rule_repository(config: Settings | None = None) -> JsonDiscountRuleRepository:
    config = config or settings()
    return JsonDiscountRuleRepository(config.discount_rules_file)


def quote_order_handler(config: Settings | None = None) -> QuoteOrderHandler:
    config = config or settings()
    return QuoteOrderHandler(
        tax_repo=tax_rule_repository(config),
        discount_evaluator=DiscountEvaluator(discount_rule_repository(config)),
        pricing_service=PricingService(TaxCalculator(config.global_tax_rate)),
        currency=config.currency,
    )
