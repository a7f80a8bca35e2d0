"""Unit tests for the PricingService."""

from decimal import Decimal

import pytest

from shop_pricing.domain.exceptions import DiscountBelowMinimum
from shop_pricing.domain.model.discount_rule import DiscountType
from shop_pricing.domain.model.tax_rule import TaxType
from shop_pricing.domain.model.value_objects import AppliesTo, Money
from shop_pricing.domain.service.discount_evaluator import DiscountEvaluator
from shop_pricing.domain.service.pricing_service import PricingService
from shop_pricing.domain.service.tax_calculator import GLOBAL_TAX_ID, TaxCalculator
from tests.builders import NOW, make_cart, make_discount, make_tax
from tests.fakes import FakeDiscountRuleRepository

VAT_15 = make_tax("15", applies_to=AppliesTo.PRODUCTS, name="VAT")


def _service(global_rate=None) -> PricingService:
    return PricingService(TaxCalculator(global_rate))


def _discount(rule, cart, fee):
    evaluator = DiscountEvaluator(FakeDiscountRuleRepository([rule]))
    return evaluator.evaluate(rule.code, cart, Money.of(fee), now=NOW)


class TestWorkedExamples:

    def test_a_no_discount(self):
        cart = make_cart(("1000.00", 1))
        result = _service().price(cart, Money.of("50.00"), None, [VAT_15])
        assert result.tax_total == Money.of("150.00")
        assert result.grand_total == Money.of("1200.00")
        assert len(result.tax_breakdown) == 1
        assert result.tax_breakdown[0].name == "VAT"
        assert result.tax_breakdown[0].amount == Decimal("150.00")

    def test_b_percentage_discount_reduces_taxable_base(self):
        cart = make_cart(("1000.00", 1))
        rule = make_discount(value="10", minimum_amount=Decimal("500"))
        discount = _discount(rule, cart, "50.00")
        result = _service().price(cart, Money.of("50.00"), discount, [VAT_15])
        assert result.discount_amount == Money.of("100.00")
        assert result.tax_total == Money.of("135.00")
        assert result.grand_total == Money.of("1085.00")
        assert result.discount_code == "SAVE10"

    def test_c_free_shipping(self):
        cart = make_cart(("1000.00", 1))
        rule = make_discount(type=DiscountType.FREE_SHIPPING, value="0", applies_to=AppliesTo.SHIPPING)
        discount = _discount(rule, cart, "75.00")
        shipping_vat = make_tax("10", id="2", name="Delivery VAT", applies_to=AppliesTo.SHIPPING)
        result = _service().price(cart, Money.of("75.00"), discount, [VAT_15, shipping_vat])
        assert result.adjusted_delivery_fee == Money.of("0")
        assert result.discount_amount == Money.of("75.00")
        assert result.tax_breakdown[1].amount == Decimal("0")
        # The saving is realized through delivery, not taken off products again.
        assert result.grand_total == Money.of("1150.00")

    def test_d_below_minimum_prices_without_discount(self):
        cart = make_cart(("200.00", 1))
        rule = make_discount(minimum_amount=Decimal("500"))
        with pytest.raises(DiscountBelowMinimum):
            _discount(rule, cart, "50.00")
        result = _service().price(cart, Money.of("50.00"), None, [VAT_15])
        assert result.discount_amount == Money.of("0")
        assert result.grand_total == Money.of("280.00")

    def test_e_fixed_shipping_levy_on_free_delivery(self):
        cart = make_cart(("1000.00", 1))
        rules = [
            make_tax("5", id="1", name="Levy", type=TaxType.FIXED, applies_to=AppliesTo.SHIPPING),
            make_tax("2", id="2", name="Service", applies_to=AppliesTo.TOTAL),
        ]
        result = _service().price(cart, Money.of("0.00"), None, rules)
        assert result.tax_breakdown[0].amount == Decimal("5.00")
        assert result.tax_breakdown[1].amount == Decimal("20.00")
        assert result.tax_total == Money.of("25.00")
        assert result.grand_total == Money.of("1025.00")


class TestProperties:

    def test_idempotent(self):
        cart = make_cart(("19.99", 3), ("4.50", 2))
        rule = make_discount(value="7.5")
        rules = [VAT_15, make_tax("3", id="2", type=TaxType.FIXED)]
        first = _service().price(cart, Money.of("12.00"), _discount(rule, cart, "12.00"), rules)
        second = _service().price(cart, Money.of("12.00"), _discount(rule, cart, "12.00"), rules)
        assert first == second

    def test_breakdown_sum_invariant(self):
        cart = make_cart(("33.33", 3))
        rules = [
            make_tax("12.5", id="1"),
            make_tax("2.5", id="2", applies_to=AppliesTo.TOTAL),
            make_tax("1", id="3", type=TaxType.FIXED, applies_to=AppliesTo.SHIPPING),
        ]
        result = _service().price(cart, Money.of("9.99"), None, rules)
        assert result.tax_total.amount == sum(t.amount for t in result.tax_breakdown)

    def test_non_negative_when_discount_covers_subtotal(self):
        cart = make_cart(("20.00", 1))
        rule = make_discount(type=DiscountType.FIXED_AMOUNT, value="100", applies_to=AppliesTo.PRODUCTS)
        result = _service().price(cart, Money.of("0"), _discount(rule, cart, "0"), [VAT_15])
        assert result.discount_amount == Money.of("20.00")
        assert result.tax_total == Money.of("0")
        assert result.grand_total == Money.of("0")

    def test_fallback_only_without_explicit_rules(self):
        cart = make_cart(("100.00", 1))
        with_rules = _service(Decimal("12.5")).price(cart, Money.of("10"), None, [VAT_15])
        without = _service(Decimal("12.5")).price(cart, Money.of("10"), None, [])
        assert GLOBAL_TAX_ID not in [t.id for t in with_rules.tax_breakdown]
        assert [t.id for t in without.tax_breakdown] == [GLOBAL_TAX_ID]
        assert without.tax_total == Money.of("12.50")

    def test_effective_rate_reported(self):
        cart = make_cart(("1000.00", 1))
        result = _service().price(cart, Money.of("50"), None, [VAT_15])
        assert result.effective_tax_rate == Decimal("15.00")

    def test_does_not_mutate_inputs(self):
        cart = make_cart(("10.00", 2))
        rules = [VAT_15]
        _service().price(cart, Money.of("5"), None, rules)
        assert rules == [VAT_15]
        assert cart.subtotal == Money.of("20.00")
