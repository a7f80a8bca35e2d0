"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from shop_pricing.domain.exceptions import ValidationError
from shop_pricing.domain.model.value_objects import (
    AppliesTo,
    Money,
    Quantity,
    normalize_rate,
    round2,
    to_datetime,
    to_decimal,
)


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "GHS"

    def test_of_factory_from_string(self):
        m = Money.of("25.99")
        assert m.amount == Decimal("25.99")

    def test_of_factory_with_currency(self):
        assert Money.of("5", "USD").currency == "USD"

    def test_of_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("ten")

    def test_of_rejects_nan(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("NaN")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_subtraction_going_negative_rejected(self):
        with pytest.raises(ValidationError, match="negative amount"):
            Money.of("5") - Money.of("10")

    def test_subtract_to_zero_floors(self):
        assert Money.of("5").subtract_to_zero(Money.of("10")) == Money.of("0")
        assert Money.of("10").subtract_to_zero(Money.of("4")) == Money.of("6")

    def test_multiplication_by_int_and_decimal(self):
        assert Money.of("7.50") * 3 == Money.of("22.50")
        assert Money.of("200") * Decimal("0.15") == Money.of("30")

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("1") * 1.5

    def test_rounded_is_half_up(self):
        assert Money.of("2.345").rounded().amount == Decimal("2.35")
        assert Money.of("2.344").rounded().amount == Decimal("2.34")

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("10"), "USD") + Money(Decimal("5"), "EUR")

    def test_str_formatting(self):
        assert str(Money.of("15")) == "GHS 15.00"
        assert str(Money.of("9.5")) == "GHS 9.50"

    def test_comparison_operators(self):
        assert Money.of("5") < Money.of("10")
        assert Money.of("10") > Money.of("5")
        assert Money.of("10") >= Money.of("10")
        assert Money.of("10") <= Money.of("10")
        assert min(Money.of("3"), Money.of("2")) == Money.of("2")


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_valid_quantity(self):
        assert Quantity(5).value == 5

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(0)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(-3)

    def test_non_integer_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(1.5)  # type: ignore[arg-type]


# ── Helpers ──────────────────────────────────────────────────────────────────


class TestRounding:

    @pytest.mark.parametrize(
        "raw, expected",
        [("0.005", "0.01"), ("1.004", "1.00"), ("10.125", "10.13"), ("7", "7.00")],
    )
    def test_round2_half_up(self, raw, expected):
        assert round2(Decimal(raw)) == Decimal(expected)


class TestNormalizeRate:

    def test_whole_percent_is_divided(self):
        assert normalize_rate(Decimal("15")) == Decimal("0.15")

    def test_fraction_kept(self):
        assert normalize_rate(Decimal("0.15")) == Decimal("0.15")

    def test_exactly_one_is_a_fraction(self):
        # 1 means 100%, not 1%
        assert normalize_rate(Decimal("1")) == Decimal("1")


class TestAppliesTo:

    def test_known_scopes(self):
        assert AppliesTo.parse("products") is AppliesTo.PRODUCTS
        assert AppliesTo.parse("SHIPPING") is AppliesTo.SHIPPING
        assert AppliesTo.parse("total") is AppliesTo.TOTAL

    def test_legacy_all_means_total(self):
        assert AppliesTo.parse("all") is AppliesTo.TOTAL

    def test_unknown_scope_falls_back_to_total(self, caplog):
        assert AppliesTo.parse("handling") is AppliesTo.TOTAL
        assert "Unrecognized applies_to" in caplog.text

    def test_missing_scope_falls_back_to_total(self):
        assert AppliesTo.parse(None) is AppliesTo.TOTAL


class TestConverters:

    def test_to_decimal_strips_whitespace(self):
        assert to_decimal(" 12.5 ", "rate") == Decimal("12.5")

    def test_to_decimal_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid rate"):
            to_decimal("abc", "rate")

    def test_to_datetime_naive_is_utc(self):
        value = to_datetime("2026-01-01T00:00:00", "valid_from")
        assert value.tzinfo is not None
        assert value.utcoffset().total_seconds() == 0

    def test_to_datetime_empty_is_none(self):
        assert to_datetime("", "valid_until") is None
        assert to_datetime(None, "valid_until") is None

    def test_to_datetime_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid valid_from"):
            to_datetime("yesterday", "valid_from")
