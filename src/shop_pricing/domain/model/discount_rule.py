"""DiscountRule aggregate: a redeemable discount code and its constraints."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from shop_pricing.domain.exceptions import (
    DiscountExhausted,
    InvalidRuleError,
    ValidationError,
)
from shop_pricing.domain.model.value_objects import AppliesTo


class DiscountType(Enum):
    PERCENTAGE = "percentage"
    FIXED_AMOUNT = "fixed_amount"
    FREE_SHIPPING = "free_shipping"

    @classmethod
    def parse(cls, raw: str) -> DiscountType:
        value = (raw or "").strip().lower()
        # Coupons in the storefront used to call this "free_delivery".
        if value == "free_delivery":
            return cls.FREE_SHIPPING
        try:
            return cls(value)
        except ValueError:
            raise InvalidRuleError(f"Unknown discount type: {raw!r}") from None


def normalize_code(code: str) -> str:
    return (code or "").strip().upper()


@dataclass
class DiscountRule:
    """Aggregate root for discount codes.

    Invariants (enforced by ``create()``):
    - ``code`` is stored upper-case
    - a percentage discount always applies to products
    - ``used_count`` never exceeds ``usage_limit`` (enforced by ``redeem()``)
    """

    id: str
    code: str
    type: DiscountType
    value: Decimal
    valid_from: datetime
    applies_to: AppliesTo = AppliesTo.PRODUCTS
    minimum_amount: Decimal = Decimal("0")
    maximum_discount: Decimal | None = None
    valid_until: datetime | None = None
    usage_limit: int | None = None
    used_count: int = 0
    is_active: bool = True

    # --- Factory (used for NEW rules only) ------------------------------------

    @staticmethod
    def create(
        id: str,
        code: str,
        type: DiscountType,
        value: Decimal,
        valid_from: datetime,
        applies_to: AppliesTo = AppliesTo.PRODUCTS,
        minimum_amount: Decimal = Decimal("0"),
        maximum_discount: Decimal | None = None,
        valid_until: datetime | None = None,
        usage_limit: int | None = None,
        is_active: bool = True,
    ) -> DiscountRule:
        normalized = normalize_code(code)
        if not normalized:
            raise ValidationError("Discount code is required")
        if value < 0:
            raise ValidationError(f"Discount value cannot be negative, got {value}")
        if type is DiscountType.PERCENTAGE and value > 100:
            raise ValidationError(f"Percentage discount cannot exceed 100, got {value}")
        if minimum_amount < 0:
            raise ValidationError("Minimum order amount cannot be negative")
        if maximum_discount is not None and maximum_discount < 0:
            raise ValidationError("Maximum discount cannot be negative")
        if usage_limit is not None and usage_limit < 0:
            raise ValidationError("Usage limit cannot be negative")
        if valid_until is not None and valid_until < valid_from:
            raise ValidationError("Discount validity ends before it starts")

        if type is DiscountType.PERCENTAGE:
            applies_to = AppliesTo.PRODUCTS
        elif type is DiscountType.FREE_SHIPPING:
            applies_to = AppliesTo.SHIPPING
            value = Decimal("0")

        return DiscountRule(
            id=id,
            code=normalized,
            type=type,
            value=value,
            valid_from=valid_from,
            applies_to=applies_to,
            minimum_amount=minimum_amount,
            # 0 in the admin form means "no cap" / "unlimited"
            maximum_discount=maximum_discount or None,
            valid_until=valid_until,
            usage_limit=usage_limit or None,
            is_active=is_active,
        )

    # --- Queries --------------------------------------------------------------

    def is_live_at(self, now: datetime) -> bool:
        """Active and inside the validity window."""
        if not self.is_active:
            return False
        if now < self.valid_from:
            return False
        if self.valid_until is not None and now > self.valid_until:
            return False
        return True

    @property
    def is_exhausted(self) -> bool:
        return self.usage_limit is not None and self.used_count >= self.usage_limit

    # --- State transitions ----------------------------------------------------

    def activate(self) -> None:
        self.is_active = True

    def deactivate(self) -> None:
        self.is_active = False

    def redeem(self) -> None:
        """Count one completed order against the usage limit.

        Called at order-commit time only, never while quoting.
        """
        if self.is_exhausted:
            raise DiscountExhausted(self.code, self.usage_limit)  # type: ignore[arg-type]
        self.used_count += 1
