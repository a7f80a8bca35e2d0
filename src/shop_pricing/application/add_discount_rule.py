"""Application service: Add Discount Rule use case.

Normalizes the admin input (upper-case code, percentage discounts pinned
to products, 0 meaning "no cap" / "unlimited") and generates a code when
none is given.
"""

from __future__ import annotations

import secrets
import string
from collections.abc import Callable
from datetime import datetime, timezone

from shop_pricing.domain.exceptions import ValidationError
from shop_pricing.domain.model.discount_rule import (
    DiscountRule,
    DiscountType,
    normalize_code,
)
from shop_pricing.domain.model.value_objects import (
    AppliesTo,
    to_datetime,
    to_decimal,
)
from shop_pricing.domain.repository.discount_rule_repository import (
    DiscountRuleRepository,
)

CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_LENGTH = 8
MAX_CODE_ATTEMPTS = 20


def generate_code() -> str:
    """Random 8-character A-Z/0-9 coupon code."""
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))


class AddDiscountRuleHandler:

    def __init__(
        self,
        discount_repo: DiscountRuleRepository,
        code_generator: Callable[[], str] = generate_code,
    ) -> None:
        self._discount_repo = discount_repo
        self._code_generator = code_generator

    def handle(
        self,
        code: str | None,
        type: str,
        value: str = "0",
        applies_to: str = "products",
        minimum_amount: str = "0",
        maximum_discount: str | None = None,
        valid_from: str | datetime | None = None,
        valid_until: str | datetime | None = None,
        usage_limit: int | None = None,
        is_active: bool = True,
    ) -> DiscountRule:
        """Add a new discount code."""
        discount_type = DiscountType.parse(type)

        if code is not None and normalize_code(code):
            normalized = normalize_code(code)
            if self._discount_repo.get_by_code(normalized) is not None:
                raise ValidationError(f"Discount code '{normalized}' already exists")
        else:
            normalized = self._unique_code()

        rule = DiscountRule.create(
            id=self._discount_repo.next_id(),
            code=normalized,
            type=discount_type,
            value=to_decimal(value, "discount value"),
            valid_from=to_datetime(valid_from, "valid_from") or datetime.now(timezone.utc),
            applies_to=AppliesTo.parse(applies_to),
            minimum_amount=to_decimal(minimum_amount, "minimum amount"),
            maximum_discount=(
                to_decimal(maximum_discount, "maximum discount")
                if maximum_discount not in (None, "")
                else None
            ),
            valid_until=to_datetime(valid_until, "valid_until"),
            usage_limit=usage_limit,
            is_active=is_active,
        )
        self._discount_repo.save(rule)
        return rule

    def _unique_code(self) -> str:
        for _ in range(MAX_CODE_ATTEMPTS):
            candidate = normalize_code(self._code_generator())
            if self._discount_repo.get_by_code(candidate) is None:
                return candidate
        raise ValidationError("Could not generate a unique discount code")
