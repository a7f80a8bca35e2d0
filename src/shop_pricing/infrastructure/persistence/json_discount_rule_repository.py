"""JSON-file-backed implementation of DiscountRuleRepository.

Single-process only: ``save`` rewrites the whole file, so concurrent
redemptions need a transactional store.
"""

from __future__ import annotations

import json
from decimal import Decimal, InvalidOperation
from pathlib import Path

from shop_pricing.domain.exceptions import InvalidRuleError, ValidationError
from shop_pricing.domain.model.discount_rule import (
    DiscountRule,
    DiscountType,
    normalize_code,
)
from shop_pricing.domain.model.value_objects import AppliesTo, to_datetime
from shop_pricing.domain.repository.discount_rule_repository import (
    DiscountRuleRepository,
)


class JsonDiscountRuleRepository(DiscountRuleRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- DiscountRuleRepository interface -------------------------------------

    def next_id(self) -> str:
        records = self._load_raw()
        if not records:
            return "1"
        return str(max(int(r["id"]) for r in records) + 1)

    def get_by_code(self, code: str) -> DiscountRule | None:
        wanted = normalize_code(code)
        for raw in self._load_raw():
            if normalize_code(raw.get("code")) == wanted:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[DiscountRule]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, rule: DiscountRule) -> None:
        records = self._load_raw()
        replaced = False
        for i, raw in enumerate(records):
            if str(raw["id"]) == rule.id:
                records[i] = self._to_raw(rule)
                replaced = True
                break
        if not replaced:
            records.append(self._to_raw(rule))
        self._persist_raw(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(rule: DiscountRule) -> dict:
        return {
            "id": rule.id,
            "code": rule.code,
            "type": rule.type.value,
            "value": str(rule.value),
            "applies_to": rule.applies_to.value,
            "minimum_amount": str(rule.minimum_amount),
            "maximum_discount": (
                str(rule.maximum_discount) if rule.maximum_discount is not None else None
            ),
            "valid_from": rule.valid_from.isoformat(),
            "valid_until": rule.valid_until.isoformat() if rule.valid_until else None,
            "usage_limit": rule.usage_limit,
            "used_count": rule.used_count,
            "is_active": rule.is_active,
        }

    @classmethod
    def _to_domain(cls, raw: dict) -> DiscountRule:
        try:
            return cls._parse(raw)
        except InvalidRuleError:
            raise
        except (KeyError, TypeError, ValueError, InvalidOperation, ValidationError) as exc:
            raise InvalidRuleError(
                f"Discount record {raw.get('id')!r} is malformed: {exc!r}"
            ) from exc

    @staticmethod
    def _parse(raw: dict) -> DiscountRule:
        discount_type = DiscountType.parse(raw["type"])
        applies_to = AppliesTo.parse(raw.get("applies_to"))
        if discount_type is DiscountType.PERCENTAGE:
            applies_to = AppliesTo.PRODUCTS
        max_discount = raw.get("maximum_discount")
        return DiscountRule(
            id=str(raw["id"]),
            code=normalize_code(raw["code"]),
            type=discount_type,
            value=Decimal(str(raw.get("value", "0"))),
            valid_from=to_datetime(raw["valid_from"], "valid_from"),
            applies_to=applies_to,
            minimum_amount=Decimal(str(raw.get("minimum_amount", "0"))),
            maximum_discount=Decimal(str(max_discount)) if max_discount else None,
            valid_until=to_datetime(raw.get("valid_until"), "valid_until"),
            usage_limit=raw.get("usage_limit") or None,
            used_count=raw.get("used_count", 0),
            is_active=raw.get("is_active", True),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(records, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
