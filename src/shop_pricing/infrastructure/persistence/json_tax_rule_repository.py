"""JSON-file-backed implementation of TaxRuleRepository.

Records are parsed into closed enums on load, so a stored rule with an
unknown ``type`` fails here rather than inside a pricing call.
"""

from __future__ import annotations

import json
from decimal import Decimal, InvalidOperation
from pathlib import Path

from shop_pricing.domain.exceptions import InvalidRuleError
from shop_pricing.domain.model.tax_rule import TaxRule, TaxType
from shop_pricing.domain.model.value_objects import AppliesTo
from shop_pricing.domain.repository.tax_rule_repository import TaxRuleRepository


class JsonTaxRuleRepository(TaxRuleRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- TaxRuleRepository interface ------------------------------------------

    def next_id(self) -> str:
        records = self._load_raw()
        if not records:
            return "1"
        return str(max(int(r["id"]) for r in records) + 1)

    def get_by_id(self, rule_id: str) -> TaxRule | None:
        for raw in self._load_raw():
            if str(raw["id"]) == rule_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[TaxRule]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def list_active(self) -> list[TaxRule]:
        return [rule for rule in self.list_all() if rule.is_active]

    def save(self, rule: TaxRule) -> None:
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
    def _to_raw(rule: TaxRule) -> dict:
        return {
            "id": rule.id,
            "name": rule.name,
            "type": rule.type.value,
            "applies_to": rule.applies_to.value,
            "rate": str(rule.rate),
            "is_active": rule.is_active,
        }

    @classmethod
    def _to_domain(cls, raw: dict) -> TaxRule:
        try:
            return cls._parse(raw)
        except InvalidRuleError:
            raise
        except (KeyError, TypeError, ValueError, InvalidOperation) as exc:
            raise InvalidRuleError(
                f"Tax record {raw.get('id')!r} is malformed: {exc!r}"
            ) from exc

    @staticmethod
    def _parse(raw: dict) -> TaxRule:
        return TaxRule(
            id=str(raw["id"]),
            name=raw["name"],
            type=TaxType.parse(raw["type"]),
            applies_to=AppliesTo.parse(raw.get("applies_to")),
            rate=Decimal(str(raw["rate"])),
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
