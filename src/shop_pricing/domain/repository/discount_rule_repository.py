"""Abstract repository for DiscountRule aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shop_pricing.domain.model.discount_rule import DiscountRule


class DiscountRuleRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique rule ID."""

    @abstractmethod
    def get_by_code(self, code: str) -> DiscountRule | None:
        """Return a rule by its normalized (upper-case) code, or None."""

    @abstractmethod
    def list_all(self) -> list[DiscountRule]:
        """Return every discount rule."""

    @abstractmethod
    def save(self, rule: DiscountRule) -> None:
        """Persist a new or updated rule."""
