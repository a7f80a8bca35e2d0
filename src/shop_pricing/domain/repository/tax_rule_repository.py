"""Abstract repository for TaxRule aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from shop_pricing.domain.model.tax_rule import TaxRule


class TaxRuleRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique rule ID."""

    @abstractmethod
    def get_by_id(self, rule_id: str) -> TaxRule | None:
        """Return a rule by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[TaxRule]:
        """Return every rule in store order."""

    @abstractmethod
    def list_active(self) -> list[TaxRule]:
        """Return the active rules in store order (the pricing snapshot)."""

    @abstractmethod
    def save(self, rule: TaxRule) -> None:
        """Persist a new or updated rule."""
