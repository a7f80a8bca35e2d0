"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations

from decimal import Decimal


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InvalidRuleError(ValidationError):
    """A tax or discount rule record is malformed (e.g. unknown type)."""


class DeliveryRequiredError(DomainException):
    """An order was priced without a delivery option selected."""


class TaxComputationError(DomainException):
    """Rule data reaching the tax calculator is corrupt (e.g. negative rate)."""


# ---------------------------------------------------------------------------
# Discount errors are recoverable: the order is priced without the discount.
# ---------------------------------------------------------------------------


class DiscountError(DomainException):
    """Base class for a rejected discount code."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code


class DiscountInvalid(DiscountError):
    """Code is inactive or outside its validity window."""


class DiscountNotFound(DiscountInvalid):
    def __init__(self, code: str) -> None:
        super().__init__(code, f"Discount code '{code}' does not exist")


class DiscountExhausted(DiscountError):
    def __init__(self, code: str, usage_limit: int) -> None:
        super().__init__(
            code, f"Discount code '{code}' has reached its usage limit ({usage_limit})"
        )
        self.usage_limit = usage_limit


class DiscountBelowMinimum(DiscountError):
    def __init__(self, code: str, minimum: Decimal, shortfall: Decimal) -> None:
        super().__init__(
            code,
            f"Discount code '{code}' requires a minimum order of {minimum:.2f} "
            f"(add {shortfall:.2f} more)",
        )
        self.minimum = minimum
        self.shortfall = shortfall
