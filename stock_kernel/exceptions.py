"""
Typed exception hierarchy for the stock kernel.

Every exception carries a ``code`` class attribute (machine-readable,
API-safe) and stores its context as attributes so it survives structured
logging and serialization.

    StockKernelError (base)
    |
    +-- ItemError
    |   +-- InvalidItemRecordError
    |
    +-- PolicyError
        +-- InvalidPolicyError

Category | Code                 | When Raised
---------|----------------------|---------------------------------------------
Item     | INVALID_ITEM_RECORD  | Data-layer record cannot become an Item
Policy   | INVALID_POLICY       | Stock policy value out of range or malformed

The calculation functions themselves never raise these. Invalid numbers
inside an otherwise well-formed item are recovered locally by the engines
(see ``stock_engines.valuation``); exceptions are reserved for the
boundaries where records and policies enter the system.
"""

from typing import Any


class StockKernelError(Exception):
    """
    Base exception for all stock kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "STOCK_KERNEL_ERROR"


# Item-related exceptions


class ItemError(StockKernelError):
    """Base exception for item record errors."""

    code: str = "ITEM_ERROR"


class InvalidItemRecordError(ItemError):
    """A data-layer record is missing a required field or is malformed."""

    code: str = "INVALID_ITEM_RECORD"

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid item record field '{field}': {reason}")


# Policy-related exceptions


class PolicyError(StockKernelError):
    """Base exception for stock policy errors."""

    code: str = "POLICY_ERROR"


class InvalidPolicyError(PolicyError):
    """A stock policy value is missing, non-numeric or out of range."""

    code: str = "INVALID_POLICY"

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid stock policy '{field}' = {value!r}: {reason}")
