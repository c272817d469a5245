"""
Pure domain layer.

Immutable item records, stock statuses and the Decimal helpers every
engine uses. No I/O, no clock, no configuration access.
"""

from stock_kernel.domain.decimal_utils import (
    as_quantity,
    ceil_to_multiple,
    exact_context,
    is_valid_decimal,
    round_money,
    to_decimal,
)
from stock_kernel.domain.values import (
    Item,
    ItemKind,
    Packaging,
    StockStatistics,
    StockStatus,
)

__all__ = [
    "Item",
    "ItemKind",
    "Packaging",
    "StockStatistics",
    "StockStatus",
    "as_quantity",
    "ceil_to_multiple",
    "exact_context",
    "is_valid_decimal",
    "round_money",
    "to_decimal",
]
