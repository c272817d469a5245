"""
stock_engines.status -- Stock level classification.

Responsibility:
    Map an item's current stock against its thresholds into one of the
    four ``StockStatus`` values.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Depends on ``stock_engines.thresholds``.

Invariants enforced:
    - Evaluation order is out, critical, low, ok; first match wins.
    - Boundaries are inclusive: stock equal to the critical threshold is
      critical, stock equal to the minimum is low.
    - Missing, unparseable and NaN stock reads as zero and classifies out.

Failure modes:
    None.
"""

from __future__ import annotations

from stock_config import get_active_policy
from stock_config.schema import StockPolicy
from stock_engines.thresholds import critical_stock, min_stock
from stock_kernel.domain.decimal_utils import ZERO, as_quantity
from stock_kernel.domain.values import Item, StockStatus


def stock_status(item: Item, policy: StockPolicy | None = None) -> StockStatus:
    """Classify the item's stock level."""
    policy = policy or get_active_policy()
    stock = as_quantity(item.stock)

    if stock <= ZERO:
        return StockStatus.OUT
    if stock <= critical_stock(item, policy):
        return StockStatus.CRITICAL
    if stock <= min_stock(item, policy):
        return StockStatus.LOW
    return StockStatus.OK
