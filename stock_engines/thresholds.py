"""
stock_engines.thresholds -- Minimum and critical stock levels per item kind.

Responsibility:
    Resolve the two thresholds every other engine compares stock against.

Architecture position:
    Engines -- pure calculation layer, zero I/O.  Leaf of the engine graph:
    status, reorder and aggregation all build on it.

Invariants enforced:
    - critical_stock(item) <= min_stock(item) for every item.  The critical
      threshold is ceiling(min * ratio) with 0 < ratio < 1, so rounding up
      can reach the minimum only at small integer minimums, never exceed it.
    - Rounding of the critical threshold is always up, so it never
      under-reports risk.
    - Unknown kinds use the policy's default minimum.

Failure modes:
    None -- total functions over any item.
"""

from __future__ import annotations

from decimal import ROUND_CEILING, Decimal

from stock_config import get_active_policy
from stock_config.schema import StockPolicy
from stock_kernel.domain.values import Item


def min_stock(item: Item, policy: StockPolicy | None = None) -> Decimal:
    """Minimum stock level for the item's kind (ELABORATED 5, COUNTABLE 10, MEASURABLE 20)."""
    policy = policy or get_active_policy()
    return policy.min_stock_for(item.kind)


def critical_stock(item: Item, policy: StockPolicy | None = None) -> Decimal:
    """
    Critical stock level: ceiling(min_stock * critical_ratio).

    Example: min 5 -> 5 * 0.30 = 1.5 -> 2.
    """
    policy = policy or get_active_policy()
    minimum = policy.min_stock_for(item.kind)
    return (minimum * policy.critical_ratio).to_integral_value(rounding=ROUND_CEILING)
