"""
stock_engines.reorder -- Suggested replenishment quantities.

Responsibility:
    Suggest how much of an item to buy so that stock reaches the reorder
    target (min_stock x reorder_multiplier), rounded up to a unit that
    depends on the item's kind.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Depends on ``stock_engines.thresholds``.

Invariants enforced:
    - The suggestion is never negative; it is exactly 0 when stock already
      meets the target.
    - Rounding is always up ("next multiple of N" = ceiling(needed / N) * N):
        ELABORATED                        -> multiple of 5
        COUNTABLE with finite package_size > 0 -> multiple of package_size
        COUNTABLE without usable package       -> default (multiple of 10)
        MEASURABLE and unknown kinds           -> default (multiple of 10)

Failure modes:
    None raised.  Missing or unreadable stock counts as zero, which yields
    the full target.  Stock of -Infinity would need an unbounded order; it
    is logged as ``reorder_quantity_unbounded`` and yields 0.

Usage:
    from stock_engines.reorder import suggested_reorder_quantity

    # COUNTABLE, min 10 -> target 20; stock 3 -> needed 17; package 12 -> 24
    suggested_reorder_quantity(item)
"""

from __future__ import annotations

from decimal import Decimal

from stock_config import get_active_policy
from stock_config.schema import StockPolicy
from stock_engines.thresholds import min_stock
from stock_engines.tracer import traced_engine
from stock_kernel.domain.decimal_utils import ZERO, as_quantity, ceil_to_multiple, exact_context
from stock_kernel.domain.values import Item, ItemKind
from stock_kernel.logging_config import get_logger

logger = get_logger("engines.reorder")


def reorder_target(item: Item, policy: StockPolicy | None = None) -> Decimal:
    """Stock level a reorder should bring the item up to."""
    policy = policy or get_active_policy()
    return min_stock(item, policy) * policy.reorder_multiplier


def _package_size(item: Item) -> Decimal:
    if item.packaging is None:
        return ZERO
    size = as_quantity(item.packaging.package_size)
    # an infinite package cannot be a rounding unit
    return size if size.is_finite() else ZERO


def rounding_unit(item: Item, policy: StockPolicy | None = None) -> Decimal:
    """Unit the suggested quantity is rounded up to."""
    policy = policy or get_active_policy()

    match item.kind:
        case ItemKind.COUNTABLE:
            size = _package_size(item)
            if size > ZERO:
                return size
            if item.packaging is not None:
                logger.debug("reorder_packaging_ignored", extra={
                    "item_id": item.id,
                    "package_size": str(item.packaging.package_size),
                })
            return policy.default_rounding_unit
        case ItemKind.ELABORATED | ItemKind.MEASURABLE:
            return policy.rounding_unit_for(item.kind)
        case _:
            return policy.default_rounding_unit


@traced_engine("reorder", "1.0", fingerprint_fields=("item",))
def suggested_reorder_quantity(item: Item, policy: StockPolicy | None = None) -> Decimal:
    """
    Quantity to order so stock reaches the reorder target.

    Postconditions:
        Result >= 0.  Result is 0 when no reorder is required, otherwise a
        positive multiple of ``rounding_unit(item)``.
    """
    policy = policy or get_active_policy()
    current = as_quantity(item.stock)
    target = reorder_target(item, policy)
    with exact_context(target, current):
        needed = max(ZERO, target - current)

    if needed == ZERO:
        return ZERO
    if needed.is_infinite():
        logger.warning("reorder_quantity_unbounded", extra={
            "item_id": item.id,
            "raw_stock": repr(item.stock),
        })
        return ZERO

    return ceil_to_multiple(needed, rounding_unit(item, policy))


def packages_to_order(item: Item, policy: StockPolicy | None = None) -> int:
    """
    Whole packages represented by the suggestion, for packaged COUNTABLE items.

    Returns 0 for every other item and when no reorder is required.
    """
    if item.kind is not ItemKind.COUNTABLE:
        return 0
    size = _package_size(item)
    if size <= ZERO:
        return 0
    quantity = suggested_reorder_quantity(item, policy)
    with exact_context(quantity, size):
        return int(quantity // size)
