"""
stock_engines.aggregation -- Batch filters and fleet statistics.

Responsibility:
    Filter and partition a batch of items by stock status and compute the
    summary block shown on the inventory dashboard.

Architecture position:
    Engines -- pure calculation layer.
    Composes ``stock_engines.status`` and ``stock_engines.valuation``.

Invariants enforced:
    - Filters are stable: matching items keep their relative order.
    - Statistics are computed in a single pass over the batch.
    - ``total_value`` is the Decimal sum of every item value, rounded to
      2 places once at the end (not per item).
    - ``average_stock`` is the Decimal mean of stock values rounded to
      2 places; an empty batch yields 0 without dividing.

Failure modes:
    None.  Corrupt item values are recovered by the valuation engine.
    Sums and rounding are exact at any magnitude; a sum that overflows the
    Decimal exponent range is logged as ``statistics_sum_overflow`` and
    reported as 0.

Usage:
    from stock_engines.aggregation import calculate_statistics, low_stock_items

    stats = calculate_statistics(items)
    print(stats.total, stats.critical, stats.total_value)
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal, Overflow

from stock_config import get_active_policy
from stock_config.schema import StockPolicy
from stock_engines.status import stock_status
from stock_engines.tracer import traced_engine
from stock_engines.valuation import ValuationSink, total_value
from stock_kernel.domain.decimal_utils import ZERO, as_quantity, exact_context, round_money
from stock_kernel.domain.values import Item, StockStatistics, StockStatus
from stock_kernel.logging_config import get_logger

logger = get_logger("engines.aggregation")

_MEAN_RESOLUTION = Decimal("1E-28")


def filter_by_statuses(
    items: Iterable[Item],
    statuses: Iterable[StockStatus],
    policy: StockPolicy | None = None,
) -> list[Item]:
    """Items whose status is any of ``statuses``, in input order."""
    policy = policy or get_active_policy()
    wanted = frozenset(statuses)
    return [item for item in items if stock_status(item, policy) in wanted]


def filter_by_status(
    items: Iterable[Item],
    status: StockStatus,
    policy: StockPolicy | None = None,
) -> list[Item]:
    """Items classified exactly as ``status``, in input order."""
    return filter_by_statuses(items, (status,), policy)


def low_stock_items(items: Iterable[Item], policy: StockPolicy | None = None) -> list[Item]:
    """Items that are low or critical."""
    return filter_by_statuses(items, (StockStatus.LOW, StockStatus.CRITICAL), policy)


def critical_stock_items(items: Iterable[Item], policy: StockPolicy | None = None) -> list[Item]:
    """Items that are critical or out of stock."""
    return filter_by_statuses(items, (StockStatus.CRITICAL, StockStatus.OUT), policy)


def out_of_stock_items(items: Iterable[Item], policy: StockPolicy | None = None) -> list[Item]:
    return filter_by_status(items, StockStatus.OUT, policy)


def partition_by_status(
    items: Iterable[Item],
    policy: StockPolicy | None = None,
) -> dict[StockStatus, list[Item]]:
    """
    Split a batch into one list per status in a single pass.

    Every status key is present, possibly with an empty list.
    """
    policy = policy or get_active_policy()
    partitions: dict[StockStatus, list[Item]] = {status: [] for status in StockStatus}
    for item in items:
        partitions[stock_status(item, policy)].append(item)
    return partitions


def _accumulate(total: Decimal, amount: Decimal) -> Decimal:
    # exact below the exponent limit, saturates to Infinity past it
    with exact_context(total, amount) as ctx:
        ctx.traps[Overflow] = False
        return total + amount


def _mean(total: Decimal, count: int) -> Decimal:
    # 28 digits kept below the decimal point whatever the magnitude
    with exact_context(total, _MEAN_RESOLUTION):
        return total / count


def _rounded_or_zero(field: str, value: Decimal) -> Decimal:
    if value.is_finite():
        return round_money(value)
    logger.warning("statistics_sum_overflow", extra={"field": field})
    return ZERO


@traced_engine("aggregation", "1.0", fingerprint_fields=("items",))
def calculate_statistics(
    items: Iterable[Item],
    policy: StockPolicy | None = None,
    *,
    sink: ValuationSink | None = None,
) -> StockStatistics:
    """
    Counts per status, total value and average stock over a batch.

    Postconditions:
        - total == ok + low + critical + out
        - total_value and average_stock have 2 decimal places
        - empty batch -> all counts 0, total_value 0, average_stock 0
    """
    policy = policy or get_active_policy()

    counts = {status: 0 for status in StockStatus}
    value_sum = ZERO
    stock_sum = ZERO
    total = 0

    for item in items:
        total += 1
        counts[stock_status(item, policy)] += 1
        value_sum = _accumulate(value_sum, total_value(item, sink=sink))
        quantity = as_quantity(item.stock)
        # infinite stock still counts toward the item total, not the sum
        if quantity.is_finite():
            stock_sum = _accumulate(stock_sum, quantity)

    if total == 0:
        logger.debug("statistics_empty_batch", extra={})
        return StockStatistics()

    stats = StockStatistics(
        total=total,
        ok=counts[StockStatus.OK],
        low=counts[StockStatus.LOW],
        critical=counts[StockStatus.CRITICAL],
        out=counts[StockStatus.OUT],
        total_value=_rounded_or_zero("total_value", value_sum),
        average_stock=_rounded_or_zero("average_stock", _mean(stock_sum, total)),
    )

    logger.info("statistics_calculated", extra={"statistics": stats})
    return stats
