"""
stock_engines.calculator -- StockCalculator facade.

Responsibility:
    Bundle every stock engine operation behind one object bound to a single
    ``StockPolicy`` and a single ``ValuationSink``, so callers (dashboards,
    the report script) do not thread both through every call.

Architecture position:
    Engines -- pure calculation layer.  Thin delegation only; the rules
    live in the per-engine modules.

Usage:
    from stock_engines import StockCalculator

    calculator = StockCalculator()
    calculator.stock_status(item)            # StockStatus.LOW
    calculator.statistics(items).total_value # Decimal("1234.50")
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from stock_config import get_active_policy
from stock_config.schema import StockPolicy
from stock_engines import aggregation, presentation, reorder, status, thresholds, valuation
from stock_kernel.domain.values import Item, StockStatistics, StockStatus


class StockCalculator:
    """
    Stock calculations over one policy.

    Contract:
        No I/O apart from valuation diagnostics sent to ``sink``; fully
        deterministic for a fixed policy.
    Guarantees:
        - Every method gives the same result as the module-level function
          called with this calculator's policy and sink.
    Non-goals:
        - Does not cache results; items are owned and updated upstream.
    """

    def __init__(
        self,
        policy: StockPolicy | None = None,
        sink: valuation.ValuationSink | None = None,
    ):
        self.policy = policy or get_active_policy()
        self.sink = sink

    # Thresholds

    def min_stock(self, item: Item) -> Decimal:
        return thresholds.min_stock(item, self.policy)

    def critical_stock(self, item: Item) -> Decimal:
        return thresholds.critical_stock(item, self.policy)

    # Classification

    def stock_status(self, item: Item) -> StockStatus:
        return status.stock_status(item, self.policy)

    # Valuation

    def total_value(self, item: Item) -> Decimal:
        return valuation.total_value(item, sink=self.sink)

    # Reorder

    def suggested_reorder_quantity(self, item: Item) -> Decimal:
        return reorder.suggested_reorder_quantity(item, self.policy)

    def packages_to_order(self, item: Item) -> int:
        return reorder.packages_to_order(item, self.policy)

    # Batch

    def filter_by_status(self, items: Iterable[Item], stock_status: StockStatus) -> list[Item]:
        return aggregation.filter_by_status(items, stock_status, self.policy)

    def low_stock_items(self, items: Iterable[Item]) -> list[Item]:
        return aggregation.low_stock_items(items, self.policy)

    def critical_stock_items(self, items: Iterable[Item]) -> list[Item]:
        return aggregation.critical_stock_items(items, self.policy)

    def out_of_stock_items(self, items: Iterable[Item]) -> list[Item]:
        return aggregation.out_of_stock_items(items, self.policy)

    def partition_by_status(self, items: Iterable[Item]) -> dict[StockStatus, list[Item]]:
        return aggregation.partition_by_status(items, self.policy)

    def statistics(self, items: Iterable[Item]) -> StockStatistics:
        return aggregation.calculate_statistics(items, self.policy, sink=self.sink)

    # Priority and display

    def needs_reordering(self, item: Item) -> bool:
        return presentation.needs_reordering(item, self.policy)

    def reorder_priority(self, item: Item) -> int:
        return presentation.reorder_priority(item, self.policy)

    def sort_by_priority(self, items: Iterable[Item]) -> list[Item]:
        return presentation.sort_by_priority(items, self.policy)

    def display_unit(self, item: Item) -> str:
        return presentation.display_unit(item)

    def stock_display_text(self, item: Item) -> str:
        return presentation.stock_display_text(item)

    @staticmethod
    def status_color(stock_status: StockStatus | str) -> str:
        return presentation.status_color(stock_status)

    @staticmethod
    def status_label(stock_status: StockStatus | str) -> str:
        return presentation.status_label(stock_status)
