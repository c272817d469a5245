"""
Module: stock_engines
Responsibility:
    Package entrypoint that re-exports all public symbols from the pure
    stock calculation engine sub-modules.  This is the canonical import
    surface for the inventory data layer and the dashboards.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import stock_kernel and stock_config (and sibling engine modules).

Invariants enforced:
    - Decimal-only arithmetic: quantities and money never pass through
      binary floating point.
    - Determinism: identical inputs always produce identical outputs.
    - Availability: calculation functions return a value for every item;
      corrupt numbers are recovered locally and reported to a sink.

Usage:
    from stock_engines import stock_status, total_value, calculate_statistics
    from stock_engines import StockCalculator
"""

from stock_kernel.logging_config import get_logger

logger = get_logger("engines")

from stock_engines.aggregation import (
    calculate_statistics,
    critical_stock_items,
    filter_by_status,
    filter_by_statuses,
    low_stock_items,
    out_of_stock_items,
    partition_by_status,
)
from stock_engines.calculator import StockCalculator
from stock_engines.presentation import (
    display_unit,
    needs_reordering,
    reorder_priority,
    sort_by_priority,
    status_color,
    status_label,
    stock_display_text,
)
from stock_engines.reorder import (
    packages_to_order,
    reorder_target,
    rounding_unit,
    suggested_reorder_quantity,
)
from stock_engines.status import stock_status
from stock_engines.thresholds import critical_stock, min_stock
from stock_engines.valuation import LoggerSink, ValuationSink, total_value

__all__ = [
    # Thresholds
    "min_stock",
    "critical_stock",
    # Status
    "stock_status",
    # Valuation
    "total_value",
    "ValuationSink",
    "LoggerSink",
    # Reorder
    "suggested_reorder_quantity",
    "packages_to_order",
    "reorder_target",
    "rounding_unit",
    # Aggregation
    "filter_by_status",
    "filter_by_statuses",
    "low_stock_items",
    "critical_stock_items",
    "out_of_stock_items",
    "partition_by_status",
    "calculate_statistics",
    # Priority and display
    "needs_reordering",
    "reorder_priority",
    "sort_by_priority",
    "display_unit",
    "status_color",
    "status_label",
    "stock_display_text",
    # Facade
    "StockCalculator",
]

logger.debug("engines_package_loaded", extra={
    "module_count": 7,
    "modules": [
        "thresholds", "status", "valuation", "reorder",
        "aggregation", "presentation", "calculator",
    ],
})
