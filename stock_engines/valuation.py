"""
stock_engines.valuation -- Monetary value of stock on hand.

Responsibility:
    Compute stock x unit cost with Decimal arithmetic and recover locally
    from corrupt input: a single malformed item must never abort a batch
    valuation or blank a dashboard.

Architecture position:
    Engines -- pure calculation layer.  The only side channel is the
    injected ``ValuationSink`` that receives diagnostics on the two
    fallback paths.

Invariants enforced:
    - Decimal-only arithmetic: 10 x 0.111111 is exactly 1.11111.
    - ``total_value`` never raises and never returns a non-finite number.
    - Missing stock or cost counts as zero.
    - A failing sink never changes the returned value.

Failure modes (all recovered, all return Decimal("0")):
    - Non-finite product (NaN / Infinity) -> WARNING ``total_value_non_finite``.
    - Exception while building or multiplying the Decimals -> ERROR
      ``total_value_calculation_failed`` carrying the underlying message.

Usage:
    from stock_engines.valuation import total_value

    value = total_value(item)                  # logs to stock_kernel.engines.valuation
    value = total_value(item, sink=my_sink)    # any object with .log(level, message, context)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Protocol

from stock_kernel.domain.decimal_utils import ZERO, to_decimal
from stock_kernel.domain.values import Item
from stock_kernel.logging_config import get_logger

logger = get_logger("engines.valuation")

COMPONENT = "inventory"


class ValuationSink(Protocol):
    """Observability capability the value calculator reports anomalies to."""

    def log(self, level: int, message: str, context: Mapping[str, Any]) -> None:
        ...


class LoggerSink:
    """Default sink: forwards to a structured stdlib logger with the context as ``extra``."""

    def __init__(self, target: logging.Logger | None = None):
        self._logger = target or logger

    def log(self, level: int, message: str, context: Mapping[str, Any]) -> None:
        self._logger.log(level, message, extra=dict(context))


_default_sink = LoggerSink()


def _diagnostic_context(item: Item, operation: str) -> dict[str, Any]:
    return {
        "component": COMPONENT,
        "operation": operation,
        "item_id": item.id,
        "item_name": item.name,
        "raw_stock": repr(item.stock),
        "raw_cost": repr(item.unit_cost),
    }


def _report(sink: ValuationSink, level: int, message: str, context: Mapping[str, Any]) -> None:
    try:
        sink.log(level, message, context)
    except Exception:
        # The calculation result stands; record the broken sink locally.
        logger.exception("valuation_sink_failed", extra={
            "item_id": context.get("item_id"),
            "sink_message": message,
        })


def total_value(item: Item, *, sink: ValuationSink | None = None) -> Decimal:
    """
    Monetary value of the item's stock: stock x unit_cost.

    Preconditions:
        None -- any item is accepted.

    Postconditions:
        Returns a finite Decimal.  Returns Decimal("0") when either input
        is missing, or after reporting to ``sink`` when the input is
        corrupt.
    """
    sink = sink or _default_sink

    try:
        stock = to_decimal(item.stock)
        unit_cost = to_decimal(item.unit_cost)
        value = stock * unit_cost
    except Exception as e:
        context = _diagnostic_context(item, "total_value")
        context["error"] = str(e) or type(e).__name__
        context["error_type"] = type(e).__name__
        _report(sink, logging.ERROR, "total_value_calculation_failed", context)
        return ZERO

    if not value.is_finite():
        _report(sink, logging.WARNING, "total_value_non_finite", _diagnostic_context(item, "total_value"))
        return ZERO

    return value
