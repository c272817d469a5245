"""
stock_engines.presentation -- Reorder priority and display metadata.

Responsibility:
    Rank items by urgency and provide the presentation tokens the inventory
    screens show next to a stock status: badge color, localized label,
    display unit and a human-readable stock text.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Depends on ``stock_engines.status``.  This module is the single source
    of truth for the status tokens; the UI must not redefine them.

Invariants enforced:
    - Priority ranks are out 5, critical 4, low 3, ok 1.  Rank 2 is
      unassigned and consumers bucket on these exact integers.
    - Color and label tables have an explicit default entry for values
      outside ``StockStatus``.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from stock_config import get_active_policy
from stock_config.schema import StockPolicy
from stock_engines.status import stock_status
from stock_kernel.domain.decimal_utils import ZERO, as_quantity, exact_context
from stock_kernel.domain.values import Item, ItemKind, StockStatus

REORDER_STATUSES: frozenset[StockStatus] = frozenset(
    {StockStatus.LOW, StockStatus.CRITICAL, StockStatus.OUT}
)

STATUS_COLORS: dict[str, str] = {
    StockStatus.OK.value: "green",
    StockStatus.LOW.value: "yellow",
    StockStatus.CRITICAL.value: "orange",
    StockStatus.OUT.value: "red",
}
DEFAULT_STATUS_COLOR = "gray"

STATUS_LABELS: dict[str, str] = {
    StockStatus.OK.value: "Stock OK",
    StockStatus.LOW.value: "Stock Bajo",
    StockStatus.CRITICAL.value: "Stock Crítico",
    StockStatus.OUT.value: "Sin Stock",
}
DEFAULT_STATUS_LABEL = "Desconocido"


def needs_reordering(item: Item, policy: StockPolicy | None = None) -> bool:
    """True when the item is low, critical or out of stock."""
    return stock_status(item, policy) in REORDER_STATUSES


def reorder_priority(item: Item, policy: StockPolicy | None = None) -> int:
    """Urgency rank for sorting: out 5, critical 4, low 3, ok 1."""
    policy = policy or get_active_policy()
    return policy.priority_for(stock_status(item, policy))


def sort_by_priority(items: Iterable[Item], policy: StockPolicy | None = None) -> list[Item]:
    """Most urgent first; items of equal priority keep their input order."""
    policy = policy or get_active_policy()
    return sorted(items, key=lambda item: reorder_priority(item, policy), reverse=True)


def display_unit(item: Item) -> str:
    """Unit shown next to the item's quantity."""
    match item.kind:
        case ItemKind.MEASURABLE:
            return item.unit or "kg"
        case ItemKind.COUNTABLE:
            if item.packaging is not None and item.packaging.package_unit:
                return item.packaging.package_unit
            return "unidad"
        case ItemKind.ELABORATED:
            return item.unit or "porción"
        case _:
            return "unidad"


def _status_key(status: StockStatus | str) -> str:
    return status.value if isinstance(status, StockStatus) else str(status)


def status_color(status: StockStatus | str) -> str:
    """Badge color token for a status."""
    return STATUS_COLORS.get(_status_key(status), DEFAULT_STATUS_COLOR)


def status_label(status: StockStatus | str) -> str:
    """Localized label for a status."""
    return STATUS_LABELS.get(_status_key(status), DEFAULT_STATUS_LABEL)


def _format_quantity(value: Decimal) -> str:
    # 12.500 -> "12.5", 3.0 -> "3", 1E+30 -> "1000...0"
    integral = value.to_integral_value()
    if value == integral:
        return format(integral, "f")
    return format(value, "f").rstrip("0")


def stock_display_text(item: Item) -> str:
    """
    Human-readable stock on hand.

    COUNTABLE items with packaging are shown as whole packages plus loose
    units, e.g. "2 cajas + 3 sueltas".
    """
    stock = as_quantity(item.stock)
    if not stock.is_finite():
        stock = ZERO

    match item.kind:
        case ItemKind.MEASURABLE:
            return f"{_format_quantity(stock)} {item.unit or 'kg'}"
        case ItemKind.COUNTABLE:
            packaging = item.packaging
            size = as_quantity(packaging.package_size) if packaging is not None else ZERO
            if packaging is None or size <= ZERO or not size.is_finite() or stock < ZERO:
                return f"{_format_quantity(stock)} unidades"
            with exact_context(stock, size):
                packages, loose = divmod(stock, size)
            text = f"{_format_quantity(packages)} {packaging.package_unit}s"
            if loose > ZERO:
                text += f" + {_format_quantity(loose)} sueltas"
            return text
        case _:
            return f"{_format_quantity(stock)} porciones"
