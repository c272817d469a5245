"""
Stock policy schema (``stock_config.schema``).

Frozen dataclasses describing the tunable constants of the stock engines:
minimum stock per item kind, the critical ratio, the reorder target
multiplier, the reorder rounding unit per kind and the priority ranks.

``DEFAULT_POLICY`` reproduces the policy the inventory screens were built
against; a YAML file can replace it (see ``stock_config.loader``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from stock_kernel.domain.values import ItemKind, StockStatus


def _default_min_stock() -> dict[ItemKind, Decimal]:
    return {
        ItemKind.ELABORATED: Decimal("5"),
        ItemKind.COUNTABLE: Decimal("10"),
        ItemKind.MEASURABLE: Decimal("20"),
    }


def _default_rounding_units() -> dict[ItemKind, Decimal]:
    # COUNTABLE rounds to its package size when it has one; otherwise
    # it uses default_rounding_unit like MEASURABLE.
    return {ItemKind.ELABORATED: Decimal("5")}


def _default_priorities() -> dict[StockStatus, int]:
    # 2 is unassigned; consumers bucket on these exact integers.
    return {
        StockStatus.OUT: 5,
        StockStatus.CRITICAL: 4,
        StockStatus.LOW: 3,
        StockStatus.OK: 1,
    }


@dataclass(frozen=True)
class StockPolicy:
    """
    Policy constants consumed by the stock engines.

    Contract:
        Values are validated by ``stock_config.loader.validate_policy``
        before a policy becomes active.
    Guarantees:
        - ``critical_ratio`` is strictly between 0 and 1, so the critical
          threshold never exceeds the minimum.
    """

    min_stock: dict[ItemKind, Decimal] = field(default_factory=_default_min_stock)
    default_min_stock: Decimal = Decimal("10")
    critical_ratio: Decimal = Decimal("0.30")
    reorder_multiplier: Decimal = Decimal("2")
    rounding_units: dict[ItemKind, Decimal] = field(default_factory=_default_rounding_units)
    default_rounding_unit: Decimal = Decimal("10")
    priorities: dict[StockStatus, int] = field(default_factory=_default_priorities)
    name: str = "default"

    def min_stock_for(self, kind: ItemKind | str) -> Decimal:
        """Minimum stock for a kind, falling back to the default for unknown kinds."""
        if isinstance(kind, ItemKind):
            return self.min_stock.get(kind, self.default_min_stock)
        return self.default_min_stock

    def rounding_unit_for(self, kind: ItemKind | str) -> Decimal:
        if isinstance(kind, ItemKind):
            return self.rounding_units.get(kind, self.default_rounding_unit)
        return self.default_rounding_unit

    def priority_for(self, status: StockStatus) -> int:
        return self.priorities[status]

    def to_dict(self) -> dict[str, Any]:
        """Canonical plain-data form, used for checksums and YAML round trips."""
        return {
            "name": self.name,
            "min_stock": {k.value: str(v) for k, v in self.min_stock.items()},
            "default_min_stock": str(self.default_min_stock),
            "critical_ratio": str(self.critical_ratio),
            "reorder_multiplier": str(self.reorder_multiplier),
            "rounding_units": {k.value: str(v) for k, v in self.rounding_units.items()},
            "default_rounding_unit": str(self.default_rounding_unit),
            "priorities": {k.value: v for k, v in self.priorities.items()},
        }


DEFAULT_POLICY = StockPolicy()
