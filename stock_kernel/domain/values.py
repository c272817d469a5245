"""
Values -- Immutable inventory value objects.

Responsibility:
    Provides the record types the stock engines operate on: the item kind
    enumeration, the optional packaging sub-record, the item itself, the
    derived stock status and the batch statistics aggregate.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by every engine module.

Invariants enforced:
    - Items are frozen; engines never mutate them.
    - Item keeps the raw ``stock`` and ``unit_cost`` values exactly as
      supplied upstream so diagnostics can report what was received.
    - StockStatus severity is a total order: out > critical > low > ok.

Failure modes:
    - InvalidItemRecordError from ``Item.from_record`` when a record is not
      a mapping, has no id or has a malformed packaging block.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from stock_kernel.domain.decimal_utils import ZERO, to_decimal
from stock_kernel.exceptions import InvalidItemRecordError


class ItemKind(str, Enum):
    """Inventory item category. Drives threshold and rounding policy."""

    MEASURABLE = "MEASURABLE"  # weighed or measured: kg, litro
    COUNTABLE = "COUNTABLE"  # discrete units, optionally packaged
    ELABORATED = "ELABORATED"  # prepared in-house: porción

    @classmethod
    def parse(cls, value: Any) -> ItemKind | str:
        """
        Match a raw kind string case-insensitively.

        Unknown kinds are returned unchanged so every consumer can apply
        its own default branch.
        """
        if isinstance(value, cls):
            return value
        text = str(value or "").strip()
        try:
            return cls(text.upper())
        except ValueError:
            return text


class StockStatus(str, Enum):
    """Classified stock level of an item."""

    OK = "ok"
    LOW = "low"
    CRITICAL = "critical"
    OUT = "out"

    @property
    def severity(self) -> int:
        """Position in the severity order (higher is worse)."""
        return _SEVERITY[self]


_SEVERITY: dict[StockStatus, int] = {
    StockStatus.OK: 0,
    StockStatus.LOW: 1,
    StockStatus.CRITICAL: 2,
    StockStatus.OUT: 3,
}


@dataclass(frozen=True, slots=True)
class Packaging:
    """How individual units of a COUNTABLE item group into purchasable packages."""

    package_size: Decimal
    package_unit: str

    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> Packaging:
        try:
            size = to_decimal(data.get("package_size"))
        except (InvalidOperation, TypeError) as e:
            raise InvalidItemRecordError(
                "packaging.package_size", f"not a number: {data.get('package_size')!r}"
            ) from e
        return cls(package_size=size, package_unit=str(data.get("package_unit") or ""))


@dataclass(frozen=True, slots=True)
class Item:
    """
    Inventory item as supplied by the inventory data layer.

    Contract:
        Read-only input to every engine.  ``stock`` and ``unit_cost`` are
        raw values; engines convert them with the helpers in
        ``stock_kernel.domain.decimal_utils``.

    Non-goals:
        - Does not validate numbers; a corrupt stock or cost is a runtime
          condition the engines recover from, not a construction error.
    """

    id: str
    name: str
    kind: ItemKind | str
    stock: Any = None
    unit_cost: Any = None
    unit: str | None = None
    packaging: Packaging | None = None

    def __post_init__(self) -> None:
        # "measurable" and ItemKind.MEASURABLE must take the same branches
        object.__setattr__(self, "kind", ItemKind.parse(self.kind))

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Item:
        """
        Build an Item from a data-layer record.

        Accepts either ``type`` (the storage column) or ``kind`` for the
        category, and an optional ``packaging`` mapping.

        Raises:
            InvalidItemRecordError: record is not a mapping, id missing or
                packaging malformed.
        """
        if not isinstance(record, Mapping):
            raise InvalidItemRecordError(
                "record", f"expected a mapping, got {type(record).__name__}"
            )
        item_id = record.get("id")
        if item_id is None or str(item_id).strip() == "":
            raise InvalidItemRecordError("id", "missing")

        packaging_data = record.get("packaging")
        packaging = None
        if packaging_data is not None:
            if not isinstance(packaging_data, Mapping):
                raise InvalidItemRecordError(
                    "packaging", f"expected a mapping, got {type(packaging_data).__name__}"
                )
            packaging = Packaging.from_record(packaging_data)

        return cls(
            id=str(item_id),
            name=str(record.get("name") or ""),
            kind=ItemKind.parse(record.get("type", record.get("kind"))),
            stock=record.get("stock"),
            unit_cost=record.get("unit_cost"),
            unit=record.get("unit"),
            packaging=packaging,
        )


@dataclass(frozen=True)
class StockStatistics:
    """
    Aggregate over a batch of items.

    All fields are immutable. ``total_value`` and ``average_stock`` are
    already rounded to 2 decimal places.
    """

    total: int = 0
    ok: int = 0
    low: int = 0
    critical: int = 0
    out: int = 0
    total_value: Decimal = ZERO
    average_stock: Decimal = ZERO

    def count(self, status: StockStatus) -> int:
        """Number of items classified as ``status``."""
        return getattr(self, status.value)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "ok": self.ok,
            "low": self.low,
            "critical": self.critical,
            "out": self.out,
            "total_value": str(self.total_value),
            "average_stock": str(self.average_stock),
        }
