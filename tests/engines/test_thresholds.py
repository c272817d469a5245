"""
Tests for the threshold resolver.

Covers:
- Minimum stock per item kind, including unknown kinds
- Critical threshold rounding (always up)
- critical <= minimum for every kind
"""

from decimal import Decimal

import pytest

from stock_config.schema import StockPolicy
from stock_engines.thresholds import critical_stock, min_stock
from stock_kernel.domain.values import Item, ItemKind


def _item(kind) -> Item:
    return Item(id="x", name="x", kind=kind, stock=1, unit_cost=1)


class TestMinStock:
    """Minimum stock is a constant per kind."""

    @pytest.mark.parametrize(
        "kind, expected",
        [
            (ItemKind.ELABORATED, Decimal("5")),
            (ItemKind.COUNTABLE, Decimal("10")),
            (ItemKind.MEASURABLE, Decimal("20")),
        ],
    )
    def test_known_kinds(self, kind, expected):
        assert min_stock(_item(kind)) == expected

    def test_unknown_kind_defaults_to_ten(self):
        assert min_stock(_item("SERVICE")) == Decimal("10")

    def test_empty_kind_defaults_to_ten(self):
        assert min_stock(_item("")) == Decimal("10")

    def test_explicit_policy_overrides_active(self):
        policy = StockPolicy(min_stock={ItemKind.MEASURABLE: Decimal("50")})
        assert min_stock(_item(ItemKind.MEASURABLE), policy) == Decimal("50")


class TestCriticalStock:
    """Critical threshold is ceiling(min * 0.30)."""

    def test_elaborated_rounds_up(self):
        """5 * 0.30 = 1.5 -> 2."""
        assert critical_stock(_item(ItemKind.ELABORATED)) == Decimal("2")

    def test_countable(self):
        """10 * 0.30 = 3."""
        assert critical_stock(_item(ItemKind.COUNTABLE)) == Decimal("3")

    def test_measurable(self):
        """20 * 0.30 = 6."""
        assert critical_stock(_item(ItemKind.MEASURABLE)) == Decimal("6")

    def test_unknown_kind_uses_default_minimum(self):
        assert critical_stock(_item("SERVICE")) == Decimal("3")

    def test_never_rounds_down(self):
        policy = StockPolicy(min_stock={ItemKind.MEASURABLE: Decimal("7")})
        # 7 * 0.30 = 2.1 -> 3
        assert critical_stock(_item(ItemKind.MEASURABLE), policy) == Decimal("3")

    def test_result_is_integral(self):
        value = critical_stock(_item(ItemKind.ELABORATED))
        assert value == value.to_integral_value()


class TestThresholdOrdering:
    """critical <= minimum for every kind."""

    @pytest.mark.parametrize(
        "kind", [ItemKind.ELABORATED, ItemKind.COUNTABLE, ItemKind.MEASURABLE, "OTHER"]
    )
    def test_critical_not_above_minimum(self, kind):
        item = _item(kind)
        assert critical_stock(item) <= min_stock(item)

    def test_small_minimum_can_reach_equality(self):
        policy = StockPolicy(min_stock={ItemKind.ELABORATED: Decimal("1")})
        item = _item(ItemKind.ELABORATED)
        assert critical_stock(item, policy) == min_stock(item, policy) == Decimal("1")
