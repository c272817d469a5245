"""
Tests for the StockCalculator facade.

Covers:
- Delegation to the engine functions under one policy and one sink
- Custom policy and sink binding
"""

from decimal import Decimal

from stock_config.schema import StockPolicy
from stock_engines import StockCalculator
from stock_kernel.domain.values import Item, ItemKind, StockStatus


class RecordingSink:
    def __init__(self):
        self.messages = []

    def log(self, level, message, context):
        self.messages.append(message)


class TestDefaultCalculator:

    def setup_method(self):
        self.calculator = StockCalculator()
        self.items = [
            Item(id="a", name="a", kind=ItemKind.MEASURABLE, stock=12, unit_cost="10"),
            Item(id="b", name="b", kind=ItemKind.COUNTABLE, stock=0, unit_cost="3"),
            Item(id="c", name="c", kind=ItemKind.ELABORATED, stock=9, unit_cost="1.5"),
        ]

    def test_thresholds(self):
        item = self.items[0]
        assert self.calculator.min_stock(item) == Decimal("20")
        assert self.calculator.critical_stock(item) == Decimal("6")

    def test_status_and_value(self):
        assert self.calculator.stock_status(self.items[0]) is StockStatus.LOW
        assert self.calculator.total_value(self.items[0]) == Decimal("120")

    def test_reorder(self):
        assert self.calculator.suggested_reorder_quantity(self.items[0]) == Decimal("30")
        assert self.calculator.packages_to_order(self.items[1]) == 0

    def test_batch_operations(self):
        assert [i.id for i in self.calculator.low_stock_items(self.items)] == ["a"]
        assert [i.id for i in self.calculator.critical_stock_items(self.items)] == ["b"]
        assert [i.id for i in self.calculator.out_of_stock_items(self.items)] == ["b"]
        assert [i.id for i in self.calculator.filter_by_status(self.items, StockStatus.OK)] == ["c"]
        assert len(self.calculator.partition_by_status(self.items)[StockStatus.OUT]) == 1

    def test_statistics(self):
        stats = self.calculator.statistics(self.items)
        assert stats.total == 3
        # 120 + 0 + 13.5
        assert stats.total_value == Decimal("133.50")
        # 21 / 3
        assert stats.average_stock == Decimal("7.00")

    def test_priority_and_display(self):
        assert [i.id for i in self.calculator.sort_by_priority(self.items)] == ["b", "a", "c"]
        assert self.calculator.needs_reordering(self.items[2]) is False
        assert self.calculator.reorder_priority(self.items[1]) == 5
        assert self.calculator.display_unit(self.items[2]) == "porción"
        assert self.calculator.stock_display_text(self.items[1]) == "0 unidades"
        assert StockCalculator.status_color(StockStatus.LOW) == "yellow"
        assert StockCalculator.status_label(StockStatus.OK) == "Stock OK"


class TestBoundCalculator:

    def test_custom_policy(self):
        policy = StockPolicy(min_stock={ItemKind.MEASURABLE: Decimal("100")})
        calculator = StockCalculator(policy=policy)
        item = Item(id="a", name="a", kind=ItemKind.MEASURABLE, stock=50, unit_cost=1)
        # default policy would call 50 OK; min 100 / critical 30 makes it LOW
        assert calculator.stock_status(item) is StockStatus.LOW
        assert calculator.suggested_reorder_quantity(item) == Decimal("150")

    def test_sink_is_used_for_batch_valuation(self):
        sink = RecordingSink()
        calculator = StockCalculator(sink=sink)
        items = [Item(id="bad", name="x", kind=ItemKind.COUNTABLE, stock="??", unit_cost=1)]

        assert calculator.statistics(items).total_value == Decimal("0")
        assert sink.messages == ["total_value_calculation_failed"]
