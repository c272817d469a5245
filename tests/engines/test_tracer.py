"""Tests for the engine tracer (stock_engines/tracer.py)."""

from decimal import Decimal

from stock_engines.tracer import _canonicalize, compute_input_fingerprint, traced_engine
from stock_kernel.domain.values import StockStatus


class TestCanonicalize:

    def test_scalars(self):
        assert _canonicalize(None) == "null"
        assert _canonicalize(3) == "3"
        assert _canonicalize(Decimal("1.50")) == "1.50"
        assert _canonicalize("kg") == "kg"
        assert _canonicalize(StockStatus.LOW) == "low"

    def test_dict_keys_sorted(self):
        assert _canonicalize({"b": 1, "a": 2}) == "{a:2,b:1}"

    def test_sequences_keep_order(self):
        assert _canonicalize([2, 1]) == "[2,1]"
        assert _canonicalize((1, None)) == "[1,null]"


class TestFingerprint:

    def test_deterministic(self):
        a = compute_input_fingerprint(("x", "y"), {"x": 1, "y": "z"})
        b = compute_input_fingerprint(("x", "y"), {"y": "z", "x": 1})
        assert a == b
        assert len(a) == 16

    def test_missing_field_is_null(self):
        assert compute_input_fingerprint(("x",), {}) == compute_input_fingerprint(("x",), {"x": None})

    def test_differs_on_input(self):
        assert compute_input_fingerprint(("x",), {"x": 1}) != compute_input_fingerprint(("x",), {"x": 2})


class TestTracedEngine:

    def test_emits_trace_record(self, captured_logs):
        @traced_engine("demo", "1.0", fingerprint_fields=("quantity",))
        def double(quantity):
            return quantity * 2

        assert double(Decimal("4")) == Decimal("8")

        record = next(r for r in captured_logs() if r["message"] == "STOCK_ENGINE_TRACE")
        assert record["engine_name"] == "demo"
        assert record["engine_version"] == "1.0"
        assert record["input_fingerprint"] == compute_input_fingerprint(
            ("quantity",), {"quantity": Decimal("4")}
        )
        assert record["duration_ms"] >= 0
        assert record["function"].endswith("double")

    def test_positional_and_keyword_fingerprints_match(self, captured_logs):
        @traced_engine("demo", "1.0", fingerprint_fields=("quantity",))
        def identity(quantity):
            return quantity

        identity(5)
        identity(quantity=5)

        prints = [r["input_fingerprint"] for r in captured_logs() if r["message"] == "STOCK_ENGINE_TRACE"]
        assert len(prints) == 2
        assert prints[0] == prints[1]

    def test_generator_argument_is_still_consumed_by_engine(self, captured_logs):
        @traced_engine("demo", "1.0", fingerprint_fields=("values",))
        def total(values):
            return sum(values)

        assert total(x for x in (1, 2, 3)) == 6
