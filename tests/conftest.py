"""
Pytest fixtures for the stock engine test suite.

Provides:
- Structured logging configured for the session
- LogContext and active-policy isolation between tests
- ``captured_logs`` for asserting on emitted JSON log records
- Item factories for the three item kinds
"""

import json
import logging
from decimal import Decimal
from io import StringIO

import pytest

from stock_config import reset_active_policy
from stock_kernel.domain.values import Item, ItemKind, Packaging
from stock_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture(autouse=True)
def _reset_policy():
    """Each test resolves the active policy from scratch."""
    reset_active_policy()
    yield
    reset_active_policy()


@pytest.fixture
def captured_logs():
    """
    Capture stock_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            total_value(item)
            logs = captured_logs()
            assert any(r["message"] == "total_value_non_finite" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("stock_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Item factories
# =============================================================================


@pytest.fixture
def measurable():
    """MEASURABLE item factory (min 20, critical 6)."""

    def _make(stock=25, unit_cost="10", item_id="flour", unit="kg") -> Item:
        return Item(
            id=item_id,
            name="Harina",
            kind=ItemKind.MEASURABLE,
            stock=stock,
            unit_cost=unit_cost,
            unit=unit,
        )

    return _make


@pytest.fixture
def countable():
    """COUNTABLE item factory (min 10, critical 3)."""

    def _make(stock=15, unit_cost="5", item_id="beer", package_size=None, package_unit="caja") -> Item:
        packaging = None
        if package_size is not None:
            packaging = Packaging(package_size=Decimal(str(package_size)), package_unit=package_unit)
        return Item(
            id=item_id,
            name="Cerveza",
            kind=ItemKind.COUNTABLE,
            stock=stock,
            unit_cost=unit_cost,
            unit="unidad",
            packaging=packaging,
        )

    return _make


@pytest.fixture
def elaborated():
    """ELABORATED item factory (min 5, critical 2)."""

    def _make(stock=8, unit_cost="120", item_id="sauce", unit=None) -> Item:
        return Item(
            id=item_id,
            name="Salsa de la casa",
            kind=ItemKind.ELABORATED,
            stock=stock,
            unit_cost=unit_cost,
            unit=unit,
        )

    return _make
