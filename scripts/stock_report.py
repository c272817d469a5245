#!/usr/bin/env python3
"""
Stock report over an item export.

Reads a YAML or JSON list of inventory records (the shape the inventory
data layer stores: id, name, type, unit, stock, unit_cost, packaging),
classifies every item, values it, suggests a reorder quantity and prints
the fleet statistics.

Usage:
    python3 scripts/stock_report.py --items items.yaml
    python3 scripts/stock_report.py --items items.json --format json
    python3 scripts/stock_report.py --items items.yaml --policy my_policy.yaml --verbose
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

import yaml

# ---------------------------------------------------------------------------
# Project root on sys.path
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from stock_config import DEFAULT_POLICY, load_policy  # noqa: E402
from stock_engines import StockCalculator  # noqa: E402
from stock_kernel.domain.values import Item  # noqa: E402
from stock_kernel.exceptions import StockKernelError  # noqa: E402
from stock_kernel.logging_config import LogContext, configure_logging  # noqa: E402

EXIT_OK = 0
EXIT_BAD_INPUT = 2


def _load_items(path: Path) -> list[Item]:
    with open(path) as f:
        data = yaml.safe_load(f) or []
    if isinstance(data, dict):
        data = data.get("items", [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of item records")
    return [Item.from_record(record) for record in data]


def _item_row(calculator: StockCalculator, item: Item) -> dict[str, Any]:
    status = calculator.stock_status(item)
    return {
        "id": item.id,
        "name": item.name,
        "status": status.value,
        "label": calculator.status_label(status),
        "color": calculator.status_color(status),
        "stock": calculator.stock_display_text(item),
        "value": str(calculator.total_value(item)),
        "reorder": str(calculator.suggested_reorder_quantity(item)),
        "unit": calculator.display_unit(item),
        "priority": calculator.reorder_priority(item),
    }


def _print_text(rows: list[dict[str, Any]], stats: dict[str, Any]) -> None:
    print(f"{'ID':<20} {'STATUS':<14} {'STOCK':<24} {'VALUE':>12} {'REORDER':>10}")
    print("-" * 84)
    for row in rows:
        reorder = f"{row['reorder']} {row['unit']}" if row["reorder"] != "0" else "-"
        print(
            f"{row['id']:<20} {row['label']:<14} {row['stock']:<24} "
            f"{row['value']:>12} {reorder:>10}"
        )
    print("-" * 84)
    print(
        f"Items: {stats['total']}  ok: {stats['ok']}  low: {stats['low']}  "
        f"critical: {stats['critical']}  out: {stats['out']}"
    )
    print(f"Total value: {stats['total_value']}  Average stock: {stats['average_stock']}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Inventory stock report")
    parser.add_argument("--items", required=True, type=Path, help="YAML or JSON item list")
    parser.add_argument("--policy", type=Path, help="YAML stock policy (default: built-in)")
    parser.add_argument("--format", choices=("text", "json"), default="text")
    parser.add_argument("--verbose", action="store_true", help="Emit structured logs to stderr")
    args = parser.parse_args(argv)

    configure_logging(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        policy = load_policy(args.policy) if args.policy else DEFAULT_POLICY
        items = _load_items(args.items)
    except (OSError, yaml.YAMLError, ValueError, StockKernelError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    calculator = StockCalculator(policy=policy)
    with LogContext.bind(batch_id=str(args.items), producer="stock_report"):
        rows = []
        for item in calculator.sort_by_priority(items):
            with LogContext.bind(item_id=item.id):
                rows.append(_item_row(calculator, item))
        stats = calculator.statistics(items).to_dict()

    if args.format == "json":
        print(json.dumps({"items": rows, "statistics": stats}, indent=2, ensure_ascii=False))
    else:
        _print_text(rows, stats)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
