"""
Stock policy loader (``stock_config.loader``).

Responsibility
--------------
Loads a YAML policy file and parses it into a validated
``stock_config.schema.StockPolicy``.  Runtime callers go through
``stock_config.get_active_policy()``; this module is the parsing layer
underneath it.

Invariants enforced
-------------------
* Every parsed object is a frozen ``StockPolicy``.
* Omitted keys keep the value of ``DEFAULT_POLICY``; present keys must be
  valid or ``InvalidPolicyError`` is raised.  No silent coercion of bad
  values.
* ``compute_checksum`` produces a deterministic SHA-256 hash for policy
  identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Bad values  -> ``InvalidPolicyError``.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from dataclasses import replace
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from stock_config.schema import DEFAULT_POLICY, StockPolicy
from stock_kernel.domain.decimal_utils import to_decimal
from stock_kernel.domain.values import ItemKind, StockStatus
from stock_kernel.exceptions import InvalidPolicyError
from stock_kernel.logging_config import get_logger

logger = get_logger("config.loader")


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _positive_decimal(field_name: str, value: Any) -> Decimal:
    try:
        number = to_decimal(value)
    except (InvalidOperation, TypeError) as e:
        raise InvalidPolicyError(field_name, value, "not a number") from e
    if not number.is_finite() or number <= 0:
        raise InvalidPolicyError(field_name, value, "must be a positive finite number")
    return number


def _parse_kind(field_name: str, raw: Any) -> ItemKind:
    kind = ItemKind.parse(raw)
    if not isinstance(kind, ItemKind):
        raise InvalidPolicyError(field_name, raw, "unknown item kind")
    return kind


def _parse_kind_map(field_name: str, data: Any) -> dict[ItemKind, Decimal]:
    if not isinstance(data, Mapping):
        raise InvalidPolicyError(field_name, data, "expected a mapping of kind -> number")
    return {
        _parse_kind(field_name, raw_kind): _positive_decimal(f"{field_name}.{raw_kind}", raw_value)
        for raw_kind, raw_value in data.items()
    }


def _parse_priorities(data: Any) -> dict[StockStatus, int]:
    if not isinstance(data, Mapping):
        raise InvalidPolicyError("priorities", data, "expected a mapping of status -> integer")
    priorities = dict(DEFAULT_POLICY.priorities)
    for raw_status, raw_rank in data.items():
        try:
            status = StockStatus(str(raw_status).lower())
        except ValueError as e:
            raise InvalidPolicyError("priorities", raw_status, "unknown stock status") from e
        if isinstance(raw_rank, bool) or not isinstance(raw_rank, int):
            raise InvalidPolicyError(f"priorities.{raw_status}", raw_rank, "must be an integer")
        priorities[status] = raw_rank
    return priorities


def validate_policy(policy: StockPolicy) -> StockPolicy:
    """
    Check the cross-field constraints of a policy.

    Postconditions:
        - 0 < critical_ratio < 1
        - every threshold, multiplier and rounding unit is positive

    Raises:
        InvalidPolicyError: on the first violated constraint.
    """
    if not (Decimal("0") < policy.critical_ratio < Decimal("1")):
        raise InvalidPolicyError(
            "critical_ratio", policy.critical_ratio, "must be strictly between 0 and 1"
        )
    for kind, value in policy.min_stock.items():
        _positive_decimal(f"min_stock.{kind.value}", value)
    for kind, value in policy.rounding_units.items():
        _positive_decimal(f"rounding_units.{kind.value}", value)
    _positive_decimal("default_min_stock", policy.default_min_stock)
    _positive_decimal("default_rounding_unit", policy.default_rounding_unit)
    _positive_decimal("reorder_multiplier", policy.reorder_multiplier)
    missing = set(StockStatus) - set(policy.priorities)
    if missing:
        raise InvalidPolicyError(
            "priorities", sorted(s.value for s in missing), "missing statuses"
        )
    return policy


def parse_policy(data: Mapping[str, Any]) -> StockPolicy:
    """
    Parse a ``StockPolicy`` from a dict (usually loaded from YAML).

    Keys not present keep their ``DEFAULT_POLICY`` values.  ``min_stock``
    and ``rounding_units`` entries are merged over the defaults.

    Raises:
        InvalidPolicyError: a present value is malformed or out of range.
    """
    changes: dict[str, Any] = {}

    if "name" in data:
        changes["name"] = str(data["name"])
    if "min_stock" in data:
        changes["min_stock"] = {
            **DEFAULT_POLICY.min_stock,
            **_parse_kind_map("min_stock", data["min_stock"]),
        }
    if "rounding_units" in data:
        changes["rounding_units"] = {
            **DEFAULT_POLICY.rounding_units,
            **_parse_kind_map("rounding_units", data["rounding_units"]),
        }
    for key in ("default_min_stock", "reorder_multiplier", "default_rounding_unit", "critical_ratio"):
        if key in data:
            changes[key] = _positive_decimal(key, data[key])
    if "priorities" in data:
        changes["priorities"] = _parse_priorities(data["priorities"])

    policy = validate_policy(replace(DEFAULT_POLICY, **changes))
    logger.debug("stock_policy_parsed", extra={
        "policy_name": policy.name,
        "overridden_keys": sorted(changes),
    })
    return policy


def load_policy(path: Path) -> StockPolicy:
    """Load and validate a policy from a YAML file."""
    policy = parse_policy(load_yaml_file(Path(path)))
    logger.info("stock_policy_loaded", extra={
        "path": str(path),
        "policy_name": policy.name,
        "checksum": compute_checksum(policy),
    })
    return policy


def compute_checksum(policy: StockPolicy) -> str:
    """
    Compute SHA-256 checksum of the policy's canonical JSON serialization.

    Identical policies always produce identical checksums.
    """
    canonical = json.dumps(policy.to_dict(), sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
