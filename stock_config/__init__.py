"""
stock_config -- single public entrypoint for stock policy configuration.

Responsibility:
    Provides the active ``StockPolicy`` through ``get_active_policy()``.
    Engines receive a policy as an explicit argument or fall back to the
    active one; they never read files or environment variables themselves.

Resolution order on first use:
    1. A policy installed with ``set_active_policy()``.
    2. The YAML file named by the ``STOCK_POLICY_PATH`` environment variable.
    3. ``DEFAULT_POLICY``.

Failure modes:
    - ``FileNotFoundError`` / ``yaml.YAMLError`` / ``InvalidPolicyError``
      when ``STOCK_POLICY_PATH`` points at a missing or invalid file.
"""

from __future__ import annotations

import os
import threading
from pathlib import Path

from stock_config.loader import compute_checksum, load_policy, parse_policy, validate_policy
from stock_config.schema import DEFAULT_POLICY, StockPolicy
from stock_kernel.logging_config import get_logger

_logger = get_logger("config")

POLICY_PATH_ENV = "STOCK_POLICY_PATH"

_active: StockPolicy | None = None
_lock = threading.Lock()


def get_active_policy() -> StockPolicy:
    """Return the policy the engines use when none is passed explicitly."""
    global _active
    with _lock:
        if _active is None:
            env_path = os.environ.get(POLICY_PATH_ENV)
            _active = load_policy(Path(env_path)) if env_path else DEFAULT_POLICY
            _logger.info("STOCK_CONFIG_TRACE", extra={
                "trace_type": "STOCK_CONFIG_TRACE",
                "policy_name": _active.name,
                "checksum": compute_checksum(_active),
                "source": env_path or "default",
            })
        return _active


def set_active_policy(policy: StockPolicy) -> None:
    """Install a validated policy as the active one."""
    global _active
    validate_policy(policy)
    with _lock:
        _active = policy


def reset_active_policy() -> None:
    """Forget the active policy so the next lookup re-resolves it. FOR TESTING."""
    global _active
    with _lock:
        _active = None


__all__ = [
    "DEFAULT_POLICY",
    "POLICY_PATH_ENV",
    "StockPolicy",
    "compute_checksum",
    "get_active_policy",
    "load_policy",
    "parse_policy",
    "reset_active_policy",
    "set_active_policy",
    "validate_policy",
]
