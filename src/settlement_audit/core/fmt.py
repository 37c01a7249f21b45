"""
Formatting helpers for diagnostics (non-core).

Core arithmetic never goes through these; they exist for debug prints, sink
consumers and mismatch reports.
"""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Any

from .datatypes import AssetDescriptor, BalanceWrite, Mismatch


def _jsonable(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return {k: _jsonable(v) for k, v in asdict(value).items()}
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, int):
        # big ints as strings so JSON readers never lose precision
        return str(value)
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def stringify(obj: Any) -> str:
    """Stable JSON rendering of dataclasses/ints for logs, e.g. '{"balance": "-100"}'."""
    return json.dumps(_jsonable(obj), sort_keys=True)


def fmt_asset(asset: AssetDescriptor) -> str:
    if asset.is_native:
        return "native"
    return f"{asset.token}#{asset.identifier}"


def fmt_write(w: BalanceWrite) -> str:
    tag = f" ({w.reason})" if w.reason else ""
    return f"{w.owner} {fmt_asset(w.asset)}: {w.before} -> {w.after}{tag}"


def fmt_mismatch(m: Mismatch) -> str:
    return (
        f"{m.owner} {fmt_asset(m.asset)}: expected {m.expected} actual {m.actual} "
        f"(delta {m.delta:+d})"
    )


__all__ = [
    "stringify",
    "fmt_asset",
    "fmt_write",
    "fmt_mismatch",
]
