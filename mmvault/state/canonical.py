"""
Canonical encoding for pool snapshots.

Two observers of the same pool state must derive byte-identical encodings, so
the accepted value space is deliberately narrow: str-keyed dicts, lists,
str, bool, None and ints. Amounts are uint256 and exceed the integer range
JSON consumers agree on, so they travel as decimal strings (`encode_amount`).
"""

from __future__ import annotations

import hashlib
import json
from typing import Any

from ..kernels.python.share_math import require_uint


SNAPSHOT_DOMAIN = b"mmvault"

# Largest integer every mainstream JSON parser round-trips exactly (2**53 - 1).
JSON_SAFE_INT = (1 << 53) - 1


def encode_amount(value: int) -> str:
    """uint256 amount as a base-10 string with no sign or leading zeros."""
    require_uint("amount", value)
    return str(value)


def _check_value(value: Any, path: str) -> None:
    if value is None or isinstance(value, bool):
        return
    if isinstance(value, int):
        if abs(value) > JSON_SAFE_INT:
            raise TypeError(f"{path}: integer too large for canonical JSON; use encode_amount")
        return
    if isinstance(value, str):
        if any(0xD800 <= ord(ch) <= 0xDFFF for ch in value):
            raise TypeError(f"{path}: lone surrogates are not encodable")
        return
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"{path}: dict keys must be str")
            _check_value(key, f"{path}.<key>")
            _check_value(item, f"{path}.{key}")
        return
    if isinstance(value, (list, tuple)):
        for i, item in enumerate(value):
            _check_value(item, f"{path}[{i}]")
        return
    raise TypeError(f"{path}: {type(value).__name__} is not canonically encodable")


def canonical_json_bytes(value: Any) -> bytes:
    """Compact, key-sorted UTF-8 JSON; raises TypeError outside the accepted value space."""
    _check_value(value, "$")
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def domain_tag(label: str, version: int = 1) -> bytes:
    """NUL-terminated `mmvault/<label>/v<version>` prefix for hashing."""
    if not label or not label.isascii() or "/" in label or "\x00" in label:
        raise ValueError(f"invalid domain label: {label!r}")
    if not isinstance(version, int) or isinstance(version, bool) or version <= 0:
        raise ValueError("version must be a positive int")
    return b"/".join((SNAPSHOT_DOMAIN, label.encode("ascii"), b"v%d" % version)) + b"\x00"


def commitment(label: str, version: int, value: Any) -> bytes:
    return hashlib.sha256(domain_tag(label, version) + canonical_json_bytes(value)).digest()
