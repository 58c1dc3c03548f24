"""Small helpers for MongoDB documents and connection URLs."""

from __future__ import annotations

from typing import Any


def connect_url(host: str, port: int, direct: bool) -> str:
    """Build a `host:port` connection URL, optionally forcing a direct connection."""
    return f"{host}:{port}{'?connect=direct' if direct else ''}"


def _is_empty(val: Any) -> bool:
    if val is None:
        return True
    if isinstance(val, (str, bytes, bytearray, list, tuple)):
        return len(val) == 0
    if isinstance(val, (bool, int, float, complex)):
        return val == 0
    return False


def sparse(m: dict[str, Any]) -> dict[str, Any]:
    """Delete empty-key and zero-value entries (except `_id`) from `m` and return it."""
    for key, val in list(m.items()):
        if not key or (key != "_id" and _is_empty(val)):
            del m[key]
    return m