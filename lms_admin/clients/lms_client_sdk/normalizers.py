from __future__ import annotations

from typing import Any

ENVELOPE_LIST_KEYS = ("value", "items", "data", "rows")


def normalize_collection(payload: Any) -> list[Any]:
    """Return the row list carried by a collection response.

    The API answers either with a bare JSON array or with a result envelope
    such as ``{"isSuccess": true, "value": [...]}``. A failed envelope yields
    an empty list.
    """
    if isinstance(payload, list):
        return payload
    if not isinstance(payload, dict):
        return []
    if _to_bool(payload.get("isSuccess")) is False:
        return []
    for key in ENVELOPE_LIST_KEYS:
        rows = payload.get(key)
        if isinstance(rows, list):
            return rows
    return []


def normalize_record(payload: Any) -> dict[str, Any] | None:
    if not isinstance(payload, dict):
        return None
    if "isSuccess" in payload:
        if _to_bool(payload.get("isSuccess")) is False:
            return None
        value = payload.get("value")
        return value if isinstance(value, dict) else None
    return payload


def _to_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "y", "on"}:
            return True
        if normalized in {"0", "false", "no", "n", "off"}:
            return False
    return None
