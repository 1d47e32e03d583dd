from __future__ import annotations

from typing import Dict, Iterable, List

_TRUTHY = {"1", "true", "yes", "y", "on"}


def to_bool(v: str | bool | int | None, default: bool = False) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return default
    return str(v).strip().lower() in _TRUTHY


def csv_to_list(v: str | List[str] | None) -> List[str]:
    if v is None:
        return []
    if isinstance(v, list):
        return [s.strip() for s in v if s and str(s).strip()]
    return [s.strip() for s in str(v).split(",") if s.strip()]


def key_value_pairs(items: Iterable[str] | None) -> Dict[str, str]:
    """
    Turn ["title=My Film", "artist=Me"] into a dict.
    Only the first '=' splits, so values may contain '='. Keys must be non-empty.
    """
    out: Dict[str, str] = {}
    for raw in items or []:
        key, sep, value = str(raw).partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"expected key=value, got {raw!r}")
        out[key] = value
    return out
