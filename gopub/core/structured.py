"""Helpers for reading untyped TOML data.

Used at the config-file boundary: values are validated at runtime and
narrowed for the type checker in the same step.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def get_str(table: Mapping[str, object], key: str, *, strip: bool = True) -> str | None:
    """Get a string value. Missing, non-str or blank gives None.

    With strip=False a non-blank value is returned unchanged.
    """
    value = table.get(key)
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip() if strip else value


def get_int(table: Mapping[str, object], key: str) -> int | None:
    # bool is an int subclass; `depth = true` is not a depth
    value = table.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def get_bool(table: Mapping[str, object], key: str) -> bool | None:
    value = table.get(key)
    if not isinstance(value, bool):
        return None
    return value


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested table from a mapping."""
    return as_str_dict(table.get(key))
