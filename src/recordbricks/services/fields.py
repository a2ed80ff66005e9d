"""
Helpers for turning loosely-shaped input mappings into backend records.

Callers may pass either backend field names (``email_c``) or friendly names
(``email``). The helpers below pick the value the same way for every service
and keep "not given" (MISSING) apart from an explicit None, so that update
payloads only carry the fields the caller actually provided.
"""

from typing import Any, Dict, Mapping


class _Missing:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def coalesce(data: Mapping[str, Any], *keys: str, default: Any = MISSING) -> Any:
    """
    Return the first truthy value among ``keys``.

    When none is truthy, return ``default`` if one was given, otherwise the
    value of the last key (which may be MISSING, None, "" or False).

        >>> coalesce({"name": "Acme"}, "Name", "name")
        'Acme'
        >>> coalesce({"status": ""}, "status_c", "status", default="Active")
        'Active'
    """
    value: Any = MISSING
    for key in keys:
        value = data.get(key, MISSING)
        if value:
            return value
    if default is not MISSING:
        return default
    return value


def first_defined(data: Mapping[str, Any], *keys: str, default: Any = MISSING) -> Any:
    """
    Return the value of the first key present in ``data``, even if falsy.

        >>> first_defined({"chatEnabled": False}, "chatEnabled_c", "chatEnabled", default=True)
        False
    """
    for key in keys:
        if key in data:
            return data[key]
    return default


def compact(record: Dict[str, Any]) -> Dict[str, Any]:
    """Drop MISSING values; explicit None is kept and sent as null."""
    return {k: v for k, v in record.items() if v is not MISSING}
