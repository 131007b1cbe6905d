"""
Typed reads of optional request fields.

Malformed values become ``invalid-<field>`` outcomes instead of being coerced.
"""

from typing import Any, Dict, Optional

from account_core.result import Error, Result, Return


def read_flag(request: Dict[str, Any], key: str) -> Result[Optional[bool]]:
    """None when absent, else the boolean value"""
    value = request.get(key)
    if value is None or isinstance(value, bool):
        return Return.ok(value)
    return Return.err(Error(f"invalid-{key}", f"{key} must be true or false", {key: value}))


def read_expire(request: Dict[str, Any]) -> Result[Optional[int]]:
    """None when absent, else a non-negative lifetime in milliseconds"""
    value = request.get("expire")
    if value is None:
        return Return.ok(None)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return Return.err(
            Error("invalid-expire", "expire must be a non-negative number of milliseconds", {"expire": value})
        )
    return Return.ok(value)
