"""
Legacy shape normalization.

Older callers send the handle as ``nick``. Every request container is
rewritten so the handle lives under ``handle`` only.
"""

from typing import Any, Dict, Optional

# Deprecated names for the handle, in precedence order.
LEGACY_ALIASES = ("nick",)

# Request containers; None is the top level.
CONTAINERS = (None, "user", "user_data", "q")


def _container(data: Dict[str, Any], name: Optional[str]) -> Optional[Dict[str, Any]]:
    if name is None:
        return data
    inner = data.get(name)
    return inner if isinstance(inner, dict) else None


def fix_nick_handle(data: Optional[Dict[str, Any]], options) -> Optional[Dict[str, Any]]:
    """Rewrite legacy aliases to ``handle`` in place. Idempotent."""
    if options is None:
        raise ValueError("options are required")

    if not isinstance(data, dict):
        return data

    downcase = options.handle.downcase

    for name in CONTAINERS:
        container = _container(data, name)
        if container is None:
            continue

        handle = container.get("handle")
        for alias in LEGACY_ALIASES:
            if alias in container:
                legacy = container.pop(alias)
                if handle is None:
                    handle = legacy

        if handle is None:
            continue

        if downcase and isinstance(handle, str):
            handle = handle.lower()
        container["handle"] = handle

    return data
