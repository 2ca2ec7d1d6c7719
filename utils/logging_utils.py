"""Helpers for keeping e-mail addresses and tokens out of log lines."""

from typing import Any, Dict, Iterable, Mapping

SENSITIVE_KEYS = frozenset({"email", "password", "access_token", "refresh_token", "token", "apikey"})


def mask_value(value: Any) -> Any:
    """``jane@example.com`` -> ``ja***@example.com``; long tokens keep only their ends."""
    if not isinstance(value, str):
        return value
    if "@" in value:
        name, _, domain = value.partition("@")
        return (name[:2] + "***@" + domain) if name else "***@" + domain
    if len(value) > 12:
        return value[:4] + "..." + value[-4:]
    return "***"


def sanitize_payload(payload: Mapping[str, Any], sensitive_keys: Iterable[str] = SENSITIVE_KEYS) -> Dict[str, Any]:
    """Copy of ``payload`` with the values of sensitive keys masked."""
    sensitive = set(sensitive_keys)
    return {key: mask_value(value) if key in sensitive else value for key, value in payload.items()}
