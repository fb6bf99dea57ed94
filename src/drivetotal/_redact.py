"""Helpers for safe debug logging of HTTP headers.

Request headers may carry bearer tokens, cookies or API keys.  This module
masks them before they are emitted in DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

REDACTED = "<redacted>"

# Credentials whose scheme is kept so logs still show how a client authenticated.
_SCHEMED_HEADERS: frozenset[str] = frozenset({"authorization", "proxy-authorization"})

_SECRET_HEADERS: frozenset[str] = frozenset(
    {
        "cookie",
        "set-cookie",
        "x-api-key",
        "x-auth-token",
    }
)


def _mask_credentials(value: str) -> str:
    scheme, sep, _credentials = value.strip().partition(" ")
    if not sep:
        return REDACTED
    return f"{scheme} {REDACTED}"


def _truncate(value: str, max_length: int) -> str:
    if len(value) > max_length:
        return f"{value[:max_length]}…<truncated>"
    return value


def redact_headers(
    headers: Mapping[str, str] | Iterable[tuple[str, str]],
    *,
    max_length: int = 256,
) -> list[tuple[str, str]]:
    """Return ``(name, value)`` pairs of *headers* safe for debug logs.

    Names are matched case-insensitively.  Repeated headers are kept in
    order, so an aiohttp ``CIMultiDictProxy`` logs every ``Cookie`` line
    rather than the first one.
    """
    pairs = headers.items() if isinstance(headers, Mapping) else headers
    redacted: list[tuple[str, str]] = []
    for name, value in pairs:
        key = name.lower()
        if key in _SCHEMED_HEADERS:
            redacted.append((name, _mask_credentials(value)))
        elif key in _SECRET_HEADERS:
            redacted.append((name, REDACTED))
        else:
            redacted.append((name, _truncate(value, max_length)))
    return redacted
