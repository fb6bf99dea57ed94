"""Bearer token issue and verification.

Tokens are HS256 JSON Web Tokens carrying ``userId``, ``iat`` and ``exp``
claims, so tokens minted by earlier deployments of the API keep working.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping

import jwt

from drivetotal.exceptions import DriveTotalAuthError

_logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
_BEARER_PREFIX = "Bearer "

# Expiry is checked against the authority's own clock.
_DECODE_OPTIONS = {"verify_exp": False, "verify_iat": False, "require": ["exp"]}


class TokenAuthority:
    """Issue and verify user tokens with a shared secret.

    Parameters
    ----------
    secret : str
        HMAC key.
    ttl : float
        Token lifetime in seconds.
    clock : callable
        Returns the current epoch time in seconds; injectable for tests.
    """

    def __init__(self, secret: str, ttl: float, *, clock: Callable[[], float] = time.time) -> None:
        if not secret:
            raise ValueError("secret must be non-empty")
        self._secret = secret
        self._ttl = ttl
        self._clock = clock

    def issue(self, user_id: str) -> str:
        now = int(self._clock())
        payload = {"userId": user_id, "iat": now, "exp": now + int(self._ttl)}
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def verify(self, token: str) -> str:
        """Return the user id carried by *token*.

        Raises
        ------
        DriveTotalAuthError
            When the token is malformed, forged, uses another algorithm or
            has expired.
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[JWT_ALGORITHM], options=_DECODE_OPTIONS)
        except jwt.InvalidSignatureError as exc:
            raise DriveTotalAuthError("Invalid token signature") from exc
        except jwt.InvalidAlgorithmError as exc:
            raise DriveTotalAuthError("Unsupported token algorithm") from exc
        except jwt.InvalidTokenError as exc:
            raise DriveTotalAuthError(f"Malformed token: {exc}") from exc

        exp = payload["exp"]
        if not isinstance(exp, (int, float)):
            raise DriveTotalAuthError("Malformed token: exp is not a number")
        if self._clock() >= exp:
            raise DriveTotalAuthError("Token expired")

        user_id = payload.get("userId")
        if user_id is None or user_id == "":
            raise DriveTotalAuthError("Token carries no user")
        return str(user_id)

    def user_from_headers(self, headers: Mapping[str, str]) -> str:
        """Resolve the current user from an ``Authorization: Bearer`` header."""
        value = headers.get("Authorization") or headers.get("authorization")
        if not value or not value.startswith(_BEARER_PREFIX):
            raise DriveTotalAuthError("Missing bearer token")
        token = value[len(_BEARER_PREFIX) :].strip()
        try:
            return self.verify(token)
        except DriveTotalAuthError as exc:
            _logger.warning("Rejected bearer token: %s", exc)
            raise
