"""Service configuration for drivetotal."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from drivetotal._constants import (
    DEFAULT_API_RATE_LIMIT,
    DEFAULT_AUTH_RATE_LIMIT,
    DEFAULT_RATE_WINDOW_SECONDS,
    DEFAULT_TOKEN_TTL_SECONDS,
)
from drivetotal.exceptions import DriveTotalConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_list(value: str | None) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclasses.dataclass(frozen=True)
class DriveTotalConfig:
    """Service configuration.

    Parameters
    ----------
    jwt_secret : str
        HMAC secret used to sign and verify bearer tokens.
    token_ttl : float
        Lifetime of issued tokens in seconds.  Defaults to 7 days.
    api_rate_limit : int
        Requests allowed per client and window on data endpoints.
    auth_rate_limit : int
        Requests allowed per client and window on credential endpoints.
    rate_window : float
        Rate-limit window length in seconds.
    rate_limit_enabled : bool
        Disable to run without request budgets (tests, trusted networks).
    allowed_origins : tuple of str
        Origins answered with CORS headers.  Subdomains of
        ``allowed_origin_suffix`` are accepted too.
    allowed_origin_suffix : str
        Domain suffix of preview deployments, e.g. ``".vercel.app"``.
    include_ownership_costs : bool
        Fold ownership costs into the fleet summary's ``totalCost``.
    host : str
        Listen address of the HTTP API.
    port : int
        Listen port of the HTTP API.
    """

    jwt_secret: str
    token_ttl: float = DEFAULT_TOKEN_TTL_SECONDS
    api_rate_limit: int = DEFAULT_API_RATE_LIMIT
    auth_rate_limit: int = DEFAULT_AUTH_RATE_LIMIT
    rate_window: float = DEFAULT_RATE_WINDOW_SECONDS
    rate_limit_enabled: bool = True
    allowed_origins: tuple[str, ...] = ()
    allowed_origin_suffix: str = ""
    include_ownership_costs: bool = False
    host: str = "0.0.0.0"
    port: int = 8080

    def __post_init__(self) -> None:
        if not self.jwt_secret:
            raise DriveTotalConfigError("jwt_secret must be set")
        if self.api_rate_limit <= 0 or self.auth_rate_limit <= 0:
            raise DriveTotalConfigError("rate limits must be positive")
        if self.rate_window <= 0:
            raise DriveTotalConfigError("rate_window must be positive")

    def is_origin_allowed(self, origin: str | None) -> bool:
        if not origin:
            return True
        if origin in self.allowed_origins:
            return True
        return bool(self.allowed_origin_suffix) and origin.endswith(self.allowed_origin_suffix)

    @classmethod
    def from_env(cls, **overrides: Any) -> DriveTotalConfig:
        """Create configuration from ``DRIVETOTAL_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        DriveTotalConfigError
            When the secret is missing or a numeric variable cannot be parsed.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        secret = env.get("DRIVETOTAL_JWT_SECRET")
        if secret is not None:
            config_kwargs["jwt_secret"] = secret

        _ENV_NUMERIC_MAP: dict[str, tuple[str, type]] = {
            "DRIVETOTAL_TOKEN_TTL": ("token_ttl", float),
            "DRIVETOTAL_API_RATE_LIMIT": ("api_rate_limit", int),
            "DRIVETOTAL_AUTH_RATE_LIMIT": ("auth_rate_limit", int),
            "DRIVETOTAL_RATE_WINDOW": ("rate_window", float),
            "DRIVETOTAL_PORT": ("port", int),
        }
        for env_key, (field_name, cast) in _ENV_NUMERIC_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = cast(val)
            except ValueError as exc:
                raise DriveTotalConfigError(f"{env_key} must be a number, got {val!r}") from exc

        host = env.get("DRIVETOTAL_HOST")
        if host is not None:
            config_kwargs["host"] = host

        if "allowed_origins" not in overrides:
            config_kwargs["allowed_origins"] = _env_list(env.get("DRIVETOTAL_ALLOWED_ORIGINS"))
        suffix = env.get("DRIVETOTAL_ALLOWED_ORIGIN_SUFFIX")
        if suffix is not None:
            config_kwargs["allowed_origin_suffix"] = suffix

        if "rate_limit_enabled" not in overrides:
            config_kwargs["rate_limit_enabled"] = _env_bool(env.get("DRIVETOTAL_RATE_LIMIT_ENABLED"), True)
        if "include_ownership_costs" not in overrides:
            config_kwargs["include_ownership_costs"] = _env_bool(
                env.get("DRIVETOTAL_INCLUDE_OWNERSHIP_COSTS"),
                False,
            )

        config_kwargs.update(overrides)

        if "jwt_secret" not in config_kwargs:
            raise DriveTotalConfigError("DRIVETOTAL_JWT_SECRET is not set")
        return cls(**config_kwargs)
