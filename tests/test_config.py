from __future__ import annotations

import pytest

from drivetotal.config import DriveTotalConfig
from drivetotal.exceptions import DriveTotalConfigError

_ENV_VARS = (
    "DRIVETOTAL_JWT_SECRET",
    "DRIVETOTAL_TOKEN_TTL",
    "DRIVETOTAL_API_RATE_LIMIT",
    "DRIVETOTAL_AUTH_RATE_LIMIT",
    "DRIVETOTAL_RATE_WINDOW",
    "DRIVETOTAL_PORT",
    "DRIVETOTAL_HOST",
    "DRIVETOTAL_ALLOWED_ORIGINS",
    "DRIVETOTAL_ALLOWED_ORIGIN_SUFFIX",
    "DRIVETOTAL_RATE_LIMIT_ENABLED",
    "DRIVETOTAL_INCLUDE_OWNERSHIP_COSTS",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    config = DriveTotalConfig(jwt_secret="s")

    assert config.token_ttl == 7 * 24 * 3600
    assert config.api_rate_limit == 100
    assert config.auth_rate_limit == 5
    assert config.rate_window == 60
    assert config.include_ownership_costs is False


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DRIVETOTAL_JWT_SECRET", "from-env")
    monkeypatch.setenv("DRIVETOTAL_API_RATE_LIMIT", "250")
    monkeypatch.setenv("DRIVETOTAL_RATE_WINDOW", "30")
    monkeypatch.setenv("DRIVETOTAL_ALLOWED_ORIGINS", "https://a.example, https://b.example,")
    monkeypatch.setenv("DRIVETOTAL_RATE_LIMIT_ENABLED", "off")
    monkeypatch.setenv("DRIVETOTAL_INCLUDE_OWNERSHIP_COSTS", "yes")

    config = DriveTotalConfig.from_env()

    assert config.jwt_secret == "from-env"
    assert config.api_rate_limit == 250
    assert config.rate_window == 30.0
    assert config.allowed_origins == ("https://a.example", "https://b.example")
    assert config.rate_limit_enabled is False
    assert config.include_ownership_costs is True


def test_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DRIVETOTAL_JWT_SECRET", "from-env")
    monkeypatch.setenv("DRIVETOTAL_PORT", "9000")

    config = DriveTotalConfig.from_env(jwt_secret="explicit", port=8081)

    assert config.jwt_secret == "explicit"
    assert config.port == 8081


def test_missing_secret() -> None:
    with pytest.raises(DriveTotalConfigError, match="DRIVETOTAL_JWT_SECRET"):
        DriveTotalConfig.from_env()


def test_invalid_number(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DRIVETOTAL_JWT_SECRET", "s")
    monkeypatch.setenv("DRIVETOTAL_API_RATE_LIMIT", "lots")

    with pytest.raises(DriveTotalConfigError, match="DRIVETOTAL_API_RATE_LIMIT"):
        DriveTotalConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [{"jwt_secret": ""}, {"jwt_secret": "s", "api_rate_limit": 0}, {"jwt_secret": "s", "rate_window": -1}],
)
def test_validation(kwargs: dict) -> None:
    with pytest.raises(DriveTotalConfigError):
        DriveTotalConfig(**kwargs)


def test_origin_allow_list() -> None:
    config = DriveTotalConfig(
        jwt_secret="s",
        allowed_origins=("https://fuel.example",),
        allowed_origin_suffix=".preview.example",
    )

    assert config.is_origin_allowed("https://fuel.example")
    assert config.is_origin_allowed("https://pr-12.preview.example")
    assert config.is_origin_allowed(None)
    assert not config.is_origin_allowed("https://evil.example")
