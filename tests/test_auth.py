from __future__ import annotations

import base64
import json

import jwt
import pytest

from drivetotal.auth import TokenAuthority
from drivetotal.exceptions import DriveTotalAuthError

SECRET = "test-secret-0123456789abcdef0123456789"
NOW = 1_700_000_000.0


def _authority(now: float = NOW, ttl: float = 3600) -> TokenAuthority:
    return TokenAuthority(SECRET, ttl, clock=lambda: now)


def _segment(data: dict) -> str:
    return base64.urlsafe_b64encode(json.dumps(data).encode()).rstrip(b"=").decode()


def test_issue_then_verify() -> None:
    token = _authority().issue("user-1")

    assert token.count(".") == 2
    assert _authority().verify(token) == "user-1"


def test_payload_claims() -> None:
    token = _authority().issue("user-1")
    payload_b64 = token.split(".")[1]
    payload = json.loads(base64.urlsafe_b64decode(payload_b64 + "=" * (-len(payload_b64) % 4)))

    assert payload == {"userId": "user-1", "iat": int(NOW), "exp": int(NOW) + 3600}


def test_expired_token() -> None:
    token = _authority().issue("user-1")

    with pytest.raises(DriveTotalAuthError, match="expired"):
        _authority(now=NOW + 3600).verify(token)


def test_wrong_secret() -> None:
    token = TokenAuthority("other-secret-0123456789abcdef012345678", 3600, clock=lambda: NOW).issue("user-1")

    with pytest.raises(DriveTotalAuthError, match="signature"):
        _authority().verify(token)


def test_tampered_payload() -> None:
    header, _payload, signature = _authority().issue("user-1").split(".")
    forged = _segment({"userId": "admin", "iat": int(NOW), "exp": int(NOW) + 3600})

    with pytest.raises(DriveTotalAuthError):
        _authority().verify(f"{header}.{forged}.{signature}")


def test_unsigned_algorithm_rejected() -> None:
    _header, payload, _signature = _authority().issue("user-1").split(".")
    none_header = _segment({"alg": "none", "typ": "JWT"})

    with pytest.raises(DriveTotalAuthError, match="algorithm"):
        _authority().verify(f"{none_header}.{payload}.")


@pytest.mark.parametrize("segment", ["\u00e9\u00e9", "\u00fcser"])
def test_non_ascii_segments_are_rejected(segment: str) -> None:
    header, payload, _signature = _authority().issue("user-1").split(".")

    with pytest.raises(DriveTotalAuthError):
        _authority().verify(f"{header}.{segment}.abc")
    with pytest.raises(DriveTotalAuthError):
        _authority().verify(f"{header}.{payload}.{segment}")


def test_token_without_expiry_is_rejected() -> None:
    token = jwt.encode({"userId": "user-1"}, SECRET, algorithm="HS256")

    with pytest.raises(DriveTotalAuthError):
        _authority().verify(token)


@pytest.mark.parametrize("token", ["", "abc", "a.b", "!!.??.**"])
def test_malformed_tokens(token: str) -> None:
    with pytest.raises(DriveTotalAuthError):
        _authority().verify(token)


class TestBearerHeader:
    def test_valid_header(self) -> None:
        token = _authority().issue("user-7")
        assert _authority().user_from_headers({"Authorization": f"Bearer {token}"}) == "user-7"

    def test_missing_header(self) -> None:
        with pytest.raises(DriveTotalAuthError):
            _authority().user_from_headers({})

    def test_wrong_scheme(self) -> None:
        token = _authority().issue("user-7")
        with pytest.raises(DriveTotalAuthError):
            _authority().user_from_headers({"Authorization": f"Basic {token}"})


def test_empty_secret_rejected() -> None:
    with pytest.raises(ValueError):
        TokenAuthority("", 3600)
