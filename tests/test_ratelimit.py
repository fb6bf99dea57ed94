from __future__ import annotations

import pytest

from drivetotal.ratelimit import InMemoryRateLimiter


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_allows_up_to_limit_then_blocks() -> None:
    clock = FakeClock()
    limiter = InMemoryRateLimiter(3, 60.0, clock=clock)

    results = [limiter.check("api:1.2.3.4") for _ in range(4)]

    assert [r.allowed for r in results] == [True, True, True, False]
    assert [r.remaining for r in results] == [2, 1, 0, 0]


def test_blocked_result_reports_time_until_reset() -> None:
    clock = FakeClock()
    limiter = InMemoryRateLimiter(1, 60.0, clock=clock)
    limiter.check("auth:1.2.3.4")

    clock.now += 20
    result = limiter.check("auth:1.2.3.4")

    assert result.allowed is False
    assert result.reset_in == pytest.approx(40.0)


def test_new_window_after_expiry() -> None:
    clock = FakeClock()
    limiter = InMemoryRateLimiter(1, 60.0, clock=clock)
    limiter.check("api:a")
    assert limiter.check("api:a").allowed is False

    clock.now += 61
    assert limiter.check("api:a").allowed is True


def test_identifiers_are_independent() -> None:
    limiter = InMemoryRateLimiter(1, 60.0, clock=FakeClock())

    assert limiter.check("api:a").allowed is True
    assert limiter.check("api:b").allowed is True
    assert limiter.check("api:a").allowed is False


def test_expired_windows_are_swept() -> None:
    clock = FakeClock()
    limiter = InMemoryRateLimiter(5, 60.0, clock=clock)
    for ip in ("a", "b", "c"):
        limiter.check(f"api:{ip}")
    assert len(limiter) == 3

    clock.now += 120
    limiter.check("api:d")

    assert len(limiter) == 1


def test_reset_clears_state() -> None:
    limiter = InMemoryRateLimiter(1, 60.0, clock=FakeClock())
    limiter.check("api:a")

    limiter.reset()

    assert len(limiter) == 0
    assert limiter.check("api:a").allowed is True


@pytest.mark.parametrize(("limit", "window"), [(0, 60.0), (5, 0.0)])
def test_invalid_arguments(limit: int, window: float) -> None:
    with pytest.raises(ValueError):
        InMemoryRateLimiter(limit, window)
