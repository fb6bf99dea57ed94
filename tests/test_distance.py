from __future__ import annotations

from drivetotal.engine.distance import resolve_distance, resolve_window_distance, trip_distance_sum
from drivetotal.models.entries import FuelEntry


def _fuel(day: str, odometer: float, *, trip: float | None = None) -> FuelEntry:
    return FuelEntry(date=day, odometer=odometer, fuel_amount=40, cost=60, trip_distance=trip)


def test_no_entries_is_zero() -> None:
    assert resolve_distance([]) == 0.0
    assert resolve_distance([], initial_odometer=5000) == 0.0


def test_odometer_span_from_first_reading() -> None:
    entries = [_fuel("2024-01-15", 10000), _fuel("2024-02-03", 10500)]
    assert resolve_distance(entries) == 500


def test_odometer_span_from_initial_odometer() -> None:
    entries = [_fuel("2024-01-15", 10000), _fuel("2024-02-03", 10500)]
    assert resolve_distance(entries, initial_odometer=9000) == 1500


def test_trip_distance_takes_priority_over_odometer() -> None:
    entries = [_fuel("2024-01-15", 10000, trip=300), _fuel("2024-02-03", 10500, trip=250)]
    assert resolve_distance(entries, initial_odometer=9000) == 550


def test_zero_trip_distance_falls_back_to_odometer() -> None:
    entries = [_fuel("2024-01-15", 10000, trip=0), _fuel("2024-02-03", 10500)]
    assert trip_distance_sum(entries) == 0
    assert resolve_distance(entries) == 500


def test_negative_span_is_not_clamped() -> None:
    entries = [_fuel("2024-01-15", 10000), _fuel("2024-02-03", 10500)]
    assert resolve_distance(entries, initial_odometer=11000) == -500


def test_single_entry_without_initial_odometer_is_zero() -> None:
    assert resolve_distance([_fuel("2024-01-15", 10000)]) == 0


def test_window_needs_two_readings_for_odometer_fallback() -> None:
    assert resolve_window_distance([_fuel("2024-01-15", 10000)]) == 0
    assert resolve_window_distance([_fuel("2024-01-15", 10000), _fuel("2024-02-03", 10420)]) == 420
    assert resolve_window_distance([_fuel("2024-01-15", 10000, trip=380)]) == 380
