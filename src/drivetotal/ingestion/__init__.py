"""Ingestion layer.

This package contains adapters that turn raw records (record-store rows,
CSV exports) into typed drivetotal models.
"""

__all__: list[str] = []
