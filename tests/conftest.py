from decimal import Decimal

import pytest

from models.subscription import Subscription


def make_subscription(frequency, start_date, amount="10.00", name="Sub", enabled=True, sub_id=None):
    return Subscription(
        id=sub_id or f"sub_{name.lower().replace(' ', '_')}",
        name=name,
        amount=Decimal(amount),
        start_date=start_date,
        frequency=frequency,
        enabled=enabled,
    )


def fixed_clock(d):
    return lambda: d


@pytest.fixture
def client(tmp_path, monkeypatch):
    """API client backed by a throwaway DuckDB file."""
    from fastapi.testclient import TestClient
    import db
    monkeypatch.setattr(db, "DB_FILE", str(tmp_path / "test.duckdb"))

    from main import app
    with TestClient(app) as test_client:
        yield test_client
