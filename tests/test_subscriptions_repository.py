"""Tests for the subscriptions repository error paths."""

import logging
from datetime import date
from decimal import Decimal

import duckdb
import pytest

from db import init_db
from repositories.subscriptions_repository import get_subscription_by_id, insert_subscription
from conftest import make_subscription


class FailingConnection:
    """Connection stand-in whose every statement fails."""

    def execute(self, *args, **kwargs):
        raise RuntimeError("disk I/O error")


@pytest.fixture
def conn(tmp_path, monkeypatch):
    import db
    monkeypatch.setattr(db, "DB_FILE", str(tmp_path / "repo.duckdb"))
    init_db()
    connection = duckdb.connect(db.DB_FILE)
    yield connection
    connection.close()


class TestInsertSubscription:

    def test_round_trip(self, conn):
        sub = make_subscription("monthly", date(2024, 1, 31), amount="12.99", name="Streaming")
        insert_subscription(conn, sub)
        stored = get_subscription_by_id(conn, sub.id)
        assert stored.amount == Decimal("12.99")
        assert stored.start_date == date(2024, 1, 31)
        assert stored.frequency == "monthly"

    def test_duplicate_logged_and_raised(self, conn, caplog):
        sub = make_subscription("monthly", date(2024, 1, 31), name="Streaming")
        insert_subscription(conn, sub)
        with caplog.at_level(logging.ERROR):
            with pytest.raises(ValueError, match="Duplicate subscription"):
                insert_subscription(conn, sub)
        assert any(r.levelno == logging.ERROR and sub.id in r.getMessage() for r in caplog.records)

    def test_store_failure_logged_and_reraised(self, caplog):
        sub = make_subscription("weekly", date(2024, 1, 1), name="Gym")
        with caplog.at_level(logging.ERROR):
            with pytest.raises(RuntimeError):
                insert_subscription(FailingConnection(), sub)
        assert any(
            r.levelno == logging.ERROR and "disk I/O error" in r.getMessage()
            for r in caplog.records
        )
