from db import log_error
from models.subscription import Subscription

# -----------------------------
# Subscriptions Repository
# -----------------------------

COLUMNS = "id, name, amount, start_date, frequency, enabled, auto_renew"


def _row_to_subscription(row):
    # frequency is stored as text; unknown values pass through for the engine to reject
    return Subscription(
        id=row[0],
        name=row[1],
        amount=row[2],
        start_date=row[3],
        frequency=row[4],
        enabled=bool(row[5]),
        auto_renew=bool(row[6]),
    )


def _params(subscription):
    frequency = getattr(subscription.frequency, "value", subscription.frequency)
    return (
        subscription.name,
        subscription.amount,
        subscription.start_date,
        frequency,
        subscription.enabled,
        subscription.auto_renew,
    )


def insert_subscription(conn, subscription):
    """
    Inserts a subscription row.
    - conn: DuckDB connection (from get_db() or passed in)
    - subscription: Subscription record; its id must be unused
    """
    try:
        conn.execute(
            f"""
            INSERT INTO subscriptions ({COLUMNS})
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (subscription.id, *_params(subscription))
        )
    except Exception as e:
        # Check if exception is a primary key violation (duplicate id)
        msg = str(e).lower()
        if "duplicate" in msg or "constraint" in msg:
            log_error(f"Duplicate subscription id {subscription.id}")
            raise ValueError(f"Duplicate subscription id {subscription.id!r}") from e
        else:
            log_error(f"Error inserting subscription {subscription.id}: {e}")
            raise


def get_subscription_by_id(conn, subscription_id):
    row = conn.execute(
        f"SELECT {COLUMNS} FROM subscriptions WHERE id = ?",
        (subscription_id,)
    ).fetchone()
    return _row_to_subscription(row) if row else None


def get_all_subscriptions(conn, search=None):
    """
    Returns all subscriptions ordered by name (case-insensitive).
    - search: optional case-insensitive substring filter on name
    """
    query = f"SELECT {COLUMNS} FROM subscriptions"
    params = []

    if search:
        query += " WHERE contains(lower(name), ?)"
        params.append(search.lower())

    query += " ORDER BY lower(name), id"

    rows = conn.execute(query, params).fetchall()
    return [_row_to_subscription(r) for r in rows]


def update_subscription(conn, subscription):
    """
    Replaces every stored field of an existing subscription.
    Returns False when no row has that id.
    """
    if get_subscription_by_id(conn, subscription.id) is None:
        return False

    conn.execute(
        """
        UPDATE subscriptions
        SET name = ?, amount = ?, start_date = ?, frequency = ?, enabled = ?, auto_renew = ?
        WHERE id = ?
        """,
        (*_params(subscription), subscription.id)
    )
    return True


def delete_subscription(conn, subscription_id):
    if get_subscription_by_id(conn, subscription_id) is None:
        return False

    conn.execute("DELETE FROM subscriptions WHERE id = ?", (subscription_id,))
    return True
