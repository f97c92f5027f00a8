import duckdb
import logging
import os

DB_FILE = os.getenv("SUBTRACK_DB_FILE", "subtrack.duckdb")
LOG_FILE = os.getenv("SUBTRACK_LOG_FILE", "subtrack.log")

# -----------------------------
# Logging
# -----------------------------
logging.basicConfig(
    filename=LOG_FILE,
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s"
)

logger = logging.getLogger(__name__)


def log_info(msg):
    logger.info(msg)
    print(msg)


def log_error(msg):
    logger.error(msg)
    print(msg)

# -----------------------------
# Get a DB connection
# -----------------------------
def get_db():
    """
    Returns a new DuckDB connection.
    """
    return duckdb.connect(DB_FILE)

# -----------------------------
# Initialize database schema
# -----------------------------
def init_db():
    conn = get_db()
    try:
        conn.execute("""
        CREATE TABLE IF NOT EXISTS subscriptions (
            id VARCHAR PRIMARY KEY,
            name VARCHAR NOT NULL,
            amount DECIMAL(12,2) NOT NULL,
            start_date DATE NOT NULL,
            frequency VARCHAR NOT NULL,
            enabled BOOLEAN DEFAULT TRUE,
            auto_renew BOOLEAN DEFAULT TRUE,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        log_info("Subscriptions table ensured.")

        conn.execute("CREATE INDEX IF NOT EXISTS idx_sub_name ON subscriptions(name);")
        log_info("Indexes created/ensured.")

    except Exception as e:
        log_error(f"Error initializing DB: {e}")
        raise
    finally:
        conn.close()
        log_info("Database setup complete and connection closed.")
