"""
db/init_db.py
-------------
Creates the application database and the tasks table if they do not
already exist. Safe to run on every process start.

Run this module directly to provision a fresh server:
    python -m db.init_db
"""

import psycopg
from psycopg import sql

from config import DatabaseConfig, get_app_config, get_base_config
from db.errors import ProvisioningError
from utils.logger import get_logger

logger = get_logger(__name__)

TASKS_TABLE = "public.tasks"

DATABASE_EXISTS_SQL = "SELECT 1 FROM pg_database WHERE datname = %s;"

TABLE_EXISTS_SQL = "SELECT to_regclass(%s);"

CREATE_TABLE_SQL = """
-- Tasks table: the only entity exposed by the API
CREATE TABLE public.tasks (
    id              INTEGER GENERATED ALWAYS AS IDENTITY PRIMARY KEY,
    title           VARCHAR(255) NOT NULL,
    description     VARCHAR(1000),
    is_completed    BOOLEAN NOT NULL DEFAULT FALSE,
    created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at      TIMESTAMPTZ
);
"""


def _connect(config: DatabaseConfig):
    try:
        return psycopg.connect(**config.connect_kwargs())
    except psycopg.Error as e:
        logger.error(f"Cannot connect to database '{config.database}': {e}")
        raise ProvisioningError(f"Cannot connect to database '{config.database}'") from e


def create_database(base_config: DatabaseConfig, database: str) -> bool:
    """
    Create ``database`` on the server unless the catalog already lists it.

    CREATE DATABASE cannot run inside a transaction block, so the
    administrative connection runs in autocommit mode.

    Returns:
        True if the database was created, False if it already existed.
    """
    conn = _connect(base_config)
    try:
        conn.autocommit = True
        with conn.cursor() as cur:
            cur.execute(DATABASE_EXISTS_SQL, (database,))
            if cur.fetchone() is not None:
                return False
            logger.info(f"Creating database {database}")
            cur.execute(sql.SQL("CREATE DATABASE {}").format(sql.Identifier(database)))
            return True
    except psycopg.Error as e:
        logger.error(f"Failed to create database '{database}': {e}")
        raise ProvisioningError(f"Failed to create database '{database}'") from e
    finally:
        conn.close()


def create_tables(app_config: DatabaseConfig) -> bool:
    """
    Create the tasks table inside the application database if it is missing.

    Returns:
        True if the table was created, False if it already existed.
    """
    conn = _connect(app_config)
    try:
        with conn.cursor() as cur:
            cur.execute(TABLE_EXISTS_SQL, (TASKS_TABLE,))
            row = cur.fetchone()
            if row is not None and row[0] is not None:
                return False
            logger.info(f"Creating table {TASKS_TABLE}")
            cur.execute(CREATE_TABLE_SQL)
        conn.commit()
        return True
    except psycopg.Error as e:
        conn.rollback()
        logger.error(f"Failed to create table {TASKS_TABLE}: {e}")
        raise ProvisioningError(f"Failed to create table {TASKS_TABLE}") from e
    finally:
        conn.close()


def ensure_schema(
    base_config: DatabaseConfig | None = None,
    app_database: str | None = None,
) -> None:
    """
    Make sure the application database and its tasks table exist.

    Args:
        base_config: Points at the administrative database. Defaults to
            ``config.get_base_config()``.
        app_database: Name of the application database. Defaults to the
            database of ``config.get_app_config()``.

    Raises:
        ProvisioningError: The server is unreachable or the DDL failed.
            Nothing is rolled back or repaired.
    """
    base_config = base_config or get_base_config()
    app_database = app_database or get_app_config().database
    logger.info(f"Ensuring schema with: {base_config.describe()}")

    create_database(base_config, app_database)
    create_tables(base_config.with_database(app_database))

    logger.info(f"Schema ensured: {app_database} + {TASKS_TABLE} ready")


if __name__ == "__main__":
    ensure_schema()
    print("✅ Database schema created successfully.")
