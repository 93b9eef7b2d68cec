"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.

``PoolManager`` owns the single pool of the process. The first call to
``get_pool()`` provisions the schema and opens the pool; every later
call returns the same handle. The application creates one manager at
startup and hands it to the request handlers.

The pool itself is a ``psycopg_pool.ConnectionPool``: callers beyond
``max_size`` wait for a free connection, and its background workers
close connections idle for longer than ``max_idle``.
"""

import threading
from concurrent.futures import Future
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

import psycopg
from psycopg_pool import ConnectionPool

from config import DatabaseConfig, get_app_config, get_base_config
from db.errors import ProvisioningError
from db.init_db import ensure_schema
from utils.logger import get_logger

logger = get_logger(__name__)


def open_pool(config: DatabaseConfig) -> ConnectionPool:
    """Open a pool sized and bound as described by ``config``."""
    return ConnectionPool(
        kwargs=config.connect_kwargs(),
        min_size=config.pool_min_size,
        max_size=config.pool_max_size,
        max_idle=config.pool_idle_timeout_ms / 1000,
        name=f"taskify-{config.database}",
        open=True,
    )


class PoolManager:
    """
    Lazily opens and owns the process-wide connection pool.

    Initialization is single-flight: the first caller runs provisioning
    and opens the pool, while callers arriving during that attempt wait
    on the same Future and get its result or its exception. A failed
    attempt leaves nothing cached, so a later call starts over.
    """

    def __init__(
        self,
        app_config: DatabaseConfig | None = None,
        base_config: DatabaseConfig | None = None,
        provisioner: Callable[[DatabaseConfig, str], None] = ensure_schema,
        pool_factory: Callable[[DatabaseConfig], ConnectionPool] = open_pool,
    ):
        self._config = app_config or get_app_config()
        self._base_config = base_config or get_base_config()
        self._provisioner = provisioner
        self._pool_factory = pool_factory
        self._pool: Optional[ConnectionPool] = None
        self._pending: Optional[Future] = None
        self._lock = threading.Lock()

    @property
    def config(self) -> DatabaseConfig:
        return self._config

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    def get_pool(self) -> ConnectionPool:
        """
        Return the pool, provisioning the schema and opening it on first use.

        Raises:
            ProvisioningError: Provisioning failed or the pool could not be
                opened. Callers that joined the same attempt get the same error.
        """
        current = self._pool
        if current is not None:
            return current

        with self._lock:
            if self._pool is not None:
                return self._pool
            attempt = self._pending
            leader = attempt is None
            if leader:
                attempt = self._pending = Future()

        if leader:
            try:
                db_pool = self._initialize()
            except BaseException as e:
                attempt.set_exception(e)
                raise
            else:
                self._pool = db_pool
                attempt.set_result(db_pool)
            finally:
                with self._lock:
                    self._pending = None
        return attempt.result()

    def _initialize(self) -> ConnectionPool:
        self._provisioner(self._base_config, self._config.database)
        logger.info(f"Connecting with: {self._config.describe()}")
        try:
            db_pool = self._pool_factory(self._config)
        except psycopg.Error as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise ProvisioningError("Failed to initialize database pool") from e
        logger.info("Database connection pool initialized successfully.")
        return db_pool

    @contextmanager
    def connection(self) -> Iterator[psycopg.Connection]:
        """Borrow a connection from the pool; it is always returned afterwards."""
        with self.get_pool().connection() as conn:
            yield conn

    def close(self) -> None:
        """
        Close all connections in the pool, if it was ever opened.

        Meant to run once at shutdown. Close failures are logged only.
        """
        with self._lock:
            db_pool, self._pool = self._pool, None
        if db_pool is None:
            return
        try:
            db_pool.close()
            logger.info("Database connection pool closed.")
        except psycopg.Error as e:
            logger.error(f"Error closing pool: {e}")
