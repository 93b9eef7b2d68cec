"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants, plus the
immutable database configuration values used by the db layer.

Nothing here touches the network. Malformed values fall back to
their defaults; bad credentials only show up when connecting.
"""

import os
from dataclasses import dataclass, replace

from dotenv import load_dotenv

load_dotenv()


def _env_int(name: str, default: int) -> int:
    """Read an integer env var, falling back to ``default`` when unset or malformed."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    """Read a boolean env var ("1", "true", "yes", "on" are truthy)."""
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    return default


# ── HTTP server ───────────────────────────────────────────
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = _env_int("PORT", 5000)

_raw_origins = os.getenv("CORS_ORIGINS", "*")
CORS_ORIGINS: list[str] = [o.strip() for o in _raw_origins.split(",") if o.strip()] or ["*"]

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# ── PostgreSQL ────────────────────────────────────────────
DEFAULT_ADMIN_DB: str = "postgres"
DEFAULT_APP_DB: str = "taskify_db"


@dataclass(frozen=True)
class DatabaseConfig:
    """
    Connection parameters for one database on the server.

    Attributes:
        host: Server hostname.
        port: Server port.
        user: Login name (None lets libpq pick its own default).
        password: Login password.
        database: Database to connect to.
        pool_min_size: Connections the pool keeps open.
        pool_max_size: Upper bound on concurrently borrowed connections.
        pool_idle_timeout_ms: Idle connections older than this are recycled.
        encrypt: Require TLS on the wire.
        trust_server_certificate: Skip server certificate verification.
    """
    host: str = "localhost"
    port: int = 5432
    user: str | None = None
    password: str | None = None
    database: str = DEFAULT_ADMIN_DB
    pool_min_size: int = 0
    pool_max_size: int = 10
    pool_idle_timeout_ms: int = 30000
    encrypt: bool = False
    trust_server_certificate: bool = True

    def with_database(self, database: str) -> "DatabaseConfig":
        """Return a copy pointing at another database on the same server."""
        return replace(self, database=database)

    @property
    def sslmode(self) -> str:
        if not self.encrypt:
            return "disable"
        return "require" if self.trust_server_certificate else "verify-full"

    def connect_kwargs(self) -> dict:
        """Keyword arguments for ``psycopg.connect`` and the connection pool."""
        kwargs = {
            "host": self.host,
            "port": self.port,
            "dbname": self.database,
            "sslmode": self.sslmode,
        }
        if self.user:
            kwargs["user"] = self.user
        if self.password:
            kwargs["password"] = self.password
        return kwargs

    def describe(self) -> dict:
        """Loggable summary of the target. Never includes the password."""
        return {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "database": self.database,
        }


def get_base_config() -> DatabaseConfig:
    """Configuration pointing at the administrative database (used for provisioning)."""
    return DatabaseConfig(
        host=os.getenv("DB_HOST", "localhost"),
        port=_env_int("DB_PORT", 5432),
        user=os.getenv("DB_USER") or None,
        password=os.getenv("DB_PASS") or None,
        database=os.getenv("DB_ADMIN_NAME", DEFAULT_ADMIN_DB),
        pool_min_size=_env_int("DB_POOL_MIN", 0),
        pool_max_size=_env_int("DB_POOL_MAX", 10),
        pool_idle_timeout_ms=_env_int("DB_POOL_IDLE_TIMEOUT_MS", 30000),
        encrypt=_env_bool("DB_ENCRYPT", False),
        trust_server_certificate=_env_bool("DB_TRUST_SERVER_CERTIFICATE", True),
    )


def get_app_config() -> DatabaseConfig:
    """Configuration pointing at the tasks database."""
    return get_base_config().with_database(os.getenv("DB_NAME", DEFAULT_APP_DB))
