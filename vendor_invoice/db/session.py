"""Database connection management."""
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine

from .models import Base
from .secrets import fetch_secret_string
from ..config.settings import Settings
from ..errors import StartupError
from ..utils.logger import get_logger

logger = get_logger("db.session")


class ConnectionProvider:
    """
    Hands out request-scoped transactional connections.

    Built once per process from the connection descriptor; the wrapped
    SQLAlchemy engine owns the connection pool.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    @classmethod
    def from_url(cls, url: str, echo: bool = False) -> "ConnectionProvider":
        """
        Create a provider for a SQLAlchemy database URL.

        Args:
            url: SQLAlchemy database URL
            echo: Log emitted SQL

        Returns:
            ConnectionProvider bound to a new engine
        """
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False} if url.startswith("sqlite") else {},
            echo=echo,
        )
        return cls(engine)

    @contextmanager
    def connect(self) -> Iterator[Connection]:
        """
        Transactional connection context manager.

        Commits when the block exits normally, rolls back when it raises,
        and returns the connection to the pool in both cases.

        Usage:
            with provider.connect() as conn:
                conn.execute(...)
        """
        with self.engine.begin() as conn:
            yield conn

    def ping(self) -> None:
        """Round-trip a trivial query; raises on failure."""
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def dispose(self) -> None:
        self.engine.dispose()


def resolve_database_url(settings: Settings) -> str:
    """
    Resolve the connection descriptor.

    A configured secret ARN wins over ``DATABASE_URL``.

    Raises:
        StartupError: If neither is configured or the secret lookup fails
    """
    if settings.SQL_SECRET_ARN:
        logger.info("Reading database URL from Secrets Manager")
        return fetch_secret_string(settings.SQL_SECRET_ARN, settings.AWS_REGION).strip()
    if settings.DATABASE_URL:
        return settings.DATABASE_URL
    raise StartupError("Neither SQL_SECRET_ARN nor DATABASE_URL is configured.")


def build_provider(settings: Settings) -> ConnectionProvider:
    """Build the process-wide connection provider."""
    url = resolve_database_url(settings)
    provider = ConnectionProvider.from_url(url, echo=settings.DEBUG)
    logger.info(
        "Connection provider ready",
        extra={"extra": {"dialect": provider.engine.dialect.name}},
    )
    return provider


def init_db(provider: ConnectionProvider, settings: Optional[Settings] = None) -> None:
    """
    Initialize database tables.

    Creates the vendor invoice table if it doesn't exist. Skipped when
    ``CREATE_TABLES`` is off.
    """
    if settings is not None and not settings.CREATE_TABLES:
        return
    Base.metadata.create_all(bind=provider.engine)
