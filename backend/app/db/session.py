import logging
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


class Database:
    """Process-scoped engine + session factory.

    Opened by the startup hook, kept on ``app.state.database`` and disposed on
    shutdown. Handlers reach it only through :func:`get_db`.
    """

    def __init__(self, url: str, pool_size: int = 10, pool_timeout: int = 30):
        self.url = url
        self.pool_size = pool_size
        self.pool_timeout = pool_timeout
        self._engine: Optional[Engine] = None
        self._sessionmaker: Optional[sessionmaker] = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database is not connected; call connect() first")
        return self._engine

    def _create_engine(self) -> Engine:
        if make_url(self.url).get_backend_name() == "sqlite":
            # Single shared connection so an in-memory database survives across sessions
            return create_engine(
                self.url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_engine(
            self.url,
            pool_size=self.pool_size,
            max_overflow=0,
            pool_timeout=self.pool_timeout,
            pool_pre_ping=True,
        )

    def connect(self) -> None:
        if self._engine is not None:
            return
        self._engine = self._create_engine()
        self._sessionmaker = sessionmaker(autocommit=False, autoflush=False, bind=self._engine)
        self.ping()
        logger.info("Connected to database %s", make_url(self.url).render_as_string(hide_password=True))

    def ping(self) -> None:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def session(self) -> Session:
        if self._sessionmaker is None:
            raise RuntimeError("Database is not connected; call connect() first")
        return self._sessionmaker()

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            logger.info("Database pool disposed")
        self._engine = None
        self._sessionmaker = None


def get_db(request: Request) -> Iterator[Session]:
    database: Database = request.app.state.database
    db = database.session()
    try:
        yield db
    finally:
        db.close()
