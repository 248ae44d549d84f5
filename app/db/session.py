# app/db/session.py
import logging
from typing import Any, Dict, Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import Settings

logger = logging.getLogger("app.db")


def _engine_options(uri: str, settings: Optional[Settings]) -> Dict[str, Any]:
    """
    Opciones del engine según el dialecto.
    En PostgreSQL se acotan conexión, consultas y espera del pool.
    """
    if settings is None or not uri.startswith("postgresql"):
        return {}
    return {
        "pool_pre_ping": True,
        "pool_size": settings.DB_POOL_SIZE,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "connect_args": {
            "connect_timeout": settings.DB_CONNECT_TIMEOUT,
            "options": f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}",
        },
    }


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Handle de la base de datos con ciclo de vida explícito.

    Se abre al iniciar el proceso (lifespan de FastAPI), se guarda en
    app.state.db y se cierra al apagar. Los handlers lo reciben por
    inyección a través de get_db.
    """

    def __init__(self, uri: str, settings: Optional[Settings] = None, **engine_kwargs: Any):
        self.uri = uri
        self._options = {**_engine_options(uri, settings), **engine_kwargs}
        self.engine: Optional[Engine] = None
        self.SessionLocal: Optional[sessionmaker] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.DATABASE_URI, settings=settings)

    @property
    def is_open(self) -> bool:
        return self.engine is not None

    def open(self) -> "Database":
        if self.is_open:
            return self
        self.engine = create_engine(self.uri, **self._options)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        logger.info(f"Database engine created ({self.engine.dialect.name})")
        return self

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
            logger.info("Database engine disposed")
        self.engine = None
        self.SessionLocal = None

    def session(self) -> Session:
        if self.SessionLocal is None:
            raise RuntimeError("Database is not open")
        return self.SessionLocal()

    def ping(self) -> None:
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))


# Función generadora para obtener una sesión por petición
def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.db.session()
    try:
        yield db
    finally:
        db.close()
