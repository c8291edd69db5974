"""Moteur et sessions SQLAlchemy du catalogue.

Sans `DATABASE_URL`, une base SQLite en mémoire est utilisée (dev et tests).
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool

DEFAULT_DATABASE_URL = "sqlite+pysqlite:///:memory:"


def _sqlite_on_connect(dbapi_connection, _record) -> None:
    # pysqlite gère mal BEGIN/SAVEPOINT: SQLAlchemy émet lui-même BEGIN (voir _sqlite_on_begin).
    dbapi_connection.isolation_level = None
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _sqlite_on_begin(conn) -> None:
    conn.exec_driver_sql("BEGIN")


def get_engine(url: str | None = None, echo: bool = False) -> Engine:
    """Crée un moteur SQLAlchemy à partir de l'URL de base de données.

    Une base SQLite en mémoire n'existe que dans sa connexion: le pool n'en garde qu'une, prêtée
    à une seule session à la fois (les autres attendent son retour, au plus `pool_timeout`).
    """
    db_url = url or DEFAULT_DATABASE_URL
    kwargs: dict = {}
    if db_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in db_url or db_url in ("sqlite://", "sqlite+pysqlite://"):
            kwargs.update(poolclass=QueuePool, pool_size=1, max_overflow=0, pool_timeout=30)
    engine = create_engine(db_url, future=True, echo=echo, **kwargs)
    if db_url.startswith("sqlite"):
        event.listen(engine, "connect", _sqlite_on_connect)
        event.listen(engine, "begin", _sqlite_on_begin)
    return engine


def get_session_factory(engine: Engine) -> sessionmaker:
    """Crée une factory de sessions SQLAlchemy."""
    return sessionmaker(bind=engine, class_=Session, expire_on_commit=False)


@contextmanager
def session_scope(factory: sessionmaker) -> Iterator[Session]:
    """Ouvre une session pour un bloc de travail.

    Valide la transaction en sortie normale, l'annule sur exception et ferme toujours la
    session.
    """
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
