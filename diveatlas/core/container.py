"""
Conteneur d'injection de dépendances et cycle de vie du stockage.

Le conteneur possède les paramètres, le moteur SQLAlchemy (pool de connexions) et la factory de
sessions. Il est créé une fois par processus, démarré/arrêté par le lifespan de l'application et
transmis aux handlers via `app.state.container` (voir `diveatlas.api.deps`).
"""

from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from sqlalchemy import text
from sqlalchemy.orm import Session

from diveatlas.core.settings import Settings, get_settings
from diveatlas.infra.repo.db import get_engine, get_session_factory, session_scope
from diveatlas.infra.repo.models import Base

log = structlog.get_logger(__name__)


class Container:
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.engine = get_engine(self.settings.DATABASE_URL, echo=self.settings.DB_ECHO)
        self.session_factory = get_session_factory(self.engine)

    def startup(self) -> None:
        """Prépare le stockage (création du schéma si `AUTO_CREATE_TABLES`)."""
        if self.settings.AUTO_CREATE_TABLES:
            Base.metadata.create_all(bind=self.engine)
        log.info(
            "store_startup",
            backend=self.engine.dialect.name,
            database=self.engine.url.render_as_string(hide_password=True),
            auto_create=self.settings.AUTO_CREATE_TABLES,
        )

    def shutdown(self) -> None:
        """Ferme les connexions du pool."""
        self.engine.dispose()
        log.info("store_shutdown", backend=self.engine.dialect.name)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Session transactionnelle: commit en sortie normale, rollback sur exception."""
        with session_scope(self.session_factory) as session:
            yield session

    def ping(self) -> bool:
        """Vérifie la connectivité du stockage; propage l'exception en cas d'échec."""
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
