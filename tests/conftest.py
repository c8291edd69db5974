"""Configuration de test pour pytest.

Chaque test dispose de son propre conteneur adossé à une base SQLite en mémoire, d'un
client HTTP sur une application construite autour de ce conteneur et d'une fabrique de données.

Toutes les sessions se prêtent l'unique connexion SQLite: une session ouverte par un test bloque
les appels HTTP et les écritures de la fabrique faites sans elle jusqu'à sa fermeture.
"""

from __future__ import annotations

import itertools
from contextlib import contextmanager
from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from diveatlas.app.main import create_app
from diveatlas.core.container import Container
from diveatlas.core.settings import Settings
from diveatlas.domain.auth import create_access_token, hash_password
from diveatlas.domain.entities import DifficultyLevel, DiveType, MarineLifeType, Role, User
from diveatlas.infra.repo.models import (
    DiveSiteORM,
    DiveSiteTypeORM,
    FavoriteORM,
    MarineLifeORM,
    PhotoORM,
    ReviewORM,
    UserORM,
)

BASE_TIME = datetime(2024, 1, 1, tzinfo=UTC)
TEST_JWT_SECRET = "test-secret"


def _settings(**overrides) -> Settings:
    values = {
        "DATABASE_URL": "sqlite+pysqlite:///:memory:",
        "JWT_SECRET": TEST_JWT_SECRET,
        "LOG_LEVEL": "WARNING",
        "CORS_ORIGINS": [],
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class Factory:
    """Fabrique de lignes de test; chaque méthode accepte une session existante ou ouvre la sienne."""

    def __init__(self, container: Container) -> None:
        self.container = container
        self._seq = itertools.count(1)

    @contextmanager
    def _scope(self, session):
        if session is not None:
            yield session
            session.flush()
        else:
            with self.container.session() as own:
                yield own

    def user(self, role: Role = Role.USER, name: str | None = None, session=None) -> User:
        n = next(self._seq)
        with self._scope(session) as s:
            row = UserORM(
                email=f"diver{n}@example.com",
                password_hash=hash_password("secret123"),
                name=name or f"Diver {n}",
                role=role,
            )
            s.add(row)
        return User(id=row.id, email=row.email, name=row.name, role=row.role)

    def site(
        self,
        name: str,
        creator: User | None = None,
        created_at: datetime | None = None,
        dive_types: tuple[DiveType, ...] = (),
        session=None,
        **fields,
    ) -> DiveSiteORM:
        creator = creator or self.user(Role.GUIDE, session=session)
        values = {
            "location": "Red Sea, Egypt",
            "latitude": 27.0,
            "longitude": 34.0,
            "difficulty": DifficultyLevel.INTERMEDIATE,
            "required_certification": [],
        }
        values.update(fields)
        with self._scope(session) as s:
            row = DiveSiteORM(
                name=name,
                created_by_id=creator.id,
                created_at=created_at or BASE_TIME + timedelta(minutes=next(self._seq)),
                dive_type_tags=[DiveSiteTypeORM(dive_type=t) for t in dive_types],
                **values,
            )
            s.add(row)
        return row

    def review(self, user: User, site: DiveSiteORM, rating: int = 8, session=None) -> ReviewORM:
        with self._scope(session) as s:
            row = ReviewORM(
                user_id=user.id,
                dive_site_id=site.id,
                rating=rating,
                title="Great dive",
                content="Clear water and plenty of fish.",
            )
            s.add(row)
        return row

    def photo(self, user: User, site: DiveSiteORM, session=None) -> PhotoORM:
        with self._scope(session) as s:
            row = PhotoORM(url="https://img.example.com/1.jpg", user_id=user.id, dive_site_id=site.id)
            s.add(row)
        return row

    def favorite(self, user: User, site: DiveSiteORM, session=None) -> FavoriteORM:
        with self._scope(session) as s:
            row = FavoriteORM(user_id=user.id, dive_site_id=site.id)
            s.add(row)
        return row

    def marine_life(
        self, name: str, type_: MarineLifeType = MarineLifeType.FISH, session=None
    ) -> MarineLifeORM:
        with self._scope(session) as s:
            row = MarineLifeORM(name=name, type=type_)
            s.add(row)
        return row

    def token(self, user: User) -> str:
        settings = self.container.settings
        return create_access_token(
            secret=settings.JWT_SECRET,
            alg=settings.JWT_ALG,
            expires_min=settings.JWT_EXPIRES_MIN,
            payload={"sub": user.id, "email": user.email, "name": user.name, "role": user.role.value},
        )

    def auth(self, user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token(user)}"}


@pytest.fixture
def container():
    """Conteneur neuf sur une base SQLite en mémoire, schéma créé."""
    c = Container(_settings())
    c.startup()
    yield c
    c.shutdown()


@pytest.fixture
def session(container):
    """Session transactionnelle de test (validée en fin de test)."""
    with container.session() as s:
        yield s


@pytest.fixture
def factory(container) -> Factory:
    return Factory(container)


@pytest.fixture
def client(container):
    """Client HTTP sur une application construite autour du conteneur de test."""
    with TestClient(create_app(container)) as c:
        yield c
