"""Dépendances partagées pour les routes de l'API.

But du module
-------------
- Fournir à chaque requête une session SQLAlchemy issue du conteneur de l'application
  (`app.state.container`), sans singleton de module.
- Résoudre l'appelant à partir du jeton `Authorization: Bearer <jwt>`:
  `get_current_user` l'exige (401 sinon), `get_optional_user` retourne None pour un invité.
"""

from collections.abc import Iterator

import structlog
from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from diveatlas.api.errors import unauthorized
from diveatlas.core.container import Container
from diveatlas.domain.auth import decode_token
from diveatlas.domain.entities import User
from diveatlas.infra.repo.user_repo import UserRepo

log = structlog.get_logger(__name__)


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_session(container: Container = Depends(get_container)) -> Iterator[Session]:
    """Session transactionnelle limitée à la requête."""
    with container.session() as session:
        yield session


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization or not authorization.lower().startswith("bearer "):
        return None
    return authorization.split(" ", 1)[1].strip() or None


def _resolve_user(token: str, container: Container, session: Session) -> User | None:
    settings = container.settings
    data = decode_token(token, settings.JWT_SECRET, settings.JWT_ALG)
    if data is None:
        return None
    row = UserRepo(session).get(data.sub)
    if row is None:
        return None
    return User(id=row.id, email=row.email, name=row.name, role=row.role, avatar=row.avatar)


def get_current_user(
    authorization: str | None = Header(None),
    container: Container = Depends(get_container),
    session: Session = Depends(get_session),
) -> User:
    """Extrait et valide l'utilisateur courant; 401 si absent, invalide ou inconnu."""
    token = _bearer_token(authorization)
    if token is None:
        raise unauthorized("Authentication required")
    user = _resolve_user(token, container, session)
    if user is None:
        log.info("invalid_session_token")
        raise unauthorized("Invalid or expired session")
    return user


def get_optional_user(
    authorization: str | None = Header(None),
    container: Container = Depends(get_container),
    session: Session = Depends(get_session),
) -> User | None:
    """Utilisateur courant ou None; un jeton invalide est traité comme un invité."""
    token = _bearer_token(authorization)
    if token is None:
        return None
    user = _resolve_user(token, container, session)
    if user is None:
        log.info("invalid_session_token", optional=True)
    return user
