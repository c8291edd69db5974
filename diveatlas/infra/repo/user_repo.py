"""Dépôt utilisateurs adossé à SQLAlchemy (email unique)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from diveatlas.domain.entities import Role

from .models import UserORM


class EmailTaken(Exception):
    """Un compte existe déjà pour cet email."""


class UserRepo:
    """Recherche et création de comptes."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, user_id: str) -> UserORM | None:
        return self._session.get(UserORM, user_id)

    def get_by_email(self, email: str) -> UserORM | None:
        """Recherche un utilisateur par email (comparaison exacte, email normalisé en minuscules)."""
        stmt = select(UserORM).where(UserORM.email == email.lower())
        return self._session.execute(stmt).scalars().first()

    def create(
        self,
        email: str,
        password_hash: str,
        name: str | None = None,
        role: Role = Role.USER,
    ) -> UserORM:
        """Crée un compte. Lève EmailTaken si l'email est déjà utilisé."""
        user = UserORM(email=email.lower(), password_hash=password_hash, name=name, role=role)
        try:
            with self._session.begin_nested():
                self._session.add(user)
        except IntegrityError as err:
            raise EmailTaken(email) from err
        return user
