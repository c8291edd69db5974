# ============================================================
# Module : diveatlas/infra/repo/review_repo.py
# Objet  : Accès SQL (CRUD) aux avis, unicité (user, site) portée par la base.
# ============================================================

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .models import ReviewORM


class DuplicateReview(Exception):
    """La contrainte `uq_review_user_site` a rejeté l'insertion."""


class ReviewRepo:
    """CRUD des avis, indexés par le couple (utilisateur, site)."""

    def __init__(self, session: Session) -> None:
        """Construit le repo avec une session (SQLAlchemy)."""
        self._session = session

    def get_for(self, user_id: str, site_id: str) -> ReviewORM | None:
        stmt = select(ReviewORM).where(
            ReviewORM.user_id == user_id, ReviewORM.dive_site_id == site_id
        )
        return self._session.execute(stmt).scalars().first()

    def create(
        self, user_id: str, site_id: str, rating: int, title: str | None, content: str
    ) -> ReviewORM:
        """Insère un avis. Lève DuplicateReview si la contrainte d'unicité est violée.

        L'insertion est faite dans un savepoint pour que l'échec n'annule pas le reste de la
        transaction de la requête.
        """
        row = ReviewORM(
            user_id=user_id,
            dive_site_id=site_id,
            rating=rating,
            title=title,
            content=content,
        )
        try:
            with self._session.begin_nested():
                self._session.add(row)
        except IntegrityError as err:
            raise DuplicateReview(f"{user_id}:{site_id}") from err
        return row

    def update(
        self, review: ReviewORM, rating: int, title: str | None, content: str
    ) -> ReviewORM:
        """Réécrit l'avis en place (même identifiant) et avance `updated_at`."""
        review.rating = rating
        review.title = title
        review.content = content
        review.updated_at = datetime.now(UTC)
        self._session.flush()
        return review

    def delete(self, review: ReviewORM) -> None:
        self._session.delete(review)
        self._session.flush()
