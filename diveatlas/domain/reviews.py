"""
Gestion des avis: au plus un avis par couple (utilisateur, site).

Cycle de vie par couple: aucun avis -> avis (création) -> avis (mise à jour, même ligne) -> aucun
avis (suppression). Une seconde création alors qu'un avis existe échoue en conflit.

La vérification préalable ne sert qu'à produire un message clair: l'unicité est garantie par la
contrainte `uq_review_user_site` de la base, dont la violation est aussi traduite en conflit (cas
de deux créations concurrentes).
"""

from __future__ import annotations

from typing import Any

import structlog
from pydantic import ValidationError
from sqlalchemy.orm import Session

from diveatlas.app.metrics import REVIEW_CONFLICTS, REVIEW_EVENTS
from diveatlas.domain.entities import ReviewInput, User
from diveatlas.domain.errors import ConflictError, NotFoundError, ValidationFailed, field_errors
from diveatlas.domain.visibility import review_payload
from diveatlas.infra.repo.review_repo import DuplicateReview, ReviewRepo
from diveatlas.infra.repo.site_repo import DiveSiteRepo

log = structlog.get_logger(__name__)

SITE_NOT_FOUND = "Dive site not found"
REVIEW_NOT_FOUND = "Review not found"
ALREADY_REVIEWED = "You have already reviewed this dive site"


def validate_review(data: ReviewInput | dict[str, Any]) -> ReviewInput:
    """Valide un contenu d'avis; lève ValidationFailed avec le détail par champ."""
    if isinstance(data, ReviewInput):
        return data
    try:
        return ReviewInput.model_validate(data)
    except ValidationError as err:
        raise ValidationFailed("Invalid review data", field_errors(err.errors())) from err


class ReviewService:
    """Création, mise à jour et suppression de l'avis de l'appelant sur un site."""

    def __init__(self, session: Session) -> None:
        self._session = session
        self.sites = DiveSiteRepo(session)
        self.reviews = ReviewRepo(session)

    def _site(self, slug: str):
        site = self.sites.find_by_slug(slug)
        if site is None:
            raise NotFoundError(SITE_NOT_FOUND)
        return site

    def create(self, user: User, slug: str, data: ReviewInput | dict[str, Any]) -> dict[str, Any]:
        """Crée l'avis de `user` sur le site `slug`.

        Raises:
            ValidationFailed: note hors de [1, 10] ou contenu hors de [10, 2000] caractères.
            NotFoundError: slug non résolu.
            ConflictError: un avis existe déjà pour ce couple.
        """
        review_in = validate_review(data)
        site = self._site(slug)
        if self.reviews.get_for(user.id, site.id) is not None:
            REVIEW_CONFLICTS.labels("precheck").inc()
            log.info("review_conflict", user_id=user.id, site_id=site.id, source="precheck")
            raise ConflictError(ALREADY_REVIEWED)
        try:
            review = self.reviews.create(
                user.id, site.id, review_in.rating, review_in.title, review_in.content
            )
        except DuplicateReview as err:
            REVIEW_CONFLICTS.labels("constraint").inc()
            log.info("review_conflict", user_id=user.id, site_id=site.id, source="constraint")
            raise ConflictError(ALREADY_REVIEWED) from err
        self._session.commit()
        REVIEW_EVENTS.labels("create").inc()
        log.info("review_created", review_id=review.id, user_id=user.id, site_id=site.id)
        return review_payload(review)

    def update(self, user: User, slug: str, data: ReviewInput | dict[str, Any]) -> dict[str, Any]:
        """Réécrit l'avis existant de `user` sur le site `slug` (identifiant conservé)."""
        review_in = validate_review(data)
        site = self._site(slug)
        review = self.reviews.get_for(user.id, site.id)
        if review is None:
            raise NotFoundError(REVIEW_NOT_FOUND)
        self.reviews.update(review, review_in.rating, review_in.title, review_in.content)
        self._session.commit()
        REVIEW_EVENTS.labels("update").inc()
        log.info("review_updated", review_id=review.id, user_id=user.id, site_id=site.id)
        return review_payload(review)

    def delete(self, user: User, slug: str) -> dict[str, str]:
        """Supprime l'avis de `user` sur le site `slug`."""
        site = self._site(slug)
        review = self.reviews.get_for(user.id, site.id)
        if review is None:
            raise NotFoundError(REVIEW_NOT_FOUND)
        review_id = review.id
        self.reviews.delete(review)
        self._session.commit()
        REVIEW_EVENTS.labels("delete").inc()
        log.info("review_deleted", review_id=review_id, user_id=user.id, site_id=site.id)
        return {"message": "Review deleted successfully"}
