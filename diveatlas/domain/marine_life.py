"""
Référentiel de faune/flore marines et associations avec les sites.
"""

from __future__ import annotations

from typing import Any

import structlog
from sqlalchemy.orm import Session

from diveatlas.domain.entities import MarineLifeType, Role, User, parse_enum
from diveatlas.domain.errors import NotFoundError, ValidationFailed
from diveatlas.domain.permissions import require_role
from diveatlas.infra.repo.marine_life_repo import MarineLifeRepo
from diveatlas.infra.repo.site_repo import DiveSiteRepo

log = structlog.get_logger(__name__)


def marine_life_payload(ml) -> dict[str, Any]:
    return {
        "id": ml.id,
        "name": ml.name,
        "latinName": ml.latin_name,
        "type": ml.type,
        "description": ml.description,
        "imageUrl": ml.image_url,
    }


class MarineLifeService:
    """Lecture du référentiel et remplacement des taxons associés à un site."""

    def __init__(self, session: Session) -> None:
        self._session = session
        self.sites = DiveSiteRepo(session)
        self.marine_life = MarineLifeRepo(session)

    def _site(self, slug: str):
        site = self.sites.find_by_slug(slug)
        if site is None:
            raise NotFoundError("Dive site not found")
        return site

    def list_catalog(self, type_: str | None = None) -> list[dict[str, Any]]:
        """Référentiel complet trié par nom; `type_` inconnu = pas de filtre."""
        rows = self.marine_life.list_all(parse_enum(MarineLifeType, type_))
        return [marine_life_payload(ml) for ml in rows]

    def list_for_site(self, slug: str) -> list[dict[str, Any]]:
        site = self._site(slug)
        return [marine_life_payload(ml) for ml in self.marine_life.list_for_site(site.id)]

    def replace_for_site(self, user: User, slug: str, marine_life_ids: list[str]) -> dict[str, Any]:
        """Remplace l'ensemble des taxons du site en une seule transaction.

        Raises:
            PermissionDenied: rôle inférieur à GUIDE.
            NotFoundError: slug non résolu.
            ValidationFailed: identifiants de taxons inconnus (`details.unknownIds`).
        """
        require_role(user, Role.GUIDE)
        site = self._site(slug)
        ids = list(dict.fromkeys(marine_life_ids))
        known = self.marine_life.existing_ids(ids)
        unknown = [i for i in ids if i not in known]
        if unknown:
            raise ValidationFailed("Unknown marine life ids", {"unknownIds": unknown})
        count = self.marine_life.replace_for_site(site.id, ids)
        self._session.commit()
        log.info("marine_life_replaced", site_id=site.id, user_id=user.id, count=count)
        return {"success": True, "count": count}
