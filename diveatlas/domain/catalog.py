import math
from typing import Any

import structlog
from sqlalchemy.orm import Session

from diveatlas.domain.entities import (
    DifficultyLevel,
    DiveType,
    Role,
    SiteInput,
    User,
    parse_enum,
)
from diveatlas.domain.errors import ConflictError, NotFoundError
from diveatlas.domain.permissions import require_role
from diveatlas.domain.visibility import build_site_payload, public_fields
from diveatlas.infra.repo.models import DiveSiteORM, DiveSiteTypeORM
from diveatlas.infra.repo.site_repo import DiveSiteRepo, SiteFilters

log = structlog.get_logger(__name__)


class CatalogService:
    """Service métier du catalogue de sites.

    Responsabilités:
    - Rechercher/filtrer/paginer les sites actifs.
    - Résoudre un slug et produire la réponse détaillée adaptée à l'appelant.
    - Créer un site (rôle GUIDE ou ADMIN).
    """

    def __init__(self, session: Session):
        self._session = session
        self.sites = DiveSiteRepo(session)

    def list_sites(
        self,
        search: str | None = None,
        difficulty: str | None = None,
        dive_type: str | None = None,
        page: int = 1,
        limit: int = 12,
    ) -> dict[str, Any]:
        """Retourne `{sites, pagination}`.

        Paramètres:
        - search: sous-chaîne recherchée (sans casse) dans nom, localisation ou description.
        - difficulty / dive_type: ignorés si la valeur n'appartient pas à l'énumération.
        - page: numéro de page à partir de 1; limit: taille de page.
        """
        filters = SiteFilters(
            search=(search or "").strip() or None,
            difficulty=parse_enum(DifficultyLevel, difficulty),
            dive_type=parse_enum(DiveType, dive_type),
        )
        rows, total = self.sites.search(filters, page, limit)
        counts = self.sites.count_relations([s.id for s in rows])
        sites = []
        for site in rows:
            item = public_fields(site)
            item["counts"] = {
                "reviews": counts[site.id]["reviews"],
                "favorites": counts[site.id]["favorites"],
            }
            sites.append(item)
        return {
            "sites": sites,
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "totalPages": math.ceil(total / limit) if limit else 0,
                "hasMore": page * limit < total,
            },
        }

    def get_site(self, slug: str, viewer: User | None) -> dict[str, Any]:
        """Réponse détaillée du site `slug`; le niveau authentifié exige `viewer`.

        La note moyenne est recalculée à chaque appel à partir des avis présents.
        """
        site = self.sites.find_by_slug(slug)
        if site is None:
            raise NotFoundError("Dive site not found")
        if viewer is None:
            return build_site_payload(site, authenticated=False)
        counts = self.sites.count_relations([site.id])[site.id]
        return build_site_payload(
            site,
            authenticated=True,
            reviews=self.sites.reviews_for(site.id),
            photos=self.sites.photos_for(site.id),
            counts=counts,
        )

    def create_site(self, user: User, data: SiteInput) -> dict[str, Any]:
        """Crée un site appartenant à `user` (GUIDE ou ADMIN); nom exact déjà pris -> conflit."""
        require_role(user, Role.GUIDE)
        if self.sites.exists_named(data.name):
            raise ConflictError("A dive site with this name already exists")
        fields = data.model_dump(exclude={"dive_type", "required_certification"})
        site = DiveSiteORM(
            **fields,
            required_certification=[c.value for c in data.required_certification],
            created_by_id=user.id,
            dive_type_tags=[DiveSiteTypeORM(dive_type=t) for t in dict.fromkeys(data.dive_type)],
        )
        self.sites.add(site)
        self._session.commit()
        log.info("site_created", site_id=site.id, user_id=user.id)
        return build_site_payload(site, authenticated=True)
