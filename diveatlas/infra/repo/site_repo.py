"""Accès SQL aux sites de plongée: résolution par slug, recherche paginée, création."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from diveatlas.domain.entities import DifficultyLevel, DiveType
from diveatlas.domain.slugs import slug_candidates

from .models import DiveSiteORM, DiveSiteTypeORM, FavoriteORM, PhotoORM, ReviewORM


@dataclass(frozen=True)
class SiteFilters:
    """Filtres du catalogue; une valeur None désactive le filtre."""

    search: str | None = None
    difficulty: DifficultyLevel | None = None
    dive_type: DiveType | None = None


class DiveSiteRepo:
    """Lecture/écriture des sites. Toutes les lectures sont sans effet de bord."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, site_id: str) -> DiveSiteORM | None:
        return self._session.get(DiveSiteORM, site_id)

    def find_by_slug(self, slug: str) -> DiveSiteORM | None:
        """Retrouve le site correspondant à un slug, ou None.

        Priorité: nom exact (candidat espacé puis candidat à tirets), puis même comparaison sans
        tenir compte de la casse, puis premier site dont le nom contient le premier mot du
        candidat espacé (sensible à la casse). À priorité égale, le site le plus ancien gagne.
        """
        if not slug or not slug.strip("-"):
            return None
        cand = slug_candidates(slug)
        order = (DiveSiteORM.created_at.asc(), DiveSiteORM.id.asc())

        lowered = (cand.spaced.lower(), cand.dashed.lower())
        stmt = (
            select(DiveSiteORM)
            .where(func.lower(DiveSiteORM.name).in_(lowered))
            .order_by(*order)
        )
        exact = list(self._session.execute(stmt).scalars())
        if exact:
            ranked = (
                [s for s in exact if s.name == cand.spaced],
                [s for s in exact if s.name == cand.dashed],
                [s for s in exact if s.name.lower() == lowered[0]],
                exact,
            )
            return next(group[0] for group in ranked if group)

        if not cand.first_word:
            return None
        # LIKE n'est pas sensible à la casse sous SQLite: la casse est revérifiée ici.
        stmt = (
            select(DiveSiteORM)
            .where(DiveSiteORM.name.contains(cand.first_word, autoescape=True))
            .order_by(*order)
        )
        for site in self._session.execute(stmt).scalars():
            if cand.first_word in site.name:
                return site
        return None

    def exists_named(self, name: str) -> bool:
        stmt = select(DiveSiteORM.id).where(DiveSiteORM.name == name).limit(1)
        return self._session.execute(stmt).first() is not None

    def search(
        self, filters: SiteFilters, page: int, limit: int
    ) -> tuple[list[DiveSiteORM], int]:
        """Retourne la page demandée (1-indexée) des sites actifs et le total filtré."""
        conditions = [DiveSiteORM.is_active.is_(True)]
        if filters.search:
            needle = filters.search.lower()
            conditions.append(
                or_(
                    *(
                        func.lower(func.coalesce(col, "")).contains(needle, autoescape=True)
                        for col in (
                            DiveSiteORM.name,
                            DiveSiteORM.location,
                            DiveSiteORM.description,
                        )
                    )
                )
            )
        if filters.difficulty is not None:
            conditions.append(DiveSiteORM.difficulty == filters.difficulty)
        if filters.dive_type is not None:
            conditions.append(
                DiveSiteORM.dive_type_tags.any(DiveSiteTypeORM.dive_type == filters.dive_type)
            )

        total = self._session.execute(
            select(func.count()).select_from(DiveSiteORM).where(*conditions)
        ).scalar_one()
        stmt = (
            select(DiveSiteORM)
            .where(*conditions)
            .order_by(DiveSiteORM.created_at.desc(), DiveSiteORM.id.asc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(self._session.execute(stmt).scalars()), total

    def count_relations(self, site_ids: list[str]) -> dict[str, dict[str, int]]:
        """Compte avis, favoris et photos par site, en une requête par relation."""
        counts = {sid: {"reviews": 0, "favorites": 0, "photos": 0} for sid in site_ids}
        if not site_ids:
            return counts
        for key, model in (
            ("reviews", ReviewORM),
            ("favorites", FavoriteORM),
            ("photos", PhotoORM),
        ):
            stmt = (
                select(model.dive_site_id, func.count())
                .where(model.dive_site_id.in_(site_ids))
                .group_by(model.dive_site_id)
            )
            for site_id, n in self._session.execute(stmt):
                counts[site_id][key] = n
        return counts

    def reviews_for(self, site_id: str) -> list[ReviewORM]:
        stmt = (
            select(ReviewORM)
            .where(ReviewORM.dive_site_id == site_id)
            .order_by(ReviewORM.created_at.desc(), ReviewORM.id.asc())
        )
        return list(self._session.execute(stmt).scalars())

    def photos_for(self, site_id: str) -> list[PhotoORM]:
        stmt = (
            select(PhotoORM)
            .where(PhotoORM.dive_site_id == site_id)
            .order_by(PhotoORM.created_at.desc(), PhotoORM.id.asc())
        )
        return list(self._session.execute(stmt).scalars())

    def add(self, site: DiveSiteORM) -> DiveSiteORM:
        self._session.add(site)
        self._session.flush()
        return site
