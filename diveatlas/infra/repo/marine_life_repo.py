"""Accès SQL au référentiel de faune/flore et à ses associations avec les sites."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from diveatlas.domain.entities import MarineLifeType

from .models import DiveSiteMarineLifeORM, MarineLifeORM


class MarineLifeRepo:
    """Lecture du référentiel et remplacement des associations d'un site."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_all(self, type_: MarineLifeType | None = None) -> list[MarineLifeORM]:
        stmt = select(MarineLifeORM)
        if type_ is not None:
            stmt = stmt.where(MarineLifeORM.type == type_)
        stmt = stmt.order_by(MarineLifeORM.name.asc(), MarineLifeORM.id.asc())
        return list(self._session.execute(stmt).scalars())

    def existing_ids(self, ids: list[str]) -> set[str]:
        if not ids:
            return set()
        stmt = select(MarineLifeORM.id).where(MarineLifeORM.id.in_(ids))
        return set(self._session.execute(stmt).scalars())

    def list_for_site(self, site_id: str) -> list[MarineLifeORM]:
        """Taxons associés au site, par ordre alphabétique du nom commun."""
        stmt = (
            select(MarineLifeORM)
            .join(
                DiveSiteMarineLifeORM,
                DiveSiteMarineLifeORM.marine_life_id == MarineLifeORM.id,
            )
            .where(DiveSiteMarineLifeORM.dive_site_id == site_id)
            .order_by(MarineLifeORM.name.asc(), MarineLifeORM.id.asc())
        )
        return list(self._session.execute(stmt).scalars())

    def replace_for_site(self, site_id: str, marine_life_ids: list[str]) -> int:
        """Supprime toutes les associations du site puis insère le nouvel ensemble.

        Les deux étapes s'exécutent dans un même savepoint: en cas d'échec, les associations
        précédentes restent en place.
        """
        with self._session.begin_nested():
            self._session.execute(
                delete(DiveSiteMarineLifeORM).where(
                    DiveSiteMarineLifeORM.dive_site_id == site_id
                )
            )
            self._session.add_all(
                DiveSiteMarineLifeORM(dive_site_id=site_id, marine_life_id=ml_id)
                for ml_id in marine_life_ids
            )
        return len(marine_life_ids)
