"""
Routes du référentiel de faune/flore marines et de ses associations aux sites.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from diveatlas.api.deps import get_current_user, get_session
from diveatlas.api.schemas import MarineLifeAssignment
from diveatlas.domain.entities import User
from diveatlas.domain.marine_life import MarineLifeService

router = APIRouter(tags=["marine-life"])


@router.get("/marine-life")
def list_marine_life(
    type_: str | None = Query(None, alias="type"),
    session: Session = Depends(get_session),
):
    """Référentiel complet, trié par nom, filtrable par type (FISH, CORAL, ...)."""
    return MarineLifeService(session).list_catalog(type_)


@router.get("/sites/{slug}/marine-life")
def get_site_marine_life(slug: str, session: Session = Depends(get_session)):
    """Taxons associés au site, par ordre alphabétique."""
    return MarineLifeService(session).list_for_site(slug)


@router.post("/sites/{slug}/marine-life")
def replace_site_marine_life(
    slug: str,
    payload: MarineLifeAssignment,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Remplace les taxons associés au site (GUIDE ou ADMIN)."""
    return MarineLifeService(session).replace_for_site(user, slug, payload.marine_life_ids)
