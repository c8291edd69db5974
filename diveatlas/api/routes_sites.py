"""
Routes du catalogue: recherche de sites, fiche détaillée et avis.

Ce module regroupe les endpoints `/sites`. La fiche d'un site est adressée par son slug; son
contenu dépend de la présence d'une session valide. Les avis sont ceux de l'appelant (au plus un
par site).
"""

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from diveatlas.api.deps import get_current_user, get_optional_user, get_session
from diveatlas.core.http_constants import HTTP_CREATED, MAX_PAGE
from diveatlas.domain.catalog import CatalogService
from diveatlas.domain.entities import ReviewInput, SiteInput, User
from diveatlas.domain.reviews import ReviewService

router = APIRouter(prefix="/sites", tags=["sites"])


@router.get("")
def list_sites(
    request: Request,
    search: str | None = None,
    difficulty: str | None = None,
    dive_type: str | None = Query(None, alias="diveType"),
    page: int = Query(1, ge=1, le=MAX_PAGE),
    limit: int | None = Query(None, ge=1),
    session: Session = Depends(get_session),
):
    """
    Recherche paginée des sites actifs.

    Paramètres:
    - search: sous-chaîne (sans casse) du nom, de la localisation ou de la description.
    - difficulty / diveType: filtres ignorés si la valeur est inconnue.
    - page (de 1 à `MAX_PAGE`), limit (défaut `DEFAULT_PAGE_SIZE`, plafonné à `MAX_PAGE_SIZE`).

    Retour: `{sites, pagination: {page, limit, total, totalPages, hasMore}}`.
    """
    settings = request.app.state.container.settings
    size = min(limit or settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)
    return CatalogService(session).list_sites(
        search=search, difficulty=difficulty, dive_type=dive_type, page=page, limit=size
    )


@router.post("", status_code=HTTP_CREATED)
def create_site(
    payload: SiteInput,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Crée un site (GUIDE ou ADMIN) et retourne sa fiche complète."""
    return CatalogService(session).create_site(user, payload)


@router.get("/{slug}")
def get_site(
    slug: str,
    viewer: User | None = Depends(get_optional_user),
    session: Session = Depends(get_session),
):
    """Fiche d'un site; les champs détaillés, avis et photos exigent une session."""
    return CatalogService(session).get_site(slug, viewer)


@router.post("/{slug}/reviews", status_code=HTTP_CREATED)
def create_review(
    slug: str,
    payload: ReviewInput,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Crée l'avis de l'appelant; 409 s'il en existe déjà un pour ce site."""
    return ReviewService(session).create(user, slug, payload)


@router.put("/{slug}/reviews")
def update_review(
    slug: str,
    payload: ReviewInput,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Met à jour l'avis existant de l'appelant."""
    return ReviewService(session).update(user, slug, payload)


@router.delete("/{slug}/reviews")
def delete_review(
    slug: str,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Supprime l'avis de l'appelant."""
    return ReviewService(session).delete(user, slug)
