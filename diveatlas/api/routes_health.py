"""
Endpoint de santé pour vérifier la disponibilité de l'API et de la base.

Expose `/health`; l'état de la base est indiqué sans jamais exposer le message d'erreur.
"""

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from diveatlas.api.deps import get_container
from diveatlas.core.container import Container
from diveatlas.core.http_constants import HTTP_OK, HTTP_SERVICE_UNAVAILABLE

router = APIRouter(tags=["health"])
log = structlog.get_logger(__name__)


@router.get("/health")
def health(container: Container = Depends(get_container)):
    """Vérifie la disponibilité de l'API et la connectivité à la base."""
    try:
        container.ping()
    except SQLAlchemyError as err:
        log.warning("health_db_unavailable", exception_type=type(err).__name__)
        return JSONResponse(
            status_code=HTTP_SERVICE_UNAVAILABLE,
            content={"status": "degraded", "database": "unavailable"},
        )
    return JSONResponse(status_code=HTTP_OK, content={"status": "ok", "database": "connected"})
