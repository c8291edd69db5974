"""
Application principale FastAPI.

Ce module assemble tous les composants de l'application : middlewares, gestion des erreurs,
routes et cycle de vie du stockage.

Responsabilités du module:
- Initialiser le logging structuré et, si configuré, le tracing
- Construire l'application FastAPI et lui rattacher le conteneur (`app.state.container`)
- Démarrer/arrêter le stockage dans le lifespan de l'application
- Ajouter les middlewares (request id, métriques, timing, CORS, erreurs imprévues)
- Monter les routers (santé, auth, sites, faune marine, métriques)
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from diveatlas.api.errors import install_error_handlers
from diveatlas.api.routes_auth import router as auth_router
from diveatlas.api.routes_health import router as health_router
from diveatlas.api.routes_marine_life import router as marine_life_router
from diveatlas.api.routes_sites import router as sites_router
from diveatlas.app.metrics import PrometheusMiddleware, metrics_router
from diveatlas.app.tracing import setup_tracing
from diveatlas.core.container import Container
from diveatlas.core.logging import setup_logging
from diveatlas.middlewares.request_id import RequestIDMiddleware
from diveatlas.middlewares.timing import TimingMiddleware
from diveatlas.middlewares.unhandled_errors import UnhandledErrorMiddleware


def create_app(container: Container | None = None) -> FastAPI:
    """
    Construit et retourne l'application FastAPI prête à l'usage.

    Paramètres:
    - container: conteneur à utiliser (tests); par défaut construit depuis l'environnement.
    """
    container = container or Container()
    settings = container.settings
    setup_logging(settings.LOG_LEVEL)
    setup_tracing(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        container.startup()
        try:
            yield
        finally:
            container.shutdown()

    app = FastAPI(title=settings.APP_NAME, debug=settings.APP_DEBUG, lifespan=lifespan)
    app.state.container = container
    install_error_handlers(app)

    # Le dernier ajouté est le plus extérieur.
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(TimingMiddleware)
    app.add_middleware(PrometheusMiddleware)
    if settings.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(o).rstrip("/") for o in settings.CORS_ORIGINS],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    app.add_middleware(RequestIDMiddleware)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(sites_router)
    app.include_router(marine_life_router)
    app.include_router(metrics_router)
    return app


app = create_app()


def run() -> None:
    """Lance le serveur uvicorn sur `APP_HOST:APP_PORT`."""
    import uvicorn

    settings = app.state.container.settings
    uvicorn.run(app, host=settings.APP_HOST, port=settings.APP_PORT, reload=False)


if __name__ == "__main__":
    run()
