"""
Métriques Prometheus du catalogue.

Trafic HTTP (compteur et latence par gabarit de route) et cycle de vie des avis. Les libellés de
route sont les gabarits déclarés (`/sites/{slug}`), jamais le chemin brut.
"""

import time

from fastapi import APIRouter, Request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

metrics_router = APIRouter(tags=["metrics"])

REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "route", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "Latency of HTTP requests", ["route"]
)

REVIEW_EVENTS = Counter(
    "review_events_total",
    "Review lifecycle operations that succeeded",
    ["action"],
)
# source: "precheck" (lecture préalable) ou "constraint" (contrainte d'unicité en base)
REVIEW_CONFLICTS = Counter(
    "review_conflicts_total",
    "Review creations rejected because the user already reviewed the site",
    ["source"],
)


@metrics_router.get("/metrics", include_in_schema=False)
def metrics() -> Response:
    """Exposition texte pour le scraper Prometheus."""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


def route_label(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Compte les requêtes par (méthode, route, statut) et mesure leur durée par route."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response: Response = await call_next(request)
        route = route_label(request)
        REQUEST_COUNT.labels(request.method, route, str(response.status_code)).inc()
        REQUEST_LATENCY.labels(route).observe(time.perf_counter() - started)
        return response
