"""Dernier filet pour les exceptions non prévues par les handlers de l'application.

Placé au plus près des routes, il rend l'enveloppe 500 avant que la réponse ne remonte: les
middlewares extérieurs (identifiant de requête, métriques, timing) voient donc une réponse
ordinaire.
"""

from collections.abc import Callable

from starlette.middleware.base import BaseHTTPMiddleware

from diveatlas.api.errors import handle_generic_exception


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next: Callable):
        try:
            return await call_next(request)
        except Exception as exc:
            return handle_generic_exception(request, exc)
