"""
Exceptions métier du catalogue.

Les services du domaine lèvent ces exceptions; la couche API les traduit en enveloppes d'erreur
HTTP (voir `diveatlas.api.errors`).
"""

from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Erreur métier de base, porteuse d'un message lisible."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(DomainError):
    """Ressource introuvable (site non résolu, avis absent, ...)."""


class ConflictError(DomainError):
    """Violation d'unicité (avis déjà existant, nom de site déjà pris)."""


class ValidationFailed(DomainError):
    """Données invalides; `details` associe chaque champ à ses messages."""


class PermissionDenied(DomainError):
    """Rôle insuffisant pour l'opération demandée."""


def field_errors(errors: list[dict[str, Any]]) -> dict[str, list[str]]:
    """Regroupe les erreurs pydantic par nom de champ (`{"rating": ["..."]}`).

    Les préfixes de localisation (`body`, `query`, ...) sont ignorés; les erreurs sans champ sont
    rangées sous `_schema`.
    """
    grouped: dict[str, list[str]] = {}
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        key = ".".join(loc) or "_schema"
        grouped.setdefault(key, []).append(str(err.get("msg", "invalid value")))
    return grouped
