"""
Construction des réponses « site » selon l'état d'authentification de l'appelant.

Deux niveaux de détail:
- public: identité du site, localisation, profondeurs, types, difficulté, créateur;
- authentifié: en plus, conditions, sécurité, avis, photos, note moyenne et compteurs.

Exactement un des deux niveaux est produit par réponse. Le niveau authentifié ne dépend que de la
présence d'une session valide, pas du rôle.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

AUTHENTICATED_FIELDS = (
    "currentConditions",
    "driftPotential",
    "entryPoint",
    "visibilityMin",
    "visibilityMax",
    "temperatureMin",
    "temperatureMax",
    "emergencyInfo",
    "requiredCertification",
    "marineLife",
    "averageDiveDuration",
    "hazards",
    "permitsFees",
    "ecoData",
    "reviews",
    "photos",
    "averageRating",
    "counts",
)


def average_rating(ratings: Iterable[int]) -> float | None:
    """Moyenne arithmétique des notes; None (jamais 0) en l'absence d'avis."""
    values = list(ratings)
    if not values:
        return None
    return sum(values) / len(values)


def creator_summary(user) -> dict[str, Any] | None:
    if user is None:
        return None
    return {"id": user.id, "name": user.name, "role": user.role}


def author_summary(user) -> dict[str, Any]:
    return {"id": user.id, "name": user.name, "avatar": user.avatar}


def review_payload(review) -> dict[str, Any]:
    """Avis sérialisé avec le profil public de son auteur."""
    return {
        "id": review.id,
        "rating": review.rating,
        "title": review.title,
        "content": review.content,
        "userId": review.user_id,
        "diveSiteId": review.dive_site_id,
        "createdAt": review.created_at,
        "updatedAt": review.updated_at,
        "user": author_summary(review.user),
    }


def photo_payload(photo) -> dict[str, Any]:
    return {
        "id": photo.id,
        "url": photo.url,
        "caption": photo.caption,
        "createdAt": photo.created_at,
        "user": {"id": photo.user.id, "name": photo.user.name},
    }


def public_fields(site) -> dict[str, Any]:
    """Champs visibles de tous, y compris des invités."""
    return {
        "id": site.id,
        "name": site.name,
        "description": site.description,
        "location": site.location,
        "latitude": site.latitude,
        "longitude": site.longitude,
        "depthMin": site.depth_min,
        "depthMax": site.depth_max,
        "diveType": site.dive_types,
        "difficulty": site.difficulty,
        "createdBy": creator_summary(site.created_by),
        "createdAt": site.created_at,
    }


def authenticated_fields(
    site,
    reviews: Sequence,
    photos: Sequence,
    counts: dict[str, int],
) -> dict[str, Any]:
    """Champs réservés aux appelants authentifiés. Toutes les clés sont toujours présentes."""
    return {
        "currentConditions": site.current_conditions,
        "driftPotential": site.drift_potential,
        "entryPoint": site.entry_point,
        "visibilityMin": site.visibility_min,
        "visibilityMax": site.visibility_max,
        "temperatureMin": site.temperature_min,
        "temperatureMax": site.temperature_max,
        "emergencyInfo": site.emergency_info,
        "requiredCertification": list(site.required_certification or []),
        "marineLife": site.marine_life,
        "averageDiveDuration": site.average_dive_duration,
        "hazards": site.hazards,
        "permitsFees": site.permits_fees,
        "ecoData": site.eco_data,
        "reviews": [review_payload(r) for r in reviews],
        "photos": [photo_payload(p) for p in photos],
        "averageRating": average_rating(r.rating for r in reviews),
        "counts": {
            "reviews": counts.get("reviews", len(reviews)),
            "favorites": counts.get("favorites", 0),
            "photos": counts.get("photos", len(photos)),
        },
    }


def build_site_payload(
    site,
    authenticated: bool,
    reviews: Sequence = (),
    photos: Sequence = (),
    counts: dict[str, int] | None = None,
) -> dict[str, Any]:
    """Réponse détaillée d'un site pour le niveau d'accès de l'appelant."""
    payload = public_fields(site)
    if authenticated:
        payload.update(authenticated_fields(site, reviews, photos, counts or {}))
    return payload
