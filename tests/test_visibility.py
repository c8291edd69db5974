"""Tests des niveaux de détail des réponses « site »."""

from datetime import UTC, datetime
from types import SimpleNamespace

from diveatlas.domain.visibility import (
    AUTHENTICATED_FIELDS,
    average_rating,
    build_site_payload,
)

NOW = datetime(2024, 1, 1, tzinfo=UTC)


def _site():
    creator = SimpleNamespace(id="g1", name="Guide", role="GUIDE")
    return SimpleNamespace(
        id="s1",
        name="Blue Hole",
        description="Sinkhole",
        location="Dahab",
        latitude=28.5,
        longitude=34.5,
        depth_min=5,
        depth_max=100,
        dive_types=["SHORE"],
        difficulty="ADVANCED",
        created_by=creator,
        created_at=NOW,
        current_conditions="MILD",
        drift_potential=False,
        entry_point="Beach",
        visibility_min=20,
        visibility_max=30,
        temperature_min=21,
        temperature_max=28,
        emergency_info="Call 123",
        required_certification=["ADVANCED"],
        marine_life="Napoleon wrasse",
        average_dive_duration=45,
        hazards="Arch below 55 m",
        permits_fees=None,
        eco_data=None,
    )


def _review(rating: int):
    author = SimpleNamespace(id="u1", name="Diver", avatar=None)
    return SimpleNamespace(
        id=f"r{rating}",
        rating=rating,
        title=None,
        content="Nice visibility today",
        user_id="u1",
        dive_site_id="s1",
        created_at=NOW,
        updated_at=NOW,
        user=author,
    )


def test_average_rating():
    assert average_rating([8, 9]) == 8.5
    assert average_rating([9, 8, 7, 10]) == 8.5
    assert average_rating([]) is None


def test_guest_payload_has_no_authenticated_fields():
    payload = build_site_payload(_site(), authenticated=False)
    assert payload["name"] == "Blue Hole"
    assert payload["createdBy"] == {"id": "g1", "name": "Guide", "role": "GUIDE"}
    for key in AUTHENTICATED_FIELDS:
        assert key not in payload


def test_authenticated_payload_has_every_field():
    payload = build_site_payload(
        _site(),
        authenticated=True,
        reviews=[_review(8), _review(9)],
        counts={"reviews": 2, "favorites": 3, "photos": 0},
    )
    for key in AUTHENTICATED_FIELDS:
        assert key in payload
    assert payload["averageRating"] == 8.5
    assert payload["counts"] == {"reviews": 2, "favorites": 3, "photos": 0}
    assert payload["reviews"][0]["user"] == {"id": "u1", "name": "Diver", "avatar": None}


def test_authenticated_payload_without_reviews_has_null_average():
    payload = build_site_payload(_site(), authenticated=True)
    assert payload["averageRating"] is None
    assert payload["reviews"] == []
    assert payload["counts"] == {"reviews": 0, "favorites": 0, "photos": 0}
