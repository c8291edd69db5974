"""Tests des routes d'avis (`/sites/{slug}/reviews`)."""

from __future__ import annotations

from diveatlas.core.http_constants import (
    HTTP_BAD_REQUEST,
    HTTP_CONFLICT,
    HTTP_CREATED,
    HTTP_NOT_FOUND,
    HTTP_OK,
    HTTP_UNAUTHORIZED,
)

REVIEW = {"rating": 9, "title": "Superb", "content": "Eagle rays at the drop-off."}


def test_review_requires_authentication(client, factory):
    factory.site("Blue Hole")
    r = client.post("/sites/blue-hole/reviews", json=REVIEW)
    assert r.status_code == HTTP_UNAUTHORIZED
    assert r.json()["error"] == "Authentication required"
    assert r.headers["WWW-Authenticate"] == "Bearer"


def test_review_with_invalid_token(client, factory):
    factory.site("Blue Hole")
    r = client.post(
        "/sites/blue-hole/reviews", json=REVIEW, headers={"Authorization": "Bearer nope"}
    )
    assert r.status_code == HTTP_UNAUTHORIZED
    assert r.json()["error"] == "Invalid or expired session"


def test_review_lifecycle(client, factory):
    factory.site("Blue Hole")
    headers = factory.auth(factory.user())

    r = client.post("/sites/blue-hole/reviews", json=REVIEW, headers=headers)
    assert r.status_code == HTTP_CREATED
    review_id = r.json()["id"]

    r = client.post("/sites/blue-hole/reviews", json=REVIEW, headers=headers)
    assert r.status_code == HTTP_CONFLICT
    assert r.json()["error"] == "You have already reviewed this dive site"

    r = client.put(
        "/sites/blue-hole/reviews",
        json={"rating": 7, "content": "Current picked up later on."},
        headers=headers,
    )
    assert r.status_code == HTTP_OK
    assert r.json()["id"] == review_id and r.json()["rating"] == 7

    site = client.get("/sites/blue-hole", headers=headers).json()
    assert site["averageRating"] == 7
    assert site["counts"]["reviews"] == 1

    r = client.delete("/sites/blue-hole/reviews", headers=headers)
    assert r.status_code == HTTP_OK
    assert r.json() == {"message": "Review deleted successfully"}

    r = client.delete("/sites/blue-hole/reviews", headers=headers)
    assert r.status_code == HTTP_NOT_FOUND
    assert r.json()["error"] == "Review not found"

    r = client.post("/sites/blue-hole/reviews", json=REVIEW, headers=headers)
    assert r.status_code == HTTP_CREATED
    assert r.json()["id"] != review_id


def test_invalid_review_payload(client, factory):
    factory.site("Blue Hole")
    headers = factory.auth(factory.user())
    r = client.post(
        "/sites/blue-hole/reviews", json={**REVIEW, "rating": 11}, headers=headers
    )
    assert r.status_code == HTTP_BAD_REQUEST
    body = r.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert "rating" in body["details"]
    r = client.post(
        "/sites/blue-hole/reviews", json={**REVIEW, "content": "short"}, headers=headers
    )
    assert "content" in r.json()["details"]


def test_review_unknown_site(client, factory):
    headers = factory.auth(factory.user())
    r = client.post("/sites/nowhere/reviews", json=REVIEW, headers=headers)
    assert r.status_code == HTTP_NOT_FOUND
    assert r.json()["error"] == "Dive site not found"


def test_update_without_existing_review(client, factory):
    factory.site("Blue Hole")
    headers = factory.auth(factory.user())
    r = client.put("/sites/blue-hole/reviews", json=REVIEW, headers=headers)
    assert r.status_code == HTTP_NOT_FOUND
