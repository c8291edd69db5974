# ============================================================
# Tests : tests/test_site_repo.py
# Objet  : résolution par slug et recherche paginée (sqlite mémoire).
# ============================================================
"""
Tests du dépôt des sites de plongée.

La résolution d'un slug suit l'ordre: nom exact (espacé puis à tirets), même comparaison sans
casse, puis inclusion sensible à la casse du premier mot; à égalité, le site le plus ancien.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime, timedelta

import pytest

from diveatlas.domain.entities import DifficultyLevel, DiveType
from diveatlas.infra.repo.site_repo import DiveSiteRepo, SiteFilters

BASE_TIME = datetime(2023, 6, 1, tzinfo=UTC)


def test_slug_resolves_exact_spaced_name(session, factory):
    site = factory.site("Blue Hole", session=session)
    factory.site("Blue Lagoon", session=session)
    assert DiveSiteRepo(session).find_by_slug("blue-hole").id == site.id


def test_spaced_name_wins_over_dashed_name(session, factory):
    factory.site("Ras - Mohammed", created_at=BASE_TIME, session=session)
    spaced = factory.site("Ras Mohammed", created_at=BASE_TIME + timedelta(days=1), session=session)
    assert DiveSiteRepo(session).find_by_slug("ras-mohammed").id == spaced.id


def test_dashed_name_resolves(session, factory):
    dashed = factory.site("Ras - Mohammed", session=session)
    assert DiveSiteRepo(session).find_by_slug("ras-mohammed").id == dashed.id


def test_exact_match_ignoring_case(session, factory):
    site = factory.site("SS Thistlegorm", session=session)
    assert DiveSiteRepo(session).find_by_slug("ss-thistlegorm").id == site.id


def test_fallback_on_first_word(session, factory):
    site = factory.site("Blue Hole", session=session)
    assert DiveSiteRepo(session).find_by_slug("blue-lagoon").id == site.id


def test_fallback_is_case_sensitive(session, factory):
    factory.site("the blue corner", session=session)
    assert DiveSiteRepo(session).find_by_slug("blue-wall") is None


def test_oldest_site_wins_among_equal_names(session, factory):
    older = factory.site("Blue Hole", created_at=BASE_TIME, session=session)
    factory.site("Blue Hole", created_at=BASE_TIME + timedelta(hours=1), session=session)
    assert DiveSiteRepo(session).find_by_slug("blue-hole").id == older.id


@pytest.mark.parametrize("slug", ["", "---"])
def test_empty_slug_resolves_nothing(session, factory, slug):
    factory.site("Blue Hole", session=session)
    assert DiveSiteRepo(session).find_by_slug(slug) is None


def test_unknown_slug(session, factory):
    factory.site("Blue Hole", session=session)
    assert DiveSiteRepo(session).find_by_slug("shark-reef") is None


def test_search_matches_name_location_description_without_case(session, factory):
    a = factory.site("Blue Hole", location="Dahab", session=session)
    b = factory.site("Canyon", description="A BLUE chimney", session=session)
    factory.site("Jackfish Alley", session=session)
    rows, total = DiveSiteRepo(session).search(SiteFilters(search="blue"), 1, 12)
    assert total == 2
    assert {r.id for r in rows} == {a.id, b.id}
    rows, total = DiveSiteRepo(session).search(SiteFilters(search="dahab"), 1, 12)
    assert [r.id for r in rows] == [a.id]


def test_search_treats_wildcards_literally(session, factory):
    factory.site("Blue Hole", session=session)
    _, total = DiveSiteRepo(session).search(SiteFilters(search="%"), 1, 12)
    assert total == 0


def test_search_excludes_inactive(session, factory):
    factory.site("Blue Hole", is_active=False, session=session)
    visible = factory.site("Canyon", session=session)
    rows, total = DiveSiteRepo(session).search(SiteFilters(), 1, 12)
    assert total == 1 and rows[0].id == visible.id


def test_filters_difficulty_and_dive_type(session, factory):
    wreck = factory.site(
        "Thistlegorm",
        difficulty=DifficultyLevel.ADVANCED,
        dive_types=(DiveType.WRECK, DiveType.BOAT),
        session=session,
    )
    factory.site("Lighthouse", dive_types=(DiveType.SHORE,), session=session)
    repo = DiveSiteRepo(session)
    rows, total = repo.search(SiteFilters(difficulty=DifficultyLevel.ADVANCED), 1, 12)
    assert total == 1 and rows[0].id == wreck.id
    rows, total = repo.search(SiteFilters(dive_type=DiveType.BOAT), 1, 12)
    assert total == 1 and rows[0].id == wreck.id


def test_pagination_newest_first(session, factory):
    guide = factory.user(session=session)
    sites = [
        factory.site(f"Site {i}", creator=guide, created_at=BASE_TIME + timedelta(minutes=i),
                     session=session)
        for i in range(25)
    ]
    repo = DiveSiteRepo(session)
    first, total = repo.search(SiteFilters(), 1, 12)
    assert total == 25
    assert [r.id for r in first] == [s.id for s in reversed(sites)][:12]
    last, _ = repo.search(SiteFilters(), 3, 12)
    assert [r.id for r in last] == [sites[0].id]
    beyond, _ = repo.search(SiteFilters(), 4, 12)
    assert beyond == []


def test_count_relations(session, factory):
    site = factory.site("Blue Hole", session=session)
    other = factory.site("Canyon", session=session)
    u1, u2 = factory.user(session=session), factory.user(session=session)
    factory.review(u1, site, session=session)
    factory.review(u2, site, session=session)
    factory.favorite(u1, site, session=session)
    factory.photo(u2, site, session=session)
    counts = DiveSiteRepo(session).count_relations([site.id, other.id])
    assert counts[site.id] == {"reviews": 2, "favorites": 1, "photos": 1}
    assert counts[other.id] == {"reviews": 0, "favorites": 0, "photos": 0}


def test_parallel_sessions_wait_for_the_memory_connection(container, factory):
    site = factory.site("Blue Hole")
    barrier = threading.Barrier(4)

    def _resolve(_):
        barrier.wait(timeout=5)
        with container.session() as s:
            return DiveSiteRepo(s).find_by_slug("blue-hole").id

    with ThreadPoolExecutor(max_workers=4) as pool:
        found = list(pool.map(_resolve, range(4)))
    assert found == [site.id] * 4
