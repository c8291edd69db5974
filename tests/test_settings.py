"""Tests du chargement des paramètres depuis l'environnement."""

from diveatlas.app.tracing import setup_tracing
from diveatlas.core.settings import Settings, get_settings


def test_defaults():
    s = Settings(_env_file=None)
    assert s.DEFAULT_PAGE_SIZE == 12
    assert s.MAX_PAGE_SIZE == 100
    assert s.JWT_ALG == "HS256"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./other.db")
    monkeypatch.setenv("MAX_PAGE_SIZE", "50")
    s = get_settings()
    assert s.DATABASE_URL == "sqlite:///./other.db"
    assert s.MAX_PAGE_SIZE == 50


def test_tracing_disabled_without_endpoint():
    assert setup_tracing(Settings(_env_file=None, OTLP_ENDPOINT=None)) is False
