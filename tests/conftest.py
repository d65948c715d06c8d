from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from pyq_api.core.config import get_settings
from pyq_api.main import create_app
from pyq_api.services.catalog import CatalogService
from pyq_api.services.catalog_store import CatalogStore

FIXED_NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Horloge pilotable : now() renvoie `current`, modifiable par les tests."""

    def __init__(self, start: datetime = FIXED_NOW):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return CatalogStore(seed=False, clock=clock)


@pytest.fixture
def catalog(store):
    return CatalogService(store)


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def test_client(upload_dir, monkeypatch):
    """
    Crée un TestClient avec un UPLOAD_PATH temporaire (isolé) et un
    catalogue neuf pour chaque test.
    """
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.setenv("APP_NAME", "PYQ Archive API (tests)")
    monkeypatch.setenv("UPLOAD_PATH", str(upload_dir))
    monkeypatch.setenv("MAX_UPLOAD_MB", "1")  # limite faible pour tests
    monkeypatch.setenv("MAX_FILES_PER_UPLOAD", "3")
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost")

    # IMPORTANT: vider le cache des settings pour prendre en compte les env
    get_settings.cache_clear()
    app = create_app()
    with TestClient(app) as client:
        yield client
    get_settings.cache_clear()


@pytest.fixture
def make_paper(store):
    """Fabrique de papiers directement dans le store (sans passer par le disque)."""

    def _make(university_id, subject="Mathematics", year=2022, title=None, **kwargs):
        fields = dict(
            university_id=university_id,
            title=title or f"{subject} {year}",
            subject=subject,
            year=year,
            exam_type="End-Sem",
            file_name=f"papers-{subject}-{year}.pdf",
            file_path=f"/tmp/{subject}-{year}.pdf",
            file_size=1024,
            mime_type="application/pdf",
        )
        fields.update(kwargs)
        return store.create_paper(**fields)

    return _make
