"""
Pytest fixtures for hierarchy-cascade-api tests.
"""

import sys
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

# Ensure the project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from api.deps import get_current_user, get_duplication_log_repo, get_hierarchy_store
from backend.main import create_app
from backend.settings import Settings
from models.hierarchy import DocumentRef
from tests.fakes import FakeDuplicationLogRepository, FakeHierarchyStore


# ---------------------------------------------------------------------------
# Auth Mock
# ---------------------------------------------------------------------------

TEST_USER_ID = "athlete-123"
OTHER_USER_ID = "athlete-456"

PROGRAM_ID = "program-1"
WEEK_ID = "week-1"


async def mock_get_current_user() -> str:
    """Stands in for the bearer-token dependency."""
    return TEST_USER_ID


# ---------------------------------------------------------------------------
# Test App and Client
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(
        _env_file=None,
        environment="test",
        log_level="DEBUG",
        supabase_url="https://test.supabase.co",
        supabase_service_role_key="test-key",
    )


@pytest.fixture(scope="session")
def app(test_settings):
    """One application instance per test session."""
    return create_app(settings=test_settings)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """TestClient authenticated as TEST_USER_ID; overrides are reset afterwards."""
    app.dependency_overrides[get_current_user] = mock_get_current_user
    yield TestClient(app)
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Mock Environment Variables
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def mock_env_vars(monkeypatch):
    """Keep tests off any real project."""
    monkeypatch.setenv("SUPABASE_URL", "https://test.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "test-supabase-key")
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("CASCADE_BATCH_BUDGET", "450")


# ---------------------------------------------------------------------------
# Fake Store Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_store() -> FakeHierarchyStore:
    """Empty fake hierarchy store."""
    return FakeHierarchyStore()


@pytest.fixture
def seeded_store() -> FakeHierarchyStore:
    """
    Fake store holding one week owned by the test user.

    Week 1 has 2 workouts, each with 3 exercises of 4 sets:
    2 workouts + 6 exercises + 24 sets below the week.
    """
    store = FakeHierarchyStore()
    store.seed_week(TEST_USER_ID, program_id=PROGRAM_ID, week_id=WEEK_ID)
    return store


@pytest.fixture
def week_ref() -> DocumentRef:
    """Key of the seeded week."""
    return DocumentRef.week(PROGRAM_ID, WEEK_ID)


@pytest.fixture
def fake_duplication_log() -> FakeDuplicationLogRepository:
    """Fake duplication audit log."""
    return FakeDuplicationLogRepository()


@pytest.fixture
def client_with_fake_store(
    app, seeded_store, fake_duplication_log
) -> Generator[TestClient, None, None]:
    """TestClient with the seeded fake store injected."""
    app.dependency_overrides[get_current_user] = mock_get_current_user
    app.dependency_overrides[get_hierarchy_store] = lambda: seeded_store
    app.dependency_overrides[get_duplication_log_repo] = lambda: fake_duplication_log
    yield TestClient(app)
    app.dependency_overrides.clear()
