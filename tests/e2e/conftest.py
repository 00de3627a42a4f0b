"""
E2E test fixtures and configuration.

These fixtures provide:
- The --live switch for tests against a real Supabase database
- Real Supabase client for database verification
- Test user and program setup/teardown

Run with:
    pytest -m e2e tests/e2e/ --live -v
"""

import os
import uuid
from typing import Generator

import pytest
from dotenv import load_dotenv
from supabase import Client, create_client

# Load environment variables from .env file
load_dotenv()

# Read before the autouse fixture replaces them with test values
LIVE_SUPABASE_URL = os.getenv("SUPABASE_URL")
LIVE_SUPABASE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY")


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--live",
        action="store_true",
        default=False,
        help="Run E2E tests against a live Supabase database",
    )


@pytest.fixture(scope="session")
def live_mode(request) -> bool:
    """Check if running in live mode."""
    return request.config.getoption("--live")


@pytest.fixture(scope="session")
def supabase_client(live_mode: bool) -> Client:
    """
    Create Supabase client for direct database access.

    Skips unless --live is given and credentials are configured.
    """
    if not live_mode:
        pytest.skip("Live database tests require --live")
    if not LIVE_SUPABASE_URL or not LIVE_SUPABASE_KEY:
        pytest.skip("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")
    return create_client(LIVE_SUPABASE_URL, LIVE_SUPABASE_KEY)


@pytest.fixture(scope="session")
def live_user_id() -> str:
    """Unique user id for this test session."""
    return str(uuid.uuid4())


@pytest.fixture
def live_program(supabase_client: Client, live_user_id: str) -> Generator[str, None, None]:
    """
    Insert a training program and remove it after the test.

    Yields:
        The program id
    """
    result = (
        supabase_client.table("training_programs")
        .insert(
            {
                "user_id": live_user_id,
                "name": "Cascade E2E Program",
                "goal": "strength",
                "experience_level": "intermediate",
                "duration_weeks": 4,
                "sessions_per_week": 3,
            }
        )
        .execute()
    )
    program_id = result.data[0]["id"]

    yield program_id

    try:
        supabase_client.table("training_programs").delete().eq("id", program_id).execute()
    except Exception as e:
        print(f"Warning: Failed to cleanup program {program_id}: {e}")
