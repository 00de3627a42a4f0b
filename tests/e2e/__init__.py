"""
E2E tests for the Hierarchy Cascade API.

The lifecycle suite runs in-process against the fake store. The live suite
runs against a real Supabase database and is skipped unless --live is given.

Usage:
    pytest -m e2e tests/e2e/          # In-process lifecycle tests
    pytest -m e2e tests/e2e/ --live   # Include live database tests
"""
