"""Shared fixtures for integration tests.

These fixtures build registries the way an application would, through
create_registry, with the SQLite audit trail attached.
"""

import os
import tempfile
from pathlib import Path
from typing import Generator

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "data"

os.environ.setdefault("MOCK_DB_PATH", str(DATA_DIR / "mock_db.json"))


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
def integration_db() -> Generator[str, None, None]:
    """Create a temporary SQLite audit database for one test.

    Yields:
        str: Path to the temporary database file.
    """
    from claim_registry.db.database import init_db

    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    try:
        init_db(path)
        yield path
    finally:
        try:
            os.unlink(path)
        except OSError:
            pass


# ============================================================================
# Registry Fixtures
# ============================================================================


@pytest.fixture
def audited_registry(integration_db: str):
    """Registry seeded from data/mock_db.json, writing to the audit database."""
    from claim_registry.registry import create_registry

    registry = create_registry(audit_db_path=integration_db)
    registry.set_contracts("PM", "IR", "VO", "PD", "DR", caller=registry.roles.admin)
    return registry
