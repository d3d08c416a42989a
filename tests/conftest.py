"""Shared pytest fixtures for all test files."""

import os
import tempfile
from pathlib import Path

import pytest

# Point to project data for mock_db
os.environ.setdefault("MOCK_DB_PATH", str(Path(__file__).resolve().parent.parent / "data" / "mock_db.json"))

from claim_registry.collaborators.mock import (
    InMemoryIncidentRegistry,
    InMemoryPolicyRegistry,
    RecordingDisputeResolver,
    RecordingPayoutDistributor,
    RecordingVerificationHook,
)
from claim_registry.db.database import init_db
from claim_registry.models.claim import IncidentDetails, PolicyDetails
from claim_registry.registry.clock import LogicalClock
from claim_registry.registry.core import ClaimRegistry

ADMIN = "ST1ADMIN"
HOLDER = "STX-ADDR"
VERIFIER = "VO"


@pytest.fixture(autouse=True)
def temp_db():
    """Use a temporary SQLite DB for tests."""
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    init_db(path)
    prev = os.environ.get("CLAIMS_DB_PATH")
    os.environ["CLAIMS_DB_PATH"] = path
    try:
        yield path
    finally:
        if prev is None:
            os.environ.pop("CLAIMS_DB_PATH", None)
        else:
            os.environ["CLAIMS_DB_PATH"] = prev
        try:
            os.unlink(path)
        except OSError:
            pass


@pytest.fixture(autouse=True)
def reset_global_metrics():
    """Reset the global RegistryMetrics singleton before and after each test."""
    from claim_registry.observability.metrics import reset_metrics

    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture
def policies():
    return InMemoryPolicyRegistry(
        {
            1: PolicyDetails(holder=HOLDER, coverage_limit=1_000_000, active=True),
            2: PolicyDetails(holder=HOLDER, coverage_limit=1_000_000, active=True),
        }
    )


@pytest.fixture
def incidents():
    return InMemoryIncidentRegistry(
        {
            1: IncidentDetails(reporter="ST1REPORTER", severity=500_000, location_hash="hash"),
            2: IncidentDetails(reporter="ST1REPORTER", severity=500_000, location_hash="hash"),
        }
    )


@pytest.fixture
def verification_hook():
    return RecordingVerificationHook()


@pytest.fixture
def payouts():
    return RecordingPayoutDistributor()


@pytest.fixture
def disputes():
    return RecordingDisputeResolver()


@pytest.fixture
def clock():
    return LogicalClock()


@pytest.fixture
def registry(policies, incidents, verification_hook, payouts, disputes, clock):
    """Registry with collaborators wired in but no role identities set."""
    return ClaimRegistry(
        policy_registry=policies,
        incident_registry=incidents,
        verification_hook=verification_hook,
        payout_distributor=payouts,
        dispute_resolver=disputes,
        admin=ADMIN,
        clock=clock,
        verification_threshold=2,
    )


@pytest.fixture
def configured_registry(registry):
    """Registry with all five collaborator identities set by the admin."""
    registry.set_contracts("PM", "IR", VERIFIER, "PD", "DR", caller=ADMIN)
    return registry
