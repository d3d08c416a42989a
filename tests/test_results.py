"""Tests for folding registry errors into OperationResult."""

import pytest

from claim_registry.errors import CollaboratorError, ErrorCode
from claim_registry.models.claim import ClaimKey, OperationResult
from claim_registry.registry.results import capture

ADMIN = "ST1ADMIN"
HOLDER = "STX-ADDR"


def test_capture_success(configured_registry):
    result = capture(configured_registry.submit_claim, 1, 1, 500_000, caller=HOLDER)
    assert result == OperationResult(ok=True, value=0)


def test_capture_registry_error(registry):
    result = capture(registry.submit_claim, 1, 1, 500_000, caller=HOLDER)
    assert result.ok is False
    assert result.value == ErrorCode.SYSTEM_NOT_CONFIGURED == 600


def test_capture_batch_failure(configured_registry):
    configured_registry.submit_claim(1, 1, 500_000, caller=HOLDER)
    result = capture(
        configured_registry.batch_process_claims,
        [ClaimKey(policy_id=1, incident_id=1), ClaimKey(policy_id=2, incident_id=2)],
    )
    assert result.model_dump() == {"ok": False, "value": 700}


def test_capture_collaborator_error_keeps_its_code(configured_registry, disputes):
    configured_registry.submit_claim(1, 1, 500_000, caller=HOLDER)
    disputes.error = CollaboratorError(code=42, message="nope")
    result = capture(configured_registry.dispute_claim, ClaimKey(policy_id=1, incident_id=1), "r")
    assert result == OperationResult(ok=False, value=42)


def test_capture_lets_unexpected_errors_propagate():
    def boom():
        raise RuntimeError("bug")

    with pytest.raises(RuntimeError, match="bug"):
        capture(boom)
