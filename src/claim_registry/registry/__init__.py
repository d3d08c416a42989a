"""Claim registry: state machine, errors, and a settings-driven factory."""

from claim_registry.collaborators.base import (
    DisputeResolver,
    IncidentRegistry,
    PayoutDistributor,
    PolicyRegistry,
    VerificationHook,
)
from claim_registry.collaborators.mock import (
    InMemoryIncidentRegistry,
    InMemoryPolicyRegistry,
    RecordingDisputeResolver,
    RecordingPayoutDistributor,
    RecordingVerificationHook,
)
from claim_registry.config.settings import get_registry_config
from claim_registry.db.audit import ClaimAuditLog
from claim_registry.errors import ClaimRegistryError, CollaboratorError, ErrorCode
from claim_registry.registry.clock import LogicalClock
from claim_registry.registry.core import ClaimRegistry
from claim_registry.registry.results import capture


def create_registry(
    policy_registry: PolicyRegistry | None = None,
    incident_registry: IncidentRegistry | None = None,
    verification_hook: VerificationHook | None = None,
    payout_distributor: PayoutDistributor | None = None,
    dispute_resolver: DisputeResolver | None = None,
    clock: LogicalClock | None = None,
    audit_db_path: str | None = None,
) -> ClaimRegistry:
    """Build a ClaimRegistry from environment settings.

    Collaborators left as None fall back to the in-memory stand-ins, with the
    registries seeded from the mock database. The SQLite audit trail is attached
    when CLAIM_REGISTRY_AUDIT_ENABLED is set or an explicit path is given.
    """
    config = get_registry_config()
    audit = None
    if audit_db_path or config["audit_enabled"]:
        audit = ClaimAuditLog(db_path=audit_db_path)
    return ClaimRegistry(
        policy_registry=policy_registry or InMemoryPolicyRegistry.from_mock_db(),
        incident_registry=incident_registry or InMemoryIncidentRegistry.from_mock_db(),
        verification_hook=verification_hook or RecordingVerificationHook(),
        payout_distributor=payout_distributor or RecordingPayoutDistributor(),
        dispute_resolver=dispute_resolver or RecordingDisputeResolver(),
        admin=config["admin"],
        clock=clock,
        verification_threshold=config["verification_threshold"],
        audit=audit,
        max_dispute_reason_length=config["max_dispute_reason_length"],
    )


__all__ = [
    "ClaimRegistry",
    "ClaimRegistryError",
    "CollaboratorError",
    "ErrorCode",
    "LogicalClock",
    "capture",
    "create_registry",
]
