"""External collaborator interfaces and in-memory stand-ins."""

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

__all__ = [
    "DisputeResolver",
    "IncidentRegistry",
    "PayoutDistributor",
    "PolicyRegistry",
    "VerificationHook",
    "InMemoryIncidentRegistry",
    "InMemoryPolicyRegistry",
    "RecordingDisputeResolver",
    "RecordingPayoutDistributor",
    "RecordingVerificationHook",
]
