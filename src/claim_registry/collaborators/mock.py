"""In-memory collaborators for local runs and tests.

Registries are seeded from dicts or from the mock JSON database. Action
collaborators record every request they receive and can be switched to fail.
"""

import logging
from typing import Any, Optional

from claim_registry.collaborators.data_loader import load_mock_db
from claim_registry.errors import CollaboratorError
from claim_registry.models.claim import (
    Claim,
    DisputeRequest,
    IncidentDetails,
    PayoutRequest,
    PolicyDetails,
)

logger = logging.getLogger(__name__)


def _int_keyed(entries: dict[str, Any], model: type) -> dict[int, Any]:
    return {int(k): model.model_validate(v) for k, v in entries.items()}


class InMemoryPolicyRegistry:
    """Policy registry backed by a dict of policy_id -> PolicyDetails."""

    def __init__(self, policies: dict[int, PolicyDetails] | None = None):
        self.policies: dict[int, PolicyDetails] = dict(policies or {})
        self.lookups: list[tuple[str, int]] = []

    @classmethod
    def from_mock_db(cls) -> "InMemoryPolicyRegistry":
        return cls(_int_keyed(load_mock_db().get("policies", {}), PolicyDetails))

    def get_policy(self, holder: str, policy_id: int) -> Optional[PolicyDetails]:
        self.lookups.append((holder, policy_id))
        return self.policies.get(policy_id)


class InMemoryIncidentRegistry:
    """Incident registry backed by a dict of incident_id -> IncidentDetails."""

    def __init__(self, incidents: dict[int, IncidentDetails] | None = None):
        self.incidents: dict[int, IncidentDetails] = dict(incidents or {})

    @classmethod
    def from_mock_db(cls) -> "InMemoryIncidentRegistry":
        return cls(_int_keyed(load_mock_db().get("incidents", {}), IncidentDetails))

    def get_incident(self, incident_id: int) -> Optional[IncidentDetails]:
        return self.incidents.get(incident_id)


class RecordingVerificationHook:
    def __init__(self, succeed: bool = True):
        self.succeed = succeed
        self.calls: list[Claim] = []

    def initiate_verification(self, claim: Claim) -> bool:
        self.calls.append(claim)
        return self.succeed


class RecordingPayoutDistributor:
    def __init__(self, succeed: bool = True):
        self.succeed = succeed
        self.payouts: list[PayoutRequest] = []

    def execute_payout(self, request: PayoutRequest) -> bool:
        self.payouts.append(request)
        if self.succeed:
            logger.debug("Payout of %d to %s accepted", request.amount, request.recipient)
        return self.succeed


class RecordingDisputeResolver:
    """Dispute resolver that hands out sequential dispute IDs starting at 1."""

    def __init__(self, error: CollaboratorError | None = None):
        self.error = error
        self.disputes: list[DisputeRequest] = []
        self._next_id = 1

    def initiate_dispute(self, request: DisputeRequest) -> int:
        self.disputes.append(request)
        if self.error is not None:
            raise self.error
        dispute_id = self._next_id
        self._next_id += 1
        return dispute_id
