"""Interfaces of the external services the registry calls synchronously."""

from typing import Optional, Protocol, runtime_checkable

from claim_registry.models.claim import (
    Claim,
    DisputeRequest,
    IncidentDetails,
    PayoutRequest,
    PolicyDetails,
)


@runtime_checkable
class PolicyRegistry(Protocol):
    def get_policy(self, holder: str, policy_id: int) -> Optional[PolicyDetails]:
        """Return current policy details for the holder, or None if absent."""
        ...


@runtime_checkable
class IncidentRegistry(Protocol):
    def get_incident(self, incident_id: int) -> Optional[IncidentDetails]:
        """Return current incident details, or None if absent."""
        ...


@runtime_checkable
class VerificationHook(Protocol):
    def initiate_verification(self, claim: Claim) -> bool:
        """Start verification for a claim now in processing. False means failure."""
        ...


@runtime_checkable
class PayoutDistributor(Protocol):
    def execute_payout(self, request: PayoutRequest) -> bool:
        """Pay out an accepted claim. False means failure."""
        ...


@runtime_checkable
class DisputeResolver(Protocol):
    def initiate_dispute(self, request: DisputeRequest) -> int:
        """Open a dispute and return its ID. Raises CollaboratorError on failure."""
        ...
