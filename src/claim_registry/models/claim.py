"""Pydantic models for claims, claim keys, collaborator payloads, and role configuration."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ClaimStatus(str, Enum):
    """Lifecycle status of a claim."""

    PENDING = "pending"
    PROCESSING = "processing"
    VERIFIED = "verified"
    DENIED = "denied"
    DISPUTED = "disputed"
    CANCELED = "canceled"


class ClaimKey(BaseModel):
    """Natural key of a claim: one claim slot per (policy, incident) pair."""

    model_config = ConfigDict(frozen=True)

    policy_id: int = Field(..., description="Policy reference in the policy registry")
    incident_id: int = Field(..., description="Incident reference in the incident registry")

    def __str__(self) -> str:
        return f"policy={self.policy_id}/incident={self.incident_id}"


class SubmissionKey(BaseModel):
    """Dedup index key: a submitter may file once per (policy, incident) pair."""

    model_config = ConfigDict(frozen=True)

    submitter: str
    policy_id: int
    incident_id: int

    @property
    def claim_key(self) -> ClaimKey:
        return ClaimKey(policy_id=self.policy_id, incident_id=self.incident_id)


class Claim(BaseModel):
    """A claim record. Frozen; transitions store an updated copy."""

    model_config = ConfigDict(frozen=True)

    claim_id: int = Field(..., description="Sequential claim ID, never reused")
    policyholder: str = Field(..., description="Identity of the submitter")
    policy_id: int = Field(..., description="Policy reference")
    incident_id: int = Field(..., description="Incident reference")
    amount: int = Field(..., description="Claimed payout amount")
    status: ClaimStatus = Field(default=ClaimStatus.PENDING, description="Lifecycle status")
    verified: bool = Field(default=False, description="Set by the verification transition")
    disputed: bool = Field(default=False, description="Set by the dispute transition")
    timestamp: int = Field(default=0, description="Logical time of submission")

    @property
    def key(self) -> ClaimKey:
        return ClaimKey(policy_id=self.policy_id, incident_id=self.incident_id)


class PolicyDetails(BaseModel):
    """Policy registry response."""

    holder: str = Field(..., description="Policyholder identity")
    coverage_limit: int = Field(..., description="Maximum covered incident severity")
    active: bool = Field(default=True, description="Whether the policy is in force")


class IncidentDetails(BaseModel):
    """Incident registry response."""

    reporter: str = Field(..., description="Identity that reported the incident")
    severity: int = Field(..., description="Assessed incident severity")
    location_hash: str = Field(default="", description="Hash of the incident location")
    timestamp: int = Field(default=0, description="Logical time of the report")


class PayoutRequest(BaseModel):
    """Payout instruction sent to the payout distributor."""

    recipient: str
    amount: int


class DisputeRequest(BaseModel):
    """Dispute initiation sent to the dispute resolver."""

    claim_id: int
    reason: str = ""


class RoleConfig(BaseModel):
    """Admin and collaborator identities authorized against by the registry."""

    admin: str = Field(..., description="Identity allowed to run admin operations")
    policy_manager: Optional[str] = Field(default=None, description="Policy registry identity")
    incident_reporter: Optional[str] = Field(
        default=None, description="Incident registry identity"
    )
    verifier_oracle: Optional[str] = Field(
        default=None, description="Only identity allowed to verify claims"
    )
    payout_distributor: Optional[str] = Field(
        default=None, description="Payout distributor identity"
    )
    dispute_resolver: Optional[str] = Field(default=None, description="Dispute resolver identity")

    @property
    def registries_configured(self) -> bool:
        """Policy manager and incident reporter are both set."""
        return bool(self.policy_manager) and bool(self.incident_reporter)


class OperationResult(BaseModel):
    """Discriminated outcome of a registry operation: a value on success, an error code on failure."""

    ok: bool
    value: Any = None
