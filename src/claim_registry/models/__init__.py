"""Pydantic models for claims."""

from claim_registry.models.claim import (
    Claim,
    ClaimKey,
    ClaimStatus,
    DisputeRequest,
    IncidentDetails,
    OperationResult,
    PayoutRequest,
    PolicyDetails,
    RoleConfig,
    SubmissionKey,
)

__all__ = [
    "Claim",
    "ClaimKey",
    "ClaimStatus",
    "DisputeRequest",
    "IncidentDetails",
    "OperationResult",
    "PayoutRequest",
    "PolicyDetails",
    "RoleConfig",
    "SubmissionKey",
]
