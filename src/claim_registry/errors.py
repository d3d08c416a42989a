"""Error codes and exceptions raised by the claim registry.

Every guard failure raises a ``ClaimRegistryError`` subclass whose ``code`` is
one of ``ErrorCode``. Collaborators signal their own failures with
``CollaboratorError``.
"""

from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Numeric error codes reported for failed operations."""

    POLICY_INVALID = 100
    INCIDENT_NOT_FOUND = 101
    CLAIM_DENIED = 102
    NOT_POLICYHOLDER = 103
    CLAIM_ALREADY_PROCESSED = 104
    VERIFICATION_FAILED = 105
    PAYOUT_FAILED = 106
    DISPUTE_IN_PROGRESS = 107
    INVALID_COVERAGE = 108
    INCIDENT_NOT_MATCHING = 109
    UNAUTHORIZED_VERIFIER = 110
    UNAUTHORIZED = 500
    SYSTEM_NOT_CONFIGURED = 600
    BATCH_PROCESSING_FAILED = 700


class ClaimRegistryError(Exception):
    """Base class for registry guard failures."""

    code: ErrorCode

    def __init__(self, message: str | None = None):
        super().__init__(message or self.code.name.lower())
        self.message = message or self.code.name.lower()


# Authorization


class UnauthorizedError(ClaimRegistryError):
    code = ErrorCode.UNAUTHORIZED


class UnauthorizedVerifierError(ClaimRegistryError):
    code = ErrorCode.UNAUTHORIZED_VERIFIER


class NotPolicyholderError(ClaimRegistryError):
    code = ErrorCode.NOT_POLICYHOLDER


# Configuration


class SystemNotConfiguredError(ClaimRegistryError):
    code = ErrorCode.SYSTEM_NOT_CONFIGURED


# Duplicate / state conflict


class ClaimAlreadyProcessedError(ClaimRegistryError):
    code = ErrorCode.CLAIM_ALREADY_PROCESSED


class DisputeInProgressError(ClaimRegistryError):
    code = ErrorCode.DISPUTE_IN_PROGRESS


# Not found / mismatch


class ClaimDeniedError(ClaimRegistryError):
    code = ErrorCode.CLAIM_DENIED


class IncidentNotFoundError(ClaimRegistryError):
    code = ErrorCode.INCIDENT_NOT_FOUND


class IncidentNotMatchingError(ClaimRegistryError):
    code = ErrorCode.INCIDENT_NOT_MATCHING


class PolicyInvalidError(ClaimRegistryError):
    code = ErrorCode.POLICY_INVALID


# Business rule


class InvalidCoverageError(ClaimRegistryError):
    code = ErrorCode.INVALID_COVERAGE


# Downstream


class VerificationFailedError(ClaimRegistryError):
    code = ErrorCode.VERIFICATION_FAILED


class PayoutFailedError(ClaimRegistryError):
    code = ErrorCode.PAYOUT_FAILED


class BatchProcessingFailedError(ClaimRegistryError):
    code = ErrorCode.BATCH_PROCESSING_FAILED


class CollaboratorError(Exception):
    """Failure reported by an external collaborator, with its own error code."""

    def __init__(self, code: Any, message: str = ""):
        super().__init__(message or f"collaborator error {code}")
        self.code = code
        self.message = message
