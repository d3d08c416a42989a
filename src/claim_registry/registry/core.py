"""Claim registry: the claim state machine and its transition guards.

The registry owns every claim record and the submission dedup index. Each
public operation validates its guards in a fixed order, commits the new claim
state, and only then calls out to the collaborator involved. A collaborator
failure after the commit leaves the committed state in place.
"""

import functools
import logging
import sqlite3
import threading
import time
from typing import Any, Callable, Iterable, Optional, TypeVar

from claim_registry.collaborators.base import (
    DisputeResolver,
    IncidentRegistry,
    PayoutDistributor,
    PolicyRegistry,
    VerificationHook,
)
from claim_registry.config.settings import (
    DEFAULT_ADMIN,
    DEFAULT_VERIFICATION_THRESHOLD,
    get_max_dispute_reason_length,
)
from claim_registry.db.audit import ClaimAuditLog
from claim_registry.db.constants import (
    ACTION_CANCELED,
    ACTION_DENIED,
    ACTION_DISPUTED,
    ACTION_PROCESSING,
    ACTION_SUBMITTED,
    ACTION_VERIFIED,
)
from claim_registry.errors import (
    BatchProcessingFailedError,
    ClaimAlreadyProcessedError,
    ClaimDeniedError,
    ClaimRegistryError,
    CollaboratorError,
    DisputeInProgressError,
    IncidentNotFoundError,
    IncidentNotMatchingError,
    InvalidCoverageError,
    NotPolicyholderError,
    PayoutFailedError,
    PolicyInvalidError,
    SystemNotConfiguredError,
    UnauthorizedError,
    UnauthorizedVerifierError,
    VerificationFailedError,
)
from claim_registry.models.claim import (
    Claim,
    ClaimKey,
    ClaimStatus,
    DisputeRequest,
    PayoutRequest,
    RoleConfig,
    SubmissionKey,
)
from claim_registry.observability.logger import claim_context, get_logger
from claim_registry.observability.metrics import get_metrics
from claim_registry.registry.clock import LogicalClock
from claim_registry.utils.sanitization import sanitize_dispute_reason

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _claim_key_arg(args: tuple, kwargs: dict) -> Optional[ClaimKey]:
    for value in (*args, *kwargs.values()):
        if isinstance(value, ClaimKey):
            return value
    return None


def _operation(name: str) -> Callable[[F], F]:
    """Run a registry operation serialized, in claim context, with metrics."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(self: "ClaimRegistry", *args, **kwargs):
            key = _claim_key_arg(args, kwargs)
            key_str = str(key) if key is not None else None
            start = time.perf_counter()
            with self._lock, claim_context(claim_key=key_str, operation=name):
                try:
                    result = func(self, *args, **kwargs)
                except (ClaimRegistryError, CollaboratorError) as e:
                    code = int(e.code) if isinstance(e.code, int) else None
                    get_metrics().record_call(
                        name,
                        latency_ms=(time.perf_counter() - start) * 1000,
                        status="error",
                        error_code=code,
                        claim_key=key_str,
                    )
                    logger.log_event(
                        "operation_rejected",
                        level=logging.WARNING,
                        operation=name,
                        error=type(e).__name__,
                        code=e.code,
                    )
                    raise
            get_metrics().record_call(
                name,
                latency_ms=(time.perf_counter() - start) * 1000,
                claim_key=key_str,
            )
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


class ClaimRegistry:
    """Authoritative store of claim state with the full claim lifecycle API.

    Operations are serialized on a reentrant lock, so a single instance can be
    shared across threads with the same effective atomicity as one-call-at-a-time
    execution.
    """

    def __init__(
        self,
        policy_registry: PolicyRegistry,
        incident_registry: IncidentRegistry,
        verification_hook: VerificationHook,
        payout_distributor: PayoutDistributor,
        dispute_resolver: DisputeResolver,
        admin: str | None = None,
        clock: LogicalClock | None = None,
        verification_threshold: int | None = None,
        audit: ClaimAuditLog | None = None,
        max_dispute_reason_length: int | None = None,
    ):
        self._policy_registry = policy_registry
        self._incident_registry = incident_registry
        self._verification_hook = verification_hook
        self._payout_distributor = payout_distributor
        self._dispute_resolver = dispute_resolver
        self.clock = clock or LogicalClock()
        self._audit = audit

        self._roles = RoleConfig(admin=admin or DEFAULT_ADMIN)
        self._verification_threshold = (
            DEFAULT_VERIFICATION_THRESHOLD
            if verification_threshold is None
            else verification_threshold
        )
        self._max_dispute_reason_length = (
            get_max_dispute_reason_length()
            if max_dispute_reason_length is None
            else max_dispute_reason_length
        )
        self._claims: dict[ClaimKey, Claim] = {}
        self._processed: dict[SubmissionKey, ClaimKey] = {}
        self._next_claim_id = 0
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def roles(self) -> RoleConfig:
        return self._roles.model_copy()

    @property
    def verification_threshold(self) -> int:
        return self._verification_threshold

    @property
    def claim_count(self) -> int:
        return self._next_claim_id

    def get_claim_details(self, claim_key: ClaimKey) -> Claim:
        """Return the claim stored at ``claim_key``. Raises ClaimDeniedError if absent."""
        with self._lock:
            return self._get_claim(claim_key)

    def get_claim_history(self, claim_key: ClaimKey) -> list[dict[str, Any]]:
        """Audit rows for the claim key; empty when no audit log is attached."""
        if self._audit is None:
            return []
        return self._audit.get_history(claim_key)

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    @_operation("set_admin")
    def set_admin(self, new_admin: str, caller: str) -> bool:
        self._require_admin(caller)
        self._roles = self._roles.model_copy(update={"admin": new_admin})
        logger.log_event("admin_changed", new_admin=new_admin)
        return True

    @_operation("set_contracts")
    def set_contracts(
        self,
        policy_manager: str,
        incident_reporter: str,
        verifier_oracle: str,
        payout_distributor: str,
        dispute_resolver: str,
        caller: str,
    ) -> bool:
        """Replace all five collaborator identities at once."""
        self._require_admin(caller)
        self._roles = self._roles.model_copy(
            update={
                "policy_manager": policy_manager,
                "incident_reporter": incident_reporter,
                "verifier_oracle": verifier_oracle,
                "payout_distributor": payout_distributor,
                "dispute_resolver": dispute_resolver,
            }
        )
        logger.log_event("contracts_configured", verifier_oracle=verifier_oracle)
        return True

    @_operation("set_verification_threshold")
    def set_verification_threshold(self, threshold: int, caller: str) -> bool:
        self._require_admin(caller)
        self._verification_threshold = threshold
        logger.log_event("verification_threshold_changed", threshold=threshold)
        return True

    # ------------------------------------------------------------------
    # Claim lifecycle
    # ------------------------------------------------------------------

    @_operation("submit_claim")
    def submit_claim(
        self, policy_id: int, incident_id: int, claimed_amount: int, caller: str
    ) -> int:
        """File a claim for (policy_id, incident_id) and return its new claim ID.

        Guards, in order: registries configured, no earlier submission by the
        same caller for the pair, caller holds an active policy, incident exists.
        """
        self._require_registries()

        submission = SubmissionKey(
            submitter=caller, policy_id=policy_id, incident_id=incident_id
        )
        # One claim per (policy, incident) slot, whoever submitted it
        if submission in self._processed or submission.claim_key in self._claims:
            raise ClaimAlreadyProcessedError(
                f"{caller} already submitted policy {policy_id} / incident {incident_id}"
            )

        policy = self._policy_registry.get_policy(caller, policy_id)
        if policy is None or policy.holder != caller or not policy.active:
            raise NotPolicyholderError(f"{caller} holds no active policy {policy_id}")

        if self._incident_registry.get_incident(incident_id) is None:
            raise IncidentNotFoundError(f"Incident not found: {incident_id}")

        claim = Claim(
            claim_id=self._next_claim_id,
            policyholder=caller,
            policy_id=policy_id,
            incident_id=incident_id,
            amount=claimed_amount,
            status=ClaimStatus.PENDING,
            verified=False,
            disputed=False,
            timestamp=self.clock.now(),
        )
        self._processed[submission] = claim.key
        self._next_claim_id += 1
        self._commit(claim, ACTION_SUBMITTED, actor=caller)
        logger.log_event(
            "claim_submitted",
            claim_id=claim.claim_id,
            policyholder=caller,
            amount=claimed_amount,
        )
        return claim.claim_id

    @_operation("process_claim")
    def process_claim(self, claim_key: ClaimKey) -> bool:
        """Move a claim into processing after re-checking live policy and incident data."""
        claim = self._get_claim(claim_key)
        self._require_registries()

        policy = self._policy_registry.get_policy(claim.policyholder, claim.policy_id)
        if policy is None:
            raise PolicyInvalidError(f"Policy not found: {claim.policy_id}")

        incident = self._incident_registry.get_incident(claim.incident_id)
        if incident is None:
            raise IncidentNotMatchingError(f"Incident not found: {claim.incident_id}")

        if incident.severity > policy.coverage_limit or claim.disputed:
            raise InvalidCoverageError(
                f"severity={incident.severity}, coverage={policy.coverage_limit}, "
                f"disputed={claim.disputed}"
            )

        updated = claim.model_copy(update={"status": ClaimStatus.PROCESSING})
        self._commit(updated, ACTION_PROCESSING, old_status=claim.status)
        logger.log_event("claim_processing", claim_id=claim.claim_id)

        if not self._verification_hook.initiate_verification(updated):
            raise VerificationFailedError(
                f"Verification could not be initiated for claim {claim.claim_id}"
            )
        return True

    @_operation("verify_claim")
    def verify_claim(self, claim_key: ClaimKey, is_verified: bool, caller: str) -> bool:
        """Record the verifier oracle's decision; pay out accepted claims."""
        if caller != self._roles.verifier_oracle:
            raise UnauthorizedVerifierError(f"{caller} is not the verifier oracle")
        claim = self._get_claim(claim_key)

        updated = claim.model_copy(
            update={
                "status": ClaimStatus.VERIFIED if is_verified else ClaimStatus.DENIED,
                "verified": is_verified,
            }
        )
        self._commit(
            updated,
            ACTION_VERIFIED if is_verified else ACTION_DENIED,
            old_status=claim.status,
            actor=caller,
        )
        logger.log_event(
            "claim_verified" if is_verified else "claim_denied", claim_id=claim.claim_id
        )

        if is_verified:
            payout = PayoutRequest(recipient=claim.policyholder, amount=claim.amount)
            if not self._payout_distributor.execute_payout(payout):
                raise PayoutFailedError(f"Payout failed for claim {claim.claim_id}")
        return is_verified

    @_operation("dispute_claim")
    def dispute_claim(self, claim_key: ClaimKey, reason: str) -> bool:
        """Flag a claim as disputed and open a dispute with the resolver.

        Failures reported by the resolver propagate unchanged.
        """
        claim = self._get_claim(claim_key)
        if claim.disputed:
            raise DisputeInProgressError(f"Claim {claim.claim_id} is already disputed")

        clean_reason = sanitize_dispute_reason(reason, self._max_dispute_reason_length)
        updated = claim.model_copy(
            update={"status": ClaimStatus.DISPUTED, "disputed": True}
        )
        self._commit(
            updated, ACTION_DISPUTED, old_status=claim.status, details=clean_reason
        )

        dispute_id = self._dispute_resolver.initiate_dispute(
            DisputeRequest(claim_id=claim.claim_id, reason=clean_reason)
        )
        logger.log_event("claim_disputed", claim_id=claim.claim_id, dispute_id=dispute_id)
        return True

    @_operation("cancel_claim")
    def cancel_claim(self, claim_key: ClaimKey, caller: str) -> bool:
        """Cancel a claim and clear its verified/disputed flags."""
        self._require_admin(caller)
        claim = self._get_claim(claim_key)
        updated = claim.model_copy(
            update={
                "status": ClaimStatus.CANCELED,
                "verified": False,
                "disputed": False,
            }
        )
        self._commit(updated, ACTION_CANCELED, old_status=claim.status, actor=caller)
        logger.log_event("claim_canceled", claim_id=claim.claim_id)
        return True

    @_operation("batch_process_claims")
    def batch_process_claims(self, claim_keys: Iterable[ClaimKey]) -> int:
        """Process claims in order, stopping at the first failure.

        Claims processed before the failure keep their new status. The
        per-claim error is logged and replaced by BatchProcessingFailedError.
        """
        processed = 0
        for key in claim_keys:
            try:
                self.process_claim(key)
            except (ClaimRegistryError, CollaboratorError) as e:
                logger.log_event(
                    "batch_item_failed",
                    level=logging.WARNING,
                    claim_key=str(key),
                    processed=processed,
                    error=type(e).__name__,
                )
                raise BatchProcessingFailedError(
                    f"Batch stopped at {key} after {processed} claim(s)"
                ) from None
            processed += 1
        logger.log_event("batch_processed", count=processed)
        return processed

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_admin(self, caller: str) -> None:
        if caller != self._roles.admin:
            raise UnauthorizedError(f"{caller} is not the admin")

    def _require_registries(self) -> None:
        if not self._roles.registries_configured:
            raise SystemNotConfiguredError(
                "Policy manager and incident reporter must be configured"
            )

    def _get_claim(self, claim_key: ClaimKey) -> Claim:
        claim = self._claims.get(claim_key)
        if claim is None:
            raise ClaimDeniedError(f"No claim at {claim_key}")
        return claim

    def _commit(
        self,
        claim: Claim,
        action: str,
        old_status: ClaimStatus | None = None,
        actor: str | None = None,
        details: str | None = None,
    ) -> None:
        self._claims[claim.key] = claim
        if self._audit is None:
            return
        # The transition stands even when its audit row cannot be written
        try:
            self._audit.record(
                claim,
                action,
                old_status=old_status.value if old_status is not None else None,
                actor=actor,
                details=details,
            )
        except sqlite3.Error as e:
            logger.log_event(
                "audit_write_failed",
                level=logging.ERROR,
                claim_id=claim.claim_id,
                action=action,
                error=str(e),
            )
