"""Claim audit log: one row per committed transition."""

from typing import Any

from claim_registry.db.constants import AUDIT_ACTIONS
from claim_registry.db.database import get_connection
from claim_registry.models.claim import Claim, ClaimKey


class ClaimAuditLog:
    """Append-only record of claim state changes."""

    def __init__(self, db_path: str | None = None):
        self._db_path = db_path

    def record(
        self,
        claim: Claim,
        action: str,
        old_status: str | None = None,
        actor: str | None = None,
        details: str | None = None,
    ) -> None:
        """Insert an audit row for ``claim`` in its post-transition state."""
        if action not in AUDIT_ACTIONS:
            raise ValueError(f"Unknown audit action: {action}")
        with get_connection(self._db_path) as conn:
            conn.execute(
                """
                INSERT INTO claim_audit_log (
                    claim_id, policy_id, incident_id, action,
                    old_status, new_status, actor, details
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    claim.claim_id,
                    claim.policy_id,
                    claim.incident_id,
                    action,
                    old_status,
                    claim.status.value,
                    actor,
                    details or "",
                ),
            )

    def get_history(self, claim_key: ClaimKey) -> list[dict[str, Any]]:
        """Get audit log entries for a claim key, oldest first."""
        with get_connection(self._db_path) as conn:
            rows = conn.execute(
                """
                SELECT id, claim_id, policy_id, incident_id, action,
                       old_status, new_status, actor, details, created_at
                FROM claim_audit_log
                WHERE policy_id = ? AND incident_id = ?
                ORDER BY id ASC
                """,
                (claim_key.policy_id, claim_key.incident_id),
            ).fetchall()
        return [dict(r) for r in rows]
