"""Tests for database and ClaimAuditLog."""

import os

import pytest

from claim_registry.db.audit import ClaimAuditLog
from claim_registry.db.database import get_connection, get_db_path, init_db
from claim_registry.models.claim import Claim, ClaimKey, ClaimStatus


def _claim(status: ClaimStatus = ClaimStatus.PENDING) -> Claim:
    return Claim(
        claim_id=7,
        policyholder="STX-ADDR",
        policy_id=1,
        incident_id=2,
        amount=500_000,
        status=status,
    )


def test_get_db_path_default(monkeypatch):
    """Default path is data/claims.db when env unset."""
    monkeypatch.delenv("CLAIMS_DB_PATH", raising=False)
    assert get_db_path() == "data/claims.db"


def test_get_db_path_env(monkeypatch):
    """CLAIMS_DB_PATH env overrides default."""
    monkeypatch.setenv("CLAIMS_DB_PATH", "/tmp/custom.db")
    assert get_db_path() == "/tmp/custom.db"


def test_init_db_creates_audit_table(temp_db):
    with get_connection(temp_db) as conn:
        cur = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name"
        )
        tables = [row[0] for row in cur.fetchall()]
    assert "claim_audit_log" in tables


def test_init_db_creates_parent_directory(tmp_path):
    path = tmp_path / "nested" / "audit.db"
    init_db(str(path))
    assert path.exists()


def test_audit_log_record_and_history(temp_db):
    audit = ClaimAuditLog(db_path=temp_db)
    audit.record(_claim(), "submitted", actor="STX-ADDR")
    audit.record(
        _claim(ClaimStatus.PROCESSING), "processing", old_status="pending"
    )

    history = audit.get_history(ClaimKey(policy_id=1, incident_id=2))
    assert [h["action"] for h in history] == ["submitted", "processing"]
    assert history[0]["old_status"] is None
    assert history[0]["new_status"] == "pending"
    assert history[0]["actor"] == "STX-ADDR"
    assert history[1]["old_status"] == "pending"
    assert history[1]["new_status"] == "processing"
    assert history[1]["claim_id"] == 7


def test_audit_log_history_scoped_to_claim_key(temp_db):
    audit = ClaimAuditLog(db_path=temp_db)
    audit.record(_claim(), "submitted")
    assert audit.get_history(ClaimKey(policy_id=2, incident_id=1)) == []


def test_audit_log_uses_env_path(temp_db):
    """Without an explicit path the log writes to CLAIMS_DB_PATH."""
    assert os.environ["CLAIMS_DB_PATH"] == temp_db
    ClaimAuditLog().record(_claim(), "submitted")
    assert len(ClaimAuditLog(db_path=temp_db).get_history(_claim().key)) == 1


def test_audit_log_rejects_unknown_action(temp_db):
    with pytest.raises(ValueError, match="Unknown audit action"):
        ClaimAuditLog(db_path=temp_db).record(_claim(), "deleted")
