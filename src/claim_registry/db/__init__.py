"""SQLite audit trail for claim transitions."""

from claim_registry.db.audit import ClaimAuditLog
from claim_registry.db.database import get_connection, get_db_path, init_db

__all__ = [
    "ClaimAuditLog",
    "get_connection",
    "get_db_path",
    "init_db",
]
