"""Audit action names, one per registry transition."""

ACTION_SUBMITTED = "submitted"
ACTION_PROCESSING = "processing"
ACTION_VERIFIED = "verified"
ACTION_DENIED = "denied"
ACTION_DISPUTED = "disputed"
ACTION_CANCELED = "canceled"

AUDIT_ACTIONS = (
    ACTION_SUBMITTED,
    ACTION_PROCESSING,
    ACTION_VERIFIED,
    ACTION_DENIED,
    ACTION_DISPUTED,
    ACTION_CANCELED,
)
