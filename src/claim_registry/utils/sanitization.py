"""Input sanitization for free text forwarded to collaborators."""

import logging
import re

from claim_registry.config.settings import get_max_dispute_reason_length

logger = logging.getLogger(__name__)


def _sanitize_text(text: str | None, max_length: int) -> str:
    """Strip control characters and truncate to max_length."""
    if text is None or not isinstance(text, str):
        return ""
    # Remove control characters (0x00-0x1F except tab/newline/carriage return)
    cleaned = re.sub(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]", "", text)
    cleaned = cleaned.strip()
    if len(cleaned) > max_length:
        logger.warning(
            "Text truncated from %d to %d characters", len(cleaned), max_length
        )
        cleaned = cleaned[:max_length]
    return cleaned


def sanitize_dispute_reason(reason: str | None, max_length: int | None = None) -> str:
    """Clean a dispute reason before it is sent to the dispute resolver.

    Non-string input becomes an empty string. Without ``max_length`` the
    CLAIM_REGISTRY_MAX_DISPUTE_REASON setting applies.
    """
    limit = get_max_dispute_reason_length() if max_length is None else max_length
    return _sanitize_text(reason, limit)
