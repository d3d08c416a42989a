"""Fold registry exceptions into OperationResult values for callers that want ``{ok, value}``."""

from typing import Any, Callable

from claim_registry.errors import ClaimRegistryError, CollaboratorError
from claim_registry.models.claim import OperationResult


def capture(func: Callable[..., Any], *args: Any, **kwargs: Any) -> OperationResult:
    """Call ``func`` and return ``ok=True`` with its value, or ``ok=False`` with the error code.

    Only registry and collaborator errors are captured; anything else propagates.
    """
    try:
        value = func(*args, **kwargs)
    except ClaimRegistryError as e:
        return OperationResult(ok=False, value=int(e.code))
    except CollaboratorError as e:
        return OperationResult(ok=False, value=e.code)
    return OperationResult(ok=True, value=value)
