"""Error Classifier: maps a typed failure to a transport status and response body.

Invariants:
    - Status depends on FailureKind only, never on message text
    - NOT_FOUND_OR_UNPROCESSABLE and VALIDATION both map to 422
    - Anything unknown (kind or exception type) falls back to 500 INTERNAL
    - Messages of typed failures pass through verbatim; untyped exceptions get a
      generic message so internals never leak

Design Decisions:
    - Pure function module, no FastAPI import: api/error_handlers.py does the wiring
      (ADR: core never imports from shell)
    - Not-found folded into 422: clients of this API never distinguished the two
"""

from accounts_api.core.errors import AccountsError, ErrorSeverity, FailureKind


STATUS_BY_KIND: dict[FailureKind, int] = {
    FailureKind.VALIDATION: 422,
    FailureKind.NOT_FOUND_OR_UNPROCESSABLE: 422,
    FailureKind.UNAUTHORIZED: 401,
    FailureKind.INTERNAL: 500,
}
FALLBACK_STATUS: int = 500

INTERNAL_ERROR_BODY: dict = {
    "error": {
        "code": "INTERNAL_ERROR",
        "message": "An unexpected error occurred",
        "kind": FailureKind.INTERNAL.value,
        "category": "internal",
        "severity": ErrorSeverity.CRITICAL.value,
    },
}


def status_for_kind(kind: FailureKind | None) -> int:
    """Transport status for a failure kind. Unknown kinds are INTERNAL."""
    return STATUS_BY_KIND.get(kind, FALLBACK_STATUS)


def classify(exc: BaseException) -> tuple[int, dict]:
    """Return (status, body) for any exception raised while serving a request."""
    if isinstance(exc, AccountsError):
        return status_for_kind(exc.kind), exc.to_response()
    return FALLBACK_STATUS, INTERNAL_ERROR_BODY
