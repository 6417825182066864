"""
Error taxonomy shared by the API, the proxy functions and the client SDK.

Every failure is scoped to one request. Each error carries a stable ``code``
that crosses the wire, so callers classify failures without inspecting
message text.
"""

from typing import Any, Dict, Optional


class ServiceError(Exception):
    """Base class for failures reported to callers."""

    status_code: int = 500
    code: str = "internal_error"

    def __init__(self, message: str, *, code: Optional[str] = None,
                 status_code: Optional[int] = None, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.message, "code": self.code}
        if self.detail:
            payload["message"] = self.detail
        return payload


class ValidationError(ServiceError):
    status_code = 400
    code = "validation_error"


class NotFoundError(ServiceError):
    status_code = 404
    code = "not_found"


class ConflictError(ServiceError):
    status_code = 409
    code = "conflict"


class StoreError(ServiceError):
    """The relational store failed a query or a write."""

    status_code = 500
    code = "store_error"


class ConfigurationError(ServiceError):
    """A required credential is absent. Fixed condition, never retried."""

    status_code = 500
    code = "configuration_error"


class UpstreamError(ServiceError):
    """The third-party API rejected the request."""

    INVALID_CREDENTIAL = "invalid_credential"
    QUOTA_EXHAUSTED = "quota_exhausted"
    RATE_LIMITED = "rate_limited"
    GENERIC = "upstream_error"

    status_code = 502
    code = GENERIC


class DataError(ServiceError):
    """Empty or undecodable payload."""

    status_code = 502
    code = "empty_audio"


class TransportError(ServiceError):
    """Network failure or unreachable function."""

    status_code = 502
    code = "transport_error"


CREDENTIAL_CODES = frozenset({UpstreamError.INVALID_CREDENTIAL, UpstreamError.QUOTA_EXHAUSTED})

_CODE_TO_ERROR = {
    ValidationError.code: ValidationError,
    NotFoundError.code: NotFoundError,
    ConflictError.code: ConflictError,
    StoreError.code: StoreError,
    ConfigurationError.code: ConfigurationError,
    UpstreamError.INVALID_CREDENTIAL: UpstreamError,
    UpstreamError.QUOTA_EXHAUSTED: UpstreamError,
    UpstreamError.RATE_LIMITED: UpstreamError,
    UpstreamError.GENERIC: UpstreamError,
    DataError.code: DataError,
    "invalid_audio": DataError,
    "empty_feedback": DataError,
    TransportError.code: TransportError,
}


def classify_upstream_status(status_code: int, error_code: Optional[str] = None,
                             error_type: Optional[str] = None) -> str:
    """Map an upstream HTTP status and structured error fields to an error code."""
    if status_code in (401, 403) or error_code == "invalid_api_key":
        return UpstreamError.INVALID_CREDENTIAL
    if error_code == "insufficient_quota" or error_type == "insufficient_quota":
        return UpstreamError.QUOTA_EXHAUSTED
    if status_code == 429:
        return UpstreamError.RATE_LIMITED
    return UpstreamError.GENERIC


def error_from_payload(status_code: int, payload: Any) -> ServiceError:
    """Rebuild a typed error from a JSON error body returned by a function."""
    if not isinstance(payload, dict):
        return TransportError(f"Unexpected response (HTTP {status_code})", status_code=status_code)

    message = str(payload.get("error") or f"Request failed (HTTP {status_code})")
    code = payload.get("code")
    error_cls = _CODE_TO_ERROR.get(code)
    if error_cls is None:
        if status_code < 500 and status_code not in (401, 403, 429):
            error_cls, code = ValidationError, ValidationError.code
        else:
            error_cls, code = UpstreamError, classify_upstream_status(status_code)
    return error_cls(message, code=code, status_code=status_code, detail=payload.get("message"))
