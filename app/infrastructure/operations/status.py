"""Operation status enumeration.

Status codes for operation results, used to classify outcomes of provider
calls so callers can decide between retry, fallback and giving up.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed successfully
        TRANSIENT_ERROR: Retryable error (network, timeout, rate limit, 5xx)
        PERMANENT_ERROR: Non-retryable error (validation, rejected request)
        NOT_CONFIGURED: Required credentials or settings are absent
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    NOT_CONFIGURED = "not_configured"
