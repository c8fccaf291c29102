"""Uniform result returned by provider clients, channels and the composer.

Provider failures travel as values rather than exceptions so that the
fallback dispatcher can decide between retrying a hop, moving to the next
channel, or giving up.
"""

from dataclasses import dataclass
from typing import Any, Optional

from infrastructure.operations.status import OperationStatus


@dataclass
class OperationResult:
    """Outcome of one operation.

    Attributes:
        status: High-level outcome
        message: Human-friendly message for logs
        data: Payload, usually a dict (``{"provider_ref": ...}``, ``{"message": ...}``)
        error_code: Machine code, e.g. ``HTTP_503``, ``VALIDATION_ERROR``, ``CIRCUIT_OPEN``
        retry_after: Seconds to wait when the provider rate-limited us
    """

    status: OperationStatus
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None
    retry_after: Optional[int] = None

    @property
    def is_success(self) -> bool:
        return self.status == OperationStatus.SUCCESS

    @property
    def is_transient(self) -> bool:
        """True when the failure may succeed on a later try."""
        return self.status == OperationStatus.TRANSIENT_ERROR

    def data_get(self, key: str, default: Any = None) -> Any:
        """Look up ``key`` in a dict payload; ``default`` for any other payload."""
        if isinstance(self.data, dict):
            return self.data.get(key, default)
        return default

    @classmethod
    def success(cls, data: Optional[Any] = None, message: str = "ok") -> "OperationResult":
        return cls(status=OperationStatus.SUCCESS, message=message, data=data)

    @classmethod
    def error(
        cls,
        status: OperationStatus,
        message: str,
        error_code: Optional[str] = None,
        retry_after: Optional[int] = None,
        data: Optional[Any] = None,
    ) -> "OperationResult":
        return cls(
            status=status,
            message=message,
            error_code=error_code,
            retry_after=retry_after,
            data=data,
        )

    @classmethod
    def transient_error(
        cls,
        message: str,
        error_code: Optional[str] = None,
        retry_after: Optional[int] = None,
    ) -> "OperationResult":
        """Timeouts, connection failures, 5xx and 429 responses."""
        return cls.error(OperationStatus.TRANSIENT_ERROR, message, error_code, retry_after)

    @classmethod
    def permanent_error(cls, message: str, error_code: Optional[str] = None) -> "OperationResult":
        """Malformed recipients, rejected requests (4xx), unparseable responses."""
        return cls.error(OperationStatus.PERMANENT_ERROR, message, error_code)

    @classmethod
    def not_configured(cls, message: str, error_code: str = "CONFIG_ERROR") -> "OperationResult":
        """Credentials for the provider are absent; no call was made."""
        return cls.error(OperationStatus.NOT_CONFIGURED, message, error_code)
