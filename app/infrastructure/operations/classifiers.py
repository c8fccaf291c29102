"""Error classifiers for provider exceptions and responses.

Converts `requests` exceptions and HTTP responses from the messaging and
text-generation providers into standardized OperationResult objects.
Centralizes error classification so every integration treats timeouts,
rate limits and server errors the same way.

Key Functions:
- classify_http_error(): requests exceptions → OperationResult
- classify_response(): non-2xx HTTP responses → OperationResult

Usage:
    from infrastructure.operations.classifiers import (
        classify_http_error,
        classify_response,
    )

    try:
        response = session.post(url, data=payload, timeout=10)
    except requests.RequestException as exc:
        return classify_http_error(exc)
    if response.status_code >= 400:
        return classify_response(response, provider="twilio")
"""

from typing import Any, Optional

import requests

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

DEFAULT_RETRY_AFTER_SECONDS = 60


def classify_http_error(exc: Exception) -> OperationResult:
    """Classify an exception raised while calling a provider.

    Mapping:
    - requests.Timeout: TRANSIENT_ERROR (TIMEOUT)
    - requests.ConnectionError: TRANSIENT_ERROR (CONNECTION_ERROR)
    - requests.HTTPError with a response: delegated to classify_response()
    - Other requests.RequestException: TRANSIENT_ERROR (REQUEST_ERROR)
    - Anything else: PERMANENT_ERROR (UNEXPECTED_ERROR)

    Args:
        exc: Exception raised by the HTTP client

    Returns:
        OperationResult with appropriate status, message and error_code

    Example:
        try:
            response = requests.post(url, json=payload, timeout=5)
        except requests.RequestException as e:
            return classify_http_error(e)
    """
    if isinstance(exc, requests.Timeout):
        return OperationResult.transient_error(
            f"Request timed out: {str(exc)}",
            error_code="TIMEOUT",
        )

    if isinstance(exc, requests.ConnectionError):
        return OperationResult.transient_error(
            f"Connection error: {str(exc)}",
            error_code="CONNECTION_ERROR",
        )

    if isinstance(exc, requests.HTTPError) and exc.response is not None:
        return classify_response(exc.response)

    if isinstance(exc, requests.RequestException):
        return OperationResult.transient_error(
            f"Request error: {type(exc).__name__}: {str(exc)}",
            error_code="REQUEST_ERROR",
        )

    return OperationResult.permanent_error(
        f"Unexpected error: {type(exc).__name__}: {str(exc)}",
        error_code="UNEXPECTED_ERROR",
    )


def classify_response(response: Any, provider: str = "provider") -> OperationResult:
    """Classify a non-success HTTP response.

    Status Code Mapping:
    - 429: Rate limiting → TRANSIENT_ERROR with retry_after
    - 401/403: Credentials rejected → PERMANENT_ERROR
    - 5xx: Server error → TRANSIENT_ERROR
    - Other 4xx: Request rejected → PERMANENT_ERROR

    The provider's own error message (JSON `message`, `error_message` or
    `errors[0].message`) is included when the body carries one.

    Args:
        response: requests.Response (or compatible object) with status >= 400
        provider: Provider name used in messages

    Returns:
        OperationResult with error status, message and HTTP_<code> error_code
    """
    status_code = response.status_code
    detail = _extract_error_detail(response)
    message = f"{provider} API error: HTTP {status_code}"
    if detail:
        message = f"{message}: {detail}"

    if status_code == 429:
        return OperationResult.error(
            OperationStatus.TRANSIENT_ERROR,
            message,
            error_code="RATE_LIMITED",
            retry_after=_retry_after(response),
        )

    if status_code in (401, 403):
        return OperationResult.permanent_error(message, error_code="UNAUTHORIZED")

    if 500 <= status_code < 600:
        return OperationResult.transient_error(
            message, error_code=f"HTTP_{status_code}"
        )

    return OperationResult.permanent_error(message, error_code=f"HTTP_{status_code}")


def _retry_after(response: Any) -> int:
    headers = getattr(response, "headers", None) or {}
    header_value = headers.get("Retry-After")
    if header_value:
        try:
            return int(header_value)
        except (ValueError, TypeError):
            pass  # Use default if header is malformed
    return DEFAULT_RETRY_AFTER_SECONDS


def _extract_error_detail(response: Any) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:200] or None

    if not isinstance(body, dict):
        return None

    for key in ("message", "error_message", "error"):
        value = body.get(key)
        if isinstance(value, str) and value:
            return value

    errors = body.get("errors")
    if isinstance(errors, list) and errors and isinstance(errors[0], dict):
        return errors[0].get("message")

    return None
