"""Gemini generateContent client used for message personalization.

The API key stays on the server; it is sent in the ``x-goog-api-key``
header and never returned to callers.
"""

from typing import TYPE_CHECKING, Any, Optional

import requests
import structlog

from infrastructure.operations import (
    OperationResult,
    classify_http_error,
    classify_response,
)

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

logger = structlog.get_logger()

PROMPT_TEMPLATE = (
    "Generate a motivational, friendly hydration reminder for {user_name} "
    "who has reached the {milestone_label} milestone of their daily water "
    "intake. Keep it concise, encouraging, and under 100 characters."
)


def build_prompt(user_name: str, milestone_label: str, tone: Optional[str] = None) -> str:
    """Build the generation prompt for one milestone message."""
    prompt = PROMPT_TEMPLATE.format(user_name=user_name, milestone_label=milestone_label)
    if tone:
        prompt += f" Use a {tone} tone."
    return prompt


def extract_text(payload: Any) -> Optional[str]:
    """Return ``candidates[0].content.parts[0].text`` or None when absent."""
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None


class GeminiClient:
    """Client for the Gemini ``generateContent`` endpoint.

    Args:
        settings: Settings instance with gemini and notifications sections
        session: Optional requests.Session (injectable for tests)
    """

    def __init__(
        self, settings: "Settings", session: Optional[requests.Session] = None
    ) -> None:
        self._config = settings.gemini
        self._timeout = settings.notifications.compose_timeout_seconds
        self._session = session or requests.Session()
        self._logger = logger.bind(component="gemini_client")

    @property
    def is_configured(self) -> bool:
        return self._config.is_configured

    def generate(
        self, user_name: str, milestone_label: str, tone: Optional[str] = None
    ) -> OperationResult:
        """Generate a personalized hydration message.

        Returns:
            OperationResult with ``{"message": str}`` on success. Empty or
            malformed responses are PERMANENT_ERROR results.
        """
        if not self.is_configured:
            return OperationResult.not_configured(
                "Gemini API key is not configured (GEMINI_API_KEY)"
            )

        body = {
            "contents": [
                {"parts": [{"text": build_prompt(user_name, milestone_label, tone)}]}
            ]
        }

        try:
            response = self._session.post(
                self._config.GEMINI_API_URL,
                json=body,
                headers={
                    "Content-Type": "application/json",
                    "x-goog-api-key": self._config.GEMINI_API_KEY,
                },
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            self._logger.warning("gemini_request_failed", error=str(e))
            return classify_http_error(e)

        if response.status_code >= 400:
            result = classify_response(response, provider="Gemini")
            self._logger.warning(
                "gemini_request_rejected",
                status_code=response.status_code,
                error=result.message,
            )
            return result

        try:
            payload = response.json()
        except ValueError:
            return OperationResult.permanent_error(
                "Gemini returned a non-JSON response", error_code="MALFORMED_RESPONSE"
            )

        text = extract_text(payload)
        if text is None or not text.strip():
            return OperationResult.permanent_error(
                "Gemini response contained no text", error_code="EMPTY_RESPONSE"
            )

        return OperationResult.success(
            data={"message": text.strip()}, message="Message generated"
        )
