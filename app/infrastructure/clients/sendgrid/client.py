"""SendGrid v3 Mail Send client."""

from typing import TYPE_CHECKING, Optional

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


class SendGridClient:
    """Client for the SendGrid ``/mail/send`` endpoint.

    All methods return OperationResult for consistent error handling.

    Args:
        settings: Settings instance with sendgrid and notifications sections
        session: Optional requests.Session (injectable for tests)
    """

    def __init__(
        self, settings: "Settings", session: Optional[requests.Session] = None
    ) -> None:
        self._config = settings.sendgrid
        self._timeout = settings.notifications.transport_timeout_seconds
        self._session = session or requests.Session()
        self._logger = logger.bind(component="sendgrid_client")

    @property
    def is_configured(self) -> bool:
        return self._config.is_configured

    @property
    def sender(self) -> str:
        return self._config.SENDER_EMAIL

    def send_email(
        self,
        to: str,
        subject: str,
        text_body: str,
        html_body: Optional[str] = None,
    ) -> OperationResult:
        """Send a single email.

        Args:
            to: Recipient address
            subject: Subject line
            text_body: Plain text body
            html_body: Optional HTML body

        Returns:
            OperationResult with ``{"message_id": ...}`` on success. SendGrid
            answers 202 with an empty body; the id comes from the
            ``X-Message-Id`` header.

        Reference:
            https://www.twilio.com/docs/sendgrid/api-reference/mail-send/mail-send
        """
        if not self.is_configured:
            return OperationResult.not_configured(
                "SendGrid API key is not configured (SENDGRID_API_KEY)"
            )

        content = [{"type": "text/plain", "value": text_body}]
        if html_body is not None:
            content.append({"type": "text/html", "value": html_body})

        payload = {
            "personalizations": [{"to": [{"email": to}]}],
            "from": {"email": self.sender},
            "subject": subject,
            "content": content,
        }

        log = self._logger.bind(recipient=to)
        log.debug("sending_sendgrid_email")

        try:
            response = self._session.post(
                f"{self._config.SENDGRID_API_URL.rstrip('/')}/mail/send",
                json=payload,
                headers={"Authorization": f"Bearer {self._config.SENDGRID_API_KEY}"},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            log.warning("sendgrid_request_failed", error=str(e))
            return classify_http_error(e)

        if response.status_code >= 400:
            result = classify_response(response, provider="SendGrid")
            log.warning(
                "sendgrid_email_rejected",
                status_code=response.status_code,
                error=result.message,
            )
            return result

        message_id = response.headers.get("X-Message-Id")
        log.info("sendgrid_email_sent", message_id=message_id)
        return OperationResult.success(
            data={"message_id": message_id}, message="Email accepted"
        )
