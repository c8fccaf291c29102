"""Twilio Programmable Messaging client for SMS and WhatsApp.

Sends a single message through the Twilio REST API. SMS and WhatsApp share
one account and one client; WhatsApp addresses carry the ``whatsapp:``
prefix on both the recipient and the sender.
"""

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

WHATSAPP_PREFIX = "whatsapp:"


class TwilioClient:
    """Client for the Twilio Messages resource.

    All methods return OperationResult for consistent error handling.
    Credentials are read once from settings; when they are absent every send
    returns a NOT_CONFIGURED result without touching the network.

    Args:
        settings: Settings instance with twilio and notifications sections
        session: Optional requests.Session (injectable for tests)
    """

    def __init__(
        self, settings: "Settings", session: Optional[requests.Session] = None
    ) -> None:
        self._config = settings.twilio
        self._timeout = settings.notifications.transport_timeout_seconds
        self._session = session or requests.Session()
        self._logger = logger.bind(component="twilio_client")

    @property
    def is_configured(self) -> bool:
        return self._config.is_configured

    def _messages_url(self) -> str:
        base = self._config.TWILIO_API_URL.rstrip("/")
        return f"{base}/Accounts/{self._config.TWILIO_ACCOUNT_SID}/Messages.json"

    def send_message(self, to: str, body: str, whatsapp: bool = False) -> OperationResult:
        """Send one SMS or WhatsApp message.

        Args:
            to: Recipient number in E.164 format (without any prefix)
            body: Message text
            whatsapp: Send through WhatsApp instead of SMS

        Returns:
            OperationResult with ``{"sid": ..., "status": ...}`` on success

        Reference:
            https://www.twilio.com/docs/messaging/api/message-resource#create-a-message-resource
        """
        if not self.is_configured:
            return OperationResult.not_configured(
                "Twilio credentials are not configured "
                "(TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN, TWILIO_PHONE_NUMBER)"
            )

        sender = self._config.whatsapp_sender if whatsapp else self._config.TWILIO_PHONE_NUMBER
        if whatsapp:
            to = f"{WHATSAPP_PREFIX}{to}"
            sender = f"{WHATSAPP_PREFIX}{sender}"

        log = self._logger.bind(whatsapp=whatsapp, recipient=to)
        log.debug("sending_twilio_message")

        try:
            response = self._session.post(
                self._messages_url(),
                data={"To": to, "From": sender, "Body": body},
                auth=(self._config.TWILIO_ACCOUNT_SID, self._config.TWILIO_AUTH_TOKEN),
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            log.warning("twilio_request_failed", error=str(e))
            return classify_http_error(e)

        if response.status_code >= 400:
            result = classify_response(response, provider="Twilio")
            log.warning(
                "twilio_message_rejected",
                status_code=response.status_code,
                error=result.message,
            )
            return result

        try:
            payload = response.json()
        except ValueError:
            log.error("twilio_malformed_response", status_code=response.status_code)
            return OperationResult.permanent_error(
                "Twilio returned a non-JSON response", error_code="MALFORMED_RESPONSE"
            )

        if not isinstance(payload, dict):
            payload = {}
        sid = payload.get("sid")
        log.info("twilio_message_sent", sid=sid)
        return OperationResult.success(
            data={"sid": sid, "status": payload.get("status")},
            message="Message sent",
        )
