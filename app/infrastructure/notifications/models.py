"""Notification system core models.

Models for the milestone notification pipeline: user reminder preferences,
milestone events, and the per-channel delivery attempts recorded while a
message walks its fallback chain.

Uses Pydantic BaseModel for:
- RFC 5322 compliant email validation (EmailStr) on preference updates
- Runtime input validation
- Type safety with proper error messages
- Consistency with the API layer (api/v1/schemas.py)
"""

import re
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from infrastructure.notifications.validation import is_plausible_email, is_valid_phone
from infrastructure.operations import OperationResult, OperationStatus

DEFAULT_USER_NAME = "Hydration Champion"
TOTAL_FAILURE_MESSAGE = "failed to send notification"

_PERCENT_TOKEN = re.compile(r"(\d{1,3})\s*%")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Channel(str, Enum):
    """Delivery transports. UNSET means the user never chose one."""

    SMS = "SMS"
    WHATSAPP = "WHATSAPP"
    EMAIL = "EMAIL"
    UNSET = "UNSET"


class ReminderFrequency(str, Enum):
    HOURLY = "hourly"
    TWO_HOURLY = "2hourly"
    THREE_HOURLY = "3hourly"
    FOUR_HOURLY = "4hourly"


class ReminderTone(str, Enum):
    KIND = "kind"
    FUNNY = "funny"
    SARCASTIC = "sarcastic"
    RUDE = "rude"
    CRUDE = "crude"


class NotificationPreference(BaseModel):
    """Per-user reminder preference record.

    Records are created on the first save and only ever changed by later
    saves; disabling reminders is done with ``reminders_enabled=False``.

    The contact invariant (SMS/WHATSAPP need an E.164 phone, EMAIL needs a
    plausible email) is checked by ``validate_contact_invariant()`` when a
    record is saved. Records loaded from storage are accepted as they are so
    that malformed legacy rows still reach the dispatcher, which limits them
    to a single SMS attempt or a CONFIG_ERROR.

    Attributes:
        user_id: Owner of the record
        preferred_channel: Channel to try first (default: UNSET)
        reminders_enabled: Master switch for outbound reminders
        phone_number: E.164 phone number used for SMS and WhatsApp
        email: Email address
        display_name: Name used in message text
        frequency: Reminder cadence
        tone: Requested message tone
        updated_at: Last save time, used to pick between duplicate records
    """

    user_id: str
    preferred_channel: Channel = Channel.UNSET
    reminders_enabled: bool = False
    phone_number: Optional[str] = None
    email: Optional[str] = None
    display_name: Optional[str] = None
    frequency: ReminderFrequency = ReminderFrequency.TWO_HOURLY
    tone: ReminderTone = ReminderTone.KIND
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("updated_at")
    @classmethod
    def ensure_aware(cls, v: datetime) -> datetime:
        """Naive timestamps from legacy rows are taken to be UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @property
    def has_phone(self) -> bool:
        return bool(self.phone_number)

    @property
    def has_valid_phone(self) -> bool:
        return is_valid_phone(self.phone_number)

    @property
    def has_email(self) -> bool:
        return bool(self.email)

    def validate_contact_invariant(self) -> None:
        """Raise ValueError when the preferred channel lacks a valid contact."""
        if self.preferred_channel in (Channel.SMS, Channel.WHATSAPP):
            if not self.has_valid_phone:
                raise ValueError(
                    f"{self.preferred_channel.value} reminders require a phone "
                    "number in E.164 format (e.g. +61412345678)"
                )
        elif self.preferred_channel == Channel.EMAIL:
            if not is_plausible_email(self.email):
                raise ValueError("EMAIL reminders require a valid email address")

    def resolved_user_name(self) -> str:
        """Display name, else the email local part, else a generic name."""
        if self.display_name and self.display_name.strip():
            return self.display_name.strip()
        if self.email and "@" in self.email:
            local_part = self.email.split("@", 1)[0].strip()
            if local_part:
                return local_part
        return DEFAULT_USER_NAME


class PreferenceUpdate(BaseModel):
    """Partial update applied by an explicit save.

    Only fields that were set are merged into the stored record.
    """

    model_config = ConfigDict(extra="forbid")

    preferred_channel: Optional[Channel] = None
    reminders_enabled: Optional[bool] = None
    phone_number: Optional[str] = None
    email: Optional[EmailStr] = None
    display_name: Optional[str] = None
    frequency: Optional[ReminderFrequency] = None
    tone: Optional[ReminderTone] = None

    @field_validator("phone_number")
    @classmethod
    def validate_phone_number(cls, v: Optional[str]) -> Optional[str]:
        """Validate E.164 phone format if provided."""
        if v is None:
            return v
        v = v.strip()
        if not is_valid_phone(v):
            raise ValueError(f"Phone number must be in E.164 format: {v}")
        return v


class MilestoneKind(str, Enum):
    INFO = "info"
    TIP = "tip"
    REMINDER = "reminder"
    ACHIEVEMENT = "achievement"


class MilestoneEvent(BaseModel):
    """An in-process signal that a user crossed a notable threshold.

    Events are not persisted beyond the capped message history.

    Attributes:
        kind: INFO, TIP, REMINDER or ACHIEVEMENT
        raw_text: Tracker text describing the milestone
        user_id: User the event belongs to
        timestamp: When the event happened (timezone-aware)
        threshold_percent: Goal percentage crossed (25/50/75/100), if any
        event_id: Unique id, also used as the history entry id
    """

    model_config = ConfigDict(frozen=True)

    kind: MilestoneKind
    raw_text: str
    user_id: str
    timestamp: datetime = Field(default_factory=utc_now)
    threshold_percent: Optional[int] = None
    event_id: uuid.UUID = Field(default_factory=uuid.uuid4)

    @field_validator("timestamp")
    @classmethod
    def ensure_aware(cls, v: datetime) -> datetime:
        """Naive timestamps are taken to be UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @field_validator("threshold_percent")
    @classmethod
    def validate_threshold(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and not 0 < v <= 100:
            raise ValueError("threshold_percent must be between 1 and 100")
        return v

    def resolved_threshold(self) -> Optional[int]:
        """Explicit threshold, else a ``NN%`` token in the text.

        ACHIEVEMENT events without either count as 100%.
        """
        if self.threshold_percent is not None:
            return self.threshold_percent
        match = _PERCENT_TOKEN.search(self.raw_text)
        if match:
            return int(match.group(1))
        if self.kind == MilestoneKind.ACHIEVEMENT:
            return 100
        return None

    def milestone_label(self) -> str:
        """Label handed to the composer."""
        if self.kind == MilestoneKind.ACHIEVEMENT:
            return "goal completion"
        return self.raw_text


class DeliveryOutcome(str, Enum):
    SUCCESS = "SUCCESS"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIG_ERROR = "CONFIG_ERROR"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"

    @classmethod
    def from_result(cls, result: OperationResult) -> "DeliveryOutcome":
        """Map a sender result onto the delivery taxonomy."""
        if result.status == OperationStatus.SUCCESS:
            return cls.SUCCESS
        if result.status == OperationStatus.NOT_CONFIGURED:
            return cls.CONFIG_ERROR
        if result.error_code == cls.VALIDATION_ERROR.value:
            return cls.VALIDATION_ERROR
        return cls.TRANSPORT_ERROR


class DeliveryAttempt(BaseModel):
    """One channel tried during a single dispatch.

    Attributes:
        channel: Channel tried
        target_address: Phone number or email the message was sent to
        message: Text that was sent
        outcome: SUCCESS or the error class that ended this hop
        provider_ref: Provider message id on success
        error_message: Provider or validation message on failure
        tries: Number of transport calls made for this hop (retries included)
        attempted_at: When the hop started
    """

    channel: Channel
    target_address: str
    message: str
    outcome: DeliveryOutcome
    provider_ref: Optional[str] = None
    error_message: Optional[str] = None
    tries: int = 1
    attempted_at: datetime = Field(default_factory=utc_now)

    @property
    def is_success(self) -> bool:
        return self.outcome == DeliveryOutcome.SUCCESS


class DispatchResult(BaseModel):
    """Outcome of walking one fallback chain.

    Attributes:
        delivered_via: Channel that delivered, or None
        attempts: Every hop in the order it was tried
        error: CONFIG_ERROR when no usable contact existed, else None
    """

    delivered_via: Optional[Channel] = None
    attempts: List[DeliveryAttempt] = Field(default_factory=list)
    error: Optional[DeliveryOutcome] = None

    @property
    def is_success(self) -> bool:
        return self.delivered_via is not None

    @property
    def channels_tried(self) -> List[Channel]:
        return [attempt.channel for attempt in self.attempts]

    @property
    def user_message(self) -> Optional[str]:
        """The one user-visible error, or None when nothing failed."""
        if self.is_success:
            return None
        if self.attempts or self.error is not None:
            return TOTAL_FAILURE_MESSAGE
        return None
