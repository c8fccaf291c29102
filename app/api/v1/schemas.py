"""API request and response schemas using Pydantic.

Wire names are camelCase (``userId``, ``milestoneLabel``) while the Python
attributes stay snake_case. Every schema accepts either form on input.

Key distinction from infrastructure.notifications.models:
  - schemas.py: HTTP contracts, camelCase on the wire
  - models.py: internal pipeline models shared by composer, dispatcher and trigger
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from infrastructure.notifications.history import HistoryEntry
from infrastructure.notifications.models import (
    Channel,
    DeliveryAttempt,
    DeliveryOutcome,
    DispatchResult,
    MilestoneKind,
    NotificationPreference,
    PreferenceUpdate,
    ReminderFrequency,
    ReminderTone,
)


class APIModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PersonalizeRequest(APIModel):
    user_name: str = ""
    milestone_label: str = Field(..., min_length=1)
    tone: Optional[ReminderTone] = None


class PersonalizeResponse(APIModel):
    message: str


class SendReminderRequest(APIModel):
    user_id: str = Field(..., min_length=1)
    message: Optional[str] = Field(default=None, max_length=1600)


class DeliveryAttemptView(APIModel):
    channel: Channel
    target_address: str
    outcome: DeliveryOutcome
    provider_ref: Optional[str] = None
    error_message: Optional[str] = None
    tries: int
    attempted_at: datetime

    @classmethod
    def from_attempt(cls, attempt: DeliveryAttempt) -> "DeliveryAttemptView":
        return cls.model_validate(attempt.model_dump())


class SendReminderResponse(APIModel):
    delivered_via: Optional[Channel]
    attempts: List[DeliveryAttemptView]

    @classmethod
    def from_result(cls, result: DispatchResult) -> "SendReminderResponse":
        return cls(
            delivered_via=result.delivered_via,
            attempts=[DeliveryAttemptView.from_attempt(a) for a in result.attempts],
        )


class ReminderSettingsRequest(PreferenceUpdate):
    """Partial preference update; only the fields sent are changed."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )


class PreferenceResponse(APIModel):
    user_id: str
    preferred_channel: Channel
    reminders_enabled: bool
    phone_number: Optional[str] = None
    email: Optional[str] = None
    display_name: Optional[str] = None
    frequency: ReminderFrequency
    tone: ReminderTone
    updated_at: datetime

    @classmethod
    def from_preference(cls, pref: NotificationPreference) -> "PreferenceResponse":
        return cls.model_validate(pref.model_dump())


class MilestoneRequest(APIModel):
    user_id: str = Field(..., min_length=1)
    kind: MilestoneKind
    raw_text: str = Field(..., min_length=1)
    threshold_percent: Optional[int] = Field(default=None, gt=0, le=100)
    timestamp: Optional[datetime] = None


class MilestoneAccepted(APIModel):
    event_id: UUID
    accepted: bool


class HistoryEntryView(APIModel):
    id: str
    text: str
    kind: MilestoneKind
    timestamp: datetime
    read: bool

    @classmethod
    def from_entry(cls, entry: HistoryEntry) -> "HistoryEntryView":
        return cls.model_validate(entry.model_dump())


class HistoryResponse(APIModel):
    entries: List[HistoryEntryView]
    unread_count: int
