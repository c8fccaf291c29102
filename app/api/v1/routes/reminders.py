from fastapi import APIRouter, HTTPException

from api.v1.schemas import (
    PreferenceResponse,
    ReminderSettingsRequest,
    SendReminderRequest,
    SendReminderResponse,
)
from infrastructure.logging import get_module_logger
from infrastructure.services import NotificationServiceDep
from modules.preferences import PreferenceValidationError

router = APIRouter(prefix="/reminders", tags=["Reminders"])
logger = get_module_logger()


@router.post("/send", response_model=SendReminderResponse)
def send_reminder(body: SendReminderRequest, service: NotificationServiceDep):
    """Send a reminder now over the user's fallback chain.

    Per-channel failures are only logged; a total failure answers 502 with a
    single generic message.
    """
    pref = service.get_preference(body.user_id)
    if pref is None:
        raise HTTPException(status_code=404, detail="no reminder settings for user")
    if not pref.reminders_enabled:
        raise HTTPException(status_code=409, detail="reminders are disabled")

    result = service.send_reminder(pref, body.message)
    if not result.is_success:
        raise HTTPException(status_code=502, detail=result.user_message)
    return SendReminderResponse.from_result(result)


@router.get("/settings/{user_id}", response_model=PreferenceResponse)
def get_settings(user_id: str, service: NotificationServiceDep):
    pref = service.get_preference(user_id)
    if pref is None:
        raise HTTPException(status_code=404, detail="no reminder settings for user")
    return PreferenceResponse.from_preference(pref)


@router.put("/settings/{user_id}", response_model=PreferenceResponse)
def save_settings(
    user_id: str, body: ReminderSettingsRequest, service: NotificationServiceDep
):
    """Save reminder settings. Only the fields sent are changed."""
    try:
        pref = service.save_preference(user_id, body)
    except PreferenceValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return PreferenceResponse.from_preference(pref)
