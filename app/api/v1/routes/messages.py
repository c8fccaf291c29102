from fastapi import APIRouter, HTTPException, Response

from api.v1.schemas import (
    HistoryEntryView,
    HistoryResponse,
    PersonalizeRequest,
    PersonalizeResponse,
)
from infrastructure.logging import get_module_logger
from infrastructure.services import NotificationServiceDep

router = APIRouter(prefix="/messages", tags=["Messages"])
logger = get_module_logger()


@router.post("/personalize", response_model=PersonalizeResponse)
def personalize(body: PersonalizeRequest, service: NotificationServiceDep):
    """Generate a personalized milestone message.

    Always returns a message; the local templates are used when the text
    generator is unavailable.
    """
    message = service.personalize(
        body.user_name,
        body.milestone_label,
        body.tone.value if body.tone else None,
    )
    return PersonalizeResponse(message=message)


@router.get("/{user_id}", response_model=HistoryResponse)
def list_messages(user_id: str, service: NotificationServiceDep):
    """Message center entries for a user, newest first."""
    entries = service.history.list(user_id)
    return HistoryResponse(
        entries=[HistoryEntryView.from_entry(e) for e in entries],
        unread_count=sum(1 for e in entries if not e.read),
    )


@router.post("/{user_id}/read", status_code=204)
def mark_all_read(user_id: str, service: NotificationServiceDep):
    service.history.mark_all_read(user_id)
    return Response(status_code=204)


@router.post("/{user_id}/{entry_id}/read", status_code=204)
def mark_read(user_id: str, entry_id: str, service: NotificationServiceDep):
    if not service.history.mark_read(user_id, entry_id):
        raise HTTPException(status_code=404, detail="message not found")
    return Response(status_code=204)


@router.delete("/{user_id}/{entry_id}", status_code=204)
def delete_message(user_id: str, entry_id: str, service: NotificationServiceDep):
    if not service.history.delete(user_id, entry_id):
        raise HTTPException(status_code=404, detail="message not found")
    return Response(status_code=204)


@router.delete("/{user_id}", status_code=204)
def clear_messages(user_id: str, service: NotificationServiceDep):
    service.history.clear(user_id)
    logger.info("message_history_cleared", user_id=user_id)
    return Response(status_code=204)
