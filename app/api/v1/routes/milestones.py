from fastapi import APIRouter

from api.v1.schemas import MilestoneAccepted, MilestoneRequest
from infrastructure.logging import get_module_logger
from infrastructure.notifications.models import MilestoneEvent
from infrastructure.services import NotificationServiceDep

router = APIRouter(prefix="/milestones", tags=["Milestones"])
logger = get_module_logger()


@router.post("", response_model=MilestoneAccepted, status_code=202)
def publish_milestone(body: MilestoneRequest, service: NotificationServiceDep):
    """Publish a milestone event to the notification trigger.

    Processing happens in the background; ``accepted`` is False when the
    trigger is no longer taking events.
    """
    fields = body.model_dump(exclude_none=True)
    event = MilestoneEvent(**fields)
    future = service.publish_milestone(event)
    logger.info(
        "milestone_published",
        user_id=event.user_id,
        kind=event.kind.value,
        accepted=future is not None,
    )
    return MilestoneAccepted(event_id=event.event_id, accepted=future is not None)
