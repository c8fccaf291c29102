from fastapi import APIRouter
from api.v1.routes.messages import router as messages_router
from api.v1.routes.milestones import router as milestones_router
from api.v1.routes.reminders import router as reminders_router


# Main v1 router (includes all endpoints)
router = APIRouter()
router.include_router(messages_router)
router.include_router(reminders_router)
router.include_router(milestones_router)
