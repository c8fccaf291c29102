from fastapi import APIRouter

from infrastructure.services import NotificationServiceDep, SettingsDep

router = APIRouter(tags=["System"])


@router.get("/version")
def get_version(settings: SettingsDep):
    """Get the version of the application."""
    return {"version": settings.GIT_SHA}


@router.get("/health")
def get_health(service: NotificationServiceDep):
    """Healthcheck endpoint with per-channel readiness and breaker state."""
    return {
        "status": "ok",
        "channels": service.health_check(),
        "circuitBreakers": service.circuit_breaker_stats(),
    }
