"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
"""

from functools import lru_cache

from infrastructure.configuration import Settings
from infrastructure.notifications.service import NotificationService
from infrastructure.persistence import InMemoryKeyValueStore, KeyValueStore
from modules.preferences import InMemoryPreferenceStore, PreferenceStore


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    This is the single source of truth for settings across the entire application.
    The @lru_cache decorator ensures only ONE instance is created per process,
    even if called from multiple packages.

    Application code should use the DI type alias for testability:
        from infrastructure.services import SettingsDep
        @router.get("/version")
        def version(settings: SettingsDep):
            return {"version": settings.GIT_SHA}

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_preference_store() -> PreferenceStore:
    """
    Get application-scoped preference store singleton.

    Returns:
        PreferenceStore: Process-local store of reminder preferences.
    """
    return InMemoryPreferenceStore()


@lru_cache
def get_history_store() -> KeyValueStore:
    """
    Get application-scoped key-value store backing the message center.

    Returns:
        KeyValueStore: Process-local store.
    """
    return InMemoryKeyValueStore()


@lru_cache
def get_notification_service() -> NotificationService:
    """
    Get application-scoped notification service singleton.

    Builds the provider clients, channels, dispatcher and trigger from
    settings. Channels whose credentials are absent stay registered and
    report CONFIG_ERROR when used.

    Returns:
        NotificationService: Cached, fully wired notification pipeline.

    Usage:
        @router.post("/reminders/send")
        def send(service: NotificationServiceDep, body: SendReminderRequest):
            pref = service.get_preference(body.user_id)
            return service.send_reminder(pref, body.message)
    """
    return NotificationService(
        settings=get_settings(),
        preference_store=get_preference_store(),
        history_store=get_history_store(),
    )
