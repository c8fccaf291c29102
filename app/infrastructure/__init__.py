"""Infrastructure modules for the Hydration Notify service.

Centralized infrastructure components:
- configuration: Settings management (Settings, RetrySettings)
- logging: Structured logging (configure_logging, get_module_logger)
- clients: Provider clients (Twilio, SendGrid, Gemini)
- events: Typed in-process event channels
- idempotency: Idempotency cache and key builder
- notifications: Composer, channels, fallback dispatcher and trigger
- operations: Operation results and error classification
- persistence: Key-value storage
- resilience: Circuit breakers and in-line retry
- services: Dependency injection services (SettingsDep, NotificationServiceDep, get_settings)
"""

# Operations
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
]
