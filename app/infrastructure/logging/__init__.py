"""Structured logging for Hydration Notify (structlog).

    from infrastructure.logging import get_module_logger, bind_request_context

    logger = get_module_logger()
    with bind_request_context(user_id="user-1", event_id=str(event.event_id)):
        logger.info("milestone_received")

Every record passes through credential redaction (``mask_sensitive_data``)
and contact masking (``mask_contact_details``) before it is rendered.
"""

from infrastructure.logging.setup import configure_logging, get_module_logger
from infrastructure.logging.context import (
    bind_request_context,
    clear_request_context,
    get_correlation_id,
)
from infrastructure.logging.formatters import (
    SENSITIVE_PATTERNS,
    add_app_info,
    mask_contact,
    mask_contact_details,
    mask_sensitive_data,
    truncate_large_values,
)

__all__ = [
    "configure_logging",
    "get_module_logger",
    "bind_request_context",
    "clear_request_context",
    "get_correlation_id",
    "SENSITIVE_PATTERNS",
    "add_app_info",
    "mask_contact",
    "mask_contact_details",
    "mask_sensitive_data",
    "truncate_large_values",
]
