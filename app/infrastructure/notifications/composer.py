"""Message composer: personalized text with a deterministic local fallback.

The remote text generator is best effort. Any failure (missing key,
timeout, HTTP error, malformed or empty response, unexpected exception) is
absorbed here and replaced by a fixed template chosen by substring match on
the milestone label. Callers always get non-empty text back.
"""

from typing import Optional, Protocol

from infrastructure.logging import get_module_logger
from infrastructure.notifications.models import DEFAULT_USER_NAME
from infrastructure.operations import OperationResult

logger = get_module_logger()

COMPOSE_ERROR = "COMPOSE_ERROR"
ELLIPSIS = "..."


class TextGenerator(Protocol):
    """Anything that can produce a personalized message."""

    def generate(
        self, user_name: str, milestone_label: str, tone: Optional[str] = None
    ) -> OperationResult:
        """Return a result whose data is ``{"message": str}`` on success."""
        ...


def fallback_message(user_name: str, milestone_label: str) -> str:
    """Local template for a milestone. Pure; first matching rule wins."""
    name = user_name.strip() if user_name and user_name.strip() else DEFAULT_USER_NAME
    label = milestone_label or ""

    if "25%" in label:
        return f"{name}, you're 25% of the way to your hydration goal! Keep it up!"
    if "50%" in label:
        return f"{name}, halfway there! You've reached 50% of your daily water goal."
    if "75%" in label:
        return f"{name}, you're 75% done! Almost at your daily hydration goal!"
    if "100%" in label or "goal completion" in label:
        return f"Great job {name}! You've completed your daily hydration goal!"
    return f"{name}, remember to stay hydrated throughout your day!"


def cap_length(text: str, max_length: int) -> str:
    """Truncate to ``max_length`` characters, marking the cut with ``...``."""
    if len(text) <= max_length:
        return text
    if max_length <= len(ELLIPSIS):
        return text[:max_length]
    return text[: max_length - len(ELLIPSIS)].rstrip() + ELLIPSIS


class MessageComposer:
    """Turn a milestone into the text that will be sent.

    Args:
        text_generator: Remote personalization backend, or None to always
            use the local templates
        max_length: Upper bound on the returned text

    Example:
        composer = MessageComposer(GeminiClient(settings), max_length=300)
        text = composer.compose("Sam", "50% of daily goal", tone="funny")
    """

    def __init__(self, text_generator: Optional[TextGenerator], max_length: int = 300):
        if max_length < 1:
            raise ValueError("max_length must be at least 1")
        self.text_generator = text_generator
        self.max_length = max_length

    def compose(
        self, user_name: str, milestone_label: str, tone: Optional[str] = None
    ) -> str:
        """Compose the final message. Never raises and never returns ''."""
        name = user_name.strip() if user_name and user_name.strip() else DEFAULT_USER_NAME
        log = logger.bind(milestone_label=milestone_label)

        generated = self._generate(name, milestone_label, tone)
        if generated is not None:
            log.debug("personalized_message_generated", length=len(generated))
            return cap_length(generated, self.max_length)

        return cap_length(fallback_message(name, milestone_label), self.max_length)

    def _generate(
        self, user_name: str, milestone_label: str, tone: Optional[str]
    ) -> Optional[str]:
        if self.text_generator is None:
            return None

        try:
            result = self.text_generator.generate(user_name, milestone_label, tone)
        except Exception as e:
            logger.warning(
                "message_personalization_failed",
                error_code=COMPOSE_ERROR,
                error=f"{type(e).__name__}: {e}",
            )
            return None

        if not result.is_success:
            logger.info(
                "message_personalization_failed",
                error_code=COMPOSE_ERROR,
                cause=result.error_code,
                error=result.message,
            )
            return None

        text = result.data_get("message")
        if not isinstance(text, str) or not text.strip():
            logger.info(
                "message_personalization_failed",
                error_code=COMPOSE_ERROR,
                cause="EMPTY_RESPONSE",
            )
            return None
        return text.strip()
