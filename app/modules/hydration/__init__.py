"""Water-intake milestone detection."""

from modules.hydration.milestones import (
    ACHIEVEMENT_MESSAGE,
    MILESTONE_MESSAGES,
    detect_milestones,
    next_streak,
    percent_of_goal,
    streak_event,
)

__all__ = [
    "ACHIEVEMENT_MESSAGE",
    "MILESTONE_MESSAGES",
    "detect_milestones",
    "next_streak",
    "percent_of_goal",
    "streak_event",
]
