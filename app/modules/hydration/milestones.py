"""Milestone detection for daily water intake.

Turns an intake change into the MilestoneEvents the notification trigger
consumes. Only thresholds crossed by the change produce events, so logging
more water after a milestone does not announce it again.
"""

from datetime import datetime
from typing import List, Optional

from infrastructure.notifications.models import MilestoneEvent, MilestoneKind

MILESTONE_MESSAGES = {
    25: "You've reached 25% of your daily goal!",
    50: "Halfway there! 50% of your goal complete.",
    75: "Almost there! 75% of your goal complete.",
}
ACHIEVEMENT_MESSAGE = "Congratulations! You reached your daily water goal! 💧"


def percent_of_goal(amount_ml: float, goal_ml: float) -> float:
    """Progress towards the goal, clamped to 0..100."""
    if goal_ml <= 0:
        return 0.0
    return max(0.0, min(100.0, amount_ml / goal_ml * 100))


def detect_milestones(
    user_id: str,
    previous_ml: float,
    current_ml: float,
    goal_ml: float,
    timestamp: Optional[datetime] = None,
) -> List[MilestoneEvent]:
    """Events for the thresholds crossed going from ``previous_ml`` to ``current_ml``.

    Reaching 100% yields a single ACHIEVEMENT. Otherwise only the highest
    band crossed (25, 50 or 75) yields a REMINDER.
    """
    if goal_ml <= 0:
        return []

    before = percent_of_goal(previous_ml, goal_ml)
    after = percent_of_goal(current_ml, goal_ml)
    extra = {"timestamp": timestamp} if timestamp is not None else {}

    if before < 100 <= after:
        return [
            MilestoneEvent(
                kind=MilestoneKind.ACHIEVEMENT,
                raw_text=ACHIEVEMENT_MESSAGE,
                user_id=user_id,
                threshold_percent=100,
                **extra,
            )
        ]

    crossed = [t for t in sorted(MILESTONE_MESSAGES) if before < t <= after]
    if not crossed:
        return []

    threshold = crossed[-1]
    return [
        MilestoneEvent(
            kind=MilestoneKind.REMINDER,
            raw_text=MILESTONE_MESSAGES[threshold],
            user_id=user_id,
            threshold_percent=threshold,
            **extra,
        )
    ]


def next_streak(previous_streak: int, yesterday_completed: bool) -> int:
    """Streak length after today's goal is met."""
    return previous_streak + 1 if yesterday_completed else 1


def streak_event(user_id: str, streak_days: int) -> MilestoneEvent:
    """INFO event announcing the current streak."""
    unit = "day" if streak_days == 1 else "days"
    return MilestoneEvent(
        kind=MilestoneKind.INFO,
        raw_text=f"Hydration streak: {streak_days} {unit} in a row!",
        user_id=user_id,
    )
