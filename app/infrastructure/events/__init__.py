"""Infrastructure event system - typed in-process event channels.

Usage:

    from infrastructure.events import EventChannel

    milestones: EventChannel[MilestoneEvent] = EventChannel("milestones")

    unsubscribe = milestones.subscribe(handle_milestone)

    milestones.publish(event)             # synchronous
    milestones.publish_background(event)  # thread pool, returns a Future

    unsubscribe()
    milestones.shutdown()
"""

from infrastructure.events.channel import EventChannel

__all__ = ["EventChannel"]
