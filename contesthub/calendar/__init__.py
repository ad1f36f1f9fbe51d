"""Calendar projection of contest start and deadline days."""

from contesthub.calendar.projector import (
    CalendarEvent,
    EventBadge,
    EventKind,
    event_badge,
    month_grid,
    project_month,
    shift_month,
    todays_deadlines,
    upcoming_deadlines,
)

__all__ = [
    "CalendarEvent",
    "EventBadge",
    "EventKind",
    "event_badge",
    "month_grid",
    "project_month",
    "shift_month",
    "todays_deadlines",
    "upcoming_deadlines",
]
