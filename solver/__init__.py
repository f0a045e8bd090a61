"""Planungskern: Slot-Enumerator und Zuweisungs-Engine."""

from .enumerator import iter_weekdays, iter_time_slots, iter_room_bookings, monthly_capacity
from .scheduler import (
    EmployeeCursor,
    MeetingScheduler,
    ScheduleSolution,
    assign_employees,
    iter_events,
)

__all__ = [
    "iter_weekdays",
    "iter_time_slots",
    "iter_room_bookings",
    "monthly_capacity",
    "EmployeeCursor",
    "MeetingScheduler",
    "ScheduleSolution",
    "assign_employees",
    "iter_events",
]
