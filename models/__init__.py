from models.timeslot import TimeSlot, RoomBooking
from models.assignment import EmployeeAssignment
from models.events import (
    DaySlot,
    RoomAssignment,
    ScheduleEvent,
    ScheduleStats,
    Summary,
)

__all__ = [
    "TimeSlot",
    "RoomBooking",
    "EmployeeAssignment",
    "DaySlot",
    "RoomAssignment",
    "ScheduleEvent",
    "ScheduleStats",
    "Summary",
]
