"""Slot-Enumerator: alle buchbaren Meeting-Slots eines Monats in fester Reihenfolge.

Reihenfolge: Tag → Stunde → Raum. Die Folge hängt ausschließlich von den
ScheduleParameters ab (keine Systemzeit, kein Locale) und ist bei jedem
Aufruf identisch.
"""

import calendar
from datetime import date
from typing import Iterator

from config.defaults import WORKDAYS
from config.schema import ScheduleParameters
from models.timeslot import RoomBooking, TimeSlot


def iter_weekdays(year: int, month: int) -> Iterator[date]:
    """Alle Werktage (Mo–Fr) des Monats, vom 1. bis zum Monatsletzten."""
    _, last_day = calendar.monthrange(year, month)
    for day in range(1, last_day + 1):
        d = date(year, month, day)
        if d.weekday() in WORKDAYS:
            yield d


def slot_hours(params: ScheduleParameters) -> list[int]:
    """Startstunden eines Werktags: start_hour, +Dauer, ... solange das Meeting
    spätestens zu end_hour endet."""
    return list(range(
        params.start_hour,
        params.end_hour - params.meeting_duration_hours + 1,
        params.meeting_duration_hours,
    ))


def iter_time_slots(params: ScheduleParameters) -> Iterator[TimeSlot]:
    """Alle TimeSlots des Monats, jeder Tag vollständig vor dem nächsten."""
    hours = slot_hours(params)
    if not hours:
        return
    for d in iter_weekdays(params.year, params.month):
        for hour in hours:
            yield TimeSlot(date=d, start_hour=hour,
                           duration_hours=params.meeting_duration_hours)


def iter_room_bookings(params: ScheduleParameters) -> Iterator[RoomBooking]:
    """Alle Raumbuchungen des Monats (pro Slot Räume 1..room_count)."""
    for slot in iter_time_slots(params):
        for room in range(1, params.room_count + 1):
            yield RoomBooking(slot=slot, room_number=room)


def count_weekdays(year: int, month: int) -> int:
    return sum(1 for _ in iter_weekdays(year, month))


def monthly_capacity(params: ScheduleParameters) -> int:
    """Maximale Anzahl einplanbarer Mitarbeiter im Monat."""
    return (
        count_weekdays(params.year, params.month)
        * len(slot_hours(params))
        * params.room_count
        * params.employees_per_meeting
    )
