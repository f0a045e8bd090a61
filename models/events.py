"""Ereignisstrom des Planungslaufs (Pydantic v2).

Reihenfolge: DaySlot, danach die RoomAssignments dieses Slots, ...,
am Ende genau ein Summary.
"""

from datetime import date
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class ScheduleStats(BaseModel):
    """Kennzahlen eines Planungslaufs."""

    total_days: int = 0       # Werktage mit mindestens einem Meeting
    total_meetings: int = 0   # Raumbuchungen mit mindestens einem Teilnehmer


class DaySlot(BaseModel):
    """Beginn eines Zeitslots an einem Werktag."""

    kind: Literal["day_slot"] = "day_slot"
    date: date
    hour: int


class RoomAssignment(BaseModel):
    """Teilnehmer eines Raums im zuletzt gemeldeten DaySlot."""

    kind: Literal["room_assignment"] = "room_assignment"
    room_number: int
    employee_ids: list[int]


class Summary(BaseModel):
    """Abschluss des Ereignisstroms."""

    kind: Literal["summary"] = "summary"
    total_days: int
    total_meetings: int

    @property
    def stats(self) -> ScheduleStats:
        return ScheduleStats(total_days=self.total_days, total_meetings=self.total_meetings)


ScheduleEvent = Annotated[
    Union[DaySlot, RoomAssignment, Summary],
    Field(discriminator="kind"),
]
