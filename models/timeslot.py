"""Datenmodell für einen Meeting-Zeitslot im Monatskalender."""

from dataclasses import dataclass
from datetime import date

from config.defaults import WEEKDAY_SHORT


@dataclass(frozen=True)
class TimeSlot:
    """Repräsentiert einen buchbaren Zeitslot an einem Werktag.

    Kombination aus Datum und Startstunde.
    Immutable (frozen=True) damit es als Dict-Key / Set-Element nutzbar ist.
    """

    # Kalenderdatum (immer Mo–Fr)
    date: date
    # Startstunde (volle Stunde, 0–23)
    start_hour: int
    # Dauer in Stunden
    duration_hours: int = 1

    @property
    def end_hour(self) -> int:
        return self.start_hour + self.duration_hours

    @property
    def slot_id(self) -> str:
        """Eindeutiger String-Bezeichner (z.B. "2024-10-01_09")."""
        return f"{self.date.isoformat()}_{self.start_hour:02d}"

    @property
    def day_name(self) -> str:
        """Abgekürzter Tagesname."""
        return WEEKDAY_SHORT[self.date.weekday()]

    def __repr__(self) -> str:
        return f"TimeSlot({self.day_name} {self.date.isoformat()}, {self.start_hour:02d}:00)"

    def __str__(self) -> str:
        return f"{self.day_name} {self.date.strftime('%d.%m.%Y')} {self.start_hour:02d}:00"


@dataclass(frozen=True)
class RoomBooking:
    """Ein Besprechungsraum in einem Zeitslot: die Einheit, die Teilnehmer erhält."""

    slot: TimeSlot
    # Raumnummer, 1-basiert
    room_number: int

    @property
    def booking_id(self) -> str:
        """Eindeutiger Bezeichner (z.B. "2024-10-01_09_R2")."""
        return f"{self.slot.slot_id}_R{self.room_number}"

    def __str__(self) -> str:
        return f"{self.slot} Raum {self.room_number}"
