"""Zuweisungs-Engine: verteilt Mitarbeiter der Reihe nach auf die Raumbuchungen.

Ablauf:
  - Buchungen kommen in fester Reihenfolge aus dem Enumerator (Tag → Stunde → Raum)
  - Ein expliziter Mitarbeiter-Zähler (EmployeeCursor) wird durchgereicht
  - Pro Buchung werden bis zu employees_per_meeting fortlaufende IDs gezogen
  - Sobald alle Mitarbeiter vergeben sind, endet der gesamte Lauf sofort
    (vor dem nächsten Tag, Slot oder Raum; kein leeres Meeting, kein leerer Tag)
  - Das letzte Meeting kann weniger Teilnehmer haben (Rest wird nie umverteilt)
"""

import logging
from dataclasses import dataclass, replace
from datetime import date
from pathlib import Path
from typing import Iterable, Iterator, Literal, Optional

from pydantic import BaseModel, ValidationError

from config.schema import ScheduleParameters
from models.assignment import EmployeeAssignment
from models.events import DaySlot, RoomAssignment, ScheduleEvent, ScheduleStats, Summary
from models.timeslot import TimeSlot
from solver.enumerator import iter_room_bookings, monthly_capacity

logger = logging.getLogger(__name__)


# ─── Mitarbeiter-Zähler ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class EmployeeCursor:
    """Nächste zu vergebende Mitarbeiter-ID und Obergrenze.

    Immutable: draw() gibt einen neuen Zähler zurück.
    """

    position: int
    limit: int

    @classmethod
    def start(cls, params: ScheduleParameters) -> "EmployeeCursor":
        return cls(position=1, limit=params.total_employees)

    @property
    def exhausted(self) -> bool:
        return self.position > self.limit

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.position + 1)

    def draw(self, count: int) -> tuple[list[int], "EmployeeCursor"]:
        """Zieht bis zu count fortlaufende IDs ab der aktuellen Position."""
        run = min(count, self.remaining)
        ids = list(range(self.position, self.position + run))
        return ids, replace(self, position=self.position + run)


# ─── Ergebnis-Modell ──────────────────────────────────────────────────────────

class ScheduleSolution(BaseModel):
    """Vollständiges Ergebnis eines Planungslaufs."""

    parameters: ScheduleParameters
    assignments: list[EmployeeAssignment]
    stats: ScheduleStats
    next_employee: int                   # Zählerstand nach dem Lauf
    status: Literal["complete", "partial", "empty"]

    @property
    def scheduled_employees(self) -> int:
        return self.next_employee - 1

    @property
    def unscheduled_employees(self) -> int:
        return max(0, self.parameters.total_employees - self.scheduled_employees)

    def meeting_days(self) -> list[date]:
        """Alle Tage mit mindestens einem Meeting (aufsteigend)."""
        days: list[date] = []
        for a in self.assignments:
            d = a.booking.slot.date
            if not days or days[-1] != d:
                days.append(d)
        return days

    def get_day_schedule(self, day: date) -> list[EmployeeAssignment]:
        """Alle Meetings eines Tages."""
        return [a for a in self.assignments if a.booking.slot.date == day]

    def find_employee(self, employee_id: int) -> Optional[EmployeeAssignment]:
        """Meeting eines Mitarbeiters oder None, falls nicht eingeplant."""
        for a in self.assignments:
            if a.first_employee <= employee_id <= a.last_employee:
                return a
        return None

    def events(self) -> Iterator[ScheduleEvent]:
        """Ereignisstrom aus den gespeicherten Zuweisungen (ohne Neuberechnung)."""
        return events_from_assignments(self.assignments, self.stats)

    def save_json(self, path: Path) -> None:
        """Speichert die Lösung als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.model_dump_json(indent=2))

    @classmethod
    def load_json(cls, path: Path) -> "ScheduleSolution":
        """Lädt eine gespeicherte Lösung aus JSON.

        Raises:
            FileNotFoundError: Datei existiert nicht.
            ValueError: kein gültiges JSON oder verletzte Modell-Regeln
                (z.B. Lücke in employee_ids, ungültige Parameter).
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Lösung nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            raw = f.read()
        try:
            return cls.model_validate_json(raw)
        except ValidationError as e:
            problems = "\n".join(
                f"  • {'.'.join(str(part) for part in err['loc']) or 'Datei'}: {err['msg']}"
                for err in e.errors()[:5]
            )
            raise ValueError(
                f"Gespeicherter Plan ungültig: {path}\n"
                f"{e.error_count()} Fehler, z.B.:\n{problems}"
            ) from e


# ─── Engine ───────────────────────────────────────────────────────────────────

def assign_employees(
    params: ScheduleParameters,
    cursor: Optional[EmployeeCursor] = None,
) -> Iterator[EmployeeAssignment]:
    """Verteilt Mitarbeiter auf die Buchungen des Monats (lazy).

    Der Abbruch wird vor jeder Buchung geprüft, deshalb wird der Enumerator
    nie weiter als bis zur letzten befüllten Buchung durchlaufen.
    """
    cursor = cursor or EmployeeCursor.start(params)
    for booking in iter_room_bookings(params):
        if cursor.exhausted:
            return
        ids, cursor = cursor.draw(params.employees_per_meeting)
        yield EmployeeAssignment(booking=booking, employee_ids=ids)


def events_from_assignments(
    assignments: Iterable[EmployeeAssignment],
    stats: Optional[ScheduleStats] = None,
) -> Iterator[ScheduleEvent]:
    """Übersetzt Zuweisungen in DaySlot/RoomAssignment/Summary-Ereignisse.

    Ohne vorgegebene stats werden die Kennzahlen beim Durchlauf gezählt.
    """
    current_slot: Optional[TimeSlot] = None
    current_day: Optional[date] = None
    total_days = 0
    total_meetings = 0
    for a in assignments:
        slot = a.booking.slot
        if slot != current_slot:
            current_slot = slot
            if slot.date != current_day:
                current_day = slot.date
                total_days += 1
            yield DaySlot(date=slot.date, hour=slot.start_hour)
        total_meetings += 1
        yield RoomAssignment(room_number=a.booking.room_number,
                             employee_ids=list(a.employee_ids))
    if stats is None:
        stats = ScheduleStats(total_days=total_days, total_meetings=total_meetings)
    yield Summary(total_days=stats.total_days, total_meetings=stats.total_meetings)


def iter_events(
    params: ScheduleParameters,
    cursor: Optional[EmployeeCursor] = None,
) -> Iterator[ScheduleEvent]:
    """Streaming-Variante des Planungslaufs: DaySlot, RoomAssignment, ..., Summary."""
    return events_from_assignments(assign_employees(params, cursor))


class MeetingScheduler:
    """Berechnet den monatlichen Meeting-Plan.

    Verwendung:
        scheduler = MeetingScheduler(params)
        solution = scheduler.solve()
    """

    def __init__(self, params: ScheduleParameters) -> None:
        self.params = params

    def solve(self, cursor: Optional[EmployeeCursor] = None) -> ScheduleSolution:
        """Führt den Lauf vollständig aus und gibt das Ergebnis zurück."""
        p = self.params
        cursor = cursor or EmployeeCursor.start(p)
        assignments = list(assign_employees(p, cursor))

        days = {a.booking.slot.date for a in assignments}
        stats = ScheduleStats(total_days=len(days), total_meetings=len(assignments))
        next_employee = assignments[-1].last_employee + 1 if assignments else cursor.position

        if not assignments:
            status = "empty"
            logger.warning(
                f"Keine Meetings möglich für {p.label()}: "
                f"Arbeitszeit {p.start_hour}–{p.end_hour} Uhr, "
                f"Dauer {p.meeting_duration_hours}h"
            )
        elif next_employee <= p.total_employees:
            status = "partial"
            logger.warning(
                f"Monat {p.label()} reicht nicht aus: "
                f"{p.total_employees - next_employee + 1} von {p.total_employees} "
                f"Mitarbeitern ohne Meeting (Kapazität {monthly_capacity(p)})"
            )
        else:
            status = "complete"

        logger.info(
            f"Plan {p.label()}: {stats.total_meetings} Meetings "
            f"an {stats.total_days} Tagen, Status {status}"
        )
        return ScheduleSolution(
            parameters=p,
            assignments=assignments,
            stats=stats,
            next_employee=next_employee,
            status=status,
        )
