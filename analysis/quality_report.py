"""Auslastungsbericht für fertige Meeting-Pläne.

Analysiert Raum- und Tagesauslastung und berechnet
zusammenfassende Metriken.
"""

from collections import Counter

from pydantic import BaseModel

from solver.enumerator import count_weekdays, monthly_capacity
from solver.scheduler import ScheduleSolution
from export.helpers import format_date


# ─── Metriken-Modelle ─────────────────────────────────────────────────────────

class DayMetrics(BaseModel):
    """Metriken für einen einzelnen Meeting-Tag."""

    date: str
    meetings: int
    employees: int
    slots_used: int


class RosterQualityReport(BaseModel):
    """Vollständiger Auslastungsbericht für eine ScheduleSolution."""

    day_metrics: list[DayMetrics]
    meetings_per_room: dict[int, int]
    scheduled_employees: int
    unscheduled_employees: int
    monthly_capacity: int
    seat_utilisation: float        # eingeplant / Kapazität (0.0–1.0)
    average_fill: float            # Teilnehmer pro Meeting / employees_per_meeting
    has_partial_meeting: bool
    weekdays_in_month: int
    days_used_ratio: float         # Meeting-Tage / Werktage
    status: str

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        lines = [
            f"Status: [bold]{self.status}[/bold]",
            f"Eingeplant: {self.scheduled_employees} | "
            f"Ohne Meeting: {self.unscheduled_employees}",
            f"Platz-Auslastung: {self.seat_utilisation:.1%} "
            f"(Kapazität {self.monthly_capacity})",
            f"Ø Belegung: {self.average_fill:.1%}"
            + (" | [yellow]letztes Meeting unvollständig[/yellow]"
               if self.has_partial_meeting else ""),
            f"Meeting-Tage: {len(self.day_metrics)} von {self.weekdays_in_month} Werktagen",
        ]
        console.print(Panel("\n".join(lines), title="Auslastung", border_style="cyan"))

        if not self.day_metrics:
            return

        table = Table(title="Tage", box=box.ROUNDED)
        table.add_column("Datum")
        table.add_column("Meetings", justify="right")
        table.add_column("Mitarbeiter", justify="right")
        table.add_column("Slots", justify="right")
        for m in self.day_metrics:
            table.add_row(m.date, str(m.meetings), str(m.employees), str(m.slots_used))
        console.print(table)

        rooms = Table(title="Räume", box=box.ROUNDED)
        rooms.add_column("Raum", justify="right")
        rooms.add_column("Meetings", justify="right")
        for room, count in sorted(self.meetings_per_room.items()):
            rooms.add_row(str(room), str(count))
        console.print(rooms)


# ─── Analyzer ─────────────────────────────────────────────────────────────────

class RosterAnalyzer:
    """Berechnet Auslastungsmetriken für eine fertige ScheduleSolution."""

    def analyze(self, solution: ScheduleSolution) -> RosterQualityReport:
        """Hauptmethode: berechnet alle Metriken und gibt einen Report zurück."""
        p = solution.parameters
        capacity = monthly_capacity(p)
        scheduled = solution.scheduled_employees
        meetings = len(solution.assignments)

        day_metrics = []
        for day in solution.meeting_days():
            day_assignments = solution.get_day_schedule(day)
            day_metrics.append(DayMetrics(
                date=format_date(day),
                meetings=len(day_assignments),
                employees=sum(a.size for a in day_assignments),
                slots_used=len({a.booking.slot for a in day_assignments}),
            ))

        per_room = Counter(a.booking.room_number for a in solution.assignments)
        meetings_per_room = {r: per_room.get(r, 0) for r in range(1, p.room_count + 1)}

        weekdays = count_weekdays(p.year, p.month)
        average_fill = (
            scheduled / (meetings * p.employees_per_meeting) if meetings else 0.0
        )
        has_partial = bool(solution.assignments) and (
            solution.assignments[-1].size < p.employees_per_meeting
        )

        return RosterQualityReport(
            day_metrics=day_metrics,
            meetings_per_room=meetings_per_room,
            scheduled_employees=scheduled,
            unscheduled_employees=solution.unscheduled_employees,
            monthly_capacity=capacity,
            seat_utilisation=scheduled / capacity if capacity else 0.0,
            average_fill=average_fill,
            has_partial_meeting=has_partial,
            weekdays_in_month=weekdays,
            days_used_ratio=len(day_metrics) / weekdays if weekdays else 0.0,
            status=solution.status,
        )
