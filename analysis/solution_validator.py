"""Nachträgliche Validierung eines fertigen Meeting-Plans.

Prüft die fertige Lösung auf Regelverletzungen als Sicherheitsnetz
unabhängig von der Zuweisungs-Engine (z.B. für geladene JSON-Dateien).
"""

from typing import Literal

from pydantic import BaseModel

from config.defaults import WORKDAYS
from export.helpers import format_slot
from solver.scheduler import ScheduleSolution


class ValidationViolation(BaseModel):
    """Eine einzelne Regelverletzung."""

    severity: Literal["error", "warning"]
    constraint: str      # z.B. "employee_gap"
    description: str
    entity: str          # booking_id / Mitarbeiter-ID / "stats"


class ValidationReport(BaseModel):
    """Ergebnis der Validierung."""

    violations: list[ValidationViolation]
    is_valid: bool       # True wenn keine Errors (Warnings ok)

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        errors = [v for v in self.violations if v.severity == "error"]
        warnings = [v for v in self.violations if v.severity == "warning"]

        status = (
            "[bold green]✓ VALIDE[/bold green]"
            if self.is_valid
            else "[bold red]✗ VERLETZUNGEN GEFUNDEN[/bold red]"
        )
        lines = [status, f"Fehler: {len(errors)} | Warnungen: {len(warnings)}"]
        console.print(Panel("\n".join(lines), title="Plan-Validierung", border_style="cyan"))

        if not self.violations:
            console.print("[dim]Keine Verletzungen gefunden.[/dim]")
            return

        table = Table(box=box.ROUNDED, show_lines=True)
        table.add_column("Typ", width=8)
        table.add_column("Regel", width=24)
        table.add_column("Entität", width=20)
        table.add_column("Beschreibung")

        for v in self.violations:
            color = "red" if v.severity == "error" else "yellow"
            table.add_row(
                f"[{color}]{v.severity.upper()}[/{color}]",
                v.constraint,
                v.entity,
                v.description,
            )
        console.print(table)


class RosterValidator:
    """Prüft eine fertige ScheduleSolution auf Regelverletzungen."""

    def validate(self, solution: ScheduleSolution) -> ValidationReport:
        """Führt alle Checks durch und gibt einen ValidationReport zurück."""
        violations: list[ValidationViolation] = []
        violations += self._check_calendar(solution)
        violations += self._check_order(solution)
        violations += self._check_employees(solution)
        violations += self._check_stats(solution)

        is_valid = not any(v.severity == "error" for v in violations)
        return ValidationReport(violations=violations, is_valid=is_valid)

    # ─── Kalender / Raum ──────────────────────────────────────────────────────

    def _check_calendar(self, solution: ScheduleSolution) -> list[ValidationViolation]:
        """Werktag im richtigen Monat, innerhalb der Arbeitszeit, gültiger Raum."""
        p = solution.parameters
        out: list[ValidationViolation] = []
        for a in solution.assignments:
            slot = a.booking.slot
            bid = a.booking.booking_id
            if (slot.date.year, slot.date.month) != (p.year, p.month):
                out.append(ValidationViolation(
                    severity="error", constraint="wrong_month", entity=bid,
                    description=f"{format_slot(slot)} liegt nicht in {p.label()}",
                ))
            if slot.date.weekday() not in WORKDAYS:
                out.append(ValidationViolation(
                    severity="error", constraint="weekend", entity=bid,
                    description=f"Meeting am Wochenende ({format_slot(slot)})",
                ))
            if slot.start_hour < p.start_hour or slot.start_hour + p.meeting_duration_hours > p.end_hour:
                out.append(ValidationViolation(
                    severity="error", constraint="outside_work_hours", entity=bid,
                    description=(
                        f"{slot.start_hour}:00 + {p.meeting_duration_hours}h "
                        f"außerhalb {p.start_hour}–{p.end_hour} Uhr"
                    ),
                ))
            elif (slot.start_hour - p.start_hour) % p.meeting_duration_hours:
                out.append(ValidationViolation(
                    severity="error", constraint="off_grid", entity=bid,
                    description=f"Startstunde {slot.start_hour} nicht im Raster",
                ))
            if not 1 <= a.booking.room_number <= p.room_count:
                out.append(ValidationViolation(
                    severity="error", constraint="invalid_room", entity=bid,
                    description=f"Raum {a.booking.room_number} nicht in 1..{p.room_count}",
                ))
        return out

    def _check_order(self, solution: ScheduleSolution) -> list[ValidationViolation]:
        """Buchungen streng aufsteigend (Tag → Stunde → Raum), keine doppelt."""
        out: list[ValidationViolation] = []
        prev = None
        for a in solution.assignments:
            key = (a.booking.slot.date, a.booking.slot.start_hour, a.booking.room_number)
            if prev is not None and key <= prev:
                out.append(ValidationViolation(
                    severity="error", constraint="booking_order",
                    entity=a.booking.booking_id,
                    description="Buchung nicht in Kalender-Reihenfolge oder doppelt",
                ))
            prev = key
        return out

    # ─── Mitarbeiter ──────────────────────────────────────────────────────────

    def _check_employees(self, solution: ScheduleSolution) -> list[ValidationViolation]:
        """IDs lückenlos ab 1, keine Wiederholung, Kapazität eingehalten."""
        p = solution.parameters
        out: list[ValidationViolation] = []
        expected = 1
        for idx, a in enumerate(solution.assignments):
            bid = a.booking.booking_id
            if a.size > p.employees_per_meeting:
                out.append(ValidationViolation(
                    severity="error", constraint="capacity_exceeded", entity=bid,
                    description=f"{a.size} Teilnehmer > {p.employees_per_meeting}",
                ))
            is_last = idx == len(solution.assignments) - 1
            if a.size < p.employees_per_meeting and not is_last:
                out.append(ValidationViolation(
                    severity="error", constraint="partial_not_last", entity=bid,
                    description="Nur das letzte Meeting darf unvollständig sein",
                ))
            if a.first_employee != expected:
                out.append(ValidationViolation(
                    severity="error", constraint="employee_gap", entity=bid,
                    description=f"Erwartet Mitarbeiter {expected}, gefunden {a.first_employee}",
                ))
            expected = a.last_employee + 1

        if expected - 1 > p.total_employees:
            out.append(ValidationViolation(
                severity="error", constraint="too_many_employees", entity="stats",
                description=f"{expected - 1} IDs vergeben, nur {p.total_employees} Mitarbeiter",
            ))
        if solution.next_employee != expected:
            out.append(ValidationViolation(
                severity="error", constraint="cursor_mismatch", entity="stats",
                description=f"next_employee={solution.next_employee}, erwartet {expected}",
            ))
        unscheduled = p.total_employees - (expected - 1)
        if unscheduled > 0:
            out.append(ValidationViolation(
                severity="warning", constraint="unscheduled_employees", entity="stats",
                description=f"{unscheduled} Mitarbeiter ohne Meeting in {p.label()}",
            ))
        return out

    # ─── Kennzahlen ───────────────────────────────────────────────────────────

    def _check_stats(self, solution: ScheduleSolution) -> list[ValidationViolation]:
        out: list[ValidationViolation] = []
        meetings = len(solution.assignments)
        days = len({a.booking.slot.date for a in solution.assignments})
        if solution.stats.total_meetings != meetings:
            out.append(ValidationViolation(
                severity="error", constraint="stats_meetings", entity="stats",
                description=f"total_meetings={solution.stats.total_meetings}, gezählt {meetings}",
            ))
        if solution.stats.total_days != days:
            out.append(ValidationViolation(
                severity="error", constraint="stats_days", entity="stats",
                description=f"total_days={solution.stats.total_days}, gezählt {days}",
            ))
        return out
