"""Text-Export: Meeting-Plan als einfache Liste (Terminal oder .txt-Datei).

Format:
    Dienstag, 01.10.2024 09:00–10:00
     • Raum 1: Mitarbeiter 1, Mitarbeiter 2
     • Raum 2: Mitarbeiter 3, Mitarbeiter 4
    ...
    Tage mit Meetings: 1
    Meetings gesamt: 10
"""

from pathlib import Path
from typing import Iterable

from models.events import DaySlot, RoomAssignment, ScheduleEvent, Summary
from solver.scheduler import ScheduleSolution

from export.helpers import format_attendees, format_date, format_hour_range


def render_lines(
    events: Iterable[ScheduleEvent],
    duration_hours: int = 1,
    employee_label: str = "Mitarbeiter",
    room_label: str = "Raum",
) -> list[str]:
    """Wandelt den Ereignisstrom in Textzeilen um."""
    lines: list[str] = []
    for ev in events:
        if isinstance(ev, DaySlot):
            lines.append(
                f"{format_date(ev.date, long=True)} "
                f"{format_hour_range(ev.hour, duration_hours)}"
            )
        elif isinstance(ev, RoomAssignment):
            lines.append(
                f" • {room_label} {ev.room_number}: "
                f"{format_attendees(ev.employee_ids, employee_label)}"
            )
        elif isinstance(ev, Summary):
            lines.append(f"Tage mit Meetings: {ev.total_days}")
            lines.append(f"Meetings gesamt: {ev.total_meetings}")
    return lines


def render_text(
    solution: ScheduleSolution,
    employee_label: str = "Mitarbeiter",
    room_label: str = "Raum",
) -> str:
    """Gesamter Plan als Text (eine Zeile pro Slot bzw. Raum)."""
    return "\n".join(render_lines(
        solution.events(),
        duration_hours=solution.parameters.meeting_duration_hours,
        employee_label=employee_label,
        room_label=room_label,
    ))


class TextExporter:
    """Schreibt den Meeting-Plan als UTF-8-Textdatei."""

    def __init__(self, solution: ScheduleSolution,
                 employee_label: str = "Mitarbeiter", room_label: str = "Raum"):
        self.solution = solution
        self.employee_label = employee_label
        self.room_label = room_label

    def export(self, output_path: Path) -> None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(render_text(self.solution, self.employee_label, self.room_label) + "\n")
