"""Gemeinsamer Renderer für die Terminal-Anzeige des Meeting-Plans.

Wird von cmd_schedule (Format "table") verwendet.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from solver.scheduler import ScheduleSolution


ROSTER_COLUMNS = ["Datum", "Zeit", "Raum", "Teilnehmer", "Anzahl"]


def render_roster_rows(solution: "ScheduleSolution") -> list[list[str]]:
    """Gibt Tabellenzeilen für den Monatsplan zurück.

    Jede Zeile: [Datum, Zeit, Raum, Teilnehmer-IDs, Anzahl]
    Datum und Zeit stehen nur in der ersten Zeile eines Slots.
    """
    from export.helpers import format_date, format_hour_range, format_id_range

    rows: list[list[str]] = []
    last_slot = None
    capacity = solution.parameters.employees_per_meeting
    for a in solution.assignments:
        slot = a.booking.slot
        if slot != last_slot:
            day_cell = format_date(slot.date)
            time_cell = format_hour_range(slot.start_hour, slot.duration_hours)
            last_slot = slot
        else:
            day_cell = ""
            time_cell = ""
        count = f"{a.size}/{capacity}"
        rows.append([day_cell, time_cell, str(a.booking.room_number),
                     format_id_range(a.employee_ids), count])
    return rows
