"""Excel-Export für den Meeting-Plan (openpyxl)."""

from pathlib import Path

from solver.scheduler import ScheduleSolution

from export.helpers import (
    COLORS, fill_color, format_attendees, format_date, format_hour_range,
    month_title, today_str,
)


class ExcelExporter:
    """Exportiert eine ScheduleSolution in eine Excel-Datei mit 3 Sheets.

    Übersicht: Parameter und Kennzahlen
    Termine:   eine Zeile pro Raumbuchung
    Mitarbeiter: eine Zeile pro Mitarbeiter (Termin-Nachschlag)
    """

    # Spaltenbreiten (Excel-Einheiten)
    COL_DATE_W  = 16
    COL_TIME_W  = 13
    COL_ROOM_W  = 7
    COL_NAMES_W = 60

    # Zeilenhöhen (Punkte)
    ROW_HEADER_H = 22

    def __init__(self, solution: ScheduleSolution, company_name: str = "",
                 employee_label: str = "Mitarbeiter"):
        self.solution = solution
        self.params = solution.parameters
        self.company_name = company_name
        self.employee_label = employee_label

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, output_path: Path) -> None:
        """Erstellt die Excel-Datei mit allen Sheets."""
        from openpyxl import Workbook
        wb = Workbook()
        wb.remove(wb.active)   # Leeres Standard-Sheet entfernen

        self._sheet_uebersicht(wb)
        self._sheet_termine(wb)
        self._sheet_mitarbeiter(wb)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)

    # ─── Style-Helpers ────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _center_align(self, wrap: bool = True):
        from openpyxl.styles import Alignment
        return Alignment(wrap_text=wrap, horizontal="center", vertical="center")

    def _thin_border(self):
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        return Border(left=s, right=s, top=s, bottom=s)

    def _write_header_row(self, ws, headers: list[str], row: int = 1) -> None:
        """Schreibt eine Kopfzeile mit weißer Schrift auf blauem Grund."""
        from openpyxl.styles import Font
        fill = self._fill(COLORS["header"])
        border = self._thin_border()
        for col, text in enumerate(headers, 1):
            cell = ws.cell(row=row, column=col, value=text)
            cell.fill = fill
            cell.font = Font(bold=True, color="FFFFFF", size=10)
            cell.alignment = self._center_align(wrap=False)
            cell.border = border
        ws.row_dimensions[row].height = self.ROW_HEADER_H

    # ─── Sheet: Übersicht ─────────────────────────────────────────────────────

    def _sheet_uebersicht(self, wb) -> None:
        from openpyxl.styles import Font
        ws = wb.create_sheet(title="Übersicht", index=0)
        p = self.params
        s = self.solution

        row = 1
        title = f"Meeting-Plan {month_title(p)}"
        if self.company_name:
            title = f"{self.company_name} – {title}"
        ws.cell(row=row, column=1, value=title).font = Font(bold=True, size=14)
        row += 1
        ws.cell(row=row, column=1, value=f"Erstellt: {today_str()}")
        ws.cell(row=row, column=2, value=f"Status: {s.status}")
        row += 2

        self._write_header_row(ws, ["Parameter", "Wert"], row=row)
        row += 1
        border = self._thin_border()
        entries = [
            ("Mitarbeiter", p.total_employees),
            ("Pro Meeting", p.employees_per_meeting),
            ("Räume", p.room_count),
            ("Meeting-Dauer (h)", p.meeting_duration_hours),
            ("Arbeitsbeginn", f"{p.start_hour:02d}:00"),
            ("Arbeitsende", f"{p.end_hour:02d}:00"),
            ("Tage mit Meetings", s.stats.total_days),
            ("Meetings gesamt", s.stats.total_meetings),
            ("Eingeplant", s.scheduled_employees),
            ("Nicht eingeplant", s.unscheduled_employees),
        ]
        for label, value in entries:
            ws.cell(row=row, column=1, value=label).border = border
            ws.cell(row=row, column=2, value=value).border = border
            row += 1

        ws.column_dimensions["A"].width = 22
        ws.column_dimensions["B"].width = 40

    # ─── Sheet: Termine ───────────────────────────────────────────────────────

    def _sheet_termine(self, wb) -> None:
        from openpyxl.styles import Font
        ws = wb.create_sheet(title="Termine")
        self._write_header_row(ws, ["Datum", "Zeit", "Raum", "Anzahl", "Teilnehmer"])
        ws.column_dimensions["A"].width = self.COL_DATE_W
        ws.column_dimensions["B"].width = self.COL_TIME_W
        ws.column_dimensions["C"].width = self.COL_ROOM_W
        ws.column_dimensions["D"].width = self.COL_ROOM_W
        ws.column_dimensions["E"].width = self.COL_NAMES_W

        border = self._thin_border()
        capacity = self.params.employees_per_meeting
        for row, a in enumerate(self.solution.assignments, start=2):
            slot = a.booking.slot
            values = [
                format_date(slot.date),
                format_hour_range(slot.start_hour, slot.duration_hours),
                a.booking.room_number,
                a.size,
                format_attendees(a.employee_ids, self.employee_label),
            ]
            fill = self._fill(fill_color(a.size, capacity))
            for col, value in enumerate(values, 1):
                c = ws.cell(row=row, column=col, value=value)
                c.border = border
                c.font = Font(size=9)
                if col == 4:
                    c.fill = fill
        ws.freeze_panes = "A2"

    # ─── Sheet: Mitarbeiter ───────────────────────────────────────────────────

    def _sheet_mitarbeiter(self, wb) -> None:
        ws = wb.create_sheet(title="Mitarbeiter")
        self._write_header_row(ws, [self.employee_label, "Datum", "Zeit", "Raum"])
        ws.column_dimensions["A"].width = 14
        ws.column_dimensions["B"].width = self.COL_DATE_W
        ws.column_dimensions["C"].width = self.COL_TIME_W
        ws.column_dimensions["D"].width = self.COL_ROOM_W

        row = 2
        for a in self.solution.assignments:
            slot = a.booking.slot
            for emp in a.employee_ids:
                ws.cell(row=row, column=1, value=emp)
                ws.cell(row=row, column=2, value=format_date(slot.date))
                ws.cell(row=row, column=3,
                        value=format_hour_range(slot.start_hour, slot.duration_hours))
                ws.cell(row=row, column=4, value=a.booking.room_number)
                row += 1
        # Nicht eingeplante Mitarbeiter am Ende
        for emp in range(self.solution.next_employee, self.params.total_employees + 1):
            ws.cell(row=row, column=1, value=emp)
            ws.cell(row=row, column=2, value="nicht eingeplant")
            row += 1
        ws.freeze_panes = "A2"
