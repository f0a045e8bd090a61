"""PDF-Export für den Meeting-Plan (fpdf2)."""

from pathlib import Path

from solver.scheduler import ScheduleSolution

from export.helpers import (
    COLORS, hex_to_rgb, fill_color, format_attendees, format_date,
    format_hour_range, month_title, today_str,
)


def _pdf_safe(text: str) -> str:
    """Ersetzt nicht-latin-1-fähige Zeichen für fpdf2-Built-in-Fonts.

    Striche und Aufzählungspunkte bekommen ein lesbares Ersatzzeichen,
    alles andere außerhalb von latin-1 wird zu "?".
    """
    text = (
        text
        .replace("—", " - ")   # em dash —
        .replace("–", "-")      # en dash –
        .replace("•", "-")      # bullet •
    )
    return text.encode("latin-1", "replace").decode("latin-1")


# ─── A4-Hochformat-Dimensionen ────────────────────────────────────────────────
# Portrait A4: 210 × 297 mm
# Nutzbare Breite (Margin 10 links+rechts): 190 mm
# Spalten: Zeit(26) + Raum(14) + Anzahl(16) + Teilnehmer(134) = 190 mm ✓

_COLS = {
    "zeit":   26,
    "raum":   14,
    "anzahl": 16,
    "names":  134,
}
_ROW_DAY_H     = 7    # mm
_ROW_H         = 6    # mm
_FONT_HEADER   = 9    # pt
_FONT_CONTENT  = 8    # pt


class _RosterPdf:
    """Interner Wrapper um fpdf.FPDF für Meeting-Plan-Seiten."""

    def __init__(self, title: str):
        from fpdf import FPDF

        class _Pdf(FPDF):
            def __init__(inner, t):
                super().__init__(orientation="P", unit="mm", format="A4")
                inner._title = t
                inner.alias_nb_pages()
                inner.set_auto_page_break(auto=True, margin=18)
                inner.set_margins(left=10, top=22, right=10)

            def header(inner):
                inner.set_font("Helvetica", "B", 11)
                inner.set_xy(10, 8)
                inner.cell(0, 7, _pdf_safe(inner._title), border=0, align="L")
                inner.ln(0)
                inner.set_draw_color(150, 150, 150)
                inner.line(10, 18, inner.w - 10, 18)
                inner.set_y(22)

            def footer(inner):
                inner.set_y(-14)
                inner.set_font("Helvetica", "I", 7)
                inner.cell(
                    0, 8,
                    f"{today_str()}  |  Seite {inner.page_no()}/{{nb}}",
                    border=0, align="C",
                )

        self._pdf = _Pdf(title)

    @property
    def pdf(self):
        return self._pdf

    def add_page(self) -> None:
        self._pdf.add_page()

    def save(self, path: Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self._pdf.output(str(path))

    # ─── Zeilen ───────────────────────────────────────────────────────────────

    def draw_row(self, cells: list[tuple[str, float]], h: float,
                 bg_hex: str | None = None, bold: bool = False,
                 font_size: int = _FONT_CONTENT,
                 text_color: tuple[int, int, int] = (0, 0, 0)) -> None:
        """Zeichnet eine Tabellenzeile aus (Text, Breite)-Paaren."""
        pdf = self._pdf
        if pdf.will_page_break(h):
            pdf.add_page()
        pdf.set_font("Helvetica", "B" if bold else "", font_size)
        pdf.set_text_color(*text_color)
        pdf.set_draw_color(180, 180, 180)
        fill = bg_hex is not None
        if fill:
            pdf.set_fill_color(*hex_to_rgb(bg_hex))
        for text, w in cells:
            pdf.cell(w, h, _pdf_safe(text), border=1, align="L", fill=fill)
        pdf.ln(h)
        pdf.set_text_color(0, 0, 0)   # Reset


class PdfExporter:
    """Exportiert eine ScheduleSolution als PDF-Liste (gruppiert nach Tag)."""

    def __init__(self, solution: ScheduleSolution, company_name: str = "",
                 employee_label: str = "Mitarbeiter"):
        self.solution = solution
        self.params = solution.parameters
        self.company_name = company_name
        self.employee_label = employee_label
        self._total_w = sum(_COLS.values())

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, output_path: Path) -> None:
        """Erzeugt die PDF mit allen Meeting-Tagen und einer Zusammenfassung."""
        title = f"Meeting-Plan {month_title(self.params)}"
        if self.company_name:
            title = f"{self.company_name} - {title}"
        doc = _RosterPdf(title)
        doc.add_page()

        header = [("Zeit", _COLS["zeit"]), ("Raum", _COLS["raum"]),
                  ("Anzahl", _COLS["anzahl"]), ("Teilnehmer", _COLS["names"])]
        capacity = self.params.employees_per_meeting

        for day in self.solution.meeting_days():
            doc.draw_row([(format_date(day, long=True), self._total_w)],
                         _ROW_DAY_H, bg_hex=COLORS["day"], bold=True,
                         font_size=_FONT_HEADER)
            doc.draw_row(header, _ROW_H, bg_hex=COLORS["header"], bold=True,
                         text_color=(255, 255, 255))
            for a in self.solution.get_day_schedule(day):
                slot = a.booking.slot
                names = format_attendees(a.employee_ids, self.employee_label)
                doc.draw_row([
                    (format_hour_range(slot.start_hour, slot.duration_hours), _COLS["zeit"]),
                    (str(a.booking.room_number), _COLS["raum"]),
                    (f"{a.size}/{capacity}", _COLS["anzahl"]),
                    (self._truncate(names, _COLS["names"], doc), _COLS["names"]),
                ], _ROW_H, bg_hex=fill_color(a.size, capacity))

        self._draw_summary(doc)
        doc.save(output_path)

    # ─── Interna ──────────────────────────────────────────────────────────────

    def _truncate(self, text: str, width: float, doc: _RosterPdf) -> str:
        """Kürzt Text auf die Spaltenbreite (mit "...")."""
        pdf = doc.pdf
        pdf.set_font("Helvetica", "", _FONT_CONTENT)
        text = _pdf_safe(text)
        if pdf.get_string_width(text) <= width - 2:
            return text
        while text and pdf.get_string_width(text + "...") > width - 2:
            text = text[:-1]
        return text + "..."

    def _draw_summary(self, doc: _RosterPdf) -> None:
        """Zeichnet die Kennzahlen unter die Liste."""
        s = self.solution
        lines = [
            f"Tage mit Meetings: {s.stats.total_days}",
            f"Meetings gesamt: {s.stats.total_meetings}",
            f"Eingeplant: {s.scheduled_employees} von {self.params.total_employees}",
        ]
        doc.pdf.ln(4)
        for line in lines:
            doc.draw_row([(line, self._total_w)], _ROW_H,
                         bg_hex=COLORS["summary"], font_size=_FONT_HEADER)
