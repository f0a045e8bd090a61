"""Gemeinsame Hilfsfunktionen für Text-, Excel- und PDF-Export."""

from datetime import date

from config.defaults import MONTH_NAMES, WEEKDAY_NAMES, WEEKDAY_SHORT
from config.schema import ScheduleParameters
from models.timeslot import TimeSlot

# ─── Farbpalette (RRGGBB, ohne #) ─────────────────────────────────────────────

COLORS: dict[str, str] = {
    "full":     "B3FFB3",
    "partial":  "FFF2B3",
    "day":      "D4E4FF",
    "summary":  "E0E0E0",
    "header":   "4472C4",
}


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Wandelt RRGGBB-String in (r, g, b)-Tupel um."""
    h = hex_color.lstrip("#")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def today_str() -> str:
    """Gibt das heutige Datum als DD.MM.YYYY zurück."""
    return date.today().strftime("%d.%m.%Y")


# ─── Datum / Uhrzeit ──────────────────────────────────────────────────────────

def format_date(d: date, long: bool = False) -> str:
    """Z.B. "Di 01.10.2024" bzw. "Dienstag, 01.10.2024"."""
    if long:
        return f"{WEEKDAY_NAMES[d.weekday()]}, {d.strftime('%d.%m.%Y')}"
    return f"{WEEKDAY_SHORT[d.weekday()]} {d.strftime('%d.%m.%Y')}"


def format_hour_range(start_hour: int, duration_hours: int) -> str:
    """Z.B. "09:00–10:00"."""
    return f"{start_hour:02d}:00–{start_hour + duration_hours:02d}:00"


def format_slot(slot: TimeSlot, long: bool = False) -> str:
    """Z.B. "Di 01.10.2024 09:00–10:00"."""
    return f"{format_date(slot.date, long)} {format_hour_range(slot.start_hour, slot.duration_hours)}"


def month_title(params: ScheduleParameters) -> str:
    """Z.B. "Oktober 2024"."""
    return f"{MONTH_NAMES[params.month - 1]} {params.year}"


# ─── Teilnehmer ───────────────────────────────────────────────────────────────

def format_attendees(employee_ids: list[int], label: str = "Mitarbeiter") -> str:
    """Z.B. "Mitarbeiter 1, Mitarbeiter 2"."""
    return ", ".join(f"{label} {i}" for i in employee_ids)


def format_id_range(employee_ids: list[int]) -> str:
    """Kompakte Darstellung: "5" oder "5–8"."""
    if not employee_ids:
        return "—"
    if len(employee_ids) == 1:
        return str(employee_ids[0])
    return f"{employee_ids[0]}–{employee_ids[-1]}"


def fill_color(size: int, capacity: int) -> str:
    """Farbe einer Buchung: voll belegt oder Rest-Meeting."""
    return COLORS["full"] if size >= capacity else COLORS["partial"]
