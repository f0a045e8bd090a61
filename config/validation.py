"""Eingabe-Validierung der Planungsparameter.

Wandelt rohe Werte (CLI-Optionen, YAML, Strings) in ein gültiges
ScheduleParameters-Objekt um. Alle Grenzverletzungen werden gesammelt und
gemeinsam als InputRangeError gemeldet, der Planungskern sieht nur gültige
Parameter.
"""

from typing import Any, Mapping

from pydantic import ValidationError

from config.schema import ScheduleParameters


class InputRangeError(ValueError):
    """Mindestens ein Parameter liegt außerhalb des zulässigen Bereichs."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("Ungültige Parameter:\n" + "\n".join(f"  • {e}" for e in errors))


# Reihenfolge = Reihenfolge der Fehlermeldungen
PARAMETER_FIELDS: list[str] = list(ScheduleParameters.model_fields)


def _field_message(field: str, raw: Mapping[str, Any]) -> str:
    """Benutzerfreundliche Fehlermeldung für ein ungültiges Feld."""
    if field == "year":
        return "Jahr muss ein gültiges Jahr sein (2000–2100)"
    if field == "month":
        return "Monat muss ein gültiger Monat sein (1–12)"
    if field == "total_employees":
        return "Anzahl Mitarbeiter muss mindestens 2 sein"
    if field == "employees_per_meeting":
        total = _as_int(raw.get("total_employees"))
        if total is not None and total >= 2:
            return f"Mitarbeiter pro Meeting muss zwischen 1 und {total} liegen"
        return "Mitarbeiter pro Meeting muss mindestens 1 sein"
    if field == "room_count":
        return "Anzahl Räume muss zwischen 1 und 50 liegen"
    if field == "meeting_duration_hours":
        return "Meeting-Dauer muss zwischen 1 und 4 Stunden liegen"
    if field == "start_hour":
        return "Arbeitsbeginn muss eine gültige Stunde sein (0–23)"
    if field == "end_hour":
        start = _as_int(raw.get("start_hour"))
        if start is not None and 0 <= start <= 23:
            return f"Arbeitsende muss zwischen {start} und 23 liegen"
        return "Arbeitsende muss eine gültige Stunde sein (0–23)"
    return f"Ungültiger Wert für {field}"


def _as_int(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def validate_parameters(raw: Mapping[str, Any]) -> ScheduleParameters:
    """Validiert rohe Parameterwerte und gibt ScheduleParameters zurück.

    Strings wie "10" werden in Zahlen umgewandelt. Unbekannte Schlüssel
    werden ignoriert.

    Raises:
        InputRangeError: mit einer Meldung pro ungültigem Feld.
    """
    data = {k: raw[k] for k in PARAMETER_FIELDS if k in raw and raw[k] is not None}
    try:
        return ScheduleParameters.model_validate(data)
    except ValidationError as e:
        failed: list[str] = []
        for err in e.errors():
            field = str(err["loc"][0]) if err["loc"] else ""
            if field and field not in failed:
                failed.append(field)
        failed.sort(key=lambda f: PARAMETER_FIELDS.index(f) if f in PARAMETER_FIELDS else len(PARAMETER_FIELDS))
        raise InputRangeError([_field_message(f, data) for f in failed]) from e
