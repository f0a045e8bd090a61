from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from typing import Optional
from enum import Enum


class OutputFormat(str, Enum):
    TEXT = "text"
    TABLE = "table"
    JSON = "json"


# ─── PLANUNGSPARAMETER ───

class ScheduleParameters(BaseModel):
    """Eingabe für einen Planungslauf (ein Kalendermonat).

    Immutable: wird einmal vom Validator erzeugt und danach nur gelesen.
    Der Kern prüft die Grenzen nicht erneut.
    """
    model_config = ConfigDict(frozen=True)

    # Kalenderjahr
    year: int = Field(ge=2000, le=2100,
        description="Jahr (2000–2100)")
    # Kalendermonat, 1-basiert
    month: int = Field(ge=1, le=12,
        description="Monat (1–12)")
    # Anzahl einzuplanender Mitarbeiter
    total_employees: int = Field(ge=2,
        description="Anzahl Mitarbeiter (mind. 2)")
    # Maximale Teilnehmerzahl pro Meeting
    employees_per_meeting: int = Field(ge=1,
        description="Mitarbeiter pro Meeting (1 bis Anzahl Mitarbeiter)")
    # Anzahl verfügbarer Besprechungsräume
    room_count: int = Field(ge=1, le=50,
        description="Anzahl Besprechungsräume (1–50)")
    # Dauer eines Meetings in Stunden
    meeting_duration_hours: int = Field(ge=1, le=4,
        description="Meeting-Dauer in Stunden (1–4)")
    # Arbeitsbeginn (volle Stunde)
    start_hour: int = Field(ge=0, le=23,
        description="Arbeitsbeginn (0–23)")
    # Arbeitsende (volle Stunde)
    end_hour: int = Field(ge=0, le=23,
        description="Arbeitsende (Arbeitsbeginn bis 23)")

    # Feldübergreifende Grenzen als Feld-Validatoren, damit Pydantic alle
    # Verletzungen gemeinsam meldet. info.data enthält nur bereits gültige
    # Felder: ist total_employees/start_hour selbst ungültig, entfällt der Check.

    @field_validator("employees_per_meeting")
    @classmethod
    def validate_per_meeting(cls, v: int, info: ValidationInfo) -> int:
        total = info.data.get("total_employees")
        if total is not None and v > total:
            raise ValueError(f"höchstens {total} Mitarbeiter pro Meeting")
        return v

    @field_validator("end_hour")
    @classmethod
    def validate_end_hour(cls, v: int, info: ValidationInfo) -> int:
        start = info.data.get("start_hour")
        if start is not None and v < start:
            raise ValueError(f"Arbeitsende vor Arbeitsbeginn ({start} Uhr)")
        return v

    @property
    def workday_hours(self) -> int:
        """Länge des Arbeitstags in Stunden."""
        return self.end_hour - self.start_hour

    def label(self) -> str:
        """Kurzbezeichnung, z.B. "10/2024"."""
        return f"{self.month:02d}/{self.year}"


# ─── AUSGABE ───

class OutputConfig(BaseModel):
    """Ausgabe-Einstellungen für Terminal und Export."""
    # Zielverzeichnis für Exporte
    output_dir: str = Field("output",
        description="Zielverzeichnis für Exporte")
    # Standardformat der Terminal-Ausgabe
    default_format: OutputFormat = Field(OutputFormat.TEXT,
        description="Standardformat der Terminal-Ausgabe")
    # Bezeichnung eines Teilnehmers in Listen
    employee_label: str = Field("Mitarbeiter",
        description="Bezeichnung eines Teilnehmers")
    # Bezeichnung eines Raums in Listen
    room_label: str = Field("Raum",
        description="Bezeichnung eines Besprechungsraums")


# ─── GESAMT-CONFIG ───

class RosterConfig(BaseModel):
    """Gesamtkonfiguration des Meeting-Planers."""
    # Name des Unternehmens (erscheint in Berichten)
    company_name: str = Field("Muster GmbH",
        description="Name des Unternehmens")
    # Standard-Parameter für Planungsläufe ohne Optionen
    parameters: ScheduleParameters
    # Ausgabe-Einstellungen
    output: OutputConfig = Field(default_factory=OutputConfig)
    # Optionale Beschreibung
    description: Optional[str] = None
