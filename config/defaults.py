from config.schema import (
    OutputConfig,
    OutputFormat,
    RosterConfig,
    ScheduleParameters,
)


def default_parameters() -> ScheduleParameters:
    """Standard-Planungslauf.

    Oktober 2024, 20 Mitarbeiter, Arbeitszeit 09–17 Uhr,
    einstündige Meetings in 2 Räumen mit je 2 Teilnehmern.
    Ergibt 10 Meetings an einem einzigen Tag (Di 01.10.).
    """
    return ScheduleParameters(
        year=2024,
        month=10,
        total_employees=20,
        employees_per_meeting=2,
        room_count=2,
        meeting_duration_hours=1,
        start_hour=9,
        end_hour=17,
    )


def default_roster_config() -> RosterConfig:
    """Komplette Default-Konfiguration."""
    return RosterConfig(
        company_name="Muster GmbH",
        parameters=default_parameters(),
        output=OutputConfig(
            output_dir="output",
            default_format=OutputFormat.TEXT,
        ),
    )


# ─── KALENDER-BEZEICHNUNGEN ───
# Index = date.weekday() (0=Montag) bzw. Monat - 1.

WEEKDAY_NAMES: list[str] = [
    "Montag", "Dienstag", "Mittwoch", "Donnerstag",
    "Freitag", "Samstag", "Sonntag",
]

WEEKDAY_SHORT: list[str] = ["Mo", "Di", "Mi", "Do", "Fr", "Sa", "So"]

MONTH_NAMES: list[str] = [
    "Januar", "Februar", "März", "April", "Mai", "Juni",
    "Juli", "August", "September", "Oktober", "November", "Dezember",
]

# Wochentage mit Meetings (date.weekday() < 5)
WORKDAYS: frozenset[int] = frozenset({0, 1, 2, 3, 4})
