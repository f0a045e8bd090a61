"""Interaktiver Setup-Wizard für die Ersteinrichtung des Meeting-Planers.

Fragt Firmenname, Planungsparameter und Ausgabe-Einstellungen ab.
Nutzt rich für schöne Konsolenausgabe.
"""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table
from rich import box

from config.schema import (
    OutputConfig,
    OutputFormat,
    RosterConfig,
    ScheduleParameters,
)
from config.defaults import MONTH_NAMES, default_parameters
from config.validation import InputRangeError, validate_parameters

console = Console()


def _header(title: str) -> None:
    console.print()
    console.print(Panel(f"[bold cyan]{title}[/bold cyan]", expand=False))


def _info(text: str) -> None:
    console.print(f"[dim]{text}[/dim]")


def _success(text: str) -> None:
    console.print(f"[green]✓[/green] {text}")


def _warn(text: str) -> None:
    console.print(f"[yellow]⚠[/yellow]  {text}")


def show_parameters_table(params: ScheduleParameters, title: str = "Planungsparameter") -> None:
    """Zeigt die Planungsparameter als rich-Tabelle an."""
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Parameter", style="bold")
    table.add_column("Wert")
    table.add_row("Monat", f"{MONTH_NAMES[params.month - 1]} {params.year}")
    table.add_row("Mitarbeiter", str(params.total_employees))
    table.add_row("Pro Meeting", str(params.employees_per_meeting))
    table.add_row("Räume", str(params.room_count))
    table.add_row("Meeting-Dauer", f"{params.meeting_duration_hours} h")
    table.add_row("Arbeitszeit", f"{params.start_hour:02d}:00–{params.end_hour:02d}:00")
    console.print(table)


# ─── SCHRITTE ───

def _wizard_company() -> str:
    _header("Schritt 1/3: Unternehmen")
    return Prompt.ask("Name des Unternehmens", default="Muster GmbH")


def _wizard_parameters() -> ScheduleParameters:
    """Fragt die Planungsparameter ab, bis alle gültig sind."""
    _header("Schritt 2/3: Planungsparameter")
    _info("Meetings finden nur Montag bis Freitag innerhalb der Arbeitszeit statt.")
    d = default_parameters()
    while True:
        raw = {
            "year": IntPrompt.ask("Jahr", default=d.year),
            "month": IntPrompt.ask("Monat (1–12)", default=d.month),
            "total_employees": IntPrompt.ask("Anzahl Mitarbeiter", default=d.total_employees),
            "employees_per_meeting": IntPrompt.ask(
                "Mitarbeiter pro Meeting", default=d.employees_per_meeting),
            "room_count": IntPrompt.ask("Anzahl Räume", default=d.room_count),
            "meeting_duration_hours": IntPrompt.ask(
                "Meeting-Dauer (Stunden)", default=d.meeting_duration_hours),
            "start_hour": IntPrompt.ask("Arbeitsbeginn (Stunde)", default=d.start_hour),
            "end_hour": IntPrompt.ask("Arbeitsende (Stunde)", default=d.end_hour),
        }
        try:
            params = validate_parameters(raw)
        except InputRangeError as e:
            for msg in e.errors:
                _warn(msg)
            _info("Bitte Werte erneut eingeben.")
            continue
        show_parameters_table(params)
        return params


def _wizard_output() -> OutputConfig:
    _header("Schritt 3/3: Ausgabe")
    output_dir = Prompt.ask("Export-Verzeichnis", default="output")
    fmt = Prompt.ask(
        "Standardformat der Terminal-Ausgabe",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.TEXT.value,
    )
    return OutputConfig(output_dir=output_dir, default_format=OutputFormat(fmt))


# ─── HAUPT-WIZARD ───

def run_wizard() -> Optional[RosterConfig]:
    """Führt den interaktiven Setup-Wizard aus.

    Returns:
        Fertige RosterConfig oder None, wenn der Nutzer abbricht.
    """
    console.print()
    console.print(Panel(
        "[bold]Willkommen beim Meeting-Planer![/bold]\n\n"
        "Der Planer verteilt alle Mitarbeiter auf monatliche Meetings\n"
        "in den verfügbaren Besprechungsräumen.\n\n"
        "[dim]Standard-Werte können mit Enter übernommen werden.[/dim]",
        title="[bold cyan]Meeting-Planer[/bold cyan]",
        border_style="cyan",
    ))

    if not Confirm.ask("\nMöchten Sie jetzt die Konfiguration anlegen?", default=True):
        console.print("[yellow]Einrichtung abgebrochen.[/yellow]")
        return None

    try:
        company = _wizard_company()
        params = _wizard_parameters()
        output = _wizard_output()

        config = RosterConfig(company_name=company, parameters=params, output=output)

        if not Confirm.ask("\nKonfiguration speichern?", default=True):
            console.print("[yellow]Konfiguration wird nicht gespeichert.[/yellow]")
            return None

        _success("Konfiguration wird gespeichert...")
        return config

    except KeyboardInterrupt:
        console.print("\n[yellow]Wizard abgebrochen.[/yellow]")
        return None
