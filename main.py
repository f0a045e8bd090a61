"""Meeting-Planer – CLI-Einstiegspunkt.

Verwendung:
  python main.py setup                    Konfiguration mit dem Wizard anlegen
  python main.py config show              Konfiguration anzeigen
  python main.py check [OPTIONEN]         Parameter prüfen
  python main.py schedule [OPTIONEN]      Monatsplan berechnen und ausgeben
  python main.py export [OPTIONEN]        Text, JSON, Excel und PDF exportieren
  python main.py browse [OPTIONEN]        Interaktive Ansicht (Textual)
  python main.py report [OPTIONEN]        Auslastungsbericht
  python main.py validate <plan.json>     Gespeicherten Plan prüfen
  python main.py diff <alt.json> <neu.json>  Zwei Pläne vergleichen
  python main.py scenario save <name>     Szenario speichern
  python main.py scenario load <name>     Szenario laden
  python main.py scenario list            Szenarien auflisten
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()

# Standard-Pfad für den gespeicherten Plan
DEFAULT_PLAN_JSON = Path("output/meeting_plan.json")


def _load_config_or_abort():
    """Lädt die Konfiguration oder bricht mit Fehlermeldung ab."""
    from config.manager import ConfigManager
    mgr = ConfigManager()
    if mgr.first_run_check():
        console.print(
            "[red]Keine Konfiguration gefunden.[/red]\n"
            "Führen Sie zunächst [bold]python main.py setup[/bold] aus."
        )
        sys.exit(1)
    try:
        return mgr, mgr.load()
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)


def _load_config_or_default():
    """Lädt die Konfiguration; ohne Config-Datei gelten die Standardwerte."""
    from config.manager import ConfigManager
    from config.defaults import default_roster_config
    mgr = ConfigManager()
    if mgr.first_run_check():
        return default_roster_config()
    try:
        return mgr.load()
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)


# ─── PARAMETER-OPTIONEN ───────────────────────────────────────────────────────

_PARAMETER_OPTIONS = [
    ("--year", "year", "Jahr (2000–2100)."),
    ("--month", "month", "Monat (1–12)."),
    ("--employees", "total_employees", "Anzahl Mitarbeiter (mind. 2)."),
    ("--per-meeting", "employees_per_meeting", "Mitarbeiter pro Meeting."),
    ("--rooms", "room_count", "Anzahl Besprechungsräume (1–50)."),
    ("--duration", "meeting_duration_hours", "Meeting-Dauer in Stunden (1–4)."),
    ("--start", "start_hour", "Arbeitsbeginn (Stunde, 0–23)."),
    ("--end", "end_hour", "Arbeitsende (Stunde, Arbeitsbeginn bis 23)."),
]


def parameter_options(func):
    """Fügt einem Befehl die Optionen aller Planungsparameter hinzu.

    Nicht angegebene Optionen werden aus der Konfiguration übernommen.
    Werte kommen als Strings an und werden erst vom Validator geprüft.
    """
    for flag, dest, help_text in reversed(_PARAMETER_OPTIONS):
        func = click.option(flag, dest, default=None, help=help_text)(func)
    return func


def _resolve_parameters(config, overrides: dict):
    """Config-Parameter + CLI-Optionen → ScheduleParameters (oder Abbruch)."""
    from config.validation import InputRangeError, validate_parameters

    raw = config.parameters.model_dump()
    raw.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return validate_parameters(raw)
    except InputRangeError as e:
        console.print("[red bold]Ungültige Parameter:[/red bold]")
        for msg in e.errors:
            console.print(f"  [red]• {msg}[/red]")
        sys.exit(1)


def _solve(config, overrides: dict):
    from solver.scheduler import MeetingScheduler
    params = _resolve_parameters(config, overrides)
    return MeetingScheduler(params).solve()


def _load_plan_or_abort(path: Path):
    from solver.scheduler import ScheduleSolution
    try:
        return ScheduleSolution.load_json(path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)


def _print_status(solution) -> None:
    """Hinweis bei leerem oder unvollständigem Plan."""
    if solution.status == "empty":
        console.print(
            "[yellow]Keine Meetings möglich: die Meeting-Dauer passt nicht "
            "in die Arbeitszeit.[/yellow]"
        )
    elif solution.status == "partial":
        console.print(
            f"[yellow]⚠ {solution.unscheduled_employees} Mitarbeiter konnten in "
            f"diesem Monat nicht eingeplant werden.[/yellow]"
        )


# ─── SETUP ────────────────────────────────────────────────────────────────────

@click.command("setup")
def cmd_setup():
    """Ersteinrichtung: Konfiguration mit dem Setup-Wizard anlegen."""
    from config.wizard import run_wizard
    from config.manager import ConfigManager

    mgr = ConfigManager()
    if not mgr.first_run_check():
        console.print(
            "[yellow]Eine Konfiguration existiert bereits.[/yellow]\n"
            "Verwenden Sie [bold]python main.py config show[/bold] zum Anzeigen."
        )
        if not click.confirm("Trotzdem neu einrichten?", default=False):
            return

    config = run_wizard()
    if config is not None:
        mgr.save(config)
        console.print("[bold green]Einrichtung abgeschlossen![/bold green]")
        console.print("Führen Sie jetzt [bold]python main.py schedule[/bold] aus.")


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen oder zurücksetzen."""


@cmd_config.command("show")
def config_show():
    """Zeigt die aktuelle Konfiguration an."""
    from config.wizard import show_parameters_table
    mgr, config = _load_config_or_abort()

    console.print(Panel(
        f"[bold]{config.company_name}[/bold]",
        title="Meeting-Planer",
        border_style="cyan",
    ))
    show_parameters_table(config.parameters)

    oc = config.output
    console.print(
        f"\n[bold]Ausgabe:[/bold] {oc.output_dir} | "
        f"Format: {oc.default_format.value} | "
        f"Bezeichnung: {oc.employee_label} / {oc.room_label}"
    )


@cmd_config.command("reset")
def config_reset():
    """Setzt die Konfiguration auf die Standardwerte zurück."""
    from config.manager import ConfigManager
    from config.defaults import default_roster_config
    if not click.confirm("Konfiguration wirklich zurücksetzen?", default=False):
        return
    ConfigManager().save(default_roster_config())


# ─── CHECK ────────────────────────────────────────────────────────────────────

@click.command("check")
@parameter_options
def cmd_check(**overrides):
    """Prüft die Planungsparameter, ohne einen Plan zu berechnen."""
    from config.wizard import show_parameters_table
    from solver.enumerator import count_weekdays, monthly_capacity, slot_hours

    config = _load_config_or_default()
    params = _resolve_parameters(config, overrides)
    show_parameters_table(params)

    hours = slot_hours(params)
    capacity = monthly_capacity(params)
    console.print(
        f"Werktage: {count_weekdays(params.year, params.month)} | "
        f"Slots pro Tag: {len(hours)} | Kapazität: {capacity} Mitarbeiter"
    )
    if not hours:
        console.print("[yellow]Keine Meetings möglich: Dauer länger als Arbeitszeit.[/yellow]")
    elif capacity < params.total_employees:
        console.print(
            f"[yellow]⚠ Kapazität reicht nicht für alle "
            f"{params.total_employees} Mitarbeiter.[/yellow]"
        )
    else:
        console.print("[green]✓[/green] Parameter gültig.")


# ─── SCHEDULE ─────────────────────────────────────────────────────────────────

@click.command("schedule")
@parameter_options
@click.option("--format", "fmt", type=click.Choice(["text", "table", "json"]),
              default=None, help="Ausgabeformat (Standard aus Config).")
@click.option("--save", "save_path", type=click.Path(path_type=Path), default=None,
              help="Plan zusätzlich als JSON speichern.")
def cmd_schedule(fmt: Optional[str], save_path: Optional[Path], **overrides):
    """Berechnet den Monatsplan und gibt ihn aus."""
    from export.text_export import render_text
    from export.tui_renderer import ROSTER_COLUMNS, render_roster_rows
    from export.helpers import month_title

    config = _load_config_or_default()
    solution = _solve(config, overrides)
    fmt = fmt or config.output.default_format.value

    if fmt == "json":
        events = [ev.model_dump(mode="json") for ev in solution.events()]
        click.echo(json.dumps(events, indent=2, ensure_ascii=False))
    elif fmt == "table":
        table = Table(title=f"Meeting-Plan {month_title(solution.parameters)}",
                      box=box.ROUNDED)
        for col in ROSTER_COLUMNS:
            table.add_column(col)
        for row in render_roster_rows(solution):
            table.add_row(*row)
        console.print(table)
        console.print(
            f"Tage mit Meetings: {solution.stats.total_days} | "
            f"Meetings gesamt: {solution.stats.total_meetings}"
        )
    else:
        click.echo(render_text(solution, config.output.employee_label,
                               config.output.room_label))

    if fmt != "json":
        _print_status(solution)

    if save_path is not None:
        solution.save_json(save_path)
        console.print(f"[green]✓[/green] Plan gespeichert: {save_path}")


# ─── EXPORT ───────────────────────────────────────────────────────────────────

@click.command("export")
@parameter_options
@click.option("--input", "input_path", type=click.Path(path_type=Path), default=None,
              help="Gespeicherten Plan (JSON) exportieren statt neu zu berechnen.")
@click.option("--output-dir", default=None, help="Zielverzeichnis (Standard aus Config).")
@click.option("--text/--no-text", default=True, help="Textliste erzeugen.")
@click.option("--json/--no-json", "as_json", default=True, help="JSON erzeugen.")
@click.option("--excel/--no-excel", default=True, help="Excel-Datei erzeugen.")
@click.option("--pdf/--no-pdf", default=True, help="PDF erzeugen.")
def cmd_export(input_path: Optional[Path], output_dir: Optional[str], text: bool,
               as_json: bool, excel: bool, pdf: bool, **overrides):
    """Exportiert den Monatsplan als Text, JSON, Excel und PDF."""
    from export.text_export import TextExporter
    from export.excel_export import ExcelExporter
    from export.pdf_export import PdfExporter

    config = _load_config_or_default()
    if input_path is not None:
        solution = _load_plan_or_abort(input_path)
    else:
        solution = _solve(config, overrides)

    p = solution.parameters
    out_dir = Path(output_dir or config.output.output_dir)
    stem = f"meetings_{p.year}_{p.month:02d}"
    label = config.output.employee_label

    if text:
        path = out_dir / f"{stem}.txt"
        TextExporter(solution, label, config.output.room_label).export(path)
        console.print(f"[green]✓[/green] Text: {path}")
    if as_json:
        path = out_dir / f"{stem}.json"
        solution.save_json(path)
        console.print(f"[green]✓[/green] JSON: {path}")
    if excel:
        path = out_dir / f"{stem}.xlsx"
        ExcelExporter(solution, config.company_name, label).export(path)
        console.print(f"[green]✓[/green] Excel: {path}")
    if pdf:
        path = out_dir / f"{stem}.pdf"
        PdfExporter(solution, config.company_name, label).export(path)
        console.print(f"[green]✓[/green] PDF: {path}")
    _print_status(solution)


# ─── BROWSE ───────────────────────────────────────────────────────────────────

@click.command("browse")
@parameter_options
@click.option("--input", "input_path", type=click.Path(path_type=Path), default=None,
              help="Gespeicherten Plan (JSON) anzeigen.")
def cmd_browse(input_path: Optional[Path], **overrides):
    """Interaktive Ansicht des Monatsplans (Textual)."""
    from export.tui_browser import MeetingPlanApp

    if input_path is not None:
        solution = _load_plan_or_abort(input_path)
    else:
        solution = _solve(_load_config_or_default(), overrides)
    if not solution.assignments:
        _print_status(solution)
        return
    try:
        MeetingPlanApp(solution).run()
    except ImportError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


# ─── REPORT ───────────────────────────────────────────────────────────────────

@click.command("report")
@parameter_options
@click.option("--input", "input_path", type=click.Path(path_type=Path), default=None,
              help="Gespeicherten Plan (JSON) analysieren.")
def cmd_report(input_path: Optional[Path], **overrides):
    """Zeigt den Auslastungsbericht für einen Monatsplan."""
    from analysis.quality_report import RosterAnalyzer

    if input_path is not None:
        solution = _load_plan_or_abort(input_path)
    else:
        solution = _solve(_load_config_or_default(), overrides)
    RosterAnalyzer().analyze(solution).print_rich()


# ─── VALIDATE ─────────────────────────────────────────────────────────────────

@click.command("validate")
@click.argument("plan", type=click.Path(path_type=Path), default=DEFAULT_PLAN_JSON)
def cmd_validate(plan: Path):
    """Prüft einen gespeicherten Plan (JSON) auf Regelverletzungen."""
    from analysis.solution_validator import RosterValidator

    console.print(f"[bold]Lade Plan:[/bold] {plan}")
    solution = _load_plan_or_abort(plan)
    report = RosterValidator().validate(solution)
    report.print_rich()
    sys.exit(0 if report.is_valid else 1)


# ─── DIFF ─────────────────────────────────────────────────────────────────────

@click.command("diff")
@click.argument("old", type=click.Path(path_type=Path))
@click.argument("new", type=click.Path(path_type=Path))
@click.option("--format", "fmt", type=click.Choice(["table", "json"]), default="table",
              help="Ausgabeformat.")
def cmd_diff(old: Path, new: Path, fmt: str):
    """Vergleicht zwei gespeicherte Pläne."""
    from analysis.diff import diff_solutions

    diff = diff_solutions(_load_plan_or_abort(old), _load_plan_or_abort(new))
    if fmt == "json":
        click.echo(diff.to_json())
        return
    if diff.is_empty():
        console.print("[green]✓[/green] Keine Unterschiede.")
        return

    for line in diff.parameter_changes + diff.stats_changes:
        console.print(f"  [cyan]•[/cyan] {line}")
    table = Table(title="Geänderte Meetings", box=box.ROUNDED)
    table.add_column("Mitarbeiter", justify="right")
    table.add_column("Alt")
    table.add_column("Neu")
    for m in diff.moved:
        table.add_row(str(m.employee_id), m.old_booking or "—", m.new_booking or "—")
    console.print(table)


# ─── SCENARIO ─────────────────────────────────────────────────────────────────

@click.group("scenario")
def cmd_scenario():
    """Szenarien verwalten (speichern, laden, auflisten)."""


@cmd_scenario.command("save")
@click.argument("name")
@click.option("--description", "-d", default="", help="Beschreibung des Szenarios.")
def scenario_save(name: str, description: str):
    """Speichert die aktuelle Konfiguration als Szenario."""
    mgr, config = _load_config_or_abort()
    try:
        mgr.save_scenario(config, name, description)
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)


@cmd_scenario.command("load")
@click.argument("name")
def scenario_load(name: str):
    """Lädt ein gespeichertes Szenario als aktive Konfiguration."""
    from config.manager import ConfigManager
    mgr = ConfigManager()
    try:
        config = mgr.load_scenario(name)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)
    mgr.save(config)
    console.print(f"[green]✓[/green] Szenario '{name}' als aktive Config gesetzt.")


@cmd_scenario.command("list")
def scenario_list():
    """Listet alle gespeicherten Szenarien auf."""
    from config.manager import ConfigManager
    mgr = ConfigManager()
    try:
        scenarios = mgr.list_scenarios()
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    if not scenarios:
        console.print("[dim]Keine Szenarien vorhanden.[/dim]")
        return

    table = Table(title="Gespeicherte Szenarien", box=box.ROUNDED)
    table.add_column("Name", style="bold")
    table.add_column("Monat")
    table.add_column("Mitarbeiter", justify="right")
    table.add_column("Räume", justify="right")
    table.add_column("Kapazität", justify="right")
    table.add_column("Erstellt")
    table.add_column("Beschreibung")
    for s in scenarios:
        capacity = str(s.capacity) if s.fits else f"[yellow]{s.capacity}[/yellow]"
        table.add_row(
            s.name, s.month, str(s.total_employees), str(s.room_count),
            capacity, s.created, escape(s.description),
        )
    console.print(table)


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False,
              help="Ausführliche Log-Ausgabe.")
def cli(verbose: bool):
    """Monatlicher Meeting-Planer.

    Starten Sie mit: python main.py setup
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def main():
    """Einstiegspunkt. Startet automatisch den Wizard beim ersten Aufruf."""
    from config.manager import ConfigManager
    mgr = ConfigManager()

    if len(sys.argv) == 1 and mgr.first_run_check():
        console.print(Panel(
            "[bold]Willkommen beim Meeting-Planer![/bold]\n\n"
            "Keine Konfiguration gefunden.\n"
            "Der Setup-Wizard wird jetzt gestartet...",
            border_style="cyan",
        ))
        sys.argv.append("setup")

    cli()


# Befehle registrieren
cli.add_command(cmd_setup)
cli.add_command(cmd_config)
cli.add_command(cmd_check)
cli.add_command(cmd_schedule)
cli.add_command(cmd_export)
cli.add_command(cmd_browse)
cli.add_command(cmd_report)
cli.add_command(cmd_validate)
cli.add_command(cmd_diff)
cli.add_command(cmd_scenario)


if __name__ == "__main__":
    main()
