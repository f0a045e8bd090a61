"""Tests für die Kommandozeile (click CliRunner, ohne Config-Datei)."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from main import cli
from solver.scheduler import ScheduleSolution

SCENARIO_ARGS = [
    "--year", "2024", "--month", "10", "--employees", "5", "--per-meeting", "2",
    "--rooms", "1", "--duration", "1", "--start", "9", "--end", "10",
]


def _clean_exit(result) -> bool:
    """Beendet über sys.exit, nicht durch eine unbehandelte Exception."""
    return result.exception is None or isinstance(result.exception, SystemExit)


@pytest.fixture
def runner():
    runner = CliRunner()
    with runner.isolated_filesystem():
        yield runner


class TestScheduleCommand:
    def test_schedule_text_defaults(self, runner):
        """Ohne Config gelten die Standardparameter (20 Mitarbeiter, 2 Räume)."""
        result = runner.invoke(cli, ["schedule"])
        assert result.exit_code == 0, result.output
        assert "Dienstag, 01.10.2024 09:00–10:00" in result.output
        assert " • Raum 2: Mitarbeiter 19, Mitarbeiter 20" in result.output
        assert "Tage mit Meetings: 1" in result.output
        assert "Meetings gesamt: 10" in result.output

    def test_schedule_json(self, runner):
        result = runner.invoke(cli, ["schedule", "--format", "json", *SCENARIO_ARGS])
        assert result.exit_code == 0, result.output
        events = json.loads(result.output)
        assert [ev["kind"] for ev in events] == [
            "day_slot", "room_assignment", "day_slot", "room_assignment",
            "day_slot", "room_assignment", "summary",
        ]
        assert events[5]["employee_ids"] == [5]
        assert events[-1] == {"kind": "summary", "total_days": 3, "total_meetings": 3}

    def test_schedule_table(self, runner):
        result = runner.invoke(cli, ["schedule", "--format", "table", *SCENARIO_ARGS])
        assert result.exit_code == 0, result.output
        assert "Oktober 2024" in result.output
        assert "Meetings gesamt: 3" in result.output

    def test_schedule_save(self, runner):
        result = runner.invoke(cli, ["schedule", *SCENARIO_ARGS, "--save", "plan.json"])
        assert result.exit_code == 0, result.output
        solution = ScheduleSolution.load_json(Path("plan.json"))
        assert solution.stats.total_meetings == 3

    def test_schedule_empty_plan(self, runner):
        result = runner.invoke(cli, ["schedule", "--start", "9", "--end", "9"])
        assert result.exit_code == 0, result.output
        assert "Meetings gesamt: 0" in result.output
        assert "Keine Meetings möglich" in result.output

    def test_schedule_invalid_parameters(self, runner):
        result = runner.invoke(cli, ["schedule", "--employees", "1"])
        assert result.exit_code == 1
        assert "Anzahl Mitarbeiter muss mindestens 2 sein" in result.output


class TestCheckCommand:
    def test_check_valid(self, runner):
        result = runner.invoke(cli, ["check"])
        assert result.exit_code == 0, result.output
        assert "Parameter gültig" in result.output

    def test_check_reports_all_errors(self, runner):
        result = runner.invoke(cli, ["check", "--month", "13", "--rooms", "0"])
        assert result.exit_code == 1
        assert "Monat muss ein gültiger Monat sein (1–12)" in result.output
        assert "Anzahl Räume muss zwischen 1 und 50 liegen" in result.output

    def test_check_capacity_warning(self, runner):
        result = runner.invoke(cli, ["check", "--employees", "5000"])
        assert result.exit_code == 0, result.output
        assert "Kapazität reicht nicht" in result.output


class TestExportCommand:
    def test_export_all_formats(self, runner):
        result = runner.invoke(cli, ["export", *SCENARIO_ARGS, "--output-dir", "out"])
        assert result.exit_code == 0, result.output
        for suffix in ("txt", "json", "xlsx", "pdf"):
            assert Path(f"out/meetings_2024_10.{suffix}").exists()

    def test_export_text_only_from_plan(self, runner):
        runner.invoke(cli, ["schedule", *SCENARIO_ARGS, "--save", "plan.json"])
        result = runner.invoke(cli, [
            "export", "--input", "plan.json", "--output-dir", "out",
            "--no-json", "--no-excel", "--no-pdf",
        ])
        assert result.exit_code == 0, result.output
        text = Path("out/meetings_2024_10.txt").read_text(encoding="utf-8")
        assert text.splitlines()[-1] == "Meetings gesamt: 3"
        assert not Path("out/meetings_2024_10.pdf").exists()


class TestPlanCommands:
    def test_validate_saved_plan(self, runner):
        runner.invoke(cli, ["schedule", *SCENARIO_ARGS, "--save", "plan.json"])
        result = runner.invoke(cli, ["validate", "plan.json"])
        assert result.exit_code == 0, result.output
        assert "VALIDE" in result.output

    def test_validate_tampered_plan(self, runner):
        """Falsche Kennzahlen: Validator meldet Fehler, kein Traceback."""
        runner.invoke(cli, ["schedule", *SCENARIO_ARGS, "--save", "plan.json"])
        data = json.loads(Path("plan.json").read_text(encoding="utf-8"))
        data["stats"]["total_meetings"] = 99
        Path("plan.json").write_text(json.dumps(data), encoding="utf-8")
        result = runner.invoke(cli, ["validate", "plan.json"])
        assert result.exit_code == 1
        assert _clean_exit(result)
        assert "VERLETZUNGEN GEFUNDEN" in result.output

    def test_validate_gap_in_employee_ids(self, runner):
        """Nicht zusammenhängende IDs scheitern schon beim Laden, mit Meldung."""
        runner.invoke(cli, ["schedule", *SCENARIO_ARGS, "--save", "plan.json"])
        data = json.loads(Path("plan.json").read_text(encoding="utf-8"))
        data["assignments"][0]["employee_ids"] = [1, 3]
        Path("plan.json").write_text(json.dumps(data), encoding="utf-8")
        result = runner.invoke(cli, ["validate", "plan.json"])
        assert result.exit_code == 1
        assert _clean_exit(result)
        assert "Gespeicherter Plan ungültig" in result.output

    def test_validate_invalid_parameters_in_plan(self, runner):
        runner.invoke(cli, ["schedule", *SCENARIO_ARGS, "--save", "plan.json"])
        data = json.loads(Path("plan.json").read_text(encoding="utf-8"))
        data["parameters"]["employees_per_meeting"] = 99
        Path("plan.json").write_text(json.dumps(data), encoding="utf-8")
        result = runner.invoke(cli, ["validate", "plan.json"])
        assert result.exit_code == 1
        assert _clean_exit(result)

    @pytest.mark.parametrize("args", [
        ["report", "--input", "kaputt.json"],
        ["export", "--input", "kaputt.json", "--output-dir", "out"],
        ["browse", "--input", "kaputt.json"],
        ["validate", "kaputt.json"],
    ])
    def test_broken_json_reported(self, runner, args):
        """Kein gültiges JSON: rote Meldung und Exit-Code 1 statt Traceback."""
        Path("kaputt.json").write_text("{not json", encoding="utf-8")
        result = runner.invoke(cli, args)
        assert result.exit_code == 1
        assert _clean_exit(result)
        assert "Gespeicherter Plan ungültig" in result.output

    def test_diff_with_broken_plan(self, runner):
        runner.invoke(cli, ["schedule", *SCENARIO_ARGS, "--save", "alt.json"])
        Path("neu.json").write_text("[]", encoding="utf-8")
        result = runner.invoke(cli, ["diff", "alt.json", "neu.json"])
        assert result.exit_code == 1
        assert _clean_exit(result)

    def test_validate_missing_plan(self, runner):
        result = runner.invoke(cli, ["validate", "fehlt.json"])
        assert result.exit_code == 1
        assert _clean_exit(result)

    def test_report(self, runner):
        result = runner.invoke(cli, ["report", *SCENARIO_ARGS])
        assert result.exit_code == 0, result.output
        assert "Auslastung" in result.output

    def test_diff_json(self, runner):
        runner.invoke(cli, ["schedule", *SCENARIO_ARGS, "--save", "alt.json"])
        runner.invoke(cli, ["schedule", *SCENARIO_ARGS, "--rooms", "2", "--save", "neu.json"])
        result = runner.invoke(cli, ["diff", "alt.json", "neu.json", "--format", "json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["parameter_changes"] == ["room_count: 1 → 2"]
        assert [m["employee_id"] for m in data["moved"]] == [3, 4, 5]

    def test_diff_identical(self, runner):
        runner.invoke(cli, ["schedule", *SCENARIO_ARGS, "--save", "alt.json"])
        result = runner.invoke(cli, ["diff", "alt.json", "alt.json"])
        assert result.exit_code == 0, result.output
        assert "Keine Unterschiede" in result.output


class TestConfigCommands:
    def test_config_show_without_config(self, runner):
        result = runner.invoke(cli, ["config", "show"])
        assert result.exit_code == 1
        assert "Keine Konfiguration gefunden" in result.output

    def test_config_reset_then_show(self, runner):
        result = runner.invoke(cli, ["config", "reset"], input="y\n")
        assert result.exit_code == 0, result.output
        assert Path("config/roster_config.yaml").exists()
        result = runner.invoke(cli, ["config", "show"])
        assert result.exit_code == 0, result.output
        assert "Muster GmbH" in result.output

    def test_scenario_list_empty(self, runner):
        result = runner.invoke(cli, ["scenario", "list"])
        assert result.exit_code == 0, result.output
        assert "Keine Szenarien" in result.output

    def test_scenario_save_and_list(self, runner):
        runner.invoke(cli, ["config", "reset"], input="y\n")
        result = runner.invoke(cli, ["scenario", "save", "oktober", "-d", "Basis"])
        assert result.exit_code == 0, result.output
        result = runner.invoke(cli, ["scenario", "list"])
        assert result.exit_code == 0, result.output
        assert "oktober" in result.output

    def test_scenario_save_invalid_name(self, runner):
        runner.invoke(cli, ["config", "reset"], input="y\n")
        result = runner.invoke(cli, ["scenario", "save", "../aussen"])
        assert result.exit_code == 1
        assert _clean_exit(result)
        assert "Ungültiger Szenario-Name" in result.output
