"""Tests für Plan-Validierung, Auslastungsbericht und Plan-Diff."""

import json
from datetime import date

import pytest

from analysis.diff import diff_solutions
from analysis.quality_report import RosterAnalyzer
from analysis.solution_validator import RosterValidator
from config.schema import ScheduleParameters
from models.assignment import EmployeeAssignment
from models.events import ScheduleStats
from models.timeslot import RoomBooking, TimeSlot
from solver.scheduler import MeetingScheduler, ScheduleSolution


def _params(**overrides) -> ScheduleParameters:
    values = dict(
        year=2024, month=10, total_employees=7, employees_per_meeting=2,
        room_count=2, meeting_duration_hours=1, start_hour=9, end_hour=10,
    )
    values.update(overrides)
    return ScheduleParameters(**values)


def _booking(day: int, hour: int = 9, room: int = 1, month: int = 10) -> RoomBooking:
    return RoomBooking(slot=TimeSlot(date=date(2024, month, day), start_hour=hour),
                       room_number=room)


def _constraints(report, severity: str = "error") -> set[str]:
    return {v.constraint for v in report.violations if v.severity == severity}


@pytest.fixture(scope="module")
def solution() -> ScheduleSolution:
    """7 Mitarbeiter, 2 Räume: [1,2] [3,4] am 01.10., [5,6] [7] am 02.10."""
    return MeetingScheduler(_params()).solve()


# ─── VALIDATOR ────────────────────────────────────────────────────────────────

class TestRosterValidator:
    def test_engine_solution_valid(self, solution):
        report = RosterValidator().validate(solution)
        assert report.is_valid
        assert report.violations == []

    def test_partial_solution_warns(self):
        """Nicht eingeplante Mitarbeiter sind eine Warnung, kein Fehler."""
        partial = MeetingScheduler(_params(total_employees=200)).solve()
        report = RosterValidator().validate(partial)
        assert report.is_valid
        assert _constraints(report, "warning") == {"unscheduled_employees"}

    def test_empty_solution_valid(self):
        empty = MeetingScheduler(_params(start_hour=9, end_hour=9)).solve()
        report = RosterValidator().validate(empty)
        assert report.is_valid

    def test_employee_gap(self, solution):
        """Übersprungene Mitarbeiter-ID wird erkannt."""
        assignments = list(solution.assignments)
        assignments[1] = EmployeeAssignment(booking=assignments[1].booking,
                                            employee_ids=[4, 5])
        tampered = solution.model_copy(update={"assignments": assignments})
        report = RosterValidator().validate(tampered)
        assert not report.is_valid
        assert "employee_gap" in _constraints(report)

    def test_weekend_and_wrong_month(self, solution):
        assignments = [
            EmployeeAssignment(booking=_booking(5), employee_ids=[1, 2]),
            EmployeeAssignment(booking=_booking(4, month=11), employee_ids=[3, 4]),
        ]
        tampered = solution.model_copy(update={
            "assignments": assignments,
            "next_employee": 5,
            "stats": ScheduleStats(total_days=2, total_meetings=2),
        })
        report = RosterValidator().validate(tampered)
        assert {"weekend", "wrong_month"} <= _constraints(report)
        descriptions = {v.constraint: v.description for v in report.violations}
        assert descriptions["weekend"] == "Meeting am Wochenende (Sa 05.10.2024 09:00–10:00)"
        assert descriptions["wrong_month"].startswith("Mo 04.11.2024 09:00–10:00 liegt nicht in")

    def test_outside_hours_and_invalid_room(self, solution):
        assignments = [
            EmployeeAssignment(booking=_booking(1, hour=10, room=3), employee_ids=[1, 2]),
        ]
        tampered = solution.model_copy(update={
            "assignments": assignments,
            "next_employee": 3,
            "stats": ScheduleStats(total_days=1, total_meetings=1),
        })
        errors = _constraints(RosterValidator().validate(tampered))
        assert errors == {"outside_work_hours", "invalid_room"}

    def test_off_grid_start(self):
        """Startstunde außerhalb des Dauer-Rasters."""
        p = _params(meeting_duration_hours=2, end_hour=13, total_employees=2)
        base = MeetingScheduler(p).solve()
        booking = RoomBooking(slot=TimeSlot(date=date(2024, 10, 1), start_hour=10,
                                            duration_hours=2), room_number=1)
        tampered = base.model_copy(update={"assignments": [
            EmployeeAssignment(booking=booking, employee_ids=[1, 2]),
        ]})
        assert _constraints(RosterValidator().validate(tampered)) == {"off_grid"}

    def test_booking_order(self, solution):
        """Vertauschte Räume verletzen die Kalender-Reihenfolge."""
        assignments = [
            EmployeeAssignment(booking=_booking(1, room=2), employee_ids=[1, 2]),
            EmployeeAssignment(booking=_booking(1, room=1), employee_ids=[3, 4]),
        ]
        tampered = solution.model_copy(update={
            "assignments": assignments,
            "next_employee": 5,
            "stats": ScheduleStats(total_days=1, total_meetings=2),
        })
        assert "booking_order" in _constraints(RosterValidator().validate(tampered))

    def test_partial_not_last_and_capacity(self, solution):
        assignments = [
            EmployeeAssignment(booking=_booking(1, room=1), employee_ids=[1]),
            EmployeeAssignment(booking=_booking(1, room=2), employee_ids=[2, 3, 4]),
        ]
        tampered = solution.model_copy(update={
            "assignments": assignments,
            "next_employee": 5,
            "stats": ScheduleStats(total_days=1, total_meetings=2),
        })
        errors = _constraints(RosterValidator().validate(tampered))
        assert {"partial_not_last", "capacity_exceeded"} <= errors

    def test_stats_and_cursor_mismatch(self, solution):
        tampered = solution.model_copy(update={
            "stats": ScheduleStats(total_days=5, total_meetings=1),
            "next_employee": 3,
        })
        errors = _constraints(RosterValidator().validate(tampered))
        assert errors == {"stats_days", "stats_meetings", "cursor_mismatch"}

    def test_print_rich_runs(self, solution):
        """print_rich() wirft keine Exception."""
        RosterValidator().validate(solution).print_rich()


# ─── AUSLASTUNG ───────────────────────────────────────────────────────────────

class TestQualityReport:
    def test_report_structure(self, solution):
        report = RosterAnalyzer().analyze(solution)
        assert report.status == "complete"
        assert report.scheduled_employees == 7
        assert report.unscheduled_employees == 0
        assert report.weekdays_in_month == 23
        assert report.monthly_capacity == 23 * 1 * 2 * 2
        assert report.meetings_per_room == {1: 2, 2: 2}
        assert report.has_partial_meeting

    def test_day_metrics(self, solution):
        report = RosterAnalyzer().analyze(solution)
        assert [(m.date, m.meetings, m.employees) for m in report.day_metrics] == [
            ("Di 01.10.2024", 2, 4),
            ("Mi 02.10.2024", 2, 3),
        ]
        assert all(m.slots_used == 1 for m in report.day_metrics)

    def test_ratios(self, solution):
        report = RosterAnalyzer().analyze(solution)
        assert report.average_fill == pytest.approx(7 / 8)
        assert report.seat_utilisation == pytest.approx(7 / 92)
        assert report.days_used_ratio == pytest.approx(2 / 23)

    def test_empty_plan(self):
        empty = MeetingScheduler(_params(start_hour=9, end_hour=9)).solve()
        report = RosterAnalyzer().analyze(empty)
        assert report.day_metrics == []
        assert report.average_fill == 0.0
        assert report.seat_utilisation == 0.0
        assert report.meetings_per_room == {1: 0, 2: 0}
        assert not report.has_partial_meeting

    def test_print_rich_runs(self, solution):
        RosterAnalyzer().analyze(solution).print_rich()


# ─── DIFF ─────────────────────────────────────────────────────────────────────

class TestRosterDiff:
    def test_diff_identical(self, solution):
        assert diff_solutions(solution, solution).is_empty()

    def test_diff_more_rooms(self, solution):
        """Vier Räume: alle Mitarbeiter passen auf den ersten Tag."""
        other = MeetingScheduler(_params(room_count=4)).solve()
        diff = diff_solutions(solution, other)
        assert diff.parameter_changes == ["room_count: 2 → 4"]
        assert [m.employee_id for m in diff.moved] == [5, 6, 7]
        assert diff.moved[0].old_booking == "2024-10-02_09_R1"
        assert diff.moved[0].new_booking == "2024-10-01_09_R3"
        assert diff.stats_changes == ["total_days: 2 → 1"]
        assert diff.moved[-1].new_booking == "2024-10-01_09_R4"

    def test_diff_more_employees(self, solution):
        other = MeetingScheduler(_params(total_employees=9)).solve()
        diff = diff_solutions(solution, other)
        assert diff.newly_scheduled == [8, 9]
        assert diff.no_longer_scheduled == []
        assert diff_solutions(other, solution).no_longer_scheduled == [8, 9]

    def test_diff_json_format(self, solution):
        other = MeetingScheduler(_params(total_employees=8)).solve()
        data = json.loads(diff_solutions(solution, other).to_json())
        assert set(data) == {"parameter_changes", "moved", "stats_changes"}
        assert data["moved"] == [
            {"employee_id": 8, "old_booking": None, "new_booking": "2024-10-02_09_R2"},
        ]
