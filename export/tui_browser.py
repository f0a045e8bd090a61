"""Textual TUI Browser für den Meeting-Plan.

Startet mit: python main.py browse
Navigation: j/k oder ↑↓, Enter=Auswahl, /=Suche nach Mitarbeiter, q=Beenden, ?=Hilfe
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from solver.scheduler import ScheduleSolution


class MeetingPlanApp:
    """Textual TUI App für den Meeting-Plan.

    Lazy-importiert textual um Startzeit zu minimieren.
    """

    def __init__(self, solution: "ScheduleSolution") -> None:
        self.solution = solution

    def run(self) -> None:
        """Startet die TUI Anwendung."""
        try:
            from textual.app import App, ComposeResult
            from textual.widgets import (
                Header, Footer, ListView, ListItem, DataTable, Input, Label,
            )
            from textual.containers import Horizontal
            from textual.binding import Binding
        except ImportError:
            raise ImportError(
                "textual nicht installiert. Bitte: pip install textual>=0.60"
            )

        from export.helpers import (
            format_attendees, format_date, format_hour_range, format_slot, month_title,
        )

        solution = self.solution
        days = solution.meeting_days()

        class _App(App):
            CSS = """
            ListView { width: 30; border: solid $primary; }
            DataTable { border: solid $secondary; }
            Input { dock: bottom; }
            """
            BINDINGS = [
                Binding("q", "quit", "Beenden"),
                Binding("escape", "quit", "Beenden"),
                Binding("/", "focus_search", "Suche"),
                Binding("?", "show_help", "Hilfe"),
            ]
            TITLE = f"Meeting-Plan {month_title(solution.parameters)}"

            def compose(self) -> ComposeResult:
                yield Header()
                with Horizontal():
                    yield ListView(id="day_list")
                    yield DataTable(id="meeting_table")
                yield Input(placeholder="Mitarbeiter-Nr. suchen...", id="search")
                yield Footer()

            def on_mount(self) -> None:
                lv = self.query_one("#day_list", ListView)
                for day in days:
                    lv.append(ListItem(Label(format_date(day))))
                if days:
                    self._show_day(0)

            def on_list_view_selected(self, event: ListView.Selected) -> None:
                idx = event.list_view.index
                if idx is not None and 0 <= idx < len(days):
                    self._show_day(idx)

            def on_input_submitted(self, event: Input.Submitted) -> None:
                try:
                    emp = int(event.value.strip())
                except ValueError:
                    self.notify("Bitte eine Mitarbeiter-Nummer eingeben.", severity="warning")
                    return
                a = solution.find_employee(emp)
                if a is None:
                    self.notify(f"Mitarbeiter {emp} ist nicht eingeplant.", severity="warning")
                    return
                self._show_day(days.index(a.booking.slot.date))
                self.notify(
                    f"Mitarbeiter {emp}: {format_slot(a.booking.slot)}, Raum {a.booking.room_number}",
                    title="Gefunden",
                )

            def _show_day(self, idx: int) -> None:
                table = self.query_one("#meeting_table", DataTable)
                table.clear(columns=True)
                table.add_columns("Zeit", "Raum", "Teilnehmer")
                for a in solution.get_day_schedule(days[idx]):
                    slot = a.booking.slot
                    table.add_row(
                        format_hour_range(slot.start_hour, slot.duration_hours),
                        str(a.booking.room_number),
                        format_attendees(a.employee_ids),
                    )

            def action_focus_search(self) -> None:
                self.query_one("#search", Input).focus()

            def action_show_help(self) -> None:
                self.notify(
                    "j/k: Navigation | Enter: Auswählen | /: Suche | q: Beenden",
                    title="Hilfe",
                )

        _App().run()
