"""Vergleich zweier Meeting-Pläne (Diff / Changelog).

Gibt strukturierte Unterschiede zurück, die als Rich-Tabelle oder JSON
ausgegeben werden können.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from solver.scheduler import ScheduleSolution


@dataclass
class EmployeeMove:
    """Ein Mitarbeiter, dessen Meeting sich geändert hat."""

    employee_id: int
    old_booking: Optional[str]   # booking_id oder None (nicht eingeplant)
    new_booking: Optional[str]


@dataclass
class RosterDiff:
    """Vollständiger Diff zwischen zwei Meeting-Plänen."""

    parameter_changes: list[str] = field(default_factory=list)
    moved: list[EmployeeMove] = field(default_factory=list)
    stats_changes: list[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        """Gibt True zurück wenn kein Unterschied gefunden wurde."""
        return not self.parameter_changes and not self.moved and not self.stats_changes

    @property
    def newly_scheduled(self) -> list[int]:
        return [m.employee_id for m in self.moved if m.old_booking is None]

    @property
    def no_longer_scheduled(self) -> list[int]:
        return [m.employee_id for m in self.moved if m.new_booking is None]

    def to_dict(self) -> dict:
        """Serialisiert den Diff als Dictionary (für JSON-Ausgabe)."""
        return {
            "parameter_changes": self.parameter_changes,
            "moved": [
                {
                    "employee_id": m.employee_id,
                    "old_booking": m.old_booking,
                    "new_booking": m.new_booking,
                }
                for m in self.moved
            ],
            "stats_changes": self.stats_changes,
        }

    def to_json(self, indent: int = 2) -> str:
        """Gibt den Diff als JSON-String zurück."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


def _booking_map(solution: "ScheduleSolution") -> dict[int, str]:
    """Mitarbeiter-ID → booking_id."""
    return {
        emp: a.booking.booking_id
        for a in solution.assignments
        for emp in a.employee_ids
    }


def diff_solutions(a: "ScheduleSolution", b: "ScheduleSolution") -> RosterDiff:
    """Vergleicht zwei Meeting-Pläne und gibt einen strukturierten Diff zurück.

    Vergleicht:
    - Parameter (jedes Feld von ScheduleParameters)
    - Meeting jedes Mitarbeiters (verschoben / neu / entfallen)
    - Kennzahlen (Tage, Meetings)

    Args:
        a: Erster Plan (Basis / alt).
        b: Zweiter Plan (neu).

    Returns:
        RosterDiff mit allen gefundenen Unterschieden.
    """
    diff = RosterDiff()

    # ── Parameter ────────────────────────────────────────────────────────────
    params_a = a.parameters.model_dump()
    params_b = b.parameters.model_dump()
    for key in params_a:
        if params_a[key] != params_b[key]:
            diff.parameter_changes.append(f"{key}: {params_a[key]!r} → {params_b[key]!r}")

    # ── Mitarbeiter ──────────────────────────────────────────────────────────
    map_a = _booking_map(a)
    map_b = _booking_map(b)
    for emp in sorted(set(map_a) | set(map_b)):
        old, new = map_a.get(emp), map_b.get(emp)
        if old != new:
            diff.moved.append(EmployeeMove(employee_id=emp, old_booking=old, new_booking=new))

    # ── Kennzahlen ───────────────────────────────────────────────────────────
    for key in ("total_days", "total_meetings"):
        val_a = getattr(a.stats, key)
        val_b = getattr(b.stats, key)
        if val_a != val_b:
            diff.stats_changes.append(f"{key}: {val_a} → {val_b}")

    return diff
