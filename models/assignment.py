"""Datenmodell für die Zuweisung von Mitarbeitern zu einer Raumbuchung (Pydantic v2)."""

from pydantic import BaseModel, field_validator

from models.timeslot import RoomBooking


class EmployeeAssignment(BaseModel):
    """Eine Raumbuchung mit ihren Teilnehmern.

    employee_ids ist ein zusammenhängender, aufsteigender Lauf aus dem
    globalen Mitarbeiter-Zähler (z.B. [5, 6]).
    """

    booking: RoomBooking
    employee_ids: list[int]

    @field_validator("employee_ids")
    @classmethod
    def _check_contiguous(cls, v: list[int]) -> list[int]:
        if not v:
            raise ValueError("employee_ids darf nicht leer sein.")
        if v != list(range(v[0], v[0] + len(v))):
            raise ValueError(f"employee_ids nicht zusammenhängend: {v}")
        return v

    @property
    def size(self) -> int:
        return len(self.employee_ids)

    @property
    def first_employee(self) -> int:
        return self.employee_ids[0]

    @property
    def last_employee(self) -> int:
        return self.employee_ids[-1]
