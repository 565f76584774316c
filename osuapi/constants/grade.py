from __future__ import annotations

from enum import IntEnum


class Grade(IntEnum):
    """A score's grade, ordered from worst to best."""

    F = 0
    D = 1
    C = 2
    B = 3
    A = 4
    S = 5
    SH = 6
    X = 7
    XH = 8

    def __str__(self) -> str:
        return self.name

    def eq_letter(self, other: Grade) -> bool:
        """Compares two grades while ignoring the silver (hidden) variants."""

        return _LETTERS[self] is _LETTERS[other]

    @classmethod
    def from_str(cls, grade: str) -> Grade:
        try:
            return _grade_aliases[grade.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown grade {grade!r}") from None


_LETTERS = {
    Grade.F: Grade.F,
    Grade.D: Grade.D,
    Grade.C: Grade.C,
    Grade.B: Grade.B,
    Grade.A: Grade.A,
    Grade.S: Grade.S,
    Grade.SH: Grade.S,
    Grade.X: Grade.X,
    Grade.XH: Grade.X,
}

_grade_aliases = {
    "XH": Grade.XH,
    "SSH": Grade.XH,
    "X": Grade.X,
    "SS": Grade.X,
    "SH": Grade.SH,
    "S": Grade.S,
    "A": Grade.A,
    "B": Grade.B,
    "C": Grade.C,
    "D": Grade.D,
    "F": Grade.F,
}
