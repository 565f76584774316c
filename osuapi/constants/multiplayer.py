from __future__ import annotations

from enum import IntEnum


class ScoringType(IntEnum):
    """The winning condition of a multiplayer game."""

    SCORE = 0
    ACCURACY = 1
    COMBO = 2
    SCOREV2 = 3

    @classmethod
    def _missing_(cls, value: object) -> ScoringType:
        return cls.SCORE


class TeamType(IntEnum):
    HEAD_TO_HEAD = 0
    TAG_COOP = 1
    TEAM_VS = 2
    TAG_TEAM_VS = 3

    @classmethod
    def _missing_(cls, value: object) -> TeamType:
        return cls.HEAD_TO_HEAD


class Team(IntEnum):
    NONE = 0
    BLUE = 1
    RED = 2

    @classmethod
    def _missing_(cls, value: object) -> Team:
        return cls.NONE
