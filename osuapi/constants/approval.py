from __future__ import annotations

import functools
from enum import IntEnum


class ApprovalStatus(IntEnum):
    GRAVEYARD = -2
    WIP = -1
    PENDING = 0
    RANKED = 1
    APPROVED = 2
    QUALIFIED = 3
    LOVED = 4

    @functools.cached_property
    def has_leaderboard(self) -> bool:
        return self > ApprovalStatus.PENDING

    @functools.cached_property
    def gives_pp(self) -> bool:
        return self in (ApprovalStatus.RANKED, ApprovalStatus.APPROVED)


class Genre(IntEnum):
    ANY = 0
    UNSPECIFIED = 1
    VIDEO_GAME = 2
    ANIME = 3
    ROCK = 4
    POP = 5
    OTHER = 6
    NOVELTY = 7
    HIP_HOP = 9
    ELECTRONIC = 10
    METAL = 11
    CLASSICAL = 12
    FOLK = 13
    JAZZ = 14

    @classmethod
    def _missing_(cls, value: object) -> Genre:
        return cls.ANY


class Language(IntEnum):
    ANY = 0
    OTHER = 1
    ENGLISH = 2
    JAPANESE = 3
    CHINESE = 4
    INSTRUMENTAL = 5
    KOREAN = 6
    FRENCH = 7
    GERMAN = 8
    SWEDISH = 9
    SPANISH = 10
    ITALIAN = 11
    RUSSIAN = 12
    POLISH = 13
    UNSPECIFIED = 14

    @classmethod
    def _missing_(cls, value: object) -> Language:
        return cls.ANY
