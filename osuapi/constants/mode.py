from __future__ import annotations

from enum import IntEnum
from functools import cached_property

mode_str = (
    "osu!std",
    "osu!taiko",
    "osu!catch",
    "osu!mania",
)


class GameMode(IntEnum):
    OSU = 0
    TAIKO = 1
    CATCH = 2
    MANIA = 3

    def __repr__(self) -> str:
        return mode_str[self.value]

    @cached_property
    def ruleset(self) -> str:
        """The ruleset name used in osu! website urls."""

        return {
            GameMode.OSU: "osu",
            GameMode.TAIKO: "taiko",
            GameMode.CATCH: "fruits",
            GameMode.MANIA: "mania",
        }[self]
