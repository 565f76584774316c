from __future__ import annotations

from enum import IntFlag

from osuapi.constants.mode import GameMode


class Mods(IntFlag):
    NOMOD = 0
    NOFAIL = 1 << 0
    EASY = 1 << 1
    TOUCHSCREEN = 1 << 2
    HIDDEN = 1 << 3
    HARDROCK = 1 << 4
    SUDDENDEATH = 1 << 5
    DOUBLETIME = 1 << 6
    RELAX = 1 << 7
    HALFTIME = 1 << 8
    NIGHTCORE = 1 << 9
    FLASHLIGHT = 1 << 10
    AUTOPLAY = 1 << 11
    SPUNOUT = 1 << 12
    AUTOPILOT = 1 << 13
    PERFECT = 1 << 14
    KEY4 = 1 << 15
    KEY5 = 1 << 16
    KEY6 = 1 << 17
    KEY7 = 1 << 18
    KEY8 = 1 << 19
    FADEIN = 1 << 20
    RANDOM = 1 << 21
    CINEMA = 1 << 22
    TARGET = 1 << 23
    KEY9 = 1 << 24
    KEYCOOP = 1 << 25
    KEY1 = 1 << 26
    KEY3 = 1 << 27
    KEY2 = 1 << 28
    SCOREV2 = 1 << 29
    MIRROR = 1 << 30

    SPEED_MODS = DOUBLETIME | NIGHTCORE | HALFTIME
    KEY_MODS = KEY1 | KEY2 | KEY3 | KEY4 | KEY5 | KEY6 | KEY7 | KEY8 | KEY9

    def __repr__(self) -> str:
        if not self.value:
            return "NM"

        _str = ""

        for mod in Mods:
            if self.value & mod and (m := str_mods.get(mod)):
                _str += m

        if self.value & Mods.NIGHTCORE:
            _str = _str.replace("DT", "")
        if self.value & Mods.PERFECT:
            _str = _str.replace("SD", "")

        return _str

    __str__ = __repr__

    @classmethod
    def from_str(cls, mods: str) -> Mods:
        """Parses a string of two letter acronyms such as `"HDHR"`.

        Raises:
            ValueError: An acronym is not a known mod.
        """

        _mods = cls.NOMOD

        mods = mods.strip().upper()
        if not mods or mods == "NM":
            return _mods

        if len(mods) % 2:
            raise ValueError(f"Mod string {mods!r} has an odd length")

        for char in range(0, len(mods), 2):
            acronym = mods[char : char + 2]
            if acronym not in mods_str:
                raise ValueError(f"Unknown mod acronym {acronym!r}")

            _mods |= mods_str[acronym]

        # the api never sends NC without DT or PF without SD
        if _mods & cls.NIGHTCORE:
            _mods |= cls.DOUBLETIME
        if _mods & cls.PERFECT:
            _mods |= cls.SUDDENDEATH

        return _mods

    @property
    def key_mod(self) -> Mods | None:
        """The osu!mania key mod contained in the combination, if any."""

        for mod in (
            Mods.KEY1,
            Mods.KEY2,
            Mods.KEY3,
            Mods.KEY4,
            Mods.KEY5,
            Mods.KEY6,
            Mods.KEY7,
            Mods.KEY8,
            Mods.KEY9,
        ):
            if self & mod:
                return mod

        return None

    def score_multiplier(self, mode: GameMode) -> float:
        multiplier = 1.0

        for mod in self:
            # the api sends NC together with DT
            if mod is Mods.DOUBLETIME and self & Mods.NIGHTCORE:
                continue

            multiplier *= _mod_multiplier(mod, mode)

        return multiplier

    def increases_score(self, mode: GameMode) -> bool:
        return self.score_multiplier(mode) > 1.0

    def decreases_score(self, mode: GameMode) -> bool:
        return self.score_multiplier(mode) < 1.0

    def changes_stars(self, mode: GameMode) -> bool:
        """Whether a beatmap's star rating in `mode` is affected by the mods."""

        if self & Mods.SPEED_MODS:
            return True

        if self & (Mods.HARDROCK | Mods.EASY):
            return mode in (GameMode.OSU, GameMode.CATCH)

        return False


def _mod_multiplier(mod: Mods, mode: GameMode) -> float:
    match mode:
        case GameMode.OSU | GameMode.TAIKO:
            if mod is Mods.HALFTIME:
                return 0.3
            if mod in (Mods.EASY, Mods.NOFAIL):
                return 0.5
            if mod is Mods.SPUNOUT and mode is GameMode.OSU:
                return 0.9
            if mod in (Mods.HARDROCK, Mods.HIDDEN):
                return 1.06
            if mod in (Mods.DOUBLETIME, Mods.NIGHTCORE, Mods.FLASHLIGHT):
                return 1.12
        case GameMode.CATCH:
            if mod is Mods.HALFTIME:
                return 0.3
            if mod in (Mods.EASY, Mods.NOFAIL):
                return 0.5
            if mod in (Mods.DOUBLETIME, Mods.NIGHTCORE, Mods.HIDDEN):
                return 1.06
            if mod in (Mods.HARDROCK, Mods.FLASHLIGHT):
                return 1.12
        case GameMode.MANIA:
            if mod in (Mods.EASY, Mods.NOFAIL, Mods.HALFTIME):
                return 0.5

    return 1.0


str_mods = {
    Mods.NOFAIL: "NF",
    Mods.EASY: "EZ",
    Mods.TOUCHSCREEN: "TD",
    Mods.HIDDEN: "HD",
    Mods.HARDROCK: "HR",
    Mods.SUDDENDEATH: "SD",
    Mods.DOUBLETIME: "DT",
    Mods.RELAX: "RX",
    Mods.HALFTIME: "HT",
    Mods.NIGHTCORE: "NC",
    Mods.FLASHLIGHT: "FL",
    Mods.AUTOPLAY: "AU",
    Mods.SPUNOUT: "SO",
    Mods.AUTOPILOT: "AP",
    Mods.PERFECT: "PF",
    Mods.FADEIN: "FI",
    Mods.RANDOM: "RN",
    Mods.CINEMA: "CN",
    Mods.TARGET: "TP",
    Mods.SCOREV2: "V2",
    Mods.MIRROR: "MR",
    Mods.KEY1: "1K",
    Mods.KEY2: "2K",
    Mods.KEY3: "3K",
    Mods.KEY4: "4K",
    Mods.KEY5: "5K",
    Mods.KEY6: "6K",
    Mods.KEY7: "7K",
    Mods.KEY8: "8K",
    Mods.KEY9: "9K",
    Mods.KEYCOOP: "CO",
}

mods_str = {acronym: mod for mod, acronym in str_mods.items()}
