from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from typing import Optional
from typing import TYPE_CHECKING

from osuapi.constants.grade import Grade
from osuapi.constants.mode import GameMode
from osuapi.constants.mods import Mods
from osuapi.lazy import LazyUser
from osuapi.utils import format_date
from osuapi.utils import parse_date
from osuapi.utils import to_bool
from osuapi.utils import to_int
from osuapi.utils import to_optional_bool
from osuapi.utils import to_optional_float
from osuapi.utils import to_optional_int

if TYPE_CHECKING:
    from osuapi.client import Osu


@dataclass(frozen=True)
class Score:
    """A score from a beatmap leaderboard or a user's best/recent list.

    `mode` is not part of the osu!api payload, it is the mode the request was
    made in. Hit counts are interpreted in that mode.
    """

    beatmap_id: Optional[int]
    id: Optional[int]

    user: LazyUser
    username: Optional[str]

    mode: GameMode
    mods: Mods

    score: int
    max_combo: int
    perfect: bool

    n300: int
    n100: int
    n50: int
    nmiss: int
    ngeki: int
    nkatu: int

    date: datetime
    grade: Grade
    pp: Optional[float]
    replay_available: Optional[bool]

    @property
    def user_id(self) -> Optional[int]:
        return self.user.user_id

    def total_hits(self) -> int:
        """Counts every judged hit object of the score."""

        total = self.n300 + self.n100 + self.nmiss

        if self.mode is not GameMode.TAIKO:
            total += self.n50

            if self.mode is not GameMode.OSU:
                total += self.nkatu

                if self.mode is not GameMode.CATCH:
                    total += self.ngeki

        return total

    def accuracy(self) -> float:
        """The accuracy of the score as a percentage, rounded to 2 decimals."""

        total = self.total_hits()
        if not total:
            return 0.0

        match self.mode:
            case GameMode.TAIKO:
                numerator = self.n300 + self.n100 * 0.5
                denominator = total
            case GameMode.CATCH:
                numerator = self.n300 + self.n100 + self.n50
                denominator = total
            case GameMode.MANIA:
                numerator = (
                    self.n50 * 50
                    + self.n100 * 100
                    + self.nkatu * 200
                    + (self.n300 + self.ngeki) * 300
                )
                denominator = total * 300
            case _:
                numerator = self.n50 * 50 + self.n100 * 100 + self.n300 * 300
                denominator = total * 300

        return round(100.0 * numerator / denominator, 2)

    def calculate_grade(self, accuracy: Optional[float] = None) -> Grade:
        """Calculates the grade of the score from its hit counts.

        Assumes the score is a pass, a failed play gets the grade of its
        judged objects rather than `Grade.F`.
        """

        hidden = bool(self.mods & (Mods.HIDDEN | Mods.FLASHLIGHT | Mods.FADEIN))
        total = self.total_hits()
        if not total:
            return Grade.F

        if accuracy is None:
            accuracy = self.accuracy()

        match self.mode:
            case GameMode.OSU:
                return _osu_grade(self, total, hidden)
            case GameMode.TAIKO:
                if self.n300 == total:
                    return Grade.XH if hidden else Grade.X

                return _grade_by_accuracy(accuracy, hidden, (95.0, 90.0, 80.0, -1.0))
            case GameMode.CATCH:
                if accuracy >= 100.0:
                    return Grade.XH if hidden else Grade.X

                return _grade_by_accuracy(accuracy, hidden, (98.0, 94.0, 90.0, 85.0))
            case _:
                if self.ngeki == total:
                    return Grade.XH if hidden else Grade.X

                return _grade_by_accuracy(accuracy, hidden, (95.0, 90.0, 80.0, 70.0))

    def to_dict(self) -> dict[str, Any]:
        return {
            "beatmap_id": self.beatmap_id,
            "score_id": self.id,
            "score": self.score,
            "user_id": self.user.user_id,
            "username": self.username,
            "count300": self.n300,
            "count100": self.n100,
            "count50": self.n50,
            "countmiss": self.nmiss,
            "countgeki": self.ngeki,
            "countkatu": self.nkatu,
            "maxcombo": self.max_combo,
            "perfect": int(self.perfect),
            "enabled_mods": self.mods.value,
            "date": format_date(self.date),
            "rank": str(self.grade),
            "pp": self.pp,
            "replay_available": (
                None if self.replay_available is None else int(self.replay_available)
            ),
        }

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, Any],
        *,
        osu: Optional[Osu] = None,
        mode: GameMode = GameMode.OSU,
    ) -> Score:
        username = mapping.get("username")

        return cls(
            beatmap_id=to_optional_int(mapping.get("beatmap_id")),
            id=to_optional_int(mapping.get("score_id")),
            user=LazyUser(
                user_id=to_int(mapping["user_id"]),
                mode=mode,
                username=username,
                osu=osu,
            ),
            username=username,
            mode=mode,
            mods=Mods(to_int(mapping.get("enabled_mods"))),
            score=to_int(mapping.get("score")),
            max_combo=to_int(mapping.get("maxcombo")),
            perfect=to_bool(mapping.get("perfect")),
            n300=to_int(mapping.get("count300")),
            n100=to_int(mapping.get("count100")),
            n50=to_int(mapping.get("count50")),
            nmiss=to_int(mapping.get("countmiss")),
            ngeki=to_int(mapping.get("countgeki")),
            nkatu=to_int(mapping.get("countkatu")),
            date=parse_date(mapping["date"]),
            grade=Grade.from_str(mapping["rank"]),
            pp=to_optional_float(mapping.get("pp")),
            replay_available=to_optional_bool(mapping.get("replay_available")),
        )


def _osu_grade(score: Score, total: int, hidden: bool) -> Grade:
    if score.n300 == total:
        return Grade.XH if hidden else Grade.X

    ratio300 = score.n300 / total
    ratio50 = score.n50 / total

    if ratio300 > 0.9 and ratio50 < 0.01 and score.nmiss == 0:
        return Grade.SH if hidden else Grade.S
    elif ratio300 > 0.9 or (ratio300 > 0.8 and score.nmiss == 0):
        return Grade.A
    elif ratio300 > 0.8 or (ratio300 > 0.7 and score.nmiss == 0):
        return Grade.B
    elif ratio300 > 0.6:
        return Grade.C

    return Grade.D


def _grade_by_accuracy(
    accuracy: float,
    hidden: bool,
    thresholds: tuple[float, float, float, float],
) -> Grade:
    s, a, b, c = thresholds

    if accuracy > s:
        return Grade.SH if hidden else Grade.S
    elif accuracy > a:
        return Grade.A
    elif accuracy > b:
        return Grade.B
    elif accuracy > c:
        return Grade.C

    return Grade.D
