from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from typing import Any
from typing import Optional
from typing import TYPE_CHECKING

from osuapi.constants.mode import GameMode
from osuapi.constants.mods import Mods
from osuapi.constants.multiplayer import ScoringType
from osuapi.constants.multiplayer import Team
from osuapi.constants.multiplayer import TeamType
from osuapi.lazy import LazyUser
from osuapi.utils import format_date
from osuapi.utils import format_optional_date
from osuapi.utils import parse_date
from osuapi.utils import parse_optional_date
from osuapi.utils import to_bool
from osuapi.utils import to_int
from osuapi.utils import to_optional_int

if TYPE_CHECKING:
    from osuapi.client import Osu


def _optional_mods(value: Any) -> Optional[Mods]:
    mods = to_optional_int(value)
    if mods is None:
        return None

    return Mods(mods)


@dataclass(frozen=True)
class GameScore:
    slot: int
    team: Team

    user: LazyUser

    score: int
    max_combo: int

    n300: int
    n100: int
    n50: int
    nmiss: int
    ngeki: int
    nkatu: int

    perfect: bool
    passed: bool

    # only set when the match has free mods enabled
    mods: Optional[Mods]

    @property
    def user_id(self) -> Optional[int]:
        return self.user.user_id

    def to_dict(self) -> dict[str, Any]:
        return {
            "slot": self.slot,
            "team": self.team.value,
            "user_id": self.user.user_id,
            "score": self.score,
            "maxcombo": self.max_combo,
            "count300": self.n300,
            "count100": self.n100,
            "count50": self.n50,
            "countmiss": self.nmiss,
            "countgeki": self.ngeki,
            "countkatu": self.nkatu,
            "perfect": int(self.perfect),
            "pass": int(self.passed),
            "enabled_mods": None if self.mods is None else self.mods.value,
        }

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, Any],
        *,
        osu: Optional[Osu] = None,
        mode: GameMode = GameMode.OSU,
    ) -> GameScore:
        return cls(
            slot=to_int(mapping["slot"]),
            team=Team(to_int(mapping.get("team"))),
            user=LazyUser(user_id=to_int(mapping["user_id"]), mode=mode, osu=osu),
            score=to_int(mapping.get("score")),
            max_combo=to_int(mapping.get("maxcombo")),
            n300=to_int(mapping.get("count300")),
            n100=to_int(mapping.get("count100")),
            n50=to_int(mapping.get("count50")),
            nmiss=to_int(mapping.get("countmiss")),
            ngeki=to_int(mapping.get("countgeki")),
            nkatu=to_int(mapping.get("countkatu")),
            perfect=to_bool(mapping.get("perfect")),
            passed=to_bool(mapping.get("pass")),
            mods=_optional_mods(mapping.get("enabled_mods")),
        )


@dataclass(frozen=True)
class MatchGame:
    """One beatmap played during a match, with every player's score."""

    id: int
    start_time: datetime
    end_time: Optional[datetime]

    beatmap_id: int
    mode: GameMode
    scoring_type: ScoringType
    team_type: TeamType

    # mods forced on every player of the game
    mods: Optional[Mods]

    scores: list[GameScore] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "game_id": self.id,
            "start_time": format_date(self.start_time),
            "end_time": format_optional_date(self.end_time),
            "beatmap_id": self.beatmap_id,
            "play_mode": self.mode.value,
            "scoring_type": self.scoring_type.value,
            "team_type": self.team_type.value,
            "mods": None if self.mods is None else self.mods.value,
            "scores": [score.to_dict() for score in self.scores],
        }

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, Any],
        *,
        osu: Optional[Osu] = None,
    ) -> MatchGame:
        mode = GameMode(to_int(mapping["play_mode"]))

        return cls(
            id=to_int(mapping["game_id"]),
            start_time=parse_date(mapping["start_time"]),
            end_time=parse_optional_date(mapping.get("end_time")),
            beatmap_id=to_int(mapping["beatmap_id"]),
            mode=mode,
            scoring_type=ScoringType(to_int(mapping.get("scoring_type"))),
            team_type=TeamType(to_int(mapping.get("team_type"))),
            mods=_optional_mods(mapping.get("mods")),
            scores=[
                GameScore.from_mapping(score, osu=osu, mode=mode)
                for score in mapping.get("scores") or ()
            ],
        )


@dataclass(frozen=True)
class Match:
    id: int
    name: str
    start_time: datetime
    end_time: Optional[datetime]

    games: list[MatchGame] = field(default_factory=list)

    @property
    def in_progress(self) -> bool:
        return self.end_time is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "match": {
                "match_id": self.id,
                "name": self.name,
                "start_time": format_date(self.start_time),
                "end_time": format_optional_date(self.end_time),
            },
            "games": [game.to_dict() for game in self.games],
        }

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, Any],
        *,
        osu: Optional[Osu] = None,
    ) -> Match:
        """Parses a `get_match` body.

        The osu!api answers `{"match": 0, "games": []}` for a match that does
        not exist or is private, which raises a `ValueError`.
        """

        info = mapping["match"]
        if not isinstance(info, Mapping):
            raise ValueError(f"no match information in the response ({info!r})")

        return cls(
            id=to_int(info["match_id"]),
            name=info["name"],
            start_time=parse_date(info["start_time"]),
            end_time=parse_optional_date(info.get("end_time")),
            games=[
                MatchGame.from_mapping(game, osu=osu)
                for game in mapping.get("games") or ()
            ],
        )
