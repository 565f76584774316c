from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from typing import Any
from typing import Optional
from typing import TYPE_CHECKING

from osuapi.builders import GetUserBest
from osuapi.builders import GetUserRecent
from osuapi.constants.mode import GameMode
from osuapi.utils import format_date
from osuapi.utils import parse_date
from osuapi.utils import to_float
from osuapi.utils import to_int
from osuapi.utils import to_optional_int

if TYPE_CHECKING:
    from osuapi.client import Osu


@dataclass(frozen=True)
class Event:
    """An entry of a user's recent activity feed."""

    html: str
    beatmap_id: Optional[int]
    mapset_id: Optional[int]
    date: datetime
    epic_factor: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "display_html": self.html,
            "beatmap_id": self.beatmap_id,
            "beatmapset_id": self.mapset_id,
            "date": format_date(self.date),
            "epicfactor": self.epic_factor,
        }

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> Event:
        return cls(
            html=mapping["display_html"],
            beatmap_id=to_optional_int(mapping.get("beatmap_id")),
            mapset_id=to_optional_int(mapping.get("beatmapset_id")),
            date=parse_date(mapping["date"]),
            epic_factor=to_int(mapping.get("epicfactor")),
        )


@dataclass(frozen=True)
class User:
    id: int
    name: str
    join_date: datetime

    # statistics, all of them in `mode`
    mode: GameMode

    n300: int
    n100: int
    n50: int

    playcount: int
    ranked_score: int
    total_score: int

    rank: Optional[int]
    country_rank: Optional[int]
    level: float
    pp: float
    accuracy: float

    count_ssh: int
    count_ss: int
    count_sh: int
    count_s: int
    count_a: int

    country: str
    seconds_played: int

    events: list[Event] = field(default_factory=list)

    osu: Optional[Osu] = field(default=None, compare=False, repr=False)

    def total_hits(self) -> int:
        return self.n300 + self.n100 + self.n50

    def top_scores(self, osu: Optional[Osu] = None) -> GetUserBest:
        return GetUserBest(osu or self.osu, self.id).mode(self.mode)  # type: ignore[return-value]

    def recent_scores(self, osu: Optional[Osu] = None) -> GetUserRecent:
        return GetUserRecent(osu or self.osu, self.id).mode(self.mode)  # type: ignore[return-value]

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.id,
            "username": self.name,
            "join_date": format_date(self.join_date),
            "count300": self.n300,
            "count100": self.n100,
            "count50": self.n50,
            "playcount": self.playcount,
            "ranked_score": self.ranked_score,
            "total_score": self.total_score,
            "pp_rank": self.rank,
            "pp_country_rank": self.country_rank,
            "level": self.level,
            "pp_raw": self.pp,
            "accuracy": self.accuracy,
            "count_rank_ssh": self.count_ssh,
            "count_rank_ss": self.count_ss,
            "count_rank_sh": self.count_sh,
            "count_rank_s": self.count_s,
            "count_rank_a": self.count_a,
            "country": self.country,
            "total_seconds_played": self.seconds_played,
            "events": [event.to_dict() for event in self.events],
        }

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, Any],
        *,
        osu: Optional[Osu] = None,
        mode: GameMode = GameMode.OSU,
    ) -> User:
        # users that never played a mode have null statistics for it
        return cls(
            id=to_int(mapping["user_id"]),
            name=mapping["username"],
            join_date=parse_date(mapping["join_date"]),
            mode=mode,
            n300=to_int(mapping.get("count300")),
            n100=to_int(mapping.get("count100")),
            n50=to_int(mapping.get("count50")),
            playcount=to_int(mapping.get("playcount")),
            ranked_score=to_int(mapping.get("ranked_score")),
            total_score=to_int(mapping.get("total_score")),
            rank=to_optional_int(mapping.get("pp_rank")),
            country_rank=to_optional_int(mapping.get("pp_country_rank")),
            level=to_float(mapping.get("level")),
            pp=to_float(mapping.get("pp_raw")),
            accuracy=to_float(mapping.get("accuracy")),
            count_ssh=to_int(mapping.get("count_rank_ssh")),
            count_ss=to_int(mapping.get("count_rank_ss")),
            count_sh=to_int(mapping.get("count_rank_sh")),
            count_s=to_int(mapping.get("count_rank_s")),
            count_a=to_int(mapping.get("count_rank_a")),
            country=mapping.get("country") or "",
            seconds_played=to_int(mapping.get("total_seconds_played")),
            events=[Event.from_mapping(event) for event in mapping.get("events") or ()],
            osu=osu,
        )
