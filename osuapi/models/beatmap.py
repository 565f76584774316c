from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from typing import Optional
from typing import TYPE_CHECKING

from osuapi.builders import GetScores
from osuapi.constants.approval import ApprovalStatus
from osuapi.constants.approval import Genre
from osuapi.constants.approval import Language
from osuapi.constants.mode import GameMode
from osuapi.lazy import LazyUser
from osuapi.utils import format_date
from osuapi.utils import format_optional_date
from osuapi.utils import parse_date
from osuapi.utils import parse_optional_date
from osuapi.utils import to_bool
from osuapi.utils import to_float
from osuapi.utils import to_int
from osuapi.utils import to_optional_float
from osuapi.utils import to_optional_int

if TYPE_CHECKING:
    from osuapi.client import Osu


@dataclass(frozen=True)
class Beatmap:
    id: int
    set_id: int

    artist: str
    title: str
    version: str
    source: str
    tags: str

    mode: GameMode
    status: ApprovalStatus

    submit_date: datetime
    approved_date: Optional[datetime]
    last_update: datetime

    creator_name: str
    creator: LazyUser

    bpm: float
    stars: float
    stars_aim: Optional[float]
    stars_speed: Optional[float]

    cs: float
    od: float
    ar: float
    hp: float

    seconds_drain: int
    seconds_total: int

    genre: Genre
    language: Language

    favourite_count: int
    rating: float
    plays: int
    passes: int

    count_circles: int
    count_sliders: int
    count_spinners: int
    max_combo: Optional[int]

    download_unavailable: bool
    audio_unavailable: bool

    md5: Optional[str]

    def __str__(self) -> str:
        return f"{self.artist} - {self.title} [{self.version}]"

    def count_objects(self) -> int:
        return self.count_circles + self.count_sliders + self.count_spinners

    def leaderboard(self, osu: Optional[Osu] = None) -> GetScores:
        """Request for the global top scores of the beatmap in its own mode."""

        return GetScores(osu or self.creator.osu, self.id).mode(self.mode)  # type: ignore[return-value]

    def to_dict(self) -> dict[str, Any]:
        return {
            "beatmap_id": self.id,
            "beatmapset_id": self.set_id,
            "artist": self.artist,
            "title": self.title,
            "version": self.version,
            "source": self.source,
            "tags": self.tags,
            "mode": self.mode.value,
            "approved": self.status.value,
            "submit_date": format_date(self.submit_date),
            "approved_date": format_optional_date(self.approved_date),
            "last_update": format_date(self.last_update),
            "creator": self.creator_name,
            "creator_id": self.creator.user_id,
            "bpm": self.bpm,
            "difficultyrating": self.stars,
            "diff_aim": self.stars_aim,
            "diff_speed": self.stars_speed,
            "diff_size": self.cs,
            "diff_overall": self.od,
            "diff_approach": self.ar,
            "diff_drain": self.hp,
            "hit_length": self.seconds_drain,
            "total_length": self.seconds_total,
            "genre_id": self.genre.value,
            "language_id": self.language.value,
            "favourite_count": self.favourite_count,
            "rating": self.rating,
            "playcount": self.plays,
            "passcount": self.passes,
            "count_normal": self.count_circles,
            "count_slider": self.count_sliders,
            "count_spinner": self.count_spinners,
            "max_combo": self.max_combo,
            "download_unavailable": int(self.download_unavailable),
            "audio_unavailable": int(self.audio_unavailable),
            "file_md5": self.md5,
        }

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, Any],
        *,
        osu: Optional[Osu] = None,
    ) -> Beatmap:
        mode = GameMode(to_int(mapping["mode"]))

        return cls(
            id=to_int(mapping["beatmap_id"]),
            set_id=to_int(mapping["beatmapset_id"]),
            artist=mapping["artist"],
            title=mapping["title"],
            version=mapping["version"],
            source=mapping.get("source") or "",
            tags=mapping.get("tags") or "",
            mode=mode,
            status=ApprovalStatus(to_int(mapping["approved"])),
            submit_date=parse_date(mapping["submit_date"]),
            approved_date=parse_optional_date(mapping.get("approved_date")),
            last_update=parse_date(mapping["last_update"]),
            creator_name=mapping["creator"],
            # the creator's statistics are looked up in the map's own mode
            creator=LazyUser(
                user_id=to_int(mapping["creator_id"]),
                mode=mode,
                username=mapping["creator"],
                osu=osu,
            ),
            bpm=to_float(mapping.get("bpm")),
            stars=to_float(mapping.get("difficultyrating")),
            stars_aim=to_optional_float(mapping.get("diff_aim")),
            stars_speed=to_optional_float(mapping.get("diff_speed")),
            cs=to_float(mapping["diff_size"]),
            od=to_float(mapping["diff_overall"]),
            ar=to_float(mapping["diff_approach"]),
            hp=to_float(mapping["diff_drain"]),
            seconds_drain=to_int(mapping["hit_length"]),
            seconds_total=to_int(mapping["total_length"]),
            genre=Genre(to_int(mapping.get("genre_id"))),
            language=Language(to_int(mapping.get("language_id"))),
            favourite_count=to_int(mapping.get("favourite_count")),
            rating=to_float(mapping.get("rating")),
            plays=to_int(mapping.get("playcount")),
            passes=to_int(mapping.get("passcount")),
            count_circles=to_int(mapping.get("count_normal")),
            count_sliders=to_int(mapping.get("count_slider")),
            count_spinners=to_int(mapping.get("count_spinner")),
            max_combo=to_optional_int(mapping.get("max_combo")),
            download_unavailable=to_bool(mapping.get("download_unavailable")),
            audio_unavailable=to_bool(mapping.get("audio_unavailable")),
            md5=mapping.get("file_md5"),
        )
