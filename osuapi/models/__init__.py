from __future__ import annotations

from osuapi.models.beatmap import Beatmap
from osuapi.models.match import GameScore
from osuapi.models.match import Match
from osuapi.models.match import MatchGame
from osuapi.models.score import Score
from osuapi.models.user import Event
from osuapi.models.user import User

__all__ = (
    "Beatmap",
    "Event",
    "GameScore",
    "Match",
    "MatchGame",
    "Score",
    "User",
)
