from __future__ import annotations

from datetime import datetime
from datetime import timezone
from typing import Any

import orjson
import pytest

from conftest import load_fixture
from osuapi.constants.approval import ApprovalStatus
from osuapi.constants.approval import Genre
from osuapi.constants.approval import Language
from osuapi.constants.grade import Grade
from osuapi.constants.mode import GameMode
from osuapi.constants.mods import Mods
from osuapi.constants.multiplayer import ScoringType
from osuapi.constants.multiplayer import Team
from osuapi.constants.multiplayer import TeamType
from osuapi.models import Beatmap
from osuapi.models import Match
from osuapi.models import Score
from osuapi.models import User


def load_json(name: str) -> Any:
    return orjson.loads(load_fixture(name))


def make_score(mode: GameMode, mods: Mods = Mods.NOMOD, **counts: int) -> Score:
    return Score.from_mapping(
        {
            "user_id": "2",
            "enabled_mods": str(int(mods)),
            "date": "2020-01-01 00:00:00",
            "rank": "F",
            **{key: str(value) for key, value in counts.items()},
        },
        mode=mode,
    )


def test_beatmap_parsing() -> None:
    beatmap = Beatmap.from_mapping(load_json("beatmaps.json")[0])

    assert str(beatmap) == "Luxion - High-Priestess [Overkill]"
    assert beatmap.status is ApprovalStatus.RANKED
    assert beatmap.genre is Genre.VIDEO_GAME
    assert beatmap.language is Language.INSTRUMENTAL
    assert beatmap.approved_date == datetime(2013, 7, 6, 8, 54, 46, tzinfo=timezone.utc)
    assert beatmap.count_objects() == 549
    assert beatmap.max_combo == 573
    assert beatmap.stars == pytest.approx(5.7447, abs=1e-4)
    assert beatmap.creator.user_id == 686209
    assert beatmap.creator.username == "RikiH_"


def test_beatmap_leaderboard_uses_its_mode() -> None:
    beatmaps = [Beatmap.from_mapping(mapping) for mapping in load_json("beatmaps.json")]

    assert beatmaps[0].leaderboard().build().query == {"b": "252002", "m": "0"}
    assert beatmaps[1].leaderboard().build().query == {"b": "1907095", "m": "3"}


def test_unknown_genre_and_language() -> None:
    mapping = load_json("beatmaps.json")[0] | {"genre_id": "99", "language_id": None}
    beatmap = Beatmap.from_mapping(mapping)

    assert beatmap.genre is Genre.ANY
    assert beatmap.language is Language.ANY


def test_user_parsing() -> None:
    user = User.from_mapping(load_json("user.json")[0])

    assert user.id == 2
    assert user.country == "AU"
    assert user.total_hits() == 1171104 + 243052 + 45613
    assert user.level == pytest.approx(99.3426)

    (event,) = user.events
    assert event.beatmap_id == 1262832
    assert event.mapset_id == 590431
    assert event.date.tzinfo is timezone.utc


def test_user_score_requests_use_its_mode() -> None:
    user = User.from_mapping(load_json("user_mania.json")[0], mode=GameMode.MANIA)

    assert user.top_scores().build().query == {"type": "id", "u": "2", "m": "3"}
    assert user.recent_scores().limit(5).build().query["limit"] == "5"


def test_score_parsing() -> None:
    score = Score.from_mapping(load_json("scores.json")[0])

    assert score.id == 2817651018
    assert score.username == "Cookiezi"
    assert score.user_id == 124493
    assert score.mods == Mods.HIDDEN | Mods.HARDROCK
    assert score.grade is Grade.SH
    assert score.perfect
    assert score.replay_available
    assert score.total_hits() == 549
    assert score.accuracy() == 99.76
    assert score.calculate_grade() is score.grade


def test_user_best_score_has_a_beatmap() -> None:
    score = Score.from_mapping(load_json("user_best.json")[0])

    assert score.beatmap_id == 129891
    assert score.username is None
    assert score.user.username is None
    assert score.grade is Grade.S


def test_match_parsing() -> None:
    match = Match.from_mapping(load_json("match.json"))

    assert match.name == "OWC: (Australia) vs (Japan)"
    assert not match.in_progress

    (game,) = match.games
    assert game.mode is GameMode.TAIKO
    assert game.scoring_type is ScoringType.SCOREV2
    assert game.team_type is TeamType.TEAM_VS
    assert game.mods == Mods.NOFAIL

    blue, red = game.scores
    assert blue.team is Team.BLUE
    assert blue.mods is None
    assert red.team is Team.RED
    assert red.mods == Mods.HIDDEN
    assert red.passed and red.perfect


def test_private_match_is_rejected() -> None:
    with pytest.raises(ValueError):
        Match.from_mapping({"match": 0, "games": []})


@pytest.mark.parametrize(
    ("fixture", "parse"),
    [
        ("beatmaps.json", Beatmap.from_mapping),
        ("user.json", User.from_mapping),
        ("scores.json", Score.from_mapping),
        ("user_best.json", Score.from_mapping),
    ],
)
def test_to_dict_parses_back(fixture: str, parse) -> None:
    for mapping in load_json(fixture):
        model = parse(mapping)
        assert parse(orjson.loads(orjson.dumps(model.to_dict()))) == model


def test_match_to_dict_parses_back() -> None:
    match = Match.from_mapping(load_json("match.json"))

    assert Match.from_mapping(match.to_dict()) == match


@pytest.mark.parametrize(
    ("counts", "expected"),
    [
        ({"count300": 100}, Grade.X),
        ({"count300": 95, "count100": 4, "countmiss": 1}, Grade.A),
        ({"count300": 99, "count100": 1}, Grade.S),
        ({"count300": 80, "count100": 20}, Grade.B),
        ({"count300": 65, "count100": 30, "countmiss": 5}, Grade.C),
        ({"count300": 50, "count100": 50}, Grade.D),
        ({}, Grade.F),
    ],
)
def test_osu_grades(counts: dict[str, int], expected: Grade) -> None:
    assert make_score(GameMode.OSU, **counts).calculate_grade() is expected


def test_hidden_grades_are_silver() -> None:
    assert make_score(GameMode.OSU, Mods.HIDDEN, count300=10).calculate_grade() is Grade.XH
    assert (
        make_score(GameMode.OSU, Mods.FLASHLIGHT, count300=99, count100=1).calculate_grade()
        is Grade.SH
    )


def test_taiko_grade() -> None:
    score = make_score(GameMode.TAIKO, count300=90, count100=10, count50=40)

    # 50s do not exist in taiko
    assert score.total_hits() == 100
    assert score.accuracy() == 95.0
    assert score.calculate_grade() is Grade.A
    assert score.calculate_grade(accuracy=96.0) is Grade.S


def test_taiko_grade_never_drops_below_c() -> None:
    score = make_score(GameMode.TAIKO, countmiss=100)

    assert score.accuracy() == 0.0
    assert score.calculate_grade() is Grade.C


def test_catch_grade() -> None:
    score = make_score(
        GameMode.CATCH,
        count300=100,
        count100=10,
        count50=5,
        countkatu=5,
        countgeki=50,
    )

    assert score.total_hits() == 120
    assert score.accuracy() == 95.83
    assert score.calculate_grade() is Grade.A


def test_mania_grade() -> None:
    perfect = make_score(GameMode.MANIA, Mods.HIDDEN, countgeki=100)
    assert perfect.accuracy() == 100.0
    assert perfect.calculate_grade() is Grade.XH

    score = make_score(GameMode.MANIA, countgeki=50, count300=40, countkatu=10)
    assert score.accuracy() == 96.67
    assert score.calculate_grade() is Grade.S
