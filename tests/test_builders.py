from __future__ import annotations

from datetime import datetime
from datetime import timedelta
from datetime import timezone

import pytest

from osuapi.builders import GetBeatmap
from osuapi.builders import GetBeatmaps
from osuapi.builders import GetMatch
from osuapi.builders import GetScore
from osuapi.builders import GetScores
from osuapi.builders import GetUser
from osuapi.builders import GetUserBest
from osuapi.builders import GetUserRecent
from osuapi.constants.mode import GameMode
from osuapi.constants.mods import Mods
from osuapi.endpoints import EndpointKind
from osuapi.errors import InvalidParameter
from osuapi.routing import UserIdentification


def test_undeclared_parameter_fails_on_the_setter() -> None:
    with pytest.raises(InvalidParameter, match="mode is not a parameter of get_match"):
        GetMatch(None, 1).mode(GameMode.OSU)

    with pytest.raises(InvalidParameter, match="limit"):
        GetUser(None, "peppy").limit(5)

    with pytest.raises(InvalidParameter, match="mods"):
        GetUserBest(None, 2).mods(Mods.HIDDEN)

    with pytest.raises(InvalidParameter, match="event_days"):
        GetBeatmaps().event_days(3)


@pytest.mark.parametrize(
    ("builder", "limit", "expected"),
    [
        (GetBeatmaps(), 9999, "500"),
        (GetBeatmaps(), 0, "1"),
        (GetScores(None, 1), 101, "100"),
        (GetUserBest(None, 2), -3, "1"),
        (GetUserRecent(None, 2), 200, "50"),
        (GetUserRecent(None, 2), 25, "25"),
    ],
)
def test_limit_is_clamped(builder, limit: int, expected: str) -> None:
    assert builder.limit(limit).build().query["limit"] == expected


def test_limit_must_be_an_int() -> None:
    with pytest.raises(InvalidParameter):
        GetBeatmaps().limit("10")  # type: ignore[arg-type]

    with pytest.raises(InvalidParameter):
        GetBeatmaps().limit(True)


def test_event_days_is_clamped() -> None:
    assert GetUser(None, 2).event_days(90).build().query["event_days"] == "31"
    assert GetUser(None, 2).event_days(0).build().query["event_days"] == "1"


def test_user_query_by_name_and_id() -> None:
    spec = GetUser(None, "peppy").mode(GameMode.TAIKO).build()

    assert spec.kind is EndpointKind.USER
    assert spec.mode is GameMode.TAIKO
    assert spec.params == (("type", "string"), ("u", "peppy"), ("m", "1"))

    assert GetUser(None, 2).build().query == {"type": "id", "u": "2"}
    assert GetUser(None, UserIdentification("2")).build().query["type"] == "string"


def test_beatmaps_query_serialization() -> None:
    since = datetime(2020, 1, 1, tzinfo=timezone(timedelta(hours=2)))

    spec = (
        GetBeatmaps()
        .creator("RikiH_")
        .mode(GameMode.MANIA)
        .with_converted()
        .mods("HDDT")
        .since(since)
        .build()
    )

    assert spec.query == {
        "type": "string",
        "u": "RikiH_",
        "m": "3",
        "a": "1",
        "mods": "72",
        "since": "2019-12-31 22:00:00",
    }
    assert spec.since == datetime(2019, 12, 31, 22, tzinfo=timezone.utc)


def test_beatmap_lookup_by_hash_and_ids() -> None:
    spec = GetBeatmaps().hash("c8f08438204abfcdd1a748ebfae67421").build()
    assert spec.query == {"h": "c8f08438204abfcdd1a748ebfae67421"}

    spec = GetBeatmaps().mapset_id(93398).map_id(252002).build()
    assert spec.query == {"s": "93398", "b": "252002"}


def test_naive_since_is_rejected() -> None:
    with pytest.raises(InvalidParameter, match="timezone"):
        GetBeatmaps().since(datetime(2020, 1, 1))


@pytest.mark.parametrize("since", ["2020-01-01", 1577836800, None])
def test_since_must_be_a_datetime(since) -> None:
    with pytest.raises(InvalidParameter, match="must be a datetime"):
        GetBeatmaps().since(since)


def test_mods_acronyms_carry_their_implied_mods() -> None:
    # NC is sent as NC|DT and PF as PF|SD
    assert GetScores(None, 1).mods("NC").build().query["mods"] == "576"
    assert GetScores(None, 1).mods("PF").build().query["mods"] == "16416"
    assert GetScores(None, 1).mods("HDNC").build().query["mods"] == "584"


def test_mods_pass_through_for_any_mode() -> None:
    # key mods make no sense in taiko, the osu!api decides what to do with them
    spec = GetScores(None, 252002).mode(GameMode.TAIKO).mods(Mods.KEY4).build()

    assert spec.query["mods"] == str(int(Mods.KEY4))
    assert spec.query["m"] == "1"


@pytest.mark.parametrize("mods", ["HDX", "ZZ", -1, True])
def test_invalid_mods_are_rejected(mods) -> None:
    with pytest.raises(InvalidParameter):
        GetScores(None, 1).mods(mods)


def test_invalid_mode_is_rejected() -> None:
    with pytest.raises(InvalidParameter, match="not a game mode"):
        GetUser(None, 2).mode(7)


@pytest.mark.parametrize(
    "builder",
    [
        GetUser(None, ""),
        GetUser(None, "   "),
        GetUser(None, 0),
        GetUser(None, True),
        GetUser(None, None),  # type: ignore[arg-type]
        GetScores(None, -5),
        GetScores(None, None),  # type: ignore[arg-type]
        GetMatch(None, 0),
        GetBeatmaps().hash(""),
    ],
)
def test_malformed_identifying_fields_fail_to_build(builder) -> None:
    with pytest.raises(InvalidParameter):
        builder.build()


def test_missing_required_field_names_it() -> None:
    with pytest.raises(InvalidParameter, match="get_scores requires map_id"):
        GetScores(None, None).build()  # type: ignore[arg-type]


def test_singular_builders_request_one_record() -> None:
    beatmap = GetBeatmap().map_id(252002).build()
    score = GetScore(None, 252002).user("Cookiezi").build()

    assert beatmap.single and beatmap.query["limit"] == "1"
    assert score.single and score.query["limit"] == "1"
    assert not GetScores(None, 252002).build().single


async def test_fetch_without_a_client() -> None:
    with pytest.raises(InvalidParameter, match="no client"):
        await GetUser(None, 2)
