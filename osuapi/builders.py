from __future__ import annotations

from collections.abc import Generator
from datetime import datetime
from datetime import timezone
from typing import Any
from typing import ClassVar
from typing import Optional
from typing import TYPE_CHECKING
from typing import Union

from osuapi.constants.mode import GameMode
from osuapi.constants.mods import Mods
from osuapi.endpoints import Endpoint
from osuapi.endpoints import ENDPOINTS
from osuapi.endpoints import EndpointKind
from osuapi.errors import InvalidParameter
from osuapi.routing import RequestSpec
from osuapi.routing import to_query_params
from osuapi.routing import UserIdentification

if TYPE_CHECKING:
    from osuapi.client import Osu

UserLike = Union[int, str, UserIdentification]

# parameters holding an osu! object id
_ID_PARAMETERS = ("map_id", "mapset_id", "match_id")

MAX_EVENT_DAYS = 31


class RequestBuilder:
    """Accumulates the parameters of one osu!api request.

    Setters return the builder so calls can be chained. A setter that the
    endpoint does not take raises `InvalidParameter` straight away; the rest
    of the validation happens in `build`. Awaiting a builder builds it and
    executes it through its client.
    """

    endpoint: ClassVar[Endpoint]
    single: ClassVar[bool] = False

    def __init__(self, osu: Optional[Osu] = None) -> None:
        self.osu = osu
        self._values: dict[str, Any] = {}

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._values!r}>"

    def _check(self, parameter: str) -> None:
        if not self.endpoint.accepts(parameter):
            raise InvalidParameter(
                f"{parameter} is not a parameter of {self.endpoint.path}",
            )

    def _set(self, parameter: str, value: Any) -> RequestBuilder:
        self._check(parameter)

        self._values[parameter] = value
        return self

    def mode(self, mode: Union[GameMode, int]) -> RequestBuilder:
        self._check("mode")

        try:
            game_mode = GameMode(mode)
        except ValueError:
            raise InvalidParameter(f"{mode!r} is not a game mode") from None

        return self._set("mode", game_mode)

    def limit(self, limit: int) -> RequestBuilder:
        """Amount of records to return, clamped into the endpoint's bounds."""

        self._check("limit")

        if isinstance(limit, bool) or not isinstance(limit, int):
            raise InvalidParameter(f"limit must be an int, got {limit!r}")

        assert self.endpoint.limit_range is not None
        low, high = self.endpoint.limit_range
        return self._set("limit", max(low, min(limit, high)))

    def mods(self, mods: Union[Mods, int, str]) -> RequestBuilder:
        # mods are not checked against the mode, the api decides what is legal
        self._check("mods")

        if isinstance(mods, bool) or (isinstance(mods, int) and mods < 0):
            raise InvalidParameter(f"invalid mods {mods!r}")

        try:
            if isinstance(mods, str):
                parsed = Mods.from_str(mods)
            else:
                parsed = Mods(mods)
        except ValueError as exc:
            raise InvalidParameter(f"invalid mods {mods!r}: {exc}") from None

        return self._set("mods", parsed)

    def since(self, since: datetime) -> RequestBuilder:
        """Only return beatmaps ranked or loved after this date."""

        self._check("since")

        if not isinstance(since, datetime):
            raise InvalidParameter(f"since must be a datetime, got {since!r}")

        if since.tzinfo is None or since.utcoffset() is None:
            raise InvalidParameter("since must be a timezone aware datetime")

        return self._set("since", since.astimezone(timezone.utc))

    def map_id(self, map_id: int) -> RequestBuilder:
        return self._set("map_id", map_id)

    def mapset_id(self, mapset_id: int) -> RequestBuilder:
        return self._set("mapset_id", mapset_id)

    def hash(self, hash: str) -> RequestBuilder:
        return self._set("hash", hash)

    def creator(self, creator: UserLike) -> RequestBuilder:
        return self._set("creator", creator)

    def user(self, user: UserLike) -> RequestBuilder:
        return self._set("user", user)

    def event_days(self, event_days: int) -> RequestBuilder:
        """Max days between now and the last event date, clamped into 1-31."""

        self._check("event_days")

        if isinstance(event_days, bool) or not isinstance(event_days, int):
            raise InvalidParameter(f"event_days must be an int, got {event_days!r}")

        return self._set("event_days", max(1, min(event_days, MAX_EVENT_DAYS)))

    def with_converted(self, with_converted: bool = True) -> RequestBuilder:
        """Include converted beatmaps. Only has an effect with a non-osu! mode."""

        return self._set("with_converted", bool(with_converted))

    def _validate(self) -> None:
        for parameter in _ID_PARAMETERS:
            value = self._values.get(parameter)
            if value is None:
                continue

            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise InvalidParameter(
                    f"{parameter} must be a positive int, got {value!r}",
                )

        file_hash = self._values.get("hash")
        if file_hash is not None and (not isinstance(file_hash, str) or not file_hash):
            raise InvalidParameter(f"hash must be a non empty string, got {file_hash!r}")

    def build(self) -> RequestSpec:
        """Validates the accumulated parameters into a `RequestSpec`."""

        self._validate()

        return RequestSpec(
            endpoint=self.endpoint,
            params=to_query_params(self.endpoint, self._values),
            mode=self._values.get("mode", GameMode.OSU),
            limit=self._values.get("limit"),
            since=self._values.get("since"),
            single=self.single,
        )

    async def fetch(self) -> Any:
        spec = self.build()

        if self.osu is None:
            raise InvalidParameter(f"{type(self).__name__} has no client to run on")

        return await self.osu.execute(spec)

    def __await__(self) -> Generator[Any, None, Any]:
        return self.fetch().__await__()


class GetBeatmaps(RequestBuilder):
    """Resolves to a `list[Beatmap]`, the most recent 500 without filters."""

    endpoint = ENDPOINTS[EndpointKind.BEATMAPS]


class GetBeatmap(GetBeatmaps):
    """Resolves to the first matching `Beatmap`, or `None`."""

    single = True

    def __init__(self, osu: Optional[Osu] = None) -> None:
        super().__init__(osu)
        self._values["limit"] = 1


class GetUser(RequestBuilder):
    """Resolves to a `User`, or `None` if it does not exist."""

    endpoint = ENDPOINTS[EndpointKind.USER]
    single = True

    def __init__(self, osu: Optional[Osu], user: UserLike) -> None:
        super().__init__(osu)
        self._values["user"] = user


class GetScores(RequestBuilder):
    """Resolves to the `list[Score]` leaderboard of a beatmap."""

    endpoint = ENDPOINTS[EndpointKind.SCORES]

    def __init__(self, osu: Optional[Osu], map_id: int) -> None:
        super().__init__(osu)
        self._values["map_id"] = map_id


class GetScore(GetScores):
    """Resolves to the top `Score` matching the filters, or `None`."""

    single = True

    def __init__(self, osu: Optional[Osu], map_id: int) -> None:
        super().__init__(osu, map_id)
        self._values["limit"] = 1


class GetUserBest(RequestBuilder):
    """Resolves to a user's top `list[Score]`."""

    endpoint = ENDPOINTS[EndpointKind.USER_BEST]

    def __init__(self, osu: Optional[Osu], user: UserLike) -> None:
        super().__init__(osu)
        self._values["user"] = user


class GetUserRecent(RequestBuilder):
    """Resolves to a user's `list[Score]` of the last 24 hours."""

    endpoint = ENDPOINTS[EndpointKind.USER_RECENT]

    def __init__(self, osu: Optional[Osu], user: UserLike) -> None:
        super().__init__(osu)
        self._values["user"] = user


class GetMatch(RequestBuilder):
    """Resolves to a `Match`."""

    endpoint = ENDPOINTS[EndpointKind.MATCH]

    def __init__(self, osu: Optional[Osu], match_id: int) -> None:
        super().__init__(osu)
        self._values["match_id"] = match_id
