from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from typing import Optional
from typing import Union

from osuapi.constants.mode import GameMode
from osuapi.constants.mods import Mods
from osuapi.endpoints import Endpoint
from osuapi.endpoints import EndpointKind
from osuapi.errors import InvalidParameter
from osuapi.utils import format_date

# builder parameter -> osu!api query tag
QUERY_TAGS = {
    "hash": "h",
    "limit": "limit",
    "map_id": "b",
    "mapset_id": "s",
    "mode": "m",
    "mods": "mods",
    "since": "since",
    "with_converted": "a",
    "event_days": "event_days",
    "match_id": "mp",
}

TYPE_TAG = "type"
USER_TAG = "u"


@dataclass(frozen=True)
class UserIdentification:
    """A user, given either by id or by username."""

    value: Union[int, str]

    @property
    def is_id(self) -> bool:
        return isinstance(self.value, int)

    def query(self) -> dict[str, str]:
        return {
            TYPE_TAG: "id" if self.is_id else "string",
            USER_TAG: str(self.value),
        }

    @classmethod
    def parse(cls, user: Any, *, parameter: str = "user") -> UserIdentification:
        if isinstance(user, UserIdentification):
            return user

        # bool is an int subclass, but never a user id
        if isinstance(user, bool):
            raise InvalidParameter(f"{parameter} must be an id or a username, not a bool")

        if isinstance(user, int):
            if user <= 0:
                raise InvalidParameter(f"{parameter} id must be positive, got {user}")

            return cls(user)

        if isinstance(user, str):
            if not user.strip():
                raise InvalidParameter(f"{parameter} username must not be empty")

            return cls(user)

        raise InvalidParameter(
            f"{parameter} must be an id or a username, got {type(user).__name__}",
        )


@dataclass(frozen=True)
class RequestSpec:
    """A validated osu!api call, ready to be executed once by the client."""

    endpoint: Endpoint
    params: tuple[tuple[str, str], ...]
    mode: GameMode = GameMode.OSU
    limit: Optional[int] = None
    since: Optional[datetime] = None

    # whether only the first record of a list response is wanted
    single: bool = False

    @property
    def kind(self) -> EndpointKind:
        return self.endpoint.kind

    @property
    def query(self) -> dict[str, str]:
        return dict(self.params)

    def url(self, base_url: str) -> str:
        return base_url.rstrip("/") + "/" + self.endpoint.path


def _query_value(parameter: str, value: Any) -> str:
    match parameter:
        case "mode":
            return str(GameMode(value).value)
        case "mods":
            return str(Mods(value).value)
        case "since":
            return format_date(value)
        case "with_converted":
            return str(int(bool(value)))
        case _:
            return str(value)


def to_query_params(
    endpoint: Endpoint,
    values: Mapping[str, Any],
) -> tuple[tuple[str, str], ...]:
    """Turns validated builder values into osu!api query parameters."""

    params: list[tuple[str, str]] = []

    for parameter, value in values.items():
        if value is None:
            continue

        if not endpoint.accepts(parameter):
            raise InvalidParameter(
                f"{parameter} is not a parameter of {endpoint.path}",
            )

        if parameter in ("user", "creator"):
            params.extend(UserIdentification.parse(value, parameter=parameter).query().items())
            continue

        params.append((QUERY_TAGS[parameter], _query_value(parameter, value)))

    missing = endpoint.required - {key for key, value in values.items() if value is not None}
    if missing:
        raise InvalidParameter(
            f"{endpoint.path} requires {', '.join(sorted(missing))}",
        )

    return tuple(params)
