from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from typing import Optional
from typing import TYPE_CHECKING
from typing import Union

from osuapi.builders import GetUser
from osuapi.constants.mode import GameMode
from osuapi.errors import InvalidParameter
from osuapi.errors import NotFound

if TYPE_CHECKING:
    from osuapi.client import Osu
    from osuapi.models.user import User


@dataclass(frozen=True)
class LazyUser:
    """A user referenced by another record, fetched only when resolved.

    Resolution goes through the client's normal request path, rate limiter
    included. Nothing is memoized: every `resolve()` issues a new request and
    returns the user as the osu!api currently reports it.
    """

    user_id: Optional[int]
    mode: GameMode = GameMode.OSU
    username: Optional[str] = None

    osu: Optional[Osu] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.user_id is None and not self.username:
            raise InvalidParameter("a user reference needs an id or a username")

    @property
    def key(self) -> Union[int, str]:
        if self.user_id is not None:
            return self.user_id

        assert self.username is not None
        return self.username

    def request(self, osu: Optional[Osu] = None) -> GetUser:
        client = osu if osu is not None else self.osu
        if client is None:
            raise InvalidParameter(
                f"user reference {self.key!r} is not bound to a client",
            )

        return GetUser(client, self.key).mode(self.mode)  # type: ignore[return-value]

    async def resolve(self, osu: Optional[Osu] = None) -> User:
        user = await self.request(osu)
        if user is None:
            raise NotFound(f"user {self.key!r} does not exist in {self.mode!r}")

        return user
