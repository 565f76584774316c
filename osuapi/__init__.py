from __future__ import annotations

__version__ = "1.0.0"

from osuapi.client import Osu  # noqa: E402
from osuapi.constants.grade import Grade  # noqa: E402
from osuapi.constants.mode import GameMode  # noqa: E402
from osuapi.constants.mods import Mods  # noqa: E402
from osuapi.errors import DeserializeError  # noqa: E402
from osuapi.errors import HttpError  # noqa: E402
from osuapi.errors import InvalidMatch  # noqa: E402
from osuapi.errors import InvalidParameter  # noqa: E402
from osuapi.errors import NotFound  # noqa: E402
from osuapi.errors import OsuApiError  # noqa: E402
from osuapi.errors import RateLimitInternal  # noqa: E402
from osuapi.errors import ServiceUnavailable  # noqa: E402
from osuapi.errors import TransportError  # noqa: E402
from osuapi.lazy import LazyUser  # noqa: E402
from osuapi.ratelimit import RateLimiter  # noqa: E402
from osuapi.routing import UserIdentification  # noqa: E402

__all__ = (
    "DeserializeError",
    "GameMode",
    "Grade",
    "HttpError",
    "InvalidMatch",
    "InvalidParameter",
    "LazyUser",
    "Mods",
    "NotFound",
    "Osu",
    "OsuApiError",
    "RateLimitInternal",
    "RateLimiter",
    "ServiceUnavailable",
    "TransportError",
    "UserIdentification",
    "__version__",
)
