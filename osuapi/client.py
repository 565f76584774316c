from __future__ import annotations

import logging
import time
from typing import Any
from typing import Optional
from typing import Union

import httpx
import orjson
from prometheus_client import CollectorRegistry

from osuapi import __version__
from osuapi import config
from osuapi.builders import GetBeatmap
from osuapi.builders import GetBeatmaps
from osuapi.builders import GetMatch
from osuapi.builders import GetScore
from osuapi.builders import GetScores
from osuapi.builders import GetUser
from osuapi.builders import GetUserBest
from osuapi.builders import GetUserRecent
from osuapi.builders import UserLike
from osuapi.endpoints import EndpointKind
from osuapi.errors import DeserializeError
from osuapi.errors import HttpError
from osuapi.errors import InvalidMatch
from osuapi.errors import InvalidParameter
from osuapi.errors import ServiceUnavailable
from osuapi.errors import TransportError
from osuapi.metrics import Metrics
from osuapi.models.beatmap import Beatmap
from osuapi.models.match import Match
from osuapi.models.score import Score
from osuapi.models.user import User
from osuapi.ratelimit import RateLimiter
from osuapi.routing import RequestSpec
from osuapi.utils import format_time

USER_AGENT = f"osuapi/{__version__}"

API_KEY_TAG = "k"

# errors a malformed record raises while being parsed into a model
_PARSE_ERRORS = (KeyError, ValueError, TypeError, AttributeError)

Record = Union[Beatmap, User, Score]


def _api_error_message(content: bytes) -> Optional[str]:
    try:
        body = orjson.loads(content)
    except orjson.JSONDecodeError:
        return None

    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]

    return None


class Osu:
    """Asynchronous osu!api v1 client.

    Every request made through one client, including the resolution of lazy
    user references it handed out, shares the same rate limiter.

    Example:
        async with Osu("api key") as osu:
            user = await osu.user("peppy").mode(GameMode.TAIKO)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        rate_limit: Optional[int] = None,
        per_seconds: Optional[float] = None,
        timeout: Optional[float] = None,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        metrics: Optional[bool] = None,
        registry: Optional[CollectorRegistry] = None,
    ) -> None:
        api_key = api_key if api_key is not None else config.OSU_API_KEY
        if not api_key:
            raise InvalidParameter(
                "an osu!api key is required, pass one or set OSU_API_KEY",
            )

        self._api_key = api_key
        self.base_url = base_url if base_url is not None else config.OSU_API_BASE_URL

        self.ratelimiter = RateLimiter(
            rate_limit if rate_limit is not None else config.OSU_API_RATE_LIMIT,
            per_seconds if per_seconds is not None else config.OSU_API_RATE_PERIOD,
        )

        self._owns_http_client = http_client is None
        if http_client is None:
            http_client = httpx.AsyncClient(
                timeout=timeout if timeout is not None else config.OSU_API_TIMEOUT,
            )

        self.http_client = http_client

        # passing a registry implies the caller wants the counters
        if metrics is None:
            metrics = config.OSU_API_METRICS or registry is not None

        self.metrics = Metrics(registry) if metrics else None

    def __repr__(self) -> str:
        return f"<Osu {self.base_url!r} {self.ratelimiter!r}>"

    async def __aenter__(self) -> Osu:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self.http_client.aclose()

    def beatmaps(self) -> GetBeatmaps:
        return GetBeatmaps(self)

    def beatmap(self) -> GetBeatmap:
        return GetBeatmap(self)

    def user(self, user: UserLike) -> GetUser:
        return GetUser(self, user)

    def scores(self, map_id: int) -> GetScores:
        return GetScores(self, map_id)

    def score(self, map_id: int) -> GetScore:
        return GetScore(self, map_id)

    def top_scores(self, user: UserLike) -> GetUserBest:
        return GetUserBest(self, user)

    def recent_scores(self, user: UserLike) -> GetUserRecent:
        return GetUserRecent(self, user)

    def osu_match(self, match_id: int) -> GetMatch:
        return GetMatch(self, match_id)

    async def execute(self, spec: RequestSpec) -> Any:
        """Runs a built request against the osu!api.

        Returns:
            A list of records for list endpoints, the first record or `None`
            for single record requests, and a `Match` for `get_match`.

        Raises:
            TransportError: The request could not be completed.
            HttpError: The osu!api answered with a non-2xx status.
            DeserializeError: The body did not have the endpoint's shape.
        """

        endpoint = spec.endpoint

        if self.metrics is not None:
            self.metrics.inc(spec.kind)

        stamp = await self.ratelimiter.acquire()

        try:
            request = self.http_client.build_request(
                "GET",
                spec.url(self.base_url),
                params=[*spec.params, (API_KEY_TAG, self._api_key)],
                headers={"User-Agent": USER_AGENT},
            )
        except (httpx.InvalidURL, ValueError, TypeError) as exc:
            self.ratelimiter.release(stamp)
            raise InvalidParameter(
                f"could not build a request for {endpoint.path}: {exc}",
            ) from exc

        # the api key never ends up in the logs
        url = str(request.url.copy_remove_param(API_KEY_TAG))

        start = time.perf_counter_ns()
        try:
            response = await self.http_client.send(request)
        except httpx.TransportError as exc:
            raise TransportError(endpoint, str(exc) or type(exc).__name__) from exc

        logging.debug(
            "Made an osu!api request",
            extra={
                "url": url,
                "status": response.status_code,
                "time_elapsed": format_time(time.perf_counter_ns() - start),
            },
        )

        if not response.is_success:
            if response.status_code == 429:
                logging.warning(
                    "osu!api rate limit exceeded",
                    extra={"url": url, "limiter": repr(self.ratelimiter)},
                )

            error_cls = ServiceUnavailable if response.status_code == 503 else HttpError
            raise error_cls(
                endpoint,
                response.status_code,
                response.content,
                _api_error_message(response.content),
            )

        try:
            body = orjson.loads(response.content)
        except orjson.JSONDecodeError as exc:
            logging.warning(
                "osu!api responded with invalid json",
                extra={"url": url},
            )
            raise DeserializeError(endpoint, f"invalid json: {exc}", response.content) from exc

        return self._parse(spec, body, response.content)

    def _parse(self, spec: RequestSpec, body: Any, content: bytes) -> Any:
        endpoint = spec.endpoint

        if isinstance(body, dict) and "error" in body:
            raise DeserializeError(endpoint, f"osu!api error: {body['error']}", content)

        if not endpoint.returns_list:
            if not isinstance(body, dict):
                raise DeserializeError(
                    endpoint,
                    f"expected an object, got {type(body).__name__}",
                    content,
                )

            if body.get("match") == 0:
                raise InvalidMatch(endpoint, "the match does not exist or is private", content)

            try:
                return Match.from_mapping(body, osu=self)
            except _PARSE_ERRORS as exc:
                logging.warning("Failed to parse an osu!api match", extra={"error": repr(exc)})
                raise DeserializeError(endpoint, f"malformed match: {exc!r}", content) from exc

        if not isinstance(body, list):
            raise DeserializeError(
                endpoint,
                f"expected a list, got {type(body).__name__}",
                content,
            )

        if spec.single:
            body = body[:1]

        try:
            records = [self._parse_record(spec, record) for record in body]
        except _PARSE_ERRORS as exc:
            logging.warning(
                "Failed to parse an osu!api record",
                extra={"endpoint": endpoint.path, "error": repr(exc)},
            )
            raise DeserializeError(endpoint, f"malformed record: {exc!r}", content) from exc

        if spec.single:
            return records[0] if records else None

        return records

    def _parse_record(self, spec: RequestSpec, record: Any) -> Record:
        match spec.kind:
            case EndpointKind.BEATMAPS:
                return Beatmap.from_mapping(record, osu=self)
            case EndpointKind.USER:
                return User.from_mapping(record, osu=self, mode=spec.mode)
            case _:
                return Score.from_mapping(record, osu=self, mode=spec.mode)
