from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from osuapi.endpoints import Endpoint

# how much of a response body is kept on an error for diagnosis
BODY_SNIPPET_LENGTH = 256


def body_snippet(body: str | bytes) -> str:
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")

    if len(body) <= BODY_SNIPPET_LENGTH:
        return body

    return body[:BODY_SNIPPET_LENGTH] + "..."


class OsuApiError(Exception):
    """Base class of every error raised by the client."""


class InvalidParameter(OsuApiError):
    """A request was built incorrectly. Raised before the network is touched."""


class TransportError(OsuApiError):
    """The HTTP request could not be completed (DNS, connect, timeout...)."""

    def __init__(self, endpoint: Endpoint, message: str) -> None:
        super().__init__(f"{endpoint.path}: {message}")
        self.endpoint = endpoint


class HttpError(OsuApiError):
    """The osu!api answered with a non-2xx status code."""

    def __init__(
        self,
        endpoint: Endpoint,
        status: int,
        body: str | bytes = "",
        api_message: str | None = None,
    ) -> None:
        self.endpoint = endpoint
        self.status = status
        self.body = body_snippet(body)
        self.api_message = api_message

        message = f"{endpoint.path} responded with status {status}"
        if api_message:
            message += f": {api_message}"

        super().__init__(message)


class ServiceUnavailable(HttpError):
    """The osu!api is temporarily unavailable (503)."""


class DeserializeError(OsuApiError):
    """A 2xx response body did not match the shape declared by its endpoint."""

    def __init__(self, endpoint: Endpoint, message: str, body: str | bytes) -> None:
        self.endpoint = endpoint
        self.body = body_snippet(body)

        super().__init__(f"{endpoint.path}: {message} (body: {self.body!r})")


class InvalidMatch(DeserializeError):
    """The match id was invalid or the match is private."""


class NotFound(OsuApiError):
    """A lazily referenced record no longer exists on the osu!api."""


class RateLimitInternal(OsuApiError):
    """The rate limiter reached an inconsistent state. Never a caller error."""
