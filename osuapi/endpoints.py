from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Optional


class EndpointKind(Enum):
    BEATMAPS = "beatmaps"
    USER = "user"
    SCORES = "scores"
    USER_BEST = "user_best"
    USER_RECENT = "user_recent"
    MATCH = "match"


@dataclass(frozen=True)
class Endpoint:
    """Static description of one osu!api v1 operation."""

    kind: EndpointKind
    path: str

    # builder parameter names, not query tags
    parameters: frozenset[str]
    required: frozenset[str]

    # inclusive bounds a `limit` is clamped into
    limit_range: Optional[tuple[int, int]]

    returns_list: bool
    metric_label: str

    def accepts(self, parameter: str) -> bool:
        return parameter in self.parameters


def _endpoint(
    kind: EndpointKind,
    path: str,
    *,
    required: tuple[str, ...],
    optional: tuple[str, ...],
    limit_range: Optional[tuple[int, int]],
    metric_label: str,
    returns_list: bool = True,
) -> Endpoint:
    return Endpoint(
        kind=kind,
        path=path,
        parameters=frozenset(required + optional),
        required=frozenset(required),
        limit_range=limit_range,
        returns_list=returns_list,
        metric_label=metric_label,
    )


ENDPOINTS: Mapping[EndpointKind, Endpoint] = MappingProxyType(
    {
        EndpointKind.BEATMAPS: _endpoint(
            EndpointKind.BEATMAPS,
            "get_beatmaps",
            required=(),
            optional=(
                "creator",
                "hash",
                "limit",
                "map_id",
                "mapset_id",
                "mode",
                "mods",
                "since",
                "with_converted",
            ),
            limit_range=(1, 500),
            metric_label="Beatmaps",
        ),
        EndpointKind.USER: _endpoint(
            EndpointKind.USER,
            "get_user",
            required=("user",),
            optional=("mode", "event_days"),
            limit_range=None,
            metric_label="Users",
        ),
        EndpointKind.SCORES: _endpoint(
            EndpointKind.SCORES,
            "get_scores",
            required=("map_id",),
            optional=("user", "limit", "mode", "mods"),
            limit_range=(1, 100),
            metric_label="Scores",
        ),
        EndpointKind.USER_BEST: _endpoint(
            EndpointKind.USER_BEST,
            "get_user_best",
            required=("user",),
            optional=("limit", "mode"),
            limit_range=(1, 100),
            metric_label="TopScores",
        ),
        EndpointKind.USER_RECENT: _endpoint(
            EndpointKind.USER_RECENT,
            "get_user_recent",
            required=("user",),
            optional=("limit", "mode"),
            limit_range=(1, 50),
            metric_label="RecentScores",
        ),
        EndpointKind.MATCH: _endpoint(
            EndpointKind.MATCH,
            "get_match",
            required=("match_id",),
            optional=(),
            limit_range=None,
            metric_label="Matches",
            returns_list=False,
        ),
    },
)
