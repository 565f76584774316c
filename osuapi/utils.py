from __future__ import annotations

from datetime import datetime
from datetime import timezone
from typing import Any
from typing import Optional
from typing import Union

# the osu!api v1 sends every date as a naive UTC string in this format
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


_TIME_ORDER_SUFFIXES = ["ns", "μs", "ms", "s"]


def format_time(time: Union[int, float]) -> str:
    for suffix in _TIME_ORDER_SUFFIXES:
        if time < 1000:
            break

        time /= 1000

    return f"{time:.2f}{suffix}"  # type: ignore


# The osu!api v1 encodes nearly every number as a string and uses null for
# missing values. These accept both that and plain json numbers, so that
# `to_dict()` output can be parsed again.


def to_int(value: Any, default: int = 0) -> int:
    if value is None or value == "":
        return default

    return int(value)


def to_optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None

    return int(value)


def to_float(value: Any, default: float = 0.0) -> float:
    if value is None or value == "":
        return default

    return float(value)


def to_optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None

    return float(value)


def to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value

    if value is None or value == "":
        return False

    return int(value) != 0


def to_optional_bool(value: Any) -> Optional[bool]:
    if value is None or value == "":
        return None

    return to_bool(value)


def parse_date(value: str) -> datetime:
    return datetime.strptime(value, DATE_FORMAT).replace(tzinfo=timezone.utc)


def parse_optional_date(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None

    return parse_date(value)


def format_date(value: datetime) -> str:
    return value.astimezone(timezone.utc).strftime(DATE_FORMAT)


def format_optional_date(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None

    return format_date(value)
