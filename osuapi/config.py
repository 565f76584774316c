from __future__ import annotations

import os

from starlette.config import Config

# the .env file is optional for a library, starlette warns when it is missing
config = Config(".env" if os.path.isfile(".env") else None)

OSU_API_KEY: str | None = config("OSU_API_KEY", default=None)
OSU_API_BASE_URL = config("OSU_API_BASE_URL", default="https://osu.ppy.sh/api/")

OSU_API_RATE_LIMIT = config("OSU_API_RATE_LIMIT", cast=int, default=10)
OSU_API_RATE_PERIOD = config("OSU_API_RATE_PERIOD", cast=float, default=1.0)
OSU_API_TIMEOUT = config("OSU_API_TIMEOUT", cast=float, default=10.0)

OSU_API_METRICS = config("OSU_API_METRICS", cast=bool, default=False)

LOGGING_CONFIG = config("LOGGING_CONFIG", default="logging.yaml")
