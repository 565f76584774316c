from __future__ import annotations

import logging.config
from typing import Optional

import yaml

from osuapi import config


def configure_logging(path: Optional[str] = None) -> None:
    with open(path or config.LOGGING_CONFIG) as f:
        logging_config = yaml.safe_load(f.read())
        logging.config.dictConfig(logging_config)
